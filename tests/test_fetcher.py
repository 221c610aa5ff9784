"""Tests for the fetcher."""

from __future__ import annotations

from unittest.mock import Mock, patch

import pytest
import requests

from depthcrawler.config import CrawlConfig
from depthcrawler.fetcher import Fetcher
from depthcrawler.models import FetchErrorKind


def make_response(status_code: int, content_type: str = "text/html", encoding: str = "ISO-8859-1") -> Mock:
    response = Mock()
    response.status_code = status_code
    response.headers = {"content-type": content_type}
    response.encoding = encoding
    return response


class TestFetcher:
    """Tests for Fetcher.fetch()."""

    @pytest.fixture
    def fetcher(self) -> Fetcher:
        """Create a fetcher with a fresh session."""
        return Fetcher(user_agent="TestBot/1.0")

    def test_sets_user_agent(self, fetcher: Fetcher) -> None:
        """Test that the session carries the configured User-Agent."""
        assert fetcher.session.headers["User-Agent"] == "TestBot/1.0"

    def test_from_config(self) -> None:
        """Test building a fetcher from crawl settings."""
        fetcher = Fetcher.from_config(CrawlConfig(timeout_s=5.0, user_agent="Cfg/2.0"))

        assert fetcher.timeout_s == 5.0
        assert fetcher.session.headers["User-Agent"] == "Cfg/2.0"

    def test_success(self, fetcher: Fetcher) -> None:
        """Test a 200 response gives a streaming success outcome."""
        response = make_response(200, "text/html; charset=utf-8", "utf-8")

        with patch.object(fetcher.session, "get", return_value=response) as mock_get:
            outcome = fetcher.fetch("https://example.com")

        mock_get.assert_called_once_with("https://example.com", timeout=None, stream=True)
        assert outcome.ok
        assert outcome.status_code == 200
        assert outcome.encoding == "utf-8"
        assert outcome.response is response
        response.close.assert_not_called()

    def test_success_without_declared_charset(self, fetcher: Fetcher) -> None:
        """Test that the transport's fallback charset is not reported as declared."""
        with patch.object(fetcher.session, "get", return_value=make_response(200)):
            outcome = fetcher.fetch("https://example.com")

        assert outcome.ok
        assert outcome.encoding is None

    def test_uses_timeout(self) -> None:
        """Test that the configured timeout is passed to the transport."""
        fetcher = Fetcher(timeout_s=3.5)

        with patch.object(fetcher.session, "get", return_value=make_response(200)) as mock_get:
            fetcher.fetch("https://example.com")

        assert mock_get.call_args[1]["timeout"] == 3.5

    @pytest.mark.parametrize("status", [300, 301, 404, 500])
    def test_error_status(self, fetcher: Fetcher, status: int) -> None:
        """Test that statuses of 300 and above are failures and the body is left unread."""
        response = make_response(status)
        url = "https://example.com/missing"

        with patch.object(fetcher.session, "get", return_value=response):
            outcome = fetcher.fetch(url)

        assert not outcome.ok
        assert outcome.error == f"Error ({status}): {url}"
        assert outcome.error_kind is FetchErrorKind.HTTP_STATUS
        assert outcome.status_code == status
        response.iter_content.assert_not_called()
        response.close.assert_called_once()

    def test_transport_error(self, fetcher: Fetcher) -> None:
        """Test that connection failures become transport failures."""
        error = requests.ConnectionError("connection refused")

        with patch.object(fetcher.session, "get", side_effect=error):
            outcome = fetcher.fetch("https://unreachable.invalid")

        assert not outcome.ok
        assert outcome.error == "connection refused"
        assert outcome.error_kind is FetchErrorKind.TRANSPORT
        assert outcome.status_code is None

    def test_malformed_url(self, fetcher: Fetcher) -> None:
        """Test that a relative or malformed URL fails without raising."""
        outcome = fetcher.fetch("/relative/path")

        assert not outcome.ok
        assert outcome.error_kind is FetchErrorKind.TRANSPORT
        assert "/relative/path" in outcome.error
