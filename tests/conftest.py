"""Pytest configuration and fixtures for depthcrawler tests."""

from __future__ import annotations

from typing import Callable, Dict, Union
from unittest.mock import Mock

import pytest

from depthcrawler.fetcher import Fetcher
from depthcrawler.models import FetchErrorKind, FetchOutcome

Page = Union[str, int]


def mock_response(html: str, status_code: int = 200) -> Mock:
    """Stand-in for a streamed requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.iter_content.return_value = [html.encode("utf-8")]
    return response


@pytest.fixture
def sample_html() -> str:
    """Page with a mix of valid and invalid anchors."""
    return """
    <!DOCTYPE html>
    <html lang="en">
    <head><title>Sample</title></head>
    <body>
        <nav>
            <a href="https://example.com/">Home</a>
            <a href="/about" title="About us">
                About <em>us</em>
            </a>
            <a href="javascript:void(0)">Menu</a>
            <a href="/empty"></a>
            <a name="top">Top</a>
            <a>No attributes</a>
        </nav>
        <p>Read the <a href="/docs">docs</a>.</p>
    </body>
    </html>
    """


@pytest.fixture
def site() -> Callable[[Dict[str, Page]], Mock]:
    """
    Build a fetcher serving an in-memory site.

    Pages map URLs to HTML, or to a status code for a failing fetch; URLs not
    in the map answer 404.
    """

    def build(pages: Dict[str, Page]) -> Mock:
        def fetch(url: str) -> FetchOutcome:
            page = pages.get(url, 404)
            if isinstance(page, int):
                return FetchOutcome.failure(
                    url, f"Error ({page}): {url}", FetchErrorKind.HTTP_STATUS, status_code=page
                )
            return FetchOutcome.success(url, mock_response(page))

        fetcher = Mock(spec=Fetcher)
        fetcher.fetch.side_effect = fetch
        return fetcher

    return build
