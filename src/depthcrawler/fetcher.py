"""
HTTP fetching with outcome classification.
"""
from __future__ import annotations

import logging
from typing import Optional

import requests

from depthcrawler.config import DEFAULT_USER_AGENT, CrawlConfig
from depthcrawler.models import FetchErrorKind, FetchOutcome

logger = logging.getLogger(__name__)


def declared_charset(response: requests.Response) -> Optional[str]:
    """Return the charset named in the Content-Type header, if there is one."""
    content_type = (response.headers.get("content-type") or "").lower()
    if "charset" not in content_type:
        return None
    return response.encoding


class Fetcher:
    """Issues blocking GET requests and classifies their outcome."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout_s: Optional[float] = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = user_agent
        self.timeout_s = timeout_s

    @classmethod
    def from_config(cls, config: CrawlConfig) -> "Fetcher":
        return cls(timeout_s=config.timeout_s, user_agent=config.user_agent)

    def fetch(self, url: str) -> FetchOutcome:
        """
        GET ``url`` and return a success outcome streaming its body, or a
        failure outcome for transport errors and statuses of 300 and above.
        """
        logger.debug("Downloading %s", url)
        try:
            resp = self.session.get(url, timeout=self.timeout_s, stream=True)
        except requests.RequestException as e:
            logger.debug("Error: %s", e)
            return FetchOutcome.failure(url, str(e), FetchErrorKind.TRANSPORT)

        if resp.status_code > 299:
            resp.close()
            message = f"Error ({resp.status_code}): {url}"
            logger.debug(message)
            return FetchOutcome.failure(
                url, message, FetchErrorKind.HTTP_STATUS, status_code=resp.status_code
            )

        return FetchOutcome.success(url, resp, encoding=declared_charset(resp))
