"""
Data structures shared by the fetcher, the extractor and the crawl driver.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Iterator, Optional, Tuple

# Link URLs containing this (case-insensitively) are pseudo-URLs, never pages
JAVASCRIPT_MARKER = "javascript"


@dataclass(frozen=True, slots=True)
class Link:
    """A hyperlink discovered at a given crawl depth."""
    url: str
    text: str
    depth: int

    def __str__(self) -> str:
        spacer = "\t" * self.depth
        return f"{spacer}{self.text} ({self.depth}) - {self.url}"

    @classmethod
    def from_anchor(cls, attrs: Iterable[Tuple[str, str]], text: str, depth: int) -> "Link":
        """Build a link from an anchor's attributes and its inner text."""
        url = ""
        for key, value in attrs:
            if key == "href":
                url = value.strip()
        return cls(url=url, text=text.strip(), depth=depth)

    def is_valid(self, max_depth: int) -> bool:
        """Check whether the link may be reported and followed."""
        if self.depth >= max_depth:
            return False
        if not self.text:
            return False
        if not self.url or JAVASCRIPT_MARKER in self.url.lower():
            return False
        return True


class FetchErrorKind(str, Enum):
    """Why a fetch failed."""
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"


@dataclass(slots=True)
class FetchOutcome:
    """
    Result of fetching one URL.

    A successful outcome exposes the response body as byte chunks; a failed one
    carries a human-readable ``error`` and its ``error_kind``. Use it as a
    context manager so the underlying response is released.
    """
    url: str
    status_code: Optional[int] = None
    encoding: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[FetchErrorKind] = None
    response: Any = field(default=None, repr=False)

    @classmethod
    def success(
        cls,
        url: str,
        response: Any,
        encoding: Optional[str] = None,
    ) -> "FetchOutcome":
        return cls(url=url, status_code=response.status_code, encoding=encoding, response=response)

    @classmethod
    def failure(
        cls,
        url: str,
        error: str,
        kind: FetchErrorKind,
        status_code: Optional[int] = None,
    ) -> "FetchOutcome":
        return cls(url=url, status_code=status_code, error=error, error_kind=kind)

    @property
    def ok(self) -> bool:
        return self.error is None

    def iter_body(self, chunk_size: int = 8192) -> Iterator[bytes]:
        """Iterate over the response body as decompressed byte chunks."""
        if not self.ok or self.response is None:
            raise ValueError(f"No body available for failed fetch of {self.url}")
        return self.response.iter_content(chunk_size=chunk_size)

    def close(self) -> None:
        if self.response is not None:
            self.response.close()

    def __enter__(self) -> "FetchOutcome":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
