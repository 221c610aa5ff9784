"""
Crawl configuration.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_MAX_DEPTH = 2
DEFAULT_USER_AGENT = "DepthCrawler/1.0"


@dataclass(frozen=True, slots=True)
class CrawlConfig:
    """Settings threaded through every fetch and extraction of a crawl."""
    max_depth: int = DEFAULT_MAX_DEPTH
    timeout_s: Optional[float] = None
    user_agent: str = DEFAULT_USER_AGENT
    resolve_relative: bool = False

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.timeout_s is not None and self.timeout_s <= 0:
            raise ValueError(f"timeout_s must be positive, got {self.timeout_s}")
