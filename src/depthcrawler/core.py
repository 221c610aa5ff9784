"""
Depth-bounded recursive crawl.
"""
from __future__ import annotations

import logging
from typing import Optional, TextIO
from urllib.parse import urljoin

from depthcrawler.config import CrawlConfig
from depthcrawler.extractor import extract_links
from depthcrawler.fetcher import Fetcher
from depthcrawler.models import Link

logger = logging.getLogger(__name__)


def next_target(link: Link, page_url: str, config: CrawlConfig) -> str:
    """URL to fetch when following ``link`` from ``page_url``."""
    if config.resolve_relative:
        return urljoin(page_url, link.url)
    return link.url


def crawl(
    url: str,
    depth: int = 0,
    config: Optional[CrawlConfig] = None,
    fetcher: Optional[Fetcher] = None,
    out: Optional[TextIO] = None,
) -> None:
    """
    Fetch ``url``, print every valid link on it and follow them depth-first.

    Fetch failures are logged and end only the current branch; nothing is
    raised to the caller.

    Args:
        url: Page to fetch.
        depth: Depth of the links found on this page (0 for the seed page).
        config: Crawl settings; defaults to ``CrawlConfig()``.
        fetcher: Fetcher to reuse across the crawl; built from ``config`` if omitted.
        out: Stream the links are printed to (stdout if omitted).
    """
    config = config or CrawlConfig()
    fetcher = fetcher or Fetcher.from_config(config)

    outcome = fetcher.fetch(url)
    if not outcome.ok:
        logger.error(outcome.error)
        return

    with outcome:
        links = extract_links(outcome.iter_body(), depth, config.max_depth, encoding=outcome.encoding)

    for link in links:
        print(link, file=out)
        if depth + 1 < config.max_depth:
            crawl(next_target(link, url, config), depth + 1, config, fetcher, out)
