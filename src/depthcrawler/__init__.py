"""
Depth-bounded web crawler that prints the links it finds, indented by depth.
"""
from depthcrawler.config import CrawlConfig, DEFAULT_MAX_DEPTH
from depthcrawler.core import crawl
from depthcrawler.extractor import extract_links
from depthcrawler.fetcher import Fetcher
from depthcrawler.models import FetchErrorKind, FetchOutcome, Link

__version__ = "1.0.0"
__all__ = [
    "crawl",
    "extract_links",
    "CrawlConfig",
    "DEFAULT_MAX_DEPTH",
    "Fetcher",
    "FetchErrorKind",
    "FetchOutcome",
    "Link",
]
