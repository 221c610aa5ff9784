"""
Command-line interface for the crawler.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from depthcrawler.config import DEFAULT_MAX_DEPTH, DEFAULT_USER_AGENT, CrawlConfig
from depthcrawler.core import crawl

LOG_FORMAT = "crawler %(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="depthcrawler",
        description="Print the links found on a page and follow them down to a maximum depth.",
    )
    parser.add_argument("start_url", help="Start URL (e.g. https://example.com)")
    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Depth at which links stop being reported and followed (default: {DEFAULT_MAX_DEPTH})",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds (default: none)")
    parser.add_argument("--user-agent", default=DEFAULT_USER_AGENT, help="User-Agent header")
    parser.add_argument(
        "--resolve-relative",
        action="store_true",
        help="Resolve relative links against their page before following them",
    )
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="info", help="Log level (default: info)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Shorthand for --log-level debug")
    return parser


def configure_logging(level: str) -> None:
    """Send log records to stderr so stdout carries only links."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, stream=sys.stderr, force=True)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the crawler CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = CrawlConfig(
            max_depth=args.max_depth,
            timeout_s=args.timeout,
            user_agent=args.user_agent,
            resolve_relative=args.resolve_relative,
        )
    except ValueError as e:
        parser.error(str(e))

    configure_logging("debug" if args.verbose else args.log_level)
    logging.getLogger(__name__).debug("Arguments: %s", vars(args))

    crawl(args.start_url, 0, config)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
