"""
Link extraction from an HTML token stream.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from depthcrawler.config import DEFAULT_MAX_DEPTH
from depthcrawler.models import Link
from depthcrawler.tokenizer import Source, Token, TokenType, tokenize

logger = logging.getLogger(__name__)


def extract_from_tokens(
    tokens: Iterable[Token],
    depth: int,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> List[Link]:
    """
    Pair anchor start and end tags in a single pass and collect valid links.

    Only one anchor is tracked at a time: a second start tag before the close
    replaces the first one and discards its text. Orphaned end tags are
    skipped, and an anchor still open when the stream ends is never emitted.

    Args:
        tokens: Token stream, terminated by an ``ERROR`` token.
        depth: Crawl depth the links are found at.
        max_depth: Links at or beyond this depth are dropped.

    Returns:
        Valid links in discovery order.
    """
    links: List[Link] = []
    start: Optional[Token] = None
    text = ""

    for token in tokens:
        if token.type is TokenType.ERROR:
            break

        if start is not None and token.type is TokenType.TEXT:
            text += token.data
            continue

        if not token.is_anchor:
            continue

        if token.type is TokenType.START_TAG:
            if token.attrs:
                start = token
                text = ""
        elif token.type is TokenType.END_TAG:
            if start is None:
                logger.warning("Link end found without start at depth %d", depth)
                continue
            link = Link.from_anchor(start.attrs, text, depth)
            if link.is_valid(max_depth):
                links.append(link)
                logger.debug("Link found %s", link)
            start = None
            text = ""

    logger.debug("Extracted %d links at depth %d", len(links), depth)
    return links


def extract_links(
    source: Source,
    depth: int,
    max_depth: int = DEFAULT_MAX_DEPTH,
    encoding: Optional[str] = None,
) -> List[Link]:
    """Tokenize ``source`` and extract the valid links it contains."""
    return extract_from_tokens(tokenize(source, encoding=encoding), depth, max_depth)
