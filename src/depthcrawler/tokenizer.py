"""
Forward-only HTML token stream.

Tokens are reported exactly as they appear in the markup: no implied tags are
inserted and unmatched end tags are not dropped, so callers see malformed
documents as they are.
"""
from __future__ import annotations

import codecs
import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from html.parser import HTMLParser
from typing import Deque, Iterable, Iterator, List, Optional, Tuple, Union

import requests
from bs4.dammit import EncodingDetector

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"

Chunk = Union[str, bytes]
Source = Union[Chunk, Iterable[Chunk]]


class TokenType(str, Enum):
    START_TAG = "start_tag"
    END_TAG = "end_tag"
    SELF_CLOSING_TAG = "self_closing_tag"
    TEXT = "text"
    # End of input, or a failure while reading it
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Token:
    """A single structural HTML event."""
    type: TokenType
    data: str = ""
    attrs: Tuple[Tuple[str, str], ...] = ()

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value of attribute ``key`` (last occurrence wins)."""
        value = default
        for k, v in self.attrs:
            if k == key:
                value = v
        return value

    @property
    def is_anchor(self) -> bool:
        return self.data == "a" and self.type in (
            TokenType.START_TAG,
            TokenType.END_TAG,
            TokenType.SELF_CLOSING_TAG,
        )


class _TokenCollector(HTMLParser):
    """HTMLParser that queues tokens instead of building a tree."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.pending: Deque[Token] = deque()

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        self.pending.append(Token(TokenType.START_TAG, tag, _clean_attrs(attrs)))

    def handle_endtag(self, tag: str) -> None:
        self.pending.append(Token(TokenType.END_TAG, tag))

    def handle_startendtag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        self.pending.append(Token(TokenType.SELF_CLOSING_TAG, tag, _clean_attrs(attrs)))

    def handle_data(self, data: str) -> None:
        if data:
            self.pending.append(Token(TokenType.TEXT, data))

    def drain(self) -> Iterator[Token]:
        while self.pending:
            yield self.pending.popleft()


def _clean_attrs(attrs: List[Tuple[str, Optional[str]]]) -> Tuple[Tuple[str, str], ...]:
    # Valueless attributes (<a download>) come through as None
    return tuple((key, value or "") for key, value in attrs)


def _incremental_decoder(first_chunk: bytes, encoding: Optional[str]) -> Tuple[codecs.IncrementalDecoder, bytes]:
    """Pick a decoder for a byte stream from its first chunk."""
    data, bom_encoding = EncodingDetector.strip_byte_order_mark(first_chunk)
    candidate = (
        bom_encoding
        or encoding
        or EncodingDetector.find_declared_encoding(data, is_html=True)
        or DEFAULT_ENCODING
    )
    try:
        decoder = codecs.getincrementaldecoder(candidate)(errors="replace")
    except LookupError:
        logger.debug("Unknown encoding %r, falling back to %s", candidate, DEFAULT_ENCODING)
        decoder = codecs.getincrementaldecoder(DEFAULT_ENCODING)(errors="replace")
    return decoder, data


def _decode(chunks: Iterable[Chunk], encoding: Optional[str]) -> Iterator[str]:
    decoder: Optional[codecs.IncrementalDecoder] = None
    for chunk in chunks:
        if isinstance(chunk, str):
            yield chunk
            continue
        if not chunk:
            continue
        if decoder is None:
            decoder, chunk = _incremental_decoder(bytes(chunk), encoding)
        text = decoder.decode(chunk)
        if text:
            yield text
    if decoder is not None:
        tail = decoder.decode(b"", final=True)
        if tail:
            yield tail


def tokenize(source: Source, encoding: Optional[str] = None) -> Iterator[Token]:
    """
    Tokenize HTML from ``source``.

    ``source`` may be a string, a bytes object, or any iterable of string or
    bytes chunks (an open file, ``Response.iter_content()``...). Byte input is
    decoded incrementally; ``encoding`` is used unless the stream starts with a
    byte-order mark, otherwise a ``<meta charset>`` in the first chunk decides,
    then UTF-8.

    The stream always ends with exactly one ``ERROR`` token. Its ``data`` is
    empty at a normal end of input and holds the error message when reading
    the source failed part-way.
    """
    chunks: Iterable[Chunk] = [source] if isinstance(source, (str, bytes, bytearray)) else source
    parser = _TokenCollector()
    try:
        for text in _decode(chunks, encoding):
            parser.feed(text)
            yield from parser.drain()
        parser.close()
    except (requests.RequestException, OSError) as e:
        logger.warning("Stopped reading HTML stream: %s", e)
        yield from parser.drain()
        yield Token(TokenType.ERROR, str(e))
        return

    yield from parser.drain()
    yield Token(TokenType.ERROR)
