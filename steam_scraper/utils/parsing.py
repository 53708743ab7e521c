from __future__ import annotations

import re
from typing import List, Optional
from urllib.parse import urlencode

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from bs4.element import Tag

from ..errors import ParseError

_WHITESPACE = re.compile(r"\s+")


def make_soup(html: Optional[str | bytes]) -> BeautifulSoup:
    """
    Parse an HTML body into a document, raising ParseError when it cannot be read.
    """
    if html is None:
        raise ParseError("No document body to parse")
    try:
        return BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as exc:
        raise ParseError(f"Failed to parse HTML document: {exc}") from exc


def build_search_url(search_url: str, keyword: str) -> str:
    return f"{search_url}?{urlencode({'term': keyword})}"


def text_of(node: Optional[Tag], separator: str = "") -> str:
    """Trimmed text content of a node, or an empty string when the node is missing."""
    if node is None:
        return ""
    return node.get_text(separator).strip()


def select_text(root: Tag, *selectors: str) -> str:
    """Text of the first selector that matches a node with non-empty text."""
    for selector in selectors:
        text = text_of(root.select_one(selector))
        if text:
            return text
    return ""


def normalize_whitespace(text: str) -> str:
    """
    Collapse newline runs and repeated spaces into single spaces.

    >>> normalize_whitespace("Windows 10\\n\\n  64-bit  ")
    'Windows 10 64-bit'
    """
    return _WHITESPACE.sub(" ", text).strip()


def first_segment(value: Optional[str], marker: str = "<br>") -> str:
    if not value:
        return ""
    return value.split(marker, 1)[0].strip()


def split_id_list(value: Optional[str]) -> List[str]:
    """
    Split a bracketed, comma-separated ID list such as "[19,3953,492]".
    Empty tokens are discarded; order is kept.
    """
    if not value:
        return []
    inner = value.strip().strip("[]")
    return [token.strip() for token in inner.split(",") if token.strip()]
