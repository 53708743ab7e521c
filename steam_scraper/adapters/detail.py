from __future__ import annotations

from typing import Optional

from bs4 import BeautifulSoup

from .base import DetailInfo
from ..utils.parsing import make_soup, normalize_whitespace, text_of

DEVELOPER_SELECTOR = "#developers_list > a"
# Fixed sibling index; breaks if the store reorders the glance rows.
PUBLISHER_POSITIONAL_SELECTOR = (
    "#game_highlights > div.rightcol > div > div.glance_ctn_responsive_left"
    " > div:nth-child(4) > div.summary.column > a"
)
DESCRIPTION_SELECTOR = ".game_description_snippet"
SYSREQ_SECTION_SELECTOR = ".game_page_autocollapse.sys_req"
SYSREQ_CONTENTS_SELECTOR = ".sysreq_contents"


def extract_detail(document: BeautifulSoup) -> DetailInfo:
    """Pull developer, publisher, description and system requirements from an item page."""
    description = text_of(document.select_one(DESCRIPTION_SELECTOR)).replace("\n", " ")
    return DetailInfo(
        developer=_joined_anchor_text(document, DEVELOPER_SELECTOR),
        publisher=_publisher(document),
        description=description,
        system_requirements=_system_requirements(document),
    )


def parse_detail(html: str) -> DetailInfo:
    return extract_detail(make_soup(html))


def _joined_anchor_text(root, selector: str) -> str:
    names = [text_of(a) for a in root.select(selector)]
    return ", ".join(n for n in names if n)


def _publisher(document: BeautifulSoup) -> str:
    # Ordered fallbacks: the labelled glance row, then the positional path.
    for row in document.select(".dev_row"):
        label = text_of(row.select_one(".subtitle")).lower()
        if label.startswith("publisher"):
            names = _joined_anchor_text(row, ".summary a")
            if names:
                return names
    return _joined_anchor_text(document, PUBLISHER_POSITIONAL_SELECTOR)


def _system_requirements(document: BeautifulSoup) -> Optional[str]:
    section = document.select_one(SYSREQ_SECTION_SELECTOR)
    if section is None:
        return None
    return normalize_whitespace(text_of(section.select_one(SYSREQ_CONTENTS_SELECTOR), " "))
