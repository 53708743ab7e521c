from __future__ import annotations

import logging
from typing import List

from bs4 import BeautifulSoup
from bs4.element import Tag

from .base import Listing
from .catalog import TagCatalog
from ..utils.parsing import first_segment, make_soup, select_text, split_id_list, text_of

logger = logging.getLogger(__name__)

ROW_SELECTOR = "#search_resultsRows > a"
TITLE_SELECTOR = ".title"
# Current combined price cell first, legacy price column as fallback.
PRICE_SELECTORS = (
    ".col.search_price_discount_combined .discount_final_price",
    ".col.search_price",
)
RELEASED_SELECTOR = ".search_released"
REVIEW_SELECTOR = ".search_review_summary"
REVIEW_ATTR = "data-tooltip-html"
TAG_IDS_ATTR = "data-ds-tagids"


def extract_listings(document: BeautifulSoup, catalog: TagCatalog) -> List[Listing]:
    """
    Build one Listing per search result row, in document order.
    Missing fields come back as empty strings; a page without rows gives [].
    """
    rows = document.select(ROW_SELECTOR)
    listings = [_listing_from_row(row, catalog) for row in rows]
    logger.debug("Extracted %d listings", len(listings))
    return listings


def parse_listings(html: str, catalog: TagCatalog) -> List[Listing]:
    return extract_listings(make_soup(html), catalog)


def _listing_from_row(row: Tag, catalog: TagCatalog) -> Listing:
    review_node = row.select_one(REVIEW_SELECTOR)
    tooltip = review_node.get(REVIEW_ATTR) if review_node is not None else None

    return Listing(
        title=text_of(row.select_one(TITLE_SELECTOR)),
        link=_attr(row, "href"),
        price=select_text(row, *PRICE_SELECTORS),
        release_date=text_of(row.select_one(RELEASED_SELECTOR)),
        reviews=first_segment(tooltip),
        tags=catalog.resolve(split_id_list(_attr(row, TAG_IDS_ATTR))),
    )


def _attr(node: Tag, name: str) -> str:
    value = node.get(name)
    if isinstance(value, list):
        # multi-valued attributes (class, rel) come back as lists
        return " ".join(value)
    return value or ""
