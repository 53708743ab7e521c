from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Listing:
    """One storefront search result."""

    title: str = ""
    link: str = ""
    price: str = ""
    release_date: str = ""
    reviews: str = ""
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "link": self.link,
            "price": self.price,
            "release_date": self.release_date,
            "reviews": self.reviews,
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Listing":
        return cls(
            title=data.get("title", ""),
            link=data.get("link", ""),
            price=data.get("price", ""),
            release_date=data.get("release_date", ""),
            reviews=data.get("reviews", ""),
            tags=list(data.get("tags") or []),
        )


@dataclass
class DetailInfo:
    """Enriched data scraped from a single item page."""

    developer: str = ""
    publisher: str = ""
    description: str = ""
    # None when the page has no system requirements section
    system_requirements: Optional[str] = None
