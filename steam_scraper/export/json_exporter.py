from __future__ import annotations

import json
from typing import List, Sequence

from .base import prepare_output
from ..adapters.base import Listing
from ..errors import ExportError


class JSONExporter:
    kind = "json"
    filename = "games.json"

    def export(self, listings: Sequence[Listing], path: str) -> None:
        prepare_output(path)
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump([item.to_dict() for item in listings], f, indent=2, ensure_ascii=False)
        except OSError as exc:
            raise ExportError(f"Error creating JSON file {path}: {exc}") from exc


def read_listings(path: str) -> List[Listing]:
    """Load a previously exported JSON file back into Listing records."""
    with open(path, "r", encoding="utf-8") as f:
        return [Listing.from_dict(item) for item in json.load(f)]
