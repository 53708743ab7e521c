from __future__ import annotations

import csv
from typing import Sequence

from .base import prepare_output
from ..adapters.base import Listing
from ..errors import ExportError

TAG_SEPARATOR = ", "


class CSVExporter:
    """
    One row per listing; tags are joined into a single field.
    """

    kind = "csv"
    filename = "games.csv"

    _headers = ["Title", "Link", "Price", "Release Date", "Reviews", "Tags"]

    def export(self, listings: Sequence[Listing], path: str) -> None:
        prepare_output(path)
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                w = csv.writer(f)
                w.writerow(self._headers)
                for item in listings:
                    w.writerow(
                        [
                            item.title,
                            item.link,
                            item.price,
                            item.release_date,
                            item.reviews,
                            TAG_SEPARATOR.join(item.tags),
                        ]
                    )
        except OSError as exc:
            raise ExportError(f"Error creating CSV file {path}: {exc}") from exc
