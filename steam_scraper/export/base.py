from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence

from ..adapters.base import Listing
from ..errors import ExportError


class Exporter(Protocol):
    # Short key the session uses to offer the file ("json", "csv")
    kind: str
    filename: str

    def export(self, listings: Sequence[Listing], path: str) -> None:
        ...


def prepare_output(path: str) -> None:
    """Create the parent folder of an output file, raising ExportError on failure."""
    try:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ExportError(f"Error creating folder for {path}: {exc}") from exc
