from __future__ import annotations

import json
import logging
import os
from types import MappingProxyType
from typing import Iterable, Iterator, List, Mapping

from ..errors import ConfigError

logger = logging.getLogger(__name__)


class TagCatalog(Mapping[str, str]):
    """
    Read-only tag ID -> tag name mapping, loaded once at startup.
    """

    def __init__(self, tags: Mapping[str, str]) -> None:
        self._tags: Mapping[str, str] = MappingProxyType({str(k): v for k, v in tags.items()})

    @classmethod
    def load(cls, source: str | os.PathLike[str]) -> "TagCatalog":
        """
        Load the catalog from a JSON object file.
        Raises ConfigError when the file is missing, unreadable or malformed.
        """
        try:
            with open(source, "r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as exc:
            raise ConfigError(f"Error opening tags file {source}: {exc}") from exc
        except ValueError as exc:
            # JSONDecodeError and UnicodeDecodeError
            raise ConfigError(f"Error decoding tags JSON {source}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError(f"Tags file {source} must contain a JSON object")
        bad = [k for k, v in data.items() if not isinstance(v, str)]
        if bad:
            raise ConfigError(f"Tags file {source} has non-string names for IDs: {', '.join(bad[:5])}")

        logger.info("Loaded %d tags from %s", len(data), source)
        return cls(data)

    def resolve(self, ids: Iterable[str]) -> List[str]:
        """Map IDs to names in input order, dropping IDs the catalog does not know."""
        names: List[str] = []
        for tag_id in ids:
            name = self._tags.get(str(tag_id).strip())
            if name is not None:
                names.append(name)
        return names

    def __getitem__(self, tag_id: str) -> str:
        return self._tags[tag_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)
