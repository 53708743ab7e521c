from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any
import os
import json

from .errors import ConfigError
from .version import __version__, CONFIG_SCHEMA_VERSION

DEFAULT_EXPORTERS = [
    "steam_scraper.export.json_exporter:JSONExporter",
    "steam_scraper.export.csv_exporter:CSVExporter",
]


@dataclass
class ScraperConfig:
    """
    Canonical configuration object passed throughout the system.
    Fixed for the lifetime of the process once the session starts.
    """
    schema_version: int = CONFIG_SCHEMA_VERSION
    # JSON object mapping tag IDs to tag names
    tags_path: str = "data/tags.json"
    # Folder receiving games.json / games.csv
    output_dir: str = "resultfiles"
    store_url: str = "https://store.steampowered.com"
    # Age-gate bypass token sent as the birthtime cookie on detail requests
    birthtime: str = ""
    request_timeout: float = 15.0
    user_agent: str = f"steam_scraper/{__version__}"
    # Dotted paths so exporters can be swapped without code changes.
    exporters: List[str] = field(default_factory=lambda: list(DEFAULT_EXPORTERS))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def search_url(self) -> str:
        return f"{self.store_url.rstrip('/')}/search/"

    # ---------- Loaders ----------

    @classmethod
    def from_env(cls) -> "ScraperConfig":
        """
        Build config from environment variables (all optional).
        """
        def _get(name: str, default: str) -> str:
            return os.getenv(name, default)

        exporters = [e.strip() for e in _get("SCRAPER_EXPORTERS", "").split(",") if e.strip()]
        try:
            timeout = float(_get("SCRAPER_REQUEST_TIMEOUT", "15.0"))
        except ValueError as exc:
            raise ConfigError(f"SCRAPER_REQUEST_TIMEOUT is not a number: {exc}") from exc

        return cls(
            tags_path=_get("SCRAPER_TAGS_PATH", "data/tags.json"),
            output_dir=_get("SCRAPER_OUTPUT_DIR", "resultfiles"),
            store_url=_get("SCRAPER_STORE_URL", "https://store.steampowered.com"),
            birthtime=_get("BIRTHTIME", ""),
            request_timeout=timeout,
            user_agent=_get("SCRAPER_USER_AGENT", f"steam_scraper/{__version__}"),
            exporters=exporters or list(DEFAULT_EXPORTERS),
        )

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> "ScraperConfig":
        """
        Load configuration from a JSON file. Supports schema migration for future versions.
        The bypass token still comes from BIRTHTIME when the file does not set one.
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a JSON object")

        data = migrate_config(data)
        data.setdefault("birthtime", os.getenv("BIRTHTIME", ""))
        try:
            return cls(**data)
        except TypeError as exc:
            raise ConfigError(f"Unknown keys in config file {path}: {exc}") from exc

    # ---------- Validation ----------

    def validate(self) -> None:
        if not self.tags_path:
            raise ConfigError("tags_path cannot be empty")
        if not self.output_dir:
            raise ConfigError("output_dir cannot be empty")
        if not self.store_url.startswith(("http://", "https://")):
            raise ConfigError(f"store_url must be an http(s) URL, got {self.store_url!r}")
        if self.request_timeout <= 0:
            raise ConfigError("request_timeout must be > 0")
        if not self.exporters:
            raise ConfigError("at least one exporter is required")


def migrate_config(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Migrate config dict to the latest schema version.
    Keep this pure and additive. Add migrations here as you bump schema.
    """
    raw = dict(raw)
    raw.setdefault("schema_version", CONFIG_SCHEMA_VERSION)
    return raw
