"""Release number of steam_scraper and the layout version of its config files."""

__all__ = ["__version__", "CONFIG_SCHEMA_VERSION"]

__version__ = "0.1.0"

#: Bumped whenever a config JSON key is renamed or removed; see config.migrate_config.
CONFIG_SCHEMA_VERSION = 1
