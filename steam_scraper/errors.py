"""
Exception hierarchy for the scraper.

Everything derives from ScraperError so callers can catch broadly or
specifically. ConfigError and ExportError are fatal; the rest are reported
by the session and the user can try again.
"""
from __future__ import annotations

from typing import Optional


class ScraperError(Exception):
    """Base class for all scraper exceptions."""


class ConfigError(ScraperError):
    """Raised when the tag catalog or the configuration cannot be loaded."""


class NetworkError(ScraperError):
    """
    Raised on transport failures, timeouts and non-200 responses.

    Attributes
    ----------
    status : HTTP status code, or None when no response was received.
    """

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        self.status = status
        super().__init__(message)


class ParseError(ScraperError):
    """Raised when a fetched document cannot be parsed."""


class ListingNotFoundError(ScraperError, LookupError):
    """Raised when a link does not belong to the current listing batch."""


class ExportError(ScraperError, OSError):
    """Raised when the output folder or an output file cannot be written."""
