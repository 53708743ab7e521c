from __future__ import annotations

import logging
import os
from typing import Callable, Dict, List, Optional, Protocol, Sequence

from bs4 import BeautifulSoup

from .base import (
    NEXT,
    Notice,
    OpenArtifact,
    Phase,
    Search,
    SessionState,
    ShowDetail,
    on_artifact_opened,
    on_detail_shown,
    on_keyword,
    on_link,
    on_open_choice,
    on_search_failed,
    on_search_succeeded,
    terminate,
)
from ..adapters.base import DetailInfo, Listing
from ..adapters.catalog import TagCatalog
from ..adapters.detail import extract_detail
from ..adapters.search import extract_listings
from ..config import ScraperConfig
from ..errors import ListingNotFoundError, NetworkError, ParseError
from ..export.base import Exporter
from ..ui.opener import open_path
from ..utils.loader import load_symbol
from ..utils.parsing import build_search_url

logger = logging.getLogger(__name__)

KEYWORD_PROMPT = "Enter the game keyword you want to search (or 'quit' to exit): "
OPEN_PROMPT = "Do you want to open the results? (Type 'J' to open JSON, 'C' to open CSV, or 'next' to move on): "
WAIT_PROMPT = f"Type '{NEXT}' to move on: "
LINK_PROMPT = "Enter the link of the game from your JSON/CSV file for additional details (or 'quit' to exit): "
SYSREQ_PROMPT = "\nDo you want to see system requirements? (yes/no): "


class Console(Protocol):
    """Blocking prompt/print surface the session talks to."""

    def ask(self, prompt: str) -> str:
        ...

    def show(self, message: str) -> None:
        ...


class Fetcher(Protocol):
    def get_document(self, url: str, cookies: Optional[Dict[str, str]] = None) -> BeautifulSoup:
        ...


def load_exporters(config: ScraperConfig) -> List[Exporter]:
    return [load_symbol(dotted)() for dotted in config.exporters]


def format_detail(info: DetailInfo) -> str:
    return (
        f"\nDeveloper:\n{info.developer}"
        f"\n\nPublisher:\n{info.publisher}"
        f"\n\nDescription:\n{info.description}"
    )


class SessionController:
    """
    Drives the interactive search -> export -> detail loop.

    The controller owns the only mutable piece of the session, the current
    SessionState. Network and parse failures are reported and leave the
    session in a state that accepts new input; ExportError propagates.
    """

    def __init__(
        self,
        config: ScraperConfig,
        catalog: TagCatalog,
        *,
        fetcher: Fetcher,
        console: Console,
        exporters: Optional[Sequence[Exporter]] = None,
        opener: Callable[[str], bool] = open_path,
    ) -> None:
        self.config = config
        self.catalog = catalog
        self.fetcher = fetcher
        self.console = console
        self.exporters = list(exporters) if exporters is not None else load_exporters(config)
        self.opener = opener
        self.state = SessionState()
        # kind -> path of the files written for the current batch
        self.artifacts: Dict[str, str] = {}

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def listings(self) -> Sequence[Listing]:
        return self.state.listings

    def run(self) -> SessionState:
        while self.state.phase is not Phase.TERMINAL:
            self.step()
        logger.info("Session finished")
        return self.state

    def step(self) -> SessionState:
        """Prompt once for the current phase and apply the answer."""
        if self.state.phase is Phase.TERMINAL:
            return self.state
        text = self._ask(self._prompt())
        if text is None:
            self.state = terminate(self.state)
            return self.state

        if self.state.phase is Phase.AWAITING_KEYWORD:
            self._handle_keyword(text)
        elif self.state.phase is Phase.RESULTS_READY:
            self._handle_open_choice(text)
        else:
            self._handle_link(text)
        return self.state

    def export(self, listings: Sequence[Listing]) -> Dict[str, str]:
        paths: Dict[str, str] = {}
        for exporter in self.exporters:
            path = os.path.join(self.config.output_dir, exporter.filename)
            exporter.export(listings, path)
            paths[exporter.kind] = path
        logger.info("Exported %d listings to %s", len(listings), ", ".join(paths.values()))
        return paths

    # ---- Phase handlers ------------------------------------------------------

    def _handle_keyword(self, text: str) -> None:
        self.state, effect = on_keyword(self.state, text)
        if isinstance(effect, Notice):
            self.console.show(effect.message)
        elif isinstance(effect, Search):
            self._search(effect.keyword)

    def _search(self, keyword: str) -> None:
        url = build_search_url(self.config.search_url(), keyword)
        try:
            document = self._fetch(url)
            if document is None:
                return
            listings = extract_listings(document, self.catalog)
        except (NetworkError, ParseError) as exc:
            logger.warning("Search for %r failed: %s", keyword, exc)
            self.console.show(f"Error scraping page: {exc}")
            self.state = on_search_failed(self.state)
            return

        self.artifacts = self.export(listings)
        self.console.show(f"Found {len(listings)} results. Files created successfully.")
        self.state = on_search_succeeded(self.state, listings)

    def _handle_open_choice(self, text: str) -> None:
        self.state, effect = on_open_choice(self.state, text)
        if isinstance(effect, Notice):
            self.console.show(effect.message)
        elif isinstance(effect, OpenArtifact):
            path = self.artifacts.get(effect.kind)
            if path and self.opener(path):
                self.console.show("File opened successfully.")
                self.state = on_artifact_opened(self.state)
            else:
                self.console.show(f"Error opening {effect.kind} file.")

    def _handle_link(self, text: str) -> None:
        try:
            self.state, effect = on_link(self.state, text)
        except ListingNotFoundError as exc:
            self.console.show(f"Error processing additional details: {exc}")
            return
        if isinstance(effect, ShowDetail):
            self._show_detail(effect.listing)

    def _show_detail(self, listing: Listing) -> None:
        self.console.show(f"Scraping additional details from: {listing.link}")
        cookies = {"birthtime": self.config.birthtime} if self.config.birthtime else None
        try:
            document = self._fetch(listing.link, cookies)
            if document is None:
                return
            info = extract_detail(document)
        except (NetworkError, ParseError) as exc:
            logger.warning("Detail lookup for %s failed: %s", listing.link, exc)
            self.console.show(f"Error scraping additional details: {exc}")
            return

        self.console.show(format_detail(info))
        answer = self._ask(SYSREQ_PROMPT)
        if answer is not None and answer.strip().lower() == "yes":
            if info.system_requirements is None:
                self.console.show("\nSystem requirements not found.")
            else:
                self.console.show(f"\nSystem Requirements:\n{info.system_requirements}\n")
        self.state = on_detail_shown(self.state)

    # ---- Helpers -------------------------------------------------------------

    def _prompt(self) -> str:
        if self.state.phase is Phase.AWAITING_KEYWORD:
            return KEYWORD_PROMPT
        if self.state.phase is Phase.RESULTS_READY:
            return WAIT_PROMPT if self.state.artifact_opened else OPEN_PROMPT
        return LINK_PROMPT

    def _fetch(self, url: str, cookies: Optional[Dict[str, str]] = None) -> Optional[BeautifulSoup]:
        # Ctrl-C during a request cancels the session like it does at a prompt.
        try:
            return self.fetcher.get_document(url, cookies=cookies)
        except KeyboardInterrupt:
            logger.info("Request to %s interrupted; ending session", url)
            self.state = terminate(self.state)
            return None

    def _ask(self, prompt: str) -> Optional[str]:
        # EOF or Ctrl-C at a prompt cancels the session.
        try:
            return self.console.ask(prompt)
        except (EOFError, KeyboardInterrupt):
            logger.info("Input closed; ending session")
            return None
