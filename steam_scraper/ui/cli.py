from __future__ import annotations

import argparse
import logging
from typing import List

from ..adapters.catalog import TagCatalog
from ..config import ScraperConfig
from ..engines.session import SessionController
from ..errors import ConfigError, ExportError
from ..utils.http import PageFetcher
from ..utils.logging import setup_logging

logger = logging.getLogger(__name__)


class ConsoleIO:
    """Console collaborator backed by input() and print()."""

    def ask(self, prompt: str) -> str:
        return input(prompt)

    def show(self, message: str) -> None:
        print(message)


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Scrape game data from the Steam store")
    p.add_argument("--config", type=str, help="Path to config JSON", default=None)
    p.add_argument("--tags", type=str, default=None, help="Path to the tag ID -> name JSON file")
    p.add_argument("--output-dir", type=str, default=None, help="Folder for games.json and games.csv")
    p.add_argument("--log-level", type=str, default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
    return p


def _load_config(args: argparse.Namespace) -> ScraperConfig:
    if args.config:
        cfg = ScraperConfig.from_file(args.config)
    else:
        cfg = ScraperConfig.from_env()

    if args.tags:
        cfg.tags_path = args.tags
    if args.output_dir:
        cfg.output_dir = args.output_dir

    cfg.validate()
    return cfg


def run_cli(argv: List[str] | None = None, console: ConsoleIO | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.log_level)
    console = console or ConsoleIO()

    try:
        cfg = _load_config(args)
        catalog = TagCatalog.load(cfg.tags_path)
        controller = SessionController(
            cfg,
            catalog,
            fetcher=PageFetcher(timeout=cfg.request_timeout, user_agent=cfg.user_agent),
            console=console,
        )
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        console.show(f"Configuration error: {exc}")
        return 1

    console.show("Welcome to Steam Scraper!")
    console.show("----------------------------")
    try:
        controller.run()
    except ExportError as exc:
        logger.error("Export failed: %s", exc)
        console.show(f"Export failed: {exc}")
        return 1
    return 0
