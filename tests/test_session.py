"""Tests for the interactive session controller."""

import json
import os

import pytest

from conftest import (
    ALPHA_LINK,
    DETAIL_HTML,
    SEARCH_HTML,
    SEARCH_URL,
    FakeConsole,
    FakeFetcher,
    FakeOpener,
)

from steam_scraper.engines.base import Phase
from steam_scraper.engines.session import SessionController
from steam_scraper.errors import ExportError, NetworkError, ParseError


def make_controller(config, catalog, answers, pages=None, opener=None):
    console = FakeConsole(answers)
    fetcher = FakeFetcher(pages if pages is not None else {SEARCH_URL: SEARCH_HTML, ALPHA_LINK: DETAIL_HTML})
    controller = SessionController(
        config,
        catalog,
        fetcher=fetcher,
        console=console,
        opener=opener or FakeOpener(),
    )
    return controller, console, fetcher


def test_quit_at_keyword_prompt(config, catalog):
    """quit ends the session without any request."""
    controller, _, fetcher = make_controller(config, catalog, ["quit"])

    controller.run()

    assert controller.phase is Phase.TERMINAL
    assert fetcher.calls == []


def test_search_exports_results(config, catalog):
    """A keyword fetches the search page and writes both files."""
    controller, console, fetcher = make_controller(config, catalog, ["alpha"])

    controller.step()

    assert controller.phase is Phase.RESULTS_READY
    assert fetcher.calls == [(SEARCH_URL, None)]
    assert [item.link for item in controller.listings][0] == ALPHA_LINK
    json_path = os.path.join(config.output_dir, "games.json")
    assert controller.artifacts == {"json": json_path, "csv": os.path.join(config.output_dir, "games.csv")}
    with open(json_path, encoding="utf-8") as f:
        assert json.load(f)[0]["tags"] == ["Action", "Strategy"]
    assert "Found 2 results" in console.output()


@pytest.mark.parametrize("error", [NetworkError("HTTP request failed with status code: 503", status=503), ParseError("bad")])
def test_search_failure_is_reported_and_retryable(config, catalog, error):
    """A failed search returns to the keyword prompt and keeps accepting input."""
    pages = {SEARCH_URL: error}
    controller, console, _ = make_controller(config, catalog, ["alpha", "quit"], pages=pages)

    controller.step()

    assert controller.phase is Phase.AWAITING_KEYWORD
    assert "Error scraping page" in console.output()
    assert not os.path.exists(config.output_dir)

    controller.step()
    assert controller.phase is Phase.TERMINAL


def test_open_then_next(config, catalog):
    """Opening a file waits for next before asking for a link."""
    opener = FakeOpener()
    controller, console, _ = make_controller(config, catalog, ["alpha", "j", "c", "next"], opener=opener)

    controller.step()
    controller.step()
    assert controller.phase is Phase.RESULTS_READY
    assert opener.opened == [os.path.join(config.output_dir, "games.json")]

    controller.step()
    assert opener.opened == [os.path.join(config.output_dir, "games.json")]
    assert console.prompts[-1] == "Type 'next' to move on: "

    controller.step()
    assert controller.phase is Phase.AWAITING_DETAIL_SELECTION


def test_failed_open_keeps_offering_files(config, catalog):
    """When the file cannot be opened the user may pick again."""
    controller, console, _ = make_controller(config, catalog, ["alpha", "j"], opener=FakeOpener(result=False))

    controller.step()
    controller.step()

    assert controller.phase is Phase.RESULTS_READY
    assert controller.state.artifact_opened is False
    assert "Error opening json file." in console.output()


def test_unknown_link_reprompts(config, catalog):
    """A link outside the batch is reported and the link prompt is shown again."""
    answers = ["alpha", "next", "https://store.steampowered.com/app/999/", "quit"]
    controller, console, fetcher = make_controller(config, catalog, answers)

    controller.step()
    controller.step()
    controller.step()

    assert controller.phase is Phase.AWAITING_DETAIL_SELECTION
    assert "game not found" in console.output()
    assert len(fetcher.calls) == 1

    controller.step()
    assert controller.phase is Phase.TERMINAL


def test_detail_lookup_with_sysreq(config, catalog):
    """A known link fetches details with the bypass cookie and shows them."""
    controller, console, fetcher = make_controller(config, catalog, ["alpha", "next", ALPHA_LINK, "yes"])

    for _ in range(3):
        controller.step()

    assert fetcher.calls[-1] == (ALPHA_LINK, {"birthtime": "283993201"})
    assert controller.phase is Phase.AWAITING_KEYWORD
    output = console.output()
    assert "Developer:\nStudio One" in output
    assert "Publisher:\nBig Pub" in output
    assert "System Requirements:\nOS: Windows 10 64-bit Memory: 8 GB RAM" in output


def test_detail_lookup_without_cookie_or_sysreq(config, catalog):
    """No cookie is sent without a token, and declining skips requirements."""
    config.birthtime = ""
    controller, console, fetcher = make_controller(config, catalog, ["alpha", "next", ALPHA_LINK, "no"])

    for _ in range(3):
        controller.step()

    assert fetcher.calls[-1] == (ALPHA_LINK, None)
    assert "System Requirements" not in console.output()
    assert controller.phase is Phase.AWAITING_KEYWORD


def test_detail_failure_stays_on_link_prompt(config, catalog):
    """A failed detail fetch is reported and another link can be entered."""
    pages = {SEARCH_URL: SEARCH_HTML, ALPHA_LINK: NetworkError("timed out")}
    controller, console, _ = make_controller(config, catalog, ["alpha", "next", ALPHA_LINK], pages=pages)

    for _ in range(3):
        controller.step()

    assert controller.phase is Phase.AWAITING_DETAIL_SELECTION
    assert "Error scraping additional details: timed out" in console.output()


def test_end_of_input_terminates(config, catalog):
    """Closing stdin at any prompt ends the session."""
    controller, _, _ = make_controller(config, catalog, ["alpha"])

    state = controller.run()

    assert state.phase is Phase.TERMINAL


def test_full_loop(config, catalog):
    """Search, move on, inspect a game, then search again and quit."""
    answers = ["alpha", "next", ALPHA_LINK, "no", "alpha", "next", "quit"]
    controller, console, fetcher = make_controller(config, catalog, answers)

    controller.run()

    assert controller.phase is Phase.TERMINAL
    assert [url for url, _ in fetcher.calls] == [SEARCH_URL, ALPHA_LINK, SEARCH_URL]
    assert console.answers == []


def test_export_failure_propagates(config, catalog, tmp_path):
    """Not being able to create the output folder is fatal."""
    blocker = tmp_path / "blocked"
    blocker.write_text("", encoding="utf-8")
    config.output_dir = str(blocker)
    controller, _, _ = make_controller(config, catalog, ["alpha"])

    with pytest.raises(ExportError):
        controller.step()


@pytest.mark.parametrize("answers", [["alpha"], ["alpha", "next", ALPHA_LINK]])
def test_interrupt_during_request_ends_session(config, catalog, answers):
    """Ctrl-C while a page is loading ends the session instead of escaping."""
    interrupted = answers[-1]
    url = SEARCH_URL if interrupted == "alpha" else ALPHA_LINK
    pages = {SEARCH_URL: SEARCH_HTML, ALPHA_LINK: DETAIL_HTML}
    pages[url] = KeyboardInterrupt()
    controller, _, _ = make_controller(config, catalog, answers, pages=pages)

    state = controller.run()

    assert state.phase is Phase.TERMINAL
