"""
Session state machine.

The state is an immutable value; every function here maps (state, input) to
a new state plus at most one effect for the controller to carry out. Effects
whose outcome decides the next phase (search, detail) are finished by the
matching ``on_*`` result function once the controller has run them.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

from ..adapters.base import Listing
from ..errors import ListingNotFoundError

QUIT = "quit"
NEXT = "next"
OPEN_CHOICES = {"j": "json", "c": "csv"}


class Phase(Enum):
    AWAITING_KEYWORD = "awaiting_keyword"
    RESULTS_READY = "results_ready"
    AWAITING_DETAIL_SELECTION = "awaiting_detail_selection"
    TERMINAL = "terminal"


@dataclass(frozen=True)
class SessionState:
    phase: Phase = Phase.AWAITING_KEYWORD
    listings: Tuple[Listing, ...] = ()
    # Set once a result file was opened; only "next" is accepted after that.
    artifact_opened: bool = False


@dataclass(frozen=True)
class Search:
    keyword: str


@dataclass(frozen=True)
class OpenArtifact:
    kind: str


@dataclass(frozen=True)
class ShowDetail:
    listing: Listing


@dataclass(frozen=True)
class Notice:
    message: str


Effect = Union[Search, OpenArtifact, ShowDetail, Notice]
Transition = Tuple[SessionState, Optional[Effect]]


def terminate(state: SessionState) -> SessionState:
    return replace(state, phase=Phase.TERMINAL)


def on_keyword(state: SessionState, text: str) -> Transition:
    keyword = text.strip()
    if keyword == QUIT:
        return terminate(state), None
    if not keyword:
        return state, Notice("Please enter a keyword.")
    return state, Search(keyword)


def on_search_succeeded(state: SessionState, listings: Sequence[Listing]) -> SessionState:
    # The batch is replaced wholesale and never mutated afterwards.
    return SessionState(phase=Phase.RESULTS_READY, listings=tuple(listings))


def on_search_failed(state: SessionState) -> SessionState:
    return replace(state, phase=Phase.AWAITING_KEYWORD)


def on_open_choice(state: SessionState, text: str) -> Transition:
    choice = text.strip().lower()
    if choice == NEXT:
        moved = replace(state, phase=Phase.AWAITING_DETAIL_SELECTION, artifact_opened=False)
        return moved, Notice("Moving on to the next operation.")
    if state.artifact_opened:
        return state, None
    if choice in OPEN_CHOICES:
        return state, OpenArtifact(OPEN_CHOICES[choice])
    return state, Notice("Unsupported input.")


def on_artifact_opened(state: SessionState) -> SessionState:
    return replace(state, artifact_opened=True)


def find_listing(listings: Sequence[Listing], link: str) -> Listing:
    """First listing whose link matches exactly; raises ListingNotFoundError otherwise."""
    for listing in listings:
        if listing.link == link:
            return listing
    raise ListingNotFoundError(f"game not found: {link}")


def on_link(state: SessionState, text: str) -> Transition:
    link = text.strip()
    if link == QUIT:
        return terminate(state), None
    return state, ShowDetail(find_listing(state.listings, link))


def on_detail_shown(state: SessionState) -> SessionState:
    return replace(state, phase=Phase.AWAITING_KEYWORD)
