"""Immutable screen and view-state snapshots for the feedback flow."""

from __future__ import annotations

from dataclasses import dataclass, replace

from feedback.types import MainReason, SubReason

FORWARDS = True
BACKWARDS = False


@dataclass(frozen=True)
class ScreenState:
    """Base class for every wizard screen.

    ``forward`` only tells the host which transition animation to play; the
    navigation logic never reads it.
    """

    forward: bool

    @property
    def name(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class InitialClarifier(ScreenState):
    """Entry screen asking whether the user enjoys the app."""


# positive branch
@dataclass(frozen=True)
class PositiveStep1(ScreenState):
    """Offers to rate the app in the store or share written feedback."""


@dataclass(frozen=True)
class PositiveShare(ScreenState):
    """Free-text positive feedback."""


# negative branch
@dataclass(frozen=True)
class NegativeMainReason(ScreenState):
    """List of main reasons the app is not working for the user."""


@dataclass(frozen=True)
class NegativeSubReason(ScreenState):
    main_reason: MainReason


@dataclass(frozen=True)
class NegativeSitesBroken(ScreenState):
    main_reason: MainReason
    sub_reason: SubReason | None = None


@dataclass(frozen=True)
class NegativeOpenEnded(ScreenState):
    main_reason: MainReason
    sub_reason: SubReason | None = None


# Screens reached through a main-reason selection; each carries that reason.
REASON_SCREENS: tuple[type[ScreenState], ...] = (
    NegativeSubReason,
    NegativeSitesBroken,
    NegativeOpenEnded,
)


@dataclass(frozen=True)
class ViewState:
    """Snapshot the host renders; replaced on every event, never mutated."""

    current: ScreenState
    previous: ScreenState | None = None
    main_reason: MainReason | None = None
    sub_reason: SubReason | None = None

    def copy(self, **changes: object) -> "ViewState":
        return replace(self, **changes)


@dataclass(frozen=True)
class ExitSignal:
    """One-shot request for the host to close the flow."""

    submitted: bool


def initial_view_state() -> ViewState:
    return ViewState(current=InitialClarifier(forward=FORWARDS))


__all__ = [
    "BACKWARDS",
    "ExitSignal",
    "FORWARDS",
    "InitialClarifier",
    "NegativeMainReason",
    "NegativeOpenEnded",
    "NegativeSitesBroken",
    "NegativeSubReason",
    "PositiveShare",
    "PositiveStep1",
    "REASON_SCREENS",
    "ScreenState",
    "ViewState",
    "initial_view_state",
]
