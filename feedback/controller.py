from __future__ import annotations

import logging
from typing import Any, Callable, ContextManager, MutableMapping, cast

import streamlit as st

import config
from feedback.dispatch import Dispatcher, get_default_dispatcher
from feedback.keys import FeedbackSessionKeys
from feedback.screens import (
    BACKWARDS,
    FORWARDS,
    ExitSignal,
    InitialClarifier,
    NegativeMainReason,
    NegativeOpenEnded,
    NegativeSitesBroken,
    NegativeSubReason,
    PositiveShare,
    PositiveStep1,
    ScreenState,
    ViewState,
    initial_view_state,
)
from feedback.store import StoreDetector, can_show_ratings_button
from feedback.submitter import Submitter
from feedback.types import MainReason, SubReason, has_sub_reasons
from utils.logging_context import log_context

logger = logging.getLogger(__name__)

ViewStateListener = Callable[[ViewState], None]
ExitListener = Callable[[ExitSignal], None]


class FeedbackFlowController:
    """Drive the feedback wizard from user events to an exit signal.

    The controller owns no widgets. It keeps the current :class:`ViewState` in
    a session-state mapping (Streamlit's ``st.session_state`` by default) so
    the host can re-create the controller on every rerun without losing its
    place, and hands finished feedback to a :class:`Submitter` on a background
    dispatcher.

    The flow state is discarded as soon as the exit signal fires, and the
    exited guard is lifted once the host consumes the signal, so a controller
    built afterwards starts a fresh flow. Hosts that only listen through
    :meth:`subscribe_exit` call :meth:`reset` when they reopen the flow.

    All methods are meant to be called from the thread that renders the UI.
    """

    def __init__(
        self,
        *,
        store_detector: StoreDetector,
        submitter: Submitter,
        dispatcher: Dispatcher | None = None,
        debug_build: bool | None = None,
        flow_id: str = "default",
        session_state: MutableMapping[str, object] | None = None,
    ) -> None:
        self._store_detector = store_detector
        self._submitter = submitter
        self._dispatcher = dispatcher
        self._debug_build = config.is_debug_build() if debug_build is None else debug_build
        self._session_state = cast(
            MutableMapping[str, object],
            session_state if session_state is not None else st.session_state,
        )
        self._keys = FeedbackSessionKeys(flow_id=flow_id)
        self._listeners: list[ViewStateListener] = []
        self._exit_listeners: list[ExitListener] = []
        self.ensure_state_defaults()

    @property
    def flow_id(self) -> str:
        return self._keys.flow_id

    @property
    def exited(self) -> bool:
        return bool(self._session_state.get(self._keys.exited, False))

    def ensure_state_defaults(self) -> None:
        if not isinstance(self._session_state.get(self._keys.view_state), ViewState):
            self._session_state[self._keys.view_state] = initial_view_state()
        self._session_state.setdefault(self._keys.exited, False)

    def reset(self) -> None:
        """Discard the flow and start over from the initial screen."""

        for key in self._keys.all():
            self._session_state.pop(key, None)
        self.ensure_state_defaults()

    # -- observation ---------------------------------------------------

    def current_view_state(self) -> ViewState:
        state = self._session_state.get(self._keys.view_state)
        if not isinstance(state, ViewState):
            self.ensure_state_defaults()
            state = self._session_state[self._keys.view_state]
        return cast(ViewState, state)

    def consume_exit_signal(self) -> ExitSignal | None:
        """Return the pending exit signal once; later calls return ``None``.

        Consuming the signal closes the flow for good: the exited guard and
        any leftover view state are dropped from the session.
        """

        signal = self._session_state.pop(self._keys.exit_signal, None)
        if not isinstance(signal, ExitSignal):
            return None
        self._session_state.pop(self._keys.exited, None)
        self._session_state.pop(self._keys.view_state, None)
        return signal

    def subscribe(self, listener: ViewStateListener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._remove(self._listeners, listener)

    def subscribe_exit(self, listener: ExitListener) -> Callable[[], None]:
        self._exit_listeners.append(listener)
        return lambda: self._remove(self._exit_listeners, listener)

    @staticmethod
    def _remove(listeners: list[Any], listener: Any) -> None:
        if listener in listeners:
            listeners.remove(listener)

    # -- gating --------------------------------------------------------

    def can_show_ratings_button(self) -> bool:
        with self._log_context():
            return can_show_ratings_button(self._store_detector, debug_build=self._debug_build)

    # -- forward navigation --------------------------------------------

    def select_positive(self) -> None:
        if self.can_show_ratings_button():
            self._go_forward(PositiveStep1(forward=FORWARDS))
        else:
            self._go_forward(PositiveShare(forward=FORWARDS))

    def select_negative(self) -> None:
        self._go_forward(NegativeMainReason(forward=FORWARDS))

    def select_main_reason(self, main_reason: MainReason) -> None:
        new_screen: ScreenState
        if main_reason is MainReason.WEBSITES_NOT_LOADING:
            new_screen = NegativeSitesBroken(forward=FORWARDS, main_reason=main_reason)
        elif has_sub_reasons(main_reason):
            new_screen = NegativeSubReason(forward=FORWARDS, main_reason=main_reason)
        else:
            new_screen = NegativeOpenEnded(forward=FORWARDS, main_reason=main_reason)
        self._go_forward(new_screen, main_reason=main_reason, sub_reason=None)

    def select_sub_reason(self, main_reason: MainReason, sub_reason: SubReason) -> None:
        self._go_forward(
            NegativeOpenEnded(forward=FORWARDS, main_reason=main_reason, sub_reason=sub_reason),
            main_reason=main_reason,
            sub_reason=sub_reason,
        )

    def select_give_feedback(self) -> None:
        self._go_forward(PositiveShare(forward=FORWARDS))

    # -- backward navigation -------------------------------------------

    def on_back(self) -> None:
        state = self.current_view_state()
        new_screen: ScreenState
        match state.current:
            case InitialClarifier():
                self._emit_exit(submitted=False)
                return
            case PositiveStep1() | NegativeMainReason():
                new_screen = InitialClarifier(forward=BACKWARDS)
            case PositiveShare():
                if self.can_show_ratings_button():
                    new_screen = PositiveStep1(forward=BACKWARDS)
                else:
                    new_screen = InitialClarifier(forward=BACKWARDS)
            case NegativeSubReason() | NegativeSitesBroken():
                new_screen = NegativeMainReason(forward=BACKWARDS)
            case NegativeOpenEnded():
                # Anything other than the sub-reason screen, broken sites
                # included, falls back to the main reason list.
                if isinstance(state.previous, NegativeSubReason) and state.main_reason is not None:
                    new_screen = NegativeSubReason(forward=BACKWARDS, main_reason=state.main_reason)
                else:
                    new_screen = NegativeMainReason(forward=BACKWARDS)
            case _:
                raise TypeError(f"Unknown feedback screen: {state.current!r}")
        self._replace(state.copy(current=new_screen))

    # -- terminal operations -------------------------------------------

    def submit_negative_open_ended(
        self,
        main_reason: MainReason,
        sub_reason: SubReason | None,
        feedback: str,
    ) -> None:
        self._submit(self._submitter.send_negative_feedback, main_reason, sub_reason, feedback)

    def submit_broken_site(self, feedback: str, broken_site: str | None = None) -> None:
        self._submit(self._submitter.send_broken_site_feedback, feedback, broken_site)

    def submit_positive_no_details(self) -> None:
        self._submit(self._submitter.send_positive_feedback, None)

    def submit_positive_open_ended(self, feedback: str) -> None:
        self._submit(self._submitter.send_positive_feedback, feedback)

    def submit_rating_given(self) -> None:
        """Record that the host sent the user to the store rating page."""

        self._submit(self._submitter.send_user_rated)

    def user_cancel(self) -> None:
        with self._log_context():
            logger.info("User is cancelling")
        self._emit_exit(submitted=False)

    # -- internals -----------------------------------------------------

    def _go_forward(self, screen: ScreenState, **changes: object) -> None:
        state = self.current_view_state()
        self._replace(state.copy(current=screen, previous=state.current, **changes))

    def _log_context(self, screen: ScreenState | None = None) -> ContextManager[None]:
        if screen is None:
            screen = self.current_view_state().current
        return log_context(flow_id=self.flow_id, screen=screen.name)

    def _replace(self, new_state: ViewState) -> None:
        old_state = self.current_view_state()
        self._session_state[self._keys.view_state] = new_state
        with self._log_context(new_state.current):
            logger.debug("Feedback flow %s: %s -> %s", self.flow_id, old_state.current.name, new_state.current.name)
            for listener in list(self._listeners):
                try:
                    listener(new_state)
                except Exception:
                    logger.exception("View state listener failed")

    def _submit(self, send: Callable[..., Any], *args: Any) -> None:
        with self._log_context():
            if self.exited:
                logger.warning("Ignoring submission for feedback flow %s; it already exited", self.flow_id)
                return
            dispatcher = self._dispatcher or get_default_dispatcher()
            try:
                dispatcher.dispatch(send, *args)
            except RuntimeError:
                # A shut-down executor refuses new work; the flow still closes.
                logger.warning("Could not dispatch feedback submission for flow %s", self.flow_id, exc_info=True)
        self._emit_exit(submitted=True)

    def _emit_exit(self, *, submitted: bool) -> None:
        with self._log_context():
            if self.exited:
                logger.warning("Feedback flow %s already exited; ignoring repeated exit", self.flow_id)
                return
            signal = ExitSignal(submitted=submitted)
            self._session_state[self._keys.exited] = True
            self._session_state[self._keys.exit_signal] = signal
            self._session_state.pop(self._keys.view_state, None)
            logger.debug("Feedback flow %s exited (submitted=%s)", self.flow_id, submitted)
            for listener in list(self._exit_listeners):
                try:
                    listener(signal)
                except Exception:
                    logger.exception("Exit listener failed")


__all__ = ["ExitListener", "FeedbackFlowController", "ViewStateListener"]
