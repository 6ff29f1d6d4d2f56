"""Fire-and-forget execution of feedback submissions."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from threading import RLock
from typing import Any, Callable, Protocol

import config

logger = logging.getLogger(__name__)

_DEFAULT_LOCK = RLock()
_default_dispatcher: "SubmissionDispatcher | None" = None


class Dispatcher(Protocol):
    def dispatch(self, func: Callable[..., Any], *args: Any) -> Future[Any]: ...


def _log_failure(future: Future[Any]) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.warning("Background feedback submission failed: %s", exc, exc_info=exc)


class SubmissionDispatcher:
    """Runs submissions on a background thread pool without waiting for them.

    The pool is not tied to any flow: a submission keeps running after the
    flow that dispatched it has closed.
    """

    def __init__(self, *, max_workers: int | None = None) -> None:
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers or config.get_submit_workers(),
            thread_name_prefix="feedback-submit",
        )

    def dispatch(self, func: Callable[..., Any], *args: Any) -> Future[Any]:
        future = self._executor.submit(func, *args)
        future.add_done_callback(_log_failure)
        return future

    def shutdown(self, *, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)


class InlineDispatcher:
    """Runs submissions immediately on the calling thread.

    Meant for tests and synchronous hosts. Failures are logged like the
    background variant instead of propagating to the caller.
    """

    def dispatch(self, func: Callable[..., Any], *args: Any) -> Future[Any]:
        future: Future[Any] = Future()
        try:
            future.set_result(func(*args))
        except Exception as exc:
            future.set_exception(exc)
        _log_failure(future)
        return future


def get_default_dispatcher() -> SubmissionDispatcher:
    """Return the process-wide background dispatcher, creating it on first use."""

    global _default_dispatcher
    with _DEFAULT_LOCK:
        if _default_dispatcher is None:
            _default_dispatcher = SubmissionDispatcher()
        return _default_dispatcher


def shutdown_default_dispatcher(*, wait: bool = True) -> None:
    global _default_dispatcher
    with _DEFAULT_LOCK:
        if _default_dispatcher is not None:
            _default_dispatcher.shutdown(wait=wait)
            _default_dispatcher = None


__all__ = [
    "Dispatcher",
    "InlineDispatcher",
    "SubmissionDispatcher",
    "get_default_dispatcher",
    "shutdown_default_dispatcher",
]
