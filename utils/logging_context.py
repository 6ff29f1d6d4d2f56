"""Flow-scoped fields for log records emitted by the feedback controller.

Every record created after :func:`log_context` was first entered carries
``flow_id`` and ``screen`` attributes (``"-"`` outside a flow), so host
formatters can reference ``%(flow_id)s`` and ``%(screen)s`` safely.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import Iterator

_flow_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("flow_id", default="-")
_screen_var: contextvars.ContextVar[str] = contextvars.ContextVar("screen", default="-")
_RECORD_FACTORY_INSTALLED = False


def _coerce(value: str | None) -> str:
    if value is None:
        return "-"
    return value.strip() or "-"


def _install_record_factory() -> None:
    global _RECORD_FACTORY_INSTALLED
    if _RECORD_FACTORY_INSTALLED:
        return
    default_factory = logging.getLogRecordFactory()

    def _record_factory(*args: object, **kwargs: object) -> logging.LogRecord:
        record = default_factory(*args, **kwargs)
        record.flow_id = _flow_id_var.get()
        record.screen = _screen_var.get()
        return record

    logging.setLogRecordFactory(_record_factory)
    _RECORD_FACTORY_INSTALLED = True


@contextmanager
def log_context(*, flow_id: str | None = None, screen: str | None = None) -> Iterator[None]:
    """Temporarily bind the flow and screen for records logged inside the block."""

    _install_record_factory()
    tokens: list[tuple[contextvars.ContextVar[str], contextvars.Token[str]]] = []
    if flow_id is not None:
        tokens.append((_flow_id_var, _flow_id_var.set(_coerce(flow_id))))
    if screen is not None:
        tokens.append((_screen_var, _screen_var.set(_coerce(screen))))
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


__all__ = ["log_context"]
