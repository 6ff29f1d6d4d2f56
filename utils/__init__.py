"""Utility helpers for the feedback flow."""

from __future__ import annotations

from .logging_context import log_context as log_context
