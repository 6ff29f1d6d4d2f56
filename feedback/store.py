"""App-store detection contract and the rating-button gate."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

import config

logger = logging.getLogger(__name__)


@runtime_checkable
class StoreDetector(Protocol):
    """Answers whether the store app exists and whether it installed us."""

    def is_store_installed(self) -> bool: ...

    def was_installed_from_store(self) -> bool: ...


class ConfiguredStoreDetector:
    """Store detector backed by ``FEEDBACK_STORE_INSTALLED`` settings.

    Useful for hosts that have no real store to query, e.g. desktop or web
    builds where packaging decides whether a rating link makes sense.
    """

    def is_store_installed(self) -> bool:
        return config.is_store_installed()

    def was_installed_from_store(self) -> bool:
        return config.was_installed_from_store()


def can_show_ratings_button(detector: StoreDetector, *, debug_build: bool) -> bool:
    """Return ``True`` when the host may offer a store rating button.

    Args:
        detector: Source of the two store signals.
        debug_build: Whether the process is a debug build. Debug builds are
            treated as store installs so the rating screen can be exercised
            manually.

    Returns:
        ``False`` without a store, ``True`` for store installs, otherwise
        ``debug_build``.
    """

    if not detector.is_store_installed():
        logger.info("App store not installed")
        return False

    if detector.was_installed_from_store():
        return True

    if debug_build:
        logger.info("Not installed from the app store but this is a debug build; treating it as a store install")
        return True

    return False


__all__ = ["ConfiguredStoreDetector", "StoreDetector", "can_show_ratings_button"]
