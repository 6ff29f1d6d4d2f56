"""Central configuration for the feedback flow.

Values are resolved from Streamlit secrets first and from environment
variables second, so a deployment can ship a ``secrets.toml`` while local runs
rely on ``.env``. Every accessor reads the sources on call; nothing is cached,
which keeps the build-mode flag and the store answers stable for the lifetime
of the process unless the environment itself changes.

``FEEDBACK_DEBUG_BUILD`` marks a debug build. Debug builds show the store
rating button even when the app was side-loaded.
"""

import logging
import os
import warnings
from typing import Mapping

import streamlit as st

try:
    from dotenv import load_dotenv

    load_dotenv()
except ImportError:
    pass


logger = logging.getLogger(__name__)


_TRUTHY_ENV_VALUES: tuple[str, ...] = ("1", "true", "yes", "on")

DEFAULT_TIMEOUT_SECONDS = 10
DEFAULT_SUBMIT_WORKERS = 2
DEFAULT_PLATFORM = "python"
DEFAULT_APP_VERSION = "1.0.0"

_missing_endpoint_logged = False


def _is_truthy_flag(value: object | None) -> bool:
    """Return ``True`` when ``value`` matches a truthy environment token."""

    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY_ENV_VALUES


def _parse_positive_int_env(value: object | None, *, env_var: str) -> int | None:
    """Return a positive integer parsed from ``value`` or ``None``."""

    if value is None:
        return None
    if isinstance(value, str):
        candidate = value.strip()
        if not candidate:
            return None
        try:
            parsed = int(float(candidate))
        except ValueError:
            warnings.warn(
                "%s is not a number; ignoring %s" % (candidate, env_var),
                RuntimeWarning,
            )
            return None
    elif isinstance(value, (int, float)):
        parsed = int(value)
    else:
        warnings.warn(
            "Unsupported %s value '%s'; using the default." % (env_var, value),
            RuntimeWarning,
        )
        return None
    if parsed <= 0:
        return None
    return parsed


def _coerce_secret_value(value: object | None) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _read_setting(name: str) -> object | None:
    """Return ``name`` from Streamlit secrets, the ``feedback`` section or the env."""

    try:
        direct = st.secrets[name]
    except Exception:
        direct = None
    if direct is not None:
        return direct

    try:
        section = st.secrets["feedback"]
    except Exception:
        section = None
    if isinstance(section, Mapping) and section.get(name) is not None:
        return section.get(name)

    return os.getenv(name)


def is_debug_build() -> bool:
    """Return ``True`` when the process runs as a debug build."""

    return _is_truthy_flag(_read_setting("FEEDBACK_DEBUG_BUILD"))


def get_feedback_endpoint() -> str:
    """Return the URL feedback payloads are posted to, or ``""`` when unset."""

    global _missing_endpoint_logged

    endpoint = _coerce_secret_value(_read_setting("FEEDBACK_ENDPOINT"))
    if endpoint:
        _missing_endpoint_logged = False
        return endpoint

    if not _missing_endpoint_logged:
        logger.info("FEEDBACK_ENDPOINT not configured; feedback submissions will be dropped.")
        _missing_endpoint_logged = True
    return ""


def get_request_timeout() -> int:
    parsed = _parse_positive_int_env(
        _read_setting("FEEDBACK_TIMEOUT_SECONDS"),
        env_var="FEEDBACK_TIMEOUT_SECONDS",
    )
    return parsed or DEFAULT_TIMEOUT_SECONDS


def get_submit_workers() -> int:
    parsed = _parse_positive_int_env(
        _read_setting("FEEDBACK_SUBMIT_WORKERS"),
        env_var="FEEDBACK_SUBMIT_WORKERS",
    )
    return parsed or DEFAULT_SUBMIT_WORKERS


def get_platform() -> str:
    return _coerce_secret_value(_read_setting("FEEDBACK_PLATFORM")) or DEFAULT_PLATFORM


def get_app_version() -> str:
    return _coerce_secret_value(_read_setting("FEEDBACK_APP_VERSION")) or DEFAULT_APP_VERSION


def is_store_installed() -> bool:
    return _is_truthy_flag(_read_setting("FEEDBACK_STORE_INSTALLED"))


def was_installed_from_store() -> bool:
    return _is_truthy_flag(_read_setting("FEEDBACK_INSTALLED_FROM_STORE"))


__all__ = [
    "DEFAULT_APP_VERSION",
    "DEFAULT_PLATFORM",
    "DEFAULT_SUBMIT_WORKERS",
    "DEFAULT_TIMEOUT_SECONDS",
    "get_app_version",
    "get_feedback_endpoint",
    "get_platform",
    "get_request_timeout",
    "get_submit_workers",
    "is_debug_build",
    "is_store_installed",
    "was_installed_from_store",
]
