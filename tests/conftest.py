from pathlib import Path
import sys
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Any

import streamlit as st

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import config
from feedback import FeedbackFlowController, InlineDispatcher

_FEEDBACK_ENV_VARS = (
    "FEEDBACK_DEBUG_BUILD",
    "FEEDBACK_ENDPOINT",
    "FEEDBACK_TIMEOUT_SECONDS",
    "FEEDBACK_SUBMIT_WORKERS",
    "FEEDBACK_PLATFORM",
    "FEEDBACK_APP_VERSION",
    "FEEDBACK_STORE_INSTALLED",
    "FEEDBACK_INSTALLED_FROM_STORE",
)


@dataclass
class _SessionDict(dict[str, object]):
    """Lightweight replacement for ``st.session_state`` during tests."""

    def clear(self) -> None:  # type: ignore[override]
        super().clear()


@pytest.fixture(autouse=True)
def _stub_streamlit_session_state(monkeypatch: pytest.MonkeyPatch) -> None:
    """Replace Streamlit's runtime-bound session state with a plain dictionary."""

    session_state = _SessionDict()
    monkeypatch.setattr(st, "session_state", session_state, raising=False)
    yield


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Hide Streamlit secrets and any ``FEEDBACK_*`` variables from the host."""

    monkeypatch.setattr(config, "st", SimpleNamespace(secrets={}), raising=False)
    for name in _FEEDBACK_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@dataclass
class FakeStoreDetector:
    installed: bool = True
    from_store: bool = True
    calls: int = 0

    def is_store_installed(self) -> bool:
        self.calls += 1
        return self.installed

    def was_installed_from_store(self) -> bool:
        return self.from_store


@dataclass
class RecordingSubmitter:
    calls: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)

    def send_negative_feedback(self, main_reason, sub_reason, feedback) -> None:
        self.calls.append(("send_negative_feedback", (main_reason, sub_reason, feedback)))

    def send_broken_site_feedback(self, feedback, broken_site) -> None:
        self.calls.append(("send_broken_site_feedback", (feedback, broken_site)))

    def send_positive_feedback(self, feedback) -> None:
        self.calls.append(("send_positive_feedback", (feedback,)))

    def send_user_rated(self) -> None:
        self.calls.append(("send_user_rated", ()))


@pytest.fixture
def store_detector() -> FakeStoreDetector:
    return FakeStoreDetector()


@pytest.fixture
def submitter() -> RecordingSubmitter:
    return RecordingSubmitter()


@pytest.fixture
def make_controller(store_detector: FakeStoreDetector, submitter: RecordingSubmitter):
    """Build controllers wired to the fakes and an inline dispatcher."""

    def _factory(**overrides: Any) -> FeedbackFlowController:
        options: dict[str, Any] = {
            "store_detector": store_detector,
            "submitter": submitter,
            "dispatcher": InlineDispatcher(),
            "debug_build": False,
        }
        options.update(overrides)
        return FeedbackFlowController(**options)

    return _factory


@pytest.fixture
def controller(make_controller) -> FeedbackFlowController:
    return make_controller()
