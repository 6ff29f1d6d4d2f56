from types import SimpleNamespace

import pytest

import config


@pytest.fixture(autouse=True)
def reset_missing_flag(monkeypatch):
    monkeypatch.setattr(config, "_missing_endpoint_logged", False, raising=False)
    yield


def test_endpoint_resolution_order(monkeypatch, caplog):
    fake_secrets: dict[str, object] = {"FEEDBACK_ENDPOINT": "https://secret.example.com"}
    monkeypatch.setattr(config, "st", SimpleNamespace(secrets=fake_secrets), raising=False)
    monkeypatch.setenv("FEEDBACK_ENDPOINT", "https://env.example.com")

    # Direct Streamlit secret wins over environment variables.
    assert config.get_feedback_endpoint() == "https://secret.example.com"

    # The ``feedback`` section is used when the top-level key is missing.
    fake_secrets.pop("FEEDBACK_ENDPOINT")
    fake_secrets["feedback"] = {"FEEDBACK_ENDPOINT": "https://section.example.com"}
    assert config.get_feedback_endpoint() == "https://section.example.com"

    # Environment variable is the final fallback.
    fake_secrets["feedback"].pop("FEEDBACK_ENDPOINT")  # type: ignore[union-attr]
    assert config.get_feedback_endpoint() == "https://env.example.com"

    # Without any endpoint a single info log is emitted.
    monkeypatch.delenv("FEEDBACK_ENDPOINT", raising=False)
    caplog.clear()
    with caplog.at_level("INFO"):
        assert config.get_feedback_endpoint() == ""
    assert "submissions will be dropped" in caplog.text

    caplog.clear()
    assert config.get_feedback_endpoint() == ""
    assert caplog.text == ""


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("true", True), (" YES ", True), ("on", True), ("0", False), ("", False), ("debug", False)],
)
def test_debug_build_flag(monkeypatch, raw, expected):
    monkeypatch.setenv("FEEDBACK_DEBUG_BUILD", raw)

    assert config.is_debug_build() is expected


def test_debug_build_defaults_to_release():
    assert config.is_debug_build() is False


def test_debug_build_accepts_boolean_secret(monkeypatch):
    monkeypatch.setattr(config, "st", SimpleNamespace(secrets={"FEEDBACK_DEBUG_BUILD": True}), raising=False)

    assert config.is_debug_build() is True


def test_timeout_parsing(monkeypatch):
    assert config.get_request_timeout() == config.DEFAULT_TIMEOUT_SECONDS

    monkeypatch.setenv("FEEDBACK_TIMEOUT_SECONDS", "4.5")
    assert config.get_request_timeout() == 4

    monkeypatch.setenv("FEEDBACK_TIMEOUT_SECONDS", "-3")
    assert config.get_request_timeout() == config.DEFAULT_TIMEOUT_SECONDS


def test_invalid_worker_count_warns(monkeypatch):
    monkeypatch.setenv("FEEDBACK_SUBMIT_WORKERS", "many")

    with pytest.warns(RuntimeWarning):
        assert config.get_submit_workers() == config.DEFAULT_SUBMIT_WORKERS


def test_platform_and_version_defaults(monkeypatch):
    assert config.get_platform() == "python"
    assert config.get_app_version() == config.DEFAULT_APP_VERSION

    monkeypatch.setenv("FEEDBACK_APP_VERSION", "2.3.1")
    assert config.get_app_version() == "2.3.1"
