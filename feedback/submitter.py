"""Submission contract and the HTTP transport for collected feedback."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any, Protocol, runtime_checkable

import requests
from pydantic import BaseModel, ConfigDict, field_validator

import config
from feedback.errors import SubmissionError
from feedback.types import MainReason, SubReason

logger = logging.getLogger(__name__)


@runtime_checkable
class Submitter(Protocol):
    """Transport for finished feedback; handles its own I/O failures."""

    def send_negative_feedback(self, main_reason: MainReason, sub_reason: SubReason | None, feedback: str) -> Any: ...

    def send_broken_site_feedback(self, feedback: str, broken_site: str | None) -> Any: ...

    def send_positive_feedback(self, feedback: str | None) -> Any: ...

    def send_user_rated(self) -> Any: ...


class FeedbackCategory(StrEnum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    BROKEN_SITE = "broken_site"
    RATED = "rated"


class FeedbackPayload(BaseModel):
    """JSON body posted to the feedback endpoint.

    Attributes:
        category: Which terminal screen produced the payload.
        reason: Main reason for negative feedback.
        sub_reason: Optional refinement of ``reason``.
        comment: Free text typed by the user; blank text is dropped.
        url: Broken site address, if the user gave one.
        platform: Host platform identifier.
        app_version: Version string of the host application.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    category: FeedbackCategory
    reason: MainReason | None = None
    sub_reason: str | None = None
    comment: str | None = None
    url: str | None = None
    platform: str
    app_version: str

    @field_validator("comment", "url", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_request_body(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class HttpFeedbackSubmitter:
    """Posts feedback payloads to ``FEEDBACK_ENDPOINT`` with ``requests``.

    Every ``send_*`` method returns ``True`` when the endpoint accepted the
    payload and ``False`` otherwise. Nothing is raised: the flow has already
    closed by the time a submission finishes, so failures are only logged.
    """

    def __init__(
        self,
        *,
        endpoint: str | None = None,
        timeout: int | None = None,
        platform: str | None = None,
        app_version: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._endpoint = endpoint if endpoint is not None else config.get_feedback_endpoint()
        self._timeout = timeout or config.get_request_timeout()
        self._platform = platform or config.get_platform()
        self._app_version = app_version or config.get_app_version()
        self._session = session or requests.Session()

    def _payload(self, category: FeedbackCategory, **fields: Any) -> FeedbackPayload:
        return FeedbackPayload(
            category=category,
            platform=self._platform,
            app_version=self._app_version,
            **fields,
        )

    def send_negative_feedback(self, main_reason: MainReason, sub_reason: SubReason | None, feedback: str) -> bool:
        payload = self._payload(
            FeedbackCategory.NEGATIVE,
            reason=main_reason,
            sub_reason=str(sub_reason) if sub_reason is not None else None,
            comment=feedback,
        )
        return self._send(payload)

    def send_broken_site_feedback(self, feedback: str, broken_site: str | None) -> bool:
        payload = self._payload(
            FeedbackCategory.BROKEN_SITE,
            reason=MainReason.WEBSITES_NOT_LOADING,
            comment=feedback,
            url=broken_site,
        )
        return self._send(payload)

    def send_positive_feedback(self, feedback: str | None) -> bool:
        return self._send(self._payload(FeedbackCategory.POSITIVE, comment=feedback))

    def send_user_rated(self) -> bool:
        return self._send(self._payload(FeedbackCategory.RATED))

    def _send(self, payload: FeedbackPayload) -> bool:
        if not self._endpoint:
            logger.info("Dropping %s feedback; no endpoint configured", payload.category)
            return False
        try:
            self._post(payload)
        except SubmissionError as exc:
            logger.warning(
                "Feedback endpoint rejected %s feedback (status=%s): %s",
                payload.category,
                exc.status_code,
                exc,
            )
            return False
        logger.info("Submitted %s feedback", payload.category)
        return True

    def _post(self, payload: FeedbackPayload) -> None:
        try:
            response = self._session.post(
                self._endpoint,
                json=payload.to_request_body(),
                timeout=self._timeout,
                headers={"Accept": "application/json"},
            )
        except requests.RequestException as exc:
            raise SubmissionError(f"request failed: {exc}") from exc
        if not response.ok:
            raise SubmissionError(response.reason or "unexpected response", status_code=response.status_code)


__all__ = [
    "FeedbackCategory",
    "FeedbackPayload",
    "HttpFeedbackSubmitter",
    "Submitter",
]
