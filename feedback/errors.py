"""Exception types used inside feedback submission."""

from __future__ import annotations


class FeedbackError(Exception):
    """Base exception for feedback related issues."""


class SubmissionError(FeedbackError):
    """Raised by the transport when a payload could not be delivered.

    Submitters catch it themselves; it never reaches the flow controller.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
