"""In-app feedback wizard: screen navigation, rating gate and submission."""

from __future__ import annotations

from feedback.controller import FeedbackFlowController
from feedback.dispatch import InlineDispatcher, SubmissionDispatcher, get_default_dispatcher
from feedback.errors import FeedbackError, SubmissionError
from feedback.screens import (
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
)
from feedback.store import ConfiguredStoreDetector, StoreDetector, can_show_ratings_button
from feedback.submitter import FeedbackPayload, HttpFeedbackSubmitter, Submitter
from feedback.types import (
    CustomizationSubReason,
    MainReason,
    MissingBrowserFeaturesSubReason,
    PerformanceSubReason,
    SearchNotGoodEnoughSubReason,
    SubReason,
    has_sub_reasons,
    sub_reasons_for,
)

__all__ = [
    "ConfiguredStoreDetector",
    "CustomizationSubReason",
    "ExitSignal",
    "FeedbackError",
    "FeedbackFlowController",
    "FeedbackPayload",
    "HttpFeedbackSubmitter",
    "InitialClarifier",
    "InlineDispatcher",
    "MainReason",
    "MissingBrowserFeaturesSubReason",
    "NegativeMainReason",
    "NegativeOpenEnded",
    "NegativeSitesBroken",
    "NegativeSubReason",
    "PerformanceSubReason",
    "PositiveShare",
    "PositiveStep1",
    "ScreenState",
    "SearchNotGoodEnoughSubReason",
    "StoreDetector",
    "SubReason",
    "SubmissionDispatcher",
    "SubmissionError",
    "Submitter",
    "ViewState",
    "can_show_ratings_button",
    "get_default_dispatcher",
    "has_sub_reasons",
    "sub_reasons_for",
]
