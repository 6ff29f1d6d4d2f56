"""Reason taxonomy used by the negative feedback branch."""

from __future__ import annotations

from enum import StrEnum
from typing import Mapping, TypeAlias


class MainReason(StrEnum):
    """Top-level reason a user picks when the app is not working for them."""

    MISSING_BROWSING_FEATURES = "missing_browsing_features"
    WEBSITES_NOT_LOADING = "websites_not_loading"
    SEARCH_NOT_GOOD_ENOUGH = "search_not_good_enough"
    NOT_ENOUGH_CUSTOMIZATIONS = "not_enough_customizations"
    APP_IS_SLOW_OR_BUGGY = "app_is_slow_or_buggy"
    OTHER = "other"


class MissingBrowserFeaturesSubReason(StrEnum):
    NAVIGATION_ISSUES = "navigation_issues"
    TAB_MANAGEMENT = "tab_management"
    AD_POPUP_BLOCKING = "ad_popup_blocking"
    WATCHING_VIDEOS = "watching_videos"
    INTERACTING_IMAGES = "interacting_images"
    BOOKMARK_MANAGEMENT = "bookmark_management"
    OTHER = "other"


class SearchNotGoodEnoughSubReason(StrEnum):
    PROGRAMMING_TECHNICAL_SEARCHES = "programming_technical_searches"
    LAYOUT_MORE_LIKE_GOOGLE = "layout_more_like_google"
    FASTER_LOAD_TIME = "faster_load_time"
    SEARCHING_IN_SPECIFIC_LANGUAGE = "searching_in_specific_language"
    BETTER_AUTOCOMPLETE = "better_autocomplete"
    OTHER = "other"


class CustomizationSubReason(StrEnum):
    HOME_SCREEN_CONFIGURATION = "home_screen_configuration"
    TAB_DISPLAY = "tab_display"
    HOW_APP_LOOKS = "how_app_looks"
    WHICH_DATA_IS_CLEARED = "which_data_is_cleared"
    WHEN_DATA_IS_CLEARED = "when_data_is_cleared"
    BOOKMARK_DISPLAY = "bookmark_display"
    OTHER = "other"


class PerformanceSubReason(StrEnum):
    SLOW_WEB_PAGE_LOADS = "slow_web_page_loads"
    APP_CRASHES_OR_FREEZES = "app_crashes_or_freezes"
    MEDIA_PLAYBACK = "media_playback"
    OTHER = "other"


SubReason: TypeAlias = (
    MissingBrowserFeaturesSubReason
    | SearchNotGoodEnoughSubReason
    | CustomizationSubReason
    | PerformanceSubReason
)

# ``WEBSITES_NOT_LOADING`` and ``OTHER`` skip the sub-reason screen entirely.
SUB_REASONS: Mapping[MainReason, type[StrEnum]] = {
    MainReason.MISSING_BROWSING_FEATURES: MissingBrowserFeaturesSubReason,
    MainReason.SEARCH_NOT_GOOD_ENOUGH: SearchNotGoodEnoughSubReason,
    MainReason.NOT_ENOUGH_CUSTOMIZATIONS: CustomizationSubReason,
    MainReason.APP_IS_SLOW_OR_BUGGY: PerformanceSubReason,
}


def has_sub_reasons(main_reason: MainReason) -> bool:
    """Return ``True`` when ``main_reason`` leads to a sub-reason screen."""

    return main_reason in SUB_REASONS


def sub_reasons_for(main_reason: MainReason) -> tuple[SubReason, ...]:
    """Return the selectable sub-reasons for ``main_reason`` in display order."""

    options = SUB_REASONS.get(main_reason)
    if options is None:
        return ()
    return tuple(options)  # type: ignore[arg-type]


__all__ = [
    "CustomizationSubReason",
    "MainReason",
    "MissingBrowserFeaturesSubReason",
    "PerformanceSubReason",
    "SUB_REASONS",
    "SearchNotGoodEnoughSubReason",
    "SubReason",
    "has_sub_reasons",
    "sub_reasons_for",
]
