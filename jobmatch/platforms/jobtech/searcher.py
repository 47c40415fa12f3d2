"""JobTech search parameter and header builders.

Pure functions with zero network dependency.
"""

import logging
from datetime import datetime, timedelta
from enum import Enum
from typing import Literal

logger = logging.getLogger(__name__)

SearchMode = Literal["AND", "OR"]


class PublishDateFilter(str, Enum):
    LAST_HOUR = "last-hour"
    TODAY = "today"
    LAST_7_DAYS = "last-7-days"
    LAST_30_DAYS = "last-30-days"
    NONE = "none"


class WorkTimeFilter(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"


# --- Mapping dicts (query concern) ---

WORKTIME_EXTENT_MAP: dict[WorkTimeFilter, str] = {
    WorkTimeFilter.FULL_TIME: "947z_JGS_Uk2",
    WorkTimeFilter.PART_TIME: "6YE1_gAC_R2G",
}

# Fixed feature negotiation headers; only the bool method follows ``mode``.
FEATURE_HEADERS: dict[str, str] = {
    "x-feature-disable-smart-freetext": "false",
    "x-feature-enable-false-negative": "true",
}


def publish_date_lower_bound(
    filter_: PublishDateFilter,
    now: datetime | None = None,
) -> datetime | None:
    """Translate a publish-date filter into an absolute lower bound.

    ``today`` truncates to local midnight; the others subtract a fixed
    span from ``now``. ``none`` yields None (no bound).
    """
    now = now or datetime.now()
    if filter_ is PublishDateFilter.LAST_HOUR:
        return now - timedelta(hours=1)
    if filter_ is PublishDateFilter.TODAY:
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if filter_ is PublishDateFilter.LAST_7_DAYS:
        return now - timedelta(days=7)
    if filter_ is PublishDateFilter.LAST_30_DAYS:
        return now - timedelta(days=30)
    return None


def format_instant(value: datetime) -> str:
    """ISO-8601 timestamp, second precision."""
    return value.isoformat(timespec="seconds")


def build_search_params(
    query: str,
    offset: int = 0,
    limit: int = 10,
    publish_date: PublishDateFilter = PublishDateFilter.NONE,
    work_time: WorkTimeFilter | None = None,
    now: datetime | None = None,
) -> dict[str, str]:
    """Build the ``/search`` query string parameters.

    ``published-after`` and ``worktime-extent`` are only sent when a
    filter is selected.
    """
    if offset < 0:
        msg = f"offset must be >= 0, got {offset}"
        raise ValueError(msg)
    if limit < 0:
        msg = f"limit must be >= 0, got {limit}"
        raise ValueError(msg)

    params: dict[str, str] = {
        "q": query,
        "offset": str(offset),
        "limit": str(limit),
    }

    lower_bound = publish_date_lower_bound(publish_date, now)
    if lower_bound is not None:
        params["published-after"] = format_instant(lower_bound)

    if work_time is not None:
        params["worktime-extent"] = WORKTIME_EXTENT_MAP[work_time]

    return params


def build_headers(mode: SearchMode = "OR", api_key: str | None = None) -> dict[str, str]:
    """Build the request headers, including the fixed feature toggles."""
    if mode not in ("AND", "OR"):
        msg = f"mode must be 'AND' or 'OR', got '{mode}'"
        raise ValueError(msg)

    headers = {
        "accept": "application/json",
        "x-feature-freetext-bool-method": mode.lower(),
        **FEATURE_HEADERS,
    }
    if api_key:
        headers["api-key"] = api_key
    return headers
