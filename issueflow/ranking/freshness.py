"""Issue age helpers: days since creation, freshness level, relative time."""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from enum import Enum

SECONDS_PER_DAY = 86400

FRESH_THRESHOLD_DAYS = 7
MODERATE_THRESHOLD_DAYS = 30


class FreshnessLevel(Enum):
    """Coarse age buckets used for colouring results."""

    FRESH = "fresh"
    MODERATE = "moderate"
    STALE = "stale"


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a naive datetime; aware values are returned unchanged."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def days_since(created_at: datetime | None, now: datetime | None = None) -> float:
    """Whole days elapsed since *created_at* (floored).

    Future timestamps give negative values; None gives infinity. Naive
    datetimes are taken as UTC.
    """
    if created_at is None:
        return math.inf
    now = as_utc(now or utc_now())
    return math.floor((now - as_utc(created_at)).total_seconds() / SECONDS_PER_DAY)


def freshness_level(created_at: datetime | None, now: datetime | None = None) -> FreshnessLevel:
    """Classify an issue age: fresh (< 7 days), moderate (< 30 days), stale."""
    days = days_since(created_at, now)
    if days < FRESH_THRESHOLD_DAYS:
        return FreshnessLevel.FRESH
    if days < MODERATE_THRESHOLD_DAYS:
        return FreshnessLevel.MODERATE
    return FreshnessLevel.STALE


def _ago(count: int, unit: str) -> str:
    if count == 1 and unit in ("week", "month", "year"):
        return f"last {unit}"
    plural = "" if count == 1 else "s"
    return f"{count} {unit}{plural} ago"


def relative_time(created_at: datetime | None, now: datetime | None = None) -> str:
    """Human-readable age such as "Today", "Yesterday" or "3 weeks ago"."""
    if created_at is None:
        return "Unknown"
    now = as_utc(now or utc_now())
    created_at = as_utc(created_at)
    diff = now - created_at
    if diff < timedelta(0):
        return "In the future"

    today = now.astimezone(timezone.utc).date()
    calendar_days = (today - created_at.astimezone(timezone.utc).date()).days
    if calendar_days == 0:
        return "Today"
    if calendar_days == 1:
        return "Yesterday"

    seconds = diff.total_seconds()
    if diff < timedelta(hours=1):
        return _ago(int(seconds // 60), "minute")
    if diff < timedelta(days=1):
        return _ago(int(seconds // 3600), "hour")
    if diff < timedelta(days=7):
        return _ago(calendar_days, "day")
    if diff < timedelta(days=30):
        return _ago(diff.days // 7, "week")
    if diff < timedelta(days=365):
        return _ago(diff.days // 30, "month")
    return _ago(diff.days // 365, "year")
