"""Trailing time-window helpers anchored on a fixed reference instant."""

from __future__ import annotations

import calendar
from datetime import datetime, timedelta, UTC
from typing import Optional

from boardcore.db.models.base import now_utc


def as_utc(moment: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken to be UTC already."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def reference_instant(now: Optional[datetime] = None) -> datetime:
    """Capture the instant a whole call should measure its windows against."""
    return as_utc(now) if now is not None else now_utc()


def shift_months(moment: datetime, months: int) -> datetime:
    """Move a datetime by whole calendar months, clamping the day to the month length."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def one_day_before(now: datetime) -> datetime:
    return now - timedelta(hours=24)


def one_week_before(now: datetime) -> datetime:
    return now - timedelta(days=7)


def one_month_before(now: datetime) -> datetime:
    return shift_months(now, -1)


def one_year_before(now: datetime) -> datetime:
    return shift_months(now, -12)
