from datetime import datetime, timedelta, timezone, UTC

import pytest

from boardcore.utils import time_windows


@pytest.mark.parametrize(
    "start,months,expected",
    [
        (datetime(2026, 3, 31, 12, 0), -1, datetime(2026, 2, 28, 12, 0)),
        (datetime(2024, 3, 31, 12, 0), -1, datetime(2024, 2, 29, 12, 0)),
        (datetime(2026, 1, 15, 8, 30), -1, datetime(2025, 12, 15, 8, 30)),
        (datetime(2024, 2, 29, 0, 0), -12, datetime(2023, 2, 28, 0, 0)),
        (datetime(2025, 10, 31), 1, datetime(2025, 11, 30)),
        (datetime(2025, 6, 10), 0, datetime(2025, 6, 10)),
    ],
)
def test_shift_months_clamps_day(start, months, expected):
    assert time_windows.shift_months(start, months) == expected


def test_window_boundaries(now):
    assert time_windows.one_day_before(now) == now - timedelta(hours=24)
    assert time_windows.one_week_before(now) == now - timedelta(days=7)
    assert time_windows.one_month_before(now) == datetime(2026, 2, 28, 12, 0, tzinfo=UTC)
    assert time_windows.one_year_before(now) == datetime(2025, 3, 31, 12, 0, tzinfo=UTC)


def test_reference_instant_normalizes_to_utc():
    naive = datetime(2026, 1, 1, 9, 0)
    assert time_windows.reference_instant(naive) == datetime(2026, 1, 1, 9, 0, tzinfo=UTC)

    plus_two = datetime(2026, 1, 1, 11, 0, tzinfo=timezone(timedelta(hours=2)))
    converted = time_windows.reference_instant(plus_two)
    assert converted.utcoffset() == timedelta(0)
    assert converted.hour == 9


def test_reference_instant_defaults_to_current_time():
    before = datetime.now(UTC)
    captured = time_windows.reference_instant()
    assert before <= captured <= datetime.now(UTC)
