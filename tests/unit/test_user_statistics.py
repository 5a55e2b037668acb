from datetime import datetime, timedelta, UTC

from boardcore.db import models, schemas
from boardcore.db.repositories import users as repo_users


def _seed_population(user_factory, db_session, now):
    """Six users spread across the windows; one of them banned."""
    user_factory("today", join_date=now - timedelta(hours=1), last_login=now - timedelta(minutes=5))
    user_factory("thisweek", join_date=now - timedelta(days=3), last_login=now - timedelta(days=2))
    user_factory("thismonth", join_date=now - timedelta(days=20), last_login=now - timedelta(days=10))
    user_factory("thisyear", join_date=now - timedelta(days=200), last_login=now - timedelta(days=100))
    user_factory("lurker", join_date=now - timedelta(days=400))
    user_factory("ancient", join_date=now - timedelta(days=800), last_login=now - timedelta(days=400))
    db_session.add(models.Ban(username="lurker", reason="spam", start_date=now - timedelta(days=30)))
    db_session.commit()


def test_statistics_match_hand_computed_counts(db_session, user_factory, now):
    _seed_population(user_factory, db_session, now)

    stats = repo_users.get_user_statistics(db_session, now=now)

    assert isinstance(stats, schemas.UserStats)
    assert stats.total_banned_users == 1
    assert stats.logged_in_last_24_hours == 1
    assert stats.logged_in_last_week == 2
    assert stats.logged_in_last_month == 3
    assert stats.logged_in_last_year == 4
    assert stats.new_users_last_24_hours == 1
    assert stats.new_users_last_week == 2
    assert stats.new_users_last_month == 3
    assert stats.new_users_last_year == 4
    assert stats.total_registered_users == 6
    assert stats.generated_at == now


def test_statistics_windows_are_inclusive_and_calendar_based(db_session, user_factory):
    # One calendar month before March 31 is February 28 (2026 is not a leap year)
    now = datetime(2026, 3, 31, 12, 0, tzinfo=UTC)
    user_factory("edge_month", join_date=datetime(2026, 2, 28, 12, 0, tzinfo=UTC))
    user_factory("past_month", join_date=datetime(2026, 2, 28, 11, 59, tzinfo=UTC))
    user_factory("edge_year", join_date=datetime(2025, 3, 31, 12, 0, tzinfo=UTC))
    user_factory("edge_day", join_date=now - timedelta(hours=24))

    stats = repo_users.get_user_statistics(db_session, now=now)

    assert stats.new_users_last_24_hours == 1
    assert stats.new_users_last_week == 1
    assert stats.new_users_last_month == 2
    assert stats.new_users_last_year == 4
    assert stats.logged_in_last_year == 0


def test_statistics_on_empty_store(db_session, now):
    stats = repo_users.get_user_statistics(db_session, now=now)
    counters = stats.model_dump(exclude={"generated_at"})
    assert set(counters.values()) == {0}
    assert len(counters) == 10


def test_statistics_capture_now_when_not_given(db_session, user_factory):
    user_factory("fresh", join_date=datetime.now(UTC))
    stats = repo_users.get_user_statistics(db_session)
    assert stats.new_users_last_24_hours == 1
    assert stats.generated_at.tzinfo is not None
