"""
User repository functions.

Implements user CRUD, case-insensitive identity lookups, presence and
statistics windows, role grants, ignore lists, bans and offense history.

Username comparisons are case-insensitive everywhere; stored casing is
never rewritten by a lookup.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import func

from boardcore.db import models, schemas
from boardcore.db.store import EntityStore, commit_changes, single_match
from boardcore.utils import time_windows
from boardcore.utils.settings import get_settings

logger = logging.getLogger(__name__)

STAFF_ROLE_NAMES = ("moderator", "administrator")
OFFENSE_TYPES = ("warning", "ban")


def _same_name(column, value: str):
    return func.lower(column) == func.lower(value)


# Users
def add_user(db: EntityStore, user: models.User, *, commit: bool = True) -> models.User:
    db.add(user)
    if commit:
        commit_changes(db, "add_user")
    return user


def update_user(db: EntityStore, user: models.User, *, commit: bool = True) -> models.User:
    """Persist field changes already made on a tracked user."""
    if user not in db:
        logger.warning("update_user_untracked: username=%s is not tracked; nothing persisted", user.username)
        return user
    if commit:
        commit_changes(db, "update_user")
    return user


def delete_user(db: EntityStore, user: models.User, *, commit: bool = False) -> None:
    """Stage removal of a user; durable only once committed."""
    username = user.username
    db.delete(user)
    if commit:
        commit_changes(db, "delete_user")
    logger.info("user_deleted: username=%s committed=%s", username, commit)


def get_user(db: EntityStore, username: str) -> Optional[models.User]:
    return db.query(models.User).filter(_same_name(models.User.username, username)).first()


def check_user_exists(db: EntityStore, username: str) -> bool:
    q = db.query(models.User.id).filter(_same_name(models.User.username, username))
    return bool(db.query(q.exists()).scalar())


def get_stored_username(db: EntityStore, username: str) -> str:
    """Return the username exactly as stored for a case-insensitive match."""
    user = single_match(
        db.query(models.User).filter(_same_name(models.User.username, username)),
        "user",
        username,
    )
    return user.username


def get_logged_in_users(
    db: EntityStore,
    *,
    now: Optional[datetime] = None,
    window_minutes: Optional[int] = None,
) -> List[models.User]:
    """Users whose last login falls inside the trailing presence window."""
    now = time_windows.reference_instant(now)
    if window_minutes is None:
        window_minutes = get_settings().presence_window_minutes
    cutoff = now - timedelta(minutes=window_minutes)
    return (
        db.query(models.User)
        .filter(models.User.last_login > cutoff)
        .order_by(func.lower(models.User.username), models.User.username)
        .all()
    )


# Roles
def add_role_to_user(db: EntityStore, user: models.User, role_name: str, *, commit: bool = False) -> models.Role:
    """Associate the role named ``role_name`` (any casing) with ``user``."""
    role = single_match(
        db.query(models.Role).filter(_same_name(models.Role.name, role_name)),
        "role",
        role_name,
    )
    if role not in user.roles:
        user.roles.append(role)
        logger.info("role_granted: username=%s role=%s committed=%s", user.username, role.name, commit)
    if commit:
        commit_changes(db, "add_role_to_user")
    return role


def get_moderators_and_administrators(db: EntityStore) -> List[models.User]:
    return (
        db.query(models.User)
        .filter(models.User.roles.any(func.lower(models.Role.name).in_(STAFF_ROLE_NAMES)))
        .order_by(func.lower(models.User.username), models.User.username)
        .all()
    )


# Statistics
def get_user_statistics(db: EntityStore, *, now: Optional[datetime] = None) -> schemas.UserStats:
    """Count users across the 24h/week/month/year windows.

    All windows hang off one reference instant captured at the start of the
    call, so the counters are mutually consistent.
    """
    now = time_windows.reference_instant(now)
    one_day_ago = time_windows.one_day_before(now)
    one_week_ago = time_windows.one_week_before(now)
    one_month_ago = time_windows.one_month_before(now)
    one_year_ago = time_windows.one_year_before(now)

    users = db.query(models.User)
    last_login = models.User.last_login
    join_date = models.User.join_date

    return schemas.UserStats(
        total_banned_users=users.filter(models.User.ban.has()).count(),
        logged_in_last_24_hours=users.filter(last_login >= one_day_ago).count(),
        logged_in_last_week=users.filter(last_login >= one_week_ago).count(),
        logged_in_last_month=users.filter(last_login >= one_month_ago).count(),
        logged_in_last_year=users.filter(last_login >= one_year_ago).count(),
        new_users_last_24_hours=users.filter(join_date >= one_day_ago).count(),
        new_users_last_week=users.filter(join_date >= one_week_ago).count(),
        new_users_last_month=users.filter(join_date >= one_month_ago).count(),
        new_users_last_year=users.filter(join_date >= one_year_ago).count(),
        total_registered_users=users.count(),
        generated_at=now,
    )


# Ignores
def ignore_user(
    db: EntityStore, initiating_username: str, ignored_username: str, *, commit: bool = False
) -> models.Ignore:
    """Record that one user ignores another. Duplicates are not checked."""
    ignore = models.Ignore(initiating_user=initiating_username, ignored_user=ignored_username)
    db.add(ignore)
    if commit:
        commit_changes(db, "ignore_user")
    return ignore


def _ignore_pair(db: EntityStore, initiating_username: str, ignored_username: str):
    return db.query(models.Ignore).filter(
        _same_name(models.Ignore.initiating_user, initiating_username),
        _same_name(models.Ignore.ignored_user, ignored_username),
    )


def unignore_user(
    db: EntityStore, initiating_username: str, ignored_username: str, *, commit: bool = False
) -> None:
    ignore = single_match(
        _ignore_pair(db, initiating_username, ignored_username),
        "ignore",
        (initiating_username, ignored_username),
    )
    db.delete(ignore)
    if commit:
        commit_changes(db, "unignore_user")


def is_ignoring(db: EntityStore, initiating_username: str, ignored_username: str) -> bool:
    return bool(db.query(_ignore_pair(db, initiating_username, ignored_username).exists()).scalar())


def get_ignored_usernames(db: EntityStore, initiating_username: str) -> List[str]:
    rows = (
        db.query(models.Ignore.ignored_user)
        .filter(_same_name(models.Ignore.initiating_user, initiating_username))
        .order_by(func.lower(models.Ignore.ignored_user))
        .all()
    )
    return [row.ignored_user for row in rows]


# Bans
def ban_user(db: EntityStore, ban: models.Ban, *, commit: bool = True) -> models.Ban:
    """Record a ban against the user's stored spelling of ``ban.username``."""
    ban.username = get_stored_username(db, ban.username)
    db.add(ban)
    if commit:
        commit_changes(db, "ban_user")
    logger.info("user_banned: username=%s creator=%s", ban.username, ban.creator)
    return ban


def get_ban(db: EntityStore, username: str) -> Optional[models.Ban]:
    return db.query(models.Ban).filter(_same_name(models.Ban.username, username)).first()


def unban_user(db: EntityStore, username: str, *, commit: bool = False) -> None:
    ban = single_match(
        db.query(models.Ban).filter(_same_name(models.Ban.username, username)),
        "ban",
        username,
    )
    db.delete(ban)
    if commit:
        commit_changes(db, "unban_user")
    logger.info("user_unbanned: username=%s committed=%s", username, commit)


# Activity log
def add_activity_log_item(
    db: EntityStore, item: models.UserActivityLogItem, *, commit: bool = True
) -> models.UserActivityLogItem:
    db.add(item)
    if commit:
        commit_changes(db, "add_activity_log_item")
    return item


def get_offense_history(db: EntityStore, username: str) -> List[models.UserActivityLogItem]:
    """Warnings and bans logged against ``username``, oldest first."""
    return (
        db.query(models.UserActivityLogItem)
        .filter(
            _same_name(models.UserActivityLogItem.username, username),
            func.lower(models.UserActivityLogItem.type).in_(OFFENSE_TYPES),
        )
        .order_by(models.UserActivityLogItem.timestamp.asc(), models.UserActivityLogItem.id.asc())
        .all()
    )
