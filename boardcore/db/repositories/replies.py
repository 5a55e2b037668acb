"""
Reply repository functions.

Implements reply create/read/update/delete and the paged, visibility-aware
listing of a topic's replies.
"""
from __future__ import annotations

import logging
from typing import Optional

from boardcore.db import models
from boardcore.db.pagination import fetch_page
from boardcore.db.schemas import CollectionPage
from boardcore.db.store import EntityStore, commit_changes
from boardcore.utils.settings import get_settings

logger = logging.getLogger(__name__)


def add_reply(db: EntityStore, reply: models.Reply, *, commit: bool = True) -> models.Reply:
    db.add(reply)
    if commit:
        commit_changes(db, "add_reply")
    return reply


def update_reply(db: EntityStore, reply: models.Reply, *, commit: bool = True) -> models.Reply:
    """Persist field changes already made on a tracked reply."""
    if reply not in db:
        logger.warning("update_reply_untracked: reply_id=%s is not tracked; nothing persisted", reply.id)
        return reply
    if commit:
        commit_changes(db, "update_reply")
    return reply


def delete_reply(db: EntityStore, reply: models.Reply, *, commit: bool = True) -> None:
    reply_id, topic_id = reply.id, reply.topic_id
    db.delete(reply)
    if commit:
        commit_changes(db, "delete_reply")
    logger.info("reply_deleted: reply_id=%s topic_id=%s", reply_id, topic_id)


def get_reply(db: EntityStore, reply_id: int) -> Optional[models.Reply]:
    return db.query(models.Reply).filter(models.Reply.id == reply_id).first()


def _topic_replies(db: EntityStore, topic_id: int, is_moderator: bool):
    q = db.query(models.Reply).filter(models.Reply.topic_id == topic_id)
    if not is_moderator:
        q = q.filter(models.Reply.mods_only.is_(False))
    return q


def get_reply_count(db: EntityStore, topic_id: int, is_moderator: bool = False) -> int:
    return _topic_replies(db, topic_id, is_moderator).count()


def get_replies(
    db: EntityStore,
    topic_id: int,
    page: int = 1,
    items_per_page: Optional[int] = None,
    is_moderator: bool = False,
) -> CollectionPage[models.Reply]:
    """Page through a topic's replies, oldest first.

    Moderator-only replies are hidden unless ``is_moderator`` is set. Pages
    outside [1, total_pages] are clamped to the nearest valid page.
    """
    if items_per_page is None:
        items_per_page = get_settings().default_items_per_page
    q = _topic_replies(db, topic_id, is_moderator)
    total_replies = q.count()
    q = q.order_by(models.Reply.posted_date.asc(), models.Reply.id.asc())
    return fetch_page(q, page, items_per_page, total_replies)
