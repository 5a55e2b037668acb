"""
Storage boundary for the repositories.

The repositories only need add/delete/query/commit/rollback from the store.
A SQLAlchemy ``Session`` satisfies ``EntityStore`` structurally: production
passes a PostgreSQL-backed session, tests pass an in-memory SQLite one.
"""
from __future__ import annotations

import logging
from typing import Any, Protocol

from sqlalchemy.exc import NoResultFound, MultipleResultsFound, SQLAlchemyError

from boardcore.db.errors import AmbiguousMatchError, NotFoundError, StorageFailure

logger = logging.getLogger(__name__)


class EntityStore(Protocol):
    """Contract the repositories rely on."""

    def add(self, instance: object) -> None: ...
    def delete(self, instance: object) -> None: ...
    def query(self, *entities: Any, **kwargs: Any) -> Any: ...
    def commit(self) -> None: ...
    def rollback(self) -> None: ...
    def __contains__(self, instance: object) -> bool: ...


def commit_changes(db: EntityStore, operation: str) -> None:
    """Commit staged changes; roll back and raise StorageFailure if the store refuses."""
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("storage_failure: operation=%s error=%s", operation, exc)
        raise StorageFailure(operation, str(exc)) from exc


def single_match(query, kind: str, key):
    """Return the only row of ``query``; fail loudly on zero or several matches."""
    try:
        return query.one()
    except NoResultFound:
        raise NotFoundError(kind, key) from None
    except MultipleResultsFound:
        raise AmbiguousMatchError(kind, key, query.count()) from None
