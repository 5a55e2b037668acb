"""
Repository error taxonomy.

Single-match lookups (role by name, ignore pair, ban by username, stored
username) raise NotFoundError or AmbiguousMatchError; a failed commit raises
StorageFailure. Plain get_* lookups return None instead of raising.
"""
from __future__ import annotations

from typing import Optional


class RepositoryError(Exception):
    """Base exception for all repository failures."""

    code = "REPOSITORY_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SingleMatchError(RepositoryError):
    """A lookup that requires exactly one match did not get one."""

    def __init__(self, message: str, kind: str, key):
        super().__init__(message)
        self.kind = kind
        self.key = key


class NotFoundError(SingleMatchError):
    code = "NOT_FOUND"

    def __init__(self, kind: str, key):
        super().__init__(f"{kind} {key!r} not found", kind, key)


class AmbiguousMatchError(SingleMatchError):
    code = "AMBIGUOUS_MATCH"

    def __init__(self, kind: str, key, count: Optional[int] = None):
        detail = f"{count} matches" if count is not None else "multiple matches"
        super().__init__(f"{kind} {key!r} is ambiguous ({detail})", kind, key)
        self.count = count


class StorageFailure(RepositoryError):
    """The store failed to make staged changes durable."""

    code = "STORAGE_FAILURE"

    def __init__(self, operation: str, detail: str):
        super().__init__(f"Commit failed during {operation}: {detail}")
        self.operation = operation
        self.detail = detail
