"""
Domain-split SQLAlchemy models with a single aggregator.

Exposes `Base`, `now_utc`, and all ORM classes.
"""

from .base import Base, now_utc  # re-export

# Domain models
from .replies import Reply
from .users import User, Role, Ban, Ignore, user_roles
from .activity import UserActivityLogItem

__all__ = [
    # base
    "Base",
    "now_utc",
    # replies
    "Reply",
    # users/roles
    "User",
    "Role",
    "Ban",
    "Ignore",
    "user_roles",
    # activity
    "UserActivityLogItem",
]
