"""
Pydantic value objects returned by the repositories.
"""

from .pagination import CollectionPage
from .users import UserStats

__all__ = [
    "CollectionPage",
    "UserStats",
]
