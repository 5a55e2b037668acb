from typing import Generic, List, TypeVar
from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class CollectionPage(BaseModel, Generic[T]):
    """One window of an ordered result set."""

    items: List[T]
    total_items: int = Field(ge=0)
    # Never zero, even for an empty result set
    total_pages: int = Field(ge=1)
    page: int = Field(default=1, ge=1)
    model_config = ConfigDict(arbitrary_types_allowed=True)
