"""Generic paginated response envelope."""

from typing import Generic, List, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    data: List[T]
    total: int
    limit: int
    offset: int
    count: int

    @classmethod
    def build(cls, data: List[T], total: int, limit: int, offset: int) -> "Page[T]":
        return cls(data=data, total=total, limit=limit, offset=offset, count=len(data))
