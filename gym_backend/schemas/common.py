"""Common schemas used across the application."""

from typing import Generic, TypeVar, List

from pydantic import BaseModel

T = TypeVar("T")


class Message(BaseModel):
    """Simple message response."""

    message: str


class CountResponse(BaseModel):
    """Single count response."""

    count: int


class PaginatedResponse(BaseModel, Generic[T]):
    """Paginated response wrapper."""

    items: List[T]
    total: int
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def create(
        cls,
        items: List[T],
        total: int,
        page: int,
        page_size: int,
    ) -> "PaginatedResponse[T]":
        """Create a paginated response."""
        total_pages = (total + page_size - 1) // page_size if page_size > 0 else 0
        return cls(
            items=items,
            total=total,
            page=page,
            page_size=page_size,
            total_pages=total_pages,
        )
