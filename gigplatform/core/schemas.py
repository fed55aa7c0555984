"""
gigplatform/core/schemas.py

Core Schemas

Defines the generic paginated response schema shared by list endpoints.
"""

from collections.abc import Sequence
from typing import Generic, TypeVar

from pydantic import BaseModel, Field


T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """
    Generic schema for paginated list responses.
    """

    total_count: int = Field(..., description="Total number of items available")
    has_next_page: bool = Field(..., description="Indicates if there are more items available")
    items: list[T] = Field(..., description="List of items for the current page")

    @classmethod
    def from_page(
        cls, items: Sequence[T], total_count: int, skip: int, limit: int
    ) -> "PaginatedResponse[T]":
        """Build a page envelope from a slice of items and the overall count."""
        return cls(
            total_count=total_count,
            has_next_page=(skip + limit) < total_count,
            items=list(items),
        )
