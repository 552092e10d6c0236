# --- File: app/schemas/common/pagination.py ---
"""
Offset pagination.

Pages are numbered from 0; ``offset = page * size``.
"""

from __future__ import annotations

from math import ceil
from typing import Generic, List, TypeVar

from pydantic import Field

from app.schemas.common.base import BaseSchema

T = TypeVar("T")

__all__ = [
    "PageMeta",
    "PaginatedResponse",
]


class PageMeta(BaseSchema):
    """Position of a page within the full result set."""

    page: int = Field(..., ge=0)
    size: int = Field(..., ge=1)
    total_items: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)
    has_next: bool
    has_previous: bool


class PaginatedResponse(BaseSchema, Generic[T]):
    """One page of items plus its metadata."""

    items: List[T]
    meta: PageMeta

    @classmethod
    def create(cls, items: List[T], total_items: int, page: int, size: int) -> "PaginatedResponse[T]":
        total_pages = ceil(total_items / size) if size else 0
        return cls(
            items=items,
            meta=PageMeta(
                page=page,
                size=size,
                total_items=total_items,
                total_pages=total_pages,
                has_next=page + 1 < total_pages,
                has_previous=page > 0,
            ),
        )
