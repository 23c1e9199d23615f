"""Result envelope schemas.

Every paginate call returns the same ``{data, meta}`` shape regardless of
strategy. Only the metadata differs:

1. Offset pagination (``OffsetPage``):
   - Full count based: total records, total pages, current/previous/next page
   - Costs one COUNT per request

2. Cursor pagination (``CursorPage``):
   - Existence based: has previous/next page, start/end cursors
   - No COUNT; adjacency is detected with one-row lookups

Both envelopes are frozen pydantic models and serialize with ``model_dump()``.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class OffsetMeta(BaseModel):
    """Offset pagination metadata.

    Attributes:
        total_count: Records matching the filter
        page_count: Records actually returned on this page
        total_pages: Number of pages (at least 1, even for no records)
        current_page: Page returned, clamped to ``[1, total_pages]``
        previous_page: Page before ``current_page`` or None on the first page
        next_page: Page after ``current_page`` or None on the last page
    """

    model_config = ConfigDict(frozen=True)

    total_count: int = Field(ge=0, description="Total matching records")
    page_count: int = Field(ge=0, description="Records on this page")
    total_pages: int = Field(ge=1, description="Total number of pages")
    current_page: int = Field(ge=1, description="Current page (1-indexed)")
    previous_page: int | None = Field(default=None, description="Previous page, if any")
    next_page: int | None = Field(default=None, description="Next page, if any")


class CursorMeta(BaseModel):
    """Cursor pagination metadata, following the Relay PageInfo shape.

    Attributes:
        has_previous_page: Whether records exist before this page
        has_next_page: Whether records exist after this page
        start_cursor: Cursor key of the first record (None if empty)
        end_cursor: Cursor key of the last record (None if empty)
    """

    model_config = ConfigDict(frozen=True)

    has_previous_page: bool = Field(description="Whether previous records exist")
    has_next_page: bool = Field(description="Whether more records exist")
    start_cursor: str | int | None = Field(
        default=None,
        description="Cursor of the first record",
    )
    end_cursor: str | int | None = Field(
        default=None,
        description="Cursor of the last record",
    )


class Page(BaseModel, Generic[T]):
    """Uniform paginated result.

    Attributes:
        data: Records of this page, in the query's order
        meta: Strategy-specific position metadata
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    data: list[T] = Field(default_factory=list, description="Records on this page")
    meta: OffsetMeta | CursorMeta


class OffsetPage(Page[T], Generic[T]):
    """Page returned by offset pagination.

    Usage:
        page = await paginator.paginate(store, query, offset={"page": 2, "per_page": 20})
        print(f"page {page.meta.current_page}/{page.meta.total_pages}")
    """

    meta: OffsetMeta


class CursorPage(Page[T], Generic[T]):
    """Page returned by cursor pagination.

    Usage:
        page = await paginator.paginate(store, query, cursor={"limit": 20})
        if page.meta.has_next_page:
            page = await paginator.paginate(
                store, query, cursor={"limit": 20, "after": page.meta.end_cursor}
            )
    """

    meta: CursorMeta


__all__ = [
    "CursorMeta",
    "CursorPage",
    "OffsetMeta",
    "OffsetPage",
    "Page",
]
