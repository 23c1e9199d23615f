"""Pagination query parameters for FastAPI routes.

Collects pagination fields from the query string and validates them up
front, so a malformed request is answered with 422 before any handler code
(or store access) runs.

Usage:
    from storepager.core.dependencies import CursorPagination, OffsetPagination

    @router.get("/users")
    async def list_users(pagination: OffsetPagination) -> OffsetPage[UserOut]:
        return await users.paginate(offset=pagination.fields())

    @router.get("/users/feed")
    async def user_feed(pagination: CursorPagination) -> CursorPage[UserOut]:
        return await users.paginate(cursor=pagination.fields())

Digit-only cursor values are read as integers so the default ``{"id": key}``
codec works for integer keys. Any other value stays a string; routes whose
string keys can look numeric convert back in ``set_cursor``.
"""

from __future__ import annotations

import re
from typing import Annotated, Any

from fastapi import Depends, HTTPException, Query
from pydantic import BaseModel, Field, field_validator

from storepager.core.exceptions import PaginationValidationError
from storepager.core.pagination.requests import normalize_request

_INTEGER = re.compile(r"-?\d+")


class OffsetParams(BaseModel):
    """Offset pagination parameters.

    Attributes:
        page: Page number (1-indexed)
        per_page: Page size, -1 for all records, None for the configured default
    """

    page: int = Field(default=1, ge=1, description="Page number (1-indexed)")
    per_page: int | None = Field(default=None, ge=-1, description="Items per page")

    model_config = {"frozen": True}

    def fields(self) -> dict[str, Any]:
        """Request fields for ``paginate(offset=...)``."""
        return self.model_dump(exclude_none=True)


class CursorParams(BaseModel):
    """Cursor pagination parameters.

    Attributes:
        after: Cursor to page forward from
        before: Cursor to page backward from
        limit: Page size, -1 for all records, None for the configured default
    """

    after: int | str | None = Field(default=None, description="Page forward from this cursor")
    before: int | str | None = Field(default=None, description="Page backward from this cursor")
    limit: int | None = Field(default=None, ge=-1, description="Items per page")

    model_config = {"frozen": True}

    @field_validator("after", "before", mode="before")
    @classmethod
    def integer_cursor(cls, value: Any) -> Any:
        """Read digit-only cursors as integers."""
        if isinstance(value, str) and _INTEGER.fullmatch(value):
            return int(value)
        return value

    def fields(self, **codec: Any) -> dict[str, Any]:
        """Request fields for ``paginate(cursor=...)``.

        Args:
            **codec: Optional ``set_cursor``/``get_cursor``/``codec`` entries
        """
        return {**self.model_dump(exclude_none=True), **codec}


def _fail_fast(raw: dict[str, Any]) -> None:
    try:
        normalize_request(raw)
    except PaginationValidationError as e:
        raise HTTPException(
            status_code=422,
            detail={"message": e.message, "field": e.field},
        ) from e


def get_offset_params(
    page: Annotated[
        int,
        Query(ge=1, description="Page number (1-indexed)"),
    ] = 1,
    per_page: Annotated[
        int | None,
        Query(ge=-1, description="Items per page (-1 for all)"),
    ] = None,
) -> OffsetParams:
    """Get offset pagination parameters.

    Args:
        page: Page number, starting at 1.
        per_page: Items per page; -1 returns every record.

    Returns:
        OffsetParams validated against the pagination request model.
    """
    params = OffsetParams(page=page, per_page=per_page)
    _fail_fast({"offset": params.fields()})
    return params


def get_cursor_params(
    after: Annotated[
        str | None,
        Query(description="Page forward from this cursor"),
    ] = None,
    before: Annotated[
        str | None,
        Query(description="Page backward from this cursor"),
    ] = None,
    limit: Annotated[
        int | None,
        Query(ge=-1, description="Items per page (-1 for all)"),
    ] = None,
) -> CursorParams:
    """Get cursor pagination parameters.

    Rejects ``after`` and ``before`` given together.

    Returns:
        CursorParams validated against the pagination request model.
    """
    params = CursorParams(after=after, before=before, limit=limit)
    _fail_fast({"cursor": params.fields()})
    return params


# Type aliases for cleaner route signatures
OffsetPagination = Annotated[OffsetParams, Depends(get_offset_params)]
CursorPagination = Annotated[CursorParams, Depends(get_cursor_params)]
