"""FastAPI dependencies for pagination query parameters."""

from storepager.core.dependencies.pagination import (
    CursorPagination,
    CursorParams,
    OffsetPagination,
    OffsetParams,
    get_cursor_params,
    get_offset_params,
)

__all__ = [
    "CursorPagination",
    "CursorParams",
    "OffsetPagination",
    "OffsetParams",
    "get_cursor_params",
    "get_offset_params",
]
