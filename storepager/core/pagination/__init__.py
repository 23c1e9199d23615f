"""Offset and cursor pagination over an abstract record store.

This module provides two pagination strategies behind one entry point:
- Offset: page numbers, backed by a full COUNT (total pages, previous/next page)
- Cursor: anchor-relative pages, with adjacency detected by one-row lookups
  instead of a COUNT (has previous/next page, start/end cursors)

Offset Style:
    page = await paginator.paginate(store, query, offset={"page": 2, "per_page": 20})
    page.meta.total_pages

Cursor Style:
    page = await paginator.paginate(store, query, cursor={"limit": 20})
    while page.meta.has_next_page:
        page = await paginator.paginate(
            store, query, cursor={"limit": 20, "after": page.meta.end_cursor}
        )

Stores implement the narrow RecordStore contract (``find_many`` and
``count``). InMemoryStore ships here; the SQLAlchemy store lives in
``storepager.core.database``.
"""

from storepager.core.pagination.cursor import (
    CallableCursorCodec,
    CursorCodec,
    IdentityCursorCodec,
    resolve_codec,
)
from storepager.core.pagination.memory import InMemoryStore
from storepager.core.pagination.meta import (
    EMPTY_CURSOR_META,
    cursor_meta,
    drop_overshoot,
    offset_meta,
)
from storepager.core.pagination.paginator import Paginator, paginate
from storepager.core.pagination.requests import (
    CursorOptions,
    CursorRequest,
    OffsetOptions,
    OffsetRequest,
    PaginateOptions,
    normalize_request,
)
from storepager.core.pagination.schemas import (
    CursorMeta,
    CursorPage,
    OffsetMeta,
    OffsetPage,
    Page,
)
from storepager.core.pagination.store import PageQuery, RecordStore
from storepager.core.pagination.strategies import CursorStrategy, OffsetStrategy
from storepager.core.pagination.window import (
    UNBOUNDED,
    Anchor,
    Bounded,
    PageSize,
    Window,
)

__all__ = [
    "EMPTY_CURSOR_META",
    "UNBOUNDED",
    "Anchor",
    "Bounded",
    # Codecs
    "CallableCursorCodec",
    "CursorCodec",
    # Envelopes
    "CursorMeta",
    "CursorOptions",
    "CursorPage",
    "CursorRequest",
    "CursorStrategy",
    "IdentityCursorCodec",
    # Stores
    "InMemoryStore",
    "OffsetMeta",
    "OffsetOptions",
    "OffsetPage",
    "OffsetRequest",
    "OffsetStrategy",
    "Page",
    "PageQuery",
    "PageSize",
    "PaginateOptions",
    # Entry points
    "Paginator",
    "RecordStore",
    "Window",
    "cursor_meta",
    "drop_overshoot",
    "normalize_request",
    "offset_meta",
    "paginate",
    "resolve_codec",
]
