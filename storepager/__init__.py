"""storepager: offset and cursor pagination over any ordered record store.

    from storepager import InMemoryStore, PageQuery, Paginator

    store = InMemoryStore([{"id": i} for i in range(1, 11)])
    paginator = Paginator()
    page = await paginator.paginate(
        store, PageQuery(order_by=[("id", "asc")]), cursor={"limit": 3, "after": 3}
    )
    page.data    # [{"id": 4}, {"id": 5}, {"id": 6}]
    page.meta    # has_previous_page=True, has_next_page=True, start_cursor=4, end_cursor=6
"""

from storepager.core.exceptions import (
    CursorDecodeError,
    PaginationError,
    PaginationValidationError,
)
from storepager.core.pagination import (
    UNBOUNDED,
    Bounded,
    CallableCursorCodec,
    CursorCodec,
    CursorMeta,
    CursorOptions,
    CursorPage,
    IdentityCursorCodec,
    InMemoryStore,
    OffsetMeta,
    OffsetOptions,
    OffsetPage,
    Page,
    PageQuery,
    PaginateOptions,
    Paginator,
    RecordStore,
    Window,
    paginate,
)

__version__ = "0.1.0"

__all__ = [
    "UNBOUNDED",
    "Bounded",
    "CallableCursorCodec",
    "CursorCodec",
    "CursorDecodeError",
    "CursorMeta",
    "CursorOptions",
    "CursorPage",
    "IdentityCursorCodec",
    "InMemoryStore",
    "OffsetMeta",
    "OffsetOptions",
    "OffsetPage",
    "Page",
    "PageQuery",
    "PaginateOptions",
    "PaginationError",
    "PaginationValidationError",
    "Paginator",
    "RecordStore",
    "Window",
    "__version__",
    "paginate",
]
