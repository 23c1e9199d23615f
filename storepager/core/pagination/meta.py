"""Metadata computation.

Pure functions turning raw fetch results into envelope metadata. Nothing
here touches a store, so the strategies' bookkeeping can be tested with
plain lists and integers.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from storepager.core.pagination.cursor import CursorCodec
from storepager.core.pagination.schemas import CursorMeta, OffsetMeta
from storepager.core.pagination.window import Bounded, PageSize

EMPTY_CURSOR_META = CursorMeta(
    has_previous_page=False,
    has_next_page=False,
    start_cursor=None,
    end_cursor=None,
)


def offset_meta(
    *,
    total_count: int,
    page: int,
    per_page: PageSize,
    page_count: int,
) -> OffsetMeta:
    """Compute offset metadata from a count and the requested page.

    An unbounded page size behaves as one page holding every record.

    Args:
        total_count: Records matching the filter
        page: Requested page (1-indexed, may exceed the last page)
        per_page: Requested page size
        page_count: Records actually returned

    Returns:
        OffsetMeta with ``current_page`` clamped to ``[1, total_pages]``

    Example:
        offset_meta(total_count=25, page=9, per_page=Bounded(10), page_count=5)
        # total_pages=3, current_page=3, previous_page=2, next_page=None
    """
    size = per_page.size if isinstance(per_page, Bounded) else (total_count or 1)
    total_pages = max(1, -(-total_count // size))
    current_page = max(1, min(page, total_pages))
    return OffsetMeta(
        total_count=total_count,
        page_count=page_count,
        total_pages=total_pages,
        current_page=current_page,
        previous_page=current_page - 1 if current_page > 1 else None,
        next_page=current_page + 1 if current_page < total_pages else None,
    )


def clamp_page(*, total_count: int, page: int, per_page: PageSize) -> int:
    """Last valid page for ``page`` given ``total_count`` records."""
    return offset_meta(
        total_count=total_count, page=page, per_page=per_page, page_count=0
    ).current_page


def drop_overshoot(
    records: Sequence[Any],
    limit: PageSize,
    *,
    from_front: bool = False,
) -> tuple[list[Any], bool]:
    """Discard the extra record fetched to detect a further page.

    Forward fetches overshoot at the end, backward fetches at the front
    (the extra row is the one farthest from the anchor).

    Args:
        records: Fetched records, ``limit + 1`` of them at most
        limit: Requested page size
        from_front: Drop from the front instead of the end

    Returns:
        (kept records, whether a record was dropped). Unbounded limits
        never drop anything.
    """
    kept = list(records)
    if not isinstance(limit, Bounded) or len(kept) <= limit.size:
        return kept, False
    if from_front:
        del kept[0]
    else:
        kept.pop()
    return kept, True


def cursor_meta(
    records: Sequence[Any],
    *,
    has_previous_page: bool,
    has_next_page: bool,
    codec: CursorCodec,
) -> CursorMeta:
    """Build cursor metadata for the records actually returned.

    Only the first and last records are decoded. An empty page short-circuits
    to EMPTY_CURSOR_META without calling the codec.

    Raises:
        CursorDecodeError: If the codec cannot read a boundary record
    """
    if not records:
        return EMPTY_CURSOR_META
    return CursorMeta(
        has_previous_page=has_previous_page,
        has_next_page=has_next_page,
        start_cursor=codec.decode(records[0]),
        end_cursor=codec.decode(records[-1]),
    )


__all__ = [
    "EMPTY_CURSOR_META",
    "clamp_page",
    "cursor_meta",
    "drop_overshoot",
    "offset_meta",
]
