"""Cursor (anchor relative) pagination.

Pages are addressed by a cursor key rather than a page number, and
"is there another page" is answered without counting:

- Overshoot-and-drop: fetch ``limit + 1`` records. If the extra record shows
  up, a further page exists in the direction of travel; the extra record is
  discarded before returning.
- Adjacency check: fetch at most one record on the other side of the anchor
  (same filter, no selection options). Its presence means a page exists in
  the opposite direction.

Three modes:

    no anchor   Window(take=limit+1)                         has_previous_page=False
    after=k     Window(skip=1, take=limit+1, cursor=enc(k))
                + check Window(skip=1, take=-1, cursor=enc(k))  -> has_previous_page
    before=k    Window(skip=1, take=-(limit+1), cursor=enc(k))
                + check Window(skip=1, take=1, cursor=enc(k))   -> has_next_page

Backward fetches come back in ascending order, so the overshoot record is
the first one and is shifted off the front rather than popped off the end.
An unbounded limit skips the overshoot entirely; the flag in the direction
of travel is then False and the opposite flag still comes from the adjacency check.
"""

from __future__ import annotations

import asyncio
from typing import Any

from storepager.core.pagination.meta import cursor_meta, drop_overshoot
from storepager.core.pagination.requests import CursorRequest
from storepager.core.pagination.schemas import CursorPage
from storepager.core.pagination.store import PageQuery, RecordStore
from storepager.core.pagination.window import Anchor, Window
from storepager.infra.logging import get_lazy_logger

FORWARD_NEIGHBOUR = {"skip": 1, "take": 1}
BACKWARD_NEIGHBOUR = {"skip": 1, "take": -1}


class CursorStrategy:
    """Anchor-relative pagination over a RecordStore.

    Example:
        strategy = CursorStrategy(store)
        first = await strategy.run(query, CursorRequest(codec, limit=Bounded(3)))
        second = await strategy.run(
            query,
            CursorRequest(codec, anchor=Anchor.after(first.meta.end_cursor), limit=Bounded(3)),
        )
    """

    __slots__ = ("store", "_lazy")

    def __init__(self, store: RecordStore) -> None:
        self.store = store
        self._lazy = get_lazy_logger("storepager.cursor")

    async def run(self, query: PageQuery, request: CursorRequest) -> CursorPage[Any]:
        """Fetch one page relative to the request's anchor.

        Args:
            query: Store-native filter/order/options
            request: Validated cursor request

        Returns:
            CursorPage with the page's records and CursorMeta

        Raises:
            CursorDecodeError: If a boundary record lacks a cursor key
        """
        anchor = request.anchor
        if anchor is None:
            page = await self._first(query, request)
        elif anchor.is_forward:
            page = await self._after(query, request, anchor)
        else:
            page = await self._before(query, request, anchor)

        self._lazy.debug(
            lambda: f"paginate.cursor: anchor={anchor!r} limit={request.limit!r} -> "
            f"{len(page.data)} records, has_previous={page.meta.has_previous_page}, "
            f"has_next={page.meta.has_next_page}"
        )
        return page

    async def _first(self, query: PageQuery, request: CursorRequest) -> CursorPage[Any]:
        records = await self.store.find_many(query, Window.forward_from(request.limit))
        records, has_next_page = drop_overshoot(records, request.limit)
        meta = cursor_meta(
            records,
            has_previous_page=False,
            has_next_page=has_next_page,
            codec=request.codec,
        )
        return CursorPage(data=records, meta=meta)

    async def _after(
        self, query: PageQuery, request: CursorRequest, anchor: Anchor
    ) -> CursorPage[Any]:
        descriptor = request.codec.encode(anchor.key)
        records, previous = await asyncio.gather(
            self.store.find_many(
                query, Window.forward_from(request.limit, cursor=descriptor, skip=1)
            ),
            self.store.find_many(
                query.without_options(), Window(cursor=descriptor, **BACKWARD_NEIGHBOUR)
            ),
        )
        records, has_next_page = drop_overshoot(records, request.limit)
        meta = cursor_meta(
            records,
            has_previous_page=len(previous) == 1,
            has_next_page=has_next_page,
            codec=request.codec,
        )
        return CursorPage(data=records, meta=meta)

    async def _before(
        self, query: PageQuery, request: CursorRequest, anchor: Anchor
    ) -> CursorPage[Any]:
        descriptor = request.codec.encode(anchor.key)
        records, following = await asyncio.gather(
            self.store.find_many(
                query, Window.backward_from(request.limit, cursor=descriptor, skip=1)
            ),
            self.store.find_many(
                query.without_options(), Window(cursor=descriptor, **FORWARD_NEIGHBOUR)
            ),
        )
        records, has_previous_page = drop_overshoot(records, request.limit, from_front=True)
        meta = cursor_meta(
            records,
            has_previous_page=has_previous_page,
            has_next_page=len(following) == 1,
            codec=request.codec,
        )
        return CursorPage(data=records, meta=meta)


__all__ = ["CursorStrategy"]
