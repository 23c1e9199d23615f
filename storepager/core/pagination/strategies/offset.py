"""Offset (page number) pagination.

Translates ``page``/``per_page`` into a skip/take window, fetches that
window and the total count concurrently, and derives page-number metadata.

    page=3, per_page=10  ->  Window(skip=20, take=10) + count(where)

Requesting a page past the end clamps to the last page instead of failing.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from storepager.core.pagination.meta import clamp_page, offset_meta
from storepager.core.pagination.requests import OffsetRequest
from storepager.core.pagination.schemas import OffsetPage
from storepager.core.pagination.store import PageQuery, RecordStore
from storepager.core.pagination.window import Bounded, PageSize, Window
from storepager.infra.logging import get_lazy_logger


def offset_window(page: int, per_page: PageSize) -> Window:
    """Skip/take window for a 1-indexed page."""
    if isinstance(per_page, Bounded):
        return Window(skip=(page - 1) * per_page.size, take=per_page.size)
    return Window()


class OffsetStrategy:
    """Page-number pagination over a RecordStore.

    Example:
        strategy = OffsetStrategy(store)
        page = await strategy.run(PageQuery(), OffsetRequest(page=2, per_page=Bounded(10)))
        page.meta.total_pages
    """

    __slots__ = ("store", "_logger", "_lazy")

    def __init__(self, store: RecordStore) -> None:
        self.store = store
        self._logger = logging.getLogger("storepager.offset")
        self._lazy = get_lazy_logger("storepager.offset")

    async def run(self, query: PageQuery, request: OffsetRequest) -> OffsetPage[Any]:
        """Fetch one page and its metadata.

        Args:
            query: Store-native filter/order/options
            request: Validated offset request

        Returns:
            OffsetPage with the page's records and OffsetMeta
        """
        window = offset_window(request.page, request.per_page)
        records, total_count = await asyncio.gather(
            self.store.find_many(query, window),
            self.store.count(query.where),
        )
        records = list(records)

        current_page = clamp_page(
            total_count=total_count, page=request.page, per_page=request.per_page
        )
        if current_page != request.page and not records and total_count > 0:
            # Past the end: serve the last page the metadata points at
            self._logger.debug(
                "Offset page clamped",
                extra={
                    "requested_page": request.page,
                    "current_page": current_page,
                    "operation": "paginate.offset",
                },
            )
            records = list(
                await self.store.find_many(query, offset_window(current_page, request.per_page))
            )

        meta = offset_meta(
            total_count=total_count,
            page=request.page,
            per_page=request.per_page,
            page_count=len(records),
        )
        self._lazy.debug(
            lambda: f"paginate.offset: skip={window.skip} take={window.take} -> "
            f"{meta.page_count}/{meta.total_count} records, "
            f"page {meta.current_page}/{meta.total_pages}"
        )
        return OffsetPage(data=records, meta=meta)


__all__ = ["OffsetStrategy", "offset_window"]
