"""Paginator: the public entry point.

    paginator = Paginator(PaginateOptions(offset=OffsetOptions(per_page=20)))

    page = await paginator.paginate(store, query, offset={"page": 2})
    page = await paginator.paginate(store, query, cursor={"after": 42, "limit": 10})

Exactly one of ``offset`` / ``cursor`` must be given. The request is
validated and merged over the paginator's defaults before the store is
touched; any validation failure leaves the store uncalled.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from storepager.core.exceptions import PaginationValidationError
from storepager.core.pagination.requests import (
    CursorRequest,
    PaginateOptions,
    normalize_request,
)
from storepager.core.pagination.schemas import CursorPage, OffsetPage
from storepager.core.pagination.store import PageQuery, RecordStore
from storepager.core.pagination.strategies import CursorStrategy, OffsetStrategy

if TYPE_CHECKING:
    from collections.abc import Mapping

    from storepager.core.settings import PaginationSettings


class Paginator:
    """Validates pagination requests and dispatches them to a strategy.

    Defaults are fixed at construction and never mutated; each call computes
    its effective request by layering explicit fields over them.
    """

    __slots__ = ("defaults", "_logger")

    def __init__(self, defaults: PaginateOptions | None = None) -> None:
        """Initialize paginator.

        Args:
            defaults: Page sizes and cursor codec used when a call omits them
        """
        self.defaults = defaults or PaginateOptions()
        self._logger = logging.getLogger("storepager.paginator")

    @classmethod
    def from_settings(cls, settings: PaginationSettings | None = None) -> Paginator:
        """Build a paginator whose defaults come from PaginationSettings.

        Args:
            settings: Explicit settings; the cached process settings otherwise
        """
        if settings is None:
            from storepager.core.settings import get_pagination_settings

            settings = get_pagination_settings()
        return cls(settings.to_options())

    async def paginate(
        self,
        store: RecordStore,
        query: PageQuery | None = None,
        *,
        offset: Mapping[str, Any] | bool | None = None,
        cursor: Mapping[str, Any] | bool | None = None,
    ) -> OffsetPage[Any] | CursorPage[Any]:
        """Fetch one page from ``store``.

        Args:
            store: Record store to read from
            query: Filter, ordering and selection options (everything by default)
            offset: Offset request fields (``page``, ``per_page``) or True
            cursor: Cursor request fields (``after``/``before``, ``limit``,
                ``set_cursor``, ``get_cursor``, ``codec``) or True

        Returns:
            OffsetPage for offset requests, CursorPage for cursor requests

        Raises:
            PaginationValidationError: If the request is malformed
            CursorDecodeError: If a cursor key cannot be read from a record

        Example:
            page = await paginator.paginate(
                store,
                PageQuery(order_by=[("id", "asc")]),
                cursor={"limit": 3, "after": 3},
            )
            [row["id"] for row in page.data]   # [4, 5, 6]
        """
        try:
            request = normalize_request({"offset": offset, "cursor": cursor}, self.defaults)
        except PaginationValidationError as e:
            self._logger.info(
                "Pagination request rejected",
                extra={"reason": e.message, "field": e.field, "operation": "paginate"},
            )
            raise

        query = query or PageQuery()
        if isinstance(request, CursorRequest):
            return await CursorStrategy(store).run(query, request)
        return await OffsetStrategy(store).run(query, request)


async def paginate(
    store: RecordStore,
    query: PageQuery | None = None,
    *,
    offset: Mapping[str, Any] | bool | None = None,
    cursor: Mapping[str, Any] | bool | None = None,
) -> OffsetPage[Any] | CursorPage[Any]:
    """Paginate with defaults taken from the cached PaginationSettings.

    See Paginator.paginate.
    """
    paginator = Paginator.from_settings()
    return await paginator.paginate(store, query, offset=offset, cursor=cursor)


__all__ = ["Paginator", "paginate"]
