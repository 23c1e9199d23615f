"""Record store contract consumed by the pagination strategies.

The pagination core never executes queries itself. It hands a ``PageQuery``
(filter, ordering and selection options, all in the store's own vocabulary)
and a ``Window`` to a ``RecordStore`` and only ever looks at the returned
records through a cursor codec.

Store semantics:
    find_many(query, Window(take=n))               first n records
    find_many(query, Window(skip=1, take=n, cursor=c))
                                                   n records after the cursor row
    find_many(query, Window(skip=1, take=-n, cursor=c))
                                                   n records before the cursor row,
                                                   in ascending order
    count(where)                                   number of matching records

Any exception raised by a store propagates to the pagination caller as-is.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from storepager.core.pagination.window import Window


@dataclass(slots=True, frozen=True)
class PageQuery:
    """Store-native query description.

    Attributes:
        where: Filter understood by the store (None matches everything)
        order_by: Sort specification establishing a total order
        options: Selection/inclusion options shaping returned records
    """

    where: Any = None
    order_by: Sequence[Any] = ()
    options: Any = None

    def without_options(self) -> PageQuery:
        """Same filter and ordering without selection options.

        Adjacency checks only need to know whether a row exists.
        """
        return replace(self, options=None)


@runtime_checkable
class RecordStore(Protocol):
    """Narrow read contract over an ordered record collection."""

    async def find_many(self, query: PageQuery, window: Window) -> Sequence[Any]:
        """Return the records selected by ``window`` in ascending order."""
        ...

    async def count(self, where: Any) -> int:
        """Return the number of records matching ``where``."""
        ...


__all__ = ["PageQuery", "RecordStore"]
