"""In-memory record store.

Implements the RecordStore contract over a Python sequence. Useful for
paging data that is already in memory and as a reference for the window
semantics any store must honour.

Query vocabulary:
    where:    callable ``record -> bool`` (None matches everything)
    order_by: sequence of ``(field, "asc" | "desc")`` pairs
    options:  iterable of field names to keep (mapping records only)

Cursor descriptors are mappings of field name to value; the cursor row is
the first ordered record whose fields all match.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from storepager.core.pagination.store import PageQuery
from storepager.core.pagination.window import Window
from storepager.infra.logging import get_lazy_logger

Predicate = Callable[[Any], bool]


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record[name]
    return getattr(record, name)


class InMemoryStore:
    """RecordStore over an in-memory sequence.

    Call counters make it easy to assert how many store round trips a
    pagination request cost.

    Example:
        store = InMemoryStore([{"id": i} for i in range(1, 11)])
        page = await paginate(store, PageQuery(order_by=[("id", "asc")]), cursor={"limit": 3})
        store.find_many_calls  # 1
    """

    def __init__(self, records: Iterable[Any] = ()) -> None:
        self.records: list[Any] = list(records)
        self.find_many_calls = 0
        self.count_calls = 0
        self._lazy = get_lazy_logger("storepager.store.memory")

    @property
    def calls(self) -> int:
        """Total store round trips so far."""
        return self.find_many_calls + self.count_calls

    async def find_many(self, query: PageQuery, window: Window) -> list[Any]:
        self.find_many_calls += 1
        rows = self._ordered(self._matching(query.where), query.order_by)

        if window.cursor is not None:
            position = self._position(rows, window.cursor)
            if position is None:
                return []
            if window.is_backward:
                end = position + 1 - window.skip
                start = 0 if window.count is None else end - window.count
                rows = rows[max(start, 0) : max(end, 0)]
            else:
                start = position + window.skip
                end = None if window.count is None else start + window.count
                rows = rows[start:end]
        elif window.is_backward:
            end = len(rows) - window.skip
            start = 0 if window.count is None else end - window.count
            rows = rows[max(start, 0) : max(end, 0)]
        else:
            end = None if window.count is None else window.skip + window.count
            rows = rows[window.skip : end]

        self._lazy.debug(
            lambda: f"memory.find_many: {window!r} -> {len(rows)} of {len(self.records)} records"
        )
        return [self._project(row, query.options) for row in rows]

    async def count(self, where: Predicate | None) -> int:
        self.count_calls += 1
        return len(self._matching(where))

    def _matching(self, where: Predicate | None) -> list[Any]:
        if where is None:
            return list(self.records)
        return [record for record in self.records if where(record)]

    @staticmethod
    def _ordered(rows: list[Any], order_by: Sequence[tuple[str, str]]) -> list[Any]:
        # Stable sorts applied from the least significant key upwards
        for name, direction in reversed(list(order_by)):
            rows.sort(key=lambda row, name=name: _field(row, name), reverse=direction == "desc")
        return rows

    @staticmethod
    def _position(rows: Sequence[Any], cursor: Mapping[str, Any]) -> int | None:
        for index, row in enumerate(rows):
            try:
                if all(_field(row, name) == value for name, value in cursor.items()):
                    return index
            except (KeyError, AttributeError):
                continue
        return None

    @staticmethod
    def _project(row: Any, fields: Iterable[str] | None) -> Any:
        if fields is None or not isinstance(row, Mapping):
            return row
        return {name: row[name] for name in fields if name in row}


__all__ = ["InMemoryStore"]
