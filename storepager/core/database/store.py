"""SQLAlchemy record store.

Implements the RecordStore contract for a mapped model using an async
session factory. Each store call opens its own session, so the two reads a
pagination request issues concurrently never share a connection.

Query vocabulary:
    where:    SQLAlchemy criterion or sequence of criteria (AND-ed)
    order_by: sequence of ``(column, "asc" | "desc")`` tuples
    options:  sequence of loader options (e.g. ``selectinload(User.posts)``)

Cursor windows follow ORM-style cursor semantics:
    1. The cursor row is located by its descriptor (``{"id": 42}``).
    2. A keyset seek keeps rows at or past the cursor row in the direction
       of travel, so ``skip=1`` skips the cursor row itself.
    3. Negative ``take`` flips the ordering, limits, then re-reverses the
       rows so results are always ascending.

The model's primary key columns are appended to the ordering as
tie-breakers so the order is total even when sort columns repeat.

Example:
    store = SQLAlchemyStore(session_factory, User)
    query = PageQuery(
        where=[User.is_active.is_(True)],
        order_by=[(User.created_at, "desc")],
    )
    page = await paginator.paginate(store, query, cursor={"limit": 20})
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Generic, Literal, TypeVar, cast

from sqlalchemy import and_, func, or_, select
from sqlalchemy import inspect as sa_inspect

from storepager.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Select
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
    from sqlalchemy.orm import InstrumentedAttribute

    from storepager.core.pagination.store import PageQuery
    from storepager.core.pagination.window import Window

SortDirection = Literal["asc", "desc"]
Ordering = list[tuple["InstrumentedAttribute[Any]", SortDirection]]

T = TypeVar("T")


class SQLAlchemyStore(Generic[T]):
    """RecordStore backed by a SQLAlchemy mapped model.

    Attributes:
        model: Mapped model class (e.g. User)
        session_factory: Factory producing AsyncSession instances
    """

    __slots__ = ("model", "session_factory", "_logger", "_lazy")

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        model: type[T],
    ) -> None:
        """Initialize store.

        Args:
            session_factory: Factory producing AsyncSession instances
            model: Mapped model class
        """
        self.model = model
        self.session_factory = session_factory
        self._logger = logging.getLogger(f"storepager.store.{model.__name__}")
        self._lazy = get_lazy_logger(f"storepager.store.{model.__name__}")

    async def find_many(self, query: PageQuery, window: Window) -> list[T]:
        """Fetch the rows selected by ``window`` in ascending order."""
        ordering = self._ordering(query.order_by)
        backward = window.is_backward

        stmt = self._filtered(query.where)
        if query.options:
            stmt = stmt.options(*query.options)

        async with self.session_factory() as session:
            if window.cursor is not None:
                position = await self._cursor_position(
                    session, window.cursor, ordering, query.where
                )
                if position is None:
                    self._lazy.debug(
                        lambda: f"db.find_many: {self.model.__name__} "
                        f"cursor {window.cursor!r} not found"
                    )
                    return []
                stmt = stmt.where(self._seek_condition(ordering, position, backward=backward))

            stmt = self._apply_ordering(stmt, ordering, backward=backward)
            if window.skip:
                stmt = stmt.offset(window.skip)
            if window.count is not None:
                stmt = stmt.limit(window.count)

            result = await session.execute(stmt)
            rows = list(result.scalars().all())

        if backward:
            rows.reverse()

        self._lazy.debug(
            lambda: f"db.find_many: {self.model.__name__}"
            f"(skip={window.skip}, take={window.take}) -> {len(rows)} rows"
        )
        return rows

    async def count(self, where: Any) -> int:
        """Count rows matching ``where``."""
        statement = self._filtered(where)
        count_stmt = select(func.count()).select_from(statement.subquery())
        async with self.session_factory() as session:
            total = (await session.execute(count_stmt)).scalar_one()

        self._lazy.debug(lambda: f"db.count: {self.model.__name__} -> {total}")
        return int(total)

    def _filtered(self, where: Any) -> Select[Any]:
        return select(self.model).where(*self._criteria(where))

    @staticmethod
    def _criteria(where: Any) -> list[Any]:
        if where is None:
            return []
        if isinstance(where, Sequence):
            return list(where)
        return [where]

    def _ordering(self, order_by: Sequence[Any]) -> Ordering:
        """Normalize the sort spec and append primary-key tie-breakers."""
        ordering: Ordering = []
        for item in order_by:
            if isinstance(item, tuple):
                column, direction = item
            else:
                column, direction = item, "asc"
            ordering.append((column, cast("SortDirection", direction)))

        seen = {column.key for column, _ in ordering}
        for column in self._pk_attrs():
            if column.key not in seen:
                ordering.append((column, "asc"))
        return ordering

    async def _cursor_position(
        self,
        session: AsyncSession,
        cursor: Mapping[str, Any],
        ordering: Ordering,
        where: Any,
    ) -> tuple[Any, ...] | None:
        """Values of the ordering columns at the cursor row.

        The row must also match ``where``; a filtered-out cursor row is
        treated as absent.
        """
        try:
            criteria = [getattr(self.model, name) == value for name, value in cursor.items()]
        except AttributeError as e:
            self._logger.warning(
                "Cursor references unknown attribute",
                extra={
                    "entity": self.model.__name__,
                    "cursor": repr(cursor),
                    "operation": "db.find_many",
                },
            )
            raise ValueError(f"Invalid cursor for {self.model.__name__}: {e}") from e

        stmt = (
            select(*[column for column, _ in ordering])
            .where(*self._criteria(where), *criteria)
            .limit(1)
        )
        row = (await session.execute(stmt)).first()
        return None if row is None else tuple(row)

    @staticmethod
    def _apply_ordering(
        statement: Select[Any], ordering: Ordering, *, backward: bool
    ) -> Select[Any]:
        """Apply ORDER BY, reversing every column for backward windows."""
        for column, direction in ordering:
            effective = direction
            if backward:
                effective = "asc" if direction == "desc" else "desc"
            statement = statement.order_by(column.desc() if effective == "desc" else column.asc())
        return statement

    @staticmethod
    def _seek_condition(
        ordering: Ordering,
        position: tuple[Any, ...],
        *,
        backward: bool,
    ) -> ColumnElement[bool]:
        """Keep rows at or past the cursor row in the direction of travel.

        For columns (a, b) with cursor values (v1, v2), moving forward with
        both ascending:
            (a > v1) OR (a = v1 AND b > v2) OR (a = v1 AND b = v2)
        """
        or_conditions = []
        eq_conditions: list[ColumnElement[bool]] = []

        for (column, direction), value in zip(ordering, position, strict=True):
            if value is None:
                continue
            ascending = direction == "asc"
            if ascending != backward:
                compare_cond = column > value
            else:
                compare_cond = column < value

            if eq_conditions:
                or_conditions.append(and_(*eq_conditions, compare_cond))
            else:
                or_conditions.append(compare_cond)
            eq_conditions.append(column == value)

        # The cursor row itself
        or_conditions.append(and_(*eq_conditions))
        return or_(*or_conditions)

    def _pk_attrs(self) -> list[InstrumentedAttribute[Any]]:
        mapper = sa_inspect(self.model)
        return [
            cast(
                "InstrumentedAttribute[Any]",
                getattr(self.model, mapper.get_property_by_column(column).key),
            )
            for column in mapper.primary_key
        ]


__all__ = ["SQLAlchemyStore"]
