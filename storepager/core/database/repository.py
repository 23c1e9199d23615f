"""Per-model pagination entry point for SQLAlchemy models.

Gives every model a ``paginate`` method without callers having to build a
store or query object themselves.

Example:
    from storepager.core.database import PaginatedRepository

    class UserRepository(PaginatedRepository[User]):
        '''User-specific queries beyond pagination.'''

    users = UserRepository(User, session_factory)

    page = await users.paginate(offset={"page": 1, "per_page": 20})
    page = await users.paginate(
        where=[User.name.is_not(None)],
        order_by=[(User.email, "asc")],
        cursor={
            "after": "a@example.com",
            "limit": 10,
            "set_cursor": lambda email: {"email": email},
            "get_cursor": lambda user: user.email,
        },
    )
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from storepager.core.database.store import SQLAlchemyStore
from storepager.core.pagination.paginator import Paginator
from storepager.core.pagination.store import PageQuery

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from storepager.core.pagination.schemas import CursorPage, OffsetPage

T = TypeVar("T")


class PaginatedRepository(Generic[T]):
    """Thin repository exposing offset and cursor pagination for one model.

    Provides:
        - paginate(where, order_by, options, offset=...) -> OffsetPage[T]
        - paginate(where, order_by, options, cursor=...) -> CursorPage[T]
    """

    __slots__ = ("model", "paginator", "store")

    def __init__(
        self,
        model: type[T],
        session_factory: async_sessionmaker[AsyncSession],
        *,
        paginator: Paginator | None = None,
    ) -> None:
        """Initialize repository.

        Args:
            model: SQLAlchemy model class (e.g., User, Post)
            session_factory: Factory producing AsyncSession instances
            paginator: Paginator holding defaults (built from settings if omitted)
        """
        self.model = model
        self.store = SQLAlchemyStore(session_factory, model)
        self.paginator = paginator or Paginator.from_settings()

    async def paginate(
        self,
        *,
        where: Any = None,
        order_by: Sequence[Any] = (),
        options: Iterable[Any] | None = None,
        offset: Mapping[str, Any] | bool | None = None,
        cursor: Mapping[str, Any] | bool | None = None,
    ) -> OffsetPage[T] | CursorPage[T]:
        """Paginate this repository's model.

        Args:
            where: Criterion or sequence of criteria
            order_by: ``(column, "asc" | "desc")`` tuples
            options: Loader options applied to returned rows only
            offset: Offset request fields or True
            cursor: Cursor request fields or True

        Returns:
            OffsetPage or CursorPage of model instances
        """
        query = PageQuery(
            where=where,
            order_by=tuple(order_by),
            options=tuple(options) if options else None,
        )
        return await self.paginator.paginate(self.store, query, offset=offset, cursor=cursor)


__all__ = ["PaginatedRepository"]
