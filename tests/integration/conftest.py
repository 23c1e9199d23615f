"""Shared fixtures for integration tests.

This module provides a file-backed SQLite database (aiosqlite driver) with a
small ``User`` model seeded with ten rows:

    id     1..10
    name   user-{id}
    email  sorts in the reverse order of id
    team   "a" for odd ids, "b" for even ids

Each test gets a fresh database under ``tmp_path``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
import pytest_asyncio
from sqlalchemy import String
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from storepager.core.database import SQLAlchemyStore

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator
else:  # pragma: no cover - runtime placeholders for typing-only imports
    AsyncGenerator = Any

NUMBER_OF_USERS = 10


class Base(DeclarativeBase):
    """Declarative base for integration models."""


class User(Base):
    """User row used to exercise the SQLAlchemy store."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True)
    name: Mapped[str] = mapped_column(String(100))
    team: Mapped[str] = mapped_column(String(10))


@pytest_asyncio.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession]]:
    """Session factory over a freshly seeded database."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'pagination.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        session.add_all(
            [
                User(
                    id=i,
                    name=f"user-{i}",
                    email=f"{chr(ord('a') + NUMBER_OF_USERS - i)}-user{i}@example.com",
                    team="a" if i % 2 else "b",
                )
                for i in range(1, NUMBER_OF_USERS + 1)
            ]
        )
        await session.commit()

    yield factory
    await engine.dispose()


@pytest.fixture
def user_model() -> type[User]:
    """Mapped User class seeded by ``session_factory``."""
    return User


@pytest.fixture
def user_store(session_factory) -> SQLAlchemyStore[User]:
    """SQLAlchemy store over the seeded users table."""
    return SQLAlchemyStore(session_factory, User)
