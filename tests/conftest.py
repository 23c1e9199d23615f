"""Pytest configuration and shared fixtures.

Organization:
    - Record Fixtures: deterministic in-memory records and stores
    - Paginator Fixtures: paginators with and without defaults
    - Settings Fixtures: environment isolation for PaginationSettings
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from storepager.core.pagination import InMemoryStore, PageQuery, Paginator
from storepager.core.settings import clear_all_caches

NUMBER_OF_RECORDS = 10


def make_records(count: int = NUMBER_OF_RECORDS) -> list[dict[str, Any]]:
    """Build ``count`` user-like records with ids 1..count.

    Emails sort in the reverse order of ids so custom-cursor tests can
    tell the two orders apart.
    """
    return [
        {
            "id": i,
            "name": f"user-{i}",
            "email": f"{chr(ord('a') + count - i)}-user{i}@example.com",
        }
        for i in range(1, count + 1)
    ]


class FailingStore:
    """Store whose every call fails with the same exception instance."""

    def __init__(self, error: Exception) -> None:
        self.error = error
        self.calls = 0

    async def find_many(self, query: PageQuery, window: Any) -> list[Any]:
        self.calls += 1
        raise self.error

    async def count(self, where: Any) -> int:
        self.calls += 1
        raise self.error


# ============================================================================
# Record Fixtures
# ============================================================================


@pytest.fixture
def records() -> list[dict[str, Any]]:
    """Ten records ordered by id 1..10."""
    return make_records()


@pytest.fixture
def store(records: list[dict[str, Any]]) -> InMemoryStore:
    """In-memory store over ``records`` with call counters."""
    return InMemoryStore(records)


@pytest.fixture
def empty_store() -> InMemoryStore:
    """In-memory store without records."""
    return InMemoryStore()


@pytest.fixture
def by_id() -> PageQuery:
    """Query ordering by id ascending."""
    return PageQuery(order_by=[("id", "asc")])


# ============================================================================
# Paginator Fixtures
# ============================================================================


@pytest.fixture
def paginator() -> Paginator:
    """Paginator without configured defaults."""
    return Paginator()


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep PAGINATION_* variables and cached settings out of every test."""
    for name in (
        "PAGINATION_DEFAULT_PER_PAGE",
        "PAGINATION_DEFAULT_LIMIT",
        "PAGINATION_CURSOR_FIELD",
    ):
        monkeypatch.delenv(name, raising=False)
    clear_all_caches()
    yield
    clear_all_caches()


@pytest.fixture
def failing_store() -> FailingStore:
    """Store raising ``RuntimeError("store unavailable")`` on every call."""
    return FailingStore(RuntimeError("store unavailable"))
