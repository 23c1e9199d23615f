"""Unit tests for offset pagination over the in-memory store."""
from __future__ import annotations

import asyncio
import logging

import pytest

from storepager.core.exceptions import PaginationValidationError
from storepager.core.pagination import (
    InMemoryStore,
    OffsetOptions,
    OffsetPage,
    PageQuery,
    PaginateOptions,
    Paginator,
)


def ids(page) -> list[int]:
    return [row["id"] for row in page.data]


class GatedStore(InMemoryStore):
    """Store whose find_many only completes once count has started."""

    def __init__(self, records) -> None:
        super().__init__(records)
        self.counting = asyncio.Event()

    async def find_many(self, query, window):
        await self.counting.wait()
        return await super().find_many(query, window)

    async def count(self, where):
        self.counting.set()
        return await super().count(where)


# ──────────────────────────────────────────────────────────────
# Pages and metadata
# ──────────────────────────────────────────────────────────────


@pytest.mark.unit
class TestOffsetPages:
    """Tests for page contents and OffsetMeta."""

    @pytest.mark.asyncio
    async def test_first_page(self, paginator, store, by_id):
        """Page 1 should hold the first per_page records."""
        page = await paginator.paginate(store, by_id, offset={"page": 1, "per_page": 3})

        assert isinstance(page, OffsetPage)
        assert ids(page) == [1, 2, 3]
        assert page.meta.total_count == 10
        assert page.meta.page_count == 3
        assert page.meta.total_pages == 4
        assert page.meta.current_page == 1
        assert page.meta.previous_page is None
        assert page.meta.next_page == 2

    @pytest.mark.asyncio
    async def test_last_page(self, paginator, store, by_id):
        """The last page may be short and has no next page."""
        page = await paginator.paginate(store, by_id, offset={"page": 4, "per_page": 3})

        assert ids(page) == [10]
        assert page.meta.page_count == 1
        assert page.meta.previous_page == 3
        assert page.meta.next_page is None

    @pytest.mark.asyncio
    async def test_pages_partition_the_records(self, paginator, store, by_id):
        """Concatenating every page should give each record exactly once."""
        first = await paginator.paginate(store, by_id, offset={"per_page": 3})
        seen = list(ids(first))
        for number in range(2, first.meta.total_pages + 1):
            page = await paginator.paginate(
                store, by_id, offset={"page": number, "per_page": 3}
            )
            seen.extend(ids(page))

        assert seen == list(range(1, 11))

    @pytest.mark.asyncio
    async def test_fetch_and_count_per_request(self, paginator, store, by_id):
        """An in-range page costs one fetch and one count."""
        await paginator.paginate(store, by_id, offset={"page": 2, "per_page": 3})

        assert store.find_many_calls == 1
        assert store.count_calls == 1

    @pytest.mark.asyncio
    async def test_count_uses_the_filter(self, paginator, store):
        """total_count should count only matching records."""
        evens = PageQuery(where=lambda row: row["id"] % 2 == 0, order_by=[("id", "asc")])

        page = await paginator.paginate(store, evens, offset={"page": 2, "per_page": 2})

        assert ids(page) == [6, 8]
        assert page.meta.total_count == 5
        assert page.meta.total_pages == 3

    @pytest.mark.asyncio
    async def test_descending_order(self, paginator, store):
        """Pages follow the query's ordering."""
        query = PageQuery(order_by=[("id", "desc")])

        page = await paginator.paginate(store, query, offset={"per_page": 3})

        assert ids(page) == [10, 9, 8]


# ──────────────────────────────────────────────────────────────
# Edges
# ──────────────────────────────────────────────────────────────


@pytest.mark.unit
class TestOffsetEdges:
    """Tests for empty sets, clamping and unbounded sizes."""

    @pytest.mark.asyncio
    async def test_no_records_is_one_empty_page(self, paginator, empty_store, by_id):
        """Zero records still report a single page."""
        page = await paginator.paginate(empty_store, by_id, offset={"per_page": 5})

        assert page.data == []
        assert page.meta.total_count == 0
        assert page.meta.total_pages == 1
        assert page.meta.current_page == 1
        assert page.meta.previous_page is None
        assert page.meta.next_page is None

    @pytest.mark.asyncio
    async def test_past_the_end_on_empty_store(self, paginator, empty_store, by_id):
        """Any page of an empty set clamps to page 1 without refetching."""
        page = await paginator.paginate(empty_store, by_id, offset={"page": 3, "per_page": 5})

        assert page.meta.current_page == 1
        assert empty_store.find_many_calls == 1

    @pytest.mark.asyncio
    async def test_past_the_end_serves_last_page(self, paginator, store, by_id):
        """A page beyond the end returns the last page's records."""
        page = await paginator.paginate(store, by_id, offset={"page": 9, "per_page": 3})

        assert ids(page) == [10]
        assert page.meta.current_page == 4
        assert page.meta.page_count == 1
        assert page.meta.next_page is None
        assert store.find_many_calls == 2

    @pytest.mark.asyncio
    async def test_clamp_is_logged(self, paginator, store, by_id, caplog):
        """Clamping should be visible at debug level."""
        with caplog.at_level(logging.DEBUG, logger="storepager.offset"):
            await paginator.paginate(store, by_id, offset={"page": 9, "per_page": 3})

        clamped = [r for r in caplog.records if r.getMessage() == "Offset page clamped"]
        assert len(clamped) == 1
        assert clamped[0].requested_page == 9
        assert clamped[0].current_page == 4

    @pytest.mark.parametrize("per_page", [-1, "unbounded", None])
    @pytest.mark.asyncio
    async def test_unbounded_is_one_page(self, paginator, store, by_id, per_page):
        """-1, "unbounded" and omission all return every record."""
        page = await paginator.paginate(store, by_id, offset={"per_page": per_page})

        assert ids(page) == list(range(1, 11))
        assert page.meta.total_pages == 1
        assert page.meta.next_page is None

    @pytest.mark.asyncio
    async def test_unbounded_page_two_clamps(self, paginator, store, by_id):
        """Page 2 of an unbounded listing is page 1."""
        page = await paginator.paginate(store, by_id, offset={"page": 2, "per_page": -1})

        assert page.meta.current_page == 1
        assert ids(page) == list(range(1, 11))

    @pytest.mark.asyncio
    async def test_offset_true(self, paginator, store, by_id):
        """offset=True should use defaults for every field."""
        page = await paginator.paginate(store, by_id, offset=True)

        assert page.meta.current_page == 1
        assert page.meta.page_count == 10


# ──────────────────────────────────────────────────────────────
# Defaults, concurrency and errors
# ──────────────────────────────────────────────────────────────


@pytest.mark.unit
class TestOffsetBehaviour:
    """Tests for defaults, concurrent reads and failures."""

    @pytest.mark.asyncio
    async def test_default_per_page(self, store, by_id):
        """A configured per_page applies when the call omits it."""
        paginator = Paginator(PaginateOptions(offset=OffsetOptions(per_page=4)))

        page = await paginator.paginate(store, by_id, offset={"page": 3})

        assert ids(page) == [9, 10]
        assert page.meta.total_pages == 3

    @pytest.mark.asyncio
    async def test_explicit_per_page_overrides_default(self, store, by_id):
        """An explicit per_page should win over the default."""
        paginator = Paginator(PaginateOptions(offset=OffsetOptions(per_page=4)))

        page = await paginator.paginate(store, by_id, offset={"per_page": 5})

        assert page.meta.total_pages == 2

    @pytest.mark.asyncio
    async def test_fetch_and_count_run_concurrently(self, paginator, records, by_id):
        """The page fetch must not wait for the count to finish first."""
        store = GatedStore(records)

        page = await asyncio.wait_for(
            paginator.paginate(store, by_id, offset={"per_page": 2}),
            timeout=1,
        )

        assert ids(page) == [1, 2]

    @pytest.mark.asyncio
    async def test_invalid_page_never_reaches_the_store(self, paginator, store, by_id):
        """Validation fails before any store call."""
        with pytest.raises(PaginationValidationError):
            await paginator.paginate(store, by_id, offset={"page": 0})

        assert store.calls == 0

    @pytest.mark.asyncio
    async def test_rejection_is_logged(self, paginator, store, by_id, caplog):
        """Rejected requests are logged with the offending field."""
        with caplog.at_level(logging.INFO, logger="storepager.paginator"):
            with pytest.raises(PaginationValidationError):
                await paginator.paginate(store, by_id, offset={"per_page": 0})

        rejected = [r for r in caplog.records if r.getMessage() == "Pagination request rejected"]
        assert len(rejected) == 1
        assert rejected[0].field == "per_page"

    @pytest.mark.asyncio
    async def test_store_error_propagates(self, paginator, failing_store):
        """Store exceptions should reach the caller unchanged."""
        with pytest.raises(RuntimeError) as exc_info:
            await paginator.paginate(failing_store, offset={"per_page": 2})

        assert exc_info.value is failing_store.error
