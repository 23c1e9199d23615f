"""Unit tests for pagination settings."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from storepager.core.pagination import InMemoryStore, PageQuery, Paginator, paginate
from storepager.core.pagination.requests import normalize_request
from storepager.core.pagination.window import UNBOUNDED, Bounded
from storepager.core.settings import (
    PaginationSettings,
    clear_all_caches,
    get_pagination_settings,
)


@pytest.mark.unit
class TestPaginationSettings:
    """Test suite for PaginationSettings."""

    def test_defaults(self):
        """Without configuration every size is unbounded and cursors use id."""
        settings = PaginationSettings()

        assert settings.default_per_page is None
        assert settings.default_limit is None
        assert settings.cursor_field == "id"

    def test_env_prefix(self, monkeypatch):
        """PAGINATION_* environment variables configure the defaults."""
        monkeypatch.setenv("PAGINATION_DEFAULT_PER_PAGE", "25")
        monkeypatch.setenv("PAGINATION_DEFAULT_LIMIT", "-1")
        monkeypatch.setenv("PAGINATION_CURSOR_FIELD", "uuid")

        settings = PaginationSettings()

        assert settings.default_per_page == 25
        assert settings.default_limit == -1
        assert settings.cursor_field == "uuid"

    def test_frozen(self):
        """Settings instances are immutable."""
        settings = PaginationSettings()

        with pytest.raises(ValidationError):
            settings.default_per_page = 5

    @pytest.mark.parametrize("field", ["default_per_page", "default_limit"])
    @pytest.mark.parametrize("value", [0, -2])
    def test_invalid_sizes(self, field, value):
        """Zero and negative sizes other than -1 are rejected."""
        with pytest.raises(ValidationError):
            PaginationSettings(**{field: value})

    def test_empty_cursor_field(self):
        """The cursor field must name something."""
        with pytest.raises(ValidationError):
            PaginationSettings(cursor_field="")

    def test_to_options(self):
        """Settings convert into Paginator defaults."""
        options = PaginationSettings(
            default_per_page=10, default_limit=5, cursor_field="slug"
        ).to_options()

        assert options.offset.per_page == 10
        assert options.cursor.limit == 5
        assert options.cursor.cursor_field == "slug"


@pytest.mark.unit
class TestSettingsLoader:
    """Tests for the cached loader."""

    def test_cached(self):
        """Repeated calls return the same instance."""
        assert get_pagination_settings() is get_pagination_settings()

    def test_clear_all_caches(self, monkeypatch):
        """Clearing the cache picks up changed environment variables."""
        assert get_pagination_settings().default_per_page is None

        monkeypatch.setenv("PAGINATION_DEFAULT_PER_PAGE", "3")
        assert get_pagination_settings().default_per_page is None

        clear_all_caches()
        assert get_pagination_settings().default_per_page == 3


@pytest.mark.unit
class TestSettingsDrivenPagination:
    """Tests for paginators built from settings."""

    def test_from_settings(self):
        """from_settings copies the configured sizes."""
        paginator = Paginator.from_settings(PaginationSettings(default_per_page=4))

        assert paginator.defaults.offset.per_page == 4
        assert paginator.defaults.cursor.limit is None

    @pytest.mark.asyncio
    async def test_module_paginate_uses_environment(self, monkeypatch, records, by_id):
        """The module-level paginate reads defaults from the environment."""
        monkeypatch.setenv("PAGINATION_DEFAULT_PER_PAGE", "4")
        monkeypatch.setenv("PAGINATION_DEFAULT_LIMIT", "2")
        clear_all_caches()
        store = InMemoryStore(records)

        offset_page = await paginate(store, by_id, offset=True)
        cursor_page = await paginate(store, by_id, cursor={"after": 5})

        assert offset_page.meta.total_pages == 3
        assert [row["id"] for row in cursor_page.data] == [6, 7]

    @pytest.mark.asyncio
    async def test_module_paginate_unbounded_by_default(self, store):
        """Without configuration the module-level paginate returns everything."""
        page = await paginate(store, PageQuery(order_by=[("id", "asc")]), offset=True)

        assert page.meta.page_count == 10
        assert page.meta.total_pages == 1

    def test_to_options_sizes(self):
        """-1 and None both normalize to unbounded requests."""
        options = PaginationSettings(default_per_page=-1, default_limit=7).to_options()

        assert normalize_request({"offset": True}, options).per_page is UNBOUNDED
        assert normalize_request({"cursor": True}, options).limit == Bounded(7)
