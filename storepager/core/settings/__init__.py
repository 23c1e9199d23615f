"""Pydantic Settings v2 configuration.

Import settings via the cached loader:
    from storepager.core.settings import get_pagination_settings

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables (PAGINATION_*)
    3. .env file
"""

from __future__ import annotations

from .loader import clear_all_caches, get_pagination_settings
from .pagination import PaginationSettings

__all__ = [
    "PaginationSettings",
    "clear_all_caches",
    "get_pagination_settings",
]
