"""Pagination settings.

Global defaults applied when a paginate call omits a field. Centralizing them
keeps page sizes consistent across every store and model in a process.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_DEFAULT_PER_PAGE=25, PAGINATION_DEFAULT_LIMIT=50
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from storepager.core.pagination.requests import (
    MAX_SAFE_INTEGER,
    CursorOptions,
    OffsetOptions,
    PaginateOptions,
)


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        default_per_page: Offset page size when a request omits ``per_page``.
            None or -1 returns every record.
        default_limit: Cursor page size when a request omits ``limit``.
            None or -1 returns every record.
        cursor_field: Record field read and written by the default cursor codec.

    Example:
        settings = PaginationSettings(default_per_page=20)
        paginator = Paginator(settings.to_options())
    """

    default_per_page: int | None = Field(
        default=None,
        ge=-1,
        le=MAX_SAFE_INTEGER,
        description="Default offset page size (None or -1 for all records)",
    )
    default_limit: int | None = Field(
        default=None,
        ge=-1,
        le=MAX_SAFE_INTEGER,
        description="Default cursor page size (None or -1 for all records)",
    )
    cursor_field: str = Field(
        default="id",
        min_length=1,
        description="Record field used by the default cursor codec",
    )

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    @field_validator("default_per_page", "default_limit")
    @classmethod
    def _reject_zero(cls, value: int | None) -> int | None:
        if value == 0:
            raise ValueError("page size must be positive, or -1 for all records")
        return value

    def to_options(self) -> PaginateOptions:
        """Build Paginator defaults from these settings."""
        return PaginateOptions(
            offset=OffsetOptions(per_page=self.default_per_page),
            cursor=CursorOptions(limit=self.default_limit, cursor_field=self.cursor_field),
        )
