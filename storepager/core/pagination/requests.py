"""Pagination request normalization.

Raw requests are plain mappings, the way callers naturally write them:

    {"offset": {"page": 2, "per_page": 20}}
    {"offset": True}                               # defaults only
    {"cursor": {"after": 42, "limit": 10}}
    {"cursor": {"before": "b@example.com", "get_cursor": by_email, "set_cursor": email_key}}

``normalize_request`` validates such a mapping, merges it over the
configured ``PaginateOptions`` (explicit fields win, nothing is mutated)
and returns exactly one of ``OffsetRequest`` / ``CursorRequest``.
All checks run before any store access.

Page sizes accept a positive integer, ``-1`` or ``"unbounded"``; the last
two (and omission, absent a default) mean "every record".
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Annotated, Any, Literal, TypeVar

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError

from storepager.core.exceptions import PaginationValidationError
from storepager.core.pagination.cursor import CursorCodec, resolve_codec
from storepager.core.pagination.window import (
    UNBOUNDED,
    Anchor,
    Bounded,
    PageSize,
)

# Largest integer a JSON number round-trips exactly
MAX_SAFE_INTEGER = 2**53 - 1

UNBOUNDED_SENTINEL = "unbounded"


def _check_page_size(value: int | str | None) -> int | str | None:
    if value is None or value == UNBOUNDED_SENTINEL or value == -1:
        return value
    if value < 1:
        raise ValueError("must be a positive integer, or -1 for all records")
    if value > MAX_SAFE_INTEGER:
        raise ValueError(f"Unable to fit value {value} into a safe integer")
    return value


RawPageSize = Annotated[
    StrictInt | Literal["unbounded"] | None,
    AfterValidator(_check_page_size),
]


def _check_codec(value: Any) -> Any:
    if value is not None and not isinstance(value, CursorCodec):
        raise ValueError("codec must provide encode() and decode()")
    return value


CodecField = Annotated[Any, AfterValidator(_check_codec)]


def to_page_size(value: int | str | None) -> PageSize:
    """Convert a validated raw page size into Bounded/UNBOUNDED."""
    if value is None or value == UNBOUNDED_SENTINEL or value == -1:
        return UNBOUNDED
    return Bounded(int(value))


# ──────────────────────────────────────────────────────────────
# Configured defaults
# ──────────────────────────────────────────────────────────────


class OffsetOptions(BaseModel):
    """Defaults applied to offset requests that omit a field."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    per_page: RawPageSize = None


class CursorOptions(BaseModel):
    """Defaults applied to cursor requests that omit a field."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    limit: RawPageSize = None
    set_cursor: Callable[..., Any] | None = None
    get_cursor: Callable[..., Any] | None = None
    codec: CodecField = None
    cursor_field: str = Field(default="id", min_length=1)


class PaginateOptions(BaseModel):
    """Global defaults, accepted once when building a Paginator.

    Example:
        options = PaginateOptions(
            offset=OffsetOptions(per_page=25),
            cursor=CursorOptions(limit=50, cursor_field="uuid"),
        )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    offset: OffsetOptions = Field(default_factory=OffsetOptions)
    cursor: CursorOptions = Field(default_factory=CursorOptions)


# ──────────────────────────────────────────────────────────────
# Raw request fields
# ──────────────────────────────────────────────────────────────


class _OffsetFields(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    page: StrictInt = Field(default=1, ge=1, le=MAX_SAFE_INTEGER)
    per_page: RawPageSize = None


class _CursorFields(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    after: StrictStr | StrictInt | None = None
    before: StrictStr | StrictInt | None = None
    limit: RawPageSize = None
    set_cursor: Callable[..., Any] | None = None
    get_cursor: Callable[..., Any] | None = None
    codec: CodecField = None

    @model_validator(mode="after")
    def _exclusive_anchor(self) -> _CursorFields:
        if self.after is not None and self.before is not None:
            raise ValueError(
                "Unable to use cursor-based pagination with 'after' and 'before' "
                "specified at the same time"
            )
        return self


# ──────────────────────────────────────────────────────────────
# Normalized requests
# ──────────────────────────────────────────────────────────────


@dataclass(slots=True, frozen=True)
class OffsetRequest:
    """Validated offset request.

    Attributes:
        page: Requested page (1-indexed)
        per_page: Page size
    """

    page: int = 1
    per_page: PageSize = UNBOUNDED


@dataclass(slots=True, frozen=True)
class CursorRequest:
    """Validated cursor request.

    Attributes:
        anchor: Position to page from, None for the first page
        limit: Page size
        codec: Codec converting between keys, descriptors and records
    """

    codec: CursorCodec
    anchor: Anchor | None = None
    limit: PageSize = UNBOUNDED


PaginationRequest = OffsetRequest | CursorRequest


def _selector(raw: Mapping[str, Any], name: str) -> dict[str, Any] | None:
    value = raw.get(name)
    if value is None or value is False:
        return None
    if value is True:
        return {}
    if not isinstance(value, Mapping):
        raise PaginationValidationError(
            f"Argument {name}: expected a mapping or True, provided {type(value).__name__}",
            field=name,
        )
    # None means "not given" so configured defaults still apply
    return {k: v for k, v in value.items() if v is not None}


def _from_pydantic(error: PydanticValidationError) -> PaginationValidationError:
    first = error.errors()[0]
    loc = first.get("loc") or ()
    field = str(loc[0]) if loc else None
    if first["type"] in {"int_type", "int_parsing", "literal_error", "string_type"}:
        provided = type(first.get("input")).__name__
        message = f"Invalid value provided. Expected Int, provided {provided}"
        if field in {"after", "before"}:
            message = f"Invalid value provided. Expected String or Int, provided {provided}"
    else:
        message = first["msg"].removeprefix("Value error, ")
    if field:
        message = f"Argument {field}: {message}"
    return PaginationValidationError(message, field=field)


M = TypeVar("M", bound=BaseModel)


def _validate(model: type[M], fields: dict[str, Any]) -> M:
    try:
        return model.model_validate(fields)
    except PydanticValidationError as e:
        raise _from_pydantic(e) from e


def normalize_request(
    raw: Mapping[str, Any],
    defaults: PaginateOptions | None = None,
) -> PaginationRequest:
    """Classify and validate a raw pagination request.

    Args:
        raw: Mapping holding exactly one of ``offset`` / ``cursor``
        defaults: Configured defaults for omitted fields

    Returns:
        OffsetRequest or CursorRequest

    Raises:
        PaginationValidationError: If the request is malformed, names both
            or neither selector, or sets both ``after`` and ``before``
    """
    defaults = defaults or PaginateOptions()
    offset = _selector(raw, "offset")
    cursor = _selector(raw, "cursor")

    if offset is not None and cursor is not None:
        raise PaginationValidationError(
            "Unable to use paginate with both 'offset' and 'cursor'"
        )

    if offset is not None:
        fields = _validate(
            _OffsetFields,
            {"per_page": defaults.offset.per_page, **offset},
        )
        return OffsetRequest(page=fields.page, per_page=to_page_size(fields.per_page))

    if cursor is not None:
        fields = _validate(
            _CursorFields,
            {
                "limit": defaults.cursor.limit,
                "set_cursor": defaults.cursor.set_cursor,
                "get_cursor": defaults.cursor.get_cursor,
                "codec": defaults.cursor.codec,
                **cursor,
            },
        )
        anchor = None
        if fields.after is not None:
            anchor = Anchor.after(fields.after)
        elif fields.before is not None:
            anchor = Anchor.before(fields.before)
        codec = resolve_codec(
            fields.codec,
            set_cursor=fields.set_cursor,
            get_cursor=fields.get_cursor,
            field=defaults.cursor.cursor_field,
        )
        return CursorRequest(codec=codec, anchor=anchor, limit=to_page_size(fields.limit))

    raise PaginationValidationError("Unable to use paginate without 'offset' or 'cursor'")


__all__ = [
    "MAX_SAFE_INTEGER",
    "UNBOUNDED_SENTINEL",
    "CursorOptions",
    "CursorRequest",
    "OffsetOptions",
    "OffsetRequest",
    "PaginateOptions",
    "PaginationRequest",
    "normalize_request",
    "to_page_size",
]
