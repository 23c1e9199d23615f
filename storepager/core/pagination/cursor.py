"""Cursor codecs.

A codec converts between three things:

1. A cursor key: the opaque str/int value handed to clients
   (``start_cursor``/``end_cursor``) and received back as ``after``/``before``.
2. A store-native cursor descriptor: what the record store needs to locate
   the cursor row, e.g. ``{"id": 42}``.
3. A record: whatever the store returns.

``encode`` turns a key into a descriptor, ``decode`` reads a key from a
record. The default ``IdentityCursorCodec`` uses the record's ``id`` field;
any unique, sorted field works the same way:

    codec = IdentityCursorCodec(field="email")
    codec.encode("a@example.com")   # {"email": "a@example.com"}
    codec.decode(user)              # user.email

Callers who only want to swap one half can pass plain functions:

    codec = CallableCursorCodec(
        encode=lambda key: {"slug": key},
        decode=lambda row: row["slug"],
    )
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable

from storepager.core.exceptions import CursorDecodeError
from storepager.core.pagination.window import CursorKey

SetCursor = Callable[[CursorKey], Any]
GetCursor = Callable[[Any], CursorKey]


@runtime_checkable
class CursorCodec(Protocol):
    """Pair of pure functions mapping keys to descriptors and records to keys."""

    def encode(self, key: CursorKey) -> Any:
        """Build the store-native cursor descriptor for ``key``."""
        ...

    def decode(self, record: Any) -> CursorKey:
        """Read the cursor key from ``record``.

        Raises:
            CursorDecodeError: If the record does not carry the key
        """
        ...


def _checked_key(value: Any, field: str | None) -> CursorKey:
    # bool is an int subclass but never a meaningful cursor
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise CursorDecodeError(
            f"Cursor value must be a str or int, got {type(value).__name__}",
            field=field,
        )
    return value


class IdentityCursorCodec:
    """Cursor over a single record field (``id`` by default).

    Records may be mappings or objects; the field is read by key first,
    then by attribute.
    """

    __slots__ = ("field",)

    def __init__(self, field: str = "id") -> None:
        self.field = field

    def encode(self, key: CursorKey) -> dict[str, CursorKey]:
        return {self.field: key}

    def decode(self, record: Any) -> CursorKey:
        if isinstance(record, Mapping):
            if self.field not in record:
                raise self._missing()
            value = record[self.field]
        else:
            try:
                value = getattr(record, self.field)
            except AttributeError as e:
                raise self._missing() from e
        return _checked_key(value, self.field)

    def _missing(self) -> CursorDecodeError:
        return CursorDecodeError(
            f"The query must return a '{self.field}' field to perform the cursor conversion",
            field=self.field,
        )

    def __repr__(self) -> str:
        return f"IdentityCursorCodec(field={self.field!r})"


class CallableCursorCodec:
    """Codec built from caller-supplied ``set_cursor``/``get_cursor`` functions.

    Either function may be omitted, in which case ``fallback`` provides it.
    Lookup failures inside ``get_cursor`` surface as CursorDecodeError.
    """

    __slots__ = ("_decode", "_encode", "fallback")

    def __init__(
        self,
        encode: SetCursor | None = None,
        decode: GetCursor | None = None,
        *,
        fallback: CursorCodec | None = None,
    ) -> None:
        self.fallback = fallback or IdentityCursorCodec()
        self._encode = encode
        self._decode = decode

    def encode(self, key: CursorKey) -> Any:
        if self._encode is None:
            return self.fallback.encode(key)
        return self._encode(key)

    def decode(self, record: Any) -> CursorKey:
        if self._decode is None:
            return self.fallback.decode(record)
        try:
            value = self._decode(record)
        except (LookupError, AttributeError) as e:
            raise CursorDecodeError(f"get_cursor failed: {e}") from e
        return _checked_key(value, None)


def resolve_codec(
    codec: CursorCodec | None = None,
    *,
    set_cursor: SetCursor | None = None,
    get_cursor: GetCursor | None = None,
    field: str = "id",
) -> CursorCodec:
    """Combine an optional codec with optional per-function overrides.

    Args:
        codec: Base codec (defaults to ``IdentityCursorCodec(field)``)
        set_cursor: Replacement for ``codec.encode``
        get_cursor: Replacement for ``codec.decode``
        field: Identity field used when no base codec is given

    Returns:
        The base codec itself when nothing is overridden, otherwise a
        CallableCursorCodec delegating the remaining half to it.
    """
    base = codec or IdentityCursorCodec(field)
    if set_cursor is None and get_cursor is None:
        return base
    return CallableCursorCodec(set_cursor, get_cursor, fallback=base)


__all__ = [
    "CallableCursorCodec",
    "CursorCodec",
    "GetCursor",
    "IdentityCursorCodec",
    "SetCursor",
    "resolve_codec",
]
