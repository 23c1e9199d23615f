"""Page sizes, anchors and fetch windows.

A page size is either ``Bounded(n)`` or ``UNBOUNDED``. Keeping the two
apart means a signed integer only ever encodes direction (in ``Window.take``)
and never doubles as "no limit".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final, Literal

CursorKey = str | int
AnchorDirection = Literal["after", "before"]


@dataclass(slots=True, frozen=True)
class Bounded:
    """Page size limited to ``size`` records (always >= 1)."""

    size: int

    @property
    def overshoot(self) -> int:
        """Records to fetch so that one extra row reveals a further page."""
        return self.size + 1


class Unbounded:
    """Page size covering every matching record."""

    __slots__ = ()
    _instance: Unbounded | None = None

    def __new__(cls) -> Unbounded:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNBOUNDED"

    def __reduce__(self) -> str:
        return "UNBOUNDED"


UNBOUNDED: Final = Unbounded()

PageSize = Bounded | Unbounded


@dataclass(slots=True, frozen=True)
class Anchor:
    """Cursor key paired with a traversal direction.

    Attributes:
        key: Opaque cursor value identifying a record position
        direction: "after" pages forward, "before" pages backward
    """

    key: CursorKey
    direction: AnchorDirection

    @classmethod
    def after(cls, key: CursorKey) -> Anchor:
        return cls(key=key, direction="after")

    @classmethod
    def before(cls, key: CursorKey) -> Anchor:
        return cls(key=key, direction="before")

    @property
    def is_forward(self) -> bool:
        return self.direction == "after"


@dataclass(slots=True, frozen=True)
class Window:
    """Physical fetch parameters sent to a record store.

    Attributes:
        skip: Records to skip, counted from the cursor row when one is set
        take: Signed record count; negative takes records ending before the
            cursor (returned in ascending order). ``None`` takes everything.
        cursor: Store-native cursor descriptor, or None to start at the edge
        backward: Direction of an unbounded take. Ignored when ``take`` is set.

    Example:
        Window(skip=1, take=4, cursor={"id": 3})    # ids 4..7
        Window(skip=1, take=-4, cursor={"id": 8})   # ids 4..7
    """

    skip: int = 0
    take: int | None = None
    cursor: Any = None
    backward: bool = False

    @classmethod
    def forward_from(cls, size: PageSize, *, cursor: Any = None, skip: int = 0) -> Window:
        """Forward window fetching one extra record when ``size`` is bounded."""
        take = size.overshoot if isinstance(size, Bounded) else None
        return cls(skip=skip, take=take, cursor=cursor)

    @classmethod
    def backward_from(cls, size: PageSize, *, cursor: Any, skip: int = 0) -> Window:
        """Backward window fetching one extra record when ``size`` is bounded."""
        take = -size.overshoot if isinstance(size, Bounded) else None
        return cls(skip=skip, take=take, cursor=cursor, backward=True)

    @property
    def is_backward(self) -> bool:
        if self.take is None:
            return self.backward
        return self.take < 0

    @property
    def count(self) -> int | None:
        """Unsigned number of records requested (None for unbounded)."""
        return None if self.take is None else abs(self.take)


__all__ = [
    "UNBOUNDED",
    "Anchor",
    "AnchorDirection",
    "Bounded",
    "CursorKey",
    "PageSize",
    "Unbounded",
    "Window",
]
