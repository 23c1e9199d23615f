"""Pagination strategies: offset (page number) and cursor (anchor relative)."""

from storepager.core.pagination.strategies.cursor import CursorStrategy
from storepager.core.pagination.strategies.offset import OffsetStrategy, offset_window

__all__ = ["CursorStrategy", "OffsetStrategy", "offset_window"]
