"""Lazy evaluation support for logging.

Pagination logs a line per request at DEBUG. Building those messages
(formatting windows, counting records) is wasted work in production, so
messages may be passed as callables that only run when the level is enabled:

    logger = get_lazy_logger("storepager.cursor")
    logger.debug(lambda: f"fetched {len(records)} records for {anchor!r}")
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any


class LazyLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter evaluating callable messages and arguments on demand.

    Bound context (``get_lazy_logger(name, model="User")``) is merged into
    each record's ``extra`` underneath any per-call ``extra``.
    """

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None:
        """Log ``msg`` at ``level``, resolving callables only if enabled."""
        if not self.isEnabledFor(level):
            return

        if callable(msg):
            msg = msg()
        if args:
            args = tuple(arg() if callable(arg) else arg for arg in args)

        msg, kwargs = self.process(msg, kwargs)
        # stacklevel 2 points records at the caller, not this adapter
        kwargs.setdefault("stacklevel", 2)
        self.logger.log(level, msg, *args, **kwargs)

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        """Merge bound context beneath per-call ``extra``."""
        if self.extra:
            kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_lazy_logger(name: str, **context: Any) -> LazyLoggerAdapter:
    """Get logger with lazy evaluation support.

    Args:
        name: Logger name (e.g. "storepager.offset")
        **context: Fields bound to every record's ``extra``

    Returns:
        Logger adapter with lazy evaluation support.
    """
    return LazyLoggerAdapter(logging.getLogger(name), context or {})
