"""Logging helpers.

The package logs through the standard library: plain ``logging.getLogger``
for INFO and above, and a lazy adapter for DEBUG lines whose message is
expensive to build. Configure handlers and levels in the host application;
nothing here installs handlers.

    import logging
    from storepager.infra.logging import get_lazy_logger

    logger = logging.getLogger("storepager.paginator")
    lazy_logger = get_lazy_logger("storepager.paginator")
    lazy_logger.debug(lambda: f"window: {describe(window)}")  # Only runs if DEBUG enabled
"""

from storepager.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "LazyLoggerAdapter",
    "get_lazy_logger",
]
