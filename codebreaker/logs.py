"""
structlog setup shared by the CLI apps and tests.

Library modules just call structlog.get_logger(__name__); nothing is
configured on import. Apps call configure_logging() once at startup.
"""

from __future__ import annotations
import logging
import sys

import structlog


def configure_logging(level: str = "WARNING") -> None:
    """
    Route structlog events at `level` and above to stderr as console lines.
    stdout stays free for the apps' own output.
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
