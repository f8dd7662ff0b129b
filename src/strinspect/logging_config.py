"""structlog setup for the command line tool.

Log records go to stderr so the aligned view on stdout stays clean. The
default level is WARNING; `--verbose` on the CLI drops it to DEBUG.
"""

from __future__ import annotations

import logging
import sys

import structlog


def setup_logging(level: str = "WARNING", json_logs: bool = False) -> None:
    """Configure structlog with console or JSON rendering at `level`."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            (
                structlog.processors.JSONRenderer()
                if json_logs
                else structlog.dev.ConsoleRenderer(colors=False)
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.typing.FilteringBoundLogger:
    return structlog.get_logger(name)
