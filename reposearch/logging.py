"""structlog setup for the search pipeline.

Every module logs through the shared ``reposearch`` logger. Events are routed
through the standard library logger of the same name so host applications
and pytest's ``caplog`` see them.
"""

from __future__ import annotations

import logging

import structlog

LOGGER_NAME = "reposearch"


def resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_logging(level: int | str = logging.INFO) -> None:
    numeric_level = resolve_level(level)
    logging.basicConfig(
        level=numeric_level,
        format="%(message)s",
        handlers=[logging.StreamHandler()],
    )
    logging.getLogger(LOGGER_NAME).setLevel(numeric_level)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


logger = structlog.get_logger(LOGGER_NAME)

__all__ = ["LOGGER_NAME", "configure_logging", "logger", "resolve_level"]
