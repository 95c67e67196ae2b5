"""Structured logging for the library and the serverless handler.

Every event is one JSON line on stdout carrying the level, logger name and
an ISO timestamp, plus whatever fields the caller binds (event_id,
category_id, ...).
"""

import logging
import sys

import structlog
from structlog.stdlib import LoggerFactory

from vaquejada.config import get_settings

# Libraries whose request chatter drowns out our own events
QUIET_LOGGERS = ("httpx", "httpcore")

PROCESSORS = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.format_exc_info,
    structlog.processors.JSONRenderer(),
]


def setup_logging(log_level: str | None = None) -> None:
    """Route structlog through stdlib logging as JSON lines.

    Args:
        log_level: Level name such as "DEBUG"; defaults to the LOG_LEVEL setting
    """
    level_name = (log_level or get_settings().LOG_LEVEL).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name}")

    structlog.configure(
        processors=PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
