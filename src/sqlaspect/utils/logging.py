"""Structured logging for sqlaspect.

All modules log through structlog on top of stdlib loggers in the
``sqlaspect`` namespace. Each event is rendered as one JSON object carrying an
ISO-8601 timestamp, the level and the logger name. Keys that look like
credentials are masked before rendering. Statement parameters are never
passed to the logger at all; events only carry counts.

Output goes to stdout and, when enabled, to a daily rotating file:
- SQLASPECT_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL. Default: INFO
- SQLASPECT_LOG_TO_FILE: Also write ``sqlaspect-YYYYMMDD.log``. Default: off
- SQLASPECT_LOG_FILE_DIR: Directory for log files. Default: logs/

Usage:
    >>> from sqlaspect.utils.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("statement.compiled", dialect="postgres", param_count=3)
"""

import logging
import re
import sys
from datetime import date
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from sqlaspect.config import Settings, get_settings

PACKAGE_LOGGER = "sqlaspect"
REDACTED_VALUE = "[REDACTED]"

_SENSITIVE_KEY = re.compile(r"password|token|api_key|secret|^dsn$", re.IGNORECASE)

# Handlers added by configure_logging, replaced on every call
_installed_handlers: List[logging.Handler] = []


def is_sensitive_key(key: Any) -> bool:
    return isinstance(key, str) and _SENSITIVE_KEY.search(key) is not None


def sanitize_for_logging(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``data`` with credential-like values masked.

    Nested mappings are sanitized as well; the input is left untouched.

    Example:
        >>> sanitize_for_logging({"password": "pw", "dialect": "sqlite"})
        {'password': '[REDACTED]', 'dialect': 'sqlite'}
    """
    clean: Dict[str, Any] = {}
    for key, value in data.items():
        if is_sensitive_key(key):
            clean[key] = REDACTED_VALUE
        elif isinstance(value, Mapping):
            clean[key] = sanitize_for_logging(value)
        else:
            clean[key] = value
    return clean


def sanitization_processor(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    return sanitize_for_logging(event_dict)


def log_file_path(log_dir: Path, day: Optional[date] = None) -> Path:
    """Return the log file for ``day`` (default today), creating ``log_dir``."""
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / f"sqlaspect-{(day or date.today()):%Y%m%d}.log"


def _build_handlers(settings: Settings) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.log_to_file:
        handlers.append(
            TimedRotatingFileHandler(
                filename=str(log_file_path(Path(settings.log_file_dir))),
                when="midnight",
                backupCount=30,
                encoding="utf-8",
            )
        )
    return handlers


PROCESSORS: List[Processor] = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    sanitization_processor,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.JSONRenderer(),
]


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Install handlers on the ``sqlaspect`` logger and configure structlog.

    Runs once on import with the current settings. Calling it again replaces
    the handlers of the previous call, so a changed level or log file takes
    effect without duplicating output.

    Args:
        settings: Settings to apply; defaults to ``get_settings()``
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    while _installed_handlers:
        handler = _installed_handlers.pop()
        package_logger.removeHandler(handler)
        handler.close()
    for handler in _build_handlers(settings):
        handler.setLevel(level)
        package_logger.addHandler(handler)
        _installed_handlers.append(handler)

    structlog.configure(
        processors=PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging()


def get_logger(name: str) -> Any:
    """Return a structlog logger backed by the stdlib logger ``name``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> Any:
    """Return the package logger with ``kwargs`` bound to every event.

    Example:
        >>> logger = bind_context(table="users", dialect="postgres")
        >>> logger.info("statement.compiled", param_count=1)
    """
    return structlog.get_logger(PACKAGE_LOGGER).bind(**kwargs)


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "is_sensitive_key",
    "log_file_path",
    "sanitize_for_logging",
    "sanitization_processor",
]
