"""
Logging configuration for storage helper.

Storage components emit single-line, leveled diagnostic records through a
process-wide ``StorageLogger``. Logging is purely observational: turning it
off never changes the outcome of a storage operation.
"""

import logging
import sys
import threading
from typing import Any, List, Optional, cast

import structlog
from structlog.types import FilteringBoundLogger, Processor

LOGGER_NAME = "storage_helper"


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "console",
    cache_logger_on_first_use: bool = False,
) -> None:
    """
    Set up structured logging to stdout.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format (console, json)
        cache_logger_on_first_use: Freeze logger configuration on first use
    """
    level = getattr(logging, log_level.upper())

    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.extend(
            [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
        )
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=cache_logger_on_first_use,
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))

    storage_logger = logging.getLogger(LOGGER_NAME)
    storage_logger.handlers = [console_handler]
    storage_logger.setLevel(level)
    storage_logger.propagate = False


def get_logger(name: str = LOGGER_NAME) -> FilteringBoundLogger:
    """
    Get a structured logger.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return cast(FilteringBoundLogger, structlog.get_logger(name))


class StorageLogger:
    """
    Toggleable logging handle shared by storage components.

    ``StorageLogger.shared()`` returns the process-wide instance, creating it
    on first use. Components accept an explicit instance so tests can inject
    their own.
    """

    _shared: Optional["StorageLogger"] = None
    _shared_lock = threading.Lock()

    def __init__(
        self, logger: Optional[FilteringBoundLogger] = None, enabled: bool = True
    ):
        self._logger = logger
        self._enabled = enabled

    @classmethod
    def shared(cls) -> "StorageLogger":
        """Return the process-wide logger, creating it if needed."""
        if cls._shared is None:
            with cls._shared_lock:
                if cls._shared is None:
                    cls._shared = cls()
        return cls._shared

    @property
    def logger(self) -> FilteringBoundLogger:
        if self._logger is None:
            self._logger = get_logger(LOGGER_NAME)
        return self._logger

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_logging_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def bind(self, **fields: Any) -> "BoundStorageLogger":
        """Return a view of this logger with fields attached to every record."""
        return BoundStorageLogger(self, fields)

    def log(self, level: str, event: str, **fields: Any) -> None:
        if not self._enabled:
            return
        getattr(self.logger, level)(event, **fields)

    def info(self, event: str, **fields: Any) -> None:
        self.log("info", event, **fields)

    def warning(self, event: str, **fields: Any) -> None:
        self.log("warning", event, **fields)

    def error(self, event: str, **fields: Any) -> None:
        self.log("error", event, **fields)


class BoundStorageLogger:
    """StorageLogger view carrying extra context fields.

    The enabled flag is read from the parent on every call.
    """

    def __init__(self, parent: StorageLogger, fields: dict):
        self._parent = parent
        self._fields = fields

    def log(self, level: str, event: str, **fields: Any) -> None:
        self._parent.log(level, event, **{**self._fields, **fields})

    def info(self, event: str, **fields: Any) -> None:
        self.log("info", event, **fields)

    def warning(self, event: str, **fields: Any) -> None:
        self.log("warning", event, **fields)

    def error(self, event: str, **fields: Any) -> None:
        self.log("error", event, **fields)


__all__ = [
    "LOGGER_NAME",
    "BoundStorageLogger",
    "StorageLogger",
    "get_logger",
    "setup_logging",
]
