"""
Structured logger and logging bootstrap for the Order Report Proxy
"""

import logging
from typing import Any, Dict, Optional

from .config import LoggingConfig
from .handlers import build_handlers

_loggers: Dict[str, "StructuredLogger"] = {}

# Chatty third-party loggers; every Shopify call would otherwise log twice
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def _render_value(value: Any) -> str:
    if isinstance(value, str) and " " in value:
        return f'"{value}"'
    return str(value)


class StructuredLogger:
    """
    Thin wrapper over a stdlib logger accepting keyword fields

    ``logger.info("Fetching orders", limit=50)`` is emitted as
    ``Fetching orders | limit=50``; the raw fields also travel on the record
    as ``extra_fields`` for the JSON formatter. None values are dropped.
    """

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    @property
    def name(self) -> str:
        return self._logger.name

    def _format_message(self, message: str, **fields) -> str:
        parts = [
            f"{key}={_render_value(value)}"
            for key, value in fields.items()
            if value is not None
        ]
        if not parts:
            return message
        return " | ".join([message, *parts])

    def _log(self, level: int, message: str, exc_info: bool = False, **fields):
        if not self._logger.isEnabledFor(level):
            return
        self._logger.log(
            level,
            self._format_message(message, **fields),
            exc_info=exc_info,
            extra={"extra_fields": {k: v for k, v in fields.items() if v is not None}},
            stacklevel=3,
        )

    def debug(self, message: str, **fields):
        self._log(logging.DEBUG, message, **fields)

    def info(self, message: str, **fields):
        self._log(logging.INFO, message, **fields)

    def warning(self, message: str, **fields):
        self._log(logging.WARNING, message, **fields)

    def error(self, message: str, **fields):
        self._log(logging.ERROR, message, **fields)

    def critical(self, message: str, **fields):
        self._log(logging.CRITICAL, message, **fields)

    def exception(self, message: str, **fields):
        """Error level, with the active exception's traceback attached"""
        self._log(logging.ERROR, message, exc_info=True, **fields)


def setup_logging(config: Optional[LoggingConfig] = None) -> None:
    """Replace the root handlers with the ones enabled by ``config``"""
    config = config or LoggingConfig()

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    root_logger.setLevel(config.level.upper())
    for handler in build_handlers(config):
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    get_logger(__name__).info(
        "Logging configured", level=config.level, format=config.format
    )


def get_logger(name: str) -> StructuredLogger:
    """Cached structured logger for a module"""
    if name not in _loggers:
        _loggers[name] = StructuredLogger(logging.getLogger(name))
    return _loggers[name]
