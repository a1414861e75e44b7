"""
Logging module for the Order Report Proxy
"""

from .logger import get_logger, setup_logging, StructuredLogger
from .formatters import JSONFormatter, ConsoleFormatter, SimpleFormatter, build_formatter
from .handlers import build_handlers
from .config import LoggingConfig

__all__ = [
    "get_logger",
    "setup_logging",
    "StructuredLogger",
    "JSONFormatter",
    "ConsoleFormatter",
    "SimpleFormatter",
    "build_formatter",
    "build_handlers",
    "LoggingConfig",
]
