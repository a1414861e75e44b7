"""
Log handler factories
"""

import logging
import logging.handlers
from pathlib import Path
from typing import List

from .config import LoggingConfig
from .formatters import build_formatter

LOG_FILE_NAME = "order-report-proxy.log"


def rotating_file_handler(
    log_dir: str, max_bytes: int, backup_count: int, level: int
) -> logging.Handler:
    """JSON lines, rotated by size"""
    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        directory / LOG_FILE_NAME, maxBytes=max_bytes, backupCount=backup_count
    )
    handler.setLevel(level)
    handler.setFormatter(build_formatter("json"))
    return handler


def console_handler(level: int, formatter_type: str) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(build_formatter(formatter_type))
    return handler


def build_handlers(config: LoggingConfig) -> List[logging.Handler]:
    """Handlers enabled by the config, file first"""
    handlers: List[logging.Handler] = []

    if config.file.enabled:
        handlers.append(
            rotating_file_handler(
                config.file.log_dir,
                config.file.max_file_size,
                config.file.backup_count,
                logging.getLevelName(config.level.upper()),
            )
        )

    if config.console.enabled:
        handlers.append(
            console_handler(
                logging.getLevelName(config.console.level.upper()), config.format
            )
        )

    return handlers
