"""
Log record formatters, selected by LOG_FORMAT (console, json or simple)
"""

import json
import logging
from datetime import datetime, timezone

SERVICE_NAME = "order-report-proxy"


class JSONFormatter(logging.Formatter):
    """One JSON object per line; structured logger fields become top-level keys"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in getattr(record, "extra_fields", {}).items():
            entry.setdefault(key, value)

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Colored single-line output for local development"""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self):
        super().__init__(datefmt="%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, "")
        line = (
            f"{color}{self.formatTime(record, self.datefmt)} "
            f"{record.levelname:<8} {record.name}: {record.getMessage()}{self.RESET}"
        )
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class SimpleFormatter(logging.Formatter):
    """Plain text, for log files read by humans"""

    def __init__(self):
        super().__init__(
            "%(asctime)s %(levelname)s [%(name)s] %(message)s", "%Y-%m-%d %H:%M:%S"
        )


FORMATTERS = {
    "console": ConsoleFormatter,
    "json": JSONFormatter,
    "simple": SimpleFormatter,
}


def build_formatter(formatter_type: str) -> logging.Formatter:
    """Unknown names fall back to the simple formatter"""
    return FORMATTERS.get(formatter_type, SimpleFormatter)()
