"""
Logging configuration for the Order Report Proxy
"""

from dataclasses import dataclass

from pydantic import BaseModel


@dataclass
class FileHandlerConfig:
    """File handler configuration"""

    enabled: bool = False
    log_dir: str = "logs"
    max_file_size: int = 10485760  # 10MB
    backup_count: int = 5


@dataclass
class ConsoleHandlerConfig:
    """Console handler configuration"""

    enabled: bool = True
    level: str = "INFO"


class LoggingConfig(BaseModel):
    """Complete logging configuration"""

    level: str = "INFO"
    format: str = "console"  # console, json or simple

    file: FileHandlerConfig = FileHandlerConfig()
    console: ConsoleHandlerConfig = ConsoleHandlerConfig()

    @classmethod
    def from_settings(cls, logging_settings) -> "LoggingConfig":
        """Build the config from the LoggingSettings group"""
        return cls(
            level=logging_settings.LOG_LEVEL,
            format=logging_settings.LOG_FORMAT,
            file=FileHandlerConfig(
                enabled=logging_settings.LOG_FILE_ENABLED,
                log_dir=logging_settings.LOG_DIR,
            ),
            console=ConsoleHandlerConfig(level=logging_settings.LOG_LEVEL),
        )
