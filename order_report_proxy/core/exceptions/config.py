"""
Configuration errors, raised at startup before the server binds
"""

from typing import Optional

from .base import OrderReportProxyException


class ConfigurationError(OrderReportProxyException):
    """Invalid or incomplete service configuration"""

    error_code = "CONFIG_ERROR"


class EnvironmentVariableError(ConfigurationError):
    """A required environment variable is unset or empty"""

    def __init__(self, var_name: str, cause: Optional[Exception] = None):
        super().__init__(
            f"Required environment variable '{var_name}' is not set",
            {"missing_variable": var_name},
            cause,
        )
        self.var_name = var_name
