"""
Root exception of the Order Report Proxy
"""

from typing import Optional, Dict, Any


class OrderReportProxyException(Exception):
    """Base class for errors raised by the proxy itself; subclasses set error_code"""

    error_code = "ORDER_REPORT_PROXY_ERROR"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form used in error responses and log fields"""
        data: Dict[str, Any] = {
            "error_code": self.error_code,
            "message": self.message,
            "exception_type": type(self).__name__,
        }
        if self.details:
            data["details"] = self.details
        if self.cause is not None:
            data["cause"] = str(self.cause)
        return data
