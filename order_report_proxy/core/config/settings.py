"""
Application settings and configuration management
"""

from typing import List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from order_report_proxy.core.exceptions import (
    ConfigurationError,
    EnvironmentVariableError,
)

SHOPIFY_MAX_PAGE_SIZE = 250
GOOGLE_SHEET_EXPORT_URL = "https://docs.google.com/spreadsheets/d/{sheet_id}/export"


class EnvSettings(BaseSettings):
    """Shared loader configuration for every settings group"""

    model_config = SettingsConfigDict(
        env_file=[".env.local", ".env"],  # Try .env.local first, then .env
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )


class ShopifySettings(EnvSettings):
    """Shopify Admin API configuration settings"""

    SHOPIFY_STORE_DOMAIN: str = Field(default="")
    SHOPIFY_ACCESS_TOKEN: str = Field(default="")
    SHOPIFY_API_VERSION: str = Field(default="2024-01")

    SHOPIFY_PAGE_SIZE_LIMIT: int = Field(default=SHOPIFY_MAX_PAGE_SIZE)
    SHOPIFY_REQUEST_TIMEOUT_SECONDS: float = Field(default=30.0)

    @field_validator("SHOPIFY_STORE_DOMAIN")
    @classmethod
    def strip_store_domain(cls, v):
        if not v:
            return ""
        return v.replace("https://", "").replace("http://", "").strip().rstrip("/")

    @field_validator("SHOPIFY_PAGE_SIZE_LIMIT")
    @classmethod
    def clamp_page_size(cls, v):
        return max(1, min(v, SHOPIFY_MAX_PAGE_SIZE))

    @property
    def admin_api_url(self) -> str:
        return f"https://{self.SHOPIFY_STORE_DOMAIN}/admin/api/{self.SHOPIFY_API_VERSION}"


class CustomerSheetSettings(EnvSettings):
    """Customer spreadsheet (Google Sheets CSV export) settings"""

    GOOGLE_SHEET_ID: str = Field(default="")
    GOOGLE_SHEET_GID: str = Field(default="")
    CUSTOMER_SHEET_CSV_URL: str = Field(default="")

    # 0 disables the background refresh loop
    CUSTOMER_SHEET_REFRESH_INTERVAL_SECONDS: int = Field(default=0)
    CUSTOMER_SHEET_TIMEOUT_SECONDS: float = Field(default=30.0)

    @property
    def csv_url(self) -> Optional[str]:
        """Export URL of the sheet, or None when no sheet is configured"""
        if self.CUSTOMER_SHEET_CSV_URL:
            return self.CUSTOMER_SHEET_CSV_URL
        if not self.GOOGLE_SHEET_ID:
            return None
        url = GOOGLE_SHEET_EXPORT_URL.format(sheet_id=self.GOOGLE_SHEET_ID)
        url += "?format=csv"
        if self.GOOGLE_SHEET_GID:
            url += f"&gid={self.GOOGLE_SHEET_GID}"
        return url


class EnrichmentSettings(EnvSettings):
    """Order enrichment and rate limiting settings"""

    TRANSACTION_BATCH_SIZE: int = Field(default=5)
    TRANSACTION_BATCH_DELAY_SECONDS: float = Field(default=0.1)

    RATE_LIMIT_MAX_RETRIES: int = Field(default=3)
    RATE_LIMIT_INITIAL_DELAY_SECONDS: float = Field(default=1.0)

    @field_validator("TRANSACTION_BATCH_SIZE", "RATE_LIMIT_MAX_RETRIES")
    @classmethod
    def at_least_one(cls, v):
        return max(1, v)


class LoggingSettings(EnvSettings):
    """Logging configuration settings"""

    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="console")
    LOG_FILE_ENABLED: bool = Field(default=False)
    LOG_DIR: str = Field(default="logs")


class Settings(EnvSettings):
    """Main application settings"""

    # App Configuration
    PROJECT_NAME: str = "Order Report Proxy"
    VERSION: str = "1.0.0"
    DEBUG: bool = Field(default=False)
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3000)
    API_BASE_PATH: str = Field(default="/apps/order-report-proxy")

    # Sub-settings
    shopify: ShopifySettings = Field(default_factory=ShopifySettings)
    customer_sheet: CustomerSheetSettings = Field(
        default_factory=CustomerSheetSettings
    )
    enrichment: EnrichmentSettings = Field(default_factory=EnrichmentSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # CORS Configuration - the storefront calls us through the app proxy
    CORS_ORIGINS: List[str] = Field(default=["https://ksa.thehairaddict.net"])
    CORS_ORIGIN_REGEX: str = Field(
        default=r"https://([a-z0-9-]+\.)+(myshopify\.com|thehairaddict\.net)"
    )

    def validate_configuration(self) -> None:
        """Validate the mandatory Shopify credentials"""
        try:
            if not self.shopify.SHOPIFY_STORE_DOMAIN:
                raise EnvironmentVariableError("SHOPIFY_STORE_DOMAIN")
            if not self.shopify.SHOPIFY_ACCESS_TOKEN:
                raise EnvironmentVariableError("SHOPIFY_ACCESS_TOKEN")

        except Exception as e:
            if isinstance(e, ConfigurationError):
                raise
            raise ConfigurationError(f"Configuration validation failed: {str(e)}")


# Create settings instance
settings = Settings()
