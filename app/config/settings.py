from typing import Any

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration loaded from the environment (and `.env`).
    """

    # API Configuration
    API_V1_STR: str = "/api"
    PROJECT_NAME: str = "Storefront API"
    PROJECT_DESCRIPTION: str = "Orders, payments, fulfillment, returns, warranty and support"
    VERSION: str = "0.1.0"

    # PostgreSQL Database Settings
    DB_HOST: str = Field("localhost", description="PostgreSQL host")
    DB_PORT: int = Field(5432, description="PostgreSQL port")
    DB_NAME: str = Field("storefront", description="Database name")
    DB_USER: str = Field("storefront", description="Database user")
    DB_PASSWORD: str | None = Field(None, description="Database password")
    DB_ECHO: bool = Field(False, description="Log SQL queries (debug only)")

    # Database connection pool settings
    DB_POOL_SIZE: int = Field(20, description="Connection pool size")
    DB_MAX_OVERFLOW: int = Field(30, description="Maximum pool overflow")
    DB_POOL_RECYCLE: int = Field(3600, description="Recycle connections every N seconds")
    DB_POOL_TIMEOUT: int = Field(30, description="Seconds to wait for a pooled connection")

    # JWT Settings (tokens are issued by the identity service, only decoded here)
    JWT_SECRET_KEY: str = Field(..., description="Secret used to verify bearer tokens")
    JWT_ALGORITHM: str = Field("HS256", description="Signature algorithm of bearer tokens")
    JWT_ADMIN_ROLE: str = Field("Admin", description="Role claim value that grants admin rights")

    # Stripe
    STRIPE_SECRET_KEY: str | None = Field(None, description="Stripe secret API key")
    STRIPE_API_BASE: str = Field("https://api.stripe.com/v1", description="Stripe REST base URL")
    STRIPE_CURRENCY: str = Field("usd", description="Currency used for payment intents")
    STRIPE_TIMEOUT: int = Field(30, description="Timeout for Stripe requests in seconds")

    # Email (SMTP relay)
    SMTP_HOST: str = Field("localhost", description="SMTP relay host")
    SMTP_PORT: int = Field(587, description="SMTP relay port")
    SMTP_USER: str | None = Field(None, description="SMTP username")
    SMTP_PASSWORD: str | None = Field(None, description="SMTP password")
    SMTP_USE_TLS: bool = Field(True, description="Issue STARTTLS before login")
    EMAIL_FROM: str = Field("no-reply@storefront.local", description="Sender address for notifications")
    EMAIL_ENABLED: bool = Field(True, description="Send transactional emails")

    # Order policies
    RETURN_WINDOW_DAYS: int = Field(14, description="Calendar days after delivery during which returns are accepted")
    ESTIMATED_DELIVERY_DAYS: int = Field(3, description="Default delivery estimate when shipping manually")

    # Warehouse (label sender address)
    WAREHOUSE_NAME: str = Field("Storefront Warehouse", description="Sender name printed on labels")
    WAREHOUSE_STREET: str = Field("123 Rue de l'Entrepôt", description="Warehouse street")
    WAREHOUSE_CITY: str = Field("Paris", description="Warehouse city")
    WAREHOUSE_ZIP_CODE: str = Field("75001", description="Warehouse postal code")
    WAREHOUSE_COUNTRY: str = Field("France", description="Warehouse country")
    LABEL_BASE_URL: str = Field("https://example.com/labels", description="Base URL where carrier labels are served")

    # CORS
    CORS_ORIGINS: list[str] = Field(default_factory=list, description="Allowed browser origins outside debug mode")

    # Application Settings
    DEBUG: bool = Field(False, description="Debug mode")
    ENVIRONMENT: str = Field("production", description="Runtime environment")
    LOG_LEVEL: str = Field("INFO", description="Root log level")

    # Sentry Configuration
    SENTRY_DSN: str | None = Field(default=None, description="Sentry DSN for error tracking")

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def __init__(self, **data: Any):
        super().__init__(**data)

    @field_validator("RETURN_WINDOW_DAYS")
    @classmethod
    def validate_return_window(cls, v):
        if v < 0:
            raise ValueError("RETURN_WINDOW_DAYS must be 0 or greater")
        return v

    @field_validator("STRIPE_CURRENCY")
    @classmethod
    def validate_currency(cls, v):
        if len(v) != 3:
            raise ValueError("STRIPE_CURRENCY must be a 3-letter ISO code")
        return v.lower()

    @field_validator("DB_POOL_SIZE")
    @classmethod
    def validate_pool_size(cls, v):
        if v < 1:
            raise ValueError("DB_POOL_SIZE must be at least 1")
        if v > 100:
            raise ValueError("DB_POOL_SIZE should not exceed 100")
        return v

    @field_validator("DB_MAX_OVERFLOW")
    @classmethod
    def validate_max_overflow(cls, v):
        if v < 0:
            raise ValueError("DB_MAX_OVERFLOW must be 0 or greater")
        if v > 200:
            raise ValueError("DB_MAX_OVERFLOW should not exceed 200")
        return v

    @computed_field
    @property
    def database_url(self) -> str:
        """PostgreSQL connection URL"""
        if self.DB_PASSWORD:
            return f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        return f"postgresql://{self.DB_USER}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @computed_field
    @property
    def is_development(self) -> bool:
        return self.DEBUG or self.ENVIRONMENT.lower() in ["development", "dev", "local"]

    @computed_field
    @property
    def database_config(self) -> dict:
        """Engine options tuned per environment"""
        base_config = {
            "echo": self.DB_ECHO,
            "future": True,
            "pool_pre_ping": True,
        }

        if self.is_development:
            return base_config
        return {
            **base_config,
            "pool_size": self.DB_POOL_SIZE,
            "max_overflow": self.DB_MAX_OVERFLOW,
            "pool_recycle": self.DB_POOL_RECYCLE,
            "pool_timeout": self.DB_POOL_TIMEOUT,
        }

    @computed_field
    @property
    def warehouse_address(self) -> dict:
        return {
            "name": self.WAREHOUSE_NAME,
            "street": self.WAREHOUSE_STREET,
            "city": self.WAREHOUSE_CITY,
            "zip_code": self.WAREHOUSE_ZIP_CODE,
            "country": self.WAREHOUSE_COUNTRY,
        }


# Settings singleton
_settings_instance = None


def get_settings() -> Settings:
    """
    Return the cached settings instance so the environment is read only once.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
