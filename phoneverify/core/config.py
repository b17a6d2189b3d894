"""
phoneverify/core/config.py

Purpose: Application configuration

- Loads environment variables (and an optional .env file)
- Centralizes config values (Twilio credentials, sender number, TTLs)
- Validates configuration on startup
- Environment-specific settings
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Validates all required configs on startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # Server
    HOST: str = Field(
        default="0.0.0.0",
        description="Interface the HTTP server binds to"
    )
    PORT: int = Field(
        default=3000,
        description="Port the HTTP server listens on"
    )

    # SMS delivery
    SMS_BACKEND: Literal["twilio", "console"] = Field(
        default="twilio",
        description="Which SMS sender to use (console only logs messages)"
    )
    TWILIO_ACCOUNT_SID: Optional[str] = Field(
        default=None,
        description="Twilio account SID"
    )
    TWILIO_AUTH_TOKEN: Optional[str] = Field(
        default=None,
        description="Twilio auth token"
    )
    TWILIO_PHONE_NUMBER: Optional[str] = Field(
        default=None,
        description="Twilio sender phone number in E.164 format"
    )
    TWILIO_API_BASE_URL: str = Field(
        default="https://api.twilio.com/2010-04-01",
        description="Twilio REST API base URL"
    )
    TWILIO_UNVERIFIED_ERROR_CODE: int = Field(
        default=21608,
        description="Twilio error code returned when the recipient is not verified"
    )
    SMS_SEND_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Timeout for a single SMS send request"
    )
    COUNTRY_CODE: str = Field(
        default="+91",
        description="Country calling code prefixed to 10-digit numbers"
    )

    # Verification codes
    CODE_TTL_SECONDS: int = Field(
        default=120,
        description="How long an issued verification code stays valid"
    )
    CODE_SWEEP_INTERVAL_SECONDS: int = Field(
        default=60,
        description="Interval between expired-code sweeps (0 disables the sweep)"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    @field_validator("COUNTRY_CODE")
    @classmethod
    def validate_country_code(cls, v):
        """Country code must look like +<digits>."""
        if not v.startswith("+") or not v[1:].isdigit():
            raise ValueError("COUNTRY_CODE must be '+' followed by digits, e.g. +91")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def twilio_configured(self) -> bool:
        """Check if all Twilio credentials are present."""
        return bool(
            self.TWILIO_ACCOUNT_SID
            and self.TWILIO_AUTH_TOKEN
            and self.TWILIO_PHONE_NUMBER
        )


# Global settings instance
settings = Settings()


def validate_settings(config: Optional[Settings] = None):
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    config = config or settings
    errors = []

    if config.CODE_TTL_SECONDS <= 0:
        errors.append("CODE_TTL_SECONDS must be positive")

    if config.CODE_SWEEP_INTERVAL_SECONDS < 0:
        errors.append("CODE_SWEEP_INTERVAL_SECONDS must not be negative")

    if config.SMS_BACKEND == "twilio" and not config.twilio_configured:
        if config.is_production:
            errors.append(
                "TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN and TWILIO_PHONE_NUMBER "
                "are required in production"
            )

    # Production-specific validations
    if config.is_production and config.SMS_BACKEND == "console":
        errors.append("SMS_BACKEND=console is not allowed in production")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
