"""
Configuration - Science Fair Evaluation Platform
fairscore/config.py

Environment-driven settings read once through pydantic-settings. Production
refuses the default admin passcode.
"""

from typing import Optional, Literal
from functools import lru_cache
from pydantic import Field, field_validator, model_validator, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_ADMIN_PASSCODE = "admin123"


class Settings(BaseSettings):
    """Application settings, read from the environment and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Science Fair Evaluation Platform"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Event defaults (seed values for the in-memory event settings)
    EVENT_TITLE: str = "Think Big Science Carnival 2025"
    ADMIN_PASSCODE: SecretStr = SecretStr(DEFAULT_ADMIN_PASSCODE)

    # Remote system of record (spreadsheet web-app endpoint)
    REMOTE_URL: Optional[str] = Field(
        default=None,
        description="Web-app URL of the remote store; sync is disabled when unset",
    )
    REMOTE_TIMEOUT_SECONDS: float = Field(default=30.0, ge=1.0, le=300.0)
    LOAD_REMOTE_ON_STARTUP: bool = True

    # Evaluator access codes
    EVALUATOR_CODE_MIN: int = Field(default=100000, ge=0)
    EVALUATOR_CODE_MAX: int = Field(default=999999, ge=1)

    @field_validator("REMOTE_URL")
    @classmethod
    def validate_remote_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("REMOTE_URL must be an http(s) URL")
        return v

    @model_validator(mode="after")
    def validate_code_range(self):
        if self.EVALUATOR_CODE_MIN >= self.EVALUATOR_CODE_MAX:
            raise ValueError("EVALUATOR_CODE_MIN must be below EVALUATOR_CODE_MAX")
        return self

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production has required security settings."""
        if self.APP_ENV == "production":
            if self.DEBUG:
                raise ValueError("DEBUG must be False in production")
            passcode = self.ADMIN_PASSCODE.get_secret_value()
            if passcode == DEFAULT_ADMIN_PASSCODE or len(passcode) < 8:
                raise ValueError("ADMIN_PASSCODE must be changed and ≥8 characters in production")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
