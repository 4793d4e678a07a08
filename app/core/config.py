from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import List, Optional

from app.core.exceptions import ConfigurationError

# Environment variables the service refuses to start without
REQUIRED_ENV_VARS = ["EMAIL_USER", "EMAIL_APP_PASSWORD", "RECEIVER_EMAIL"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    # Sender account credentials - must be provided via environment variables
    email_user: Optional[str] = None
    email_app_password: Optional[str] = None
    receiver_email: Optional[str] = None

    port: int = 3001

    # CORS settings
    allowed_origins: List[str] = [
        "http://localhost:3000",
        "https://portfolio-website-omega-sage.vercel.app",
    ]

    # Mail transport
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    send_timeout_seconds: float = 10.0
    signature_name: str = "ELMESTARI Abdelmonim"

    log_level: str = "INFO"

    @property
    def missing_required(self) -> List[str]:
        """Names of required environment variables that are unset or blank"""
        missing = []
        for env_var in REQUIRED_ENV_VARS:
            value = getattr(self, env_var.lower())
            if not value or not value.strip():
                missing.append(env_var)
        return missing

    def require_complete(self) -> "Settings":
        missing = self.missing_required
        if missing:
            raise ConfigurationError(missing)
        return self


@lru_cache
def get_settings() -> Settings:
    """
    Build the process-wide settings once and validate them.

    Raises:
        ConfigurationError: if any required environment variable is missing
    """
    return Settings().require_complete()
