"""Application configuration.

Settings are read from environment variables prefixed with ``CLINIC_`` or from
a ``.env`` file in the project root.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_FILE = Path(__file__).resolve().parent.parent / ".env"

DEFAULT_GIFTS_API_URL = "https://api.restful-api.dev/objects"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    patients_file: Path = Path("data/patients.txt")
    gifts_api_url: str = DEFAULT_GIFTS_API_URL
    gifts_timeout_seconds: float = 5.0
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    model_config = SettingsConfigDict(env_prefix="CLINIC_", env_file=str(_ENV_FILE), extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
