"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    off_base_url: str = "https://world.openfoodfacts.org"
    off_timeout_seconds: float = 15
    off_user_agent: str = "nutriscan/0.1 (barcode health scanner)"
    scan_min_payload_length: int = 6
    scan_cooldown_ms: int = 1200
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def scan_cooldown_seconds(self) -> float:
        """Cooldown between accepted scans, in seconds."""
        return self.scan_cooldown_ms / 1000
