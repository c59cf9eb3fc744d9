"""Backend configuration."""
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read once at process start."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Paths
    project_root: Path = Path(__file__).parent.parent
    static_dir: Path = project_root / "public"

    # Upstream weather provider
    weather_api_key: Optional[str] = None
    weather_api_base_url: str = "https://api.weatherapi.com/v1"
    upstream_timeout_seconds: Optional[float] = None  # None = wait indefinitely

    # Chat widget identity tokens
    chatbot_identity_secret: Optional[str] = None
    token_ttl_seconds: int = 3600

    # API settings
    api_title: str = "Skysense API"
    api_version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    @property
    def index_file(self) -> Path:
        """Entry document of the single-page app."""
        return self.static_dir / "index.html"


settings = Settings()
