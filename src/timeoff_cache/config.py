import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Remote API
    api_base_url: str = os.getenv("API_BASE_URL", "https://sapphireapp.site/api")
    api_token: str | None = os.getenv("API_TOKEN")
    api_timeout: float = float(os.getenv("API_TIMEOUT", "30"))

    # Cache
    cache_ttl: float = float(os.getenv("CACHE_TTL", "30"))  # seconds
    unread_refresh_interval: float = float(os.getenv("UNREAD_REFRESH_INTERVAL", "30"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "info")
    log_json: bool = os.getenv("LOG_JSON", "false").lower() == "true"

    # Debug API
    debug_api_host: str = os.getenv("DEBUG_API_HOST", "127.0.0.1")
    debug_api_port: int = int(os.getenv("DEBUG_API_PORT", "8001"))

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_ttl <= 0:
            raise ValueError("CACHE_TTL must be greater than 0")

        if self.unread_refresh_interval <= 0:
            raise ValueError("UNREAD_REFRESH_INTERVAL must be greater than 0")

        if self.api_timeout <= 0:
            raise ValueError(f"API_TIMEOUT must be greater than 0, got {self.api_timeout}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
