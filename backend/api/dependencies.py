"""FastAPI dependencies for dependency injection."""
from functools import lru_cache

from backend.config import settings
from backend.services.token_service import TokenService
from backend.services.weather_proxy_service import WeatherProxyService


@lru_cache()
def get_weather_proxy_service() -> WeatherProxyService:
    """Get cached weather proxy service instance."""
    return WeatherProxyService()


def get_token_service() -> TokenService:
    """Get token service instance."""
    return TokenService()


def get_settings():
    """Get application settings."""
    return settings
