"""Pydantic schemas for the weather proxy."""
from enum import Enum

from pydantic import BaseModel


class WeatherEndpoint(str, Enum):
    """Upstream endpoints exposed through the proxy."""

    current = "current"
    forecast = "forecast"
    astronomy = "astronomy"


class ErrorResponse(BaseModel):
    """Uniform error envelope."""

    error: str
