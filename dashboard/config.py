"""Configuration for the dashboard client."""
import math
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Package paths
PACKAGE_DIR = Path(__file__).parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"


class DashboardSettings(BaseSettings):
    """Client settings loaded from DASHBOARD_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="DASHBOARD_", extra="ignore")

    proxy_base_url: str = "http://localhost:3000"
    air_quality_url: str = "https://air-quality-api.open-meteo.com/v1/air-quality"
    forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    default_latitude: float = 51.505
    default_longitude: float = -0.09
    request_timeout_seconds: Optional[float] = None  # None = wait indefinitely
    log_level: str = "INFO"


# Placeholders for values a secondary fetch could not supply
AQI_UNAVAILABLE = "N/A"
VALUE_UNAVAILABLE = "—"
FORECAST_UNAVAILABLE = "Failed to load 7-day forecast..."

# Fixed user-facing messages
MSG_GEO_UNSUPPORTED = "Geolocation not supported."
MSG_GEO_DENIED = "Geolocation denied. Unable to show map."
MSG_GEO_DENIED_RECENTER = "Geolocation denied. Unable to update."
MSG_FETCH_FAILED = "Unable to fetch weather for your location."
MSG_FETCH_FAILED_CLICK = "Unable to fetch weather for clicked location."
POPUP_UNAVAILABLE = "Weather data unavailable"
POPUP_YOUR_LOCATION = "Your Location"

# Map behaviour
INITIAL_ZOOM = 11
CLICK_ZOOM = 13
MARKER_ZOOM = 11
FULLSCREEN_ON_LABEL = "🗕 Exit"
FULLSCREEN_OFF_LABEL = "⛶ Expand"

# Forecast
FORECAST_DAYS = 7
HOURLY_STEP = 2  # chart every second hour of day 0
HOURS_PER_DAY = 24

# Condition text keyword -> icon, first match wins
WEATHER_ICONS = (
    ("sun", "☀️"),
    ("clear", "☀️"),
    ("cloud", "☁️"),
    ("rain", "🌧️"),
    ("snow", "❄️"),
    ("thunder", "⚡"),
    ("mist", "🌫️"),
    ("fog", "🌫️"),
)
DEFAULT_WEATHER_ICON = "🌤️"

# Inclusive WMO weather code ranges -> icon
WMO_ICONS = (
    (0, 0, "☀️"),
    (1, 3, "⛅"),
    (45, 48, "🌫️"),
    (51, 55, "🌦️"),
    (61, 65, "🌧️"),
    (71, 75, "❄️"),
    (80, 85, "🌧️"),
    (95, 99, "⛈️"),
)
DEFAULT_WMO_ICON = "☁️"

# Moon phase keyword -> icon path, first match wins
MOON_ICON_DIR = "images/moon"
MOON_PHASE_ICONS = (
    ("new", "new.png"),
    ("waning crescent", "waning_crescent.png"),
    ("third quarter", "third_quarter.png"),
    ("last quarter", "third_quarter.png"),
    ("waning gibbous", "waning_gibbous.png"),
    ("full", "full.png"),
    ("waxing gibbous", "waxing_gibbous.png"),
    ("first quarter", "first_quarter.png"),
    ("waxing crescent", "waxing_crescent.png"),
)
DEFAULT_MOON_ICON = "default.png"

# Gauges
GAUGE_START_ANGLE = math.pi
GAUGE_GRADIENT = ((0.0, "#4ade80"), (0.5, "#facc15"), (1.0, "#ef4444"))
GAUGE_LINE_WIDTH = 10
UV_GAUGE_MAX = 11
AQI_GAUGE_MAX = 300  # top of the US AQI "very unhealthy" band
SUN_ARC_GRADIENT = ((0.0, "#FFA500"), (1.0, "#6B1AFF"))
MOON_ARC_GRADIENT = ((0.0, "#FFD27F"), (1.0, "#5F4B8B"))
ARC_LINE_WIDTH = 6

# Lunar cycle
SYNODIC_MONTH_DAYS = 29.53
