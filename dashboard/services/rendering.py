"""Pure mapping helpers used when rendering weather data."""
import math
from datetime import datetime, timedelta
from typing import Optional, Sequence, Tuple

from attrs import define

from dashboard.config import (
    ARC_LINE_WIDTH,
    DEFAULT_MOON_ICON,
    DEFAULT_WEATHER_ICON,
    DEFAULT_WMO_ICON,
    GAUGE_GRADIENT,
    GAUGE_LINE_WIDTH,
    GAUGE_START_ANGLE,
    MOON_ARC_GRADIENT,
    MOON_ICON_DIR,
    MOON_PHASE_ICONS,
    SUN_ARC_GRADIENT,
    VALUE_UNAVAILABLE,
    WEATHER_ICONS,
    WMO_ICONS,
)

_TIME_FORMATS = ("%H:%M", "%I:%M %p")


@define(frozen=True)
class Arc:
    """A semicircular canvas arc: angles in radians, gradient as (offset, color) stops."""

    start_angle: float
    end_angle: float
    gradient: Sequence[Tuple[float, str]]
    line_width: int

    @property
    def sweep(self) -> float:
        return self.end_angle - self.start_angle


def format_number(value) -> str:
    """Render a reading the way the page prints numbers: 18.0 as "18", 18.5 as "18.5"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def get_weather_icon(condition: str) -> str:
    """Icon for a condition text; case-insensitive substring match, first table hit wins."""
    text = (condition or "").lower()
    for keyword, icon in WEATHER_ICONS:
        if keyword in text:
            return icon
    return DEFAULT_WEATHER_ICON


def get_weather_emoji_from_code(code: int) -> str:
    """Icon for a WMO weather code."""
    for low, high, icon in WMO_ICONS:
        if low <= code <= high:
            return icon
    return DEFAULT_WMO_ICON


def get_moon_phase_icon(phase: str) -> str:
    """Icon path for a moon phase label."""
    text = (phase or "").lower()
    for keyword, filename in MOON_PHASE_ICONS:
        if keyword in text:
            return f"{MOON_ICON_DIR}/{filename}"
    return f"{MOON_ICON_DIR}/{DEFAULT_MOON_ICON}"


def gauge_sweep(value: float, maximum: float) -> float:
    """
    Sweep angle of a gauge: pi * value / maximum, clamped to [0, pi].

    A non-positive maximum yields an empty gauge.
    """
    if maximum <= 0:
        return 0.0
    ratio = min(max(value / maximum, 0.0), 1.0)
    return math.pi * ratio


def gauge_arc(value: float, maximum: float) -> Arc:
    """Green-yellow-red gauge arc for any metric."""
    return Arc(
        start_angle=GAUGE_START_ANGLE,
        end_angle=GAUGE_START_ANGLE + gauge_sweep(value, maximum),
        gradient=GAUGE_GRADIENT,
        line_width=GAUGE_LINE_WIDTH,
    )


def sun_arc() -> Arc:
    return Arc(math.pi, 2 * math.pi, SUN_ARC_GRADIENT, ARC_LINE_WIDTH)


def moon_arc() -> Arc:
    return Arc(math.pi, 2 * math.pi, MOON_ARC_GRADIENT, ARC_LINE_WIDTH)


def parse_time_of_day(value: Optional[str]) -> Optional[datetime]:
    """Parse "HH:MM" or "hh:mm AM" onto a fixed reference date; None if absent or unparseable."""
    if not value:
        return None
    text = value.strip().upper()
    for fmt in _TIME_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return parsed.replace(year=2025, month=1, day=1)
    return None


def duration_between(start: Optional[str], end: Optional[str]) -> Optional[Tuple[int, int]]:
    """
    Hours and minutes from start to end time of day.

    An end earlier than the start is taken to fall on the next day.
    """
    s = parse_time_of_day(start)
    e = parse_time_of_day(end)
    if s is None or e is None:
        return None
    if e < s:
        e += timedelta(days=1)
    minutes = int((e - s).total_seconds() // 60)
    return minutes // 60, minutes % 60


def calc_duration(start: Optional[str], end: Optional[str]) -> str:
    """Formatted duration, e.g. "7 hrs 0 mins", or "—" when a time is missing."""
    result = duration_between(start, end)
    if result is None:
        return VALUE_UNAVAILABLE
    hours, minutes = result
    return f"{hours} hrs {minutes} mins"


def describe_humidity(humidity: float) -> str:
    if humidity < 40:
        return "Low humidity."
    if humidity < 70:
        return "Normal humidity."
    return "High humidity."


def describe_uv(uv: float) -> str:
    if uv < 3:
        return "Low UV exposure."
    if uv < 6:
        return "Moderate UV exposure."
    if uv < 8:
        return "High UV exposure."
    if uv < 11:
        return "Very high UV exposure."
    return "Extreme UV exposure."


def describe_aqi(aqi: int) -> str:
    if aqi <= 50:
        return "Good air quality"
    if aqi <= 100:
        return "Moderate"
    if aqi <= 150:
        return "Unhealthy for sensitive groups"
    if aqi <= 200:
        return "Unhealthy"
    if aqi <= 300:
        return "Very unhealthy"
    return "Hazardous"


def describe_visibility(vis_km: float) -> str:
    if vis_km >= 10:
        return "Excellent visibility."
    if vis_km >= 5:
        return "Good visibility."
    return "Low visibility."


def describe_pressure_trend(trend: Optional[int]) -> str:
    if trend == 1:
        return "Rising"
    if trend == -1:
        return "Falling"
    return "Steady"
