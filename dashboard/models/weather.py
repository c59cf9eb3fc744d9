"""Weather models held in transient view state."""
from datetime import date
from typing import List, Optional, Union

from attrs import define, field


@define
class CurrentConditions:
    """Current conditions at a location."""

    location_name: str
    temp_c: float
    condition_text: str
    wind_kph: float
    humidity: int
    feelslike_c: float
    pressure_mb: float
    uv: Optional[float] = None
    vis_km: Optional[float] = None
    dewpoint_c: Optional[float] = None
    pressure_trend: Optional[int] = None


@define
class ForecastDay:
    """One day of the 7-day outlook."""

    day: date
    high_c: float
    low_c: float
    weather_code: int

    @property
    def weekday(self) -> str:
        return self.day.strftime("%A")


@define
class AstronomyData:
    """Sun and moon times for a location (provider-formatted strings)."""

    sunrise: Optional[str]
    sunset: Optional[str]
    moonrise: Optional[str]
    moonset: Optional[str]
    moon_phase: str


@define
class AirQuality:
    """US AQI reading, or None when the provider had no value."""

    us_aqi: Optional[int] = None

    @property
    def available(self) -> bool:
        return self.us_aqi is not None

    def display(self, placeholder: str) -> Union[int, str]:
        """Value for rendering, falling back to a placeholder."""
        return self.us_aqi if self.us_aqi is not None else placeholder


@define
class HourlyTemperature:
    """Temperature series for the chart."""

    labels: List[str] = field(factory=list)
    temps_c: List[float] = field(factory=list)
