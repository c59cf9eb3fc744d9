"""Pydantic schemas validating upstream JSON at the client boundary."""
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from dashboard.config import FORECAST_DAYS, HOURLY_STEP, HOURS_PER_DAY
from dashboard.models.weather import (
    AirQuality,
    AstronomyData,
    CurrentConditions,
    ForecastDay,
    HourlyTemperature,
)


class _Location(BaseModel):
    name: str


class _Condition(BaseModel):
    text: str


class _Current(BaseModel):
    temp_c: float
    condition: _Condition
    wind_kph: float
    humidity: int
    feelslike_c: float
    pressure_mb: float
    uv: Optional[float] = None
    vis_km: Optional[float] = None
    dewpoint_c: Optional[float] = None
    pressure_trend: Optional[int] = None


class CurrentWeatherPayload(BaseModel):
    """Body of ``GET /api/weather/current``."""

    location: _Location
    current: _Current

    def to_domain(self) -> CurrentConditions:
        c = self.current
        return CurrentConditions(
            location_name=self.location.name,
            temp_c=c.temp_c,
            condition_text=c.condition.text,
            wind_kph=c.wind_kph,
            humidity=c.humidity,
            feelslike_c=c.feelslike_c,
            pressure_mb=c.pressure_mb,
            uv=c.uv,
            vis_km=c.vis_km,
            dewpoint_c=c.dewpoint_c,
            pressure_trend=c.pressure_trend,
        )


class _Hour(BaseModel):
    time: str
    temp_c: float


class _ForecastDay(BaseModel):
    hour: List[_Hour]


class _Forecast(BaseModel):
    forecastday: List[_ForecastDay] = Field(min_length=1)


class ForecastPayload(BaseModel):
    """Body of ``GET /api/weather/forecast``; only day 0 hours are used."""

    forecast: _Forecast

    @model_validator(mode="after")
    def check_full_day(self) -> "ForecastPayload":
        if len(self.forecast.forecastday[0].hour) < HOURS_PER_DAY:
            raise ValueError(f"forecast day 0 must have {HOURS_PER_DAY} hours")
        return self

    def to_domain(self) -> HourlyTemperature:
        hours = self.forecast.forecastday[0].hour
        sampled = hours[0:HOURS_PER_DAY:HOURLY_STEP]
        return HourlyTemperature(
            labels=[h.time[11:16] for h in sampled],
            temps_c=[h.temp_c for h in sampled],
        )


class _Astro(BaseModel):
    sunrise: Optional[str] = None
    sunset: Optional[str] = None
    moonrise: Optional[str] = None
    moonset: Optional[str] = None
    moon_phase: str


class _Astronomy(BaseModel):
    astro: _Astro


class AstronomyPayload(BaseModel):
    """Body of ``GET /api/weather/astronomy``."""

    astronomy: _Astronomy

    def to_domain(self) -> AstronomyData:
        a = self.astronomy.astro
        return AstronomyData(
            sunrise=a.sunrise,
            sunset=a.sunset,
            moonrise=a.moonrise,
            moonset=a.moonset,
            moon_phase=a.moon_phase,
        )


class _Daily(BaseModel):
    time: List[date]
    temperature_2m_max: List[float]
    temperature_2m_min: List[float]
    weathercode: List[int]

    @model_validator(mode="after")
    def check_lengths(self) -> "_Daily":
        columns = (self.time, self.temperature_2m_max, self.temperature_2m_min, self.weathercode)
        if any(len(col) < FORECAST_DAYS for col in columns):
            raise ValueError(f"daily forecast must cover {FORECAST_DAYS} days")
        return self


class OpenMeteoDailyPayload(BaseModel):
    """Open-Meteo daily forecast body."""

    daily: _Daily

    def to_domain(self) -> List[ForecastDay]:
        d = self.daily
        return [
            ForecastDay(
                day=d.time[i],
                high_c=d.temperature_2m_max[i],
                low_c=d.temperature_2m_min[i],
                weather_code=d.weathercode[i],
            )
            for i in range(FORECAST_DAYS)
        ]


class _HourlyAqi(BaseModel):
    us_aqi: List[Optional[float]] = Field(default_factory=list)


class AirQualityPayload(BaseModel):
    """Open-Meteo air quality body; the first hourly US AQI is current."""

    hourly: Optional[_HourlyAqi] = None

    def to_domain(self) -> AirQuality:
        if self.hourly is None or not self.hourly.us_aqi:
            return AirQuality()
        first = self.hourly.us_aqi[0]
        return AirQuality(us_aqi=None if first is None else int(round(first)))
