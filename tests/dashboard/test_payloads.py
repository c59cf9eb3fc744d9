"""Tests for boundary validation of upstream payloads."""
from datetime import date

import pytest
from pydantic import ValidationError

from dashboard.models.payloads import (
    AirQualityPayload,
    AstronomyPayload,
    CurrentWeatherPayload,
    ForecastPayload,
    OpenMeteoDailyPayload,
)


class TestCurrentWeatherPayload:
    """Tests for current conditions parsing."""

    def test_optional_fields_may_be_missing(self):
        """dewpoint, trend, uv and visibility are optional."""
        payload = CurrentWeatherPayload.model_validate({
            "location": {"name": "Oslo"},
            "current": {
                "temp_c": -3.0,
                "condition": {"text": "Light snow"},
                "wind_kph": 8.0,
                "humidity": 90,
                "feelslike_c": -7.5,
                "pressure_mb": 1002.0,
            },
        })
        current = payload.to_domain()

        assert current.location_name == "Oslo"
        assert current.condition_text == "Light snow"
        assert current.dewpoint_c is None
        assert current.pressure_trend is None

    def test_missing_location_rejected(self):
        with pytest.raises(ValidationError):
            CurrentWeatherPayload.model_validate({"current": {}})


class TestForecastPayload:
    """Tests for hourly forecast parsing."""

    def test_samples_every_second_hour(self):
        hours = [{"time": f"2025-06-01 {h:02d}:00", "temp_c": float(h)} for h in range(24)]
        series = ForecastPayload.model_validate(
            {"forecast": {"forecastday": [{"hour": hours}]}}
        ).to_domain()

        assert series.labels == [f"{h:02d}:00" for h in range(0, 24, 2)]
        assert series.temps_c == [float(h) for h in range(0, 24, 2)]

    def test_short_day_rejected(self):
        """Fewer than 24 hours is a malformed payload."""
        hours = [{"time": "2025-06-01 00:00", "temp_c": 1.0}]
        with pytest.raises(ValidationError):
            ForecastPayload.model_validate({"forecast": {"forecastday": [{"hour": hours}]}})

    def test_no_days_rejected(self):
        with pytest.raises(ValidationError):
            ForecastPayload.model_validate({"forecast": {"forecastday": []}})


class TestAstronomyPayload:
    def test_parses_astro_block(self):
        astro = AstronomyPayload.model_validate({
            "astronomy": {"astro": {
                "sunrise": "05:01 AM", "sunset": "09:10 PM",
                "moonrise": "No moonrise", "moonset": "03:12 AM",
                "moon_phase": "Waning Gibbous",
            }}
        }).to_domain()

        assert astro.moonrise == "No moonrise"
        assert astro.moon_phase == "Waning Gibbous"


class TestOpenMeteoPayloads:
    """Tests for Open-Meteo bodies."""

    def test_daily_forecast_takes_seven_days(self):
        body = {"daily": {
            "time": [f"2025-06-{d:02d}" for d in range(1, 9)],
            "temperature_2m_max": [20.0] * 8,
            "temperature_2m_min": [10.0] * 8,
            "weathercode": [1] * 8,
        }}
        days = OpenMeteoDailyPayload.model_validate(body).to_domain()

        assert len(days) == 7
        assert days[0].day == date(2025, 6, 1)
        assert days[0].weekday == "Sunday"

    def test_daily_forecast_too_short(self):
        body = {"daily": {
            "time": ["2025-06-01"],
            "temperature_2m_max": [20.0],
            "temperature_2m_min": [10.0],
            "weathercode": [1],
        }}
        with pytest.raises(ValidationError):
            OpenMeteoDailyPayload.model_validate(body)

    def test_air_quality_rounds_first_hour(self):
        aqi = AirQualityPayload.model_validate({"hourly": {"us_aqi": [41.6, 50]}}).to_domain()
        assert aqi.us_aqi == 42

    def test_air_quality_missing_is_unavailable(self):
        aqi = AirQualityPayload.model_validate({}).to_domain()
        assert not aqi.available
        assert aqi.display("N/A") == "N/A"
