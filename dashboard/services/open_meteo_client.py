"""Client for the Open-Meteo forecast and air quality APIs (called directly)."""
from typing import List, Optional

import httpx

from dashboard.config import FORECAST_DAYS
from dashboard.models.location import Coordinate
from dashboard.models.payloads import AirQualityPayload, OpenMeteoDailyPayload
from dashboard.models.weather import AirQuality, ForecastDay
from dashboard.services.base_client import JsonClient


class OpenMeteoClient(JsonClient):
    """Fetches the 7-day outlook and current US AQI by coordinate."""

    def __init__(
        self,
        forecast_url: str,
        air_quality_url: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        super().__init__(client=client, timeout=timeout)
        self.forecast_url = forecast_url
        self.air_quality_url = air_quality_url

    async def get_seven_day_forecast(self, coordinate: Coordinate) -> List[ForecastDay]:
        params = {
            "latitude": coordinate.latitude,
            "longitude": coordinate.longitude,
            "daily": "temperature_2m_max,temperature_2m_min,weathercode",
            "timezone": "auto",
            "forecast_days": FORECAST_DAYS,
        }
        payload = await self.get_model(self.forecast_url, OpenMeteoDailyPayload, params)
        return payload.to_domain()

    async def get_air_quality(self, coordinate: Coordinate) -> AirQuality:
        params = {
            "latitude": coordinate.latitude,
            "longitude": coordinate.longitude,
            "hourly": "us_aqi",
        }
        payload = await self.get_model(self.air_quality_url, AirQualityPayload, params)
        return payload.to_domain()
