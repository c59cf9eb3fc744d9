"""Client for the same-origin weather proxy."""
from typing import Optional

import httpx

from dashboard.models.location import Coordinate
from dashboard.models.payloads import AstronomyPayload, CurrentWeatherPayload, ForecastPayload
from dashboard.models.weather import AstronomyData, CurrentConditions, HourlyTemperature
from dashboard.services.base_client import JsonClient


class ProxyClient(JsonClient):
    """Fetches current, forecast and astronomy data through the proxy."""

    def __init__(
        self,
        base_url: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        super().__init__(client=client, timeout=timeout)
        self.base_url = base_url.rstrip("/")

    def _weather_url(self, endpoint: str) -> str:
        return f"{self.base_url}/api/weather/{endpoint}"

    async def get_current(self, coordinate: Coordinate) -> CurrentConditions:
        payload = await self.get_model(
            self._weather_url("current"), CurrentWeatherPayload, {"q": coordinate.as_query()}
        )
        return payload.to_domain()

    async def get_hourly_temperatures(self, coordinate: Coordinate) -> HourlyTemperature:
        payload = await self.get_model(
            self._weather_url("forecast"), ForecastPayload, {"q": coordinate.as_query()}
        )
        return payload.to_domain()

    async def get_astronomy(self, coordinate: Coordinate) -> AstronomyData:
        payload = await self.get_model(
            self._weather_url("astronomy"), AstronomyPayload, {"q": coordinate.as_query()}
        )
        return payload.to_domain()

    async def get_chat_token(self) -> Optional[str]:
        """Request a chat identity token; None when the proxy returned none."""
        body = await self.request_json("POST", f"{self.base_url}/api/chatbase/token")
        if isinstance(body, dict) and body.get("token"):
            return str(body["token"])
        return None
