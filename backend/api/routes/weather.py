"""API routes for proxied weather data."""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import ORJSONResponse

from backend.api.dependencies import get_weather_proxy_service
from backend.schemas.weather import ErrorResponse, WeatherEndpoint
from backend.services.weather_proxy_service import WeatherProxyService

router = APIRouter(prefix="/api/weather", tags=["weather"])


def make_proxy_route(endpoint: WeatherEndpoint):
    """Build the handler forwarding one fixed endpoint to the weather provider."""

    async def proxy_weather(
        request: Request,
        proxy_service: WeatherProxyService = Depends(get_weather_proxy_service),
    ) -> ORJSONResponse:
        """
        Forward a query to the weather provider.

        All query parameters (typically ``q=<lat>,<lon>``) are passed through
        unvalidated. The upstream body is returned verbatim.
        """
        status_code, body = await proxy_service.forward(
            endpoint, request.query_params.multi_items()
        )
        return ORJSONResponse(body, status_code=status_code)

    return proxy_weather


# Literal paths only; anything else under /api/weather falls through to the SPA route
for _endpoint in WeatherEndpoint:
    router.add_api_route(
        f"/{_endpoint.value}",
        make_proxy_route(_endpoint),
        methods=["GET"],
        name=f"proxy_weather_{_endpoint.value}",
        responses={500: {"model": ErrorResponse}},
    )
