"""Tests for the weather proxy routes."""
from typing import List

import httpx
import pytest
from fastapi.testclient import TestClient

from backend.api.dependencies import get_settings, get_weather_proxy_service
from backend.config import Settings
from backend.main import app
from backend.schemas.weather import WeatherEndpoint
from backend.services.weather_proxy_service import WeatherProxyService

UPSTREAM = "https://upstream.test/v1"


def make_service(handler, api_key: str = "server-key") -> WeatherProxyService:
    return WeatherProxyService(
        api_key=api_key,
        base_url=UPSTREAM,
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture
def recorded() -> List[httpx.Request]:
    return []


@pytest.fixture
def client_factory():
    def factory(handler, api_key: str = "server-key") -> TestClient:
        service = make_service(handler, api_key=api_key)
        app.dependency_overrides[get_weather_proxy_service] = lambda: service
        return TestClient(app)

    yield factory
    app.dependency_overrides.clear()


class TestWeatherProxyRoutes:
    """Tests for GET /api/weather/{endpoint}."""

    @pytest.mark.parametrize("endpoint", ["current", "forecast", "astronomy"])
    def test_forwards_to_matching_upstream_endpoint(self, endpoint, recorded, client_factory):
        """Each route hits {base}/{endpoint}.json and returns the body verbatim."""
        body = {"location": {"name": "London"}, "echo": endpoint}

        def handler(request: httpx.Request) -> httpx.Response:
            recorded.append(request)
            return httpx.Response(200, json=body)

        client = client_factory(handler)
        response = client.get(f"/api/weather/{endpoint}", params={"q": "51.5,-0.12"})

        assert response.status_code == 200
        assert response.json() == body
        assert recorded[0].url.path == f"/v1/{endpoint}.json"

    def test_injects_api_key_and_passes_all_params(self, recorded, client_factory):
        """Server key is injected and every client parameter is forwarded."""
        def handler(request: httpx.Request) -> httpx.Response:
            recorded.append(request)
            return httpx.Response(200, json={})

        client = client_factory(handler)
        client.get("/api/weather/forecast", params={"q": "1,2", "days": "3", "aqi": "yes"})

        params = recorded[0].url.params
        assert params["key"] == "server-key"
        assert params["q"] == "1,2"
        assert params["days"] == "3"
        assert params["aqi"] == "yes"

    def test_client_cannot_override_server_key(self, recorded, client_factory):
        """A key supplied by the browser is replaced by the server-held one."""
        def handler(request: httpx.Request) -> httpx.Response:
            recorded.append(request)
            return httpx.Response(200, json={})

        client = client_factory(handler)
        client.get("/api/weather/current", params={"q": "1,2", "key": "stolen"})

        assert recorded[0].url.params.get_list("key") == ["server-key"]

    def test_malformed_coordinates_pass_through(self, recorded, client_factory):
        """No validation: odd query values reach the upstream untouched."""
        def handler(request: httpx.Request) -> httpx.Response:
            recorded.append(request)
            return httpx.Response(200, json={})

        client = client_factory(handler)
        client.get("/api/weather/current", params={"q": "not-a-coordinate"})

        assert recorded[0].url.params["q"] == "not-a-coordinate"

    def test_upstream_error_message_is_surfaced(self, client_factory):
        """Provider error.message becomes the error envelope with HTTP 500."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400, json={"error": {"code": 1006, "message": "No matching location found."}}
            )

        client = client_factory(handler)
        response = client.get("/api/weather/current", params={"q": "999,999"})

        assert response.status_code == 500
        assert response.json() == {"error": "No matching location found."}

    def test_upstream_error_without_message(self, client_factory):
        """Without a provider message the local failure description is used."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="Service Unavailable")

        client = client_factory(handler)
        response = client.get("/api/weather/astronomy", params={"q": "1,2"})

        assert response.status_code == 500
        assert response.json() == {"error": "Request failed with status code 503"}

    def test_network_failure(self, client_factory):
        """Network errors map to HTTP 500 with the error description."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        client = client_factory(handler)
        response = client.get("/api/weather/current", params={"q": "1,2"})

        assert response.status_code == 500
        assert response.json() == {"error": "Connection refused"}

    def test_unknown_endpoint_is_not_proxied(self, tmp_path, recorded, client_factory):
        """Only current, forecast and astronomy reach the upstream provider."""
        def handler(request: httpx.Request) -> httpx.Response:
            recorded.append(request)
            return httpx.Response(200, json={})

        app.dependency_overrides[get_settings] = lambda: Settings(static_dir=tmp_path)
        client = client_factory(handler)
        response = client.get("/api/weather/history", params={"q": "1,2"})

        assert recorded == []
        assert response.status_code == 404
        assert response.text == "Index file not found"


class TestWeatherProxyService:
    """Tests for WeatherProxyService helpers."""

    def test_build_url(self):
        """Endpoint maps to {base}/{name}.json."""
        service = WeatherProxyService(api_key="k", base_url=UPSTREAM + "/")
        assert service.build_url(WeatherEndpoint.astronomy) == f"{UPSTREAM}/astronomy.json"

    def test_build_params_without_key(self):
        """No key is injected when none is configured."""
        service = WeatherProxyService(api_key="", base_url=UPSTREAM)
        assert service.build_params([("q", "1,2")]) == [("q", "1,2")]

    def test_build_params_keeps_repeated_values(self):
        """Repeated query keys are all forwarded."""
        service = WeatherProxyService(api_key="k", base_url=UPSTREAM)
        params = service.build_params([("q", "1,2"), ("hour", "1"), ("hour", "2")])
        assert params == [("key", "k"), ("q", "1,2"), ("hour", "1"), ("hour", "2")]
