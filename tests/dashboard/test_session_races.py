"""Tests for overlapping sessions resolving out of order."""
import asyncio
from datetime import date
from typing import Dict

import pytest

from dashboard.controller import DashboardController
from dashboard.models.location import Coordinate
from dashboard.models.session import SessionPhase
from dashboard.models.weather import (
    AirQuality,
    AstronomyData,
    CurrentConditions,
    ForecastDay,
    HourlyTemperature,
)
from dashboard.services.geolocation import FixedGeolocator
from dashboard.views.chart_view import ChartView
from dashboard.views.document import Document
from dashboard.views.map_view import MapView

FIRST = Coordinate(10.0, 10.0)
SECOND = Coordinate(20.0, 20.0)
NAMES = {FIRST: "First Town", SECOND: "Second City"}


class GatedProxy:
    """Proxy fake whose current-conditions calls wait for a per-coordinate gate."""

    def __init__(self):
        self.gates: Dict[Coordinate, asyncio.Event] = {}

    def gate(self, coordinate: Coordinate) -> asyncio.Event:
        return self.gates.setdefault(coordinate, asyncio.Event())

    async def get_current(self, coordinate: Coordinate) -> CurrentConditions:
        await self.gate(coordinate).wait()
        return CurrentConditions(
            location_name=NAMES[coordinate],
            temp_c=coordinate.latitude,
            condition_text="Clear",
            wind_kph=5.0,
            humidity=50,
            feelslike_c=coordinate.latitude,
            pressure_mb=1012.0,
        )

    async def get_hourly_temperatures(self, coordinate: Coordinate) -> HourlyTemperature:
        await self.gate(coordinate).wait()
        return HourlyTemperature(labels=["00:00"], temps_c=[coordinate.latitude])

    async def get_astronomy(self, coordinate: Coordinate) -> AstronomyData:
        return AstronomyData(
            sunrise="06:00", sunset="18:00", moonrise=None, moonset=None, moon_phase="Full Moon"
        )

    async def get_chat_token(self):
        return None


class StaticOpenMeteo:
    async def get_air_quality(self, coordinate: Coordinate) -> AirQuality:
        return AirQuality(us_aqi=int(coordinate.latitude))

    async def get_seven_day_forecast(self, coordinate: Coordinate):
        return [
            ForecastDay(day=date(2025, 6, 2 + i), high_c=coordinate.latitude, low_c=0.0, weather_code=0)
            for i in range(7)
        ]


def make_controller():
    proxy = GatedProxy()
    map_view = MapView()
    chart_view = ChartView()
    document = Document()
    controller = DashboardController(
        proxy=proxy,
        open_meteo=StaticOpenMeteo(),
        geolocator=FixedGeolocator(FIRST),
        document=document,
        map_view=map_view,
        chart_view=chart_view,
        today=lambda: date(2025, 6, 1),
    )
    return controller, proxy, map_view, chart_view, document


class TestOverlappingClicks:
    """Two map clicks whose fetches resolve in either order."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("release_order", [(SECOND, FIRST), (FIRST, SECOND)])
    async def test_latest_click_wins(self, release_order):
        """Only the latest session renders; at most one marker and chart survive."""
        controller, proxy, map_view, chart_view, document = make_controller()

        first = asyncio.create_task(controller.on_map_click(FIRST))
        await asyncio.sleep(0)
        second = asyncio.create_task(controller.on_map_click(SECOND))
        await asyncio.sleep(0)

        tasks = {FIRST: first, SECOND: second}
        for coordinate in release_order:
            proxy.gate(coordinate).set()
            await tasks[coordinate]
            assert len(map_view.markers) <= 1
            assert len(chart_view.live) <= 1

        assert len(map_view.markers) == 1
        assert map_view.markers[0].coordinate == SECOND
        assert "Second City" in document.get("response")
        assert "First Town" not in document.get("response")
        assert len(chart_view.live) == 1
        assert chart_view.live[0].values == [SECOND.latitude]
        assert "20.0°C" in document.get("forecast-scroll")

        assert second.result().phase is SessionPhase.RENDERED
        assert first.result().phase is not SessionPhase.RENDERED

    @pytest.mark.asyncio
    async def test_stale_session_does_not_override_failure(self):
        """A late success from an old session cannot replace a newer failure message."""
        controller, proxy, map_view, _, document = make_controller()

        first = asyncio.create_task(controller.on_map_click(FIRST))
        await asyncio.sleep(0)
        controller.geolocator.denied = True
        await controller.recenter()

        proxy.gate(FIRST).set()
        await first

        assert "Geolocation denied. Unable to update." in document.get("response")
        assert map_view.markers == []
