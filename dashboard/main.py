"""Headless dashboard runner."""
import asyncio
import logging
from typing import List, Optional

import httpx

from dashboard.config import DashboardSettings
from dashboard.controller import DashboardController
from dashboard.models.location import Coordinate
from dashboard.services.geolocation import FixedGeolocator
from dashboard.services.open_meteo_client import OpenMeteoClient
from dashboard.services.proxy_client import ProxyClient
from dashboard.views.chart_view import ChartView
from dashboard.views.document import Document
from dashboard.views.map_view import MapView

logger = logging.getLogger(__name__)


async def run_dashboard(
    settings: DashboardSettings,
    coordinate: Optional[Coordinate],
    click: Optional[Coordinate] = None,
) -> DashboardController:
    """Load the dashboard once, optionally followed by a map click."""
    async with httpx.AsyncClient(timeout=settings.request_timeout_seconds) as client:
        controller = DashboardController(
            proxy=ProxyClient(settings.proxy_base_url, client=client),
            open_meteo=OpenMeteoClient(
                settings.forecast_url, settings.air_quality_url, client=client
            ),
            geolocator=FixedGeolocator(coordinate),
            document=Document(),
            map_view=MapView(),
            chart_view=ChartView(),
        )
        await asyncio.gather(controller.identify_chat_user(), controller.start())
        if click is not None:
            await controller.on_map_click(click)
    return controller


def print_document(controller: DashboardController) -> None:
    """Dump the rendered elements to stdout."""
    state = controller.state
    print("=" * 60)
    print(f"Session {state.current_session_id}: {state.phase.value}")
    print("=" * 60)
    for element_id, content in controller.document.elements.items():
        print(f"[{element_id}]\n{content}\n")
    if state.marker is not None:
        print(f"Marker at {state.marker.coordinate}: {state.marker.popup}")
    if state.chart is not None:
        points = ", ".join(
            f"{label} {value}" for label, value in zip(state.chart.labels, state.chart.values)
        )
        print(f"Chart: {points}")


def main(argv: Optional[List[str]] = None):
    """Run one dashboard session against a running proxy."""
    import argparse

    settings = DashboardSettings()

    parser = argparse.ArgumentParser(description="Render the weather dashboard headlessly")
    parser.add_argument("--lat", type=float, default=settings.default_latitude, help="Latitude of the device position")
    parser.add_argument("--lon", type=float, default=settings.default_longitude, help="Longitude of the device position")
    parser.add_argument(
        "--deny-location",
        action="store_true",
        help="Simulate a refused location permission",
    )
    parser.add_argument(
        "--click",
        type=float,
        nargs=2,
        metavar=("LAT", "LON"),
        default=None,
        help="Simulate a map click after the initial load",
    )
    parser.add_argument("--proxy-url", default=None, help="Override the proxy base URL")

    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level)
    if args.proxy_url:
        settings.proxy_base_url = args.proxy_url

    coordinate = None if args.deny_location else Coordinate(args.lat, args.lon)
    click = Coordinate(*args.click) if args.click else None
    controller = asyncio.run(run_dashboard(settings, coordinate, click))
    print_document(controller)


if __name__ == "__main__":
    main()
