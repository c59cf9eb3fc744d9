"""Controller orchestrating location sessions for the dashboard."""
import asyncio
import logging
from datetime import date
from typing import Callable, Optional

from dashboard.config import (
    AQI_GAUGE_MAX,
    AQI_UNAVAILABLE,
    CLICK_ZOOM,
    FORECAST_UNAVAILABLE,
    FULLSCREEN_OFF_LABEL,
    FULLSCREEN_ON_LABEL,
    INITIAL_ZOOM,
    MARKER_ZOOM,
    MSG_FETCH_FAILED,
    MSG_FETCH_FAILED_CLICK,
    MSG_GEO_DENIED,
    MSG_GEO_DENIED_RECENTER,
    MSG_GEO_UNSUPPORTED,
    POPUP_UNAVAILABLE,
    POPUP_YOUR_LOCATION,
    UV_GAUGE_MAX,
    VALUE_UNAVAILABLE,
)
from dashboard.models.location import Coordinate
from dashboard.models.session import MapMarker, Session, SessionPhase, SessionTrigger, ViewState
from dashboard.models.weather import AirQuality, AstronomyData, CurrentConditions
from dashboard.services import rendering
from dashboard.services.errors import DashboardError, GeolocationError, GeolocationUnsupported
from dashboard.services.geolocation import Geolocator
from dashboard.services.moon_service import MoonService
from dashboard.services.open_meteo_client import OpenMeteoClient
from dashboard.services.proxy_client import ProxyClient
from dashboard.views.chart_view import ChartView
from dashboard.views.document import Document
from dashboard.views.map_view import MapView
from dashboard.views.templates import (
    render_conditions_panel,
    render_forecast_cards,
    render_forecast_unavailable,
    render_message,
)

logger = logging.getLogger(__name__)


class DashboardController:
    """
    Drives location sessions: Idle -> Locating -> Fetching -> Rendered | Failed.

    Every session gets a fresh id from the view state. All fetches of a
    session run concurrently; each branch re-checks the id before touching
    the document, map or chart, so a late response from an older session
    is dropped instead of overwriting newer state.
    """

    def __init__(
        self,
        proxy: ProxyClient,
        open_meteo: OpenMeteoClient,
        geolocator: Optional[Geolocator],
        document: Document,
        map_view: MapView,
        chart_view: ChartView,
        moon_service: Optional[MoonService] = None,
        identity_sink: Optional[Callable[[str], None]] = None,
        today: Callable[[], date] = date.today,
    ):
        self.proxy = proxy
        self.open_meteo = open_meteo
        self.geolocator = geolocator
        self.document = document
        self.map_view = map_view
        self.chart_view = chart_view
        self.moon_service = moon_service or MoonService()
        self.identity_sink = identity_sink
        self.today = today
        self.state = ViewState()
        self.map_view.on_marker_click(self.on_marker_click)

    # User-facing entry points

    async def start(self) -> Session:
        """Page load: locate the user and render their weather."""
        return await self._locate_and_run(SessionTrigger.LOAD)

    async def recenter(self) -> Session:
        """Recenter button: re-acquire the position and refresh everything."""
        return await self._locate_and_run(SessionTrigger.RECENTER)

    async def on_map_click(self, coordinate: Coordinate) -> Session:
        """Map click: render weather for the clicked point."""
        session = self.state.begin(SessionTrigger.MAP_CLICK)
        session.phase = SessionPhase.LOCATING
        self._remove_marker()
        self.map_view.set_view(coordinate, CLICK_ZOOM)
        await self._run_session(session, coordinate)
        return session

    def on_marker_click(self, marker: MapMarker) -> None:
        """Recenter the map on the clicked marker."""
        self.map_view.set_view(marker.coordinate, MARKER_ZOOM, animate=True)
        logger.debug("Map recentered to marker at: %s", marker.coordinate)

    def toggle_fullscreen(self) -> bool:
        """Flip the map container between fullscreen and inline."""
        self.state.fullscreen = not self.state.fullscreen
        self.map_view.set_fullscreen(self.state.fullscreen)
        label = FULLSCREEN_ON_LABEL if self.state.fullscreen else FULLSCREEN_OFF_LABEL
        self.document.set_text("fullscreen-btn", label)
        return self.state.fullscreen

    async def identify_chat_user(self) -> Optional[str]:
        """Fetch a chat identity token and hand it to the identity sink."""
        try:
            token = await self.proxy.get_chat_token()
        except DashboardError as exc:
            logger.error("Chatbase identify error: %s", exc)
            return None
        if not token:
            logger.warning("No Chatbase token returned")
            return None
        if self.identity_sink is not None:
            self.identity_sink(token)
        logger.info("Chatbase user identified")
        return token

    # Session orchestration

    async def _locate_and_run(self, trigger: SessionTrigger) -> Session:
        session = self.state.begin(trigger)
        session.phase = SessionPhase.LOCATING

        if self.geolocator is None:
            self._fail(session, MSG_GEO_UNSUPPORTED)
            return session

        try:
            coordinate = await self.geolocator.get_current_position()
        except GeolocationUnsupported as exc:
            logger.warning("Geolocation unavailable: %s", exc)
            if self.state.is_current(session):
                self._fail(session, MSG_GEO_UNSUPPORTED)
            return session
        except GeolocationError as exc:
            logger.warning("Geolocation blocked by user: %s", exc)
            if self.state.is_current(session):
                if trigger is SessionTrigger.RECENTER:
                    self._remove_marker()
                    self._fail(session, MSG_GEO_DENIED_RECENTER)
                else:
                    self._fail(session, MSG_GEO_DENIED)
            return session

        if not self.state.is_current(session):
            logger.debug("Discarding position for stale session %s", session.session_id)
            return session

        self.map_view.show()
        self.map_view.set_view(coordinate, INITIAL_ZOOM, animate=trigger is SessionTrigger.RECENTER)
        if trigger is SessionTrigger.LOAD:
            self._place_marker(session, coordinate, POPUP_YOUR_LOCATION)
        else:
            self._remove_marker()
        await self._run_session(session, coordinate)
        return session

    async def _run_session(self, session: Session, coordinate: Coordinate) -> None:
        session.coordinate = coordinate
        session.phase = SessionPhase.FETCHING

        current_task = asyncio.create_task(self.proxy.get_current(coordinate))
        aqi_task = asyncio.create_task(self._fetch_air_quality(coordinate))
        secondary = asyncio.gather(
            self._load_seven_day_forecast(session, coordinate),
            self._load_temperature_chart(session, coordinate),
            self._load_astronomy(session, coordinate),
        )

        try:
            current = await current_task
        except DashboardError as exc:
            logger.error("Weather fetch error for %s: %s", coordinate, exc)
            aqi_task.cancel()
            if self.state.is_current(session):
                self._place_marker(session, coordinate, POPUP_UNAVAILABLE)
                failure = (
                    MSG_FETCH_FAILED_CLICK
                    if session.trigger is SessionTrigger.MAP_CLICK
                    else MSG_FETCH_FAILED
                )
                self._fail(session, failure)
            await secondary
            return

        air_quality = await aqi_task
        if self.state.is_current(session):
            self._render_conditions(session, coordinate, current, air_quality)
        else:
            logger.debug("Discarding stale conditions for session %s", session.session_id)

        await secondary
        if self.state.is_current(session) and session.phase is SessionPhase.FETCHING:
            session.phase = SessionPhase.RENDERED
            logger.info("Panel updated for: %s at %s", current.location_name, coordinate)

    def _fail(self, session: Session, message: str) -> None:
        session.phase = SessionPhase.FAILED
        self.document.set_html("response", render_message(message))

    # Branches

    async def _fetch_air_quality(self, coordinate: Coordinate) -> AirQuality:
        try:
            return await self.open_meteo.get_air_quality(coordinate)
        except DashboardError as exc:
            logger.warning("AQI error: %s", exc)
            return AirQuality()

    async def _load_seven_day_forecast(self, session: Session, coordinate: Coordinate) -> None:
        try:
            days = await self.open_meteo.get_seven_day_forecast(coordinate)
        except DashboardError as exc:
            logger.warning("Error fetching 7-day forecast: %s", exc)
            if self.state.is_current(session):
                self.document.set_html(
                    "forecast-scroll", render_forecast_unavailable(FORECAST_UNAVAILABLE)
                )
            return
        if self.state.is_current(session):
            self.document.set_html("forecast-scroll", render_forecast_cards(days))

    async def _load_temperature_chart(self, session: Session, coordinate: Coordinate) -> None:
        try:
            series = await self.proxy.get_hourly_temperatures(coordinate)
        except DashboardError as exc:
            logger.warning("Temp graph error: %s", exc)
            if self.state.is_current(session):
                self._destroy_chart()
            return
        if not self.state.is_current(session):
            logger.debug("Discarding stale chart for session %s", session.session_id)
            return
        self._destroy_chart()
        self.state.chart = self.chart_view.create(series)

    async def _load_astronomy(self, session: Session, coordinate: Coordinate) -> None:
        try:
            astro = await self.proxy.get_astronomy(coordinate)
        except DashboardError as exc:
            logger.warning("Astronomy error: %s", exc)
            if self.state.is_current(session):
                self._render_astronomy_unavailable()
            return
        if self.state.is_current(session):
            self._render_astronomy(astro)

    # Rendering

    def _render_conditions(
        self,
        session: Session,
        coordinate: Coordinate,
        current: CurrentConditions,
        air_quality: AirQuality,
    ) -> None:
        aqi = air_quality.display(AQI_UNAVAILABLE)

        popup = f"{rendering.format_number(current.temp_c)}°C<br>AQI: {aqi}"
        if session.trigger is not SessionTrigger.MAP_CLICK:
            popup = f"{POPUP_YOUR_LOCATION}<br>{popup}"
        self._place_marker(session, coordinate, popup)

        self.document.set_html("response", render_conditions_panel(current, aqi))
        self._render_highlights(current, air_quality)

    def _render_highlights(self, current: CurrentConditions, air_quality: AirQuality) -> None:
        doc = self.document

        doc.set_text("humidity-val", f"{current.humidity}%")
        doc.set_text("humidity-desc", rendering.describe_humidity(current.humidity))
        if current.dewpoint_c is None:
            doc.set_text("dew-val", VALUE_UNAVAILABLE)
        else:
            doc.set_text("dew-val", f"{rendering.format_number(current.dewpoint_c)}° Dew point")

        if current.uv is None:
            doc.set_text("uv-val", VALUE_UNAVAILABLE)
            doc.set_text("uv-desc", VALUE_UNAVAILABLE)
        else:
            doc.set_text("uv-val", rendering.format_number(current.uv))
            doc.set_text("uv-desc", rendering.describe_uv(current.uv))
            doc.draw_arc("uvArc", rendering.gauge_arc(current.uv, UV_GAUGE_MAX))

        if air_quality.available:
            doc.set_text("aqi-val", air_quality.us_aqi)
            doc.set_text("aqi-desc", rendering.describe_aqi(air_quality.us_aqi))
            doc.draw_arc("aqiArc", rendering.gauge_arc(air_quality.us_aqi, AQI_GAUGE_MAX))
        else:
            doc.set_text("aqi-val", AQI_UNAVAILABLE)
            doc.set_text("aqi-desc", VALUE_UNAVAILABLE)

        if current.vis_km is None:
            doc.set_text("vis-km", VALUE_UNAVAILABLE)
            doc.set_text("vis-desc", VALUE_UNAVAILABLE)
        else:
            doc.set_text("vis-km", f"{rendering.format_number(current.vis_km)} km")
            doc.set_text("vis-desc", rendering.describe_visibility(current.vis_km))

        doc.set_text("pressure-val", rendering.format_number(current.pressure_mb))
        doc.set_text("pressure-desc", rendering.describe_pressure_trend(current.pressure_trend))

    def _render_astronomy(self, astro: AstronomyData) -> None:
        doc = self.document
        doc.set_text("sunrise-time", astro.sunrise or VALUE_UNAVAILABLE)
        doc.set_text("sunset-time", astro.sunset or VALUE_UNAVAILABLE)
        doc.set_text("sun-duration", rendering.calc_duration(astro.sunrise, astro.sunset))
        doc.set_text("moonrise-time", astro.moonrise or VALUE_UNAVAILABLE)
        doc.set_text("moonset-time", astro.moonset or VALUE_UNAVAILABLE)
        doc.set_text("moon-duration", rendering.calc_duration(astro.moonrise, astro.moonset))
        doc.set_text("moon-phase-text", astro.moon_phase)
        doc.set_attribute("moon-phase-icon", "src", rendering.get_moon_phase_icon(astro.moon_phase))
        doc.set_text(
            "moon-next-full",
            self.moon_service.next_full_moon(astro.moon_phase, today=self.today()),
        )
        doc.draw_arc("sunArc", rendering.sun_arc())
        doc.draw_arc("moonArc", rendering.moon_arc())

    def _render_astronomy_unavailable(self) -> None:
        for element_id in (
            "sunrise-time", "sunset-time", "sun-duration",
            "moonrise-time", "moonset-time", "moon-duration",
            "moon-phase-text", "moon-next-full",
        ):
            self.document.set_text(element_id, VALUE_UNAVAILABLE)
        self.document.set_attribute("moon-phase-icon", "src", rendering.get_moon_phase_icon(""))

    # Singletons: one marker, one chart

    def _place_marker(self, session: Session, coordinate: Coordinate, popup: str) -> None:
        if not self.state.is_current(session):
            return
        self._remove_marker()
        marker = MapMarker(coordinate=coordinate, popup=popup)
        self.map_view.add_marker(marker)
        self.state.marker = marker

    def _remove_marker(self) -> None:
        if self.state.marker is not None:
            self.map_view.remove_marker(self.state.marker)
            self.state.marker = None

    def _destroy_chart(self) -> None:
        if self.state.chart is not None:
            self.chart_view.destroy(self.state.chart)
            self.state.chart = None
