"""Map surface holding markers and the viewport."""
from typing import Callable, List, Optional, Tuple

from dashboard.models.location import Coordinate
from dashboard.models.session import MapMarker


class MapView:
    """In-memory map: a viewport plus the markers currently on it."""

    def __init__(self):
        self.center: Optional[Coordinate] = None
        self.zoom: Optional[int] = None
        self.markers: List[MapMarker] = []
        self.open_popup: Optional[str] = None
        self.fullscreen = False
        self.visible = False
        self.view_history: List[Tuple[Coordinate, int, bool]] = []
        self._marker_click: Optional[Callable[[MapMarker], None]] = None

    def show(self) -> None:
        self.visible = True

    def set_view(self, center: Coordinate, zoom: int, animate: bool = False) -> None:
        self.center = center
        self.zoom = zoom
        self.view_history.append((center, zoom, animate))

    def add_marker(self, marker: MapMarker) -> None:
        """Add a marker and open its popup."""
        self.markers.append(marker)
        self.open_popup = marker.popup

    def remove_marker(self, marker: MapMarker) -> None:
        if marker in self.markers:
            self.markers.remove(marker)
        if self.open_popup == marker.popup and not self.markers:
            self.open_popup = None

    def on_marker_click(self, handler: Callable[[MapMarker], None]) -> None:
        self._marker_click = handler

    def click_marker(self, marker: MapMarker) -> None:
        if self._marker_click is not None and marker in self.markers:
            self._marker_click(marker)

    def set_fullscreen(self, enabled: bool) -> None:
        self.fullscreen = enabled
