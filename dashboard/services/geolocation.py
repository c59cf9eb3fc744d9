"""Position providers standing in for browser geolocation."""
from typing import Optional

from dashboard.models.location import Coordinate
from dashboard.services.errors import GeolocationDenied, GeolocationUnsupported


class Geolocator:
    """Base class for position providers."""

    async def get_current_position(self) -> Coordinate:
        """
        Acquire the device position.

        Raises:
            GeolocationDenied: if the user refused permission.
            GeolocationUnsupported: if the device has no positioning capability.
        """
        raise NotImplementedError


class FixedGeolocator(Geolocator):
    """Reports a configured position, or denial when none is set."""

    def __init__(
        self,
        coordinate: Optional[Coordinate] = None,
        denied: bool = False,
        supported: bool = True,
    ):
        self.coordinate = coordinate
        self.denied = denied
        self.supported = supported

    async def get_current_position(self) -> Coordinate:
        if not self.supported:
            raise GeolocationUnsupported("Geolocation is not available on this device")
        if self.denied or self.coordinate is None:
            raise GeolocationDenied("User denied Geolocation")
        return self.coordinate
