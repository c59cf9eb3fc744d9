"""Coordinate model for map and geolocation positions."""
from attrs import define


@define(frozen=True)
class Coordinate:
    """A WGS84 position in degrees."""

    latitude: float
    longitude: float

    def as_query(self) -> str:
        """Format as the provider's ``q=<lat>,<lon>`` value."""
        return f"{self.latitude},{self.longitude}"
