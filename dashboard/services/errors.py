"""Dashboard client error types."""


class DashboardError(Exception):
    """Base class for client-side failures."""


class FetchError(DashboardError):
    """Network failure or non-2xx response."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class PayloadError(DashboardError):
    """Response body does not have the expected shape."""


class GeolocationError(DashboardError):
    """Position could not be acquired."""


class GeolocationDenied(GeolocationError):
    """The user refused the location permission."""


class GeolocationUnsupported(GeolocationError):
    """No geolocation capability is available."""
