"""Service forwarding weather requests to the upstream provider."""
import logging
from typing import Any, Iterable, List, Optional, Tuple

import httpx

from backend.config import settings
from backend.exceptions import UpstreamError
from backend.schemas.weather import WeatherEndpoint

logger = logging.getLogger(__name__)


def extract_upstream_message(response: Optional[httpx.Response]) -> Optional[str]:
    """Return the provider's ``error.message`` from a response body, if any."""
    if response is None:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        if message:
            return str(message)
    return None


class WeatherProxyService:
    """
    Forwards weather queries to the upstream provider with the server-held key.

    Query parameters are passed through untouched; no validation, caching or
    retrying happens here. One outbound call is made per forwarded request.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize service with upstream credentials and an optional transport."""
        self.api_key = api_key if api_key is not None else settings.weather_api_key
        self.base_url = (base_url or settings.weather_api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.upstream_timeout_seconds
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazily created shared HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._client

    async def aclose(self) -> None:
        """Close the shared HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def build_url(self, endpoint: WeatherEndpoint) -> str:
        """Upstream URL for an endpoint."""
        return f"{self.base_url}/{endpoint.value}.json"

    def build_params(self, query: Iterable[Tuple[str, str]]) -> List[Tuple[str, str]]:
        """Forward every query pair and inject the provider key."""
        params = [(k, v) for k, v in query if k != "key"]
        if self.api_key:
            params.insert(0, ("key", self.api_key))
        return params

    async def forward(
        self,
        endpoint: WeatherEndpoint,
        query: Iterable[Tuple[str, str]],
    ) -> Tuple[int, Any]:
        """
        Forward a request upstream.

        Returns:
            Tuple of (upstream status code, decoded JSON body)

        Raises:
            UpstreamError: on network failure, non-2xx status or a non-JSON body.
                The message is the provider's error message when it sent one.
        """
        url = self.build_url(endpoint)
        try:
            response = await self.client.get(url, params=self.build_params(query))
            response.raise_for_status()
            return response.status_code, response.json()
        except httpx.HTTPStatusError as exc:
            message = extract_upstream_message(exc.response) or (
                f"Request failed with status code {exc.response.status_code}"
            )
            logger.warning("Upstream %s returned %s: %s", endpoint.value, exc.response.status_code, message)
            raise UpstreamError(message) from exc
        except httpx.HTTPError as exc:
            message = str(exc) or exc.__class__.__name__
            logger.warning("Upstream %s request failed: %s", endpoint.value, message)
            raise UpstreamError(message) from exc
        except ValueError as exc:
            logger.warning("Upstream %s returned a non-JSON body", endpoint.value)
            raise UpstreamError(f"Invalid JSON from upstream: {exc}") from exc
