"""Shared JSON-over-HTTP plumbing for dashboard clients."""
import logging
from typing import Any, Mapping, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from dashboard.services.errors import FetchError, PayloadError

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class JsonClient:
    """Thin async HTTP client that validates bodies against pydantic schemas."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def request_json(
        self,
        method: str,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Send a request and decode its JSON body, raising FetchError on failure."""
        try:
            response = await self.client.request(method, url, params=params)
        except httpx.HTTPError as exc:
            raise FetchError(f"{method} {url} failed: {exc}") from exc
        if not response.is_success:
            raise FetchError(
                f"{method} {url} returned {response.status_code}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise PayloadError(f"{url} returned invalid JSON") from exc

    async def get_model(
        self,
        url: str,
        schema: Type[SchemaT],
        params: Optional[Mapping[str, Any]] = None,
    ) -> SchemaT:
        """GET a JSON body and validate it against a schema."""
        body = await self.request_json("GET", url, params=params)
        try:
            return schema.model_validate(body)
        except ValidationError as exc:
            raise PayloadError(f"{url} returned an unexpected {schema.__name__}: {exc}") from exc
