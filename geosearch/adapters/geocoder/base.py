"""Shared HTTP plumbing for provider adapters — implements GeocoderPort."""

from __future__ import annotations

import logging
from abc import abstractmethod
from collections.abc import Callable
from typing import Any

import httpx

from geosearch.application.ports.geocoder_port import GeocoderPort
from geosearch.config import Settings
from geosearch.config import settings as default_settings
from geosearch.domain.entities.geocode_result import GeocodeResult
from geosearch.domain.errors import (
    AuthenticationError,
    ConfigurationError,
    InvalidResponseError,
    ProviderError,
    ProviderTimeoutError,
    QuotaExceededError,
)
from geosearch.domain.value_objects.enums import ProviderIdentity
from geosearch.domain.value_objects.geo_point import GeoPoint
from geosearch.domain.value_objects.search_options import SearchOptions

logger = logging.getLogger(__name__)


class HttpProvider(GeocoderPort):
    """Base for providers that answer over HTTP with JSON.

    Subclasses build the request and parse the payload; this class owns the
    client, the timeout and the mapping of transport failures onto
    ProviderError subclasses. Nothing is swallowed here.
    """

    identity: ProviderIdentity

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._settings = settings or default_settings
        self._transport = transport

    @property
    def name(self) -> str:
        return self.identity.value

    async def search(self, query: str | GeoPoint, options: SearchOptions) -> list[GeocodeResult]:
        if isinstance(query, GeoPoint):
            return await self.reverse_geocode(query, options)
        return await self.geocode(query, options)

    @abstractmethod
    async def geocode(self, text: str, options: SearchOptions) -> list[GeocodeResult]:
        ...

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        timeout = self._settings.request_timeout
        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                proxy=self._settings.proxy,
                timeout=timeout,
            ) as client:
                response = await client.get(url, params=params, headers=headers)
                response.raise_for_status()
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(
                f"{self.name} did not answer within {timeout:.1f}s", provider=self.name
            ) from e
        except httpx.HTTPStatusError as e:
            raise self._status_error(e.response) from e
        except httpx.HTTPError as e:
            raise ProviderError(f"{self.name} request failed: {e}", provider=self.name) from e

        logger.debug("%s answered HTTP %d for %s", self.name, response.status_code, response.url)
        try:
            return response.json()
        except ValueError as e:
            raise InvalidResponseError(
                f"{self.name} returned a body that is not JSON: {response.text[:120]}",
                provider=self.name,
            ) from e

    def _status_error(self, response: httpx.Response) -> ProviderError:
        status = response.status_code
        detail = f"{self.name} HTTP {status}: {response.text[:120]}"
        if status in (401, 403):
            return AuthenticationError(detail, provider=self.name)
        if status == 429:
            return QuotaExceededError(detail, provider=self.name)
        return ProviderError(detail, provider=self.name)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require(self, value: str, env_name: str) -> str:
        if not value:
            raise ConfigurationError(f"{self.name} lookup needs {env_name} to be set")
        return value

    def _parse(self, data: Any, parser: Callable[[Any], list[GeocodeResult]]) -> list[GeocodeResult]:
        """Run ``parser`` and report a malformed payload as InvalidResponseError."""
        try:
            return parser(data)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise InvalidResponseError(
                f"{self.name} returned an unexpected payload: {e!r}", provider=self.name
            ) from e

    def _result(self, lat, lon, address: str, data: dict[str, Any]) -> GeocodeResult:
        return GeocodeResult(
            coordinates=GeoPoint(latitude=float(lat), longitude=float(lon)),
            address=address or "",
            provider=self.name,
            data=data,
        )

    @staticmethod
    def _join(*parts: str | None, sep: str = ", ") -> str:
        return sep.join(str(p).strip() for p in parts if p is not None and str(p).strip())
