"""Google Maps geocoder adapters — standard and Premier (signed) access."""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
from typing import Any
from urllib.parse import urlencode, urlsplit

from geosearch.adapters.geocoder.base import HttpProvider
from geosearch.domain.entities.geocode_result import GeocodeResult
from geosearch.domain.errors import (
    AuthenticationError,
    ConfigurationError,
    ProviderError,
    QuotaExceededError,
)
from geosearch.domain.value_objects.enums import ProviderIdentity
from geosearch.domain.value_objects.geo_point import GeoPoint
from geosearch.domain.value_objects.search_options import SearchOptions

logger = logging.getLogger(__name__)

GOOGLE_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"


class Google(HttpProvider):
    """Google Maps Geocoding API."""

    identity = ProviderIdentity.GOOGLE

    async def geocode(self, text: str, options: SearchOptions) -> list[GeocodeResult]:
        return await self._lookup({"address": text}, options)

    async def reverse_geocode(self, point: GeoPoint, options: SearchOptions) -> list[GeocodeResult]:
        return await self._lookup({"latlng": f"{point.latitude},{point.longitude}"}, options)

    async def _lookup(self, query_params: dict[str, Any], options: SearchOptions) -> list[GeocodeResult]:
        params = {**query_params, **self._option_params(options)}
        data = await self._fetch(params)
        return self._parse(data, self._parse_results)

    async def _fetch(self, params: dict[str, Any]) -> Any:
        params["key"] = self._require(self._settings.google_api_key, "GOOGLE_MAPS_API_KEY")
        return await self._get_json(GOOGLE_GEOCODE_URL, params=params)

    def _option_params(self, options: SearchOptions) -> dict[str, Any]:
        params: dict[str, Any] = {"language": self._settings.language}
        if options.bounds:
            ne, sw = options.northeast, options.southwest
            params["bounds"] = f"{sw.latitude},{sw.longitude}|{ne.latitude},{ne.longitude}"
        if options.region:
            params["region"] = options.region
        params.update(options.extra)
        return params

    def _parse_results(self, data: dict[str, Any]) -> list[GeocodeResult]:
        status = data["status"]
        if status == "ZERO_RESULTS":
            logger.info("%s returned no results", self.name)
            return []
        if status == "OVER_QUERY_LIMIT":
            raise QuotaExceededError("Google query limit exceeded", provider=self.name)
        if status == "REQUEST_DENIED":
            raise AuthenticationError(
                f"Google denied the request: {data.get('error_message', '')}", provider=self.name
            )
        if status != "OK":
            raise ProviderError(
                f"Google returned {status}: {data.get('error_message', '')}", provider=self.name
            )

        return [
            self._result(
                item["geometry"]["location"]["lat"],
                item["geometry"]["location"]["lng"],
                item.get("formatted_address", ""),
                item,
            )
            for item in data["results"]
        ]


def sign_path(path_and_query: str, private_key: str) -> str:
    """URL-safe base64 HMAC-SHA1 signature Google expects for Premier requests."""
    try:
        decoded_key = base64.urlsafe_b64decode(private_key)
    except ValueError as e:
        raise ConfigurationError("GOOGLE_PREMIER_KEY is not valid base64") from e
    digest = hmac.new(decoded_key, path_and_query.encode("utf-8"), hashlib.sha1).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii")


class GooglePremier(Google):
    """Google Maps for Business: client id, optional channel, signed URLs."""

    identity = ProviderIdentity.GOOGLE_PREMIER

    async def _fetch(self, params: dict[str, Any]) -> Any:
        return await self._get_json(self.signed_url(params))

    def signed_url(self, params: dict[str, Any]) -> str:
        key = self._require(self._settings.google_premier_key, "GOOGLE_PREMIER_KEY")
        params = dict(params)
        params["client"] = self._require(self._settings.google_premier_client, "GOOGLE_PREMIER_CLIENT")
        if self._settings.google_premier_channel:
            params["channel"] = self._settings.google_premier_channel

        query = urlencode(params)
        path = urlsplit(GOOGLE_GEOCODE_URL).path
        signature = sign_path(f"{path}?{query}", key)
        return f"{GOOGLE_GEOCODE_URL}?{query}&signature={signature}"
