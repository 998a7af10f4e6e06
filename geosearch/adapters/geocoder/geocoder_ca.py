"""geocoder.ca adapter — Canadian and US addresses."""

from __future__ import annotations

import logging
from typing import Any

from geosearch.adapters.geocoder.base import HttpProvider
from geosearch.domain.entities.geocode_result import GeocodeResult
from geosearch.domain.errors import AuthenticationError, ProviderError, QuotaExceededError
from geosearch.domain.value_objects.enums import ProviderIdentity
from geosearch.domain.value_objects.geo_point import GeoPoint
from geosearch.domain.value_objects.search_options import SearchOptions

logger = logging.getLogger(__name__)

GEOCODER_CA_URL = "https://geocoder.ca/"

# geocoder.ca error codes
AUTH_ERRORS = {"001", "002", "003"}
QUOTA_ERRORS = {"004"}
NO_MATCH_ERRORS = {"005", "006", "007", "008"}


class GeocoderCa(HttpProvider):
    identity = ProviderIdentity.GEOCODER_CA

    async def geocode(self, text: str, options: SearchOptions) -> list[GeocodeResult]:
        params = {"locate": text, **self._common_params(options)}
        data = await self._get_json(GEOCODER_CA_URL, params=params)
        return self._parse(data, self._parse_results)

    async def reverse_geocode(self, point: GeoPoint, options: SearchOptions) -> list[GeocodeResult]:
        params = {
            "latt": point.latitude,
            "longt": point.longitude,
            "reverse": 1,
            "allna": 1,
            **self._common_params(options),
        }
        data = await self._get_json(GEOCODER_CA_URL, params=params)
        return self._parse(data, self._parse_results)

    def _common_params(self, options: SearchOptions) -> dict[str, Any]:
        params: dict[str, Any] = {"json": 1}
        if self._settings.geocoder_ca_auth:
            params["auth"] = self._settings.geocoder_ca_auth
        params.update(options.extra)
        return params

    def _parse_results(self, data: dict[str, Any]) -> list[GeocodeResult]:
        error = data.get("error")
        if error:
            code = str(error.get("code", ""))
            description = error.get("description", "")
            if code in NO_MATCH_ERRORS:
                logger.info("geocoder.ca found no match (%s: %s)", code, description)
                return []
            if code in AUTH_ERRORS:
                raise AuthenticationError(f"geocoder.ca: {description}", provider=self.name)
            if code in QUOTA_ERRORS:
                raise QuotaExceededError(f"geocoder.ca: {description}", provider=self.name)
            raise ProviderError(f"geocoder.ca error {code}: {description}", provider=self.name)

        # Forward lookups nest the address under "standard", reverse ones do not
        parts = data.get("standard") or data
        street = self._join(parts.get("stnumber"), parts.get("staddress"), sep=" ")
        region = self._join(parts.get("prov"), parts.get("postal"), sep=" ")
        address = self._join(street, parts.get("city"), region)
        return [self._result(data["latt"], data["longt"], address, data)]
