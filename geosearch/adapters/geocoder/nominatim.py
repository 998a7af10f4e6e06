"""Nominatim geocoder adapter — OpenStreetMap search and reverse endpoints."""

from __future__ import annotations

import logging
from typing import Any

from geosearch.adapters.geocoder.base import HttpProvider
from geosearch.domain.entities.geocode_result import GeocodeResult
from geosearch.domain.value_objects.enums import ProviderIdentity
from geosearch.domain.value_objects.geo_point import GeoPoint
from geosearch.domain.value_objects.search_options import SearchOptions

logger = logging.getLogger(__name__)


class Nominatim(HttpProvider):
    """Nominatim lookups. The usage policy requires an identifying User-Agent."""

    identity = ProviderIdentity.NOMINATIM

    @property
    def base_url(self) -> str:
        return f"https://{self._settings.nominatim_host}"

    @property
    def headers(self) -> dict[str, str]:
        return {
            "User-Agent": self._settings.nominatim_user_agent,
            "Accept-Language": self._settings.language,
        }

    async def geocode(self, text: str, options: SearchOptions) -> list[GeocodeResult]:
        params: dict[str, Any] = {"q": text, "format": "json", "addressdetails": 1}
        if options.bounds:
            ne, sw = options.northeast, options.southwest
            # left, top, right, bottom
            params["viewbox"] = f"{sw.longitude},{ne.latitude},{ne.longitude},{sw.latitude}"
        if options.region:
            params["countrycodes"] = options.region
        params.update(options.extra)

        data = await self._get_json(f"{self.base_url}/search", params=params, headers=self.headers)
        results = self._parse(data, self._parse_results)
        if not results:
            logger.info("Nominatim returned no results for '%s'", text)
        return results

    async def reverse_geocode(self, point: GeoPoint, options: SearchOptions) -> list[GeocodeResult]:
        params: dict[str, Any] = {
            "lat": point.latitude,
            "lon": point.longitude,
            "format": "json",
            "addressdetails": 1,
            **options.extra,
        }
        data = await self._get_json(f"{self.base_url}/reverse", params=params, headers=self.headers)
        if isinstance(data, dict) and "error" in data:
            logger.info("Nominatim could not reverse %s: %s", point, data["error"])
            return []
        return self._parse([data], self._parse_results)

    def _parse_results(self, data: list[dict[str, Any]]) -> list[GeocodeResult]:
        return [
            self._result(item["lat"], item["lon"], item.get("display_name", ""), item)
            for item in data
        ]
