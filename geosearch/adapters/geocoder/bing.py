"""Bing Maps geocoder adapter — REST Locations API."""

from __future__ import annotations

from typing import Any

from geosearch.adapters.geocoder.base import HttpProvider
from geosearch.domain.entities.geocode_result import GeocodeResult
from geosearch.domain.value_objects.enums import ProviderIdentity
from geosearch.domain.value_objects.geo_point import GeoPoint
from geosearch.domain.value_objects.search_options import SearchOptions

BING_LOCATIONS_URL = "https://dev.virtualearth.net/REST/v1/Locations"


class Bing(HttpProvider):
    identity = ProviderIdentity.BING

    async def geocode(self, text: str, options: SearchOptions) -> list[GeocodeResult]:
        params = {"q": text, **self._option_params(options)}
        data = await self._get_json(BING_LOCATIONS_URL, params=params)
        return self._parse(data, self._parse_results)

    async def reverse_geocode(self, point: GeoPoint, options: SearchOptions) -> list[GeocodeResult]:
        url = f"{BING_LOCATIONS_URL}/{point.latitude},{point.longitude}"
        data = await self._get_json(url, params=self._option_params(options))
        return self._parse(data, self._parse_results)

    def _option_params(self, options: SearchOptions) -> dict[str, Any]:
        params: dict[str, Any] = {
            "key": self._require(self._settings.bing_api_key, "BING_MAPS_API_KEY"),
            "culture": self._settings.language,
        }
        if options.bounds:
            ne, sw = options.northeast, options.southwest
            # south, west, north, east
            params["userMapView"] = f"{sw.latitude},{sw.longitude},{ne.latitude},{ne.longitude}"
        if options.region:
            params["userRegion"] = options.region.upper()
        params.update(options.extra)
        return params

    def _parse_results(self, data: dict[str, Any]) -> list[GeocodeResult]:
        resource_sets = data.get("resourceSets") or []
        if not resource_sets:
            return []
        results = []
        for item in resource_sets[0].get("resources", []):
            lat, lon = item["point"]["coordinates"]
            address = item.get("address", {}).get("formattedAddress") or item.get("name", "")
            results.append(self._result(lat, lon, address, item))
        return results
