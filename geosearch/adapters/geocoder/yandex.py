"""Yandex geocoder adapter — HTTP Geocoder 1.x JSON API."""

from __future__ import annotations

from typing import Any

from geosearch.adapters.geocoder.base import HttpProvider
from geosearch.domain.entities.geocode_result import GeocodeResult
from geosearch.domain.value_objects.enums import ProviderIdentity
from geosearch.domain.value_objects.geo_point import GeoPoint
from geosearch.domain.value_objects.search_options import SearchOptions

YANDEX_GEOCODE_URL = "https://geocode-maps.yandex.ru/1.x/"


class Yandex(HttpProvider):
    identity = ProviderIdentity.YANDEX

    async def geocode(self, text: str, options: SearchOptions) -> list[GeocodeResult]:
        return await self._lookup(text, options)

    async def reverse_geocode(self, point: GeoPoint, options: SearchOptions) -> list[GeocodeResult]:
        # Yandex takes longitude first
        return await self._lookup(f"{point.longitude},{point.latitude}", options)

    async def _lookup(self, geocode: str, options: SearchOptions) -> list[GeocodeResult]:
        params: dict[str, Any] = {
            "geocode": geocode,
            "format": "json",
            "lang": self._settings.language,
            "apikey": self._require(self._settings.yandex_api_key, "YANDEX_GEOCODER_API_KEY"),
        }
        if options.bounds:
            ne, sw = options.northeast, options.southwest
            params["bbox"] = f"{sw.longitude},{sw.latitude}~{ne.longitude},{ne.latitude}"
        params.update(options.extra)
        data = await self._get_json(YANDEX_GEOCODE_URL, params=params)
        return self._parse(data, self._parse_results)

    def _parse_results(self, data: dict[str, Any]) -> list[GeocodeResult]:
        members = data["response"]["GeoObjectCollection"]["featureMember"]
        results = []
        for member in members:
            geo_object = member["GeoObject"]
            lon, lat = geo_object["Point"]["pos"].split()
            address = geo_object["metaDataProperty"]["GeocoderMetaData"]["text"]
            results.append(self._result(lat, lon, address, geo_object))
        return results
