"""FreeGeoIP adapter — IP address lookups."""

from __future__ import annotations

import logging
from typing import Any

from geosearch.adapters.geocoder.base import HttpProvider
from geosearch.domain.entities.geocode_result import GeocodeResult
from geosearch.domain.errors import UnsupportedQueryError
from geosearch.domain.policies.query_classification import looks_like_ip
from geosearch.domain.value_objects.enums import ProviderIdentity
from geosearch.domain.value_objects.geo_point import GeoPoint
from geosearch.domain.value_objects.search_options import SearchOptions

logger = logging.getLogger(__name__)

# Addresses that never leave the machine are answered without a request
RESERVED_IPS = {"0.0.0.0", "127.0.0.1"}


class Freegeoip(HttpProvider):
    identity = ProviderIdentity.FREEGEOIP

    async def geocode(self, text: str, options: SearchOptions) -> list[GeocodeResult]:
        ip = text.strip()
        if not looks_like_ip(ip):
            raise UnsupportedQueryError(f"freegeoip only looks up IP addresses, got '{text}'", provider=self.name)

        if ip in RESERVED_IPS:
            logger.debug("Answering reserved address %s locally", ip)
            return [self._to_result(self.reserved_record(ip))]

        data = await self._get_json(f"https://{self._settings.freegeoip_host}/json/{ip}")
        return self._parse(data, lambda record: [self._to_result(record)])

    async def reverse_geocode(self, point: GeoPoint, options: SearchOptions) -> list[GeocodeResult]:
        raise UnsupportedQueryError("freegeoip does not support reverse geocoding", provider=self.name)

    @staticmethod
    def reserved_record(ip: str) -> dict[str, Any]:
        return {
            "ip": ip,
            "city": "",
            "region_code": "",
            "region_name": "",
            "metro_code": "",
            "zip_code": "",
            "latitude": 0,
            "longitude": 0,
            "country_name": "Reserved",
            "country_code": "RD",
        }

    def _to_result(self, record: dict[str, Any]) -> GeocodeResult:
        region = self._join(record.get("region_code"), record.get("zip_code"), sep=" ")
        address = self._join(record.get("city"), region, record.get("country_name"))
        return self._result(record["latitude"], record["longitude"], address, record)
