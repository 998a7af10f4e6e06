"""Geocoder — classify a query, pick a provider, consult the cache, search."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import TypeAdapter, ValidationError

from geosearch.application.ports.geocoder_port import GeocoderPort
from geosearch.application.provider_registry import ProviderRegistry
from geosearch.application.result_cache import ResultCache
from geosearch.domain.entities.geocode_result import GeocodeResult
from geosearch.domain.policies.query_classification import classify, is_blank
from geosearch.domain.value_objects.enums import ProviderIdentity, QueryKind
from geosearch.domain.value_objects.geo_point import GeoPoint
from geosearch.domain.value_objects.search_options import SearchOptions

logger = logging.getLogger(__name__)

_RESULTS = TypeAdapter(list[GeocodeResult])

Options = SearchOptions | Mapping[str, Any] | None


class Geocoder:
    """Single entry point for address, IP and coordinate lookups.

    ``lookup`` is the configured default street provider. It never applies
    to IP queries, which always go to the registry's first IP provider.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        cache: ResultCache | None = None,
        lookup: ProviderIdentity | str | None = None,
    ):
        self._registry = registry
        self._cache = cache
        self._lookup = lookup or None

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    @property
    def cache(self) -> ResultCache | None:
        return self._cache

    def provider_for(self, query) -> ProviderIdentity | str:
        """Identity of the provider ``search`` would dispatch ``query`` to."""
        if classify(query) == QueryKind.IP:
            return self._registry.default_ip()
        return self._lookup or self._registry.default_street()

    async def search(self, query, options: Options = None) -> list[GeocodeResult]:
        """Search for an address, an IP address or a (lat, lon) pair.

        Steps:
        1. Blank query → [] (no provider is built or called)
        2. Classify and select the provider identity
        3. Resolve the provider (ConfigurationError propagates)
        4. Fetch through the result cache when one is configured
        """
        if is_blank(query):
            return []

        kind = classify(query)
        opts = SearchOptions.coerce(options)
        identity = self.provider_for(query)
        provider = self._registry.resolve(identity)

        target: str | GeoPoint
        if kind == QueryKind.COORDINATES:
            target = GeoPoint.from_pair(query)
        else:
            target = str(query)

        logger.info("Searching %s query '%s' with provider '%s'", kind.value, target, getattr(identity, "value", identity))

        if self._cache is None:
            return list(await provider.search(target, opts))
        return await self._cached_search(provider, target, opts)

    async def coordinates(self, query, options: Options = None) -> GeoPoint | None:
        """Coordinates of the first result, or None when nothing matched."""
        results = await self.search(query, options)
        return results[0].coordinates if results else None

    async def address(self, query, options: Options = None) -> str | None:
        """Formatted address of the first result, or None when nothing matched."""
        results = await self.search(query, options)
        return results[0].address if results else None

    async def _cached_search(
        self,
        provider: GeocoderPort,
        target: str | GeoPoint,
        options: SearchOptions,
    ) -> list[GeocodeResult]:
        key = self._cache.cache_key(target, options)

        async def compute() -> str:
            results = await provider.search(target, options)
            return _RESULTS.dump_json(list(results)).decode("utf-8")

        payload = await self._cache.fetch_or_compute(key, compute)
        try:
            return _RESULTS.validate_json(payload)
        except ValidationError:
            logger.warning("Discarding unreadable cache entry '%s'", key)
            await self._cache.invalidate(key)
            return list(await provider.search(target, options))
