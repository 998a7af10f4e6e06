"""Tests for the Geocoder facade with in-memory fakes."""

from __future__ import annotations

import pytest

from fakes import (
    BrokenCacheStore,
    FailingProvider,
    FakeFactories,
    FakeProvider,
    UnreachableCacheStore,
    make_results,
)
from geosearch.adapters.cache.memory_store import InMemoryCacheStore
from geosearch.application.provider_registry import ProviderRegistry, provider_type_name
from geosearch.application.result_cache import ResultCache
from geosearch.application.use_cases.search_location import Geocoder
from geosearch.domain.errors import (
    ConfigurationError,
    InvalidQueryError,
    ProviderError,
    ProviderTimeoutError,
)
from geosearch.domain.value_objects.enums import (
    IP_PROVIDERS,
    STREET_PROVIDERS,
    ProviderIdentity,
)
from geosearch.domain.value_objects.geo_point import GeoPoint
from geosearch.domain.value_objects.search_options import SearchOptions

ALL_TYPE_NAMES = [provider_type_name(i) for i in (*STREET_PROVIDERS, *IP_PROVIDERS)]


@pytest.fixture
def factories():
    return FakeFactories(ALL_TYPE_NAMES)


def _make_geocoder(factories, lookup=None, store=None, prefix="geosearch") -> Geocoder:
    registry = ProviderRegistry(factories)
    cache = ResultCache(store, prefix=prefix) if store is not None else None
    return Geocoder(registry, cache=cache, lookup=lookup)


def _only_built(factories) -> dict[str, int]:
    return {name: len(built) for name, built in factories.built.items() if built}


# ─── Blank queries ───────────────────────────────────────────────────


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["", "   ", "\t\n", None])
async def test_blank_query_returns_empty_without_provider(factories, query):
    geocoder = _make_geocoder(factories, store=InMemoryCacheStore())
    assert await geocoder.search(query) == []
    assert _only_built(factories) == {}


@pytest.mark.asyncio
async def test_blank_query_skips_even_invalid_lookup(factories):
    """The blank guard runs before provider resolution."""
    geocoder = _make_geocoder(factories, lookup="nope")
    assert await geocoder.search(" ") == []


# ─── Routing ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_ip_query_goes_to_default_ip_provider(factories):
    geocoder = _make_geocoder(factories)
    results = await geocoder.search("8.8.8.8")
    assert _only_built(factories) == {"Freegeoip": 1}
    provider = factories.built["Freegeoip"][0]
    assert provider.calls[0][0] == "8.8.8.8"
    assert results == make_results()


@pytest.mark.asyncio
async def test_address_query_goes_to_first_street_provider(factories):
    geocoder = _make_geocoder(factories)
    await geocoder.search("1600 Amphitheatre Pkwy")
    assert _only_built(factories) == {"Google": 1}


@pytest.mark.asyncio
async def test_configured_lookup_used_for_addresses(factories):
    geocoder = _make_geocoder(factories, lookup="nominatim")
    await geocoder.search("1600 Amphitheatre Pkwy")
    assert _only_built(factories) == {"Nominatim": 1}


@pytest.mark.asyncio
async def test_configured_lookup_never_overrides_ip_routing(factories):
    geocoder = _make_geocoder(factories, lookup=ProviderIdentity.NOMINATIM)
    await geocoder.search("999.999.999.999")
    assert _only_built(factories) == {"Freegeoip": 1}


@pytest.mark.asyncio
async def test_coordinates_go_to_street_provider_as_geo_point(factories):
    geocoder = _make_geocoder(factories)
    await geocoder.search([37.4, -122.1])
    provider = factories.built["Google"][0]
    assert provider.calls[0][0] == GeoPoint(latitude=37.4, longitude=-122.1)


@pytest.mark.asyncio
async def test_out_of_range_coordinates_rejected(factories):
    geocoder = _make_geocoder(factories)
    with pytest.raises(InvalidQueryError):
        await geocoder.search((123.0, 0.0))


def test_provider_for(factories):
    geocoder = _make_geocoder(factories, lookup="bing")
    assert geocoder.provider_for("8.8.8.8") == ProviderIdentity.FREEGEOIP
    assert geocoder.provider_for("Main St") == "bing"
    assert geocoder.provider_for((1.0, 2.0)) == "bing"


# ─── Options ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_options_mapping_is_coerced(factories):
    geocoder = _make_geocoder(factories)
    await geocoder.search("Springfield", {"region": "US", "limit": 2})
    options = factories.built["Google"][0].calls[0][1]
    assert isinstance(options, SearchOptions)
    assert options.region == "us"
    assert options.extra == {"limit": 2}


@pytest.mark.asyncio
async def test_no_options_gives_empty_search_options(factories):
    geocoder = _make_geocoder(factories)
    await geocoder.search("Springfield")
    assert factories.built["Google"][0].calls[0][1] == SearchOptions()


# ─── Errors ──────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_invalid_lookup_raises_configuration_error(factories):
    geocoder = _make_geocoder(factories, lookup="mapquest")
    with pytest.raises(ConfigurationError, match="google_premier"):
        await geocoder.search("1600 Amphitheatre Pkwy")


@pytest.mark.asyncio
async def test_provider_errors_propagate():
    registry = ProviderRegistry({"Google": lambda s: FailingProvider(ProviderTimeoutError("slow", provider="google"))})
    geocoder = Geocoder(registry)
    with pytest.raises(ProviderError):
        await geocoder.search("anywhere")


@pytest.mark.asyncio
async def test_provider_errors_propagate_through_cache():
    registry = ProviderRegistry({"Google": lambda s: FailingProvider(ProviderError("down", provider="google"))})
    store = InMemoryCacheStore()
    geocoder = Geocoder(registry, cache=ResultCache(store))
    with pytest.raises(ProviderError, match="down"):
        await geocoder.search("anywhere")
    assert len(store) == 0


# ─── Caching ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_cached_search_calls_provider_once(factories):
    geocoder = _make_geocoder(factories, store=InMemoryCacheStore())
    first = await geocoder.search("1600 Amphitheatre Pkwy", {"region": "us"})
    second = await geocoder.search("1600 Amphitheatre Pkwy", {"region": "us"})

    provider = factories.built["Google"][0]
    assert len(provider.calls) == 1
    assert first == second == make_results()
    assert [r.data for r in second] == [{"rank": 1}, {"rank": 2}]


@pytest.mark.asyncio
async def test_cache_preserves_order(factories):
    geocoder = _make_geocoder(factories, store=InMemoryCacheStore())
    await geocoder.search("Mountain View")
    cached = await geocoder.search("mountain   view")
    assert [r.address for r in cached] == [r.address for r in make_results()]


@pytest.mark.asyncio
async def test_cache_hit_independent_of_provider(factories):
    """A hit answers from the stored payload whichever provider is configured now."""
    store = InMemoryCacheStore()
    await _make_geocoder(factories, store=store).search("Main St")
    other = FakeFactories(ALL_TYPE_NAMES)
    results = await _make_geocoder(other, lookup="nominatim", store=store).search("Main St")
    assert results == make_results()
    assert other.built["Nominatim"][0].calls == []


@pytest.mark.asyncio
async def test_different_options_miss_the_cache(factories):
    geocoder = _make_geocoder(factories, store=InMemoryCacheStore())
    await geocoder.search("Springfield", {"region": "us"})
    await geocoder.search("Springfield", {"region": "ca"})
    assert len(factories.built["Google"][0].calls) == 2


@pytest.mark.asyncio
async def test_unreachable_store_still_returns_provider_results(factories):
    store = UnreachableCacheStore()
    geocoder = _make_geocoder(factories, store=store)
    assert await geocoder.search("1600 Amphitheatre Pkwy") == make_results()
    assert store.reads == 1
    assert store.writes == 1


@pytest.mark.asyncio
async def test_broken_store_still_returns_provider_results(factories):
    geocoder = _make_geocoder(factories, store=BrokenCacheStore())
    assert await geocoder.search("Main St") == make_results()
    assert await geocoder.search("Main St") == make_results()
    assert len(factories.built["Google"][0].calls) == 2


@pytest.mark.asyncio
async def test_empty_results_are_cached(factories):
    registry = ProviderRegistry({"Google": lambda s: FakeProvider(s, results=[])})
    geocoder = Geocoder(registry, cache=ResultCache(InMemoryCacheStore()))
    assert await geocoder.search("nowhere") == []
    assert await geocoder.search("nowhere") == []
    assert len(registry.resolve("google").calls) == 1


@pytest.mark.asyncio
async def test_unreadable_cache_entry_is_replaced(factories):
    store = InMemoryCacheStore()
    geocoder = _make_geocoder(factories, store=store, prefix="p")
    key = geocoder.cache.cache_key("Main St", SearchOptions())
    await store.write(key, "{not json")

    assert await geocoder.search("Main St") == make_results()
    assert await store.read(key) is None


# ─── Convenience lookups ─────────────────────────────────────────────


@pytest.mark.asyncio
async def test_coordinates_is_first_result(factories):
    geocoder = _make_geocoder(factories)
    results = await geocoder.search("Mountain View")
    assert await geocoder.coordinates("Mountain View") == results[0].coordinates


@pytest.mark.asyncio
async def test_address_is_first_result(factories):
    geocoder = _make_geocoder(factories)
    assert await geocoder.address((37.4, -122.1)) == "1600 Amphitheatre Pkwy, Mountain View, CA"


@pytest.mark.asyncio
async def test_convenience_lookups_absent_when_nothing_found():
    registry = ProviderRegistry({"Google": lambda s: FakeProvider(s, results=[])})
    geocoder = Geocoder(registry)
    assert await geocoder.coordinates("nowhere") is None
    assert await geocoder.address("nowhere") is None
    assert await geocoder.coordinates("") is None
