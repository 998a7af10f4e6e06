"""Port interface for remote geocoding providers."""

from abc import ABC, abstractmethod

from geosearch.domain.entities.geocode_result import GeocodeResult
from geosearch.domain.value_objects.enums import ProviderIdentity
from geosearch.domain.value_objects.geo_point import GeoPoint
from geosearch.domain.value_objects.search_options import SearchOptions


class GeocoderPort(ABC):
    identity: ProviderIdentity

    @abstractmethod
    async def search(self, query: str | GeoPoint, options: SearchOptions) -> list[GeocodeResult]:
        """Look up an address, IP or point and return results in provider order.

        Returns an empty list when nothing matched. Failures raise a
        ProviderError subclass; they are never reported as an empty list.
        Must not mutate ``query`` or ``options``.
        """
        ...

    @abstractmethod
    async def reverse_geocode(self, point: GeoPoint, options: SearchOptions) -> list[GeocodeResult]:
        """Resolve coordinates into address results."""
        ...
