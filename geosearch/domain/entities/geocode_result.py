"""GeocodeResult entity — one location record returned by a provider."""

from dataclasses import dataclass, field
from typing import Any

from geosearch.domain.value_objects.geo_point import GeoPoint


@dataclass(frozen=True)
class GeocodeResult:
    coordinates: GeoPoint
    address: str
    provider: str
    # Raw upstream record, kept for callers that need provider-specific fields
    data: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def latitude(self) -> float:
        return self.coordinates.latitude

    @property
    def longitude(self) -> float:
        return self.coordinates.longitude
