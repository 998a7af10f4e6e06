"""GeoPoint value object — immutable (lat, lon) pair."""

import math
from dataclasses import dataclass

from geosearch.domain.errors import InvalidQueryError

EARTH_RADIUS_KM = 6371.0
KM_PER_MILE = 1.609344


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float

    @classmethod
    def from_pair(cls, pair) -> "GeoPoint":
        """Build a validated point from a ``(lat, lon)`` pair or another GeoPoint.

        Raises:
            InvalidQueryError: if either value is not finite or out of range.
        """
        if isinstance(pair, GeoPoint):
            lat, lon = pair.latitude, pair.longitude
        else:
            try:
                lat, lon = (float(v) for v in pair)
            except (TypeError, ValueError) as e:
                raise InvalidQueryError(f"Not a coordinate pair: {pair!r}") from e

        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise InvalidQueryError(f"Coordinates must be finite: ({lat}, {lon})")
        if not -90.0 <= lat <= 90.0:
            raise InvalidQueryError(f"Latitude out of range [-90, 90]: {lat}")
        if not -180.0 <= lon <= 180.0:
            raise InvalidQueryError(f"Longitude out of range [-180, 180]: {lon}")
        return cls(latitude=lat, longitude=lon)

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)

    def haversine_km(self, other: "GeoPoint") -> float:
        """Calculate distance in km between two points using the Haversine formula."""
        lat1 = math.radians(self.latitude)
        lat2 = math.radians(other.latitude)
        dlat = math.radians(other.latitude - self.latitude)
        dlon = math.radians(other.longitude - self.longitude)

        a = (
            math.sin(dlat / 2) ** 2
            + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
        )
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

        return EARTH_RADIUS_KM * c

    def haversine_mi(self, other: "GeoPoint") -> float:
        return self.haversine_km(other) / KM_PER_MILE

    def bearing_to(self, other: "GeoPoint") -> float:
        """Initial great-circle bearing towards ``other``, degrees clockwise from north."""
        lat1 = math.radians(self.latitude)
        lat2 = math.radians(other.latitude)
        dlon = math.radians(other.longitude - self.longitude)

        y = math.sin(dlon) * math.cos(lat2)
        x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)
        return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0

    def __str__(self) -> str:
        return f"{self.latitude},{self.longitude}"
