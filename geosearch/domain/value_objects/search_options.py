"""SearchOptions value object — recognised search hints plus opaque extras."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from geosearch.domain.errors import InvalidQueryError
from geosearch.domain.value_objects.geo_point import GeoPoint

RECOGNISED_OPTIONS = ("bounds", "region")

CoordinatePair = tuple[float, float]


class SearchOptions(BaseModel):
    """Hints passed to a provider alongside the query.

    ``bounds`` is ``((ne_lat, ne_lon), (sw_lat, sw_lon))`` and only biases
    results. ``region`` is a two-letter ccTLD-style code. Anything else the
    caller passes ends up in ``extra`` and is handed to the provider as is.
    """

    model_config = ConfigDict(frozen=True)

    bounds: tuple[CoordinatePair, CoordinatePair] | None = None
    region: str | None = Field(default=None, pattern=r"^[A-Za-z]{2}$")
    extra: dict[str, Any] = Field(default_factory=dict)

    @field_validator("bounds")
    @classmethod
    def _check_bounds(cls, value):
        if value is None:
            return value
        ne, sw = (GeoPoint.from_pair(corner) for corner in value)
        return (ne.as_tuple(), sw.as_tuple())

    @field_validator("region")
    @classmethod
    def _lower_region(cls, value: str | None) -> str | None:
        return value.lower() if value else value

    @classmethod
    def coerce(cls, value: "SearchOptions | Mapping[str, Any] | None") -> "SearchOptions":
        """Accept ``None``, a plain mapping, or an existing instance."""
        if value is None:
            return cls()
        if isinstance(value, SearchOptions):
            return value
        if not isinstance(value, Mapping):
            raise TypeError(f"options must be a mapping or SearchOptions, not {type(value).__name__}")

        known = {k: v for k, v in value.items() if k in RECOGNISED_OPTIONS}
        extra = {k: v for k, v in value.items() if k not in RECOGNISED_OPTIONS}
        try:
            return cls(**known, extra=extra)
        except ValidationError as e:
            raise InvalidQueryError(f"Invalid search options: {e}") from e

    @property
    def northeast(self) -> GeoPoint | None:
        return GeoPoint(*self.bounds[0]) if self.bounds else None

    @property
    def southwest(self) -> GeoPoint | None:
        return GeoPoint(*self.bounds[1]) if self.bounds else None
