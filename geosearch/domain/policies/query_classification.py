"""QueryClassification — decide whether a query is an IP, coordinates or an address."""

from __future__ import annotations

import re
from numbers import Real

from geosearch.domain.value_objects.enums import QueryKind
from geosearch.domain.value_objects.geo_point import GeoPoint

# Shape only, ASCII digits only: octet ranges are not checked, "999.999.999.999" counts as an IP
IP_PATTERN = re.compile(r"^(\d{1,3})\.(\d{1,3})\.(\d{1,3})\.(\d{1,3})$", re.ASCII)
BLANK_PATTERN = re.compile(r"^\s*$")


def is_blank(query) -> bool:
    """True when a search for ``query`` is not worth making."""
    if query is None:
        return True
    return bool(BLANK_PATTERN.match(str(query)))


def is_coordinate_pair(query) -> bool:
    if isinstance(query, GeoPoint):
        return True
    if not isinstance(query, (tuple, list)) or len(query) != 2:
        return False
    return all(isinstance(v, Real) and not isinstance(v, bool) for v in query)


def looks_like_ip(query) -> bool:
    return bool(IP_PATTERN.match(str(query)))


def classify(query) -> QueryKind:
    """Classify a query by its shape.

    1. A two-element numeric pair (or a GeoPoint) → COORDINATES.
    2. A string of four dot-separated 1–3 digit groups → IP.
    3. Anything else → ADDRESS.
    """
    if is_coordinate_pair(query):
        return QueryKind.COORDINATES
    if looks_like_ip(query):
        return QueryKind.IP
    return QueryKind.ADDRESS
