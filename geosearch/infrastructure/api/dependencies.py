"""FastAPI dependency injection — hands the shared geocoder to the routes."""

from __future__ import annotations

from geosearch import context
from geosearch.application.use_cases.search_location import Geocoder


def get_geocoder() -> Geocoder:
    return context.get_geocoder()
