"""Search endpoints — forward and reverse lookups through the shared geocoder."""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from geosearch.application.use_cases.search_location import Geocoder
from geosearch.domain.entities.geocode_result import GeocodeResult
from geosearch.domain.errors import ConfigurationError, InvalidQueryError, ProviderError
from geosearch.domain.policies.query_classification import is_blank
from geosearch.infrastructure.api.dependencies import get_geocoder

logger = logging.getLogger(__name__)

router = APIRouter(tags=["search"])

T = TypeVar("T")


class ResultOut(BaseModel):
    latitude: float
    longitude: float
    address: str
    provider: str

    @classmethod
    def from_domain(cls, result: GeocodeResult) -> "ResultOut":
        return cls(
            latitude=result.latitude,
            longitude=result.longitude,
            address=result.address,
            provider=result.provider,
        )


class SearchOut(BaseModel):
    query: Any
    provider: str | None
    results: list[ResultOut]


def _build_query(q: str | None, lat: float | None, lon: float | None):
    if lat is not None or lon is not None:
        if lat is None or lon is None:
            raise HTTPException(status_code=422, detail="Both lat and lon are required for a coordinate query")
        return (lat, lon)
    return q or ""


def _build_options(region: str | None) -> dict[str, Any] | None:
    return {"region": region} if region else None


async def _run(call: Awaitable[T]) -> T:
    """Await a geocoder call and turn domain errors into HTTP errors."""
    try:
        return await call
    except InvalidQueryError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except ConfigurationError as e:
        logger.error("Geocoder misconfigured: %s", e)
        raise HTTPException(status_code=500, detail=str(e)) from e
    except ProviderError as e:
        logger.warning("Provider '%s' failed: %s", e.provider, e)
        raise HTTPException(status_code=502, detail=str(e)) from e


@router.get("/search", response_model=SearchOut)
async def search(
    q: str | None = None,
    lat: float | None = None,
    lon: float | None = None,
    region: str | None = None,
    geocoder: Geocoder = Depends(get_geocoder),
):
    """Search an address or IP (``q``) or a point (``lat`` + ``lon``)."""
    query = _build_query(q, lat, lon)
    results = await _run(geocoder.search(query, _build_options(region)))
    provider = None
    if not is_blank(query):
        identity = geocoder.provider_for(query)
        provider = getattr(identity, "value", identity)
    return SearchOut(
        query=list(query) if isinstance(query, tuple) else query,
        provider=provider,
        results=[ResultOut.from_domain(r) for r in results],
    )


@router.get("/coordinates")
async def coordinates(
    q: str,
    region: str | None = None,
    geocoder: Geocoder = Depends(get_geocoder),
):
    """Coordinates of the best match for an address or IP."""
    point = await _run(geocoder.coordinates(q, _build_options(region)))
    if point is None:
        return {"query": q, "coordinates": None}
    return {"query": q, "coordinates": {"latitude": point.latitude, "longitude": point.longitude}}


@router.get("/address")
async def address(
    q: str | None = None,
    lat: float | None = None,
    lon: float | None = None,
    geocoder: Geocoder = Depends(get_geocoder),
):
    """Formatted address of the best match for a point or IP."""
    query = _build_query(q, lat, lon)
    found = await _run(geocoder.address(query))
    return {"query": list(query) if isinstance(query, tuple) else query, "address": found}
