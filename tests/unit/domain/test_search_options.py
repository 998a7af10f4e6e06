"""Tests for SearchOptions value object."""

import pytest

from geosearch.domain.errors import InvalidQueryError
from geosearch.domain.value_objects.geo_point import GeoPoint
from geosearch.domain.value_objects.search_options import SearchOptions


def test_coerce_none_gives_empty_options():
    opts = SearchOptions.coerce(None)
    assert opts.bounds is None
    assert opts.region is None
    assert opts.extra == {}


def test_coerce_returns_existing_instance():
    opts = SearchOptions(region="us")
    assert SearchOptions.coerce(opts) is opts


def test_coerce_splits_recognised_and_extra_keys():
    opts = SearchOptions.coerce({"region": "US", "components": "country:US", "limit": 3})
    assert opts.region == "us"
    assert opts.extra == {"components": "country:US", "limit": 3}


def test_bounds_corners():
    opts = SearchOptions.coerce({"bounds": [[40.9, -73.7], [40.5, -74.3]]})
    assert opts.bounds == ((40.9, -73.7), (40.5, -74.3))
    assert opts.northeast == GeoPoint(latitude=40.9, longitude=-73.7)
    assert opts.southwest == GeoPoint(latitude=40.5, longitude=-74.3)


def test_no_bounds_means_no_corners():
    opts = SearchOptions()
    assert opts.northeast is None
    assert opts.southwest is None


@pytest.mark.parametrize("region", ["usa", "u", "1a", ""])
def test_invalid_region_rejected(region):
    with pytest.raises(InvalidQueryError):
        SearchOptions.coerce({"region": region})


def test_out_of_range_bounds_rejected():
    with pytest.raises(InvalidQueryError):
        SearchOptions.coerce({"bounds": [[95.0, 0.0], [40.0, 0.0]]})


def test_non_mapping_rejected():
    with pytest.raises(TypeError):
        SearchOptions.coerce(["region", "us"])


def test_options_are_frozen():
    opts = SearchOptions(region="de")
    with pytest.raises(Exception):
        opts.region = "fr"
