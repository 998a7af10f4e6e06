"""Pytest configuration and shared fixtures."""

import pytest

from geosearch import context
from geosearch.config import Settings


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        lookup=None,
        cache_url=None,
        cache_prefix="",
        google_api_key="test-google-key",
        google_premier_key="dGVzdC1wcmVtaWVyLWtleQ==",
        google_premier_client="gme-test",
        google_premier_channel="",
        bing_api_key="test-bing-key",
        yandex_api_key="test-yandex-key",
        geocoder_ca_auth="",
        nominatim_host="nominatim.openstreetmap.org",
        nominatim_user_agent="geosearch-tests",
        freegeoip_host="freegeoip.app",
        request_timeout=1.0,
        language="en",
        proxy=None,
    )


@pytest.fixture(autouse=True)
def reset_shared_geocoder():
    """Keep the process-wide geocoder from leaking between tests."""
    context.set_geocoder(None)
    yield
    context.set_geocoder(None)
