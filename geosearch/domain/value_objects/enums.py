"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class QueryKind(str, Enum):
    ADDRESS = "address"
    IP = "ip"
    COORDINATES = "coordinates"


class ProviderIdentity(str, Enum):
    # Street address providers, default first
    GOOGLE = "google"
    GOOGLE_PREMIER = "google_premier"
    BING = "bing"
    GEOCODER_CA = "geocoder_ca"
    YANDEX = "yandex"
    NOMINATIM = "nominatim"

    # IP address providers, default first
    FREEGEOIP = "freegeoip"


STREET_PROVIDERS: tuple[ProviderIdentity, ...] = (
    ProviderIdentity.GOOGLE,
    ProviderIdentity.GOOGLE_PREMIER,
    ProviderIdentity.BING,
    ProviderIdentity.GEOCODER_CA,
    ProviderIdentity.YANDEX,
    ProviderIdentity.NOMINATIM,
)

IP_PROVIDERS: tuple[ProviderIdentity, ...] = (
    ProviderIdentity.FREEGEOIP,
)
