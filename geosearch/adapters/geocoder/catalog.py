"""Static registration table of provider types.

Keys are the names ``provider_type_name`` derives from an identity
(``google_premier`` → ``GooglePremier``), so every class listed here must be
named after its identity.
"""

from geosearch.adapters.geocoder.base import HttpProvider
from geosearch.adapters.geocoder.bing import Bing
from geosearch.adapters.geocoder.freegeoip import Freegeoip
from geosearch.adapters.geocoder.geocoder_ca import GeocoderCa
from geosearch.adapters.geocoder.google import Google, GooglePremier
from geosearch.adapters.geocoder.nominatim import Nominatim
from geosearch.adapters.geocoder.yandex import Yandex

PROVIDER_TYPES: dict[str, type[HttpProvider]] = {
    cls.__name__: cls
    for cls in (
        Google,
        GooglePremier,
        Bing,
        GeocoderCa,
        Yandex,
        Nominatim,
        Freegeoip,
    )
}
