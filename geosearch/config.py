"""Application configuration via Pydantic Settings.

NOTE: Every field is mapped to an explicit .env variable name so that a typo
in the environment does not silently fall back to a default.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Provider selection: default street address provider, None = first listed
    lookup: str | None = Field(default=None, validation_alias="GEOSEARCH_LOOKUP")

    # Result cache: None disables caching, "memory://" or a SQLAlchemy async URL
    cache_url: str | None = Field(default=None, validation_alias="GEOSEARCH_CACHE_URL")
    cache_prefix: str = Field(default="", validation_alias="GEOSEARCH_CACHE_PREFIX")
    cache_timeout: float = Field(default=2.0, gt=0, validation_alias="GEOSEARCH_CACHE_TIMEOUT")

    # HTTP
    request_timeout: float = Field(default=3.0, gt=0, validation_alias="GEOSEARCH_TIMEOUT")
    language: str = Field(default="en", validation_alias="GEOSEARCH_LANGUAGE")
    proxy: str | None = Field(default=None, validation_alias="GEOSEARCH_PROXY")

    # Google
    google_api_key: str = Field(default="", validation_alias="GOOGLE_MAPS_API_KEY")
    google_premier_key: str = Field(default="", validation_alias="GOOGLE_PREMIER_KEY")
    google_premier_client: str = Field(default="", validation_alias="GOOGLE_PREMIER_CLIENT")
    google_premier_channel: str = Field(default="", validation_alias="GOOGLE_PREMIER_CHANNEL")

    # Other providers
    bing_api_key: str = Field(default="", validation_alias="BING_MAPS_API_KEY")
    yandex_api_key: str = Field(default="", validation_alias="YANDEX_GEOCODER_API_KEY")
    geocoder_ca_auth: str = Field(default="", validation_alias="GEOCODER_CA_AUTH")
    nominatim_host: str = Field(default="nominatim.openstreetmap.org", validation_alias="NOMINATIM_HOST")
    nominatim_user_agent: str = Field(default="geosearch", validation_alias="GEOCODER_USER_AGENT")
    freegeoip_host: str = Field(default="freegeoip.app", validation_alias="FREEGEOIP_HOST")

    # App
    debug: bool = Field(default=False, validation_alias="DEBUG")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }


settings = Settings()
