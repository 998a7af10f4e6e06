"""Exception hierarchy shared by the core, providers and cache stores."""

from __future__ import annotations


class GeosearchError(Exception):
    """Base class for every error raised by geosearch."""


class ConfigurationError(GeosearchError):
    """Invalid provider identity, missing credentials or similar misconfiguration."""


class InvalidQueryError(GeosearchError, ValueError):
    """The query cannot be turned into something a provider understands."""


class CacheStoreError(GeosearchError):
    """A cache backend failed. Never fatal to a search."""


class ProviderError(GeosearchError):
    """A remote lookup failed.

    ``provider`` is the identity of the provider that raised, when known.
    """

    def __init__(self, message: str, provider: str | None = None):
        super().__init__(message)
        self.provider = provider


class ProviderTimeoutError(ProviderError):
    pass


class AuthenticationError(ProviderError):
    pass


class QuotaExceededError(ProviderError):
    pass


class InvalidResponseError(ProviderError):
    pass


class UnsupportedQueryError(ProviderError):
    pass
