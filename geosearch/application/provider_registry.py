"""ProviderRegistry — identity → lazily built, memoised provider instance."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from geosearch.application.ports.geocoder_port import GeocoderPort
from geosearch.domain.errors import ConfigurationError
from geosearch.domain.value_objects.enums import (
    IP_PROVIDERS,
    STREET_PROVIDERS,
    ProviderIdentity,
)

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[Any], GeocoderPort]


def _name(identity) -> str:
    return str(getattr(identity, "value", identity))


def provider_type_name(identity: ProviderIdentity | str) -> str:
    """Map an identity to the name its provider type is registered under.

    ``google_premier`` → ``GooglePremier``.
    """
    return "".join(seg[:1].upper() + seg[1:] for seg in _name(identity).split("_"))


class ProviderRegistry:
    """Builds each provider at most once and hands out the same instance afterwards.

    ``factories`` is the static registration table, keyed by
    ``provider_type_name(identity)``. Each factory is called with
    ``settings`` the first time its identity is resolved.
    """

    def __init__(
        self,
        factories: Mapping[str, ProviderFactory],
        settings: Any = None,
        street: Iterable[ProviderIdentity | str] = STREET_PROVIDERS,
        ip: Iterable[ProviderIdentity | str] = IP_PROVIDERS,
    ):
        self._factories = dict(factories)
        self._settings = settings
        self._street = tuple(street)
        self._ip = tuple(ip)
        if not self._street or not self._ip:
            raise ConfigurationError("At least one street and one IP provider must be listed")
        self._instances: dict[str, GeocoderPort] = {}
        self._lock = threading.Lock()

    @property
    def street_identities(self) -> tuple:
        return self._street

    @property
    def ip_identities(self) -> tuple:
        return self._ip

    def valid_identities(self) -> tuple:
        """Street providers followed by IP providers."""
        return self._street + self._ip

    def default_street(self):
        return self._street[0]

    def default_ip(self):
        return self._ip[0]

    def resolve(self, identity: ProviderIdentity | str) -> GeocoderPort:
        """Return the provider for ``identity``, building it on first use.

        Raises:
            ConfigurationError: if ``identity`` is not a valid identity or no
                provider type is registered for it.
        """
        name = self._validate(identity)

        instance = self._instances.get(name)
        if instance is not None:
            return instance

        with self._lock:
            instance = self._instances.get(name)
            if instance is None:
                instance = self._spawn(name)
                self._instances[name] = instance
        return instance

    def instances(self) -> dict[str, GeocoderPort]:
        """Snapshot of the providers built so far."""
        with self._lock:
            return dict(self._instances)

    def _validate(self, identity) -> str:
        name = _name(identity)
        valid = [_name(v) for v in self.valid_identities()]
        if name not in valid:
            valids = ", ".join(f'"{v}"' for v in valid)
            raise ConfigurationError(
                "Please specify a valid lookup for geosearch "
                f'("{name}" is not one of: {valids}).'
            )
        return name

    def _spawn(self, name: str) -> GeocoderPort:
        type_name = provider_type_name(name)
        factory = self._factories.get(type_name)
        if factory is None:
            raise ConfigurationError(
                f'No provider type "{type_name}" is registered for lookup "{name}"'
            )
        instance = factory(self._settings)
        logger.info("Spawned provider '%s' (%s)", name, type_name)
        return instance
