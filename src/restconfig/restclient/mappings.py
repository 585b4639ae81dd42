"""
Name mappings applied by the REST client interceptors.

Each mapping is a pure ``str -> str`` function over one alias table; a name
it does not recognise is returned unchanged, which tells the fallback
interceptor there is nothing further to try.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from restconfig.restclient.names import (
    REST_CLIENT_PREFIX,
    is_microprofile_name,
    match_client_key,
    quote,
    split_legacy_key,
    translate_property,
)


@dataclass(frozen=True)
class QuarkusFallbacks:
    """``quarkus.rest-client.<alias>.*`` to the next alias in the chain."""

    names: Mapping[str, str]

    def __call__(self, name: str) -> str:
        key = match_client_key(name, self.names)
        if key is None:
            return name
        return REST_CLIENT_PREFIX + self.names[key.segment] + key.tail


@dataclass(frozen=True)
class MicroProfileFallbacks:
    """From the Quarkus names to the MicroProfile names, then between MicroProfile names.

    ``quarkus.rest-client."FQN".connectTimeout`` maps to
    ``FQN/mp-rest/connect-timeout``; ``FQN/mp-rest/url`` maps to
    ``configKey/mp-rest/url``. Only known MicroProfile properties are
    rewritten between MicroProfile names.
    """

    names: Mapping[str, str]

    def __call__(self, name: str) -> str:
        key = match_client_key(name, self.names)
        if key is not None:
            if not key.tail:
                return name
            return self.names[key.segment] + translate_property(key.property)

        legacy = split_legacy_key(name)
        if legacy is not None and legacy.prefix in self.names and is_microprofile_name(legacy.property):
            return self.names[legacy.prefix] + legacy.property
        return name


@dataclass(frozen=True)
class Relocates:
    """Every Quarkus and MicroProfile spelling to ``quarkus.rest-client."FQN".*``.

    A MicroProfile name whose client is not registered is still relocated,
    to the quoted form of its own head.
    """

    names: Mapping[str, str]

    def __call__(self, name: str) -> str:
        key = match_client_key(name, self.names)
        if key is not None:
            return REST_CLIENT_PREFIX + self.names[key.segment] + key.tail

        legacy = split_legacy_key(name)
        if legacy is not None and is_microprofile_name(legacy.property):
            segment = self.names.get(legacy.prefix, quote(legacy.head))
            return f"{REST_CLIENT_PREFIX}{segment}.{translate_property(legacy.property)}"
        return name


__all__ = [
    "QuarkusFallbacks",
    "MicroProfileFallbacks",
    "Relocates",
]
