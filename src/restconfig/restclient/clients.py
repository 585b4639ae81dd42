"""Registered REST clients and the per-build registry of their names."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from restconfig.restclient.names import quote


@dataclass(frozen=True)
class RegisteredRestClient:
    """A REST client interface discovered at build time.

    Attributes:
        full_name: Fully qualified interface name, unique per client
        simple_name: Interface name without its package
        config_key: ``configKey`` declared on the registration, if any
        config_key_equals_names: The config key is the full or simple name
        config_key_composed: The config key contains ``.`` and only works quoted
    """

    full_name: str
    simple_name: str
    config_key: str | None = None
    config_key_equals_names: bool = False
    config_key_composed: bool = False

    @classmethod
    def of(cls, full_name: str, config_key: str | None = None) -> RegisteredRestClient:
        """Derive the simple name and both flags the way discovery does."""
        simple_name = full_name.rsplit(".", 1)[-1].rsplit("$", 1)[-1]
        return cls(
            full_name=full_name,
            simple_name=simple_name,
            config_key=config_key,
            config_key_equals_names=config_key is not None and config_key in (full_name, simple_name),
            config_key_composed=config_key is not None and "." in config_key,
        )

    @property
    def quoted_full_name(self) -> str:
        return quote(self.full_name)

    @property
    def quoted_simple_name(self) -> str:
        return quote(self.simple_name)

    @property
    def has_distinct_config_key(self) -> bool:
        """A config key that adds spellings beyond the two names."""
        return self.config_key is not None and not self.config_key_equals_names

    @property
    def usable_config_key(self) -> str | None:
        """The config key when its quoted form differs from both quoted names."""
        if not self.has_distinct_config_key:
            return None
        quoted = quote(self.config_key)
        if quoted in (self.quoted_full_name, self.quoted_simple_name):
            return None
        return self.config_key


class RestClientKeys:
    """Full names of the clients registered by the current configuration build.

    Cleared at the start of every build; consumers that materialise one
    configuration per client (see :class:`~restconfig.restclient.config.RestClientsConfig`)
    read the keys from here rather than enumerating property names.
    """

    def __init__(self, names: Iterable[str] = ()):
        self._names: list[str] = []
        for name in names:
            self.add(name)

    def add(self, full_name: str) -> None:
        if full_name not in self._names:
            self._names.append(full_name)

    def clear(self) -> None:
        self._names.clear()

    def __contains__(self, full_name: object) -> bool:
        return full_name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"RestClientKeys({self._names!r})"
