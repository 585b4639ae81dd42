"""
Property sources and the values they produce.

A :class:`ConfigSource` is the lookup-by-name primitive the resolver works
against: it answers ``get_value(name)`` and reports an ``ordinal``, the rank
used to arbitrate between sources when more than one defines a setting.
How a source obtains its properties (files, environment, remote) is up to
the caller; :class:`MapConfigSource` wraps an in-memory mapping.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Protocol, runtime_checkable

DEFAULT_ORDINAL = 100


@dataclass(frozen=True)
class ConfigValue:
    """A resolved property value with the source it came from.

    ``source_position`` is the registration index of the source inside a
    :class:`~restconfig.core.config.layered.LayeredConfig`; it breaks ties
    between sources with the same ordinal (lower position wins).
    """

    name: str
    value: str | None
    source_name: str | None = None
    source_ordinal: int = 0
    source_position: int = 0

    def with_name(self, name: str) -> ConfigValue:
        if name == self.name:
            return self
        return replace(self, name=name)


def compare_sources(first: ConfigValue, second: ConfigValue) -> int:
    """Compare the sources of two values.

    Returns a positive number when ``first`` comes from the higher priority
    source, a negative number when ``second`` does, and ``0`` when both
    come from the same rank.
    """
    if first.source_ordinal != second.source_ordinal:
        return 1 if first.source_ordinal > second.source_ordinal else -1
    if first.source_position != second.source_position:
        return 1 if first.source_position < second.source_position else -1
    return 0


@runtime_checkable
class ConfigSource(Protocol):
    """Protocol for anything that can answer property lookups."""

    @property
    def name(self) -> str: ...

    @property
    def ordinal(self) -> int: ...

    def get_value(self, name: str) -> str | None: ...

    def property_names(self) -> Iterable[str]: ...


class MapConfigSource:
    """A read-only property source backed by a mapping.

    Example:
        >>> source = MapConfigSource({"quarkus.http.port": "8080"}, ordinal=250)
        >>> source.get_value("quarkus.http.port")
        '8080'
    """

    def __init__(
        self,
        properties: Mapping[str, object],
        *,
        name: str | None = None,
        ordinal: int = DEFAULT_ORDINAL,
    ):
        self._properties = MappingProxyType(
            {key: None if value is None else str(value) for key, value in properties.items()}
        )
        self._name = name or f"MapConfigSource[ordinal={ordinal}]"
        self._ordinal = ordinal

    @property
    def name(self) -> str:
        return self._name

    @property
    def ordinal(self) -> int:
        return self._ordinal

    def get_value(self, name: str) -> str | None:
        return self._properties.get(name)

    def property_names(self) -> Iterable[str]:
        return self._properties.keys()

    def __repr__(self) -> str:
        return f"MapConfigSource(name={self._name!r}, ordinal={self._ordinal}, size={len(self._properties)})"


__all__ = [
    "DEFAULT_ORDINAL",
    "ConfigValue",
    "ConfigSource",
    "MapConfigSource",
    "compare_sources",
]
