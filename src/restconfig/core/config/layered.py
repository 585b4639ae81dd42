"""
Layered configuration: ordered property sources behind an interceptor chain.

Quick start::

    from restconfig.core.config import LayeredConfigBuilder, MapConfigSource

    config = (
        LayeredConfigBuilder()
        .with_sources(MapConfigSource({"a": "1"}, ordinal=250))
        .with_customizers(RestClientConfigBuilder(clients))
        .build()
    )
    config.get_optional_value("a")   # "1"

Sources are consulted by descending ordinal; among sources with the same
ordinal the one registered first wins.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from restconfig.core.config.interceptors import (
    ConfigInterceptor,
    InterceptorContext,
    order_interceptors,
)
from restconfig.core.config.sources import ConfigSource, ConfigValue
from restconfig.core.errors import MissingConfigError

_MISSING = object()


class LayeredConfig:
    """Read-only view over a set of sources and an interceptor chain."""

    def __init__(
        self,
        sources: Iterable[ConfigSource] = (),
        interceptors: Iterable[ConfigInterceptor] = (),
    ):
        indexed = list(enumerate(sources))
        # Highest ordinal first; registration order on ties.
        indexed.sort(key=lambda item: (-item[1].ordinal, item[0]))
        self._sources: list[tuple[int, ConfigSource]] = indexed
        self._interceptors = order_interceptors(interceptors)

    @property
    def sources(self) -> list[ConfigSource]:
        return [source for _, source in self._sources]

    @property
    def interceptors(self) -> list[ConfigInterceptor]:
        return list(self._interceptors)

    def get_raw_value(self, name: str) -> ConfigValue | None:
        """Look a name up in the sources only, bypassing every interceptor."""
        for position, source in self._sources:
            value = source.get_value(name)
            if value is not None:
                return ConfigValue(
                    name=name,
                    value=value,
                    source_name=source.name,
                    source_ordinal=source.ordinal,
                    source_position=position,
                )
        return None

    def get_value(self, name: str) -> ConfigValue | None:
        """Resolve a name through the interceptor chain."""
        return InterceptorContext(self._interceptors, self.get_raw_value).proceed(name)

    def get_optional_value(self, name: str) -> str | None:
        config_value = self.get_value(name)
        if config_value is None:
            return None
        return config_value.value

    def get_config_value(self, name: str, default: object = _MISSING) -> str | None:
        """Resolve a name, raising :class:`MissingConfigError` when absent and no default is given."""
        value = self.get_optional_value(name)
        if value is not None:
            return value
        if default is _MISSING:
            raise MissingConfigError(name)
        return default  # type: ignore[return-value]

    def property_names(self) -> list[str]:
        """Every property name the sources declare, as seen through the chain."""
        names: Iterable[str] = [
            name for _, source in self._sources for name in source.property_names()
        ]
        for interceptor in self._interceptors:
            names = interceptor.iterate_names(names)
        return list(dict.fromkeys(names))


@runtime_checkable
class ConfigBuilder(Protocol):
    """A customizer that registers interceptors or sources on a builder."""

    def config_builder(self, builder: LayeredConfigBuilder) -> LayeredConfigBuilder: ...


class LayeredConfigBuilder:
    """Collects sources, interceptors and customizers, then builds a :class:`LayeredConfig`."""

    def __init__(self) -> None:
        self._sources: list[ConfigSource] = []
        self._interceptors: list[ConfigInterceptor] = []
        self._customizers: list[ConfigBuilder] = []

    def with_sources(self, *sources: ConfigSource) -> LayeredConfigBuilder:
        self._sources.extend(sources)
        return self

    def with_interceptors(self, *interceptors: ConfigInterceptor) -> LayeredConfigBuilder:
        self._interceptors.extend(interceptors)
        return self

    def with_customizers(self, *customizers: ConfigBuilder) -> LayeredConfigBuilder:
        self._customizers.extend(customizers)
        return self

    def build(self) -> LayeredConfig:
        builder = self
        for customizer in self._customizers:
            builder = customizer.config_builder(builder)
        return LayeredConfig(builder._sources, builder._interceptors)


__all__ = [
    "LayeredConfig",
    "LayeredConfigBuilder",
    "ConfigBuilder",
]
