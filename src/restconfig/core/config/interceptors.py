"""
Interceptor chain sitting between callers and the property sources.

Every lookup enters an ordered chain of interceptors. An interceptor may
look the name up further down the chain (``context.proceed``), or re-enter
the chain from the top with another name (``context.restart``) so that the
new name is itself subject to every interceptor, including the ones that
already ran.

Interceptors run from the highest ``priority`` to the lowest. A lower
priority interceptor sits closer to the sources, so on an ordinal tie the
values it finds win over the fallbacks of the interceptors wrapping it::

    caller: get_value(name)        restart(mapped) re-enters here
      ↓
    [priority 5000] RelocateInterceptor     pass-through
      ↓ proceed
    [priority 3595] FallbackInterceptor     MicroProfile names
      ↓ proceed
    [priority 3590] FallbackInterceptor     Quarkus aliases
      ↓ proceed
    property sources

Tags:
    restconfig, configuration, interceptors, fallback, relocation
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from restconfig.core.config.sources import ConfigValue, compare_sources
from restconfig.core.errors import AliasCycleError
from restconfig.core.logging import get_logger

logger = get_logger(__name__)

Mapping = Callable[[str], str]
Lookup = Callable[[str], "ConfigValue | None"]


class Priorities:
    """Priority bands for interceptors. Higher values run first."""

    PLATFORM = 1000
    LIBRARY = 3000
    APPLICATION = 5000


class ConfigInterceptor:
    """Base interceptor: passes lookups and names through untouched."""

    name: str = "interceptor"
    priority: int = Priorities.APPLICATION

    def get_value(self, context: InterceptorContext, name: str) -> ConfigValue | None:
        return context.proceed(name)

    def iterate_names(self, names: Iterable[str]) -> Iterable[str]:
        return names

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, priority={self.priority})"


class InterceptorContext:
    """Position of a lookup inside the chain.

    ``restarts`` holds the names the current lookup has already restarted
    with; restarting with one of them again means the rewrite rules loop.
    """

    def __init__(
        self,
        chain: Sequence[ConfigInterceptor],
        lookup: Lookup,
        index: int = 0,
        restarts: tuple[str, ...] = (),
    ):
        self._chain = chain
        self._lookup = lookup
        self._index = index
        self._restarts = restarts

    def proceed(self, name: str) -> ConfigValue | None:
        """Continue with the next interceptor, or the sources at the end."""
        if self._index < len(self._chain):
            interceptor = self._chain[self._index]
            following = InterceptorContext(self._chain, self._lookup, self._index + 1, self._restarts)
            return interceptor.get_value(following, name)
        return self._lookup(name)

    def restart(self, name: str) -> ConfigValue | None:
        """Re-enter the whole chain from the top with a new name."""
        if name in self._restarts:
            raise AliasCycleError("interceptor chain", [*self._restarts, name])
        return InterceptorContext(self._chain, self._lookup, 0, (*self._restarts, name)).proceed(name)


class FallbackInterceptor(ConfigInterceptor):
    """Looks a name up, then its mapped name, and keeps the stronger value.

    The mapped name is resolved with :meth:`InterceptorContext.restart`, so a
    chain of rewrites (``"Simple" -> configKey -> "configKey"``) is walked to
    the end. When both names produce a value, the one from the higher
    ordinal source wins; a tie keeps the directly requested value. The
    result is always labelled with the requested name.
    """

    def __init__(self, mapping: Mapping, *, name: str = "fallbacks", priority: int = Priorities.LIBRARY):
        self.mapping = mapping
        self.name = name
        self.priority = priority

    def get_value(self, context: InterceptorContext, name: str) -> ConfigValue | None:
        config_value = context.proceed(name)
        mapped = self.mapping(name)

        if mapped == name:
            return config_value

        fallback_value = context.restart(mapped)

        if config_value is not None and fallback_value is not None:
            if compare_sources(config_value, fallback_value) >= 0:
                return config_value
            logger.debug(
                "fallback_overrides",
                interceptor=self.name,
                name=name,
                fallback=mapped,
                source=fallback_value.source_name,
            )
            return fallback_value.with_name(name)

        if config_value is not None:
            return config_value
        if fallback_value is not None:
            logger.debug("fallback_hit", interceptor=self.name, name=name, fallback=mapped)
            return fallback_value.with_name(name)
        return None


class RelocateInterceptor(ConfigInterceptor):
    """Rewrites enumerated property names to their canonical form.

    Lookups pass through untouched; only :meth:`iterate_names` is affected,
    so that anything building a map out of the available names sees one
    canonical spelling per setting.
    """

    def __init__(self, mapping: Mapping, *, name: str = "relocates", priority: int = Priorities.APPLICATION):
        self.mapping = mapping
        self.name = name
        self.priority = priority

    def iterate_names(self, names: Iterable[str]) -> Iterable[str]:
        return [self.mapping(name) for name in names]


def order_interceptors(interceptors: Iterable[ConfigInterceptor]) -> list[ConfigInterceptor]:
    """Highest priority first, keeping registration order on ties."""
    return sorted(interceptors, key=lambda interceptor: -interceptor.priority)


__all__ = [
    "Priorities",
    "ConfigInterceptor",
    "InterceptorContext",
    "FallbackInterceptor",
    "RelocateInterceptor",
    "order_interceptors",
]
