"""Layered configuration: sources, interceptors, and process settings.

Architecture::

    sources.py        ConfigValue, ConfigSource protocol, MapConfigSource
    interceptors.py   Interceptor chain with proceed/restart, fallback and relocation
    layered.py        LayeredConfig + LayeredConfigBuilder
    settings.py       RestConfigSettings (Pydantic, cached)

Guardrails:
    ❌ Reading environment variables ad-hoc for restconfig's own options
    ✅ ``get_settings().alias_collision_policy`` from the cached instance
    ❌ Calling a source directly to resolve a REST client property
    ✅ ``config.get_value(name)`` so every alias is honoured
"""

from .interceptors import (
    ConfigInterceptor,
    FallbackInterceptor,
    InterceptorContext,
    Priorities,
    RelocateInterceptor,
)
from .layered import (
    ConfigBuilder,
    LayeredConfig,
    LayeredConfigBuilder,
)
from .settings import (
    CollisionPolicy,
    RestConfigSettings,
    clear_settings_cache,
    get_settings,
)
from .sources import (
    DEFAULT_ORDINAL,
    ConfigSource,
    ConfigValue,
    MapConfigSource,
    compare_sources,
)

__all__ = [
    # Sources
    "DEFAULT_ORDINAL",
    "ConfigSource",
    "ConfigValue",
    "MapConfigSource",
    "compare_sources",
    # Interceptors
    "ConfigInterceptor",
    "FallbackInterceptor",
    "InterceptorContext",
    "Priorities",
    "RelocateInterceptor",
    # Layered
    "ConfigBuilder",
    "LayeredConfig",
    "LayeredConfigBuilder",
    # Settings
    "CollisionPolicy",
    "RestConfigSettings",
    "clear_settings_cache",
    "get_settings",
]
