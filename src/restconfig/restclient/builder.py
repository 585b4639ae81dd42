"""
Registers the REST client name interceptors on a configuration builder.

A REST client property can be looked up under the following names, in
order:

1. ``quarkus.rest-client."[FQN of the REST interface]".*``
2. ``quarkus.rest-client.[Simple name of the REST interface].*``
3. ``quarkus.rest-client."[Simple name of the REST interface]".*``
4. ``quarkus.rest-client.[configKey].*``
5. ``quarkus.rest-client."[configKey]".*``
6. ``[FQN of the REST interface]/mp-rest/*``
7. ``[configKey]/mp-rest/*``

FQN names have priority over the ``configKey``, as in the MicroProfile REST
Client. The ``configKey`` names are skipped when no key is declared; the
unquoted key (4) is only generated when the key is a single segment.

Three interceptors implement this::

    relocates                APPLICATION     pass-through on lookup
    microprofile-fallbacks   LIBRARY + 595   fallback with restart
    quarkus-fallbacks        LIBRARY + 590   fallback with restart

The Quarkus fallbacks sit closest to the sources, so when a Quarkus alias and
a MicroProfile name come from sources of the same ordinal, the Quarkus alias
wins.

The relocation interceptor only rewrites enumerated property names, so
that a map of client configurations keyed by name sees the canonical
``quarkus.rest-client."FQN".*`` spelling only.
"""

from __future__ import annotations

from collections.abc import Iterable

from restconfig.core.config.interceptors import (
    ConfigInterceptor,
    FallbackInterceptor,
    Priorities,
    RelocateInterceptor,
)
from restconfig.core.config.layered import LayeredConfigBuilder
from restconfig.core.config.settings import CollisionPolicy, get_settings
from restconfig.core.logging import LogContext, get_logger
from restconfig.restclient.aliases import AliasTableBuilder, AliasTables
from restconfig.restclient.clients import RegisteredRestClient, RestClientKeys
from restconfig.restclient.mappings import MicroProfileFallbacks, QuarkusFallbacks, Relocates

logger = get_logger(__name__)

QUARKUS_FALLBACKS_PRIORITY = Priorities.LIBRARY + 590
MICROPROFILE_FALLBACKS_PRIORITY = Priorities.LIBRARY + 595
RELOCATES_PRIORITY = Priorities.APPLICATION


class RestClientConfigBuilder:
    """Configuration customizer for the registered REST clients.

    Subclasses may override :meth:`get_rest_clients` instead of passing the
    list to the constructor.

    Example:
        >>> clients = [RegisteredRestClient.of("com.acme.FooClient")]
        >>> config = (
        ...     LayeredConfigBuilder()
        ...     .with_sources(MapConfigSource({"quarkus.rest-client.FooClient.url": "http://x"}))
        ...     .with_customizers(RestClientConfigBuilder(clients))
        ...     .build()
        ... )
        >>> config.get_optional_value('quarkus.rest-client."com.acme.FooClient".url')
        'http://x'
    """

    def __init__(
        self,
        clients: Iterable[RegisteredRestClient] | None = None,
        *,
        keys: RestClientKeys | None = None,
        collision_policy: CollisionPolicy | None = None,
    ):
        self._clients = list(clients) if clients is not None else []
        self.keys = keys if keys is not None else RestClientKeys()
        self.collision_policy = collision_policy
        self.tables: AliasTables | None = None

    def get_rest_clients(self) -> list[RegisteredRestClient]:
        """The REST clients discovered at build time."""
        return list(self._clients)

    def build_tables(self) -> AliasTables:
        policy = self.collision_policy or get_settings().alias_collision_policy
        clients = self.get_rest_clients()
        with LogContext(builder=type(self).__name__):
            self.tables = AliasTableBuilder(self.keys, collision_policy=policy).build(clients)
        return self.tables

    def interceptors(self, tables: AliasTables) -> list[ConfigInterceptor]:
        return [
            FallbackInterceptor(
                QuarkusFallbacks(tables.quarkus_fallbacks),
                name="quarkus-fallbacks",
                priority=QUARKUS_FALLBACKS_PRIORITY,
            ),
            FallbackInterceptor(
                MicroProfileFallbacks(tables.microprofile_fallbacks),
                name="microprofile-fallbacks",
                priority=MICROPROFILE_FALLBACKS_PRIORITY,
            ),
            RelocateInterceptor(
                Relocates(tables.relocates),
                name="relocates",
                priority=RELOCATES_PRIORITY,
            ),
        ]

    def config_builder(self, builder: LayeredConfigBuilder) -> LayeredConfigBuilder:
        tables = self.build_tables()
        interceptors = self.interceptors(tables)
        logger.debug(
            "config_builder_registered",
            interceptors=[interceptor.name for interceptor in interceptors],
            clients=len(self.keys),
        )
        return builder.with_interceptors(*interceptors)


__all__ = [
    "QUARKUS_FALLBACKS_PRIORITY",
    "MICROPROFILE_FALLBACKS_PRIORITY",
    "RELOCATES_PRIORITY",
    "RestClientConfigBuilder",
]
