"""REST client configuration names: aliases, fallbacks, and relocation.

Quick start::

    from restconfig.core.config import LayeredConfigBuilder, MapConfigSource
    from restconfig.restclient import RegisteredRestClient, RestClientConfigBuilder

    clients = [RegisteredRestClient.of("com.acme.FooClient", config_key="foo")]
    config = (
        LayeredConfigBuilder()
        .with_sources(MapConfigSource({"foo/mp-rest/url": "http://x"}))
        .with_customizers(RestClientConfigBuilder(clients))
        .build()
    )
    config.get_optional_value('quarkus.rest-client."com.acme.FooClient".url')

Architecture::

    names.py      Prefix constants, MicroProfile property names, tokenization
    clients.py    RegisteredRestClient + RestClientKeys registry
    aliases.py    AliasTableBuilder -> AliasTables
    mappings.py   QuarkusFallbacks / MicroProfileFallbacks / Relocates
    builder.py    RestClientConfigBuilder (registers the interceptors)
    config.py     RestClientConfig / RestClientsConfig typed view
"""

from .aliases import AliasTableBuilder, AliasTables
from .builder import (
    MICROPROFILE_FALLBACKS_PRIORITY,
    QUARKUS_FALLBACKS_PRIORITY,
    RELOCATES_PRIORITY,
    RestClientConfigBuilder,
)
from .clients import RegisteredRestClient, RestClientKeys
from .config import RestClientConfig, RestClientsConfig, discover_client_names
from .mappings import MicroProfileFallbacks, QuarkusFallbacks, Relocates
from .names import MICROPROFILE_NAMES, MP_REST, REST_CLIENT_PREFIX

__all__ = [
    "REST_CLIENT_PREFIX",
    "MP_REST",
    "MICROPROFILE_NAMES",
    "RegisteredRestClient",
    "RestClientKeys",
    "AliasTableBuilder",
    "AliasTables",
    "QuarkusFallbacks",
    "MicroProfileFallbacks",
    "Relocates",
    "QUARKUS_FALLBACKS_PRIORITY",
    "MICROPROFILE_FALLBACKS_PRIORITY",
    "RELOCATES_PRIORITY",
    "RestClientConfigBuilder",
    "RestClientConfig",
    "RestClientsConfig",
    "discover_client_names",
]
