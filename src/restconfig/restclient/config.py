"""
Typed per-client configuration.

:class:`RestClientsConfig` materialises one :class:`RestClientConfig` per
REST client. Clients come from two places: the keys registered by the
configuration build, and any ``quarkus.rest-client."<name>".*`` property the
sources declare. Enumerated names are already relocated to the canonical
spelling, so a client configured only through an alias or a MicroProfile
name is found under its fully qualified name.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from restconfig.core.config.layered import LayeredConfig
from restconfig.core.errors import InvalidConfigError, MissingConfigError
from restconfig.restclient.names import REST_CLIENT_PREFIX, quote, split_quoted_client_key


class RestClientConfig(BaseModel):
    """Settings of one REST client, keyed by their canonical property names."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    url: str | None = None
    uri: str | None = None
    scope: str | None = None
    providers: str | None = None
    connect_timeout: int | None = Field(default=None, alias="connectTimeout")
    read_timeout: int | None = Field(default=None, alias="readTimeout")
    follow_redirects: bool | None = Field(default=None, alias="followRedirects")
    proxy_address: str | None = Field(default=None, alias="proxyAddress")
    query_param_style: str | None = Field(default=None, alias="queryParamStyle")
    hostname_verifier: str | None = Field(default=None, alias="hostnameVerifier")
    verify_host: bool | None = Field(default=None, alias="verifyHost")
    trust_store: str | None = Field(default=None, alias="trustStore")
    trust_store_password: str | None = Field(default=None, alias="trustStorePassword")
    trust_store_type: str | None = Field(default=None, alias="trustStoreType")
    key_store: str | None = Field(default=None, alias="keyStore")
    key_store_password: str | None = Field(default=None, alias="keyStorePassword")
    key_store_type: str | None = Field(default=None, alias="keyStoreType")

    @classmethod
    def property_names(cls) -> list[str]:
        return [field.alias or name for name, field in cls.model_fields.items()]

    @classmethod
    def load(cls, config: LayeredConfig, full_name: str) -> RestClientConfig:
        """Resolve every property of one client through ``config``."""
        base = f"{REST_CLIENT_PREFIX}{quote(full_name)}."
        raw: dict[str, str] = {}
        for prop in cls.property_names():
            value = config.get_optional_value(base + prop)
            if value is not None:
                raw[prop] = value
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            error = e.errors()[0]
            prop = str(error["loc"][0])
            key = base + prop
            raise InvalidConfigError(key, raw.get(prop), f"{key}: {error['msg']}").with_context(
                client=full_name
            ) from e

    def defined(self) -> dict[str, object]:
        """Only the properties that have a value, by canonical name."""
        return self.model_dump(by_alias=True, exclude_none=True)


class RestClientsConfig:
    """Configuration of every known REST client, keyed by fully qualified name."""

    def __init__(self, clients: dict[str, RestClientConfig]):
        self._clients = clients

    @classmethod
    def load(
        cls,
        config: LayeredConfig,
        keys: Iterable[str] = (),
        *,
        include_discovered: bool = True,
    ) -> RestClientsConfig:
        names = list(keys)
        if include_discovered:
            names.extend(discover_client_names(config))
        return cls({name: RestClientConfig.load(config, name) for name in dict.fromkeys(names)})

    def for_client(self, full_name: str) -> RestClientConfig:
        try:
            return self._clients[full_name]
        except KeyError:
            raise MissingConfigError(
                f"{REST_CLIENT_PREFIX}{quote(full_name)}",
                f"No REST client configuration for {full_name}",
            ) from None

    def items(self) -> Iterator[tuple[str, RestClientConfig]]:
        return iter(self._clients.items())

    def __contains__(self, full_name: object) -> bool:
        return full_name in self._clients

    def __iter__(self) -> Iterator[str]:
        return iter(self._clients)

    def __len__(self) -> int:
        return len(self._clients)


def discover_client_names(config: LayeredConfig) -> list[str]:
    """Client names appearing as ``quarkus.rest-client."<name>".<property>``."""
    found: list[str] = []
    for name in config.property_names():
        key = split_quoted_client_key(name)
        if key is not None and key.tail:
            found.append(key.segment[1:-1])
    return list(dict.fromkeys(found))


__all__ = [
    "RestClientConfig",
    "RestClientsConfig",
    "discover_client_names",
]
