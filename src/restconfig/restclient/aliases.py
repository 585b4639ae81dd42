"""
Alias tables for REST client configuration names.

For every registered client the builder produces three rewrite tables:

``quarkus_fallbacks``
    ``"FQN" -> Simple -> "Simple" -> configKey -> "configKey"``, one edge
    per hop. A lookup that misses on one spelling falls back to the next.

``microprofile_fallbacks``
    ``"FQN" -> FQN/mp-rest/ -> configKey/mp-rest/``, from the Quarkus names
    to the MicroProfile names and between MicroProfile names.

``relocates``
    Every alias above, and every MicroProfile prefix, straight to
    ``"FQN"``, the canonical segment.

The order of the chain is the lookup precedence: names closer to the
fully qualified name win over the config key, and Quarkus names win over
MicroProfile ones.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from restconfig.core.config.settings import CollisionPolicy
from restconfig.core.errors import AliasCollisionError, AliasCycleError
from restconfig.core.logging import get_logger
from restconfig.restclient.clients import RegisteredRestClient, RestClientKeys
from restconfig.restclient.names import mp_rest, quote

logger = get_logger(__name__)


@dataclass(frozen=True)
class AliasTables:
    """Immutable rewrite tables produced by :class:`AliasTableBuilder`."""

    quarkus_fallbacks: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    microprofile_fallbacks: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    relocates: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def aliases_of(self, full_name: str) -> list[str]:
        """Every alias segment that relocates to the given client."""
        target = quote(full_name)
        return [alias for alias, canonical in self.relocates.items() if canonical == target]


class _EdgeTable:
    """One rewrite table under construction, tracking which client owns each edge."""

    def __init__(self, name: str, policy: CollisionPolicy):
        self.name = name
        self.policy = policy
        self.edges: dict[str, str] = {}
        self.owners: dict[str, str] = {}

    def put(self, source: str, target: str, owner: str) -> None:
        if source == target:
            return
        existing = self.edges.get(source)
        if existing is not None and existing != target and self.owners[source] != owner:
            if self.policy is CollisionPolicy.ERROR:
                raise AliasCollisionError(source, [self.owners[source], owner], table=self.name)
            logger.warning(
                "alias_collision",
                table=self.name,
                alias=source,
                replaced=self.owners[source],
                winner=owner,
            )
        self.edges[source] = target
        self.owners[source] = owner

    def check_acyclic(self) -> None:
        for start in self.edges:
            chain = [start]
            current = start
            while current in self.edges:
                current = self.edges[current]
                if current in chain:
                    raise AliasCycleError(self.name, [*chain, current])
                chain.append(current)

    def freeze(self) -> Mapping[str, str]:
        return MappingProxyType(dict(self.edges))


class AliasTableBuilder:
    """Builds :class:`AliasTables` from the registered clients.

    The ``keys`` registry is cleared before every build and receives the
    full name of each client, so a builder reused across configuration
    builds never leaks clients from a previous one.
    """

    def __init__(
        self,
        keys: RestClientKeys | None = None,
        *,
        collision_policy: CollisionPolicy = CollisionPolicy.ERROR,
    ):
        self.keys = keys if keys is not None else RestClientKeys()
        self.collision_policy = collision_policy

    def build(self, clients: Iterable[RegisteredRestClient]) -> AliasTables:
        self.keys.clear()

        quarkus = _EdgeTable("quarkus_fallbacks", self.collision_policy)
        microprofile = _EdgeTable("microprofile_fallbacks", self.collision_policy)
        relocates = _EdgeTable("relocates", self.collision_policy)

        for client in clients:
            self.keys.add(client.full_name)
            owner = client.full_name
            quoted_full_name = client.quoted_full_name

            chain = _quarkus_chain(client)
            for source, target in zip(chain, chain[1:]):
                quarkus.put(source, target, owner)
            for alias in chain[1:]:
                relocates.put(alias, quoted_full_name, owner)

            mp_full_name = mp_rest(client.full_name)
            microprofile.put(quoted_full_name, mp_full_name, owner)
            relocates.put(mp_full_name, quoted_full_name, owner)
            if client.has_distinct_config_key:
                mp_config_key = mp_rest(client.config_key)
                microprofile.put(mp_full_name, mp_config_key, owner)
                relocates.put(mp_config_key, quoted_full_name, owner)

        quarkus.check_acyclic()
        microprofile.check_acyclic()

        tables = AliasTables(
            quarkus_fallbacks=quarkus.freeze(),
            microprofile_fallbacks=microprofile.freeze(),
            relocates=relocates.freeze(),
        )
        logger.info(
            "alias_tables_built",
            clients=len(self.keys),
            quarkus_fallbacks=len(tables.quarkus_fallbacks),
            microprofile_fallbacks=len(tables.microprofile_fallbacks),
            relocates=len(tables.relocates),
        )
        return tables


def _quarkus_chain(client: RegisteredRestClient) -> list[str]:
    """The Quarkus spellings of a client, in lookup precedence order."""
    chain = [client.quoted_full_name, client.simple_name, client.quoted_simple_name]
    config_key = client.usable_config_key
    if config_key is not None:
        if client.config_key_composed:
            chain.append(quote(config_key))
        else:
            chain.extend([config_key, quote(config_key)])
    # A client in the default package has the same full and simple name.
    return list(dict.fromkeys(chain))


__all__ = [
    "AliasTables",
    "AliasTableBuilder",
]
