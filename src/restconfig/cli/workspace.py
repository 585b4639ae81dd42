"""
TOML workspace describing REST clients and property sources.

Used by the CLI to reproduce a resolution outside an application. Example
``restclients.toml``::

    [[clients]]
    full_name = "com.acme.FooClient"
    config_key = "foo-key"          # optional
    # simple_name, config_key_equals_names and config_key_composed are
    # derived when omitted

    [[sources]]
    name = "application.properties"
    ordinal = 250

    [sources.properties]
    "quarkus.rest-client.foo-key.url" = "http://localhost:8080"
    "com.acme.FooClient/mp-rest/connect-timeout" = 500
"""

from __future__ import annotations

import tomllib
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from restconfig.core.config.sources import DEFAULT_ORDINAL, MapConfigSource
from restconfig.core.errors import WorkspaceError
from restconfig.restclient.clients import RegisteredRestClient
from restconfig.restclient.names import quote


@dataclass
class Workspace:
    """Clients and sources parsed from a TOML file."""

    path: Path
    clients: list[RegisteredRestClient] = field(default_factory=list)
    sources: list[MapConfigSource] = field(default_factory=list)

    @classmethod
    def from_toml(cls, path: Path, *, default_ordinal: int = DEFAULT_ORDINAL) -> Workspace:
        """Load a workspace from a ``.toml`` file."""
        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise WorkspaceError(f"Workspace not found: {path}", cause=e).with_context(
                source_name=str(path)
            ) from e
        except tomllib.TOMLDecodeError as e:
            raise WorkspaceError(f"Invalid TOML in {path}: {e}", cause=e).with_context(
                source_name=str(path)
            ) from e

        return cls(
            path=path,
            clients=[_client(entry, path) for entry in data.get("clients", [])],
            sources=[
                _source(entry, path, index, default_ordinal)
                for index, entry in enumerate(data.get("sources", []))
            ],
        )
def _client(entry: dict[str, Any], path: Path) -> RegisteredRestClient:
    full_name = entry.get("full_name")
    if not full_name or not isinstance(full_name, str):
        raise WorkspaceError(f"Client without full_name in {path}").with_context(
            source_name=str(path)
        )
    config_key = entry.get("config_key")
    if config_key is not None and not isinstance(config_key, str):
        raise WorkspaceError(
            f"Client {full_name} in {path} has a config_key that is not a string: {config_key!r}"
        ).with_context(source_name=str(path), client=full_name)
    derived = RegisteredRestClient.of(full_name, config_key)
    return RegisteredRestClient(
        full_name=full_name,
        simple_name=entry.get("simple_name", derived.simple_name),
        config_key=derived.config_key,
        config_key_equals_names=entry.get("config_key_equals_names", derived.config_key_equals_names),
        config_key_composed=entry.get("config_key_composed", derived.config_key_composed),
    )


def _source(entry: dict[str, Any], path: Path, index: int, default_ordinal: int) -> MapConfigSource:
    properties = entry.get("properties", {})
    if not isinstance(properties, dict):
        raise WorkspaceError(f"Source #{index} in {path} has no properties table").with_context(
            source_name=str(path)
        )
    return MapConfigSource(
        dict(_flatten(properties)),
        name=str(entry.get("name", f"{path.name}#{index}")),
        ordinal=_ordinal(entry.get("ordinal", default_ordinal), path, index),
    )


def _ordinal(value: Any, path: Path, index: int) -> int:
    # bool is an int subclass; ``ordinal = true`` is a mistake, not 1.
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
    raise WorkspaceError(
        f"Source #{index} in {path} has an ordinal that is not an integer: {value!r}"
    ).with_context(source_name=str(path))


def _flatten(properties: dict[str, Any], prefix: str = "") -> Iterator[tuple[str, str]]:
    """Yield ``(property name, value)`` pairs, joining nested tables with ``.``.

    TOML reads ``quarkus.rest-client.FooClient.url = ...`` as nested tables.
    A nested key that itself contains ``.`` was quoted in the file and is
    quoted again in the property name.
    """
    for key, value in properties.items():
        if prefix and "." in key:
            key = quote(key)
        name = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            yield from _flatten(value, name)
        else:
            yield name, _toml_value(value)


def _toml_value(value: Any) -> str:
    """Convert a TOML value to the string a property source would hold."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, list):
        return ",".join(_toml_value(item) for item in value)
    return str(value)


__all__ = ["Workspace"]
