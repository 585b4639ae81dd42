"""
Shared pytest fixtures and configuration for restconfig tests.

This module provides:
- Settings cache cleanup for test isolation
- Sample REST clients
- A ``build_config`` factory wiring sources through the REST client builder
- A recording source for asserting which names were looked up
"""

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Ensure restconfig package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from restconfig.core.config import (
    CollisionPolicy,
    LayeredConfig,
    LayeredConfigBuilder,
    MapConfigSource,
    clear_settings_cache,
)
from restconfig.restclient import RegisteredRestClient, RestClientConfigBuilder

FOO_FQN = "com.acme.FooClient"
CANONICAL = f'quarkus.rest-client."{FOO_FQN}"'


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)
        if "integration" in str(test_path):
            item.add_marker(pytest.mark.integration)
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Drop cached settings and any RESTCONFIG_* variables from the environment."""
    import os

    for key in list(os.environ):
        if key.startswith("RESTCONFIG_"):
            monkeypatch.delenv(key)
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Clients
# =============================================================================


@pytest.fixture
def foo_client() -> RegisteredRestClient:
    """``com.acme.FooClient`` without a config key."""
    return RegisteredRestClient.of(FOO_FQN)


@pytest.fixture
def foo_client_with_key() -> RegisteredRestClient:
    """``com.acme.FooClient`` registered with ``configKey = "foo-key"``."""
    return RegisteredRestClient.of(FOO_FQN, config_key="foo-key")


# =============================================================================
# Config factories
# =============================================================================


class RecordingSource(MapConfigSource):
    """A map source that remembers every name it was asked for."""

    def __init__(self, properties, **kwargs):
        super().__init__(properties, **kwargs)
        self.lookups: list[str] = []

    def get_value(self, name: str) -> str | None:
        self.lookups.append(name)
        return super().get_value(name)


@pytest.fixture
def build_config() -> Callable[..., LayeredConfig]:
    """Factory: ``build_config(clients, source, ...)`` -> LayeredConfig."""

    def _build(clients, *sources, policy: CollisionPolicy = CollisionPolicy.ERROR) -> LayeredConfig:
        return (
            LayeredConfigBuilder()
            .with_sources(*sources)
            .with_customizers(RestClientConfigBuilder(clients, collision_policy=policy))
            .build()
        )

    return _build
