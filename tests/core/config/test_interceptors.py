"""Tests for restconfig.core.config.interceptors — chain, fallback, relocation."""

from __future__ import annotations

import pytest

from restconfig.core.config.interceptors import (
    ConfigInterceptor,
    FallbackInterceptor,
    InterceptorContext,
    Priorities,
    RelocateInterceptor,
    order_interceptors,
)
from restconfig.core.config.sources import ConfigValue
from restconfig.core.errors import AliasCycleError


def _lookup(values: dict[str, tuple[str, int]]):
    """Build a source lookup from ``name -> (value, ordinal)``."""

    def lookup(name: str) -> ConfigValue | None:
        if name not in values:
            return None
        value, ordinal = values[name]
        return ConfigValue(name, value, source_name=f"ord{ordinal}", source_ordinal=ordinal)

    return lookup


def _resolve(interceptors, values, name):
    return InterceptorContext(order_interceptors(interceptors), _lookup(values)).proceed(name)


class TestOrdering:
    def test_highest_priority_first(self):
        low = ConfigInterceptor()
        low.priority = Priorities.LIBRARY
        high = ConfigInterceptor()
        high.priority = Priorities.APPLICATION
        assert order_interceptors([low, high]) == [high, low]

    def test_ties_keep_registration_order(self):
        a, b = ConfigInterceptor(), ConfigInterceptor()
        assert order_interceptors([a, b]) == [a, b]


class TestFallbackInterceptor:
    def test_identity_mapping_returns_direct(self):
        fallback = FallbackInterceptor(lambda name: name)
        result = _resolve([fallback], {"a": ("1", 100)}, "a")
        assert result.value == "1"
        assert result.name == "a"

    def test_missing_everywhere_is_none(self):
        fallback = FallbackInterceptor(lambda name: "b" if name == "a" else name)
        assert _resolve([fallback], {}, "a") is None

    def test_fallback_value_relabeled(self):
        fallback = FallbackInterceptor(lambda name: "b" if name == "a" else name)
        result = _resolve([fallback], {"b": ("2", 100)}, "a")
        assert result.value == "2"
        assert result.name == "a"

    def test_multi_hop_chain_is_walked(self):
        chain = {"a": "b", "b": "c"}
        fallback = FallbackInterceptor(lambda name: chain.get(name, name))
        result = _resolve([fallback], {"c": ("3", 100)}, "a")
        assert result.value == "3"
        assert result.name == "a"

    def test_higher_ordinal_fallback_wins(self):
        fallback = FallbackInterceptor(lambda name: "b" if name == "a" else name)
        result = _resolve([fallback], {"a": ("1", 50), "b": ("2", 100)}, "a")
        assert result.value == "2"
        assert result.name == "a"

    def test_higher_ordinal_direct_wins(self):
        fallback = FallbackInterceptor(lambda name: "b" if name == "a" else name)
        result = _resolve([fallback], {"a": ("1", 100), "b": ("2", 50)}, "a")
        assert result.value == "1"

    def test_tie_keeps_direct(self):
        fallback = FallbackInterceptor(lambda name: "b" if name == "a" else name)
        result = _resolve([fallback], {"a": ("1", 100), "b": ("2", 100)}, "a")
        assert result.value == "1"

    def test_restart_reenters_outer_interceptors(self):
        # inner maps a -> b; outer maps b -> c. A restart from the inner
        # interceptor must see the outer one again.
        inner = FallbackInterceptor(lambda n: "b" if n == "a" else n, priority=Priorities.LIBRARY)
        outer = FallbackInterceptor(lambda n: "c" if n == "b" else n, priority=Priorities.APPLICATION)
        result = _resolve([inner, outer], {"c": ("3", 100)}, "a")
        assert result.value == "3"
        assert result.name == "a"

    def test_cycle_is_reported(self):
        swap = {"a": "b", "b": "a"}
        fallback = FallbackInterceptor(lambda name: swap.get(name, name))
        with pytest.raises(AliasCycleError):
            _resolve([fallback], {}, "a")


class TestRelocateInterceptor:
    def test_lookup_passes_through(self):
        relocate = RelocateInterceptor(lambda name: "canonical")
        result = _resolve([relocate], {"alias": ("1", 100)}, "alias")
        assert result.value == "1"
        assert result.name == "alias"

    def test_iterate_names_rewrites(self):
        relocate = RelocateInterceptor(lambda name: name.upper())
        assert list(relocate.iterate_names(["a", "b"])) == ["A", "B"]

    def test_base_iterate_names_is_identity(self):
        assert list(ConfigInterceptor().iterate_names(["x"])) == ["x"]
