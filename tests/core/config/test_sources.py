"""Tests for restconfig.core.config.sources — values, sources, comparator."""

from __future__ import annotations

from restconfig.core.config.sources import (
    DEFAULT_ORDINAL,
    ConfigSource,
    ConfigValue,
    MapConfigSource,
    compare_sources,
)


class TestMapConfigSource:
    def test_get_value(self):
        source = MapConfigSource({"a": "1"})
        assert source.get_value("a") == "1"
        assert source.get_value("b") is None

    def test_values_are_strings(self):
        source = MapConfigSource({"timeout": 500, "enabled": True})
        assert source.get_value("timeout") == "500"
        assert source.get_value("enabled") == "True"

    def test_default_name_and_ordinal(self):
        source = MapConfigSource({})
        assert source.ordinal == DEFAULT_ORDINAL
        assert "ordinal=100" in source.name

    def test_property_names(self):
        source = MapConfigSource({"a": "1", "b": "2"}, name="app", ordinal=250)
        assert set(source.property_names()) == {"a", "b"}
        assert source.name == "app"
        assert source.ordinal == 250

    def test_source_is_read_only_copy(self):
        props = {"a": "1"}
        source = MapConfigSource(props)
        props["a"] = "2"
        assert source.get_value("a") == "1"

    def test_satisfies_protocol(self):
        assert isinstance(MapConfigSource({}), ConfigSource)


class TestConfigValue:
    def test_with_name_relabels(self):
        value = ConfigValue("alias", "x", source_name="s", source_ordinal=100)
        relabeled = value.with_name("canonical")
        assert relabeled.name == "canonical"
        assert relabeled.value == "x"
        assert relabeled.source_ordinal == 100
        assert value.name == "alias"

    def test_with_same_name_returns_self(self):
        value = ConfigValue("a", "x")
        assert value.with_name("a") is value


class TestCompareSources:
    def test_higher_ordinal_wins(self):
        high = ConfigValue("a", "1", source_ordinal=100)
        low = ConfigValue("b", "2", source_ordinal=50)
        assert compare_sources(high, low) > 0
        assert compare_sources(low, high) < 0

    def test_lower_position_wins_on_ordinal_tie(self):
        first = ConfigValue("a", "1", source_ordinal=100, source_position=0)
        second = ConfigValue("b", "2", source_ordinal=100, source_position=1)
        assert compare_sources(first, second) > 0
        assert compare_sources(second, first) < 0

    def test_same_source_is_a_tie(self):
        one = ConfigValue("a", "1", source_ordinal=100, source_position=2)
        other = ConfigValue("b", "2", source_ordinal=100, source_position=2)
        assert compare_sources(one, other) == 0
