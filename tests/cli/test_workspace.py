"""Tests for restconfig.cli.workspace — TOML workspace parsing."""

from __future__ import annotations

import pytest

from restconfig.cli.workspace import Workspace
from restconfig.core.config.sources import DEFAULT_ORDINAL
from restconfig.core.errors import ErrorCategory, WorkspaceError


def _workspace(tmp_path, text, **kwargs):
    path = tmp_path / "restclients.toml"
    path.write_text(text, encoding="utf-8")
    return Workspace.from_toml(path, **kwargs)


class TestClients:
    def test_derived_fields(self, tmp_path):
        ws = _workspace(tmp_path, '[[clients]]\nfull_name = "com.acme.FooClient"\nconfig_key = "acme.foo"\n')
        (client,) = ws.clients
        assert client.simple_name == "FooClient"
        assert client.config_key == "acme.foo"
        assert client.config_key_composed is True
        assert client.config_key_equals_names is False

    def test_explicit_fields_override(self, tmp_path):
        ws = _workspace(
            tmp_path,
            '[[clients]]\nfull_name = "com.acme.FooClient"\nsimple_name = "Foo"\n',
        )
        assert ws.clients[0].simple_name == "Foo"

    def test_full_name_required(self, tmp_path):
        with pytest.raises(WorkspaceError) as exc:
            _workspace(tmp_path, '[[clients]]\nconfig_key = "foo"\n')
        assert "full_name" in exc.value.message


class TestSources:
    def test_values_converted_to_strings(self, tmp_path):
        ws = _workspace(
            tmp_path,
            "[[sources]]\nname = \"app\"\nordinal = 250\n\n[sources.properties]\n"
            '"a.int" = 500\n"a.bool" = true\n"a.list" = ["x", "y"]\n"a.str" = "s"\n',
        )
        (source,) = ws.sources
        assert source.name == "app"
        assert source.ordinal == 250
        assert source.get_value("a.int") == "500"
        assert source.get_value("a.bool") == "true"
        assert source.get_value("a.list") == "x,y"
        assert source.get_value("a.str") == "s"

    def test_default_name_and_ordinal(self, tmp_path):
        ws = _workspace(tmp_path, '[[sources]]\n[sources.properties]\n"a" = "1"\n', default_ordinal=175)
        (source,) = ws.sources
        assert source.name == "restclients.toml#0"
        assert source.ordinal == 175

    def test_properties_must_be_a_table(self, tmp_path):
        with pytest.raises(WorkspaceError):
            _workspace(tmp_path, '[[sources]]\nproperties = "nope"\n')


class TestErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(WorkspaceError) as exc:
            Workspace.from_toml(tmp_path / "missing.toml")
        assert exc.value.category is ErrorCategory.SOURCE
        assert isinstance(exc.value.cause, FileNotFoundError)

    def test_invalid_toml(self, tmp_path):
        with pytest.raises(WorkspaceError) as exc:
            _workspace(tmp_path, "[[clients]\n")
        assert "Invalid TOML" in exc.value.message

    def test_empty_file(self, tmp_path):
        ws = _workspace(tmp_path, "")
        assert ws.clients == []
        assert ws.sources == []


class TestDottedKeys:
    def test_unquoted_dotted_key_flattened(self, tmp_path):
        ws = _workspace(
            tmp_path,
            '[[sources]]\n[sources.properties]\nquarkus.rest-client.FooClient.url = "http://x"\n',
        )
        (source,) = ws.sources
        assert list(source.property_names()) == ["quarkus.rest-client.FooClient.url"]
        assert source.get_value("quarkus.rest-client.FooClient.url") == "http://x"
        assert source.get_value("quarkus") is None

    def test_nested_key_with_dots_is_quoted(self, tmp_path):
        ws = _workspace(
            tmp_path,
            '[[sources]]\n[sources.properties]\nquarkus.rest-client."com.acme.FooClient".connectTimeout = 500\n',
        )
        (source,) = ws.sources
        assert source.get_value('quarkus.rest-client."com.acme.FooClient".connectTimeout') == "500"

    def test_quoted_key_kept_verbatim(self, tmp_path):
        ws = _workspace(
            tmp_path,
            '[[sources]]\n[sources.properties]\n"com.acme.FooClient/mp-rest/url" = "http://x"\n',
        )
        assert ws.sources[0].get_value("com.acme.FooClient/mp-rest/url") == "http://x"


class TestInvalidEntries:
    @pytest.mark.parametrize("ordinal", ['"high"', "true", "1.5", "[1]"])
    def test_ordinal_must_be_an_integer(self, tmp_path, ordinal):
        with pytest.raises(WorkspaceError) as exc:
            _workspace(tmp_path, f"[[sources]]\nordinal = {ordinal}\n[sources.properties]\n")
        assert "ordinal" in exc.value.message
        assert exc.value.context.source_name.endswith("restclients.toml")

    def test_numeric_string_ordinal_accepted(self, tmp_path):
        ws = _workspace(tmp_path, '[[sources]]\nordinal = "300"\n[sources.properties]\n')
        assert ws.sources[0].ordinal == 300

    def test_config_key_must_be_a_string(self, tmp_path):
        with pytest.raises(WorkspaceError) as exc:
            _workspace(tmp_path, '[[clients]]\nfull_name = "com.acme.FooClient"\nconfig_key = 5\n')
        assert "config_key" in exc.value.message
        assert exc.value.context.client == "com.acme.FooClient"

    def test_full_name_must_be_a_string(self, tmp_path):
        with pytest.raises(WorkspaceError):
            _workspace(tmp_path, "[[clients]]\nfull_name = 5\n")

    def test_default_ordinal_shared_with_sources(self, tmp_path):
        ws = _workspace(tmp_path, '[[sources]]\n[sources.properties]\n"a" = "1"\n')
        assert ws.sources[0].ordinal == DEFAULT_ORDINAL
