"""
Root Typer application for the restconfig CLI.
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path

import typer

from restconfig.cli.utils import console, fail, load_workspace, print_table
from restconfig.core.config import get_settings
from restconfig.core.errors import RestConfigError
from restconfig.core.logging import configure_logging
from restconfig.restclient import RestClientsConfig

app = typer.Typer(
    name="restconfig",
    help="restconfig — resolve REST client configuration names.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


class AliasFormat(str, Enum):
    TABLE = "table"
    JSON = "json"


WORKSPACE_OPTION = typer.Option(
    Path("restclients.toml"), "--file", "-f", help="Workspace TOML with [[clients]] and [[sources]]"
)


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        try:
            v = pkg_version("restconfig")
        except PackageNotFoundError:
            from restconfig import __version__ as v
        typer.echo(f"restconfig {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Override RESTCONFIG_LOG_LEVEL"),
) -> None:
    """restconfig CLI — inspect aliases and resolve REST client properties."""
    settings = get_settings()
    configure_logging(
        level=log_level or settings.log_level,
        json_format=settings.json_logs,
    )


@app.command("resolve")
def resolve(
    name: str = typer.Argument(..., help="Property name, in any accepted spelling"),
    file: Path = WORKSPACE_OPTION,
    as_json: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Resolve one property name and show which source won."""
    _, _, config = load_workspace(file)
    config_value = config.get_value(name)

    if config_value is None:
        console.print(f"[yellow]{name}[/yellow] is not set")
        raise typer.Exit(1)

    if as_json:
        console.print_json(
            json.dumps(
                {
                    "name": config_value.name,
                    "value": config_value.value,
                    "source": config_value.source_name,
                    "ordinal": config_value.source_ordinal,
                }
            )
        )
        return

    console.print(f"[bold]{config_value.name}[/bold] = {config_value.value}")
    console.print(f"  [dim]from {config_value.source_name} (ordinal {config_value.source_ordinal})[/dim]")


@app.command("aliases")
def aliases(
    file: Path = WORKSPACE_OPTION,
    format: AliasFormat = typer.Option(AliasFormat.TABLE, "--format", help="Output format: table, json"),
) -> None:
    """Show the alias tables built for the workspace clients."""
    workspace, customizer, _ = load_workspace(file)
    tables = customizer.tables

    if format is AliasFormat.JSON:
        console.print_json(
            json.dumps(
                {
                    "quarkus_fallbacks": dict(tables.quarkus_fallbacks),
                    "microprofile_fallbacks": dict(tables.microprofile_fallbacks),
                    "relocates": dict(tables.relocates),
                }
            )
        )
        return

    rows = [
        {"client": client.full_name, "aliases": ", ".join(tables.aliases_of(client.full_name))}
        for client in workspace.clients
    ]
    print_table(rows, title="REST client aliases")
    for label, table in (
        ("Quarkus fallbacks", tables.quarkus_fallbacks),
        ("MicroProfile fallbacks", tables.microprofile_fallbacks),
    ):
        print_table([{"from": k, "to": v} for k, v in table.items()], title=label)


@app.command("clients")
def clients(
    file: Path = WORKSPACE_OPTION,
    as_json: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the resolved configuration of every client."""
    _, customizer, config = load_workspace(file)
    try:
        resolved = RestClientsConfig.load(config, customizer.keys)
    except RestConfigError as e:
        raise fail(e) from e

    if as_json:
        console.print_json(json.dumps({name: cfg.defined() for name, cfg in resolved.items()}))
        return

    rows = [
        {"client": name, "property": prop, "value": value}
        for name, cfg in resolved.items()
        for prop, value in cfg.defined().items()
    ]
    print_table(rows, title="REST client configuration")
