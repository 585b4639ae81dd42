"""
CLI utility helpers — workspace loading and output formatting.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from restconfig.cli.workspace import Workspace
from restconfig.core.config import LayeredConfig, LayeredConfigBuilder, get_settings
from restconfig.core.errors import RestConfigError
from restconfig.restclient import RestClientConfigBuilder

console = Console()
err_console = Console(stderr=True)


def fail(error: RestConfigError) -> typer.Exit:
    """Print a restconfig error and return the exit to raise."""
    err_console.print(f"[bold red]Error[/bold red] ({error.category.value}): {error.message}")
    return typer.Exit(code=1)


def load_workspace(path: Path) -> tuple[Workspace, RestClientConfigBuilder, LayeredConfig]:
    """Parse a workspace and build the layered config for it."""
    settings = get_settings()
    try:
        workspace = Workspace.from_toml(path, default_ordinal=settings.default_ordinal)
        customizer = RestClientConfigBuilder(workspace.clients)
        config = (
            LayeredConfigBuilder()
            .with_sources(*workspace.sources)
            .with_customizers(customizer)
            .build()
        )
    except RestConfigError as e:
        raise fail(e) from e
    return workspace, customizer, config


def print_table(rows: list[dict[str, Any]], *, title: str = "") -> None:
    """Render a list of dicts as a Rich table."""
    if not rows:
        console.print("[dim]No items.[/dim]")
        return
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in rows[0]:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*(str(v) for v in row.values()))
    console.print(table)
