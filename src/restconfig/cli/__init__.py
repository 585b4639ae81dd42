"""
CLI layer for restconfig.

Provides a Typer application that loads a TOML workspace of clients and
property sources and shows how names resolve.

Entry point::

    restconfig --help
"""

from restconfig.cli.app import app

__all__ = ["app"]
