"""CLI package for lowdocdb.

This package contains the Typer application and all subcommands.
"""

from lowdocdb.cli.main import app

__all__ = ["app"]
