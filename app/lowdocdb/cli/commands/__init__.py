"""CLI commands for lowdocdb.

This package contains all subcommand implementations.
"""

from lowdocdb.cli.commands import config, doc

__all__ = ["config", "doc"]
