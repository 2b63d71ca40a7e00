"""Shared helpers for CLI commands.

Builds the AppConfig and DocumentStore a command operates on from the
global options stored in the Typer context.
"""

from pathlib import Path
from typing import Any

import typer

from lowdocdb.core.config import AppConfig, ConfigError, StoreConfig, load_config_or_default
from lowdocdb.core.errors import StoreConfigurationError
from lowdocdb.store import DocumentStore
from lowdocdb.utils.formatting import print_error


def _options(ctx: typer.Context) -> dict[str, Any]:
    """Return the global options, tolerating a missing context object."""
    return ctx.obj if isinstance(ctx.obj, dict) else {}


def get_config_path(ctx: typer.Context) -> Path | None:
    """Return the --config override, if any."""
    return _options(ctx).get("config_path")


def resolve_config(ctx: typer.Context) -> AppConfig:
    """Load the config file and apply --root/--max-depth overrides.

    Args:
        ctx: Typer context carrying the global options.

    Returns:
        Effective AppConfig for this invocation.

    Raises:
        typer.Exit: If the config file is invalid.
    """
    options = _options(ctx)
    try:
        app_config = load_config_or_default(options.get("config_path"))
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    updates: dict[str, Any] = {}
    if options.get("root") is not None:
        updates["root"] = options["root"]
    if options.get("max_depth") is not None:
        updates["store"] = StoreConfig(max_depth=options["max_depth"])
    return app_config.model_copy(update=updates)


def open_store(ctx: typer.Context) -> DocumentStore:
    """Open the document store selected by the global options.

    Args:
        ctx: Typer context carrying the global options.

    Returns:
        DocumentStore rooted at the effective root.

    Raises:
        typer.Exit: If the config is invalid or the root is unusable.
    """
    app_config = resolve_config(ctx)
    try:
        return DocumentStore(app_config.effective_root, app_config.store)
    except StoreConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
