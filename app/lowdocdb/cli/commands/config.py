"""Config commands.

Shows the effective store settings and writes a config file.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from lowdocdb.cli.context import get_config_path, resolve_config
from lowdocdb.core.config import AppConfig, ConfigError, StoreConfig, save_config
from lowdocdb.core.paths import get_config_path as get_default_config_path
from lowdocdb.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show and initialize store settings.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective settings after applying overrides."""
    app_config = resolve_config(ctx)
    config_path = get_config_path(ctx) or get_default_config_path()

    store = app_config.store
    max_depth = str(store.max_depth) if store.is_depth_limited else "unlimited"

    table = Table(show_header=False, border_style="border")
    table.add_column("Setting", style="header")
    table.add_column("Value", style="text")
    table.add_row("Config file", str(config_path))
    table.add_row("Config exists", "yes" if config_path.exists() else "no")
    table.add_row("Store root", str(app_config.effective_root))
    table.add_row("Max depth", max_depth)
    console.print(table)


@app.command()
def init(
    ctx: typer.Context,
    root: Annotated[
        Path | None,
        typer.Option("--root", "-r", help="Store root folder to record."),
    ] = None,
    max_depth: Annotated[
        int | None,
        typer.Option("--max-depth", min=0, help="Maximum folder nesting to record."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with the given settings."""
    config_path = get_config_path(ctx) or get_default_config_path()

    if config_path.exists() and not force:
        print_error(f"Config already exists: {config_path}")
        print_info("Use --force to overwrite.")
        raise typer.Exit(code=1)

    store = StoreConfig(max_depth=max_depth) if max_depth is not None else StoreConfig()
    app_config = AppConfig(root=root, store=store)

    try:
        saved_path = save_config(app_config, config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config created: {saved_path}")
