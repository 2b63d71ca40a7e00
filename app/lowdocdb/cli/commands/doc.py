"""Document commands.

Provides commands to store, read, list, enumerate and delete documents
in the configured store.
"""

import json
import sys
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from lowdocdb.cli.context import open_store
from lowdocdb.core.docpath import DocPath
from lowdocdb.core.errors import LowDocDBError
from lowdocdb.store import DocumentStore
from lowdocdb.utils.formatting import (
    console,
    create_paths_table,
    format_path_row,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Store, read, list and delete documents.",
    invoke_without_command=True,
    no_args_is_help=True,
)


class OutputFormat(str, Enum):
    """Output format options for listings."""

    TABLE = "table"
    JSON = "json"


@app.command()
def put(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Document path inside the store.")],
    file: Annotated[
        Path | None,
        typer.Option(
            "--file",
            "-f",
            exists=True,
            dir_okay=False,
            readable=True,
            help="Read the document contents from a file.",
        ),
    ] = None,
    text: Annotated[
        str | None,
        typer.Option("--text", "-t", help="Use this text as the document contents."),
    ] = None,
) -> None:
    """Store a document, overwriting any existing one.

    Contents come from --file, --text, or standard input.
    """
    if file is not None and text is not None:
        print_error("Use either --file or --text, not both.")
        raise typer.Exit(code=1)

    if file is not None:
        data = file.read_bytes()
    elif text is not None:
        data = text.encode("utf-8")
    else:
        data = sys.stdin.buffer.read()

    store = open_store(ctx)
    try:
        store.add_document(path, data)
    except LowDocDBError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Stored {path.strip()} ({len(data)} bytes)")


@app.command()
def get(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Document path inside the store.")],
) -> None:
    """Write a document's contents to standard output."""
    store = open_store(ctx)
    try:
        data = store.document(path)
    except LowDocDBError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if data is None:
        print_error(f"Document not found: {path.strip()}")
        raise typer.Exit(code=1)

    typer.echo(data, nl=False)


@app.command()
def exists(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Document or folder path.")],
) -> None:
    """Report whether a path is a document, a folder, or missing.

    Exits with code 1 when nothing exists at the path.
    """
    store = open_store(ctx)
    try:
        found = store.document_exists(path)
        is_folder = found and store.document_is_folder(path)
    except LowDocDBError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not found:
        print_info("missing")
        raise typer.Exit(code=1)
    print_info("folder" if is_folder else "document")


@app.command("ls")
def list_paths(
    ctx: typer.Context,
    folder: Annotated[str, typer.Argument(help="Folder to list (default: store root).")] = "",
    folders: Annotated[
        bool,
        typer.Option("--folders", help="Include subfolders."),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-F",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List the documents directly inside a folder."""
    store = open_store(ctx)
    try:
        paths = store.document_paths(folder, include_folders=folders, strict=True)
    except LowDocDBError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    _print_paths(store, paths, f"Contents of /{folder.strip()}", output_format)


@app.command()
def walk(
    ctx: typer.Context,
    folder: Annotated[
        str, typer.Argument(help="Folder to enumerate (default: store root).")
    ] = "",
    folders: Annotated[
        bool,
        typer.Option("--folders", help="Include subfolders."),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-F",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-l",
            min=1,
            help="Stop after this many paths.",
        ),
    ] = None,
) -> None:
    """Recursively enumerate every document below a folder."""
    store = open_store(ctx)
    paths: list[DocPath] = []
    try:
        for path in store.enumerator(folder, include_folders=folders, strict=True):
            paths.append(path)
            # Stop pulling once the limit is reached
            if limit is not None and len(paths) >= limit:
                break
    except LowDocDBError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    _print_paths(store, paths, f"Tree of /{folder.strip()}", output_format)


@app.command("rm")
def remove(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Document or folder path.")],
    recursive: Annotated[
        bool,
        typer.Option("--recursive", "-R", help="Delete folders with all their contents."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Delete a document, or a whole folder with --recursive."""
    store = open_store(ctx)
    try:
        if not store.document_exists(path):
            print_warning(f"Nothing to delete at {path.strip()}")
            return
        if not recursive:
            store.delete_document(path)
            print_success(f"Deleted {path.strip()}")
            return

        if store.document_is_folder(path) and not yes:
            confirmed = typer.confirm(
                f"Delete folder {path.strip()} and everything in it?",
                default=False,
            )
            if not confirmed:
                print_info("Aborted.")
                raise typer.Exit(code=0)
        store.delete_item(path)
    except LowDocDBError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Deleted {path.strip()}")


def _print_paths(
    store: DocumentStore,
    paths: list[DocPath],
    title: str,
    output_format: OutputFormat,
) -> None:
    """Print listed paths as a table or as JSON.

    Args:
        store: Store the paths belong to.
        paths: Paths to print.
        title: Table title.
        output_format: Output format.
    """
    rows = [(str(p), store.document_is_folder(p)) for p in paths]

    if output_format == OutputFormat.JSON:
        data = [
            {
                "path": path,
                "type": "folder" if is_folder else "document",
            }
            for path, is_folder in rows
        ]
        console.print_json(json.dumps(data))
        return

    if not rows:
        print_info("No documents found.")
        return

    table = create_paths_table(title)
    for path, is_folder in rows:
        table.add_row(*format_path_row(path, is_folder))
    console.print(table)
    console.print(f"\n[muted]{len(rows)} path(s)[/]")
