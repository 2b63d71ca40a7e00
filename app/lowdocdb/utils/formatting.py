"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

# Semantic styles shared by every command
THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "header": "bold #69B9A1",
        "border": "#29526d",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "bold #f53263",
        "info": "#0ec1c8",
        "folder": "bold #0e8ac8",
        "document": "#ffffff",
    }
)


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances
console = Console(theme=THEME, color_system=_detect_color_system())
err_console = Console(theme=THEME, stderr=True, color_system=_detect_color_system())


def create_paths_table(title: str) -> Table:
    """Create a pre-configured table for displaying document paths.

    Args:
        title: Table title.

    Returns:
        Rich Table with Type and Path columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="header",
        border_style="border",
        row_styles=["", "on grey7"],  # Zebra striping for readability
    )
    table.add_column("Type", width=8)
    table.add_column("Path", no_wrap=True)
    return table


def format_path_row(path: str, is_folder: bool) -> tuple[str, str]:
    """Format a document path as a table row.

    Args:
        path: Store-relative path.
        is_folder: True if the path is a folder.

    Returns:
        Tuple of (type, path) with Rich markup.
    """
    if is_folder:
        return ("[folder]folder[/]", f"[folder]{escape(path)}/[/]")
    return ("[muted]document[/]", f"[document]{escape(path)}[/]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]")
