"""Utility modules for lowdocdb.

This module exports commonly used utility functions.
"""

from lowdocdb.utils.formatting import (
    console,
    create_paths_table,
    err_console,
    format_path_row,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_paths_table",
    "err_console",
    "format_path_row",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
