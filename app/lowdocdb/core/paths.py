"""XDG-compliant path management for lowdocdb.

This module provides the standard locations used by the command line
tool for its configuration file and its default document store.

XDG defaults:
- Config: ~/.config/lowdocdb/
- Data: ~/.local/share/lowdocdb/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "lowdocdb"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/lowdocdb/ (or XDG_CONFIG_HOME/lowdocdb/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_data_dir() -> Path:
    """Get the data directory path.

    Returns:
        Path to ~/.local/share/lowdocdb/ (or XDG_DATA_HOME/lowdocdb/).
    """
    return _get_xdg_dir("XDG_DATA_HOME", ".local/share")


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to ~/.config/lowdocdb/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_default_store_root() -> Path:
    """Get the root folder used when no store root is configured.

    Returns:
        Path to ~/.local/share/lowdocdb/store.
    """
    return get_data_dir() / "store"
