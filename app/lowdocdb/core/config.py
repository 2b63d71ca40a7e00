"""Store configuration and settings.

This module provides the configuration models for a document store and
the I/O functions for the settings file used by the command line tool.

Configuration is stored in ~/.config/lowdocdb/config.toml:

    root = "/srv/documents"

    [store]
    max_depth = 8
"""

import logging
import os
import sys
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from lowdocdb.core.paths import get_config_path, get_default_store_root

logger = logging.getLogger(__name__)

# Effectively unlimited nesting
MAX_DEPTH_UNLIMITED = sys.maxsize


class StoreConfig(BaseModel):
    """Configuration for a single document store.

    Attributes:
        max_depth: Maximum number of intermediate folders allowed when
            adding a document. Defaults to unlimited.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    max_depth: Annotated[
        int,
        Field(ge=0, description="Maximum folder nesting for new documents"),
    ] = MAX_DEPTH_UNLIMITED

    @property
    def is_depth_limited(self) -> bool:
        """Check if a finite depth limit is configured."""
        return self.max_depth != MAX_DEPTH_UNLIMITED


class AppConfig(BaseModel):
    """Settings file contents for the command line tool.

    Attributes:
        root: Store root folder. If None, uses the default data location.
        store: Store configuration.
    """

    model_config = ConfigDict(extra="forbid")

    root: Annotated[
        Path | None,
        Field(description="Store root folder (None = default data location)"),
    ] = None
    store: StoreConfig = Field(default_factory=StoreConfig)

    @property
    def effective_root(self) -> Path:
        """Get the store root to open.

        Returns:
            The configured root with ~ expanded, or the default store root.
        """
        if self.root is not None:
            return self.root.expanduser()
        return get_default_store_root()


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses default config path.

    Returns:
        Validated AppConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> AppConfig:
    """Load configuration, falling back to defaults if no file exists.

    Args:
        path: Path to the config file. If None, uses default config path.

    Returns:
        Loaded AppConfig, or a default AppConfig when the file is missing.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file at %s, using defaults", path or get_config_path())
        return AppConfig()


def save_config(config: AppConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The AppConfig object to save.
        path: Path to save the config. If None, uses default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    # Ensure parent directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        # os.replace() is atomic on POSIX
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        # Cleanup temp file on failure
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: AppConfig) -> dict[str, object]:
    """Convert AppConfig to a dictionary for TOML serialization.

    Only includes non-default values to keep the file clean.

    Args:
        config: The AppConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, object] = {}

    if config.root is not None:
        result["root"] = str(config.root)

    if config.store.is_depth_limited:
        result["store"] = {"max_depth": config.store.max_depth}

    return result
