"""Walk configuration and settings.

This module provides the configuration model and loader for afswalk.
Every setting has a default, so the configuration file is optional;
command-line flags override whatever is loaded here.

Configuration is stored in ~/.config/afswalk/config.toml
"""

import logging
import tomllib
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from afswalk.core.paths import get_config_path

logger = logging.getLogger(__name__)


class WalkConfig(BaseModel):
    """Configuration for one traversal run.

    Attributes:
        root: Directory the traversal starts from.
        fs_command: Name or path of the OpenAFS ``fs`` binary.
        this_cell_file: Client configuration file naming the local cell.
        timeout_seconds: Per-call timeout for ``fs`` invocations.
        mounts: Report mount points by default.
        acls: Report access control lists by default.
    """

    model_config = ConfigDict(extra="forbid")

    root: Annotated[
        str,
        Field(description="Traversal root directory"),
    ] = "/afs"
    fs_command: Annotated[
        str,
        Field(min_length=1, description="OpenAFS fs binary"),
    ] = "fs"
    this_cell_file: Annotated[
        str,
        Field(description="Fallback file naming the workstation cell"),
    ] = "/usr/vice/etc/ThisCell"
    timeout_seconds: Annotated[
        float,
        Field(ge=1, le=3600, description="Timeout per fs call (1-3600)"),
    ] = 120.0
    mounts: Annotated[
        bool,
        Field(description="Report mount points"),
    ] = True
    acls: Annotated[
        bool,
        Field(description="Report access control lists"),
    ] = False

    @field_validator("root")
    @classmethod
    def validate_root(cls, v: str) -> str:
        """Require an absolute root and drop trailing slashes."""
        if not v.startswith("/"):
            msg = f"root must be an absolute path, got '{v}'"
            raise ValueError(msg)
        return v.rstrip("/") or "/"


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when an explicitly requested config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> WalkConfig:
    """Load walk configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config
            path and falls back to built-in defaults when it is absent.

    Returns:
        Validated WalkConfig object.

    Raises:
        ConfigNotFoundError: If an explicit path doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        if path is not None:
            raise ConfigNotFoundError(f"Config file not found: {config_path}")
        logger.debug("No config file at %s, using defaults", config_path)
        return WalkConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return WalkConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e
