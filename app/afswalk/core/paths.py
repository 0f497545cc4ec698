"""XDG-compliant path management for afswalk.

Only configuration is persisted; afswalk keeps no state or cache
between runs.

XDG defaults:
- Config: ~/.config/afswalk/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "afswalk"


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
        Path to ~/.config/afswalk/ (or XDG_CONFIG_HOME/afswalk/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the default walk configuration file path.

    Returns:
        Path to ~/.config/afswalk/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Get the user theme override file path.

    Returns:
        Path to ~/.config/afswalk/theme.toml.
    """
    return get_config_dir() / "theme.toml"
