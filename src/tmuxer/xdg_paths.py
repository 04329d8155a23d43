"""Config file lookup for tmuxer."""

import os
from pathlib import Path

from xdg_base_dirs import xdg_config_home

APP_NAME = "tmuxer"
CONFIG_ENV_VAR = "TMUXER_CONFIG"
CONFIG_FILE_NAMES = ("config.yaml", "config.yml")


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    return xdg_config_home() / APP_NAME


def get_config_file_path() -> Path:
    """Get the user-level config.yaml file path."""
    return get_config_dir() / "config.yaml"


def find_config_file(search_dir: Path | None = None) -> Path:
    """Locate the layout config file.

    Lookup order: ``$TMUXER_CONFIG``, ``config.yaml``/``config.yml`` in
    ``search_dir``, then the XDG config file. When nothing exists the local
    ``config.yaml`` is returned so the caller reports it as missing.

    Args:
        search_dir: Directory searched for a local config. Defaults to cwd.

    Returns:
        Path of the config file to load.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()

    base = search_dir or Path.cwd()
    candidates = [base / name for name in CONFIG_FILE_NAMES]
    candidates.append(get_config_file_path())
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return candidates[0]
