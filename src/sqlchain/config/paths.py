"""Locate the sqlchain configuration directory and connections file"""

import os
from importlib.resources import files as importlib_files
from pathlib import Path
from typing import Optional, Union

CONFIG_ENV_VAR = "SQLCHAIN_CONFIG_DIR"
CONFIG_FILENAME = "connections.toml"


def _get_config_directory() -> Path:
    """
    Get the configuration directory.

    Priority order:
    1. SQLCHAIN_CONFIG_DIR environment variable
    2. ~/.sqlchain/ in the user's home directory
    """
    env_config_dir = os.getenv(CONFIG_ENV_VAR)
    if env_config_dir:
        return Path(env_config_dir)
    return Path.home() / ".sqlchain"


def _get_example_files_dir() -> Path:
    """Directory holding the example files shipped with the package"""
    return Path(str(importlib_files("sqlchain") / "_data"))


CONF_DIR = _get_config_directory()


def get_default_config_path() -> Path:
    """
    Get the path to connections.toml in the configuration directory.

    Raises:
        FileNotFoundError: If the file has not been created yet; the message
            points at the bundled example
    """
    config_path = _get_config_directory() / CONFIG_FILENAME

    if not config_path.exists():
        example_file = _get_example_files_dir() / f"{CONFIG_FILENAME}.example"
        raise FileNotFoundError(
            f"Configuration file '{CONFIG_FILENAME}' not found at: {config_path}\n\n"
            f"To create it:\n"
            f"1. Copy example: {example_file}\n"
            f"2. To: {config_path}\n"
            f"3. Edit with your connection details\n\n"
            f"Configuration directory priority:\n"
            f"  1. {CONFIG_ENV_VAR} environment variable (if set)\n"
            f"  2. ~/.sqlchain/\n"
        )

    return config_path


def resolve_config_path(path: Optional[Union[str, Path]] = None) -> Path:
    """Use the explicit path when given, otherwise the default location"""
    if path:
        return Path(path)
    return get_default_config_path()
