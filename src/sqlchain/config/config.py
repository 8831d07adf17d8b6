"""Load named connection profiles from connections.toml."""

import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .paths import resolve_config_path


def _read_profiles(config_file: Path) -> Dict[str, Any]:
    with open(config_file, "rb") as f:
        return tomllib.load(f)


def load_profile(
    profile: str,
    path: Optional[Union[str, Path]] = None
) -> Dict[str, Any]:
    """
    Load a connection profile.

    Args:
        profile: Name of the profile (a TOML table) to load
        path: Optional explicit path to connections.toml

    Returns:
        Dictionary of connection parameters for the profile

    Raises:
        FileNotFoundError: If connections.toml file is not found
        KeyError: If the profile doesn't exist in the file

    Example:
        >>> load_profile("dev")
        {'account': 'myaccount', 'user': 'myuser', ...}
    """
    config_file = resolve_config_path(path)

    if not config_file.exists():
        raise FileNotFoundError(
            f"Configuration file not found at {config_file}. " +
            "Create a connections.toml file or see connections.toml.example for template."
        )

    all_profiles = _read_profiles(config_file)

    if profile not in all_profiles:
        available = ", ".join(all_profiles.keys())
        raise KeyError(
            f"Profile '{profile}' not found in {config_file}. " +
            f"Available profiles: {available}"
        )

    return dict(all_profiles[profile])


def list_profiles(path: Optional[Union[str, Path]] = None) -> list[str]:
    """List profile names, or an empty list when there is no file"""
    try:
        config_file = resolve_config_path(path)
    except FileNotFoundError:
        return []

    if not config_file.exists():
        return []

    return list(_read_profiles(config_file).keys())
