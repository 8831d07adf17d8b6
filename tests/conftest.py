"""Pytest configuration and shared fixtures for integration tests."""

import sys
from typing import Any, Dict

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import pytest

from sqlchain.config import CONF_DIR


def _load_test_config() -> Dict[str, Any]:
    """
    Load the [test] section of test_config.toml from the configuration directory.

    Returns an empty dict when the file does not exist.
    """
    test_config_path = CONF_DIR / "test_config.toml"
    if not test_config_path.exists():
        return {}

    with open(test_config_path, "rb") as f:
        config = tomllib.load(f)

    return config.get("test", {})


@pytest.fixture(scope="session")
def test_config() -> Dict[str, Any]:
    return _load_test_config()


@pytest.fixture(scope="session")
def test_profile(test_config) -> str:
    """Profile to use for integration tests."""
    profile = test_config.get("profile")
    if not profile:
        pytest.skip(
            f"Integration profile not configured; add 'profile' to the [test] "
            f"section of {CONF_DIR / 'test_config.toml'}"
        )
    return profile


@pytest.fixture(scope="session")
def test_write_table(test_config) -> str:
    """Table name for write tests (will be created/dropped)."""
    return test_config.get("write_table", "SQLCHAIN_TEST_TABLE")
