"""Driver connections built from configuration profiles."""

from .base import BaseConnector
from .connection import SnowflakeConnector, DEFAULT_PARAMSTYLE

__all__ = [
    "BaseConnector",
    "SnowflakeConnector",
    "DEFAULT_PARAMSTYLE",
]
