"""Snowflake connection management with profile support."""

import logging
from typing import Any, Literal, Optional, Tuple

import snowflake.connector
from snowflake.connector import SnowflakeConnection
from snowflake.connector.cursor import SnowflakeCursor

from .base import BaseConnector

logger = logging.getLogger(__name__)

# Rendered chains use $n placeholders, which map onto the driver's :n binds
DEFAULT_PARAMSTYLE = "numeric"


class SnowflakeConnector(BaseConnector):
    """
    Connection manager built from a connections.toml profile.

    Args:
        profile: Name of the profile to load from connections.toml
        **kwargs: Connection parameters overriding the profile

    Example:
        >>> with SnowflakeConnector(profile="dev") as (conn, cur):
        ...     cur.execute("SELECT CURRENT_VERSION()")
        ...     print(cur.fetchone())
    """

    def __init__(self, profile: str, **kwargs: Any) -> None:
        super().__init__(profile, **kwargs)
        self._cfg.setdefault("paramstyle", DEFAULT_PARAMSTYLE)

        self._connection: Optional[SnowflakeConnection] = None
        self._cursor: Optional[SnowflakeCursor] = None

    def connect(self) -> Tuple[SnowflakeConnection, SnowflakeCursor]:
        """
        Open the connection if needed.

        Returns:
            Tuple of (connection, cursor) objects
        """
        if self._connection is None:
            logger.info(f"Connecting with profile '{self._profile}'")
            self._connection = snowflake.connector.connect(**self.connect_params())  # type: ignore[misc]
            self._cursor = self._connection.cursor()

        assert self._connection is not None
        assert self._cursor is not None
        return self._connection, self._cursor

    def close(self) -> None:
        """Close the cursor and connection, releasing resources."""
        if self._cursor:
            self._cursor.close()
            self._cursor = None
        if self._connection:
            self._connection.close()
            self._connection = None

    def __enter__(self) -> Tuple[SnowflakeConnection, SnowflakeCursor]:
        return self.connect()

    def __exit__(
        self,
        exc_type: Any,
        exc_val: Any,
        exc_tb: Any
    ) -> Literal[False]:
        """Close the connection and let any exception propagate."""
        self.close()
        return False

    def __repr__(self) -> str:
        status = "connected" if self._connection else "not connected"
        return f"SnowflakeConnector(profile='{self._profile}', {status})"
