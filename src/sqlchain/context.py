"""Database sessions shared by executors.

A ``ConnectionContext`` is one database session. Everything executed through
it, by any number of ``DB`` objects, runs on that session and therefore
inside whatever transaction the session has open. ``fork()`` gives a second,
independent session built from the same profile.
"""

import logging
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from sqlchain.connection import SnowflakeConnector

logger = logging.getLogger(__name__)


class ConnectionContext:
    """One session, opened lazily from a profile or wrapped around a live connection.

    Provide either ``profile`` (the session is opened on first use and owned
    by the context) or ``connection`` (the caller keeps ownership and closes
    it; such a context cannot be forked).

    Example:
        >>> with ConnectionContext(profile="dev", warehouse="ETL_WH") as ctx:
        ...     DB(ctx).query("SELECT 1")
        ...     with ctx.fork() as other:
        ...         DB(other).exec("INSERT INTO audit (msg) VALUES ($1)", ["seen"])
    """

    def __init__(
        self,
        profile: Optional[str] = None,
        connection: Optional[Any] = None,
        cursor: Optional[Any] = None,
        **overrides: Any,
    ):
        if (profile is None) == (connection is None):
            raise ValueError(
                "ConnectionContext requires exactly one of 'profile' or 'connection'"
            )
        if cursor is not None and connection is None:
            raise ValueError("ConnectionContext: 'cursor' needs the 'connection' it belongs to")

        self._profile = profile
        self._overrides = overrides
        self._connection = connection
        self._cursor = cursor
        self._connector: Optional["SnowflakeConnector"] = None

    @property
    def profile(self) -> Optional[str]:
        return self._profile

    @property
    def owns_connection(self) -> bool:
        """True when the context opened (and will close) its own session"""
        return self._profile is not None

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    def _open(self) -> None:
        from sqlchain.connection import SnowflakeConnector

        connector = SnowflakeConnector(profile=self._profile, **self._overrides)
        self._connection, self._cursor = connector.connect()
        self._connector = connector
        logger.debug(f"Opened session for profile '{self._profile}'")

    @property
    def connection(self) -> Any:
        """The session's connection, opened on first access for profile contexts"""
        if self._connection is None:
            self._open()
        return self._connection

    @property
    def cursor(self) -> Any:
        """The session's cursor, created on first access"""
        if self._cursor is None:
            self._cursor = self.connection.cursor()
        return self._cursor

    def fork(self) -> "ConnectionContext":
        """A new, unopened context for a separate session with the same settings.

        Raises:
            ValueError: If this context wraps a caller-supplied connection,
                which has no profile to open another session from
        """
        if self._profile is None:
            raise ValueError(
                "Cannot fork a ConnectionContext built from an existing connection; "
                "create it from a profile to get independent sessions"
            )
        return ConnectionContext(profile=self._profile, **self._overrides)

    def close(self) -> None:
        """Close the session if this context opened it; safe to call repeatedly"""
        if self._connector is None:
            return
        self._connector.close()
        self._connector = None
        self._connection = None
        self._cursor = None
        logger.debug(f"Closed session for profile '{self._profile}'")

    def __enter__(self) -> "ConnectionContext":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "open" if self.is_open else "closed"
        if self._profile is None:
            return f"ConnectionContext(connection=<external>, {state})"
        return f"ConnectionContext(profile='{self._profile}', {state})"
