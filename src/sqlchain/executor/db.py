"""Run rendered statements against the database.

``DB`` is the thin boundary between rendered chains and the driver: it takes
a statement using ``$n`` placeholders plus the matching argument list, hands
both to the driver and wraps whatever comes back.
"""

import logging
from typing import Any, Iterator, Optional, Sequence, Union

import pandas as pd
from snowflake.connector.errors import Error as DriverError
from snowflake.connector.pandas_tools import write_pandas

from sqlchain.chain import ExpressionChain
from sqlchain.context import ConnectionContext
from sqlchain.errors import ExecutionError

from .binds import DRIVER_PREFIX, to_driver_binds
from .result import QueryResult

logger = logging.getLogger(__name__)


class DB:
    """Execute statements and manage transactions on one session.

    Every DB built on the same ``ConnectionContext`` shares its session, so
    statements issued through any of them while a transaction is open run
    inside that transaction. ``clone()`` opens a separate session.

    Example:
        >>> db = DB("dev")
        >>> chain = ExpressionChain().select("id").table("users").where("id > ?", 10)
        >>> rows = db.fetch(chain).fetch_all()

        >>> tx = db.begin_transaction()
        >>> tx.run(ExpressionChain().delete().table("users").where("id = ?", 3))
        >>> tx.commit_transaction()
    """

    def __init__(self, context: Union[str, ConnectionContext], **overrides: Any):
        """Initialize with a profile name or a ConnectionContext instance"""
        if isinstance(context, str):
            self.context = ConnectionContext(profile=context, **overrides)
            self._owns_context = True
        else:
            self.context = context
            self._owns_context = False
        self._in_transaction = False

    def clone(self) -> "DB":
        """A new DB on its own session from the same profile, outside any transaction.

        The clone owns its session; close it with ``close()`` or a ``with`` block.

        Raises:
            ValueError: If this DB's context wraps a caller-supplied connection
        """
        clone = DB(self.context.fork())
        clone._owns_context = True
        return clone

    def close(self) -> None:
        """Close the session if this DB created it"""
        if self._owns_context:
            self.context.close()

    def __enter__(self) -> "DB":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _execute(
        self,
        statement: str,
        args: Optional[Sequence[Any]],
        driver_binds: bool = False,
    ) -> Any:
        driver_sql = statement if driver_binds else to_driver_binds(statement)
        logger.debug(f"Executing with {len(args or [])} args: {driver_sql}")
        try:
            if args:
                return self.context.cursor.execute(driver_sql, list(args))
            return self.context.cursor.execute(driver_sql)
        except DriverError as err:
            raise ExecutionError(f"querying database: {err}", statement) from err

    def query(self, statement: str, args: Optional[Sequence[Any]] = None) -> QueryResult:
        """Execute a statement that returns rows.

        ``$n`` placeholders are rewritten to the driver's ``:n`` binds. Use
        ``fetch()`` for chains whose text contains ``$n`` of its own, such as
        stage column references.
        """
        return QueryResult(_cursor=self._execute(statement, args))

    def query_iter(
        self,
        statement: str,
        args: Optional[Sequence[Any]] = None,
        fields: Optional[Sequence[str]] = None,
    ) -> Iterator[dict[str, Any]]:
        """Execute now and return an iterator over rows as dicts.

        Keys are ``fields`` if given, otherwise the lowercase column names.
        The cursor stays busy until the iterator is exhausted.
        """
        return self.query(statement, args).iter_dicts(fields)

    def raw(self, statement: str, args: Optional[Sequence[Any]] = None) -> Optional[tuple[Any, ...]]:
        """Execute a statement and return its first row, or None"""
        return self.query(statement, args).fetch_one()

    def exec(self, statement: str, args: Optional[Sequence[Any]] = None) -> int:
        """Execute a statement that modifies data and return the affected row count"""
        return QueryResult(_cursor=self._execute(statement, args)).rowcount

    def fetch(self, chain: ExpressionChain) -> QueryResult:
        """Render a chain straight to driver binds and run it as a query"""
        statement, args = chain.render(prefix=DRIVER_PREFIX)
        return QueryResult(_cursor=self._execute(statement, args, driver_binds=True))

    def run(self, chain: ExpressionChain) -> int:
        """Render a chain straight to driver binds and run it as a data modifying statement"""
        statement, args = chain.render(prefix=DRIVER_PREFIX)
        return QueryResult(_cursor=self._execute(statement, args, driver_binds=True)).rowcount

    # Transactions

    def begin_transaction(self) -> "DB":
        """Start a transaction on this session and return a DB that tracks it.

        The returned DB shares this DB's session, so statements run through
        either one are part of the transaction until it is committed or
        rolled back. Returns self when a transaction is already in progress.
        """
        if self._in_transaction:
            return self
        self._execute("BEGIN", None, driver_binds=True)
        logger.info("Transaction started")
        tx = DB(self.context)
        tx._in_transaction = True
        return tx

    def is_transaction(self) -> bool:
        return self._in_transaction

    def commit_transaction(self) -> None:
        """Commit the transaction in progress; no-op outside one"""
        if not self._in_transaction:
            return
        try:
            self.context.connection.commit()
        except DriverError as err:
            raise ExecutionError(f"committing transaction: {err}") from err
        self._in_transaction = False
        logger.info("Transaction committed")

    def rollback_transaction(self) -> None:
        """Roll back the transaction in progress; no-op outside one"""
        if not self._in_transaction:
            return
        try:
            self.context.connection.rollback()
        except DriverError as err:
            raise ExecutionError(f"rolling back transaction: {err}") from err
        self._in_transaction = False
        logger.info("Transaction rolled back")

    def set(self, setting: str) -> None:
        """Apply a session parameter, e.g. ``"QUERY_TAG = 'nightly'"``.

        Only takes effect while a transaction is in progress.
        """
        if not self._in_transaction:
            return
        self._execute(f"ALTER SESSION SET {setting}", None, driver_binds=True)

    def bulk_insert(
        self,
        table_name: str,
        columns: Sequence[str],
        values: Sequence[Sequence[Any]],
    ) -> int:
        """Load many rows into an existing table through a staged upload.

        Args:
            table_name: Existing table to append to
            columns: Column names, matching the order of each row in values
            values: Rows to insert

        Returns:
            Number of rows written

        Raises:
            ExecutionError: If the driver reports a failed load
        """
        df = pd.DataFrame(list(values), columns=list(columns))
        try:
            success, _, nrows, _ = write_pandas(
                self.context.connection,
                df,
                table_name,
                auto_create_table=False,
                quote_identifiers=False,
                use_logical_type=True,
            )
        except DriverError as err:
            raise ExecutionError(f"bulk inserting into {table_name}: {err}") from err
        if not success:
            raise ExecutionError(f"bulk insert into {table_name} did not complete")
        logger.info(f"Bulk inserted {nrows} rows into {table_name}")
        return nrows

    def __repr__(self) -> str:
        return f"DB(context={self.context!r}, transaction={self._in_transaction})"
