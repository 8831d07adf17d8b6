"""Fluent builder that accumulates statement fragments and renders them.

The chain records what the caller asked for in independent slots and only
decides clause order when ``render()`` is called, so the order of the builder
calls never changes the output. The one exception is repeated ``where()`` and
``join()`` calls, which keep the order they were made in.

Example:
    >>> chain = (
    ...     ExpressionChain()
    ...     .select("id", "name")
    ...     .table("users")
    ...     .where("age > ?", 21)
    ...     .join("teams ON teams.id = users.team_id AND teams.name = ?", "core")
    ... )
    >>> chain.render()
    ('SELECT id, name FROM users JOIN teams ON teams.id = users.team_id AND teams.name = $1 WHERE age > $2', ['core', 21])
"""

import logging
import numbers
import threading
from enum import Enum
from typing import Any, Mapping, Optional

from sqlchain.errors import ChainError, IncompleteChainError

from .atom import QueryAtom
from .placeholders import MARKER, PREFIX, escape_args

logger = logging.getLogger(__name__)


class Operation(Enum):
    """Main statement kinds a chain can render"""
    SELECT = "SELECT"
    INSERT = "INSERT"
    DELETE = "DELETE"


def _check_count(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 0:
        raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
    return int(value)


class ExpressionChain:
    """Accumulate the parts of a statement and render them in a fixed order.

    Every mutating method returns the chain itself so calls can be chained.
    Mutators and ``render()`` share one lock per instance, which keeps each
    individual call atomic; making sure the operation and table are both set
    before rendering is still up to the caller.

    Clause order on render:
        operation, FROM, JOIN..., WHERE ... AND ..., GROUP BY, ORDER BY,
        LIMIT, OFFSET
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._operation: Optional[Operation] = None
        self._columns: tuple[str, ...] = ()
        self._values: dict[str, Any] = {}
        self._table: Optional[str] = None
        self._joins: list[QueryAtom] = []
        self._conditions: list[QueryAtom] = []
        self._group_by: Optional[str] = None
        self._order_by: Optional[str] = None
        self._limit: Optional[int] = None
        self._offset: Optional[int] = None

    # Main operation (last call wins)

    def select(self, *columns: str) -> "ExpressionChain":
        """Make this a SELECT of the given columns (``*`` when none)"""
        with self._lock:
            self._set_operation(Operation.SELECT, columns=columns)
        return self

    def delete(self, *columns: str) -> "ExpressionChain":
        """Make this a DELETE.

        Columns are accepted for symmetry with ``select()`` but the clause
        always renders as ``DELETE *``.
        """
        with self._lock:
            self._set_operation(Operation.DELETE, columns=columns)
        return self

    def insert(self, values: Mapping[str, Any]) -> "ExpressionChain":
        """Make this an INSERT of a column to value mapping.

        Columns are rendered sorted by name. The table name is bound as the
        first argument instead of being written into the statement.
        """
        with self._lock:
            self._set_operation(Operation.INSERT, values=dict(values))
        return self

    def _set_operation(
        self,
        operation: Operation,
        columns: tuple[str, ...] = (),
        values: Optional[dict[str, Any]] = None,
    ) -> None:
        self._operation = operation
        self._columns = tuple(columns)
        self._values = values or {}

    # Single-valued slots

    def table(self, name: str) -> "ExpressionChain":
        """Set the table the statement runs against"""
        with self._lock:
            self._table = name
        return self

    def order_by(self, expression: str) -> "ExpressionChain":
        """Set the ORDER BY expression"""
        with self._lock:
            self._order_by = expression
        return self

    def group_by(self, expression: str) -> "ExpressionChain":
        """Set the GROUP BY expression"""
        with self._lock:
            self._group_by = expression
        return self

    def limit(self, count: int) -> "ExpressionChain":
        """Set the row limit, rendered inline"""
        count = _check_count("limit", count)
        with self._lock:
            self._limit = count
        return self

    def offset(self, count: int) -> "ExpressionChain":
        """Set the row offset, rendered inline.

        An offset without a limit is rendered as given; most backends ignore it.
        """
        count = _check_count("offset", count)
        with self._lock:
            self._offset = count
        return self

    # Accumulating slots (call order preserved)

    def where(self, fragment: str, *args: Any) -> "ExpressionChain":
        """Add a predicate; predicates are joined with AND.

        Raises:
            PlaceholderMismatchError: If the ``?`` count differs from len(args)
        """
        atom = QueryAtom(fragment, args)
        with self._lock:
            self._conditions.append(atom)
        return self

    def join(self, fragment: str, *args: Any) -> "ExpressionChain":
        """Add a JOIN fragment, e.g. ``"other ON other.id = t.id AND x = ?"``.

        Raises:
            PlaceholderMismatchError: If the ``?`` count differs from len(args)
        """
        atom = QueryAtom(fragment, args)
        with self._lock:
            self._joins.append(atom)
        return self

    # Rendering

    def render(self, prefix: str = PREFIX) -> tuple[str, list[Any]]:
        """Render the statement text and its ordered argument list.

        Rendering does not modify the chain, so it can be called repeatedly
        and will produce the same output until the chain changes.

        Args:
            prefix: Placeholder prefix, ``$`` by default; pass ``:`` to render
                numeric driver binds directly

        Returns:
            Tuple of (statement using ``<prefix>n`` placeholders, argument list)

        Raises:
            IncompleteChainError: If no operation or no table was set
            ChainError: If an INSERT has no values
        """
        with self._lock:
            atoms = self._ordered_atoms()

        query = " ".join(atom.text for atom in atoms)
        args = [arg for atom in atoms for arg in atom.args]
        statement, args = escape_args(query, args, prefix)
        logger.debug(f"Rendered statement with {len(args)} args: {statement}")
        return statement, args

    def _ordered_atoms(self) -> list[QueryAtom]:
        if self._operation is None:
            raise IncompleteChainError("chain incomplete: no operation set")
        if self._table is None:
            raise IncompleteChainError("chain incomplete: no table set")

        atoms = [self._operation_atom()]
        if self._operation is not Operation.INSERT:
            atoms.append(QueryAtom(f"FROM {self._table}"))

        for join in self._joins:
            atoms.append(QueryAtom(f"JOIN {join.text}", join.args))

        if self._conditions:
            atoms.append(QueryAtom(
                "WHERE " + " AND ".join(c.text for c in self._conditions),
                tuple(arg for c in self._conditions for arg in c.args),
            ))

        if self._group_by is not None:
            atoms.append(QueryAtom(f"GROUP BY {self._group_by}"))
        if self._order_by is not None:
            atoms.append(QueryAtom(f"ORDER BY {self._order_by}"))
        if self._limit is not None:
            atoms.append(QueryAtom(f"LIMIT {self._limit}"))
        if self._offset is not None:
            atoms.append(QueryAtom(f"OFFSET {self._offset}"))
        return atoms

    def _operation_atom(self) -> QueryAtom:
        if self._operation is Operation.SELECT:
            columns = ", ".join(self._columns) if self._columns else "*"
            return QueryAtom(f"SELECT {columns}")

        if self._operation is Operation.DELETE:
            return QueryAtom("DELETE *")

        if not self._values:
            raise ChainError("insert requires at least one column value")
        names = sorted(self._values)
        markers = ", ".join(MARKER for _ in names)
        return QueryAtom(
            f"INSERT INTO {MARKER} ({', '.join(names)}) VALUES ({markers})",
            (self._table, *(self._values[name] for name in names)),
        )

    def __repr__(self) -> str:
        operation = self._operation.value if self._operation else None
        return (
            f"ExpressionChain(operation={operation}, table={self._table!r}, "
            f"joins={len(self._joins)}, conditions={len(self._conditions)})"
        )
