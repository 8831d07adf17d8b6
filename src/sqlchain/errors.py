"""Exceptions raised while building, rendering and executing chains"""

from typing import Optional


class ChainError(ValueError):
    """Base class for chain construction and render failures"""


class IncompleteChainError(ChainError):
    """Raised when a chain is rendered without an operation or a table"""


class PlaceholderMismatchError(ChainError):
    """Raised when the number of placeholders and arguments differ"""

    def __init__(self, query: str, expected: int, got: int):
        self.query = query
        self.expected = expected
        self.got = got
        super().__init__(
            f"the query has {expected} args but {got} were passed: {query!r}"
        )


class ExecutionError(RuntimeError):
    """Raised when the database driver fails to run a statement"""

    def __init__(self, message: str, statement: Optional[str] = None):
        self.statement = statement
        super().__init__(message)
