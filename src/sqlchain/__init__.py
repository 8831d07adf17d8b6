"""
sqlchain - fluent SQL statement chains

Code is organized in layers
- chain/ builds statement text and positional arguments, no I/O
- config/ and connection/ load profiles and open driver connections
- executor/ runs rendered statements and wraps their results
"""

from sqlchain.chain import ExpressionChain, QueryAtom, escape_args
from sqlchain.errors import (
    ChainError,
    IncompleteChainError,
    PlaceholderMismatchError,
    ExecutionError,
)

from sqlchain.config import load_profile, list_profiles
from sqlchain.connection import SnowflakeConnector
from sqlchain.context import ConnectionContext
from sqlchain.executor import DB, QueryResult

__version__ = "0.1.0"
__all__ = [
    # Chain
    "ExpressionChain",
    "QueryAtom",
    "escape_args",
    # Errors
    "ChainError",
    "IncompleteChainError",
    "PlaceholderMismatchError",
    "ExecutionError",
    # Configuration & connection
    "load_profile",
    "list_profiles",
    "SnowflakeConnector",
    "ConnectionContext",
    # Execution
    "DB",
    "QueryResult",
]
