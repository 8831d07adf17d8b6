"""Execute rendered statements through the database driver"""

from sqlchain.executor.binds import DRIVER_PREFIX, to_driver_binds
from sqlchain.executor.db import DB
from sqlchain.executor.result import QueryResult

__all__ = [
    "DB",
    "QueryResult",
    "to_driver_binds",
    "DRIVER_PREFIX",
]
