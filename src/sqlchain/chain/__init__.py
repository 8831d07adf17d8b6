"""Expression chain builder and renderer"""

from sqlchain.chain.atom import QueryAtom
from sqlchain.chain.chain import ExpressionChain, Operation
from sqlchain.chain.placeholders import MARKER, count_markers, escape_args

__all__ = [
    "ExpressionChain",
    "Operation",
    "QueryAtom",
    "MARKER",
    "count_markers",
    "escape_args",
]
