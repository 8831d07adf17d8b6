"""Translate rendered placeholders into the driver's bind syntax"""

import re

# Connections use the driver's numeric paramstyle
DRIVER_PREFIX = ":"

_POSITIONAL = re.compile(r"\$(\d+)")


def to_driver_binds(statement: str) -> str:
    """Rewrite ``$n`` placeholders in a hand-written statement as ``:n`` binds.

    Every ``$`` followed by digits is rewritten, including positional column
    references. Chains avoid this by rendering with ``DRIVER_PREFIX``.

    Example:
        >>> to_driver_binds("SELECT a FROM t WHERE a > $1 AND b = $2")
        'SELECT a FROM t WHERE a > :1 AND b = :2'
    """
    return _POSITIONAL.sub(r":\1", statement)
