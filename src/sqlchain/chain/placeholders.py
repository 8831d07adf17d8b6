"""Positional placeholder handling for rendered statements.

Fragments handed to the chain use a single unnumbered marker (``?``). The
final render pass walks the assembled statement left to right and numbers
each marker as ``$1``, ``$2``, ... so the argument list lines up with the
order the markers appear in the text, not the order the fragments were added.
"""

from typing import Any, Sequence

from sqlchain.errors import PlaceholderMismatchError

MARKER = "?"
PREFIX = "$"


def count_markers(text: str) -> int:
    """Count the unnumbered placeholders in a fragment"""
    return text.count(MARKER)


def escape_args(
    query: str,
    args: Sequence[Any],
    prefix: str = PREFIX,
) -> tuple[str, list[Any]]:
    """Number every marker in query and check it against args.

    Args:
        query: Statement text using ``?`` markers
        args: Argument values in the order their markers appear
        prefix: Written before each number, ``$`` by default or ``:`` for
            drivers using numeric binds

    Returns:
        Tuple of (numbered statement, list of args)

    Raises:
        PlaceholderMismatchError: If the marker count differs from len(args)

    Example:
        >>> escape_args("a = ? AND b = ?", [1, 2])
        ('a = $1 AND b = $2', [1, 2])
    """
    # TODO: support an escape for literal question marks (e.g. ``??``)
    pieces = query.split(MARKER)
    numbered = [pieces[0]]
    for position, piece in enumerate(pieces[1:], start=1):
        numbered.append(f"{prefix}{position}")
        numbered.append(piece)

    found = len(pieces) - 1
    if found != len(args):
        raise PlaceholderMismatchError("".join(numbered), found, len(args))
    return "".join(numbered), list(args)
