"""Statement fragments accumulated by an expression chain"""

from dataclasses import dataclass, field
from typing import Any

from sqlchain.errors import PlaceholderMismatchError

from .placeholders import count_markers


@dataclass(frozen=True)
class QueryAtom:
    """A piece of statement text and the values for its markers.

    Attributes:
        text: Raw SQL using ``?`` for every placeholder
        args: Values for those placeholders, left to right
    """
    text: str
    args: tuple[Any, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        expected = count_markers(self.text)
        if expected != len(self.args):
            raise PlaceholderMismatchError(self.text, expected, len(self.args))
