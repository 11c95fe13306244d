from __future__ import annotations

import re
from dataclasses import dataclass

from .topology import square_to_str, str_to_square


_MOVE_RE = re.compile(r"^([a-p][1-4])([a-p][1-4])$")


@dataclass(frozen=True)
class Move:
    """Engine-internal move representation.

    Attributes:
        from_sq (int): Origin square index (0-based).
        to_sq (int): Destination square index (0-based).
    """

    from_sq: int
    to_sq: int

    def to_str(self) -> str:
        """Serialize the move as origin and destination squares.

        Returns:
            str: Move encoded like ``"b1c1"``.
        """
        return square_to_str(self.from_sq) + square_to_str(self.to_sq)

    def __str__(self) -> str:
        return self.to_str()


def parse_move(text: str) -> Move:
    """Parse a move string such as ``"b1c1"``.

    Raises:
        ValueError: If the string does not name two valid squares.
    """
    m = _MOVE_RE.match(text.strip().lower()) if isinstance(text, str) else None
    if m is None:
        raise ValueError(f"invalid move: {text!r}")
    return Move(str_to_square(m.group(1)), str_to_square(m.group(2)))
