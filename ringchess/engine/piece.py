from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Color(str, Enum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def symbol(self) -> str:
        return "w" if self is Color.WHITE else "b"


class PieceType(str, Enum):
    PAWN = "pawn"
    ROOK = "rook"
    KNIGHT = "knight"
    BISHOP = "bishop"
    QUEEN = "queen"
    KING = "king"


COLORS = (Color.WHITE, Color.BLACK)
PIECE_TYPES = tuple(PieceType)

TYPE_TO_CHAR = {
    PieceType.PAWN: "p",
    PieceType.ROOK: "r",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
CHAR_TO_TYPE = {v: k for k, v in TYPE_TO_CHAR.items()}


@dataclass(frozen=True)
class Piece:
    """A colored piece. Position is implied by where the piece is stored."""

    color: Color
    type: PieceType

    @property
    def symbol(self) -> str:
        ch = TYPE_TO_CHAR[self.type]
        return ch.upper() if self.color is Color.WHITE else ch


def create_piece(color: Union[Color, str], piece_type: Union[PieceType, str]) -> Piece:
    """Build a piece from enum members or their string values.

    Raises:
        ValueError: If ``color`` or ``piece_type`` is not recognized.
    """
    try:
        c = Color(color)
    except ValueError as e:
        raise ValueError(f"unknown color: {color!r}") from e
    try:
        t = PieceType(piece_type)
    except ValueError as e:
        raise ValueError(f"unknown piece type: {piece_type!r}") from e
    return Piece(c, t)


def piece_from_symbol(ch: str) -> Piece:
    """Inverse of ``Piece.symbol`` (``"Q"`` is a white queen, ``"q"`` black)."""
    t = CHAR_TO_TYPE.get(ch.lower())
    if t is None or len(ch) != 1:
        raise ValueError(f"invalid piece symbol: {ch!r}")
    return Piece(Color.WHITE if ch.isupper() else Color.BLACK, t)
