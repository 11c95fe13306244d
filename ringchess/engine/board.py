from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple, Union

from .bitboard import Bitboard
from .piece import COLORS, PIECE_TYPES, Color, Piece, PieceType
from .topology import FILE_NAMES, FILES, RINGS, SQUARES, Coordinate


Square = Union[int, Coordinate]


def _square_index(square: Square) -> int:
    """Resolve an index or coordinate to a board index, -1 when off-board."""
    if isinstance(square, Coordinate):
        return square.to_index()
    if 0 <= square < SQUARES:
        return square
    return -1


def _empty_piece_boards() -> Dict[Color, Dict[PieceType, Bitboard]]:
    return {c: {t: Bitboard.empty() for t in PIECE_TYPES} for c in COLORS}


class Board:
    """Piece placement with slot array and derived bitboards.

    Notes:
    - ``_squares`` is the source of truth for what stands on a square.
    - Per-(color, type) bitboards, per-color occupancy and all-occupancy are
      derived and updated together with the slot on every placement/removal.
    """

    def __init__(self) -> None:
        self._squares: List[Optional[Piece]] = [None] * SQUARES
        self._pieces = _empty_piece_boards()
        self._occupancy: Dict[Color, Bitboard] = {c: Bitboard.empty() for c in COLORS}
        self._all = Bitboard.empty()

    def clone(self) -> "Board":
        """Return an independent copy; bitboards are immutable so sharing is safe."""
        b = Board()
        b._squares = list(self._squares)
        b._pieces = {c: dict(self._pieces[c]) for c in COLORS}
        b._occupancy = dict(self._occupancy)
        b._all = self._all
        return b

    def clear(self) -> None:
        self._squares = [None] * SQUARES
        self._pieces = _empty_piece_boards()
        self._occupancy = {c: Bitboard.empty() for c in COLORS}
        self._all = Bitboard.empty()

    # --- slot access ---
    def get_piece(self, square: Square) -> Optional[Piece]:
        idx = _square_index(square)
        if idx < 0:
            return None
        return self._squares[idx]

    def is_empty(self, square: Square) -> bool:
        return self.get_piece(square) is None

    def set_piece(self, square: Square, piece: Piece) -> None:
        """Place ``piece`` on ``square``, replacing any current occupant.

        Off-board squares are ignored.

        Raises:
            ValueError: If ``piece`` is ``None``; use ``remove_piece`` instead.
        """
        if piece is None:
            raise ValueError("set_piece requires a piece; use remove_piece to clear")
        idx = _square_index(square)
        if idx < 0:
            return
        if self._squares[idx] is not None:
            self.remove_piece(idx)
        self._squares[idx] = piece
        color, ptype = piece.color, piece.type
        self._pieces[color][ptype] = self._pieces[color][ptype].set_bit(idx)
        self._occupancy[color] = self._occupancy[color].set_bit(idx)
        self._all = self._all.set_bit(idx)

    def remove_piece(self, square: Square) -> None:
        idx = _square_index(square)
        if idx < 0:
            return
        piece = self._squares[idx]
        if piece is None:
            return
        color, ptype = piece.color, piece.type
        self._pieces[color][ptype] = self._pieces[color][ptype].clear_bit(idx)
        self._occupancy[color] = self._occupancy[color].clear_bit(idx)
        self._all = self._all.clear_bit(idx)
        self._squares[idx] = None

    @property
    def squares(self) -> Tuple[Optional[Piece], ...]:
        return tuple(self._squares)

    def occupied(self) -> Iterator[Tuple[int, Piece]]:
        """Yield ``(index, piece)`` for every occupied square in index order."""
        for idx in self._all:
            piece = self._squares[idx]
            assert piece is not None
            yield idx, piece

    # --- bitboards ---
    def get_pieces(self, color: Color, piece_type: PieceType) -> Bitboard:
        return self._pieces[color][piece_type]

    def get_occupancy(self, color: Color) -> Bitboard:
        return self._occupancy[color]

    def get_all_occupancy(self) -> Bitboard:
        return self._all

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    __hash__ = None  # type: ignore[assignment]

    def render(self) -> str:
        """Text diagram, outer ring on top, one column per file."""
        lines = []
        for ring in range(RINGS - 1, -1, -1):
            row = []
            for f in range(FILES):
                piece = self._squares[ring * FILES + f]
                row.append(piece.symbol if piece is not None else ".")
            lines.append(f"{ring + 1} " + " ".join(row))
        lines.append("  " + " ".join(FILE_NAMES))
        return "\n".join(lines)

    def __repr__(self) -> str:
        n = sum(1 for p in self._squares if p is not None)
        return f"Board(pieces={n})"
