from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from .bitboard import Bitboard
from .board import Board, Square
from .piece import Color, Piece, PieceType, create_piece, piece_from_symbol
from .rules import GameMode
from .topology import FILES, RINGS, Coordinate, is_valid_index


# (ring, file, piece type) for white; black mirrors onto the opposite files.
Layout = Tuple[Tuple[int, int, PieceType], ...]

# Byzantine layout: king and queen on the inner ring, rooks on the outer.
STANDARD_LAYOUT: Layout = (
    (0, 15, PieceType.KING),
    (1, 15, PieceType.BISHOP),
    (2, 15, PieceType.KNIGHT),
    (3, 15, PieceType.ROOK),
    (0, 0, PieceType.QUEEN),
    (1, 0, PieceType.BISHOP),
    (2, 0, PieceType.KNIGHT),
    (3, 0, PieceType.ROOK),
)

# Citadel layout: rooks inside, king and queen on the outermost ring.
CITADEL_LAYOUT: Layout = (
    (0, 15, PieceType.ROOK),
    (0, 0, PieceType.ROOK),
    (1, 15, PieceType.KNIGHT),
    (1, 0, PieceType.KNIGHT),
    (2, 15, PieceType.BISHOP),
    (2, 0, PieceType.BISHOP),
    (3, 15, PieceType.KING),
    (3, 0, PieceType.QUEEN),
)

# White's files map onto black's: 15 -> 7, 0 -> 8 and pawn files 14 -> 6, 1 -> 9.
BLACK_FILE = {15: 7, 0: 8, 14: 6, 1: 9}
WHITE_PAWN_FILES = (14, 1)


def _place_side(board: Board, color: Color, layout: Layout) -> None:
    for ring, file, ptype in layout:
        f = file if color is Color.WHITE else BLACK_FILE[file]
        board.set_piece(Coordinate(ring, f), create_piece(color, ptype))
    for ring in range(RINGS):
        for file in WHITE_PAWN_FILES:
            f = file if color is Color.WHITE else BLACK_FILE[file]
            board.set_piece(Coordinate(ring, f), create_piece(color, PieceType.PAWN))


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of a game.

    Notes:
    - Every transition returns a new snapshot; the wrapped board is never
      mutated once the snapshot exists, so older snapshots stay valid.
    - ``citadel_squares`` are squares no piece may enter in citadel mode.
      None of the shipped layouts populate them.
    """

    board: Board = field(default_factory=Board)
    turn: Color = Color.WHITE
    mode: GameMode = GameMode.STANDARD
    citadel_squares: Bitboard = field(default_factory=Bitboard.empty)
    is_draw: bool = False

    @classmethod
    def empty(cls, mode: Union[GameMode, str] = GameMode.STANDARD) -> "GameState":
        return cls(board=Board(), mode=GameMode(mode))

    @classmethod
    def initial(cls, mode: Union[GameMode, str] = GameMode.STANDARD) -> "GameState":
        """Create the starting position for ``mode``.

        Raises:
            ValueError: If ``mode`` is not a known game mode.
        """
        mode = GameMode(mode)
        if mode is GameMode.CITADEL:
            return cls.setup_citadel()
        if mode is GameMode.MODERN:
            return cls.setup_modern()
        return cls.setup_standard()

    @classmethod
    def setup_standard(cls, mode: GameMode = GameMode.STANDARD) -> "GameState":
        board = Board()
        _place_side(board, Color.WHITE, STANDARD_LAYOUT)
        _place_side(board, Color.BLACK, STANDARD_LAYOUT)
        return cls(board=board, mode=mode)

    @classmethod
    def setup_modern(cls) -> "GameState":
        # Modern play currently uses the standard layout and rules.
        return cls.setup_standard(GameMode.MODERN)

    @classmethod
    def setup_citadel(cls) -> "GameState":
        board = Board()
        _place_side(board, Color.WHITE, CITADEL_LAYOUT)
        _place_side(board, Color.BLACK, CITADEL_LAYOUT)
        return cls(board=board, mode=GameMode.CITADEL)

    # --- transitions ---
    def make_move(self, from_sq: Square, to_sq: Square) -> "GameState":
        """Relocate the piece on ``from_sq`` to ``to_sq`` and pass the turn.

        Any piece on ``to_sq`` is captured. No legality check is made here;
        callers validate with the move generator first.

        Returns:
            GameState: New snapshot, or ``self`` unchanged when ``from_sq``
                holds no piece of the side to move or a square is off-board.
        """
        moving = self.board.get_piece(from_sq)
        if moving is None or moving.color is not self.turn:
            return self
        if _is_off_board(to_sq):
            return self

        board = self.board.clone()
        board.remove_piece(to_sq)
        board.remove_piece(from_sq)
        board.set_piece(to_sq, moving)
        return GameState(
            board=board,
            turn=self.turn.opponent,
            mode=self.mode,
            citadel_squares=self.citadel_squares,
            is_draw=self.is_draw,
        )

    def switch_turn(self) -> "GameState":
        return GameState(
            board=self.board,
            turn=self.turn.opponent,
            mode=self.mode,
            citadel_squares=self.citadel_squares,
            is_draw=self.is_draw,
        )

    # --- read accessors ---
    def piece_at(self, square: Square) -> Optional[Piece]:
        return self.board.get_piece(square)

    def get_occupancy(self, color: Color) -> Bitboard:
        return self.board.get_occupancy(color)

    def get_all_occupancy(self) -> Bitboard:
        return self.board.get_all_occupancy()

    # --- position notation ---
    def to_notation(self) -> str:
        """Serialize as ``<placement> <turn> <mode>``.

        Placement lists rings from the outermost (4) to the innermost (1),
        separated by ``/``; each ring runs over files ``a``..``p`` with piece
        symbols and decimal counts of empty squares.
        """
        rings: List[str] = []
        for ring in range(RINGS - 1, -1, -1):
            run = 0
            row: List[str] = []
            for file in range(FILES):
                piece = self.board.get_piece(ring * FILES + file)
                if piece is None:
                    run += 1
                    continue
                if run:
                    row.append(str(run))
                    run = 0
                row.append(piece.symbol)
            if run:
                row.append(str(run))
            rings.append("".join(row))
        return f"{'/'.join(rings)} {self.turn.symbol} {self.mode.value}"

    @classmethod
    def from_notation(cls, text: str) -> "GameState":
        """Parse the output of ``to_notation``.

        Raises:
            ValueError: If the text is empty, has the wrong number of fields,
                or contains an invalid placement, side to move or mode.
        """
        if not text or not isinstance(text, str):
            raise ValueError("position must be a non-empty string")
        parts = text.strip().split()
        if len(parts) != 3:
            raise ValueError("position must have 3 fields")
        placement, stm, mode_name = parts

        rings = placement.split("/")
        if len(rings) != RINGS:
            raise ValueError(f"position must have {RINGS} rings")
        board = Board()
        for ring_text, ring in zip(rings, range(RINGS - 1, -1, -1)):
            tokens = _RING_TOKEN.findall(ring_text)
            if "".join(tokens) != ring_text:
                raise ValueError(f"invalid characters in ring: {ring_text!r}")
            file = 0
            for token in tokens:
                if token.isdigit():
                    n = int(token)
                    if n < 1 or n > FILES:
                        raise ValueError("invalid empty count in ring")
                    file += n
                    continue
                if file >= FILES:
                    raise ValueError("too many squares in ring")
                board.set_piece(ring * FILES + file, piece_from_symbol(token))
                file += 1
            if file != FILES:
                raise ValueError(f"ring does not sum to {FILES} squares")

        if stm not in ("w", "b"):
            raise ValueError("side to move must be 'w' or 'b'")
        try:
            mode = GameMode(mode_name)
        except ValueError as e:
            raise ValueError(f"invalid mode: {mode_name!r}") from e

        turn = Color.WHITE if stm == "w" else Color.BLACK
        return cls(board=board, turn=turn, mode=mode)


_RING_TOKEN = re.compile(r"\d+|[pnbrqkPNBRQK]")


def _is_off_board(square: Square) -> bool:
    if isinstance(square, Coordinate):
        return not square.is_valid()
    return not is_valid_index(square)
