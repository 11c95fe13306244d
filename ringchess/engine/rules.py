from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Tuple

from .bitboard import Bitboard
from .piece import Color, PieceType
from .topology import FILES, SQUARES, is_valid_ring, normalize_file, to_index


class GameMode(str, Enum):
    """Rule set variant. ``modern`` is an alias of ``standard``."""

    STANDARD = "standard"
    MODERN = "modern"
    CITADEL = "citadel"

    @property
    def reverses_radial(self) -> bool:
        return self is GameMode.CITADEL


Offsets = Tuple[Tuple[int, int], ...]

# (ring delta, file delta)
KING_OFFSETS: Offsets = (
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
    (1, 1),
    (1, -1),
    (-1, 1),
    (-1, -1),
)
# Fers: one step diagonally
QUEEN_OFFSETS: Offsets = ((1, 1), (1, -1), (-1, 1), (-1, -1))
# Alfil: jumps exactly two steps diagonally
BISHOP_OFFSETS: Offsets = ((2, 2), (2, -2), (-2, 2), (-2, -2))
KNIGHT_OFFSETS: Offsets = (
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
)

LEAPER_OFFSETS: Dict[PieceType, Offsets] = {
    PieceType.KING: KING_OFFSETS,
    PieceType.QUEEN: QUEEN_OFFSETS,
    PieceType.BISHOP: BISHOP_OFFSETS,
    PieceType.KNIGHT: KNIGHT_OFFSETS,
}


def reverse_radial(offsets: Iterable[Tuple[int, int]]) -> Offsets:
    """Negate the ring component of every offset (citadel orientation)."""
    return tuple((-dr, df) for dr, df in offsets)


def _leaper_attacks(square: int, offsets: Offsets) -> Bitboard:
    ring, file = divmod(square, FILES)
    value = 0
    for dr, df in offsets:
        nr = ring + dr
        if not is_valid_ring(nr):
            continue
        value |= 1 << (nr * FILES + normalize_file(file + df))
    return Bitboard(value)


def _build_table(offsets: Offsets) -> Tuple[Bitboard, ...]:
    return tuple(_leaper_attacks(sq, offsets) for sq in range(SQUARES))


# Occupancy-independent tables for standard/modern play, built once at import
# and never mutated afterwards.
LEAPER_TABLES: Dict[PieceType, Tuple[Bitboard, ...]] = {
    t: _build_table(offsets) for t, offsets in LEAPER_OFFSETS.items()
}


def leaper_attacks(piece_type: PieceType, square: int, mode: GameMode) -> Bitboard:
    """Attack set of a king, queen, bishop or knight on ``square``."""
    if not 0 <= square < SQUARES:
        return Bitboard.empty()
    if mode.reverses_radial:
        return _leaper_attacks(square, reverse_radial(LEAPER_OFFSETS[piece_type]))
    return LEAPER_TABLES[piece_type][square]


def rook_attacks(square: int, mode: GameMode, occupancy: Bitboard) -> Bitboard:
    """Slide along the ring and across rings, stopping on the first occupant.

    Each of the four rays includes the blocking square. File rays are limited
    to 15 steps so they never come back around to the origin.
    """
    if not 0 <= square < SQUARES:
        return Bitboard.empty()
    ring, file = divmod(square, FILES)
    occ = occupancy.value
    value = 0

    for step in (1, -1):
        for i in range(1, FILES):
            target = ring * FILES + normalize_file(file + step * i)
            value |= 1 << target
            if (occ >> target) & 1:
                break

    # Citadel swaps which radial ray is walked first; the reached set is the same.
    radial = (1, -1) if mode.reverses_radial else (-1, 1)
    for dr in radial:
        r = ring + dr
        while is_valid_ring(r):
            target = r * FILES + file
            value |= 1 << target
            if (occ >> target) & 1:
                break
            r += dr

    return Bitboard(value)


def pawn_direction(color: Color, file: int, mode: GameMode) -> int:
    """File delta of a pawn's forward step.

    Standard/modern: pawns on files 8-15 move counter-clockwise (-1); on
    files 0-7 white moves clockwise (+1) and black counter-clockwise (-1).
    Citadel: white always -1, black always +1.
    """
    if mode.reverses_radial:
        return -1 if color is Color.WHITE else 1
    if normalize_file(file) >= FILES // 2:
        return -1
    return 1 if color is Color.WHITE else -1


def pawn_moves(square: int, color: Color, mode: GameMode, occupancy: Bitboard) -> Bitboard:
    """Single forward step along the ring; none when the target is occupied."""
    if not 0 <= square < SQUARES:
        return Bitboard.empty()
    ring, file = divmod(square, FILES)
    target = to_index(ring, file + pawn_direction(color, file, mode))
    if occupancy.get_bit(target):
        return Bitboard.empty()
    return Bitboard.from_index(target)


def pawn_attacks(square: int, color: Color, mode: GameMode) -> Bitboard:
    """Forward diagonal captures: the forward file step plus one ring either way."""
    if not 0 <= square < SQUARES:
        return Bitboard.empty()
    ring, file = divmod(square, FILES)
    df = pawn_direction(color, file, mode)
    ring_steps = (-1, 1) if mode.reverses_radial else (1, -1)
    value = 0
    for dr in ring_steps:
        target = to_index(ring + dr, file + df)
        if target >= 0:
            value |= 1 << target
    return Bitboard(value)


# --- per-type dispatch ---

AttackFn = Callable[[int, Color, GameMode, Bitboard], Bitboard]
MoveFn = Callable[[int, Color, GameMode, Bitboard], Bitboard]


def _no_moves(square: int, color: Color, mode: GameMode, occupancy: Bitboard) -> Bitboard:
    # Pieces other than pawns move exactly as they capture.
    return Bitboard.empty()


def _leaper(piece_type: PieceType) -> AttackFn:
    def attacks(square: int, color: Color, mode: GameMode, occupancy: Bitboard) -> Bitboard:
        return leaper_attacks(piece_type, square, mode)

    attacks.__name__ = f"{piece_type.value}_attacks"
    return attacks


_MOVES: Dict[PieceType, MoveFn] = {
    PieceType.PAWN: pawn_moves,
    PieceType.ROOK: _no_moves,
    PieceType.KNIGHT: _no_moves,
    PieceType.BISHOP: _no_moves,
    PieceType.QUEEN: _no_moves,
    PieceType.KING: _no_moves,
}

_ATTACKS: Dict[PieceType, AttackFn] = {
    PieceType.PAWN: lambda sq, color, mode, occ: pawn_attacks(sq, color, mode),
    PieceType.ROOK: lambda sq, color, mode, occ: rook_attacks(sq, mode, occ),
    PieceType.KNIGHT: _leaper(PieceType.KNIGHT),
    PieceType.BISHOP: _leaper(PieceType.BISHOP),
    PieceType.QUEEN: _leaper(PieceType.QUEEN),
    PieceType.KING: _leaper(PieceType.KING),
}


def get_moves(
    piece_type: PieceType,
    color: Color,
    square: int,
    mode: GameMode,
    occupancy: Optional[Bitboard] = None,
) -> Bitboard:
    """Non-capturing destinations. Only pawns have any."""
    occ = occupancy if occupancy is not None else Bitboard.empty()
    return _MOVES[piece_type](square, color, mode, occ)


def get_attacks(
    piece_type: PieceType,
    color: Color,
    square: int,
    mode: GameMode,
    occupancy: Optional[Bitboard] = None,
) -> Bitboard:
    """Squares a piece of ``piece_type`` threatens from ``square``.

    ``occupancy`` is the all-pieces bitboard; only the rook consults it.
    Friendly pieces are not removed here; the move generator does that.
    """
    occ = occupancy if occupancy is not None else Bitboard.empty()
    return _ATTACKS[piece_type](square, color, mode, occ)

