from __future__ import annotations

from typing import Dict, List

from .bitboard import Bitboard
from .board import Square
from .move import Move
from .piece import PieceType
from .rules import GameMode, get_attacks, get_moves
from .state import GameState
from .topology import Coordinate, SQUARES


def _index(square: Square) -> int:
    if isinstance(square, Coordinate):
        return square.to_index()
    return square if 0 <= square < SQUARES else -1


def get_legal_moves(state: GameState, square: Square) -> Bitboard:
    """Destinations available to the piece on ``square``.

    Returns an empty bitboard for empty or off-board squares and for pieces
    of the side not to move.

    Notes:
        Moves that leave the mover's own king attacked are not filtered out.
    """
    sq = _index(square)
    if sq < 0:
        return Bitboard.empty()
    piece = state.board.get_piece(sq)
    if piece is None or piece.color is not state.turn:
        return Bitboard.empty()

    all_occ = state.board.get_all_occupancy()
    if piece.type is PieceType.PAWN:
        # Forward steps already exclude occupied squares; captures need an enemy.
        enemy = state.board.get_occupancy(piece.color.opponent)
        moves = get_moves(piece.type, piece.color, sq, state.mode, all_occ)
        moves = moves | (get_attacks(piece.type, piece.color, sq, state.mode, all_occ) & enemy)
    else:
        moves = get_attacks(piece.type, piece.color, sq, state.mode, all_occ)
        moves = moves & ~state.board.get_occupancy(piece.color)

    if state.mode is GameMode.CITADEL:
        moves = moves & ~state.citadel_squares

    return moves


def is_legal_move(state: GameState, from_sq: Square, to_sq: Square) -> bool:
    to_idx = _index(to_sq)
    if to_idx < 0:
        return False
    return get_legal_moves(state, from_sq).get_bit(to_idx)


def get_all_legal_moves(state: GameState) -> Dict[int, Bitboard]:
    """Map each square of the side to move to its non-empty destination set."""
    result: Dict[int, Bitboard] = {}
    for sq in state.board.get_occupancy(state.turn):
        moves = get_legal_moves(state, sq)
        if moves:
            result[sq] = moves
    return result


def generate_moves(state: GameState) -> List[Move]:
    """All moves for the side to move, ordered by origin then destination."""
    return [
        Move(from_sq, to_sq)
        for from_sq, targets in get_all_legal_moves(state).items()
        for to_sq in targets
    ]
