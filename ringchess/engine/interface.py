"""Value-oriented entry points for a presentation layer.

All functions take and return plain values. Invalid input never raises:
unknown squares yield no moves and rejected moves return the input state.
"""

from __future__ import annotations

from typing import Optional, Set, Union

from .movegen import get_legal_moves
from .piece import Piece
from .rules import GameMode
from .state import GameState
from .topology import is_valid_index


def initial_state(mode: Union[GameMode, str] = GameMode.STANDARD) -> GameState:
    return GameState.initial(mode)


def _is_square(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and is_valid_index(value)


def legal_moves(state: GameState, square: int) -> Set[int]:
    if not _is_square(square):
        return set()
    return set(get_legal_moves(state, square))


def apply_move(state: GameState, from_sq: int, to_sq: int) -> GameState:
    """Apply a move without validating it against the move generator."""
    if not (_is_square(from_sq) and _is_square(to_sq)):
        return state
    return state.make_move(from_sq, to_sq)


def piece_at(state: GameState, square: int) -> Optional[Piece]:
    if not _is_square(square):
        return None
    return state.piece_at(square)
