from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Union

from .bitboard import Bitboard
from .board import Square
from .move import Move
from .movegen import generate_moves, get_legal_moves, is_legal_move
from .rules import GameMode
from .state import GameState


logger = logging.getLogger(__name__)


@dataclass
class Game:
    """Game wrapper around immutable state snapshots.

    Responsibility: track the current snapshot, expose legal moves, apply and
    undo moves. Undo restores the previous snapshot.
    """

    state: GameState
    move_stack: List[Move] = field(default_factory=list)
    _history: List[GameState] = field(default_factory=list, repr=False)

    @classmethod
    def new(cls, mode: Union[GameMode, str] = GameMode.STANDARD) -> "Game":
        return cls(state=GameState.initial(mode))

    @classmethod
    def from_notation(cls, text: str) -> "Game":
        return cls(state=GameState.from_notation(text))

    def to_notation(self) -> str:
        return self.state.to_notation()

    @property
    def mode(self) -> GameMode:
        return self.state.mode

    def legal_moves(self) -> List[Move]:
        return generate_moves(self.state)

    def legal_targets(self, square: Square) -> Bitboard:
        return get_legal_moves(self.state, square)

    def apply_move(self, move: Move) -> None:
        if not is_legal_move(self.state, move.from_sq, move.to_sq):
            raise ValueError("illegal move")
        self._history.append(self.state)
        self.state = self.state.make_move(move.from_sq, move.to_sq)
        self.move_stack.append(move)
        logger.debug("applied %s, %s to move", move.to_str(), self.state.turn.value)

    def undo_move(self) -> None:
        if not self.move_stack:
            raise ValueError("no moves to undo")
        last = self.move_stack.pop()
        self.state = self._history.pop()
        logger.debug("undid %s", last.to_str())

    # --- state flags for protocol ---
    def is_draw(self) -> bool:
        return self.state.is_draw

    def move_history(self) -> List[str]:
        return [m.to_str() for m in self.move_stack]
