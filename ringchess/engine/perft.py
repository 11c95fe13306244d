from __future__ import annotations

from .movegen import generate_moves
from .state import GameState


def perft(state: GameState, depth: int) -> int:
    """Count leaf nodes of the move tree below ``state``.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all child positions' perft(depth-1).

    Children are produced by copy-on-write snapshots, so ``state`` is never
    modified. Moves are not filtered for king safety.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    moves = generate_moves(state)
    if depth == 1:
        return len(moves)
    nodes = 0
    for m in moves:
        nodes += perft(state.make_move(m.from_sq, m.to_sq), depth - 1)
    return nodes
