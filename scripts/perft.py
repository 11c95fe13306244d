#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import os
import sys
import time

# Allow running this script directly via `python scripts/perft.py`
# by adding the repo root (which contains `ringchess/`) to sys.path.
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from ringchess.engine.perft import perft
from ringchess.engine.state import GameState


def main() -> None:
    parser = argparse.ArgumentParser(description="Count move-tree nodes from a position")
    parser.add_argument(
        "--mode",
        choices=["standard", "modern", "citadel"],
        default="standard",
        help="Starting position to use when --position is omitted",
    )
    parser.add_argument("--position", type=str, default=None, help="Position notation")
    parser.add_argument("--depth", type=int, default=3, help="Perft depth (default: 3)")
    parser.add_argument("--show", action="store_true", help="Print the board before counting")
    args = parser.parse_args()

    if args.position:
        state = GameState.from_notation(args.position)
    else:
        state = GameState.initial(args.mode)
    if args.show:
        print(state.board.render())
    start = time.perf_counter()
    nodes = perft(state, args.depth)
    dt = time.perf_counter() - start
    print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")


if __name__ == "__main__":
    main()
