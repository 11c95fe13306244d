from __future__ import annotations

import logging
import threading
import uuid
from collections import OrderedDict
from typing import Optional

from ...engine.game import Game


logger = logging.getLogger(__name__)


class InMemorySessionStore:
    """Thread-safe map of ``game_id`` to live ``Game`` sessions.

    At most ``max_sessions`` games are held; creating one more evicts the
    session that was touched least recently. ``None`` disables the cap.
    """

    def __init__(self, max_sessions: Optional[int] = None) -> None:
        if max_sessions is not None and max_sessions < 1:
            raise ValueError("max_sessions must be positive")
        self._lock = threading.RLock()
        self._games: "OrderedDict[str, Game]" = OrderedDict()
        self._max = max_sessions

    def create(self, game: Optional[Game] = None) -> str:
        """Register ``game`` (a new standard game by default) and return its id."""
        gid = uuid.uuid4().hex
        if game is None:
            game = Game.new()
        with self._lock:
            self._games[gid] = game
            while self._max is not None and len(self._games) > self._max:
                evicted, _ = self._games.popitem(last=False)
                logger.info("evicted session %s", evicted)
        logger.debug("created session %s (%s)", gid, game.mode.value)
        return gid

    def get(self, game_id: str) -> Optional[Game]:
        with self._lock:
            game = self._games.get(game_id)
            if game is not None:
                self._games.move_to_end(game_id)
            return game

    def set(self, game_id: str, game: Game) -> None:
        """Replace the game behind an existing id; unknown ids raise ``KeyError``."""
        with self._lock:
            if game_id not in self._games:
                raise KeyError(game_id)
            self._games[game_id] = game
            self._games.move_to_end(game_id)

    def delete(self, game_id: str) -> bool:
        with self._lock:
            return self._games.pop(game_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)
