from __future__ import annotations

import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field

from .error import (
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemorySessionStore
from ...config import Settings
from ...engine.game import Game
from ...engine.move import parse_move
from ...engine.perft import perft as perft_nodes
from ...engine.rules import GameMode
from ...engine.state import GameState
from ...engine.topology import SQUARES, square_to_str, str_to_square


logger = logging.getLogger(__name__)


class CreateGameRequest(BaseModel):
    mode: Optional[GameMode] = Field(default=None, description="standard, modern or citadel")


class CreateGameResponse(BaseModel):
    game_id: str
    mode: GameMode
    position: str


class SetPositionRequest(BaseModel):
    position: str = Field(..., description="Position notation")


class MoveRequest(BaseModel):
    move: str = Field(..., description="Move string, e.g. b1c1")


class PerftRequest(BaseModel):
    position: Optional[str] = None
    mode: Optional[GameMode] = None
    depth: int = Field(default=1, ge=0, le=6)


class PieceView(BaseModel):
    color: str
    type: str


class SquareMoves(BaseModel):
    square: str
    index: int
    targets: List[str]
    target_indices: List[int]


class GameStateView(BaseModel):
    game_id: str
    position: str
    mode: GameMode
    turn: str
    draw: bool
    board: List[Optional[PieceView]]
    legal_moves: List[str]
    last_move: Optional[str]
    move_history: List[str]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    app = FastAPI(title="Ring Chess API", version="0.1.0")

    logging.basicConfig(level=settings.log_level.upper())

    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, exception_handler)

    store = InMemorySessionStore(settings.max_sessions)
    app.state.sessions = store

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game(req: Optional[CreateGameRequest] = None) -> CreateGameResponse:
        mode = (req.mode if req is not None else None) or settings.default_mode
        game_id = store.create(Game.new(mode))
        game = _require_game(store, game_id)
        logger.info("game created", extra={"game_id": game_id, "mode": game.mode.value})
        return CreateGameResponse(game_id=game_id, mode=game.mode, position=game.to_notation())

    @app.get("/api/games/{game_id}/state", response_model=GameStateView)
    async def get_state(game_id: str) -> GameStateView:
        return _state_view(game_id, _require_game(store, game_id))

    @app.get("/api/games/{game_id}/squares/{square}/moves", response_model=SquareMoves)
    async def square_moves(game_id: str, square: str) -> SquareMoves:
        game = _require_game(store, game_id)
        idx = _parse_square(square)
        targets = list(game.legal_targets(idx))
        return SquareMoves(
            square=square_to_str(idx),
            index=idx,
            targets=[square_to_str(t) for t in targets],
            target_indices=targets,
        )

    @app.post("/api/games/{game_id}/move", response_model=GameStateView)
    async def make_move(game_id: str, req: MoveRequest) -> GameStateView:
        game = _require_game(store, game_id)
        try:
            move = parse_move(req.move)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        try:
            game.apply_move(move)
        except ValueError:
            raise HTTPException(status_code=400, detail="illegal move")
        return _state_view(game_id, game)

    @app.post("/api/games/{game_id}/position", response_model=GameStateView)
    async def set_position(game_id: str, req: SetPositionRequest) -> GameStateView:
        _require_game(store, game_id)
        try:
            game = Game.from_notation(req.position)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"invalid position: {e}")
        store.set(game_id, game)
        return _state_view(game_id, game)

    @app.post("/api/games/{game_id}/undo", response_model=GameStateView)
    async def undo(game_id: str) -> GameStateView:
        game = _require_game(store, game_id)
        try:
            game.undo_move()
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _state_view(game_id, game)

    @app.delete("/api/games/{game_id}")
    async def delete_game(game_id: str) -> Dict[str, str]:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        return {"status": "deleted"}

    @app.post("/api/perft")
    async def perft(req: PerftRequest) -> Dict[str, int]:
        if req.position:
            try:
                state = GameState.from_notation(req.position)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=f"invalid position: {e}")
        else:
            state = GameState.initial(req.mode or settings.default_mode)
        return {"nodes": perft_nodes(state, req.depth)}

    return app


def _require_game(store: InMemorySessionStore, game_id: str) -> Game:
    game = store.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="game not found")
    return game


def _parse_square(text: str) -> int:
    """Accept a square index (``"17"``) or square notation (``"b2"``)."""
    if text.isdigit():
        idx = int(text)
        if idx < SQUARES:
            return idx
        raise HTTPException(status_code=400, detail=f"invalid square index: {idx}")
    try:
        return str_to_square(text.lower())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _state_view(game_id: str, game: Game) -> GameStateView:
    state = game.state
    history = game.move_history()
    return GameStateView(
        game_id=game_id,
        position=state.to_notation(),
        mode=state.mode,
        turn=state.turn.value,
        draw=state.is_draw,
        board=[
            PieceView(color=p.color.value, type=p.type.value) if p is not None else None
            for p in state.board.squares
        ],
        legal_moves=[m.to_str() for m in game.legal_moves()],
        last_move=history[-1] if history else None,
        move_history=history,
    )


# Default app for non-factory servers
app = create_app()
