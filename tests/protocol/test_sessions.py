from __future__ import annotations

from fastapi.testclient import TestClient

from ringchess.config import Settings
from ringchess.engine.rules import GameMode
from ringchess.protocol.http.app import create_app


STANDARD_POSITION = "RP4prrp4PR/NP4pnnp4PN/BP4pbbp4PB/QP4pkqp4PK w standard"


def _client(settings: Settings | None = None) -> TestClient:
    return TestClient(create_app(settings))


def _new_game(client: TestClient, mode: str | None = None) -> str:
    r = client.post("/api/games", json={"mode": mode} if mode else None)
    assert r.status_code == 200
    return r.json()["game_id"]


def test_create_game_and_get_state() -> None:
    client = _client()
    r = client.post("/api/games")
    assert r.status_code == 200
    body = r.json()
    assert isinstance(body["game_id"], str) and body["game_id"]
    assert body["mode"] == "standard"
    assert body["position"] == STANDARD_POSITION

    r2 = client.get(f"/api/games/{body['game_id']}/state")
    assert r2.status_code == 200
    state = r2.json()
    assert state["game_id"] == body["game_id"]
    assert state["turn"] == "white"
    assert state["draw"] is False
    assert len(state["board"]) == 64
    assert state["board"][0] == {"color": "white", "type": "queen"}
    assert state["board"][4] is None
    assert len(state["legal_moves"]) == 14
    assert state["last_move"] is None


def test_create_game_with_mode() -> None:
    client = _client()
    game_id = _new_game(client, "citadel")
    state = client.get(f"/api/games/{game_id}/state").json()
    assert state["mode"] == "citadel"
    assert state["board"][48] == {"color": "white", "type": "queen"}


def test_default_mode_comes_from_settings() -> None:
    client = _client(Settings(default_mode=GameMode.CITADEL))
    body = client.post("/api/games").json()
    assert body["mode"] == "citadel"


def test_get_state_unknown_id_404() -> None:
    r = _client().get("/api/games/does-not-exist/state")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "not_found"


def test_square_moves_by_notation_and_index() -> None:
    client = _client()
    game_id = _new_game(client)
    r = client.get(f"/api/games/{game_id}/squares/b1/moves")
    assert r.status_code == 200
    assert r.json() == {"square": "b1", "index": 1, "targets": ["c1"], "target_indices": [2]}
    r2 = client.get(f"/api/games/{game_id}/squares/47/moves")
    assert r2.json()["target_indices"] == [29, 61]
    # Black piece on white's turn
    r3 = client.get(f"/api/games/{game_id}/squares/g1/moves")
    assert r3.json()["targets"] == []
    r4 = client.get(f"/api/games/{game_id}/squares/z9/moves")
    assert r4.status_code == 400


def test_move_legal_illegal_and_malformed() -> None:
    client = _client()
    game_id = _new_game(client)

    r = client.post(f"/api/games/{game_id}/move", json={"move": "b1c1"})
    assert r.status_code == 200
    state = r.json()
    assert state["turn"] == "black"
    assert state["last_move"] == "b1c1"
    assert state["move_history"] == ["b1c1"]
    assert " b standard" in state["position"]

    r_bad = client.post(f"/api/games/{game_id}/move", json={"move": "a1b1"})
    assert r_bad.status_code == 400
    assert r_bad.json()["error"]["message"] == "illegal move"

    r_garbage = client.post(f"/api/games/{game_id}/move", json={"move": "zz"})
    assert r_garbage.status_code == 400
    assert r_garbage.json()["error"]["code"] == "bad_request"


def test_set_position_validation_and_success() -> None:
    client = _client()
    game_id = _new_game(client)

    r_bad = client.post(f"/api/games/{game_id}/position", json={"position": ""})
    assert r_bad.status_code == 400
    assert r_bad.json()["error"]["code"] == "bad_request"

    position = "k15/16/16/15K w citadel"
    r_ok = client.post(f"/api/games/{game_id}/position", json={"position": position})
    assert r_ok.status_code == 200
    state = r_ok.json()
    assert state["position"] == position
    assert state["mode"] == "citadel"
    assert sorted(state["legal_moves"]) == sorted(["p1o1", "p1a1", "p1o2", "p1p2", "p1a2"])


def test_delete_game() -> None:
    client = _client()
    game_id = _new_game(client)
    assert client.delete(f"/api/games/{game_id}").json() == {"status": "deleted"}
    assert client.get(f"/api/games/{game_id}/state").status_code == 404
    assert client.delete(f"/api/games/{game_id}").status_code == 404


def test_perft_endpoint() -> None:
    client = _client()
    assert client.post("/api/perft", json={"depth": 1}).json() == {"nodes": 14}
    assert client.post("/api/perft", json={"depth": 2}).json() == {"nodes": 140}
    assert client.post("/api/perft", json={"mode": "citadel", "depth": 1}).json() == {"nodes": 10}
    r = client.post("/api/perft", json={"position": "k15/16/16/15K w standard", "depth": 1})
    assert r.json() == {"nodes": 5}
    assert client.post("/api/perft", json={"position": "nope", "depth": 1}).status_code == 400
    assert client.post("/api/perft", json={"depth": 9}).status_code == 422
