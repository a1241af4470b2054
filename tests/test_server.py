"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from pir8.server.main import app


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def create_game(client, **body):
    body.setdefault("seed", 42)
    response = client.post("/api/games", json=body)
    assert response.status_code == 200
    return response.json()


def legal_step(state, player_id):
    """Find one-cell move for the player's scout onto open, navigable water."""
    player = next(p for p in state["players"] if p["id"] == player_id)
    scout = next(s for s in player["ships"] if s["type"] == "scout")
    occupied = {
        (s["position"]["x"], s["position"]["y"])
        for p in state["players"]
        for s in p["ships"]
        if s["health"] > 0
    }
    size = state["map"]["size"]
    x, y = scout["position"]["x"], scout["position"]["y"]
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            nx, ny = x + dx, y + dy
            if (dx, dy) == (0, 0) or not (0 <= nx < size and 0 <= ny < size):
                continue
            if (nx, ny) in occupied or state["map"]["cells"][nx][ny]["type"] == "reef":
                continue
            return scout["id"], {"x": nx, "y": ny}
    raise AssertionError("no legal step found")


def test_api_root(client):
    response = client.get("/api")
    assert response.status_code == 200
    assert response.json()["status"] == "operational"


def test_create_game(client):
    """Test creating a practice game."""
    data = create_game(client, playerName="Morgan", difficulty="captain")
    assert data["gameId"].startswith("game-")
    assert data["seed"] == 42
    state = data["state"]
    assert state["status"] == "active"
    assert state["current_player_id"] == data["humanPlayer"]
    ai = next(p for p in state["players"] if p["id"] == data["aiPlayer"])
    assert ai["is_ai"]
    assert ai["difficulty"] == "captain"


def test_invalid_difficulty(client):
    response = client.post("/api/games", json={"difficulty": "legend"})
    assert response.status_code == 422


def test_get_state(client):
    data = create_game(client)
    response = client.get(f"/api/games/{data['gameId']}/state")
    assert response.status_code == 200
    body = response.json()
    assert body["turn"] == 1
    assert body["status"] == "active"
    assert body["currentPlayerId"] == data["humanPlayer"]


def test_unknown_game(client):
    assert client.get("/api/games/nope/state").status_code == 404
    response = client.post("/api/games/nope/pass", json={"playerId": "x"})
    assert response.status_code == 404


def test_submit_action_triggers_ai_reply(client):
    data = create_game(client)
    ship_id, destination = legal_step(data["state"], data["humanPlayer"])
    response = client.post(
        f"/api/games/{data['gameId']}/actions",
        json={
            "playerId": data["humanPlayer"],
            "action": {"type": "move_ship", "shipId": ship_id, "destination": destination},
            "decisionTimeMs": 3000,
        },
    )
    assert response.status_code == 200
    body = response.json()
    assert body["accepted"] is True
    assert len(body["aiTurns"]) == 1
    assert body["aiTurns"][0]["playerId"] == data["aiPlayer"]
    human = next(p for p in body["state"]["players"] if p["id"] == data["humanPlayer"])
    assert human["total_moves"] == 1
    assert human["speed_bonus_accumulated"] == 100


def test_rejected_action_keeps_turn(client):
    data = create_game(client)
    response = client.post(
        f"/api/games/{data['gameId']}/actions",
        json={
            "playerId": data["humanPlayer"],
            "action": {
                "type": "move_ship",
                "shipId": f"{data['humanPlayer']}_scout_1",
                "destination": {"x": 9, "y": 9},
            },
        },
    )
    assert response.status_code == 200
    body = response.json()
    assert body["accepted"] is False
    assert body["message"].startswith("Destination out of range")
    assert body["aiTurns"] == []
    assert body["state"]["current_player_id"] == data["humanPlayer"]


def test_unknown_action_type(client):
    data = create_game(client)
    response = client.post(
        f"/api/games/{data['gameId']}/actions",
        json={"playerId": data["humanPlayer"], "action": {"type": "teleport", "shipId": "x"}},
    )
    assert response.status_code == 422


def test_wrong_player(client):
    data = create_game(client)
    response = client.post(
        f"/api/games/{data['gameId']}/pass", json={"playerId": data["aiPlayer"]}
    )
    assert response.status_code == 400


def test_pass_turn(client):
    data = create_game(client)
    response = client.post(
        f"/api/games/{data['gameId']}/pass", json={"playerId": data["humanPlayer"]}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["accepted"] is True
    assert len(body["aiTurns"]) == 1


def test_resign_ends_game(client):
    data = create_game(client)
    game_id = data["gameId"]
    response = client.post(f"/api/games/{game_id}/resign", json={"playerId": data["humanPlayer"]})
    assert response.status_code == 200
    body = response.json()
    assert body["winner"] == data["aiPlayer"]
    assert body["state"]["status"] == "completed"

    again = client.post(f"/api/games/{game_id}/pass", json={"playerId": data["humanPlayer"]})
    assert again.status_code == 400


def test_delete_game(client):
    data = create_game(client)
    assert client.delete(f"/api/games/{data['gameId']}").status_code == 200
    assert client.delete(f"/api/games/{data['gameId']}").status_code == 404
