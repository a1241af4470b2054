"""Tests for snapshot serialization."""

import json

from factories import make_state, water_map
from pir8.engine import create_game, create_player
from pir8.engine.weather import WEATHER_TABLE
from pir8.models import (
    Attack,
    BuildShip,
    Coordinate,
    MoveShip,
    ShipType,
    TerrainType,
    UseAbility,
    WeatherType,
)
from pir8.utils import GameRNG
from pir8.utils.serialization import serialize_action, serialize_game_state


def test_snapshot_is_json_compatible():
    players = [create_player("p1", "Anne"), create_player("p2", "Mary")]
    state = create_game(players, "g1", GameRNG(42))
    data = serialize_game_state(state)
    assert json.loads(json.dumps(data)) == data


def test_snapshot_fields():
    state = make_state(
        game_map=water_map(terrain={(3, 4): TerrainType.PORT}, owners={(3, 4): "p2"}),
        weather=WEATHER_TABLE[WeatherType.FOG],
    ).with_event("test", "p1", "hello")
    data = serialize_game_state(state)

    assert data["game_id"] == "g1"
    assert data["status"] == "active"
    assert data["turn_number"] == 1
    assert data["current_player_id"] == "p1"
    assert data["winner"] is None
    assert data["weather"]["type"] == "fog"
    assert data["weather"]["visibility_reduced"] is True
    assert data["event_log"][0]["description"] == "hello"

    cell = data["map"]["cells"][3][4]
    assert cell == {
        "type": "port",
        "owner": "p2",
        "resources": {"gold": 5, "crew": 2},
        "is_contested": False,
    }
    assert data["map"]["size"] == 10


def test_player_and_ship_fields():
    data = serialize_game_state(make_state())
    p1 = data["players"][0]
    assert p1["id"] == "p1"
    assert p1["resources"]["gold"] == 1000
    assert p1["scan_charges"] == 3
    scout = p1["ships"][0]
    assert scout["type"] == "scout"
    assert scout["position"] == {"x": 1, "y": 1}
    assert scout["ability"]["name"] == "Spy Glass"
    assert scout["ability"]["is_ready"] is True
    assert scout["effects"] == []


def test_serialize_actions():
    assert serialize_action(MoveShip("s1", Coordinate(2, 3))) == {
        "type": "move_ship",
        "ship_id": "s1",
        "destination": {"x": 2, "y": 3},
    }
    assert serialize_action(Attack("s1", "s2")) == {
        "type": "attack",
        "ship_id": "s1",
        "target_ship_id": "s2",
    }
    assert serialize_action(BuildShip(ShipType.GALLEON, Coordinate(0, 1)))["ship_type"] == "galleon"
    assert serialize_action(UseAbility("s1"))["target_ship_id"] is None
