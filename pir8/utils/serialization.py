"""Game state serialization to JSON-compatible dictionaries.

The engine itself never serializes; this module is used by host layers
(the HTTP server and the CLI) to emit snapshots for rendering. It is
one-way: there is no load path.
"""

from typing import Any

from ..models.action import Action
from ..models.coordinate import Coordinate
from ..models.game import GameEvent, GameState, WeatherEffect
from ..models.player import Player
from ..models.resources import Resources
from ..models.ship import Ship
from ..models.terrain import GameMap, TerrainCell


def serialize_game_state(state: GameState) -> dict[str, Any]:
    """Convert a GameState to a JSON-compatible dictionary.

    Args:
        state: Game state to serialize

    Returns:
        Dictionary representation of the state
    """
    current = state.current_player
    return {
        "game_id": state.game_id,
        "status": state.status.value,
        "turn_number": state.turn_number,
        "current_player_index": state.current_player_index,
        "current_player_id": current.id if current else None,
        "players": [_serialize_player(p) for p in state.players],
        "map": _serialize_map(state.game_map),
        "weather": _serialize_weather(state.weather),
        "event_log": [_serialize_event(e) for e in state.event_log],
        "winner": state.winner,
    }


def serialize_action(action: Action) -> dict[str, Any]:
    """Convert a typed action to a dictionary tagged with its type."""
    data: dict[str, Any] = {"type": action.action_type}
    for name, value in vars(action).items():
        if isinstance(value, Coordinate):
            data[name] = _serialize_coordinate(value)
        elif hasattr(value, "value"):
            data[name] = value.value
        else:
            data[name] = value
    return data


def _serialize_coordinate(coord: Coordinate) -> dict[str, int]:
    return {"x": coord.x, "y": coord.y}


def _serialize_resources(resources: Resources) -> dict[str, int]:
    return resources.as_dict()


def _serialize_ship(ship: Ship) -> dict[str, Any]:
    """Convert Ship to dictionary."""
    return {
        "id": ship.id,
        "owner": ship.owner,
        "type": ship.ship_type.value,
        "health": ship.health,
        "max_health": ship.max_health,
        "attack": ship.attack,
        "defense": ship.defense,
        "speed": ship.speed,
        "range": ship.range,
        "position": _serialize_coordinate(ship.position),
        "ability": (
            {
                "name": ship.ability.name,
                "cooldown": ship.ability.cooldown,
                "current_cooldown": ship.ability.current_cooldown,
                "charges": ship.ability.charges,
                "is_ready": ship.ability.is_ready,
            }
            if ship.ability
            else None
        ),
        "effects": [
            {
                "type": e.effect_type.value,
                "duration": e.duration,
                "magnitude": e.magnitude,
                "source": e.source,
            }
            for e in ship.effects
        ],
    }


def _serialize_player(player: Player) -> dict[str, Any]:
    """Convert Player to dictionary."""
    return {
        "id": player.id,
        "name": player.name,
        "is_ai": player.is_ai,
        "difficulty": player.difficulty.value if player.difficulty else None,
        "is_active": player.is_active,
        "resources": _serialize_resources(player.resources),
        "ships": [_serialize_ship(s) for s in player.ships],
        "territories": [_serialize_coordinate(c) for c in player.territories],
        "total_score": player.total_score,
        "consecutive_attacks": player.consecutive_attacks,
        "scan_charges": player.scan_charges,
        "average_decision_time_ms": player.average_decision_time_ms,
        "total_moves": player.total_moves,
        "speed_bonus_accumulated": player.speed_bonus_accumulated,
    }


def _serialize_cell(cell: TerrainCell) -> dict[str, Any]:
    return {
        "type": cell.terrain.value,
        "owner": cell.owner,
        "resources": {k: v for k, v in cell.resources.as_dict().items() if v},
        "is_contested": cell.is_contested,
    }


def _serialize_map(game_map: GameMap) -> dict[str, Any]:
    """Convert GameMap to dictionary; cells are indexed [x][y]."""
    return {
        "size": game_map.size,
        "cells": [[_serialize_cell(cell) for cell in column] for column in game_map.cells],
    }


def _serialize_weather(weather: WeatherEffect | None) -> dict[str, Any] | None:
    if weather is None:
        return None
    return {
        "type": weather.weather_type.value,
        "duration": weather.duration,
        "movement_modifier": weather.movement_modifier,
        "resource_modifier": weather.resource_modifier,
        "damage_modifier": weather.damage_modifier,
        "visibility_reduced": weather.visibility_reduced,
    }


def _serialize_event(event: GameEvent) -> dict[str, Any]:
    return {
        "id": event.id,
        "type": event.event_type,
        "player_id": event.player_id,
        "turn_number": event.turn_number,
        "description": event.description,
    }
