"""Data models for PIR8."""

from .action import (
    Action,
    ActionRecord,
    ActionResult,
    Attack,
    BuildShip,
    ClaimTerritory,
    CollectResources,
    MoveShip,
    UseAbility,
)
from .coordinate import Coordinate
from .game import GameEvent, GameState, GameStatus, WeatherEffect, WeatherType
from .player import Difficulty, Player
from .resources import RESOURCE_NAMES, Resources
from .ship import EffectType, Ship, ShipAbility, ShipType, StatusEffect
from .terrain import GameMap, TerrainCell, TerrainType

__all__ = [
    "Coordinate",
    "Resources",
    "RESOURCE_NAMES",
    "TerrainType",
    "TerrainCell",
    "GameMap",
    "ShipType",
    "EffectType",
    "ShipAbility",
    "StatusEffect",
    "Ship",
    "Difficulty",
    "Player",
    "GameStatus",
    "WeatherType",
    "WeatherEffect",
    "GameEvent",
    "GameState",
    "Action",
    "MoveShip",
    "Attack",
    "ClaimTerritory",
    "CollectResources",
    "BuildShip",
    "UseAbility",
    "ActionRecord",
    "ActionResult",
]
