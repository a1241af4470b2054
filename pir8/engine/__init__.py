"""Rules engine for PIR8."""

from .actions import ActionProcessor
from .ai_planner import AIDecision, AIPlanner, AIReasoning
from .game_engine import AITurn, GameEngine
from .game_setup import (
    create_ai_player,
    create_game,
    create_player,
    create_practice_game,
    join_game,
    recruit_ai_captains,
)
from .map_generator import generate_layout, generate_map
from .turn_controller import TurnController
from .victory import GameEndResult, check_game_end, resign, should_resign

__all__ = [
    "ActionProcessor",
    "AIPlanner",
    "AIDecision",
    "AIReasoning",
    "AITurn",
    "GameEngine",
    "create_ai_player",
    "create_game",
    "create_player",
    "create_practice_game",
    "join_game",
    "recruit_ai_captains",
    "generate_layout",
    "generate_map",
    "TurnController",
    "GameEndResult",
    "check_game_end",
    "resign",
    "should_resign",
]
