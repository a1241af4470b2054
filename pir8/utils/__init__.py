"""Utility functions and constants for PIR8."""

from .constants import (
    EVENT_LOG_SIZE,
    MAP_SIZE,
    MAX_PLAYERS,
    MAX_SCAN_CHARGES,
    MAX_SHIPS_PER_PLAYER,
    MAX_TURNS,
    MIN_PLAYERS,
    RNG_SEED_DEFAULT,
    STARTING_SCAN_CHARGES,
    SUDDEN_DEATH_TURN,
)
from .distance import chebyshev_distance, euclidean_distance, is_adjacent
from .rng import GameRNG

__all__ = [
    "EVENT_LOG_SIZE",
    "MAP_SIZE",
    "MAX_PLAYERS",
    "MAX_SCAN_CHARGES",
    "MAX_SHIPS_PER_PLAYER",
    "MAX_TURNS",
    "MIN_PLAYERS",
    "RNG_SEED_DEFAULT",
    "STARTING_SCAN_CHARGES",
    "SUDDEN_DEATH_TURN",
    "chebyshev_distance",
    "euclidean_distance",
    "is_adjacent",
    "GameRNG",
]
