"""Weather table and per-round weather ticking.

Weather multipliers are applied by the systems they affect (movement range,
collection yield, attack damage); this module only decides which weather is
in force and for how long.
"""

import logging
from dataclasses import replace

from ..models import WeatherEffect, WeatherType
from ..utils import GameRNG
from ..utils.constants import WEATHER_REROLL_CHANCE

logger = logging.getLogger(__name__)

WEATHER_TABLE: dict[WeatherType, WeatherEffect] = {
    WeatherType.CALM: WeatherEffect(
        weather_type=WeatherType.CALM,
        duration=2,
        resource_modifier=1.2,
    ),
    WeatherType.TRADE_WINDS: WeatherEffect(
        weather_type=WeatherType.TRADE_WINDS,
        duration=3,
        movement_modifier=1.5,
        resource_modifier=1.1,
    ),
    WeatherType.STORM: WeatherEffect(
        weather_type=WeatherType.STORM,
        duration=2,
        movement_modifier=0.5,
        resource_modifier=0.8,
        damage_modifier=1.3,
    ),
    WeatherType.FOG: WeatherEffect(
        weather_type=WeatherType.FOG,
        duration=3,
        movement_modifier=0.7,
        damage_modifier=0.8,
        visibility_reduced=True,
    ),
}

# Table order used for uniform rolls
WEATHER_ORDER = [
    WeatherType.CALM,
    WeatherType.TRADE_WINDS,
    WeatherType.STORM,
    WeatherType.FOG,
]


def roll_weather(rng: GameRNG) -> WeatherEffect:
    """Pick a fresh weather effect uniformly from the table."""
    return WEATHER_TABLE[rng.choice(WEATHER_ORDER)]


def tick_weather(weather: WeatherEffect | None, rng: GameRNG) -> WeatherEffect:
    """Advance weather by one full round.

    Duration drops by one. When it reaches zero, or on a
    WEATHER_REROLL_CHANCE roll regardless of expiry, a new weather effect is
    rolled. Missing or already-expired weather is always re-rolled.

    Args:
        weather: Weather in force during the round that just ended
        rng: Random source for the re-roll chance and the new pick

    Returns:
        Weather for the next round
    """
    if weather is None or weather.duration <= 0:
        return roll_weather(rng)

    remaining = replace(weather, duration=weather.duration - 1)
    if remaining.duration == 0 or rng.chance(WEATHER_REROLL_CHANCE):
        new_weather = roll_weather(rng)
        logger.info(
            "Weather changed: %s -> %s",
            weather.weather_type.value,
            new_weather.weather_type.value,
        )
        return new_weather
    return remaining


def movement_modifier(weather: WeatherEffect | None) -> float:
    return weather.movement_modifier if weather else 1.0


def resource_modifier(weather: WeatherEffect | None) -> float:
    return weather.resource_modifier if weather else 1.0


def damage_modifier(weather: WeatherEffect | None) -> float:
    return weather.damage_modifier if weather else 1.0
