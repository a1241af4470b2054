"""Tests for weather rolls and ticking."""

from dataclasses import replace

from pir8.engine.weather import (
    WEATHER_TABLE,
    damage_modifier,
    movement_modifier,
    resource_modifier,
    roll_weather,
    tick_weather,
)
from pir8.models import WeatherType
from pir8.utils import GameRNG


class ScriptedRNG:
    """Returns queued rolls; choice always picks the last entry."""

    def __init__(self, rolls):
        self.rolls = list(rolls)

    def random(self):
        return self.rolls.pop(0)

    def chance(self, probability):
        return self.random() < probability

    def choice(self, seq):
        return seq[-1]


def test_table_values():
    """Test the weather table multipliers."""
    storm = WEATHER_TABLE[WeatherType.STORM]
    assert storm.movement_modifier == 0.5
    assert storm.damage_modifier == 1.3
    assert storm.duration == 2
    fog = WEATHER_TABLE[WeatherType.FOG]
    assert fog.visibility_reduced
    assert WEATHER_TABLE[WeatherType.TRADE_WINDS].movement_modifier == 1.5
    assert WEATHER_TABLE[WeatherType.CALM].resource_modifier == 1.2


def test_roll_weather_from_table():
    rng = GameRNG(42)
    for _ in range(20):
        assert roll_weather(rng) in WEATHER_TABLE.values()


def test_tick_decrements_duration():
    """No reroll: duration drops by one and the weather type stays."""
    trade_winds = WEATHER_TABLE[WeatherType.TRADE_WINDS]
    ticked = tick_weather(trade_winds, ScriptedRNG([0.99]))
    assert ticked.weather_type == WeatherType.TRADE_WINDS
    assert ticked.duration == 2


def test_tick_rerolls_on_expiry():
    """Duration reaching zero always rolls new weather."""
    calm = replace(WEATHER_TABLE[WeatherType.CALM], duration=1)
    ticked = tick_weather(calm, ScriptedRNG([]))
    assert ticked == WEATHER_TABLE[WeatherType.FOG]


def test_tick_random_reroll():
    """A 15% roll changes weather early."""
    calm = WEATHER_TABLE[WeatherType.CALM]
    ticked = tick_weather(calm, ScriptedRNG([0.10]))
    assert ticked == WEATHER_TABLE[WeatherType.FOG]


def test_tick_missing_weather_rolls():
    assert tick_weather(None, ScriptedRNG([])) == WEATHER_TABLE[WeatherType.FOG]


def test_modifiers_default_without_weather():
    assert movement_modifier(None) == 1.0
    assert resource_modifier(None) == 1.0
    assert damage_modifier(None) == 1.0
    storm = WEATHER_TABLE[WeatherType.STORM]
    assert movement_modifier(storm) == 0.5
    assert resource_modifier(storm) == 0.8
    assert damage_modifier(storm) == 1.3
