"""Turn advancement: per-turn bookkeeping and the next-player search."""

import logging
from dataclasses import replace

from ..models import GameState, Player
from ..utils import GameRNG
from ..utils.constants import MAX_SCAN_CHARGES
from .abilities import tick_ability_cooldown, tick_ship_effects
from .weather import tick_weather

logger = logging.getLogger(__name__)


def _tick_player(player: Player) -> Player:
    """Regenerate a scan charge, reset momentum, and tick every ship."""
    return replace(
        player,
        scan_charges=min(player.scan_charges + 1, MAX_SCAN_CHARGES),
        consecutive_attacks=0,
        last_action_was_attack=False,
        ships=tuple(tick_ship_effects(tick_ability_cooldown(s)) for s in player.ships),
    )


def is_eligible(player: Player) -> bool:
    """A player can take a turn while active and holding a living ship."""
    return player.is_active and player.has_living_ship


class TurnController:
    """Advances the turn pointer and ticks per-turn state.

    The controller does not decide whether the game is over; callers run
    victory.check_game_end() after each advance.
    """

    def __init__(self, rng: GameRNG):
        """Initialize controller.

        Args:
            rng: Random source for weather re-rolls
        """
        self.rng = rng

    def advance(self, state: GameState) -> GameState:
        """Hand the turn to the next eligible player.

        Every player regains one scan charge (capped) and has momentum reset;
        every ship ticks its ability cooldown and status effects. The pointer
        then moves to the next player that is active with a living ship,
        skipping the rest. Passing seat 0 completes a round: the turn number
        increases by exactly one and the weather ticks.

        If no other player is eligible the pointer stays where it is; the
        caller should treat that as a terminal position.

        Args:
            state: Current game state

        Returns:
            New game state
        """
        players = tuple(_tick_player(p) for p in state.players)
        count = len(players)
        if count == 0:
            return state

        start = state.current_player_index
        next_index = start
        wrapped = False
        for step in range(1, count + 1):
            candidate = (start + step) % count
            if candidate == 0:
                wrapped = True
            if candidate == start:
                break
            if is_eligible(players[candidate]):
                next_index = candidate
                break

        if next_index == start:
            # Nobody else can move; the round does not complete
            logger.info(
                "No other eligible player in game %s; pointer stays at %d",
                state.game_id,
                start,
            )
            return replace(state, players=players)

        turn_number = state.turn_number
        weather = state.weather
        if wrapped:
            turn_number += 1
            weather = tick_weather(weather, self.rng)

        new_state = replace(
            state,
            players=players,
            current_player_index=next_index,
            turn_number=turn_number,
            weather=weather,
        )
        if wrapped:
            logger.info("Game %s: turn %d begins", state.game_id, turn_number)
            new_state = new_state.with_event(
                "turn_advanced", None, f"Turn {turn_number} begins"
            )
        return new_state
