"""Victory condition checking, resignation, and score tie-breaks.

This module handles:
1. Last captain standing (one active player with a living ship)
2. Mutual destruction (no active player with a living ship, a draw)
3. Turn limit (winner decided by weighted score)
4. Territorial dominance (75% of all claimed territory plus a living ship)
5. Voluntary resignation
"""

import logging
from dataclasses import dataclass, replace

from ..models import GameState, GameStatus, Player
from ..utils.constants import DOMINANCE_THRESHOLD, MAX_TURNS, RESIGN_THRESHOLD
from .balance import player_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameEndResult:
    """Outcome of a terminal-condition check.

    Attributes:
        is_over: True if the game has ended
        winner: Winning player id, or None for a draw or ongoing game
        reason: Short label for the deciding condition
        state: Completed state when over, else the input state
    """

    is_over: bool
    winner: str | None
    reason: str | None
    state: GameState


def _complete(state: GameState, winner: str | None, reason: str) -> GameEndResult:
    description = f"Game over ({reason}): " + (
        f"{winner} wins" if winner else "no winner"
    )
    completed = replace(state, status=GameStatus.COMPLETED, winner=winner).with_event(
        "game_completed", winner, description
    )
    logger.info("Game %s completed: %s", state.game_id, description)
    return GameEndResult(is_over=True, winner=winner, reason=reason, state=completed)


def determine_winner_by_score(state: GameState) -> Player | None:
    """Return the highest-scoring player, first in roster order on ties."""
    players = list(state.players)
    if not players:
        return None
    best = None
    best_score = None
    for player in players:
        score = player_score(player, players, state.turn_number)
        if best_score is None or score > best_score:
            best, best_score = player, score
    return best


def check_game_end(state: GameState, max_turns: int = MAX_TURNS) -> GameEndResult:
    """Check terminal conditions in priority order.

    Only an active game can end; waiting and completed games are returned
    unchanged.

    Args:
        state: Current game state
        max_turns: Turn number at which the score decides the game

    Returns:
        GameEndResult describing the outcome
    """
    if state.status != GameStatus.ACTIVE:
        return GameEndResult(
            is_over=state.status == GameStatus.COMPLETED,
            winner=state.winner,
            reason=None,
            state=state,
        )

    contenders = state.contenders()

    if len(contenders) == 1:
        return _complete(state, contenders[0].id, "last fleet afloat")

    if not contenders:
        return _complete(state, None, "all fleets destroyed")

    if state.turn_number >= max_turns:
        winner = determine_winner_by_score(state)
        return _complete(state, winner.id if winner else None, "turn limit")

    total_claimed = sum(len(p.territories) for p in state.players)
    if total_claimed > 0:
        for player in contenders:
            if len(player.territories) / total_claimed >= DOMINANCE_THRESHOLD:
                return _complete(state, player.id, "territorial dominance")

    return GameEndResult(is_over=False, winner=None, reason=None, state=state)


def resign(state: GameState, player_id: str) -> GameState:
    """Remove a player from contention.

    If exactly one active player remains, the game completes with that
    player as winner. Unknown ids leave the state unchanged.
    """
    player = state.player_by_id(player_id)
    if player is None:
        logger.warning("Resign ignored: player %s not in game %s", player_id, state.game_id)
        return state

    new_state = state.with_player(replace(player, is_active=False)).with_event(
        "player_resigned", player_id, f"{player.name} resigned"
    )
    logger.info("Player %s resigned from game %s", player_id, state.game_id)

    active = [p for p in new_state.players if p.is_active]
    if len(active) == 1 and new_state.status != GameStatus.COMPLETED:
        return _complete(new_state, active[0].id, "resignation").state
    return new_state


def should_resign(state: GameState, player_id: str) -> bool:
    """Return True if a player's position is hopeless.

    Hopeless means fewer than 25% of the average living ships AND fewer
    than 25% of the average territories, averaged over active players that
    still hold a living ship.
    """
    player = state.player_by_id(player_id)
    contenders = state.contenders()
    if player is None or len(contenders) < 2:
        return False

    avg_ships = sum(len(p.living_ships) for p in contenders) / len(contenders)
    avg_territories = sum(len(p.territories) for p in contenders) / len(contenders)
    return (
        len(player.living_ships) < avg_ships * RESIGN_THRESHOLD
        and len(player.territories) < avg_territories * RESIGN_THRESHOLD
    )
