"""Per-turn control flow tying the engine components together.

A turn is: apply one action, hand the turn on, check for a terminal
position. When the next player is an AI, the planner picks its action and
the same loop runs again until a human is to act or the game ends.
"""

import logging
import time
from dataclasses import dataclass

from ..models import ActionRecord, ActionResult, GameState, GameStatus
from ..utils import GameRNG
from ..utils.constants import MAX_TURNS
from .actions import ActionProcessor
from .ai_planner import AIDecision, AIPlanner
from .turn_controller import TurnController
from .victory import check_game_end, resign

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AITurn:
    """Record of one AI turn, for display and debugging."""

    player_id: str
    decision: AIDecision
    result: ActionResult | None  # None when the AI passed


class GameEngine:
    """Runs matches using one injected random source.

    Holds no game state: every method takes a GameState and returns a new
    one, so one engine can drive many independent games.
    """

    def __init__(self, rng: GameRNG | None = None, max_turns: int = MAX_TURNS):
        """Initialize engine.

        Args:
            rng: Random source shared by all components; unseeded if omitted
            max_turns: Turn number at which the score decides the game
        """
        self.rng = rng if rng is not None else GameRNG()
        self.max_turns = max_turns
        self.processor = ActionProcessor(self.rng)
        self.turns = TurnController(self.rng)
        self.planner = AIPlanner(self.rng)
        self._action_counter = 0

    def _next_action_id(self) -> str:
        self._action_counter += 1
        return f"action_{self._action_counter}"

    def end_turn(self, state: GameState) -> GameState:
        """Advance to the next player and apply any terminal condition."""
        advanced = self.turns.advance(state)
        return check_game_end(advanced, self.max_turns).state

    def submit(self, state: GameState, record: ActionRecord) -> ActionResult:
        """Apply a player action and, if it succeeds, end that player's turn.

        Args:
            state: Current game state
            record: Action from the current player

        Returns:
            ActionResult; on failure the turn does not pass
        """
        result = self.processor.apply(state, record)
        if not result.success:
            return result
        return ActionResult(self.end_turn(result.state), True, result.message)

    def pass_turn(self, state: GameState, player_id: str) -> ActionResult:
        """Let the current player skip their action."""
        if state.status != GameStatus.ACTIVE:
            return ActionResult(state, False, "Game is not active")
        current = state.current_player
        if current is None or current.id != player_id:
            return ActionResult(state, False, "Not your turn")
        passed = state.with_event("turn_passed", player_id, f"{current.name} passed")
        return ActionResult(self.end_turn(passed), True, "Turn passed")

    def resign(self, state: GameState, player_id: str) -> ActionResult:
        """Resign a player, handing on the turn if it was theirs."""
        player = state.player_by_id(player_id)
        if player is None:
            return ActionResult(state, False, "Player not found")
        if not player.is_active:
            return ActionResult(state, False, "Player is no longer active")

        was_current = state.current_player is not None and state.current_player.id == player_id
        new_state = resign(state, player_id)
        if new_state.status == GameStatus.ACTIVE:
            if was_current:
                new_state = self.turns.advance(new_state)
            new_state = check_game_end(new_state, self.max_turns).state
        return ActionResult(new_state, True, f"{player.name} resigned")

    def run_ai_turn(self, state: GameState) -> tuple[GameState, AITurn]:
        """Let the current (AI) player decide and act, then end its turn.

        The turn always passes, even if the AI has no legal option or its
        action is rejected, so a match can never stall on an AI.

        Args:
            state: Active state whose current player is an AI

        Returns:
            (new_state, AITurn record)

        Raises:
            ValueError: If the current player is not an AI
        """
        player = state.current_player
        if player is None or not player.is_ai:
            raise ValueError("run_ai_turn called when the current player is not an AI")

        decision = self.planner.decide(state, player)
        if decision.action is None:
            logger.info("AI %s passes", player.id)
            passed = state.with_event("turn_passed", player.id, f"{player.name} passed")
            return self.end_turn(passed), AITurn(player.id, decision, None)

        record = ActionRecord(
            id=self._next_action_id(),
            game_id=state.game_id,
            player_id=player.id,
            action=decision.action,
            timestamp=time.time(),
        )
        result = self.processor.apply(state, record)
        if not result.success:
            logger.warning("AI %s action rejected: %s", player.id, result.message)
        next_state = self.end_turn(result.state)
        return next_state, AITurn(player.id, decision, result)

    def play_until_human_or_end(
        self, state: GameState, max_ai_turns: int = 1000
    ) -> tuple[GameState, list[AITurn]]:
        """Run consecutive AI turns until a human must act or the game ends.

        Args:
            state: Current game state
            max_ai_turns: Safety bound on AI turns in one call

        Returns:
            (new_state, AI turns taken in order)
        """
        taken: list[AITurn] = []
        while (
            state.status == GameStatus.ACTIVE
            and state.current_player is not None
            and state.current_player.is_ai
            and len(taken) < max_ai_turns
        ):
            state, turn = self.run_ai_turn(state)
            taken.append(turn)
        return state, taken
