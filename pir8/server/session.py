"""Game session management for human vs AI practice games."""

import logging
import time
import uuid
from dataclasses import dataclass, field

from ..engine.game_engine import AITurn, GameEngine
from ..engine.game_setup import create_player, create_practice_game
from ..models import Action, ActionRecord, ActionResult, Difficulty, GameState
from ..utils.rng import GameRNG
from ..utils.serialization import serialize_action, serialize_game_state

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """One practice game (human vs AI).

    The session is the single owner of the current snapshot: every request
    loads it, runs the engine, and commits the returned state.
    """

    id: str
    seed: int
    engine: GameEngine
    state: GameState
    human_player_id: str
    ai_player_id: str
    last_ai_turns: list[AITurn] = field(default_factory=list)
    action_counter: int = 0

    def snapshot(self) -> dict:
        return serialize_game_state(self.state)

    def _commit(self, result: ActionResult) -> ActionResult:
        """Adopt a successful result, then let the AI play until it is the human's turn."""
        if not result.success:
            self.last_ai_turns = []
            return result
        self.state, self.last_ai_turns = self.engine.play_until_human_or_end(result.state)
        return ActionResult(self.state, True, result.message)

    def submit_action(
        self, player_id: str, action: Action, decision_time_ms: int | None = None
    ) -> ActionResult:
        """Apply a human action and run the AI replies.

        Args:
            player_id: Acting player id
            action: Typed action
            decision_time_ms: Optional decision time for skill stats

        Returns:
            ActionResult for the human's action
        """
        self.action_counter += 1
        record = ActionRecord(
            id=f"{self.id}-{self.action_counter}",
            game_id=self.state.game_id,
            player_id=player_id,
            action=action,
            timestamp=time.time(),
            decision_time_ms=decision_time_ms,
        )
        return self._commit(self.engine.submit(self.state, record))

    def pass_turn(self, player_id: str) -> ActionResult:
        return self._commit(self.engine.pass_turn(self.state, player_id))

    def resign(self, player_id: str) -> ActionResult:
        return self._commit(self.engine.resign(self.state, player_id))

    def ai_turn_summaries(self) -> list[dict]:
        """Describe the AI turns taken after the last request."""
        summaries = []
        for turn in self.last_ai_turns:
            chosen = turn.decision.reasoning.chosen
            summaries.append(
                {
                    "playerId": turn.player_id,
                    "action": serialize_action(turn.decision.action)
                    if turn.decision.action
                    else None,
                    "success": turn.result.success if turn.result else True,
                    "message": turn.result.message if turn.result else "Passed",
                    "reason": chosen.reason if chosen else None,
                    "score": chosen.score if chosen else None,
                }
            )
        return summaries


class GameSessionManager:
    """Manages all active game sessions.

    In-memory storage; sessions are independent and share nothing.
    """

    def __init__(self):
        self.sessions: dict[str, GameSession] = {}

    def create_session(
        self,
        player_name: str = "Captain",
        difficulty: Difficulty = Difficulty.PIRATE,
        seed: int | None = None,
    ) -> GameSession:
        """Create a new practice game with an AI opponent.

        Args:
            player_name: Human player's display name
            difficulty: AI tier
            seed: Optional RNG seed for determinism

        Returns:
            Newly created GameSession
        """
        game_id = f"game-{uuid.uuid4().hex[:8]}"
        if seed is None:
            seed = uuid.uuid4().int % (2**32)

        rng = GameRNG(seed)
        human = create_player(f"human-{uuid.uuid4().hex[:6]}", player_name)
        state = create_practice_game(human, difficulty, rng, game_id=game_id)
        ai_player_id = state.players[1].id

        session = GameSession(
            id=game_id,
            seed=seed,
            engine=GameEngine(rng),
            state=state,
            human_player_id=human.id,
            ai_player_id=ai_player_id,
        )
        self.sessions[game_id] = session

        logger.info(
            f"Created game {game_id}: human={human.id}, AI={ai_player_id}, "
            f"difficulty={difficulty.value}, seed={seed}"
        )
        return session

    def get(self, game_id: str) -> GameSession | None:
        """Get a game session by ID.

        Args:
            game_id: Game session ID

        Returns:
            GameSession if found, None otherwise
        """
        return self.sessions.get(game_id)

    def delete(self, game_id: str) -> bool:
        """Delete a game session.

        Args:
            game_id: Game session ID

        Returns:
            True if deleted, False if not found
        """
        if game_id in self.sessions:
            del self.sessions[game_id]
            logger.info(f"Deleted game {game_id}")
            return True
        return False

    async def cleanup_all(self):
        """Clean up all sessions (called on shutdown)."""
        logger.info(f"Cleaning up {len(self.sessions)} game sessions")
        self.sessions.clear()
