"""FastAPI server for PIR8.

Provides an HTTP API for a human player to play practice games against an
AI captain. After each accepted human action the AI replies immediately,
so a response always reflects a state where the human is to act (or the
game is over).
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..models import ActionResult, GameStatus
from .schemas.requests import CreateGameRequest, PlayerRequest, SubmitActionRequest
from .schemas.responses import (
    AITurnResponse,
    CreateGameResponse,
    GameStateResponse,
    SubmitActionResponse,
)
from .session import GameSession, GameSessionManager

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Global session manager
sessions = GameSessionManager()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown."""
    logger.info("PIR8 server starting...")
    yield
    logger.info("PIR8 server shutting down...")
    await sessions.cleanup_all()


app = FastAPI(
    title="PIR8 API",
    description="Web API for human vs AI naval strategy games",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _get_session(game_id: str) -> GameSession:
    session = sessions.get(game_id)
    if not session:
        raise HTTPException(status_code=404, detail="Game not found")
    return session


def _require_playable(session: GameSession, player_id: str):
    if session.state.status == GameStatus.COMPLETED:
        raise HTTPException(
            status_code=400,
            detail=f"Game already ended. Winner: {session.state.winner}",
        )
    if player_id != session.human_player_id:
        raise HTTPException(status_code=400, detail="Player is not the human player of this game")


def _action_response(session: GameSession, result: ActionResult) -> SubmitActionResponse:
    return SubmitActionResponse(
        accepted=result.success,
        message=result.message,
        turn=session.state.turn_number,
        winner=session.state.winner,
        aiTurns=[AITurnResponse(**summary) for summary in session.ai_turn_summaries()],
        state=session.snapshot(),
    )


# ============================================
# API ENDPOINTS
# ============================================


@app.get("/api")
async def api_root():
    """API root endpoint - server health check."""
    return {
        "service": "PIR8",
        "status": "operational",
        "activeGames": len(sessions.sessions),
    }


@app.post("/api/games", response_model=CreateGameResponse)
async def create_game(request: CreateGameRequest):
    """Create a new Human vs AI game.

    Example:
        POST /api/games
        {
          "playerName": "Morgan",
          "difficulty": "captain",
          "seed": 42
        }
    """
    session = sessions.create_session(
        player_name=request.playerName,
        difficulty=request.difficulty,
        seed=request.seed,
    )
    return CreateGameResponse(
        gameId=session.id,
        humanPlayer=session.human_player_id,
        aiPlayer=session.ai_player_id,
        seed=session.seed,
        state=session.snapshot(),
    )


@app.get("/api/games/{game_id}/state", response_model=GameStateResponse)
async def get_game_state(game_id: str):
    """Get current game state."""
    session = _get_session(game_id)
    current = session.state.current_player
    return GameStateResponse(
        gameId=game_id,
        turn=session.state.turn_number,
        status=session.state.status.value,
        currentPlayerId=current.id if current else None,
        winner=session.state.winner,
        state=session.snapshot(),
    )


@app.post("/api/games/{game_id}/actions", response_model=SubmitActionResponse)
async def submit_action(game_id: str, request: SubmitActionRequest):
    """Apply one human action, then let the AI take its turns.

    A rejected action is reported with accepted=false and leaves the game
    unchanged; the human keeps the turn.

    Example:
        POST /api/games/game-abc123/actions
        {
          "playerId": "human-1a2b3c",
          "action": {"type": "move_ship", "shipId": "human-1a2b3c_scout_1",
                     "destination": {"x": 3, "y": 2}}
        }
    """
    session = _get_session(game_id)
    _require_playable(session, request.playerId)

    try:
        action = request.action.to_action()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    result = session.submit_action(request.playerId, action, request.decisionTimeMs)
    if not result.success:
        logger.warning(f"Game {game_id}: Action rejected: {result.message}")
    else:
        logger.info(f"Game {game_id}: {result.message}")
    return _action_response(session, result)


@app.post("/api/games/{game_id}/pass", response_model=SubmitActionResponse)
async def pass_turn(game_id: str, request: PlayerRequest):
    """Skip the human's action for this turn."""
    session = _get_session(game_id)
    _require_playable(session, request.playerId)
    return _action_response(session, session.pass_turn(request.playerId))


@app.post("/api/games/{game_id}/resign", response_model=SubmitActionResponse)
async def resign_game(game_id: str, request: PlayerRequest):
    """Resign the human player, ending the practice game."""
    session = _get_session(game_id)
    _require_playable(session, request.playerId)
    return _action_response(session, session.resign(request.playerId))


@app.delete("/api/games/{game_id}")
async def delete_game(game_id: str):
    """Delete a game session."""
    if sessions.delete(game_id):
        return {"message": f"Game {game_id} deleted"}
    raise HTTPException(status_code=404, detail="Game not found")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
