"""Pydantic response schemas for API endpoints."""

from pydantic import BaseModel, Field


class GameStateResponse(BaseModel):
    """Response containing current game state."""

    gameId: str  # noqa: N815
    turn: int
    status: str
    currentPlayerId: str | None  # noqa: N815
    winner: str | None
    state: dict


class CreateGameResponse(BaseModel):
    """Response after creating a new game."""

    gameId: str  # noqa: N815
    humanPlayer: str  # noqa: N815
    aiPlayer: str  # noqa: N815
    seed: int
    state: dict


class AITurnResponse(BaseModel):
    """Summary of one AI turn."""

    playerId: str  # noqa: N815
    action: dict | None
    success: bool
    message: str
    reason: str | None = None
    score: float | None = None


class SubmitActionResponse(BaseModel):
    """Response after applying an action (or a pass/resign)."""

    accepted: bool
    message: str
    turn: int
    winner: str | None = None
    aiTurns: list[AITurnResponse] = Field(default_factory=list)  # noqa: N815
    state: dict | None = None
