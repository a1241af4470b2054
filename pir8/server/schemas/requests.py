"""Pydantic request schemas for API endpoints."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from ...models import (
    Action,
    Attack,
    BuildShip,
    ClaimTerritory,
    CollectResources,
    Coordinate,
    Difficulty,
    MoveShip,
    ShipType,
    UseAbility,
)


class CreateGameRequest(BaseModel):
    """Request to create a new practice game against an AI captain."""

    playerName: str = Field(  # noqa: N815
        default="Captain", min_length=1, description="Display name of the human player"
    )
    difficulty: Difficulty = Field(
        default=Difficulty.PIRATE,
        description="AI tier: 'novice', 'pirate', 'captain', or 'admiral'",
    )
    seed: int | None = Field(default=None, description="Optional RNG seed for determinism")


class CoordinateModel(BaseModel):
    """Grid cell position."""

    x: int = Field(ge=0, description="Column index")
    y: int = Field(ge=0, description="Row index")

    def to_coordinate(self) -> Coordinate:
        return Coordinate(self.x, self.y)


class MoveShipRequest(BaseModel):
    type: Literal["move_ship"]
    shipId: str  # noqa: N815
    destination: CoordinateModel

    def to_action(self) -> Action:
        return MoveShip(ship_id=self.shipId, destination=self.destination.to_coordinate())


class AttackRequest(BaseModel):
    type: Literal["attack"]
    shipId: str  # noqa: N815
    targetShipId: str  # noqa: N815

    def to_action(self) -> Action:
        return Attack(ship_id=self.shipId, target_ship_id=self.targetShipId)


class ClaimTerritoryRequest(BaseModel):
    type: Literal["claim_territory"]
    shipId: str  # noqa: N815
    coordinate: CoordinateModel

    def to_action(self) -> Action:
        return ClaimTerritory(ship_id=self.shipId, coordinate=self.coordinate.to_coordinate())


class CollectResourcesRequest(BaseModel):
    type: Literal["collect_resources"]
    shipId: str  # noqa: N815

    def to_action(self) -> Action:
        return CollectResources(ship_id=self.shipId)


class BuildShipRequest(BaseModel):
    type: Literal["build_ship"]
    shipType: ShipType  # noqa: N815
    coordinate: CoordinateModel

    def to_action(self) -> Action:
        return BuildShip(ship_type=self.shipType, coordinate=self.coordinate.to_coordinate())


class UseAbilityRequest(BaseModel):
    type: Literal["use_ability"]
    shipId: str  # noqa: N815
    targetShipId: str | None = None  # noqa: N815

    def to_action(self) -> Action:
        return UseAbility(ship_id=self.shipId, target_ship_id=self.targetShipId)


ActionRequest = Annotated[
    Union[
        MoveShipRequest,
        AttackRequest,
        ClaimTerritoryRequest,
        CollectResourcesRequest,
        BuildShipRequest,
        UseAbilityRequest,
    ],
    Field(discriminator="type"),
]


class SubmitActionRequest(BaseModel):
    """Request to apply one action for the human player."""

    playerId: str = Field(description="Acting player id")  # noqa: N815
    action: ActionRequest = Field(description="Action tagged by its 'type' field")
    decisionTimeMs: int | None = Field(  # noqa: N815
        default=None, ge=0, description="Time the player took to decide, for skill stats"
    )


class PlayerRequest(BaseModel):
    """Request naming the acting player (pass, resign)."""

    playerId: str  # noqa: N815
