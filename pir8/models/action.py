"""Player action data models.

Each action kind is its own typed record, so payload shape is fixed by the
type rather than checked at runtime.
"""

from dataclasses import dataclass
from typing import ClassVar, Union

from .coordinate import Coordinate
from .game import GameState
from .ship import ShipType


@dataclass(frozen=True)
class MoveShip:
    action_type: ClassVar[str] = "move_ship"

    ship_id: str
    destination: Coordinate


@dataclass(frozen=True)
class Attack:
    action_type: ClassVar[str] = "attack"

    ship_id: str
    target_ship_id: str


@dataclass(frozen=True)
class ClaimTerritory:
    action_type: ClassVar[str] = "claim_territory"

    ship_id: str
    coordinate: Coordinate


@dataclass(frozen=True)
class CollectResources:
    action_type: ClassVar[str] = "collect_resources"

    ship_id: str


@dataclass(frozen=True)
class BuildShip:
    action_type: ClassVar[str] = "build_ship"

    ship_type: ShipType
    coordinate: Coordinate


@dataclass(frozen=True)
class UseAbility:
    action_type: ClassVar[str] = "use_ability"

    ship_id: str
    target_ship_id: str | None = None


Action = Union[MoveShip, Attack, ClaimTerritory, CollectResources, BuildShip, UseAbility]


@dataclass(frozen=True)
class ActionRecord:
    """An action request as it arrives from an input layer.

    The acting player's identity is trusted; authentication happens upstream.
    """

    id: str
    game_id: str
    player_id: str
    action: Action
    timestamp: float
    decision_time_ms: int | None = None  # Feeds skill stats when present


@dataclass(frozen=True)
class ActionResult:
    """Outcome of applying one action.

    On failure, state is the unchanged input state.
    """

    state: GameState
    success: bool
    message: str
