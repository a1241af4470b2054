"""Player data model."""

from dataclasses import dataclass, replace
from enum import Enum

from .coordinate import Coordinate
from .resources import Resources
from .ship import Ship


class Difficulty(str, Enum):
    """AI difficulty tiers."""

    NOVICE = "novice"
    PIRATE = "pirate"
    CAPTAIN = "captain"
    ADMIRAL = "admiral"


@dataclass(frozen=True)
class Player:
    """A captain in the match, human or AI.

    Ships are owned exclusively by one player. The decision-time counters
    feed skill scoring only and never affect rule outcomes.
    """

    id: str
    name: str
    resources: Resources = Resources()
    ships: tuple[Ship, ...] = ()
    territories: tuple[Coordinate, ...] = ()
    total_score: int = 0
    is_active: bool = True
    consecutive_attacks: int = 0  # Momentum streak
    last_action_was_attack: bool = False
    scan_charges: int = 0
    is_ai: bool = False
    difficulty: Difficulty | None = None  # Set for AI players
    average_decision_time_ms: float = 0.0
    total_moves: int = 0
    speed_bonus_accumulated: int = 0

    def __post_init__(self):
        """Validate player data after initialization."""
        if not self.id:
            raise ValueError("id cannot be empty")
        if self.consecutive_attacks < 0:
            raise ValueError(
                f"Invalid consecutive_attacks: {self.consecutive_attacks} (must be >= 0)"
            )
        if self.scan_charges < 0:
            raise ValueError(f"Invalid scan_charges: {self.scan_charges} (must be >= 0)")
        if self.is_ai and self.difficulty is None:
            raise ValueError(f"AI player {self.id} must have a difficulty")
        for ship in self.ships:
            if ship.owner != self.id:
                raise ValueError(
                    f"Invalid ship owner: {ship.id} belongs to {ship.owner}, not {self.id}"
                )

    @property
    def living_ships(self) -> list[Ship]:
        return [s for s in self.ships if s.is_alive]

    @property
    def has_living_ship(self) -> bool:
        return any(s.is_alive for s in self.ships)

    def ship_by_id(self, ship_id: str) -> Ship | None:
        for ship in self.ships:
            if ship.id == ship_id:
                return ship
        return None

    def with_ship(self, ship: Ship) -> "Player":
        """Return a copy with the ship of the same id replaced."""
        return replace(
            self, ships=tuple(ship if s.id == ship.id else s for s in self.ships)
        )

    def controls(self, coord: Coordinate) -> bool:
        return coord in self.territories

    def with_momentum_reset(self) -> "Player":
        return replace(self, consecutive_attacks=0, last_action_was_attack=False)
