"""Ship data model with ability and status-effect state."""

from dataclasses import dataclass, replace
from enum import Enum

from .coordinate import Coordinate


class ShipType(str, Enum):
    """Ship tiers, in increasing cost and strength."""

    SCOUT = "scout"
    FRIGATE = "frigate"
    GALLEON = "galleon"
    FLAGSHIP = "flagship"


class EffectType(str, Enum):
    """Timed status effects a ship can carry."""

    DEFENSE_BUFF = "defense_buff"
    IMMOBILE = "immobile"


@dataclass(frozen=True)
class ShipAbility:
    """Special ability state: cooldown plus remaining charges."""

    name: str
    cooldown: int  # Turns between uses
    current_cooldown: int = 0  # Turns until ready
    charges: int = 3

    def __post_init__(self):
        """Validate ability data after initialization."""
        if self.cooldown < 0:
            raise ValueError(f"Invalid cooldown: {self.cooldown} (must be >= 0)")
        if self.current_cooldown < 0:
            raise ValueError(
                f"Invalid current_cooldown: {self.current_cooldown} (must be >= 0)"
            )
        if self.charges < 0:
            raise ValueError(f"Invalid charges: {self.charges} (must be >= 0)")

    @property
    def is_ready(self) -> bool:
        return self.current_cooldown == 0 and self.charges > 0


@dataclass(frozen=True)
class StatusEffect:
    """A timed modifier on a ship, dropped when duration reaches 0."""

    effect_type: EffectType
    duration: int  # Turns remaining
    magnitude: float = 0.0  # e.g. 0.5 for +50% defense
    source: str = ""  # Ability name that applied it

    def __post_init__(self):
        """Validate effect data after initialization."""
        if self.duration < 0:
            raise ValueError(f"Invalid duration: {self.duration} (must be >= 0)")


@dataclass(frozen=True)
class Ship:
    """A single ship in a player's fleet.

    A ship at 0 health is destroyed: it stays in the roster for
    record-keeping but can no longer move, attack, claim, or collect.
    """

    id: str  # e.g. "p1_frigate_1"
    owner: str  # Owning player id
    ship_type: ShipType
    health: int
    max_health: int
    attack: int
    defense: int
    speed: int
    range: int
    position: Coordinate
    ability: ShipAbility | None = None
    effects: tuple[StatusEffect, ...] = ()

    def __post_init__(self):
        """Validate ship data after initialization."""
        if not self.id:
            raise ValueError("id cannot be empty")
        if self.max_health <= 0:
            raise ValueError(f"Invalid max_health: {self.max_health} (must be > 0)")
        if not 0 <= self.health <= self.max_health:
            raise ValueError(
                f"Invalid health: {self.health} (must be in [0, {self.max_health}])"
            )

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    def with_health(self, health: int | float) -> "Ship":
        """Return a copy with health clamped to [0, max_health]."""
        return replace(self, health=max(0, min(self.max_health, int(health))))

    def with_position(self, position: Coordinate) -> "Ship":
        return replace(self, position=position)

    def has_effect(self, effect_type: EffectType) -> bool:
        return any(e.effect_type == effect_type and e.duration > 0 for e in self.effects)
