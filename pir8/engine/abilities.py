"""Ship special abilities, cooldowns, and timed status effects."""

from dataclasses import dataclass, replace
from enum import Enum

from ..models import (
    Coordinate,
    EffectType,
    GameState,
    Resources,
    Ship,
    ShipAbility,
    ShipType,
    StatusEffect,
    TerrainType,
)
from ..utils import chebyshev_distance, euclidean_distance
from ..utils.constants import RANGE_REACH

STARTING_ABILITY_CHARGES = 3
SPY_GLASS_RADIUS = 2  # 5x5 area centred on the ship


class AbilityKind(str, Enum):
    UTILITY = "utility"
    OFFENSIVE = "offensive"
    DEFENSIVE = "defensive"


@dataclass(frozen=True)
class AbilitySpec:
    """Static definition of one ship tier's ability.

    Attributes:
        name: Display name
        description: One-line rules text
        kind: Utility, offensive, or defensive
        cooldown: Turns before the ability is ready again
        cost: Resources debited on use
        range: Integer range tier (0 for self-only)
        max_targets: Ships hit by an offensive ability
        damage_multiplier: Scales normal attack damage
        effect_duration: Turns a defensive effect lasts
    """

    name: str
    description: str
    kind: AbilityKind
    cooldown: int
    cost: Resources
    range: int = 0
    max_targets: int = 0
    damage_multiplier: float = 1.0
    effect_duration: int = 0


ABILITY_SPECS: dict[ShipType, AbilitySpec] = {
    ShipType.SCOUT: AbilitySpec(
        name="Spy Glass",
        description="Reveal a 5x5 area, spotting enemy ships and treasures",
        kind=AbilityKind.UTILITY,
        cooldown=2,
        cost=Resources(gold=50),
        range=SPY_GLASS_RADIUS,
    ),
    ShipType.FRIGATE: AbilitySpec(
        name="Broadside",
        description="Fire all guns at up to 2 enemy ships within range 3",
        kind=AbilityKind.OFFENSIVE,
        cooldown=3,
        cost=Resources(cannons=2),
        range=3,
        max_targets=2,
    ),
    ShipType.GALLEON: AbilitySpec(
        name="Fortress Mode",
        description="+50% defense for 2 turns, but cannot move",
        kind=AbilityKind.DEFENSIVE,
        cooldown=3,
        cost=Resources(supplies=30),
        effect_duration=2,
    ),
    ShipType.FLAGSHIP: AbilitySpec(
        name="Devastating Volley",
        description="2x damage to a single target within range 2",
        kind=AbilityKind.OFFENSIVE,
        cooldown=4,
        cost=Resources(cannons=4, supplies=20),
        range=2,
        max_targets=1,
        damage_multiplier=2.0,
    ),
}

FORTRESS_DEFENSE_BONUS = 0.5


@dataclass(frozen=True)
class EffectiveStats:
    """Ship stats after status effects are applied."""

    attack: int
    defense: float
    speed: int
    can_move: bool


@dataclass(frozen=True)
class ScanReport:
    """What a Spy Glass sweep found."""

    center: Coordinate
    treasures: tuple[Coordinate, ...]
    enemy_ship_ids: tuple[str, ...]


def ability_spec(ship_type: ShipType) -> AbilitySpec:
    return ABILITY_SPECS[ship_type]


def initialize_ability(ship_type: ShipType) -> ShipAbility:
    """Fresh, ready ability state for a newly built ship."""
    spec = ABILITY_SPECS[ship_type]
    return ShipAbility(
        name=spec.name,
        cooldown=spec.cooldown,
        current_cooldown=0,
        charges=STARTING_ABILITY_CHARGES,
    )


def ability_unavailable_reason(ship: Ship, resources: Resources) -> str | None:
    """Explain why a ship cannot use its ability now.

    Returns:
        Reason text, or None if the ability can be used
    """
    if not ship.is_alive:
        return "Ship destroyed"
    if ship.ability is None:
        return "Ship has no ability"
    if ship.ability.charges <= 0:
        return f"{ship.ability.name} has no charges left"
    if ship.ability.current_cooldown > 0:
        return f"On cooldown for {ship.ability.current_cooldown} more turns"
    cost = ABILITY_SPECS[ship.ship_type].cost
    if not resources.can_afford(cost):
        return f"Need {cost.describe()}"
    return None


def start_cooldown(ship: Ship) -> Ship:
    """Consume one charge and put the ability on cooldown."""
    ability = ship.ability
    if ability is None:
        return ship
    return replace(
        ship,
        ability=replace(
            ability,
            current_cooldown=ability.cooldown,
            charges=max(0, ability.charges - 1),
        ),
    )


def tick_ability_cooldown(ship: Ship) -> Ship:
    """Reduce a running cooldown by one turn."""
    ability = ship.ability
    if ability is None or ability.current_cooldown == 0:
        return ship
    return replace(
        ship, ability=replace(ability, current_cooldown=ability.current_cooldown - 1)
    )


def tick_ship_effects(ship: Ship) -> Ship:
    """Decrement every status effect and drop the ones that expire."""
    if not ship.effects:
        return ship
    remaining = tuple(
        replace(e, duration=e.duration - 1) for e in ship.effects if e.duration > 1
    )
    return replace(ship, effects=remaining)


def fortress_effects(ship: Ship) -> tuple[StatusEffect, ...]:
    spec = ABILITY_SPECS[ShipType.GALLEON]
    return (
        StatusEffect(
            effect_type=EffectType.DEFENSE_BUFF,
            duration=spec.effect_duration,
            magnitude=FORTRESS_DEFENSE_BONUS,
            source=ship.id,
        ),
        StatusEffect(
            effect_type=EffectType.IMMOBILE,
            duration=spec.effect_duration,
            magnitude=1.0,
            source=ship.id,
        ),
    )


def effective_stats(ship: Ship) -> EffectiveStats:
    """Apply active status effects to a ship's listed stats."""
    defense: float = ship.defense
    can_move = True
    for effect in ship.effects:
        if effect.duration <= 0:
            continue
        if effect.effect_type == EffectType.DEFENSE_BUFF:
            defense *= 1 + effect.magnitude
        elif effect.effect_type == EffectType.IMMOBILE:
            can_move = False
    return EffectiveStats(
        attack=ship.attack,
        defense=defense,
        speed=ship.speed if can_move else 0,
        can_move=can_move,
    )


def enemies_in_reach(
    ship: Ship, state: GameState, range_tier: int, limit: int
) -> list[Ship]:
    """Nearest living enemy ships within range_tier * 1.5, closest first."""
    reach = range_tier * RANGE_REACH
    candidates = []
    for player in state.players:
        if player.id == ship.owner:
            continue
        for enemy in player.living_ships:
            distance = euclidean_distance(
                ship.position.x, ship.position.y, enemy.position.x, enemy.position.y
            )
            if distance <= reach:
                candidates.append((distance, enemy.id, enemy))
    candidates.sort(key=lambda c: (c[0], c[1]))
    return [enemy for _, _, enemy in candidates[:limit]]


def spy_glass_scan(ship: Ship, state: GameState) -> ScanReport:
    """Report treasures and enemy ships in the 5x5 area around a ship."""
    game_map = state.game_map
    treasures = tuple(
        c
        for c in game_map.cells_of_type(TerrainType.TREASURE)
        if chebyshev_distance(c.x, c.y, ship.position.x, ship.position.y)
        <= SPY_GLASS_RADIUS
    )
    enemies = tuple(
        enemy.id
        for player in state.players
        if player.id != ship.owner
        for enemy in player.living_ships
        if chebyshev_distance(
            enemy.position.x, enemy.position.y, ship.position.x, ship.position.y
        )
        <= SPY_GLASS_RADIUS
    )
    return ScanReport(center=ship.position, treasures=treasures, enemy_ship_ids=enemies)
