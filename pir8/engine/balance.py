"""Combat and economy resolver.

Pure functions and static tables shared by the action processor and the AI
planner, so that scoring and execution never diverge:
1. Ship tier stats and build costs
2. Terrain yields and collection multipliers
3. Combat damage (variance, momentum, critical hits, weather)
4. Comeback bonus and end-of-game scoring

Nothing here touches an RNG; callers roll dice and pass the outcome in.
"""

import math
from dataclasses import dataclass

from ..models.player import Player
from ..models.resources import Resources
from ..models.ship import Ship, ShipType
from ..models.terrain import TerrainType
from ..utils.constants import (
    COMEBACK_CAP,
    CRITICAL_MULTIPLIER,
    MOMENTUM_BONUS,
    MOMENTUM_STREAK,
    RANGE_REACH,
    SUDDEN_DEATH_TURN,
)
from ..utils.distance import euclidean_distance


@dataclass(frozen=True)
class ShipStats:
    """Static balance entry for one ship tier.

    Attributes:
        health: Starting and maximum health
        attack: Listed attack rating (displayed, not used in damage)
        defense: Damage reduction factor
        speed: Cells per move (Chebyshev)
        range: Integer cannon range tier
        strength: Damage scaling for attack and defense
        collection_multiplier: Yield multiplier when collecting
        cost: Build cost, debited in full
    """

    health: int
    attack: int
    defense: int
    speed: int
    range: int
    strength: float
    collection_multiplier: float
    cost: Resources


SHIP_STATS: dict[ShipType, ShipStats] = {
    ShipType.SCOUT: ShipStats(
        health=100,
        attack=20,
        defense=10,
        speed=3,
        range=1,
        strength=1.0,
        collection_multiplier=1.0,
        cost=Resources(gold=500, crew=10, cannons=5, supplies=20),
    ),
    ShipType.FRIGATE: ShipStats(
        health=200,
        attack=40,
        defense=25,
        speed=2,
        range=2,
        strength=2.0,
        collection_multiplier=1.2,
        cost=Resources(gold=1200, crew=25, cannons=15, supplies=40),
    ),
    ShipType.GALLEON: ShipStats(
        health=350,
        attack=60,
        defense=40,
        speed=1,
        range=2,
        strength=3.5,
        collection_multiplier=1.5,
        cost=Resources(gold=2500, crew=50, cannons=30, supplies=80),
    ),
    ShipType.FLAGSHIP: ShipStats(
        health=500,
        attack=80,
        defense=60,
        speed=1,
        range=3,
        strength=5.0,
        collection_multiplier=1.3,
        cost=Resources(gold=5000, crew=100, cannons=60, supplies=150),
    ),
}

TERRAIN_YIELDS: dict[TerrainType, Resources] = {
    TerrainType.WATER: Resources(),
    TerrainType.ISLAND: Resources(supplies=3),
    TerrainType.PORT: Resources(gold=5, crew=2),
    TerrainType.TREASURE: Resources(gold=10),
    TerrainType.STORM: Resources(),
    TerrainType.REEF: Resources(),
    TerrainType.WHIRLPOOL: Resources(),
}

# Reef is the only terrain a ship cannot enter
NAVIGABLE_TERRAIN = frozenset(
    {
        TerrainType.WATER,
        TerrainType.ISLAND,
        TerrainType.PORT,
        TerrainType.TREASURE,
        TerrainType.STORM,
        TerrainType.WHIRLPOOL,
    }
)


def ship_stats(ship_type: ShipType) -> ShipStats:
    return SHIP_STATS[ship_type]


def build_cost(ship_type: ShipType) -> Resources:
    """Return the full resource cost to build a ship tier."""
    return SHIP_STATS[ship_type].cost


def terrain_yield(terrain: TerrainType) -> Resources:
    return TERRAIN_YIELDS[terrain]


def is_navigable(terrain: TerrainType) -> bool:
    return terrain in NAVIGABLE_TERRAIN


def effective_speed(speed: int, movement_modifier: float = 1.0) -> int:
    """Apply the weather movement modifier, never dropping below 1 cell."""
    return max(1, int(speed * movement_modifier))


def attack_reach(ship: Ship) -> float:
    """Maximum Euclidean distance a ship can fire at.

    The 1.5 factor lets each integer range tier cover its full diagonal:
    range 1 reaches 1.41, range 2 reaches 2.83, range 3 reaches 4.24.
    """
    return ship.range * RANGE_REACH


def in_attack_range(attacker: Ship, target: Ship) -> bool:
    distance = euclidean_distance(
        attacker.position.x, attacker.position.y, target.position.x, target.position.y
    )
    return distance <= attack_reach(attacker)


def turn_variance(turn_number: int) -> float:
    """Deterministic damage variance in [0.85, 1.15] derived from the turn.

    Examples:
        >>> turn_variance(0)
        0.85
    """
    return 0.85 + ((turn_number * 7919) % 31) / 100


def has_momentum(consecutive_attacks: int) -> bool:
    """Return True if an attack streak earns the momentum bonus."""
    return consecutive_attacks >= MOMENTUM_STREAK


def next_attack_streak(player: Player) -> int:
    """Streak after the player attacks: extends a streak, else starts at 1."""
    if player.last_action_was_attack:
        return player.consecutive_attacks + 1
    return 1


def base_damage(
    attacker_type: ShipType,
    attacker_health: int,
    defender_type: ShipType,
    defender_defense: float,
) -> float:
    """Raw damage before variance and bonuses, floored at 1.

    damage = attacker_strength * 20 * (attacker_health / 100)
             - defender_defense * (defender_strength / 10)

    Args:
        attacker_type: Attacking ship tier
        attacker_health: Attacker's current health
        defender_type: Defending ship tier
        defender_defense: Defender's effective defense

    Returns:
        Base damage, at least 1.0
    """
    attacker_strength = SHIP_STATS[attacker_type].strength
    defender_strength = SHIP_STATS[defender_type].strength
    raw = attacker_strength * 20 * (attacker_health / 100)
    reduction = defender_defense * (defender_strength / 10)
    return max(1.0, raw - reduction)


def calculate_damage(
    attacker: Ship,
    defender: Ship,
    *,
    turn_number: int,
    momentum: bool,
    critical: bool,
    defender_defense: float | None = None,
    weather_damage_modifier: float = 1.0,
    multiplier: float = 1.0,
) -> int:
    """Full damage pipeline for one hit.

    Args:
        attacker: Firing ship
        defender: Ship being hit
        turn_number: Current turn, drives the variance factor
        momentum: Whether the attacker's streak earns +25%
        critical: Whether the critical-hit roll succeeded
        defender_defense: Effective defense (buffs applied); defaults to the
            ship's listed defense
        weather_damage_modifier: Current weather damage multiplier
        multiplier: Ability multiplier (e.g. 2.0 for a volley)

    Returns:
        Integer damage, always at least 1
    """
    defense = defender.defense if defender_defense is None else defender_defense
    damage = base_damage(attacker.ship_type, attacker.health, defender.ship_type, defense)
    damage *= turn_variance(turn_number)
    if momentum:
        damage *= MOMENTUM_BONUS
    if critical:
        damage *= CRITICAL_MULTIPLIER
    damage *= weather_damage_modifier * multiplier
    return max(1, int(damage))


def field_averages(players: list[Player]) -> tuple[float, float]:
    """Average territory count and living-ship count over active players.

    Returns:
        (average_territories, average_ships); (0.0, 0.0) with no active players
    """
    active = [p for p in players if p.is_active]
    if not active:
        return 0.0, 0.0
    avg_territories = sum(len(p.territories) for p in active) / len(active)
    avg_ships = sum(len(p.living_ships) for p in active) / len(active)
    return avg_territories, avg_ships


def comeback_bonus(player: Player, players: list[Player]) -> int:
    """Extra gold for a player trailing the field average.

    bonus = floor(territory_gap * 5 + ship_gap * 10), capped at COMEBACK_CAP,
    where gaps below zero count as zero.
    """
    avg_territories, avg_ships = field_averages(players)
    territory_gap = max(0.0, avg_territories - len(player.territories))
    ship_gap = max(0.0, avg_ships - len(player.living_ships))
    return min(COMEBACK_CAP, math.floor(territory_gap * 5 + ship_gap * 10))


def collection_yield(
    terrain: TerrainType, ship_type: ShipType, resource_modifier: float = 1.0
) -> Resources:
    """Resources a ship collects from an owned cell before the comeback bonus."""
    multiplier = SHIP_STATS[ship_type].collection_multiplier * resource_modifier
    return TERRAIN_YIELDS[terrain].scaled(multiplier)


def resource_value(resources: Resources) -> int:
    """Weighted resource total used in end-of-game scoring."""
    return resources.gold + resources.crew * 2 + resources.cannons * 5


def fleet_power(ships: list[Ship] | tuple[Ship, ...]) -> float:
    """Sum of tier strength scaled by remaining health over living ships."""
    return sum(
        SHIP_STATS[s.ship_type].strength * (s.health / s.max_health)
        for s in ships
        if s.is_alive
    )


def player_score(player: Player, players: list[Player], turn_number: int) -> float:
    """Weighted score used when the turn limit decides the winner.

    Trailing players get a catch-up term; from SUDDEN_DEATH_TURN on the
    score is re-weighted toward military strength.

    Args:
        player: Player to score
        players: Whole roster (averages are taken over all of it)
        turn_number: Current turn

    Returns:
        Score (higher is better)
    """
    active_ships = len(player.living_ships)
    total_health = sum(s.health for s in player.ships)
    territories = len(player.territories)
    resources = resource_value(player.resources)

    if turn_number >= SUDDEN_DEATH_TURN:
        return active_ships * 150 + total_health * 3 + territories * 100 + resources

    score = (
        active_ships * 100
        + total_health * 2
        + territories * 150
        + resources * 0.5
        + player.total_score
    )

    if players:
        avg_territories = sum(len(p.territories) for p in players) / len(players)
        avg_ships = sum(len(p.living_ships) for p in players) / len(players)
        territory_gap = avg_territories - territories
        ship_gap = avg_ships - active_ships
        if territory_gap > 0 or ship_gap > 0:
            score += territory_gap * 50 + ship_gap * 100

    return score
