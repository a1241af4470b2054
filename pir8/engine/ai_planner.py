"""AI planner for computer-controlled captains.

Decision making runs in two stages:
1. Scoring: for each category (claim, attack, move, build) find at most one
   legal candidate, scored deterministically with a short justification.
2. Selection: walk candidates from best to worst and accept the first whose
   category passes the difficulty tier's random gate. If every gate fails,
   fall back to the best candidate. With no candidates at all, pass.

Legality comes from the action processor's own rule helpers, so the planner
never proposes an action the processor would reject.
"""

import logging
from dataclasses import dataclass

from ..models import (
    Action,
    Attack,
    BuildShip,
    ClaimTerritory,
    Difficulty,
    GameState,
    MoveShip,
    Player,
    Ship,
    ShipType,
    TerrainType,
)
from ..utils import GameRNG, chebyshev_distance
from ..utils.constants import MAX_SHIPS_PER_PLAYER
from .actions import attack_error, build_error, claim_error, move_error
from .abilities import effective_stats
from .balance import build_cost

logger = logging.getLogger(__name__)

LATE_GAME_TURN = 25


@dataclass(frozen=True)
class DifficultyProfile:
    """Selection gates and personality for one AI tier.

    Attributes:
        level: Tier this profile belongs to
        name: Display name
        claim_chance: Gate for claim candidates
        attack_chance: Gate for attack candidates
        move_chance: Gate for move candidates
        build_chance: Gate for build candidates
        lookahead_depth: Nominal planning depth reported to players
        aggressiveness: Personality scalar reported to players
    """

    level: Difficulty
    name: str
    claim_chance: float
    attack_chance: float
    move_chance: float
    build_chance: float
    lookahead_depth: int
    aggressiveness: float


DIFFICULTY_PROFILES: dict[Difficulty, DifficultyProfile] = {
    Difficulty.NOVICE: DifficultyProfile(
        Difficulty.NOVICE, "Novice", 1.0, 0.4, 1.0, 0.3, 1, 0.3
    ),
    Difficulty.PIRATE: DifficultyProfile(
        Difficulty.PIRATE, "Pirate", 1.0, 0.7, 1.0, 0.5, 2, 0.6
    ),
    Difficulty.CAPTAIN: DifficultyProfile(
        Difficulty.CAPTAIN, "Captain", 1.0, 0.85, 1.0, 0.7, 3, 0.75
    ),
    Difficulty.ADMIRAL: DifficultyProfile(
        Difficulty.ADMIRAL, "Admiral", 0.95, 0.9, 0.95, 0.8, 4, 0.9
    ),
}

# Tiers tried when building, strongest first
BUILD_PREFERENCE = [
    (ShipType.FLAGSHIP, 90, "Build powerful flagship"),
    (ShipType.GALLEON, 80, "Build strong galleon"),
    (ShipType.FRIGATE, 70, "Build versatile frigate"),
    (ShipType.SCOUT, 60, "Build fast sloop"),
]

CLAIM_SCORES = {
    TerrainType.TREASURE: (100, "High-value treasure - must claim!"),
    TerrainType.PORT: (90, "Strategic port for ship building"),
    TerrainType.ISLAND: (75, "Island provides resources"),
}
CLAIMABLE_TERRAIN = frozenset(CLAIM_SCORES)

MOVE_SCORES = {
    TerrainType.TREASURE: (100, "Move toward treasure"),
    TerrainType.PORT: (70, "Advance to strategic port"),
    TerrainType.ISLAND: (40, "Head to resource island"),
    TerrainType.WATER: (15, "Navigate toward objective"),
}
HAZARD_MOVE_SCORE = (-50, "Avoid hazard")

SHIP_TYPE_ATTACK_BONUS = {
    ShipType.FLAGSHIP: (50, "Eliminate flagship threat"),
    ShipType.GALLEON: (30, "Take down galleon"),
    ShipType.FRIGATE: (20, None),
}


@dataclass(frozen=True)
class GameAnalysis:
    """The AI's read of its standing against the field average."""

    is_winning: bool
    is_losing: bool
    territories_controlled: int
    average_territories: float
    ships_afloat: int
    average_ships: float
    resource_advantage: bool


@dataclass(frozen=True)
class AIOption:
    """One scored candidate action."""

    category: str  # Action type, e.g. "attack"
    action: Action
    score: float
    reason: str


@dataclass(frozen=True)
class AIReasoning:
    """Why the AI chose what it chose, for display to players."""

    options_considered: tuple[AIOption, ...]
    chosen: AIOption | None
    analysis: GameAnalysis
    difficulty: DifficultyProfile


@dataclass(frozen=True)
class AIDecision:
    action: Action | None  # None means the AI passes
    reasoning: AIReasoning


def difficulty_profile(player: Player) -> DifficultyProfile:
    """Profile for an AI player; players without a tier play as Pirate."""
    return DIFFICULTY_PROFILES[player.difficulty or Difficulty.PIRATE]


def analyze_position(state: GameState, player: Player) -> GameAnalysis:
    """Compare a player's territory, fleet, and purse to the active field."""
    active = [p for p in state.players if p.is_active] or [player]
    count = len(active)
    avg_territories = sum(len(p.territories) for p in active) / count
    avg_ships = sum(len(p.living_ships) for p in active) / count
    avg_resources = (
        sum(p.resources.gold + p.resources.crew + p.resources.cannons for p in active)
        / count
    )

    territories = len(player.territories)
    ships = len(player.living_ships)
    resources = player.resources.gold + player.resources.crew + player.resources.cannons

    return GameAnalysis(
        is_winning=territories > avg_territories * 1.3 and ships >= avg_ships,
        is_losing=territories < avg_territories * 0.7 or ships < avg_ships * 0.7,
        territories_controlled=territories,
        average_territories=avg_territories,
        ships_afloat=ships,
        average_ships=avg_ships,
        resource_advantage=resources > avg_resources * 1.2,
    )


def selection_chance(
    category: str, profile: DifficultyProfile, analysis: GameAnalysis
) -> float:
    """Probability the tier accepts a candidate of this category.

    Losing players are readier to attack; winning players build less.
    """
    if category == ClaimTerritory.action_type:
        return profile.claim_chance
    if category == Attack.action_type:
        chance = profile.attack_chance
        return chance * 1.2 if analysis.is_losing else chance
    if category == MoveShip.action_type:
        return profile.move_chance
    if category == BuildShip.action_type:
        chance = profile.build_chance
        return chance * 0.8 if analysis.is_winning else chance
    return 0.5


def evaluate_claim(state: GameState, player: Player) -> AIOption | None:
    """Claim the valuable cell under the first ship standing on one."""
    for ship in player.living_ships:
        cell = state.game_map.cell_at(ship.position)
        if cell.terrain not in CLAIMABLE_TERRAIN:
            continue
        if claim_error(state, player, ship, ship.position):
            continue
        score, reason = CLAIM_SCORES[cell.terrain]
        return AIOption(
            category=ClaimTerritory.action_type,
            action=ClaimTerritory(ship_id=ship.id, coordinate=ship.position),
            score=score,
            reason=reason,
        )
    return None


def _attack_score(
    target: Ship, analysis: GameAnalysis, turn_number: int
) -> tuple[float, str]:
    health_pct = 100 * target.health / target.max_health
    score: float = 100 + (100 - health_pct)
    reason = "Enemy in range"
    if health_pct < 30:
        reason = "Finish off weakened enemy"

    bonus, bonus_reason = SHIP_TYPE_ATTACK_BONUS.get(target.ship_type, (0, None))
    score += bonus
    if bonus_reason:
        reason = bonus_reason

    if analysis.is_losing:
        score += 25
        reason = "Aggressive strike - must turn tide"

    if turn_number > LATE_GAME_TURN:
        score *= 1.5
        reason += " (late game)"
    return score, reason


def evaluate_attack(
    state: GameState, player: Player, analysis: GameAnalysis
) -> AIOption | None:
    """Best legal attack, favouring weak and high-tier targets."""
    best: AIOption | None = None
    for ship in player.living_ships:
        for enemy in state.players:
            if enemy.id == player.id:
                continue
            for target in enemy.living_ships:
                if attack_error(ship, target):
                    continue
                score, reason = _attack_score(target, analysis, state.turn_number)
                if best is None or score > best.score:
                    best = AIOption(
                        category=Attack.action_type,
                        action=Attack(ship_id=ship.id, target_ship_id=target.id),
                        score=score,
                        reason=reason,
                    )
    return best


def _pick_mover(state: GameState, player: Player) -> Ship | None:
    """First mobile ship on open water, else the first mobile ship."""
    movers = [s for s in player.living_ships if effective_stats(s).can_move]
    for ship in movers:
        if state.game_map.cell_at(ship.position).terrain == TerrainType.WATER:
            return ship
    return movers[0] if movers else None


def evaluate_move(
    state: GameState, player: Player, analysis: GameAnalysis
) -> AIOption | None:
    """Best reachable cell for one ship, weighing terrain value and distance."""
    ship = _pick_mover(state, player)
    if ship is None:
        return None

    best: AIOption | None = None
    for coord in state.game_map.coordinates():
        cell = state.game_map.cell_at(coord)
        if cell.owner == player.id:
            continue
        if move_error(state, player, ship, coord):
            continue

        score, reason = MOVE_SCORES.get(cell.terrain, HAZARD_MOVE_SCORE)
        if cell.owner is None and cell.terrain != TerrainType.WATER:
            score += 30
            reason = "Claim unclaimed territory"

        distance = chebyshev_distance(ship.position.x, ship.position.y, coord.x, coord.y)
        score -= distance * 3

        if analysis.is_losing and cell.terrain in (TerrainType.TREASURE, TerrainType.PORT):
            score += 25
            reason = "Desperate push for valuable tile"
        if analysis.is_winning and cell.terrain in (
            TerrainType.STORM,
            TerrainType.WHIRLPOOL,
        ):
            score -= 50

        if best is None or score > best.score:
            best = AIOption(
                category=MoveShip.action_type,
                action=MoveShip(ship_id=ship.id, destination=coord),
                score=score,
                reason=reason,
            )
    return best


def evaluate_build(state: GameState, player: Player) -> AIOption | None:
    """Strongest affordable ship that fits beside an owned port."""
    if len(player.living_ships) >= MAX_SHIPS_PER_PLAYER:
        return None

    ports = [
        t
        for t in player.territories
        if state.game_map.in_bounds(t)
        and state.game_map.cell_at(t).terrain == TerrainType.PORT
    ]
    for ship_type, score, reason in BUILD_PREFERENCE:
        if not player.resources.can_afford(build_cost(ship_type)):
            continue
        for port in ports:
            for site in port.neighbours():
                if build_error(state, player, ship_type, site) is None:
                    return AIOption(
                        category=BuildShip.action_type,
                        action=BuildShip(ship_type=ship_type, coordinate=site),
                        score=score,
                        reason=reason,
                    )
    return None


class AIPlanner:
    """Chooses actions for AI players.

    The RNG is only used for tier gates; scoring is deterministic.
    """

    def __init__(self, rng: GameRNG):
        """Initialize planner.

        Args:
            rng: Random source for difficulty gates
        """
        self.rng = rng

    def options(self, state: GameState, player: Player) -> list[AIOption]:
        """All scored candidates, best first."""
        analysis = analyze_position(state, player)
        candidates = [
            evaluate_claim(state, player),
            evaluate_attack(state, player, analysis),
            evaluate_move(state, player, analysis),
            evaluate_build(state, player),
        ]
        found = [c for c in candidates if c is not None]
        found.sort(key=lambda o: o.score, reverse=True)
        return found

    def decide(self, state: GameState, player: Player) -> AIDecision:
        """Pick the action an AI player takes this turn.

        Args:
            state: Current game state
            player: The AI player to act

        Returns:
            AIDecision; action is None when no legal candidate exists
        """
        profile = difficulty_profile(player)
        analysis = analyze_position(state, player)
        options = self.options(state, player)

        chosen: AIOption | None = None
        for option in options:
            if self.rng.random() < selection_chance(option.category, profile, analysis):
                chosen = option
                break
        if chosen is None and options:
            chosen = options[0]

        if chosen is None:
            logger.debug("AI %s passes: no legal options", player.id)
        else:
            logger.debug(
                "AI %s (%s) chose %s, score %.1f: %s",
                player.id,
                profile.name,
                chosen.category,
                chosen.score,
                chosen.reason,
            )

        reasoning = AIReasoning(
            options_considered=tuple(options),
            chosen=chosen,
            analysis=analysis,
            difficulty=profile,
        )
        return AIDecision(action=chosen.action if chosen else None, reasoning=reasoning)
