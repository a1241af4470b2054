"""Action processing: validate one player action and apply it.

Every action kind validates its own preconditions. A rule violation, or a
reference to a player or ship that does not exist, is an ordinary result:
apply() returns success=False with the unchanged input state and an
explanatory message. Nothing here raises for bad input.

The *_error() helpers are the legality rules. The AI planner calls the same
helpers, so what the planner proposes is exactly what the processor accepts.
"""

import logging
from dataclasses import replace

from ..models import (
    ActionRecord,
    ActionResult,
    Attack,
    BuildShip,
    ClaimTerritory,
    CollectResources,
    Coordinate,
    GameState,
    GameStatus,
    MoveShip,
    Player,
    Ship,
    ShipType,
    TerrainType,
    UseAbility,
)
from ..utils import GameRNG, chebyshev_distance, euclidean_distance
from ..utils.constants import CRITICAL_CHANCE, MAX_SHIPS_PER_PLAYER, RANGE_REACH
from . import balance
from .abilities import (
    ability_spec,
    ability_unavailable_reason,
    effective_stats,
    enemies_in_reach,
    fortress_effects,
    spy_glass_scan,
    start_cooldown,
)
from .game_setup import create_ship
from .location_events import roll_location_event
from .weather import damage_modifier, movement_modifier, resource_modifier

logger = logging.getLogger(__name__)

# Decision-time thresholds (ms) and the speed bonus each earns
SPEED_BONUS_TIERS = ((5_000, 100), (10_000, 50), (15_000, 25))


def _own_ship(player: Player, ship_id: str | None) -> Ship | None:
    if not ship_id:
        return None
    return player.ship_by_id(ship_id)


def move_error(
    state: GameState, player: Player, ship: Ship, destination: Coordinate
) -> str | None:
    """Return why a move is illegal, or None if it is legal."""
    if not ship.is_alive:
        return "Ship destroyed"
    stats = effective_stats(ship)
    if not stats.can_move:
        return "Ship is immobilized"
    if not state.game_map.in_bounds(destination):
        return "Destination out of bounds"
    if destination == ship.position:
        return "Ship is already at that position"
    max_distance = balance.effective_speed(stats.speed, movement_modifier(state.weather))
    distance = chebyshev_distance(
        ship.position.x, ship.position.y, destination.x, destination.y
    )
    if distance > max_distance:
        return f"Destination out of range (Max: {max_distance}, Dist: {distance})"
    terrain = state.game_map.cell_at(destination).terrain
    if not balance.is_navigable(terrain):
        return f"Cannot sail into {terrain.value}"
    if state.ship_at(destination) is not None:
        return "Position occupied by another ship"
    return None


def attack_error(attacker: Ship, target: Ship) -> str | None:
    """Return why an attack is illegal, or None if it is legal."""
    if not attacker.is_alive:
        return "Attacker ship destroyed"
    if target.owner == attacker.owner:
        return "Cannot attack your own ship"
    if not target.is_alive:
        return "Target ship already destroyed"
    if not balance.in_attack_range(attacker, target):
        distance = euclidean_distance(
            attacker.position.x,
            attacker.position.y,
            target.position.x,
            target.position.y,
        )
        return f"Target out of range (Max: {attacker.range}, Dist: {distance:.1f})"
    return None


def claim_error(
    state: GameState, player: Player, ship: Ship, coordinate: Coordinate
) -> str | None:
    """Return why a claim is illegal, or None if it is legal."""
    if not ship.is_alive:
        return "Ship destroyed"
    if ship.position != coordinate:
        return "Ship must be at territory to claim it"
    if not state.game_map.in_bounds(coordinate):
        return "Territory not found"
    if state.game_map.cell_at(coordinate).owner == player.id:
        return "Territory already owned by you"
    return None


def collect_error(state: GameState, player: Player, ship: Ship) -> str | None:
    """Return why a collection is illegal, or None if it is legal."""
    if not ship.is_alive:
        return "Ship destroyed"
    if not state.game_map.in_bounds(ship.position):
        return "No territory at ship position"
    cell = state.game_map.cell_at(ship.position)
    if cell.owner != player.id:
        return "You must control this territory to collect resources"
    if balance.terrain_yield(cell.terrain).is_empty():
        return "This territory produces no resources"
    return None


def has_adjacent_controlled_port(
    state: GameState, player_id: str, coordinate: Coordinate
) -> bool:
    for n in coordinate.neighbours():
        if not state.game_map.in_bounds(n):
            continue
        cell = state.game_map.cell_at(n)
        if cell.terrain == TerrainType.PORT and cell.owner == player_id:
            return True
    return False


def build_error(
    state: GameState, player: Player, ship_type: ShipType, coordinate: Coordinate
) -> str | None:
    """Return why a build is illegal, or None if it is legal."""
    if len(player.living_ships) >= MAX_SHIPS_PER_PLAYER:
        return f"Maximum fleet size reached ({MAX_SHIPS_PER_PLAYER} ships)"
    cost = balance.build_cost(ship_type)
    if not player.resources.can_afford(cost):
        return f"Insufficient resources. Need: {cost.describe()}"
    if (
        not state.game_map.in_bounds(coordinate)
        or state.game_map.cell_at(coordinate).terrain != TerrainType.WATER
    ):
        return "Ships can only be built in water"
    if not has_adjacent_controlled_port(state, player.id, coordinate):
        return "Must build ships adjacent to a controlled port"
    if state.ship_at(coordinate) is not None:
        return "Position occupied by another ship"
    return None


def speed_bonus(decision_time_ms: int) -> int:
    """Skill bonus for a fast decision.

    Examples:
        >>> speed_bonus(4_000)
        100
        >>> speed_bonus(20_000)
        0
    """
    for threshold, bonus in SPEED_BONUS_TIERS:
        if decision_time_ms <= threshold:
            return bonus
    return 0


def record_decision_time(player: Player, decision_time_ms: int) -> Player:
    """Fold one decision time into a player's running skill stats."""
    moves = player.total_moves + 1
    average = (
        player.average_decision_time_ms * player.total_moves + decision_time_ms
    ) / moves
    return replace(
        player,
        total_moves=moves,
        average_decision_time_ms=average,
        speed_bonus_accumulated=player.speed_bonus_accumulated
        + speed_bonus(decision_time_ms),
    )


class ActionProcessor:
    """Applies single player actions to a game state.

    The RNG drives location events and critical-hit rolls; everything else
    is deterministic given the state.
    """

    def __init__(self, rng: GameRNG):
        """Initialize processor.

        Args:
            rng: Random source for location events and critical hits
        """
        self.rng = rng
        self._handlers = {
            MoveShip: self._move_ship,
            Attack: self._attack,
            ClaimTerritory: self._claim_territory,
            CollectResources: self._collect_resources,
            BuildShip: self._build_ship,
            UseAbility: self._use_ability,
        }

    def apply(self, state: GameState, record: ActionRecord) -> ActionResult:
        """Validate and apply one action.

        Args:
            state: Current game state
            record: Action request from the acting player

        Returns:
            ActionResult with the new state on success, or the unchanged
            state and a reason on failure
        """
        action_type = getattr(record.action, "action_type", type(record.action).__name__)
        result = self._dispatch(state, record)

        if not result.success:
            logger.warning(
                "Rejected %s from %s: %s", action_type, record.player_id, result.message
            )
            return ActionResult(state, False, result.message)

        if record.decision_time_ms is not None:
            player = result.state.player_by_id(record.player_id)
            if player is not None:
                updated = record_decision_time(player, record.decision_time_ms)
                result = ActionResult(
                    result.state.with_player(updated), True, result.message
                )

        logger.debug("Applied %s from %s: %s", action_type, record.player_id, result.message)
        return result

    def _dispatch(self, state: GameState, record: ActionRecord) -> ActionResult:
        if state.status != GameStatus.ACTIVE:
            return self._fail(state, "Game is not active")
        if record.game_id != state.game_id:
            return self._fail(state, "Action is for a different game")

        player = state.player_by_id(record.player_id)
        if player is None:
            return self._fail(state, "Player not found")
        if not player.is_active:
            return self._fail(state, "Player is no longer active")
        if state.current_player is None or state.current_player.id != player.id:
            return self._fail(state, "Not your turn")

        handler = self._handlers.get(type(record.action))
        if handler is None:
            return self._fail(state, "Unknown action type")
        return handler(state, player, record.action)

    @staticmethod
    def _fail(state: GameState, message: str) -> ActionResult:
        return ActionResult(state, False, message)

    def _move_ship(self, state: GameState, player: Player, action: MoveShip) -> ActionResult:
        ship = _own_ship(player, action.ship_id)
        if ship is None or action.destination is None:
            return self._fail(state, "Ship not found")
        error = move_error(state, player, ship, action.destination)
        if error:
            return self._fail(state, error)

        moved = ship.with_position(action.destination)
        resources = player.resources
        message = f"{ship.ship_type.value} moved to {action.destination}"

        terrain = state.game_map.cell_at(action.destination).terrain
        event = roll_location_event(terrain, self.rng)
        if event is not None:
            message = f"{message}. {event.message}"
            if event.health_change:
                moved = moved.with_health(moved.health + event.health_change)
            if event.resource_change:
                resources = resources.adjust(**event.resource_change)
            if not moved.is_alive:
                message = f"{message} Ship lost!"

        updated = replace(
            player.with_ship(moved), resources=resources
        ).with_momentum_reset()
        new_state = state.with_player(updated).with_event("ship_moved", player.id, message)
        return ActionResult(new_state, True, message)

    def _strike(
        self,
        state: GameState,
        attacker: Ship,
        target: Ship,
        momentum: bool,
        multiplier: float = 1.0,
    ) -> tuple[GameState, int, bool, bool]:
        """Resolve one hit against one target.

        Returns:
            (new_state, damage, critical, destroyed)
        """
        critical = self.rng.chance(CRITICAL_CHANCE)
        damage = balance.calculate_damage(
            attacker,
            target,
            turn_number=state.turn_number,
            momentum=momentum,
            critical=critical,
            defender_defense=effective_stats(target).defense,
            weather_damage_modifier=damage_modifier(state.weather),
            multiplier=multiplier,
        )
        hit = target.with_health(target.health - damage)
        destroyed = not hit.is_alive

        target_owner = state.player_by_id(target.owner)
        updated_owner = target_owner.with_ship(hit)
        if destroyed:
            updated_owner = replace(updated_owner, consecutive_attacks=0)
        return state.with_player(updated_owner), damage, critical, destroyed

    def _credit_attack(self, state: GameState, player_id: str) -> GameState:
        player = state.player_by_id(player_id)
        return state.with_player(
            replace(
                player,
                consecutive_attacks=balance.next_attack_streak(player),
                last_action_was_attack=True,
            )
        )

    def _attack(self, state: GameState, player: Player, action: Attack) -> ActionResult:
        if not action.ship_id or not action.target_ship_id:
            return self._fail(state, "Missing ship IDs for attack")
        attacker = _own_ship(player, action.ship_id)
        if attacker is None:
            return self._fail(state, "Attacker ship not found")
        found = state.find_ship(action.target_ship_id)
        if found is None:
            return self._fail(state, "Target ship not found")
        _, target = found
        error = attack_error(attacker, target)
        if error:
            return self._fail(state, error)

        momentum = balance.has_momentum(player.consecutive_attacks)
        new_state, damage, critical, destroyed = self._strike(
            state, attacker, target, momentum
        )
        new_state = self._credit_attack(new_state, player.id)

        message = f"{'CRITICAL! ' if critical else ''}{damage} damage!"
        if destroyed:
            message += " Enemy ship destroyed!"
        if momentum:
            message += " (Momentum +25%)"

        new_state = new_state.with_event(
            "ship_attacked", player.id, f"{attacker.id} hit {target.id}: {message}"
        )
        return ActionResult(new_state, True, message)

    def _claim_territory(
        self, state: GameState, player: Player, action: ClaimTerritory
    ) -> ActionResult:
        if not action.ship_id or action.coordinate is None:
            return self._fail(state, "Missing ship ID or coordinate for claiming")
        ship = _own_ship(player, action.ship_id)
        if ship is None:
            return self._fail(state, "Ship not found")
        error = claim_error(state, player, ship, action.coordinate)
        if error:
            return self._fail(state, error)

        coord = action.coordinate
        cell = state.game_map.cell_at(coord)
        previous_owner = cell.owner
        new_state = replace(state, game_map=state.game_map.with_cell(coord, cell.with_owner(player.id)))

        if previous_owner is not None:
            loser = new_state.player_by_id(previous_owner)
            if loser is not None:
                new_state = new_state.with_player(
                    replace(
                        loser,
                        territories=tuple(t for t in loser.territories if t != coord),
                    )
                )

        claimant = new_state.player_by_id(player.id)
        claimant = replace(
            claimant, territories=claimant.territories + (coord,)
        ).with_momentum_reset()
        message = f"Territory {coord} claimed!"
        new_state = new_state.with_player(claimant).with_event(
            "territory_claimed", player.id, message
        )
        return ActionResult(new_state, True, message)

    def _collect_resources(
        self, state: GameState, player: Player, action: CollectResources
    ) -> ActionResult:
        if not action.ship_id:
            return self._fail(state, "Missing ship ID for resource collection")
        ship = _own_ship(player, action.ship_id)
        if ship is None:
            return self._fail(state, "Ship not found")
        error = collect_error(state, player, ship)
        if error:
            return self._fail(state, error)

        terrain = state.game_map.cell_at(ship.position).terrain
        collected = balance.collection_yield(
            terrain, ship.ship_type, resource_modifier(state.weather)
        )
        bonus = balance.comeback_bonus(player, list(state.players))
        if bonus > 0:
            collected = collected.adjust(gold=bonus)

        updated = replace(
            player, resources=player.resources.credit(collected)
        ).with_momentum_reset()
        message = f"Collected: {collected.describe()}"
        if bonus > 0:
            message += f" (+{bonus} comeback bonus)"
        new_state = state.with_player(updated).with_event(
            "resources_collected", player.id, message
        )
        return ActionResult(new_state, True, message)

    def _build_ship(self, state: GameState, player: Player, action: BuildShip) -> ActionResult:
        if action.ship_type is None or action.coordinate is None:
            return self._fail(state, "Missing ship type or build location")
        error = build_error(state, player, action.ship_type, action.coordinate)
        if error:
            return self._fail(state, error)

        ship_type = action.ship_type
        number = sum(1 for s in player.ships if s.ship_type == ship_type) + 1
        ship = create_ship(
            ship_type, f"{player.id}_{ship_type.value}_{number}", player.id, action.coordinate
        )
        updated = replace(
            player,
            resources=player.resources.debit(balance.build_cost(ship_type)),
            ships=player.ships + (ship,),
        ).with_momentum_reset()
        message = f"{ship_type.value.upper()} built successfully!"
        new_state = state.with_player(updated).with_event("ship_built", player.id, message)
        return ActionResult(new_state, True, message)

    def _use_ability(self, state: GameState, player: Player, action: UseAbility) -> ActionResult:
        ship = _own_ship(player, action.ship_id)
        if ship is None:
            return self._fail(state, "Ship not found")
        reason = ability_unavailable_reason(ship, player.resources)
        if reason:
            return self._fail(state, reason)

        spec = ability_spec(ship.ship_type)
        new_state = state
        attacked = False

        if ship.ship_type == ShipType.SCOUT:
            if player.scan_charges <= 0:
                return self._fail(state, "No scan charges left")
            report = spy_glass_scan(ship, state)
            message = (
                f"Spy Glass revealed {len(report.treasures)} treasures and "
                f"{len(report.enemy_ship_ids)} enemy ships!"
            )
            new_state = new_state.with_player(
                replace(player, scan_charges=player.scan_charges - 1)
            )

        elif ship.ship_type == ShipType.FRIGATE:
            targets = enemies_in_reach(ship, state, spec.range, spec.max_targets)
            if not targets:
                return self._fail(state, "No enemy ships in range for Broadside")
            momentum = balance.has_momentum(player.consecutive_attacks)
            hits = []
            for target in targets:
                current = new_state.player_by_id(target.owner).ship_by_id(target.id)
                new_state, damage, _, destroyed = self._strike(
                    new_state, ship, current, momentum
                )
                hits.append(f"{damage}{' (destroyed)' if destroyed else ''}")
            message = f"Broadside hit {len(targets)} enemy ships! Damage: {', '.join(hits)}"
            attacked = True

        elif ship.ship_type == ShipType.GALLEON:
            new_state = new_state.with_player(
                player.with_ship(replace(ship, effects=ship.effects + fortress_effects(ship)))
            )
            message = "Fortress Mode activated! +50% defense for 2 turns"

        else:
            if not action.target_ship_id:
                return self._fail(state, "No target selected for Devastating Volley")
            found = state.find_ship(action.target_ship_id)
            if found is None:
                return self._fail(state, "Target ship not found")
            _, target = found
            if target.owner == player.id:
                return self._fail(state, "Cannot attack your own ship")
            if not target.is_alive:
                return self._fail(state, "Target ship already destroyed")
            distance = euclidean_distance(
                ship.position.x, ship.position.y, target.position.x, target.position.y
            )
            if distance > spec.range * RANGE_REACH:
                return self._fail(state, f"Target out of range for Volley (Max: {spec.range})")
            momentum = balance.has_momentum(player.consecutive_attacks)
            new_state, damage, _, destroyed = self._strike(
                new_state, ship, target, momentum, multiplier=spec.damage_multiplier
            )
            message = f"Devastating Volley unleashed! {damage} damage dealt!"
            if destroyed:
                message += " Enemy ship destroyed!"
            attacked = True

        user = new_state.player_by_id(player.id)
        current_ship = user.ship_by_id(ship.id)
        user = replace(
            user.with_ship(start_cooldown(current_ship)),
            resources=user.resources.debit(spec.cost),
        )
        new_state = new_state.with_player(user)
        if attacked:
            new_state = self._credit_attack(new_state, player.id)
        else:
            new_state = new_state.with_player(
                new_state.player_by_id(player.id).with_momentum_reset()
            )

        new_state = new_state.with_event("ability_used", player.id, f"{spec.name}: {message}")
        return ActionResult(new_state, True, message)
