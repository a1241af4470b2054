"""Game creation: rosters, starting fleets, and lobby joins.

Each of up to four seats starts in its own corner region, one or two cells
in from the true corner, with one scout and one frigate side by side.
"""

import logging
from dataclasses import replace

from ..models import (
    ActionResult,
    Coordinate,
    Difficulty,
    GameMap,
    GameState,
    GameStatus,
    Player,
    Resources,
    Ship,
    ShipType,
)
from ..utils import GameRNG
from ..utils.constants import (
    MAP_SIZE,
    MAX_PLAYERS,
    MIN_PLAYERS,
    STARTING_SCAN_CHARGES,
)
from ..utils.naming import ai_player_id, get_player_display_name, select_captain_name
from .abilities import initialize_ability
from .balance import ship_stats
from .map_generator import generate_map
from .weather import roll_weather

logger = logging.getLogger(__name__)

STARTING_RESOURCES = Resources(gold=1000, crew=50, cannons=10, supplies=100)


def starting_positions(size: int) -> list[tuple[Coordinate, Coordinate]]:
    """Corner-region coordinate pairs, in seat order.

    Order is top-left, top-right, bottom-left, bottom-right.
    """
    n = size
    return [
        (Coordinate(1, 1), Coordinate(2, 1)),
        (Coordinate(n - 2, 1), Coordinate(n - 1, 1)),
        (Coordinate(1, n - 2), Coordinate(1, n - 1)),
        (Coordinate(n - 2, n - 1), Coordinate(n - 1, n - 2)),
    ]


def create_ship(
    ship_type: ShipType, ship_id: str, owner: str, position: Coordinate
) -> Ship:
    """Create a full-health ship of a tier with a ready ability.

    Args:
        ship_type: Tier to build
        ship_id: Unique ship id
        owner: Owning player id
        position: Cell the ship starts on

    Returns:
        New Ship
    """
    stats = ship_stats(ship_type)
    return Ship(
        id=ship_id,
        owner=owner,
        ship_type=ship_type,
        health=stats.health,
        max_health=stats.health,
        attack=stats.attack,
        defense=stats.defense,
        speed=stats.speed,
        range=stats.range,
        position=position,
        ability=initialize_ability(ship_type),
    )


def create_starting_fleet(player_id: str, anchor: Coordinate) -> tuple[Ship, ...]:
    """One scout at the anchor and one frigate on the cell to its east."""
    return (
        create_ship(ShipType.SCOUT, f"{player_id}_scout_1", player_id, anchor),
        create_ship(
            ShipType.FRIGATE,
            f"{player_id}_frigate_1",
            player_id,
            Coordinate(anchor.x + 1, anchor.y),
        ),
    )


def create_player(
    player_id: str,
    name: str,
    is_ai: bool = False,
    difficulty: Difficulty | None = None,
) -> Player:
    """Create a bare roster entry with no fleet yet."""
    return Player(
        id=player_id,
        name=name,
        is_ai=is_ai,
        difficulty=difficulty,
    )


def outfit_player(player: Player, seat: int, size: int) -> Player:
    """Give a roster entry its starting fleet, resources, and counters.

    Args:
        player: Bare roster entry
        seat: Roster index, picks the corner region
        size: Map size

    Returns:
        Player ready to play
    """
    anchor, _ = starting_positions(size)[seat]
    return replace(
        player,
        resources=STARTING_RESOURCES,
        ships=create_starting_fleet(player.id, anchor),
        territories=(),
        total_score=0,
        is_active=True,
        consecutive_attacks=0,
        last_action_was_attack=False,
        scan_charges=STARTING_SCAN_CHARGES,
    )


def create_game(
    players: list[Player],
    game_id: str,
    rng: GameRNG | None = None,
    map_size: int = MAP_SIZE,
    game_map: GameMap | None = None,
) -> GameState:
    """Create the initial state of a match.

    The game starts waiting; it is active immediately if the roster already
    meets MIN_PLAYERS.

    Args:
        players: Roster in seat order (1 to MAX_PLAYERS)
        game_id: Identifier for the match
        rng: Random source for the map and opening weather
        map_size: Map size when generating a map
        game_map: Pre-built map to use instead of generating one

    Returns:
        New GameState

    Raises:
        ValueError: If the roster is empty, too large, or has duplicate ids
    """
    if not players:
        raise ValueError("players cannot be empty")
    if len(players) > MAX_PLAYERS:
        raise ValueError(f"Invalid player count: {len(players)} (must be <= {MAX_PLAYERS})")
    if rng is None:
        rng = GameRNG()
    if game_map is None:
        game_map = generate_map(map_size, rng)

    outfitted = tuple(
        outfit_player(player, seat, game_map.size) for seat, player in enumerate(players)
    )
    status = GameStatus.ACTIVE if len(outfitted) >= MIN_PLAYERS else GameStatus.WAITING

    state = GameState(
        game_id=game_id,
        players=outfitted,
        game_map=game_map,
        current_player_index=0,
        turn_number=1,
        status=status,
        weather=roll_weather(rng),
    )
    logger.info(
        "Created game %s with %d players (%s)", game_id, len(outfitted), status.value
    )
    return state


def join_game(state: GameState, player: Player) -> ActionResult:
    """Add a player to a waiting game.

    Rejections are ordinary results, not exceptions.

    Returns:
        ActionResult; state is unchanged on failure
    """
    if state.status != GameStatus.WAITING:
        return ActionResult(state, False, "Game already started")
    if state.player_by_id(player.id) is not None:
        return ActionResult(state, False, "Player already joined")
    if len(state.players) >= MAX_PLAYERS:
        return ActionResult(state, False, "Game is full")

    seated = outfit_player(player, len(state.players), state.game_map.size)
    players = state.players + (seated,)
    status = GameStatus.ACTIVE if len(players) >= MIN_PLAYERS else GameStatus.WAITING
    new_state = replace(state, players=players, status=status)
    new_state = new_state.with_event(
        "player_joined", player.id, f"{player.name} joined the game"
    )
    logger.info("Player %s joined game %s", player.id, state.game_id)
    return ActionResult(new_state, True, f"{player.name} joined the game")


def create_ai_player(
    difficulty: Difficulty = Difficulty.PIRATE, rng: GameRNG | None = None
) -> Player:
    """Create an AI captain with a random pirate name."""
    if rng is None:
        rng = GameRNG()
    name = select_captain_name(rng)
    return create_player(
        player_id=ai_player_id(name, difficulty.value, rng.randint(1000, 9999)),
        name=get_player_display_name(name, is_ai=True),
        is_ai=True,
        difficulty=difficulty,
    )


def recruit_ai_captains(
    count: int, difficulty: Difficulty = Difficulty.PIRATE, rng: GameRNG | None = None
) -> list[Player]:
    """Create a roster of AI captains with distinct ids and names.

    A draw that repeats an earlier captain's id or name is discarded and
    drawn again.

    Raises:
        ValueError: If count is outside 1..MAX_PLAYERS
    """
    if not 1 <= count <= MAX_PLAYERS:
        raise ValueError(f"Invalid count: {count} (must be 1-{MAX_PLAYERS})")
    if rng is None:
        rng = GameRNG()
    captains: list[Player] = []
    while len(captains) < count:
        captain = create_ai_player(difficulty, rng)
        if any(c.id == captain.id or c.name == captain.name for c in captains):
            logger.debug("Redrawing captain %s: id or name already taken", captain.id)
            continue
        captains.append(captain)
    return captains


def create_practice_game(
    human: Player,
    difficulty: Difficulty = Difficulty.PIRATE,
    rng: GameRNG | None = None,
    game_id: str | None = None,
) -> GameState:
    """Create an active human-versus-AI game.

    Args:
        human: The human player's roster entry (seat 0)
        difficulty: AI tier
        rng: Random source for the AI name, map, and weather
        game_id: Match id; derived from the RNG when omitted

    Returns:
        Active GameState with the human to move
    """
    if rng is None:
        rng = GameRNG()
    ai = create_ai_player(difficulty, rng)
    if game_id is None:
        game_id = f"practice_{rng.randint(100000, 999999)}"
    state = create_game([human, ai], game_id, rng)
    return replace(state, status=GameStatus.ACTIVE)
