"""Game state data model."""

from dataclasses import dataclass, replace
from enum import Enum

from ..utils.constants import EVENT_LOG_SIZE
from .coordinate import Coordinate
from .player import Player
from .ship import Ship
from .terrain import GameMap


class GameStatus(str, Enum):
    WAITING = "waiting"
    ACTIVE = "active"
    COMPLETED = "completed"


class WeatherType(str, Enum):
    CALM = "calm"
    TRADE_WINDS = "trade_winds"
    STORM = "storm"
    FOG = "fog"


@dataclass(frozen=True)
class WeatherEffect:
    """Current weather and the multipliers it applies.

    The turn controller only ticks duration; the multipliers are read by
    movement, collection, and combat.
    """

    weather_type: WeatherType
    duration: int  # Full rounds remaining
    movement_modifier: float = 1.0
    resource_modifier: float = 1.0
    damage_modifier: float = 1.0
    visibility_reduced: bool = False

    def __post_init__(self):
        """Validate weather data after initialization."""
        if self.duration < 0:
            raise ValueError(f"Invalid duration: {self.duration} (must be >= 0)")
        for name in ("movement_modifier", "resource_modifier", "damage_modifier"):
            if getattr(self, name) <= 0:
                raise ValueError(f"Invalid {name}: {getattr(self, name)} (must be > 0)")


@dataclass(frozen=True)
class GameEvent:
    """One entry in the rolling event log."""

    id: str
    event_type: str  # e.g. "ship_moved", "ship_attacked", "turn_advanced"
    player_id: str | None
    turn_number: int
    description: str


@dataclass(frozen=True)
class GameState:
    """Complete state of one match.

    GameState is never mutated. Every engine step returns a new value, so a
    snapshot can be kept, replayed, or explored speculatively.
    """

    game_id: str
    players: tuple[Player, ...]
    game_map: GameMap
    current_player_index: int = 0
    turn_number: int = 1
    status: GameStatus = GameStatus.WAITING
    event_log: tuple[GameEvent, ...] = ()
    weather: WeatherEffect | None = None
    winner: str | None = None
    event_sequence: int = 0  # Total events ever logged, for event ids

    def __post_init__(self):
        """Validate game data after initialization."""
        if self.players and not 0 <= self.current_player_index < len(self.players):
            raise ValueError(
                f"Invalid current_player_index: {self.current_player_index} "
                f"(must be in [0, {len(self.players) - 1}])"
            )
        if self.turn_number < 1:
            raise ValueError(f"Invalid turn_number: {self.turn_number} (must be >= 1)")
        ids = [p.id for p in self.players]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate player ids: {ids}")

    @property
    def current_player(self) -> Player | None:
        if not self.players:
            return None
        return self.players[self.current_player_index]

    def player_by_id(self, player_id: str) -> Player | None:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def player_index(self, player_id: str) -> int:
        """Return roster index of a player, or -1 if absent."""
        for i, player in enumerate(self.players):
            if player.id == player_id:
                return i
        return -1

    def with_player(self, player: Player) -> "GameState":
        """Return a copy with the player of the same id replaced."""
        return replace(
            self,
            players=tuple(player if p.id == player.id else p for p in self.players),
        )

    def find_ship(self, ship_id: str) -> tuple[Player, Ship] | None:
        for player in self.players:
            ship = player.ship_by_id(ship_id)
            if ship is not None:
                return player, ship
        return None

    def ship_at(self, coord: Coordinate) -> Ship | None:
        """Return the living ship occupying a cell, if any."""
        for player in self.players:
            for ship in player.ships:
                if ship.is_alive and ship.position == coord:
                    return ship
        return None

    def contenders(self) -> list[Player]:
        """Active players that still hold a living ship."""
        return [p for p in self.players if p.is_active and p.has_living_ship]

    def with_event(
        self, event_type: str, player_id: str | None, description: str
    ) -> "GameState":
        """Append an event, keeping only the most recent EVENT_LOG_SIZE."""
        sequence = self.event_sequence + 1
        event = GameEvent(
            id=f"{self.game_id}_event_{sequence}",
            event_type=event_type,
            player_id=player_id,
            turn_number=self.turn_number,
            description=description,
        )
        return replace(
            self,
            event_log=(self.event_log + (event,))[-EVENT_LOG_SIZE:],
            event_sequence=sequence,
        )
