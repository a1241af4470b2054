"""Tests for game creation, joining, and practice games."""

import pytest

from pir8.engine import (
    create_ai_player,
    create_game,
    create_player,
    create_practice_game,
    join_game,
    recruit_ai_captains,
)
from pir8.engine.game_setup import STARTING_RESOURCES, starting_positions
from pir8.models import Coordinate, Difficulty, GameStatus, ShipType
from pir8.utils import GameRNG


class ScriptedDraws:
    """RNG double replaying fixed captain names and id suffixes."""

    def __init__(self, names, suffixes):
        self.names = iter(names)
        self.suffixes = iter(suffixes)

    def choice(self, seq):
        return next(self.names)

    def randint(self, a, b):
        return next(self.suffixes)


def test_two_player_game_starts_active():
    """Test a full two-player roster is active at once."""
    players = [create_player("p1", "Anne"), create_player("p2", "Mary")]
    state = create_game(players, "g1", GameRNG(42))

    assert state.status == GameStatus.ACTIVE
    assert state.turn_number == 1
    assert state.current_player_index == 0
    assert state.weather is not None
    assert state.winner is None


def test_single_player_game_waits():
    state = create_game([create_player("p1", "Anne")], "g1", GameRNG(42))
    assert state.status == GameStatus.WAITING


def test_empty_or_oversized_roster_rejected():
    with pytest.raises(ValueError):
        create_game([], "g1", GameRNG(42))
    players = [create_player(f"p{i}", f"P{i}") for i in range(5)]
    with pytest.raises(ValueError, match="Invalid player count"):
        create_game(players, "g1", GameRNG(42))


def test_starting_fleet_and_resources():
    """Each player gets a scout and a frigate, side by side, in a corner."""
    players = [create_player(f"p{i}", f"P{i}") for i in range(1, 5)]
    state = create_game(players, "g1", GameRNG(42))

    anchors = [pair[0] for pair in starting_positions(10)]
    for player, anchor in zip(state.players, anchors):
        assert [s.ship_type for s in player.ships] == [ShipType.SCOUT, ShipType.FRIGATE]
        scout, frigate = player.ships
        assert scout.id == f"{player.id}_scout_1"
        assert frigate.id == f"{player.id}_frigate_1"
        assert scout.position == anchor
        assert frigate.position == Coordinate(anchor.x + 1, anchor.y)
        assert scout.health == scout.max_health == 100
        assert frigate.health == frigate.max_health == 200
        assert scout.ability.name == "Spy Glass"
        assert frigate.ability.name == "Broadside"
        assert player.resources == STARTING_RESOURCES
        assert player.scan_charges == 3
        assert player.territories == ()


def test_starting_positions_are_distinct_and_in_bounds():
    state = create_game(
        [create_player(f"p{i}", f"P{i}") for i in range(1, 5)], "g1", GameRNG(1)
    )
    positions = [s.position for p in state.players for s in p.ships]
    assert len(set(positions)) == 8
    assert all(state.game_map.in_bounds(pos) for pos in positions)


def test_same_seed_same_game():
    players = [create_player("p1", "Anne"), create_player("p2", "Mary")]
    assert create_game(players, "g1", GameRNG(5)) == create_game(players, "g1", GameRNG(5))


class TestJoinGame:
    """Test joining a waiting game."""

    def _waiting(self):
        return create_game([create_player("p1", "Anne")], "g1", GameRNG(42))

    def test_join_activates_game(self):
        """Second player flips the game to active."""
        result = join_game(self._waiting(), create_player("p2", "Mary"))
        assert result.success
        assert result.state.status == GameStatus.ACTIVE
        assert [p.id for p in result.state.players] == ["p1", "p2"]
        assert len(result.state.players[1].ships) == 2
        assert result.state.event_log[-1].event_type == "player_joined"

    def test_duplicate_join_rejected(self):
        state = self._waiting()
        result = join_game(state, create_player("p1", "Anne"))
        assert not result.success
        assert result.message == "Player already joined"
        assert result.state is state

    def test_join_started_game_rejected(self):
        state = join_game(self._waiting(), create_player("p2", "Mary")).state
        result = join_game(state, create_player("p3", "Jack"))
        assert not result.success
        assert result.message == "Game already started"


class TestPracticeGame:
    """Test human vs AI setup."""

    def test_ai_player(self):
        ai = create_ai_player(Difficulty.CAPTAIN, GameRNG(42))
        assert ai.is_ai
        assert ai.difficulty == Difficulty.CAPTAIN
        assert ai.id.startswith("ai_")
        assert ai.id.split("_")[-2] == "captain"
        assert ai.name.endswith("(AI)")

    def test_recruit_redraws_repeated_captains(self):
        """A draw repeating an earlier id or name is replaced by a fresh one."""
        rng = ScriptedDraws(
            names=["Calico Jack", "Calico Jack", "Calico Jack", "Mary Read"],
            suffixes=[1111, 1111, 2222, 1111],
        )
        captains = recruit_ai_captains(2, Difficulty.PIRATE, rng)
        assert [c.id for c in captains] == [
            "ai_calico_jack_pirate_1111",
            "ai_mary_read_pirate_1111",
        ]
        assert len({c.name for c in captains}) == 2

    def test_recruit_full_roster_is_distinct(self):
        captains = recruit_ai_captains(4, Difficulty.ADMIRAL, GameRNG(42))
        assert len({c.id for c in captains}) == 4
        assert len({c.name for c in captains}) == 4
        assert all(c.difficulty == Difficulty.ADMIRAL for c in captains)

    @pytest.mark.parametrize("count", [0, 5])
    def test_recruit_rejects_bad_count(self, count):
        with pytest.raises(ValueError, match="Invalid count"):
            recruit_ai_captains(count, rng=GameRNG(1))

    def test_practice_game_is_active_with_human_first(self):
        human = create_player("human", "Morgan")
        state = create_practice_game(human, Difficulty.NOVICE, GameRNG(42), game_id="g1")
        assert state.status == GameStatus.ACTIVE
        assert state.game_id == "g1"
        assert state.current_player.id == "human"
        assert state.players[1].is_ai
        assert state.players[1].difficulty == Difficulty.NOVICE
