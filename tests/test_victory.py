"""Tests for victory conditions and resignation."""

from dataclasses import replace

from factories import make_player, make_ship, make_state
from pir8.engine import check_game_end, resign, should_resign
from pir8.engine.victory import determine_winner_by_score
from pir8.models import Coordinate, GameStatus, ShipType


def sink_fleet(state, player_id):
    player = state.player_by_id(player_id)
    return state.with_player(
        replace(player, ships=tuple(s.with_health(0) for s in player.ships))
    )


def big_fleet_for(player_id):
    row = 0 if player_id == "p1" else 3
    return [make_ship(ShipType.SCOUT, player_id, x, row, number=x + 1) for x in range(6)]


def test_game_continues():
    result = check_game_end(make_state())
    assert not result.is_over
    assert result.winner is None
    assert result.state.status == GameStatus.ACTIVE


def test_last_fleet_afloat_wins():
    """Test victory when only one player has living ships."""
    state = sink_fleet(make_state(), "p2")
    result = check_game_end(state)
    assert result.is_over
    assert result.winner == "p1"
    assert result.state.status == GameStatus.COMPLETED
    assert result.state.winner == "p1"
    assert result.state.event_log[-1].event_type == "game_completed"


def test_mutual_destruction_is_a_draw():
    state = sink_fleet(sink_fleet(make_state(), "p1"), "p2")
    result = check_game_end(state)
    assert result.is_over
    assert result.winner is None
    assert result.state.status == GameStatus.COMPLETED


def test_turn_limit_uses_score():
    state = make_state(turn_number=35)
    p2 = state.player_by_id("p2")
    state = state.with_player(replace(p2, territories=(Coordinate(8, 8), Coordinate(9, 8))))
    p1 = state.player_by_id("p1")
    state = state.with_player(replace(p1, territories=(Coordinate(1, 1),)))
    result = check_game_end(state)
    assert result.is_over
    assert result.winner == "p2"
    assert result.reason == "turn limit"


def test_custom_turn_limit():
    result = check_game_end(make_state(turn_number=10), max_turns=10)
    assert result.is_over


def test_score_tie_goes_to_first_player():
    assert determine_winner_by_score(make_state()).id == "p1"


def test_dominance_victory():
    """75% of claimed territory wins."""
    state = make_state()
    p1 = state.player_by_id("p1")
    state = state.with_player(
        replace(p1, territories=tuple(Coordinate(0, y) for y in range(3)))
    )
    p2 = state.player_by_id("p2")
    state = state.with_player(replace(p2, territories=(Coordinate(9, 9),)))
    result = check_game_end(state)
    assert result.is_over
    assert result.winner == "p1"
    assert result.reason == "territorial dominance"


def test_below_dominance_threshold():
    state = make_state()
    p1 = state.player_by_id("p1")
    state = state.with_player(replace(p1, territories=(Coordinate(0, 0), Coordinate(0, 1))))
    p2 = state.player_by_id("p2")
    state = state.with_player(replace(p2, territories=(Coordinate(9, 9),)))
    assert not check_game_end(state).is_over


def test_dominance_needs_living_ship():
    """A fleetless player's territory counts in the total but cannot win."""
    players = [
        make_player("p1", [make_ship(ShipType.SCOUT, "p1", 1, 1)], territories=(Coordinate(0, 0),)),
        make_player("p2", [make_ship(ShipType.SCOUT, "p2", 8, 8)], territories=(Coordinate(9, 9),)),
        make_player(
            "p3",
            [make_ship(ShipType.SCOUT, "p3", 5, 5, health=0)],
            territories=tuple(Coordinate(x, 5) for x in range(8)),
        ),
    ]
    assert not check_game_end(make_state(players=players)).is_over


def test_completed_game_is_not_re_evaluated():
    state = sink_fleet(make_state(), "p2")
    done = check_game_end(state).state
    again = check_game_end(done)
    assert again.is_over
    assert again.state is done


def test_waiting_game_is_not_evaluated():
    state = sink_fleet(make_state(status=GameStatus.WAITING), "p2")
    result = check_game_end(state)
    assert not result.is_over
    assert result.state.status == GameStatus.WAITING


class TestResign:
    """Test voluntary resignation."""

    def test_resign_ends_two_player_game(self):
        state = resign(make_state(), "p1")
        assert not state.player_by_id("p1").is_active
        assert state.status == GameStatus.COMPLETED
        assert state.winner == "p2"

    def test_resign_in_three_player_game_continues(self):
        players = [
            make_player("p1", [make_ship(ShipType.SCOUT, "p1", 1, 1)]),
            make_player("p2", [make_ship(ShipType.SCOUT, "p2", 8, 1)]),
            make_player("p3", [make_ship(ShipType.SCOUT, "p3", 1, 8)]),
        ]
        state = resign(make_state(players=players), "p2")
        assert state.status == GameStatus.ACTIVE
        assert state.event_log[-1].event_type == "player_resigned"

    def test_unknown_player_ignored(self):
        state = make_state()
        assert resign(state, "ghost") is state

    def test_should_not_resign_with_a_fleet(self):
        """One ship against a big fleet is not yet hopeless."""
        players = [
            make_player(
                "p1", big_fleet_for("p1"), territories=tuple(Coordinate(x, 1) for x in range(8))
            ),
            make_player("p2", [make_ship(ShipType.SCOUT, "p2", 8, 8)]),
        ]
        state = make_state(players=players)
        # averages: ships 3.5, territories 4 -> thresholds 0.875 and 1.0
        assert not should_resign(state, "p2")
        weak = make_state(
            players=[
                players[0],
                make_player("p2", [make_ship(ShipType.SCOUT, "p2", 8, 8, health=0)]),
                make_player("p3", [make_ship(ShipType.SCOUT, "p3", 9, 9)]),
            ]
        )
        assert not should_resign(weak, "p1")

    def test_should_resign_when_hopeless(self):
        """Far behind in both ships and territory."""
        players = [
            make_player(
                "p1", big_fleet_for("p1"), territories=tuple(Coordinate(x, 1) for x in range(8))
            ),
            make_player("p2", [make_ship(ShipType.SCOUT, "p2", 8, 8)]),
            make_player(
                "p3", big_fleet_for("p3"), territories=tuple(Coordinate(x, 2) for x in range(8))
            ),
        ]
        # averages: ships 13/3, territories 16/3 -> p2 has 1 < 1.08 ships and 0 < 1.33 lands
        assert should_resign(make_state(players=players), "p2")

