"""Tests for the engine facade and full AI matches."""

from dataclasses import replace

import pytest

from factories import FixedRNG, make_player, make_record, make_ship, make_state
from pir8.engine import GameEngine, create_game, create_player, create_practice_game
from pir8.models import Attack, Coordinate, Difficulty, GameStatus, MoveShip, ShipType
from pir8.utils import MAX_TURNS, GameRNG


def end_reason(state):
    """Deciding condition named by the game_completed event."""
    event = state.event_log[-1]
    assert event.event_type == "game_completed"
    return event.description.split("(", 1)[1].split(")", 1)[0]


def assert_reason_holds(state):
    """The recorded end condition must match the final position."""
    reason = end_reason(state)
    winner = state.player_by_id(state.winner) if state.winner else None
    if reason == "territorial dominance":
        claimed = sum(len(p.territories) for p in state.players)
        assert len(winner.territories) / claimed >= 0.75
        assert winner.has_living_ship
    elif reason == "last fleet afloat":
        assert [p.id for p in state.contenders()] == [winner.id]
    elif reason == "all fleets destroyed":
        assert winner is None
        assert state.contenders() == []
    else:
        assert reason == "turn limit"
        assert state.turn_number >= MAX_TURNS
    return reason


def ai_roster(difficulty=Difficulty.PIRATE):
    return [
        create_player("ai_1", "Blackbeard (AI)", is_ai=True, difficulty=difficulty),
        create_player("ai_2", "Anne Bonny (AI)", is_ai=True, difficulty=difficulty),
    ]


class TestSubmit:
    """Test applying player actions through the engine."""

    def test_success_hands_on_turn(self):
        engine = GameEngine(FixedRNG())
        result = engine.submit(
            make_state(), make_record("p1", MoveShip("p1_scout_1", Coordinate(3, 3)))
        )
        assert result.success
        assert result.state.current_player.id == "p2"

    def test_failure_keeps_turn(self):
        engine = GameEngine(FixedRNG())
        state = make_state()
        result = engine.submit(state, make_record("p1", MoveShip("p1_scout_1", Coordinate(9, 9))))
        assert not result.success
        assert result.state is state

    def test_winning_action_completes_game(self):
        """Sinking the last enemy ship ends the game at once."""
        state = make_state(
            players=[
                make_player("p1", [make_ship(ShipType.FRIGATE, "p1", 2, 2)]),
                make_player("p2", [make_ship(ShipType.SCOUT, "p2", 3, 3, health=5)]),
            ]
        )
        result = GameEngine(FixedRNG()).submit(
            state, make_record("p1", Attack("p1_frigate_1", "p2_scout_1"))
        )
        assert result.state.status == GameStatus.COMPLETED
        assert result.state.winner == "p1"


class TestPassAndResign:
    """Test passing and resigning."""

    def test_pass_turn(self):
        engine = GameEngine(FixedRNG())
        result = engine.pass_turn(make_state(), "p1")
        assert result.success
        assert result.state.current_player.id == "p2"
        assert any(e.event_type == "turn_passed" for e in result.state.event_log)

    def test_round_reaching_turn_limit_scores_the_game(self):
        """Wrapping into the final turn hands the result to the weighted score."""
        state = make_state(turn_number=MAX_TURNS - 1, current_player_index=1)
        p2 = state.player_by_id("p2")
        state = state.with_player(replace(p2, territories=(Coordinate(8, 8),)))

        result = GameEngine(FixedRNG()).pass_turn(state, "p2")

        assert result.success
        assert result.state.turn_number == MAX_TURNS
        assert result.state.status == GameStatus.COMPLETED
        assert result.state.winner == "p2"
        assert end_reason(result.state) == "turn limit"

    def test_pass_out_of_turn(self):
        result = GameEngine(FixedRNG()).pass_turn(make_state(), "p2")
        assert result.message == "Not your turn"

    def test_resign(self):
        result = GameEngine(FixedRNG()).resign(make_state(), "p1")
        assert result.success
        assert result.state.status == GameStatus.COMPLETED
        assert result.state.winner == "p2"

    def test_resign_unknown_player(self):
        result = GameEngine(FixedRNG()).resign(make_state(), "ghost")
        assert not result.success
        assert result.message == "Player not found"


class TestAITurns:
    """Test AI-driven turns."""

    def test_run_ai_turn_rejects_human(self):
        with pytest.raises(ValueError, match="not an AI"):
            GameEngine(GameRNG(1)).run_ai_turn(make_state())

    def test_ai_replies_to_human(self):
        """After the human passes, the AI acts once and hands back."""
        rng = GameRNG(42)
        human = create_player("human", "Morgan")
        state = create_practice_game(human, Difficulty.PIRATE, rng, game_id="g1")
        engine = GameEngine(rng)

        state = engine.pass_turn(state, "human").state
        state, turns = engine.play_until_human_or_end(state)

        assert len(turns) == 1
        assert turns[0].player_id == state.players[1].id
        if state.status == GameStatus.ACTIVE:
            assert state.current_player.id == "human"
            assert state.turn_number == 2

    def test_play_stops_for_human(self):
        state = make_state()
        new_state, turns = GameEngine(GameRNG(1)).play_until_human_or_end(state)
        assert turns == []
        assert new_state is state


@pytest.mark.parametrize("seed", [1, 42, 7])
def test_ai_match_completes(seed):
    """An all-AI match always reaches a result within the turn limit."""
    rng = GameRNG(seed)
    state = create_game(ai_roster(), f"match_{seed}", rng)
    engine = GameEngine(rng)

    final, turns = engine.play_until_human_or_end(state)

    assert final.status == GameStatus.COMPLETED
    assert final.turn_number <= MAX_TURNS
    assert assert_reason_holds(final) == "territorial dominance"
    assert turns
    for turn in turns:
        assert turn.result is None or turn.result.success


def test_ai_match_is_deterministic():
    """Same seed, same match."""
    outcomes = []
    for _ in range(2):
        rng = GameRNG(99)
        state = create_game(ai_roster(Difficulty.ADMIRAL), "match", rng)
        final, turns = GameEngine(rng).play_until_human_or_end(state)
        outcomes.append((final, len(turns)))
    assert outcomes[0] == outcomes[1]


def test_four_player_match_completes():
    roster = [
        create_player(f"ai_{i}", f"Captain {i}", is_ai=True, difficulty=d)
        for i, d in enumerate(Difficulty)
    ]
    rng = GameRNG(2024)
    final, _ = GameEngine(rng).play_until_human_or_end(create_game(roster, "four", rng))
    assert final.status == GameStatus.COMPLETED
    assert_reason_holds(final)
