#!/usr/bin/env python3
"""PIR8 - Main entry point.

Runs a match between AI captains from the command line, printing each turn
and the final standings. Useful for watching the planner play and for
checking that a seed reproduces the same game.
"""

import argparse
import json
import logging
import sys

from pir8.engine import GameEngine, create_game, recruit_ai_captains
from pir8.engine.balance import player_score
from pir8.models import Difficulty, GameState
from pir8.utils import MAX_PLAYERS, MAX_TURNS, MIN_PLAYERS, RNG_SEED_DEFAULT, GameRNG
from pir8.utils.serialization import serialize_game_state


class MatchRunner:
    """Plays an all-AI match turn by turn."""

    def __init__(self, state: GameState, engine: GameEngine, quiet: bool = False):
        self.state = state
        self.engine = engine
        self.quiet = quiet

    def run(self) -> GameState:
        """Main game loop."""
        if not self.quiet:
            print("\n" + "=" * 60)
            print("PIR8")
            print("=" * 60)
            for player in self.state.players:
                print(f"  {player.name} [{player.id}]")
            print()

        self.state, turns = self.engine.play_until_human_or_end(self.state)
        if not self.quiet:
            for turn in turns:
                chosen = turn.decision.reasoning.chosen
                if turn.result is None:
                    print(f"{turn.player_id}: passes")
                elif chosen is not None:
                    print(f"{turn.player_id}: {turn.result.message} ({chosen.reason})")

        self._show_result()
        return self.state

    def _show_result(self) -> None:
        players = list(self.state.players)
        print("\n" + "=" * 60)
        print(f"Game over on turn {self.state.turn_number}")
        winner = self.state.player_by_id(self.state.winner) if self.state.winner else None
        label = f"{winner.name} [{winner.id}]" if winner else "none (draw)"
        print(f"Winner: {label}")
        print("=" * 60)
        for player in players:
            score = player_score(player, players, self.state.turn_number)
            print(
                f"  {player.name:<24} {player.id:<32} score {score:>7.1f}  "
                f"ships {len(player.living_ships)}  territories {len(player.territories)}"
            )


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="PIR8 - Turn-based naval strategy",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                   # Two Pirate-tier captains, seed 42
  %(prog)s --players 4 --difficulty admiral  # Four-way Admiral match
  %(prog)s --seed 7 --save final.json        # Save the final snapshot
        """,
    )
    parser.add_argument(
        "--players",
        type=int,
        default=2,
        choices=range(MIN_PLAYERS, MAX_PLAYERS + 1),
        help="Number of AI captains (default: 2)",
    )
    parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        default=Difficulty.PIRATE.value,
        help="AI tier for every captain (default: pirate)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=RNG_SEED_DEFAULT,
        help=f"Random seed for map generation and dice (default: {RNG_SEED_DEFAULT})",
    )
    parser.add_argument(
        "--max-turns",
        type=int,
        default=MAX_TURNS,
        help=f"Turn at which the score decides the game (default: {MAX_TURNS})",
    )
    parser.add_argument(
        "--save",
        type=str,
        metavar="FILE",
        help="Write the final game snapshot to a JSON file",
    )
    parser.add_argument("--quiet", action="store_true", help="Only print the final standings")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    log_level = logging.DEBUG if args.debug else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    rng = GameRNG(args.seed)
    difficulty = Difficulty(args.difficulty)
    captains = recruit_ai_captains(args.players, difficulty, rng)

    state = create_game(captains, f"cli_{args.seed}", rng)
    engine = GameEngine(rng, max_turns=args.max_turns)
    final_state = MatchRunner(state, engine, quiet=args.quiet).run()

    if args.save:
        with open(args.save, "w") as f:
            json.dump(serialize_game_state(final_state), f, indent=2)
        print(f"\nSnapshot saved to {args.save}")


if __name__ == "__main__":
    main()
