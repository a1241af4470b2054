"""Seedable RNG wrapper for deterministic gameplay."""

import random


class GameRNG:
    """Single injectable random source for the engine.

    Map generation, location events, critical hits, weather rolls and AI
    tier gates all draw from one instance, so a fixed seed replays a whole
    match. Tests substitute doubles exposing the same four methods.
    """

    def __init__(self, seed: int | None = None):
        """Initialize the stream.

        Args:
            seed: Integer seed, or None for an unpredictable stream
        """
        self.seed = seed
        self.rng = random.Random(seed)

    def random(self) -> float:
        """Uniform float in [0.0, 1.0)."""
        return self.rng.random()

    def chance(self, probability: float) -> bool:
        """Return True with the given probability.

        Examples:
            >>> GameRNG(1).chance(1.0)
            True
            >>> GameRNG(1).chance(0.0)
            False
        """
        return self.random() < probability

    def randint(self, a: int, b: int) -> int:
        """Integer in [a, b], both ends inclusive."""
        return self.rng.randint(a, b)

    def choice(self, seq):
        """Pick one element of a non-empty sequence."""
        return self.rng.choice(seq)
