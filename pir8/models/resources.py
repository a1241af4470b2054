"""Resource bundle data model."""

from dataclasses import dataclass, fields

RESOURCE_NAMES = ("gold", "crew", "cannons", "supplies", "wood", "rum")


@dataclass(frozen=True)
class Resources:
    """Fixed tuple of named, non-negative resource counters.

    Used both for a player's stockpile and for cost and yield tables.
    """

    gold: int = 0
    crew: int = 0
    cannons: int = 0
    supplies: int = 0
    wood: int = 0
    rum: int = 0

    def __post_init__(self):
        """Validate resource data after initialization."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or value < 0:
                raise ValueError(f"Invalid {f.name}: {value!r} (must be int >= 0)")

    def as_dict(self) -> dict[str, int]:
        """Return counters keyed by resource name."""
        return {name: getattr(self, name) for name in RESOURCE_NAMES}

    def can_afford(self, cost: "Resources") -> bool:
        """Return True if every counter covers the matching cost counter."""
        return all(getattr(self, name) >= getattr(cost, name) for name in RESOURCE_NAMES)

    def debit(self, cost: "Resources") -> "Resources":
        """Subtract a cost in full.

        Args:
            cost: Cost table to pay

        Returns:
            New Resources with every counter reduced

        Raises:
            ValueError: If any counter would go negative (check can_afford first)
        """
        if not self.can_afford(cost):
            raise ValueError(f"Cannot afford {cost.describe()} with {self.describe()}")
        return Resources(
            **{name: getattr(self, name) - getattr(cost, name) for name in RESOURCE_NAMES}
        )

    def credit(self, gain: "Resources") -> "Resources":
        """Add another bundle to this one."""
        return Resources(
            **{name: getattr(self, name) + getattr(gain, name) for name in RESOURCE_NAMES}
        )

    def adjust(self, **deltas: int) -> "Resources":
        """Apply signed per-counter changes, clamping each counter at zero.

        Examples:
            >>> Resources(supplies=5).adjust(supplies=-10).supplies
            0
        """
        values = self.as_dict()
        for name, delta in deltas.items():
            if name not in values:
                raise ValueError(f"Unknown resource: {name}")
            values[name] = max(0, values[name] + delta)
        return Resources(**values)

    def scaled(self, multiplier: float) -> "Resources":
        """Multiply every counter and floor the result."""
        return Resources(
            **{name: int(getattr(self, name) * multiplier) for name in RESOURCE_NAMES}
        )

    def is_empty(self) -> bool:
        return all(getattr(self, name) == 0 for name in RESOURCE_NAMES)

    def describe(self) -> str:
        """Human-readable list of non-zero counters, e.g. "5 gold, 2 crew"."""
        return ", ".join(
            f"{getattr(self, name)} {name}"
            for name in RESOURCE_NAMES
            if getattr(self, name) > 0
        )
