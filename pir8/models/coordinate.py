"""Coordinate data model for grid positions."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinate:
    """An (x, y) cell position on the square battle map.

    Coordinates compare and hash by value, so they can be used directly as
    dictionary keys and in territory lists.
    """

    x: int
    y: int

    def __post_init__(self):
        """Validate coordinate data after initialization."""
        if not isinstance(self.x, int) or not isinstance(self.y, int):
            raise ValueError(
                f"Invalid coordinate: ({self.x!r}, {self.y!r}) (must be integers)"
            )

    def to_string(self) -> str:
        """Return the "x,y" text form used in messages and the host layer."""
        return f"{self.x},{self.y}"

    @classmethod
    def parse(cls, text: str) -> "Coordinate":
        """Parse an "x,y" string.

        Args:
            text: Coordinate text such as "3,4"

        Returns:
            Parsed Coordinate

        Raises:
            ValueError: If text is not two comma-separated integers
        """
        parts = text.split(",")
        if len(parts) != 2:
            raise ValueError(f"Invalid coordinate string: {text!r} (must be 'x,y')")
        try:
            return cls(int(parts[0].strip()), int(parts[1].strip()))
        except ValueError as e:
            raise ValueError(
                f"Invalid coordinate string: {text!r} (must be 'x,y')"
            ) from e

    def neighbours(self) -> list["Coordinate"]:
        """Return the 8 surrounding coordinates (may be out of bounds)."""
        return [
            Coordinate(self.x + dx, self.y + dy)
            for dx in (-1, 0, 1)
            for dy in (-1, 0, 1)
            if dx != 0 or dy != 0
        ]

    def __str__(self) -> str:
        return self.to_string()
