"""Terrain cell and battle map data models."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator

from .coordinate import Coordinate
from .resources import Resources


class TerrainType(str, Enum):
    """Kinds of map cell."""

    WATER = "water"
    ISLAND = "island"
    PORT = "port"
    TREASURE = "treasure"
    STORM = "storm"
    REEF = "reef"
    WHIRLPOOL = "whirlpool"

    @property
    def is_hazard(self) -> bool:
        return self in (TerrainType.STORM, TerrainType.REEF, TerrainType.WHIRLPOOL)


@dataclass(frozen=True)
class TerrainCell:
    """One cell of the battle map.

    Ownership is only ever changed by a claim; nothing clears it mid-game.
    """

    terrain: TerrainType
    resources: Resources = Resources()  # Yield when collected by the owner
    owner: str | None = None  # Player id, or None if unclaimed
    is_contested: bool = False

    def with_owner(self, owner: str) -> "TerrainCell":
        return replace(self, owner=owner)


@dataclass(frozen=True)
class GameMap:
    """Fixed-size square grid of terrain cells, indexed cells[x][y]."""

    size: int
    cells: tuple[tuple[TerrainCell, ...], ...]

    def __post_init__(self):
        """Validate map data after initialization."""
        if self.size <= 0:
            raise ValueError(f"Invalid size: {self.size} (must be > 0)")
        if len(self.cells) != self.size or any(
            len(column) != self.size for column in self.cells
        ):
            raise ValueError(
                f"Invalid cells: grid must be {self.size}x{self.size}"
            )

    def in_bounds(self, coord: Coordinate) -> bool:
        return 0 <= coord.x < self.size and 0 <= coord.y < self.size

    def cell_at(self, coord: Coordinate) -> TerrainCell:
        """Return the cell at a coordinate.

        Raises:
            ValueError: If the coordinate is outside the grid
        """
        if not self.in_bounds(coord):
            raise ValueError(f"Coordinate {coord} out of bounds for size {self.size}")
        return self.cells[coord.x][coord.y]

    def with_cell(self, coord: Coordinate, cell: TerrainCell) -> "GameMap":
        """Return a new map with one cell replaced."""
        if not self.in_bounds(coord):
            raise ValueError(f"Coordinate {coord} out of bounds for size {self.size}")
        column = list(self.cells[coord.x])
        column[coord.y] = cell
        cells = list(self.cells)
        cells[coord.x] = tuple(column)
        return GameMap(size=self.size, cells=tuple(cells))

    def coordinates(self) -> Iterator[Coordinate]:
        """Iterate every coordinate on the grid, column by column."""
        for x in range(self.size):
            for y in range(self.size):
                yield Coordinate(x, y)

    def cells_of_type(self, terrain: TerrainType) -> list[Coordinate]:
        return [c for c in self.coordinates() if self.cell_at(c).terrain == terrain]

    def owned_by(self, player_id: str) -> list[Coordinate]:
        return [c for c in self.coordinates() if self.cell_at(c).owner == player_id]
