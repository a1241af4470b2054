"""Battle map generation with seeded island clusters.

The map is grown organically rather than filled uniformly, so ports and
treasure cluster in strategically meaningful places:
1. Fill the grid with water
2. Pick island seeds by rejection sampling, away from edges and each other
3. Grow each seed into its 8 neighbours (island 40%, port 30%, else water)
4. Drop treasure on open water far from every seed
5. Scatter hazards over cells that are still plain water
6. Attach each cell's yield table

Sampling shortfalls (fewer seeds or treasures than targeted) are accepted;
generation never fails once its arguments are valid.
"""

import logging
from dataclasses import dataclass

from ..models import Coordinate, GameMap, TerrainCell, TerrainType
from ..utils import GameRNG, euclidean_distance
from ..utils.constants import (
    HAZARD_FRACTION,
    MAP_SIZE,
    MIN_MAP_SIZE,
    MIN_SEED_SPACING,
    SEED_ATTEMPTS,
    SEED_EDGE_MARGIN,
    TREASURE_ATTEMPTS,
    TREASURE_COUNT,
    TREASURE_ISOLATION,
)
from .balance import terrain_yield

logger = logging.getLogger(__name__)

# Working grid: terrain per cell, indexed grid[x][y]
Grid = list[list[TerrainType]]


@dataclass(frozen=True)
class MapLayout:
    """Generated map plus the placement details used to build it.

    Attributes:
        game_map: Finished map
        island_seeds: Accepted island-center coordinates
        treasures: Coordinates where treasure was placed
        hazards: Coordinates converted to storm, reef, or whirlpool
    """

    game_map: GameMap
    island_seeds: tuple[Coordinate, ...]
    treasures: tuple[Coordinate, ...]
    hazards: tuple[Coordinate, ...]


def generate_map(size: int = MAP_SIZE, rng: GameRNG | None = None) -> GameMap:
    """Generate a battle map.

    Args:
        size: Width and height of the square grid
        rng: Random source; a fresh unseeded GameRNG if omitted

    Returns:
        GameMap with size x size cells

    Raises:
        ValueError: If size is too small to keep seeds off the edges
    """
    return generate_layout(size, rng).game_map


def generate_layout(size: int = MAP_SIZE, rng: GameRNG | None = None) -> MapLayout:
    """Generate a battle map and report where features were placed.

    Args:
        size: Width and height of the square grid
        rng: Random source; a fresh unseeded GameRNG if omitted

    Returns:
        MapLayout with the map, seeds, treasures and hazards

    Raises:
        ValueError: If size is too small to keep seeds off the edges
    """
    if size < MIN_MAP_SIZE:
        raise ValueError(f"Invalid size: {size} (must be >= {MIN_MAP_SIZE})")
    if rng is None:
        rng = GameRNG()

    grid: Grid = [[TerrainType.WATER for _ in range(size)] for _ in range(size)]

    seeds = _place_island_seeds(size, rng)
    _grow_islands(grid, seeds, rng)
    treasures = _place_treasures(grid, seeds, rng)
    hazards = _place_hazards(grid, rng)

    cells = tuple(
        tuple(
            TerrainCell(terrain=grid[x][y], resources=terrain_yield(grid[x][y]))
            for y in range(size)
        )
        for x in range(size)
    )
    game_map = GameMap(size=size, cells=cells)

    logger.debug(
        "Generated %dx%d map: %d seeds, %d treasures, %d hazards",
        size,
        size,
        len(seeds),
        len(treasures),
        len(hazards),
    )
    return MapLayout(
        game_map=game_map,
        island_seeds=tuple(seeds),
        treasures=tuple(treasures),
        hazards=tuple(hazards),
    )


def _place_island_seeds(size: int, rng: GameRNG) -> list[Coordinate]:
    """Choose island centers by rejection sampling.

    Each center sits at least SEED_EDGE_MARGIN cells from every edge and at
    least MIN_SEED_SPACING from earlier centers. A seed that cannot be placed
    within SEED_ATTEMPTS tries is skipped.
    """
    target = size // 3 + 1
    low = SEED_EDGE_MARGIN
    high = size - SEED_EDGE_MARGIN - 1
    seeds: list[Coordinate] = []

    for _ in range(target):
        for _attempt in range(SEED_ATTEMPTS):
            candidate = Coordinate(rng.randint(low, high), rng.randint(low, high))
            if all(
                euclidean_distance(candidate.x, candidate.y, s.x, s.y) >= MIN_SEED_SPACING
                for s in seeds
            ):
                seeds.append(candidate)
                break
        else:
            logger.debug("Island seed skipped after %d attempts", SEED_ATTEMPTS)

    return seeds


def _grow_islands(grid: Grid, seeds: list[Coordinate], rng: GameRNG) -> None:
    """Mark seeds as island and roll each in-bounds neighbour independently."""
    size = len(grid)
    for seed in seeds:
        grid[seed.x][seed.y] = TerrainType.ISLAND
        for n in seed.neighbours():
            if not (0 <= n.x < size and 0 <= n.y < size):
                continue
            roll = rng.random()
            if roll < 0.4:
                grid[n.x][n.y] = TerrainType.ISLAND
            elif roll < 0.7:
                grid[n.x][n.y] = TerrainType.PORT


def _place_treasures(
    grid: Grid, seeds: list[Coordinate], rng: GameRNG
) -> list[Coordinate]:
    """Place up to TREASURE_COUNT treasures on isolated water cells."""
    size = len(grid)
    placed: list[Coordinate] = []

    for _attempt in range(TREASURE_ATTEMPTS):
        if len(placed) >= TREASURE_COUNT:
            break
        x = rng.randint(0, size - 1)
        y = rng.randint(0, size - 1)
        if grid[x][y] != TerrainType.WATER:
            continue
        if all(euclidean_distance(x, y, s.x, s.y) > TREASURE_ISOLATION for s in seeds):
            grid[x][y] = TerrainType.TREASURE
            placed.append(Coordinate(x, y))

    if len(placed) < TREASURE_COUNT:
        logger.debug(
            "Placed %d of %d treasures within budget", len(placed), TREASURE_COUNT
        )
    return placed


def _place_hazards(grid: Grid, rng: GameRNG) -> list[Coordinate]:
    """Convert roughly HAZARD_FRACTION of cells to hazards, water cells only.

    Each pick is a random cell; picks that land on non-water are wasted, so
    the realised count is usually a little below the target.
    """
    size = len(grid)
    picks = int(size * size * HAZARD_FRACTION)
    hazards: list[Coordinate] = []

    for _ in range(picks):
        x = rng.randint(0, size - 1)
        y = rng.randint(0, size - 1)
        if grid[x][y] != TerrainType.WATER:
            continue
        roll = rng.random()
        if roll < 0.4:
            grid[x][y] = TerrainType.STORM
        elif roll < 0.7:
            grid[x][y] = TerrainType.REEF
        else:
            grid[x][y] = TerrainType.WHIRLPOOL
        hazards.append(Coordinate(x, y))

    return hazards
