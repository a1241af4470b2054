"""Random events that fire when a ship arrives on a cell."""

from dataclasses import dataclass

from ..models import TerrainType
from ..utils import GameRNG


@dataclass(frozen=True)
class LocationEvent:
    """Outcome of arriving on a cell.

    Attributes:
        message: Text appended to the move result
        health_change: Signed change to the arriving ship's health
        resource_change: Signed per-resource changes for the owning player
    """

    message: str
    health_change: int = 0
    resource_change: dict[str, int] | None = None


def roll_location_event(terrain: TerrainType, rng: GameRNG) -> LocationEvent | None:
    """Roll for an arrival event on a terrain type.

    A single uniform roll decides the outcome; most arrivals produce nothing.

    Args:
        terrain: Terrain of the destination cell
        rng: Random source

    Returns:
        LocationEvent, or None if nothing happened
    """
    roll = rng.random()

    if terrain == TerrainType.WATER:
        if roll < 0.05:
            return LocationEvent(
                "Found floating supply crate! (+10 Supplies)",
                resource_change={"supplies": 10},
            )
    elif terrain == TerrainType.ISLAND:
        if roll < 0.10:
            return LocationEvent(
                "Natives offered tribute! (+50 Gold)", resource_change={"gold": 50}
            )
        if roll < 0.25:
            return LocationEvent(
                "Explored jungle ruins! (+15 Supplies)",
                resource_change={"supplies": 15},
            )
    elif terrain == TerrainType.PORT:
        if roll < 0.15:
            return LocationEvent(
                "Local sailors joined your crew! (+5 Crew)", resource_change={"crew": 5}
            )
    elif terrain == TerrainType.TREASURE:
        if roll < 0.40:
            return LocationEvent(
                "Discovered hidden loot! (+100 Gold)", resource_change={"gold": 100}
            )
    elif terrain == TerrainType.STORM:
        if roll < 0.6:
            return LocationEvent("Storm battered the hull! (-15 HP)", health_change=-15)
        return LocationEvent(
            "Strong winds damaged rigging! (-10 Supplies)",
            resource_change={"supplies": -10},
        )
    elif terrain == TerrainType.REEF:
        if roll < 0.5:
            return LocationEvent(
                "Scraped hull on hidden reef! (-20 HP)", health_change=-20
            )
    elif terrain == TerrainType.WHIRLPOOL:
        if roll < 0.8:
            return LocationEvent("Caught in maelstrom! (-30 HP)", health_change=-30)

    return None
