"""Player naming utilities for AI captains.

Provides functions to pick pirate captain names for AI opponents and to
build stable player ids for them.
"""

from .rng import GameRNG

# Captain name pool
CAPTAIN_NAMES = [
    "Blackbeard",
    "Calico Jack",
    "Anne Bonny",
    "Bartholomew",
    "Mary Read",
]


def select_captain_name(rng: GameRNG) -> str:
    """Pick a pirate captain name for an AI opponent.

    Args:
        rng: Random source used for the pick

    Returns:
        One entry of CAPTAIN_NAMES
    """
    return rng.choice(CAPTAIN_NAMES)


def ai_player_id(name: str, difficulty: str, suffix: int) -> str:
    """Build a player id for an AI captain.

    Examples:
        >>> ai_player_id("Calico Jack", "pirate", 7)
        'ai_calico_jack_pirate_7'
    """
    slug = name.lower().replace(" ", "_")
    return f"ai_{slug}_{difficulty}_{suffix}"


def get_player_display_name(name: str, is_ai: bool) -> str:
    """Get display name for a player.

    Examples:
        >>> get_player_display_name("Mary Read", True)
        'Mary Read (AI)'
        >>> get_player_display_name("alice", False)
        'alice'
    """
    if is_ai:
        return f"{name} (AI)"
    return name
