"""Game configuration constants."""

# Map
MAP_SIZE = 10
MIN_MAP_SIZE = 5
SEED_EDGE_MARGIN = 2  # Island seeds stay this far from every edge
MIN_SEED_SPACING = 3
SEED_ATTEMPTS = 20
TREASURE_COUNT = 3
TREASURE_ISOLATION = 2.5  # Euclidean distance from every island seed
TREASURE_ATTEMPTS = 50
HAZARD_FRACTION = 0.15

# Roster
MIN_PLAYERS = 2
MAX_PLAYERS = 4
MAX_SHIPS_PER_PLAYER = 6

# Scanning
STARTING_SCAN_CHARGES = 3
MAX_SCAN_CHARGES = 5

# Event log
EVENT_LOG_SIZE = 10

# Turn limits
MAX_TURNS = 35
SUDDEN_DEATH_TURN = 40  # Score re-weights toward military strength

# Victory
DOMINANCE_THRESHOLD = 0.75  # Share of all claimed territory
RESIGN_THRESHOLD = 0.25  # Share of field average

# Combat
RANGE_REACH = 1.5  # Attack reach per integer range tier
MOMENTUM_STREAK = 2  # Consecutive attacks before momentum applies
MOMENTUM_BONUS = 1.25
CRITICAL_CHANCE = 0.10
CRITICAL_MULTIPLIER = 1.5

# Economy
COMEBACK_CAP = 50
WEATHER_REROLL_CHANCE = 0.15

# CLI
RNG_SEED_DEFAULT = 42  # CLI default seed
