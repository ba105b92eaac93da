"""Game configuration constants."""

# Players
HUMAN_PLAYER = 0  # Player index that never receives the difficulty bonus
NO_WINNER = -1
STARTING_STARS = 5

# Star income bonus for non-human players, per difficulty
DIFFICULTY_BONUS = {
    "easy": 1,
    "normal": 2,
    "hard": 3,
    "crazy": 5,
}

# Combat
DAMAGE_MULTIPLIER = 4.5
CITY_DEFENSE_BONUS = 1.5
CITY_WALL_DEFENSE_BONUS = 4.0
VETERAN_KILLS = 3
VETERAN_HP_BONUS = 5

# Technology
TECH_BASE_COST = 4

# Cities
LEVEL_UP_STARS = 5  # Immediate stars reward at level 3
LEVEL_UP_POPULATION = 3  # Population boost reward at level 4
BORDER_SIZE_DEFAULT = 3
BORDER_SIZE_GROWN = 5

# Map generation
MAP_SIZES = {
    "tiny": 11,
    "small": 14,
    "normal": 16,
    "large": 18,
}
CAPITAL_MARGIN = 2  # Inward margin for capital placement
VILLAGE_EDGE_MARGIN = 3  # Villages keep this far from the map edge
VILLAGE_MIN_SPACING = 2  # Chebyshev distance to any capital/village
VILLAGE_ATTEMPT_FACTOR = 10  # Rejection-sampling attempts per target village
WATER_CAPITAL_CLEARANCE = 3  # Water seeds keep more than this from capitals
WATER_TILES_PER_SEED = 20
WATER_EXPANSION_PROB = 0.6
TERRAIN_BASE_RATES = {
    "field": 0.48,
    "forest": 0.38,
    "mountain": 0.14,
}

# Linear-congruential generator parameters
LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MASK = 0x7FFFFFFF

# Testing
RNG_SEED_DEFAULT = 42  # Default seed for testing
