"""Utility functions and constants for the tribes simulation core."""

from .constants import (
    DIFFICULTY_BONUS,
    HUMAN_PLAYER,
    MAP_SIZES,
    NO_WINNER,
    RNG_SEED_DEFAULT,
    STARTING_STARS,
)
from .distance import chebyshev_distance
from .rng import GameRNG

__all__ = [
    "DIFFICULTY_BONUS",
    "HUMAN_PLAYER",
    "MAP_SIZES",
    "NO_WINNER",
    "RNG_SEED_DEFAULT",
    "STARTING_STARS",
    "chebyshev_distance",
    "GameRNG",
]
