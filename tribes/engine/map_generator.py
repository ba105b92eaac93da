"""Seeded procedural map generation.

This module handles:
1. Capital placement, one per player in separate quadrants
2. Neutral village placement by rejection sampling
3. Water growth from seed points, with deep-water reclassification
4. Forest/mountain assignment weighted by the tribes in the game

Every call to generate_map() builds its own GameRNG, so the same seed and
config always produce the same map. Shortfalls (fewer villages or water
tiles than targeted) are accepted as-is.
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Sequence

from ..models.config import GameConfig
from ..models.tile import Coord, TerrainType
from ..models.tribe import TerrainModifiers, get_tribe
from ..utils import GameRNG, chebyshev_distance
from ..utils.constants import (
    CAPITAL_MARGIN,
    MAP_SIZES,
    TERRAIN_BASE_RATES,
    VILLAGE_ATTEMPT_FACTOR,
    VILLAGE_EDGE_MARGIN,
    VILLAGE_MIN_SPACING,
    WATER_CAPITAL_CLEARANCE,
    WATER_EXPANSION_PROB,
    WATER_TILES_PER_SEED,
)
from .grid import GameMap

logger = logging.getLogger(__name__)

# Water grows along the four orthogonal directions only
WATER_DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass
class GeneratedMap:
    """Output of map generation.

    Attributes:
        grid: The generated terrain
        capitals: Capital positions, index = player
        villages: Neutral village positions
    """

    grid: GameMap
    capitals: List[Coord]
    villages: List[Coord]


def map_size_for(preset: str) -> int:
    """Map size for a named preset (tiny, small, normal, large)."""
    try:
        return MAP_SIZES[preset]
    except KeyError:
        raise ValueError(
            f"Unknown map size preset: {preset!r} (expected one of {', '.join(MAP_SIZES)})"
        ) from None


def generate_map(config: GameConfig, seed: int) -> GeneratedMap:
    """Generate a complete map from a config.

    Pipeline:
    1. All-field grid of map_size x map_size
    2. Capitals in quadrants
    3. Villages
    4. Water
    5. Forest and mountain

    Args:
        config: Game configuration (size, water level, tribes)
        seed: RNG seed for deterministic generation

    Returns:
        GeneratedMap with grid, capitals and villages
    """
    rng = GameRNG(seed)
    size = config.map_size
    grid = GameMap.create(size, size, TerrainType.FIELD)

    capitals = place_capitals(size, config.player_count, rng)
    villages = place_villages(size, capitals, rng)
    generate_water(grid, config.water_level, capitals, rng)
    generate_terrain(grid, capitals, [tribe.value for tribe in config.tribes], rng)

    logger.info(
        f"Generated {size}x{size} map (seed {seed}): "
        f"{len(capitals)} capitals, {len(villages)} villages"
    )
    return GeneratedMap(grid=grid, capitals=capitals, villages=villages)


# =============================================================================
# CAPITALS AND VILLAGES
# =============================================================================


def place_capitals(map_size: int, player_count: int, rng: GameRNG) -> List[Coord]:
    """Place capitals in the four quadrants of the map.

    Quadrant order is top-left, top-right, bottom-left, bottom-right, and
    player i gets quadrant i. All four positions are always drawn so the RNG
    stream does not depend on the player count.

    Args:
        map_size: Width and height of the map
        player_count: Number of players (at most 4 capitals are placed)
        rng: Random number generator

    Returns:
        List of capital positions
    """
    half = map_size // 2
    margin = CAPITAL_MARGIN

    def near() -> int:
        return margin + rng.randint(0, half - margin * 2)

    def far() -> int:
        return half + rng.randint(0, half - margin)

    # x is drawn before y for each quadrant
    top_left = Coord(near(), near())
    top_right = Coord(far(), near())
    bottom_left = Coord(near(), far())
    bottom_right = Coord(far(), far())

    quadrants = [top_left, top_right, bottom_left, bottom_right]
    return quadrants[: min(player_count, len(quadrants))]


def place_villages(map_size: int, capitals: Sequence[Coord], rng: GameRNG) -> List[Coord]:
    """Place neutral villages by rejection sampling.

    Target count is floor((map_size / 3)^2) minus the capitals. A candidate is
    rejected if it is within VILLAGE_MIN_SPACING - 1 of any capital or placed
    village. Sampling stops after VILLAGE_ATTEMPT_FACTOR x target attempts.

    Returns:
        Placed villages (possibly fewer than targeted)
    """
    target = max(0, math.floor((map_size / 3) ** 2) - len(capitals))
    villages: List[Coord] = []
    occupied = set(capitals)

    attempt = 0
    while attempt < target * VILLAGE_ATTEMPT_FACTOR and len(villages) < target:
        attempt += 1
        x = rng.randint(VILLAGE_EDGE_MARGIN, map_size - VILLAGE_EDGE_MARGIN)
        y = rng.randint(VILLAGE_EDGE_MARGIN, map_size - VILLAGE_EDGE_MARGIN)
        candidate = Coord(x, y)

        if candidate in occupied:
            continue
        if any(
            chebyshev_distance(x, y, pos.x, pos.y) < VILLAGE_MIN_SPACING
            for pos in [*capitals, *villages]
        ):
            continue

        villages.append(candidate)
        occupied.add(candidate)

    if len(villages) < target:
        logger.debug(f"Placed {len(villages)}/{target} villages after {attempt} attempts")
    return villages


# =============================================================================
# WATER
# =============================================================================


def generate_water(
    grid: GameMap, water_level: float, capitals: Sequence[Coord], rng: GameRNG
) -> None:
    """Grow connected bodies of water over the grid.

    1. Drop seed points at least WATER_CAPITAL_CLEARANCE + 1 from capitals
    2. Repeatedly pop a random frontier tile and try its four orthogonal
       neighbors in shuffled order, accepting each with WATER_EXPANSION_PROB
    3. Stop at the target count or when the frontier runs dry
    4. Mark every water tile shallow, then turn tiles whose eight neighbors
       are all water (and in bounds) into ocean
    """
    target = math.floor(grid.width * grid.height * water_level)
    if target <= 0:
        return

    capital_set = set(capitals)
    seed_count = max(1, target // WATER_TILES_PER_SEED)
    seeds: List[Coord] = []

    for _ in range(seed_count * 5):
        if len(seeds) >= seed_count:
            break
        x = rng.randint(0, grid.width)
        y = rng.randint(0, grid.height)
        if any(
            chebyshev_distance(x, y, cap.x, cap.y) <= WATER_CAPITAL_CLEARANCE
            for cap in capitals
        ):
            continue
        seeds.append(Coord(x, y))

    # Insertion-ordered so the ocean pass below is deterministic
    water: Dict[Coord, None] = dict.fromkeys(seeds)
    frontier = list(seeds)

    while len(water) < target and frontier:
        # Swap-remove a random frontier tile
        idx = rng.randint(0, len(frontier))
        current = frontier[idx]
        frontier[idx] = frontier[-1]
        frontier.pop()

        directions = list(WATER_DIRECTIONS)
        rng.shuffle(directions)

        for dx, dy in directions:
            neighbor = Coord(current.x + dx, current.y + dy)
            if not grid.is_in_bounds(neighbor.x, neighbor.y):
                continue
            if neighbor in water or neighbor in capital_set:
                continue
            if len(water) >= target:
                break
            if rng.random() < WATER_EXPANSION_PROB:
                water[neighbor] = None
                frontier.append(neighbor)

    if len(water) < target:
        logger.debug(f"Grew {len(water)}/{target} water tiles before the frontier ran out")

    for pos in water:
        grid.set_tile(pos.x, pos.y, TerrainType.SHALLOW_WATER)

    for pos in water:
        if not _touches_land(grid, pos):
            grid.set_tile(pos.x, pos.y, TerrainType.OCEAN)


def _touches_land(grid: GameMap, pos: Coord) -> bool:
    """True if any king's-move neighbor is land or off the map."""
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            tile = grid.get_tile(pos.x + dx, pos.y + dy)
            if tile is None or not tile.is_water:
                return True
    return False


# =============================================================================
# TERRAIN
# =============================================================================


def average_modifiers(tribes: Sequence[str]) -> TerrainModifiers:
    """Mean forest/mountain modifiers over the tribes in the game."""
    if not tribes:
        return TerrainModifiers()
    modifiers = [get_tribe(tribe).terrain for tribe in tribes]
    return TerrainModifiers(
        forest=sum(m.forest for m in modifiers) / len(modifiers),
        mountain=sum(m.mountain for m in modifiers) / len(modifiers),
    )


def generate_terrain(
    grid: GameMap, capitals: Sequence[Coord], tribes: Sequence[str], rng: GameRNG
) -> None:
    """Turn field tiles into forest or mountain.

    Base rates (field 0.48, forest 0.38, mountain 0.14) are scaled by the
    mean tribe modifiers and renormalized. Tiles are rolled row by row; capital
    tiles and non-field tiles are skipped. Afterwards any water in the 3x3
    block around each capital is reverted to field.
    """
    modifiers = average_modifiers(tribes)
    forest_rate = TERRAIN_BASE_RATES["forest"] * modifiers.forest
    mountain_rate = TERRAIN_BASE_RATES["mountain"] * modifiers.mountain
    total_rate = forest_rate + mountain_rate + TERRAIN_BASE_RATES["field"]
    forest_chance = forest_rate / total_rate
    mountain_chance = mountain_rate / total_rate

    capital_set = set(capitals)

    for y in range(grid.height):
        for x in range(grid.width):
            tile = grid.get_tile(x, y)
            if tile.terrain != TerrainType.FIELD or (x, y) in capital_set:
                continue
            roll = rng.random()
            if roll < forest_chance:
                grid.set_tile(x, y, TerrainType.FOREST)
            elif roll < forest_chance + mountain_chance:
                grid.set_tile(x, y, TerrainType.MOUNTAIN)

    for cap in capitals:
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if grid.is_water(cap.x + dx, cap.y + dy):
                    grid.set_tile(cap.x + dx, cap.y + dy, TerrainType.FIELD)


def count_terrain(grid: GameMap) -> Dict[TerrainType, int]:
    """Count tiles of each terrain type (every type present, zero included)."""
    counts = Counter(tile.terrain for tile in grid.tiles())
    return {terrain: counts.get(terrain, 0) for terrain in TerrainType}
