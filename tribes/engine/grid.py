"""Rectangular tile grid with king's-move adjacency.

This module handles:
1. Bounds-checked tile lookup and replace-on-write updates
2. Neighbor and Chebyshev-range queries
3. Terrain movement costs (as a tagged MoveCost value)
4. Terrain defense multipliers
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, List, Optional

from ..models.tile import Coord, TerrainType, Tile

TERRAIN_DEFENSE = {
    TerrainType.FIELD: 1.0,
    TerrainType.FOREST: 1.5,
    TerrainType.MOUNTAIN: 1.5,
    TerrainType.SHALLOW_WATER: 1.5,
    TerrainType.OCEAN: 1.5,
}


class CostKind(str, Enum):
    COST = "cost"
    CONSUMES_REMAINING = "consumes_remaining"
    IMPASSABLE = "impassable"


@dataclass(frozen=True)
class MoveCost:
    """Cost of stepping into a tile.

    Attributes:
        kind: COST for a fixed numeric cost, CONSUMES_REMAINING for terrain
            that ends the move and uses all remaining movement, IMPASSABLE
            for tiles that can never be entered
        amount: Numeric cost, only meaningful for COST
    """

    kind: CostKind
    amount: float = 0.0

    @classmethod
    def cost(cls, amount: float) -> "MoveCost":
        return cls(CostKind.COST, amount)


CONSUMES_REMAINING = MoveCost(CostKind.CONSUMES_REMAINING)
IMPASSABLE = MoveCost(CostKind.IMPASSABLE)


class GameMap:
    """Dense width x height board of tiles, stored row-major (tiles[y][x])."""

    def __init__(self, width: int, height: int, fill: TerrainType = TerrainType.FIELD):
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid map dimensions: {width}x{height}")
        self.width = width
        self.height = height
        self._tiles: List[List[Tile]] = [
            [Tile(x=x, y=y, terrain=fill) for x in range(width)] for y in range(height)
        ]

    @classmethod
    def create(cls, width: int, height: int, fill: TerrainType = TerrainType.FIELD) -> "GameMap":
        """Create a map pre-filled with a single terrain type."""
        return cls(width, height, fill)

    # =========================================================================
    # TILE ACCESS
    # =========================================================================

    def is_in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_tile(self, x: int, y: int) -> Optional[Tile]:
        """Return the tile at (x, y), or None when out of bounds."""
        if not self.is_in_bounds(x, y):
            return None
        return self._tiles[y][x]

    def set_tile(self, x: int, y: int, terrain: TerrainType) -> None:
        """Replace the terrain at (x, y). No-op when out of bounds."""
        self.update_tile(x, y, terrain=terrain)

    def update_tile(self, x: int, y: int, **changes) -> None:
        """Replace the tile at (x, y) with a copy carrying the given changes.

        Accepts the Tile fields terrain, resource, building and owner.
        No-op when out of bounds.
        """
        if not self.is_in_bounds(x, y):
            return
        if "x" in changes or "y" in changes:
            raise ValueError("Tile coordinates cannot be changed")
        self._tiles[y][x] = replace(self._tiles[y][x], **changes)

    def tiles(self) -> Iterator[Tile]:
        """Iterate over every tile in row-major order."""
        for row in self._tiles:
            yield from row

    def is_water(self, x: int, y: int) -> bool:
        tile = self.get_tile(x, y)
        return tile is not None and tile.is_water

    # =========================================================================
    # NEIGHBOR / RANGE QUERIES
    # =========================================================================

    def get_neighbors(self, x: int, y: int) -> List[Tile]:
        """Return the king's-move neighbors of (x, y).

        Corners have 3 neighbors, edges 5, interior tiles 8.
        """
        return self.get_tiles_in_range(x, y, 1)

    def get_tiles_in_range(self, x: int, y: int, radius: int) -> List[Tile]:
        """Return all tiles within Chebyshev distance `radius` of (x, y).

        The origin tile is excluded and the result is clipped to the map.
        """
        result = []
        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                if dx == 0 and dy == 0:
                    continue
                tile = self.get_tile(x + dx, y + dy)
                if tile is not None:
                    result.append(tile)
        return result

    # =========================================================================
    # GAMEPLAY HELPERS
    # =========================================================================

    def get_movement_cost(self, origin: Coord, dest: Coord) -> MoveCost:
        """Cost of stepping from origin into dest.

        Field costs 1.0 from any tile. Forest, mountain and all water use
        the mover's remaining movement. Leaving the map is impassable.
        """
        tile = self.get_tile(dest.x, dest.y)
        if tile is None:
            return IMPASSABLE
        if tile.terrain == TerrainType.FIELD:
            return MoveCost.cost(1.0)
        return CONSUMES_REMAINING

    def get_defense_bonus(self, x: int, y: int) -> float:
        """Defense multiplier for a unit standing on (x, y)."""
        tile = self.get_tile(x, y)
        if tile is None:
            return 1.0
        return TERRAIN_DEFENSE[tile.terrain]
