"""Tile and coordinate data models."""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional


class Coord(NamedTuple):
    """A discrete (x, y) position on the grid, hashable for sets and dicts."""

    x: int
    y: int


class TerrainType(str, Enum):
    FIELD = "field"
    FOREST = "forest"
    MOUNTAIN = "mountain"
    SHALLOW_WATER = "shallow_water"
    OCEAN = "ocean"


WATER_TERRAIN = frozenset({TerrainType.SHALLOW_WATER, TerrainType.OCEAN})


class ResourceType(str, Enum):
    FRUIT = "fruit"
    ANIMAL = "animal"
    FISH = "fish"
    CROP = "crop"
    METAL = "metal"
    STARFISH = "starfish"


class BuildingType(str, Enum):
    FARM = "farm"
    MINE = "mine"
    LUMBER_HUT = "lumber_hut"
    SAWMILL = "sawmill"
    WINDMILL = "windmill"
    FORGE = "forge"
    MARKET = "market"
    PORT = "port"
    ROAD = "road"
    BRIDGE = "bridge"
    TEMPLE = "temple"
    FOREST_TEMPLE = "forest_temple"
    MOUNTAIN_TEMPLE = "mountain_temple"
    WATER_TEMPLE = "water_temple"
    MONUMENT = "monument"


@dataclass(frozen=True)
class Tile:
    """A single square of the game grid.

    Tiles are immutable; the grid replaces a tile whenever any of its
    attributes change.
    """

    x: int
    y: int
    terrain: TerrainType = TerrainType.FIELD
    resource: Optional[ResourceType] = None
    building: Optional[BuildingType] = None
    owner: Optional[str] = None  # Tribe whose territory covers this tile

    def __post_init__(self):
        """Validate tile data after initialization."""
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Invalid tile coordinate: ({self.x}, {self.y})")

    @property
    def coord(self) -> Coord:
        return Coord(self.x, self.y)

    @property
    def is_water(self) -> bool:
        return self.terrain in WATER_TERRAIN
