"""Data models for the tribes simulation core."""

from .city import City, CityReward, RewardKind
from .config import Difficulty, GameConfig, WinCondition
from .tech import TechDefinition, TechId, TechUnlock, UnlockKind
from .tile import WATER_TERRAIN, BuildingType, Coord, ResourceType, TerrainType, Tile
from .tribe import PLAYABLE_TRIBES, TRIBES, TerrainModifiers, TribeDefinition, TribeId, get_tribe
from .unit import Unit, UnitSkill, UnitType

__all__ = [
    "BuildingType",
    "City",
    "CityReward",
    "Coord",
    "Difficulty",
    "GameConfig",
    "PLAYABLE_TRIBES",
    "ResourceType",
    "RewardKind",
    "TRIBES",
    "TechDefinition",
    "TechId",
    "TechUnlock",
    "TerrainModifiers",
    "TerrainType",
    "Tile",
    "TribeDefinition",
    "TribeId",
    "Unit",
    "UnitSkill",
    "UnitType",
    "UnlockKind",
    "WATER_TERRAIN",
    "WinCondition",
    "get_tribe",
]
