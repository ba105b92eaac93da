"""Tribe (faction) definitions."""

from dataclasses import dataclass
from enum import Enum

from .tech import TechId
from .unit import UnitType


class TribeId(str, Enum):
    XINXI = "xinxi"
    IMPERIUS = "imperius"
    BARDUR = "bardur"
    OUMAJI = "oumaji"
    NEUTRAL = "neutral"  # Unclaimed villages


@dataclass(frozen=True)
class TerrainModifiers:
    """Multipliers applied to the base forest/mountain generation rates."""

    forest: float = 1.0
    mountain: float = 1.0


@dataclass(frozen=True)
class TribeDefinition:
    id: TribeId
    name: str
    starting_tech: TechId
    starting_unit: UnitType
    terrain: TerrainModifiers


TRIBES = {
    TribeId.XINXI: TribeDefinition(
        id=TribeId.XINXI,
        name="Xin-xi",
        starting_tech=TechId.CLIMBING,
        starting_unit=UnitType.WARRIOR,
        terrain=TerrainModifiers(forest=1.0, mountain=1.5),
    ),
    TribeId.IMPERIUS: TribeDefinition(
        id=TribeId.IMPERIUS,
        name="Imperius",
        starting_tech=TechId.ORGANIZATION,
        starting_unit=UnitType.WARRIOR,
        terrain=TerrainModifiers(forest=1.0, mountain=1.0),
    ),
    TribeId.BARDUR: TribeDefinition(
        id=TribeId.BARDUR,
        name="Bardur",
        starting_tech=TechId.HUNTING,
        starting_unit=UnitType.WARRIOR,
        terrain=TerrainModifiers(forest=0.8, mountain=1.0),
    ),
    TribeId.OUMAJI: TribeDefinition(
        id=TribeId.OUMAJI,
        name="Oumaji",
        starting_tech=TechId.RIDING,
        starting_unit=UnitType.RIDER,
        terrain=TerrainModifiers(forest=0.2, mountain=0.5),
    ),
}

PLAYABLE_TRIBES = tuple(TRIBES)


def get_tribe(tribe_id: str) -> TribeDefinition:
    """Look up a playable tribe.

    Raises:
        ValueError: If the tribe is unknown or not playable
    """
    definition = TRIBES.get(TribeId(tribe_id))
    if definition is None:
        raise ValueError(f"Tribe '{tribe_id}' is not playable")
    return definition
