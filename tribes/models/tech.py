"""Technology data model."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class TechId(str, Enum):
    # Tier 1
    CLIMBING = "climbing"
    HUNTING = "hunting"
    ORGANIZATION = "organization"
    RIDING = "riding"
    FISHING = "fishing"
    # Tier 2
    MINING = "mining"
    MEDITATION = "meditation"
    ARCHERY = "archery"
    FORESTRY = "forestry"
    FARMING = "farming"
    STRATEGY = "strategy"
    ROADS = "roads"
    FREE_SPIRIT = "free_spirit"
    SAILING = "sailing"
    RAMMING = "ramming"
    # Tier 3
    SMITHERY = "smithery"
    PHILOSOPHY = "philosophy"
    SPIRITUALISM = "spiritualism"
    MATHEMATICS = "mathematics"
    CONSTRUCTION = "construction"
    DIPLOMACY = "diplomacy"
    TRADE = "trade"
    CHIVALRY = "chivalry"
    NAVIGATION = "navigation"
    AQUATISM = "aquatism"


class UnlockKind(str, Enum):
    UNIT = "unit"
    BUILDING = "building"
    ACTION = "action"
    ABILITY = "ability"
    RESOURCE = "resource"


@dataclass(frozen=True)
class TechUnlock:
    """A single thing unlocked by researching a technology.

    Attributes:
        kind: Category of the unlock
        value: Unit type, building type or resource type value for typed
            unlocks; free-form text for actions and abilities
    """

    kind: UnlockKind
    value: str


@dataclass(frozen=True)
class TechDefinition:
    """Static definition of a technology node."""

    id: TechId
    name: str
    tier: int  # 1, 2 or 3
    prerequisite: Optional[TechId]
    unlocks: Tuple[TechUnlock, ...] = ()

    def __post_init__(self):
        """Validate the node shape: only tier-1 roots lack a prerequisite."""
        if self.tier not in (1, 2, 3):
            raise ValueError(f"Invalid tier: {self.tier} (must be 1-3)")
        if (self.tier == 1) != (self.prerequisite is None):
            raise ValueError(
                f"Tech {self.id.value}: tier-1 techs have no prerequisite, others need one"
            )
