"""City data model and level-up reward options."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..utils.constants import BORDER_SIZE_DEFAULT, BORDER_SIZE_GROWN
from .tile import Coord
from .unit import UnitType


class RewardKind(str, Enum):
    WORKSHOP = "workshop"
    EXPLORER = "explorer"
    CITY_WALL = "city_wall"
    STARS = "stars"
    BORDER_GROWTH = "border_growth"
    POPULATION = "population"
    PARK = "park"
    SUPER_UNIT = "super_unit"


@dataclass(frozen=True)
class CityReward:
    """One of the two rewards offered when a city levels up.

    Attributes:
        kind: Which reward this is
        description: Short text for the presentation layer
        amount: Stars or population granted (amount-bearing rewards only)
        unit_type: Unit spawned by the super-unit reward
    """

    kind: RewardKind
    description: str
    amount: int = 0
    unit_type: Optional[UnitType] = None


@dataclass(frozen=True)
class City:
    """A city on the board.

    Cities hold population that is converted into levels. Each level raises
    star income and grants one of two rewards.
    """

    owner: str  # Tribe ID ("xinxi", "imperius", ...)
    position: Coord
    name: str
    level: int = 1
    population: int = 0
    is_capital: bool = False
    has_wall: bool = False
    has_workshop: bool = False
    has_park: bool = False
    border_size: int = BORDER_SIZE_DEFAULT  # Side of the square territory block

    def __post_init__(self):
        """Validate city data after initialization."""
        if self.level < 1:
            raise ValueError(f"Invalid level: {self.level} (must be >= 1)")
        if self.population < 0:
            raise ValueError(f"Invalid population: {self.population} (must be >= 0)")
        if self.border_size not in (BORDER_SIZE_DEFAULT, BORDER_SIZE_GROWN):
            raise ValueError(
                f"Invalid border_size: {self.border_size} "
                f"(must be {BORDER_SIZE_DEFAULT} or {BORDER_SIZE_GROWN})"
            )
