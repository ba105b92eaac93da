"""Unit data model."""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional

from .tile import Coord


class UnitType(str, Enum):
    # Land units
    WARRIOR = "warrior"
    ARCHER = "archer"
    DEFENDER = "defender"
    RIDER = "rider"
    SWORDSMAN = "swordsman"
    MIND_BENDER = "mind_bender"
    CATAPULT = "catapult"
    KNIGHT = "knight"
    CLOAK = "cloak"
    GIANT = "giant"
    # Naval units
    RAFT = "raft"
    SCOUT = "scout"
    RAMMER = "rammer"
    BOMBER = "bomber"


class UnitSkill(str, Enum):
    # Movement
    DASH = "dash"
    ESCAPE = "escape"
    PERSIST = "persist"
    CREEP = "creep"
    # Combat
    FORTIFY = "fortify"
    STIFF = "stiff"  # Never retaliates
    SPLASH = "splash"
    CONVERT = "convert"
    # Utility
    HEAL = "heal"
    HIDE = "hide"
    INFILTRATE = "infiltrate"
    SCOUT = "scout"
    CARRY = "carry"  # Transports one land unit
    STATIC = "static"  # Can never be promoted
    WATER = "water"  # Moves on water instead of land


@dataclass(frozen=True)
class Unit:
    """A live unit on the board.

    Units are immutable snapshots: moving, fighting or promoting a unit
    produces a replaced copy. Whether a unit has already moved or attacked
    this round is tracked by the turn sequencer, not by the unit itself.
    """

    id: str  # Unique identifier (e.g., "unit-3")
    type: UnitType
    owner: int  # Player index (0, 1, ...)
    x: int
    y: int
    current_hp: float
    max_hp: float
    atk: float
    defense: float
    movement: int  # Movement allowance per turn
    attack_range: int  # Chebyshev distance the unit can strike
    kills: int = 0
    is_veteran: bool = False
    skills: FrozenSet[UnitSkill] = field(default_factory=frozenset)
    carried_unit: Optional["Unit"] = None  # Land unit inside a transport

    def __post_init__(self):
        """Validate unit data after initialization."""
        if self.max_hp <= 0:
            raise ValueError(f"Invalid max_hp: {self.max_hp} (must be > 0)")
        if self.current_hp < 0:
            raise ValueError(f"Invalid current_hp: {self.current_hp} (must be >= 0)")
        if self.atk < 0 or self.defense < 0:
            raise ValueError(f"Invalid stats: atk={self.atk}, defense={self.defense}")
        if self.movement < 0 or self.attack_range < 0:
            raise ValueError(
                f"Invalid movement/range: {self.movement}/{self.attack_range}"
            )
        if self.kills < 0:
            raise ValueError(f"Invalid kills: {self.kills} (must be >= 0)")

    @property
    def position(self) -> Coord:
        return Coord(self.x, self.y)

    @property
    def is_naval(self) -> bool:
        return UnitSkill.WATER in self.skills

    def has_skill(self, skill: UnitSkill) -> bool:
        return skill in self.skills
