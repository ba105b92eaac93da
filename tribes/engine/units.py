"""Unit catalogue and factory."""

from dataclasses import dataclass
from typing import FrozenSet, Optional

from ..models.unit import Unit, UnitSkill, UnitType

NAVAL_DEFAULT_HP = 10


@dataclass(frozen=True)
class UnitStats:
    """Base stats for a unit type.

    Attributes:
        cost: Training cost in stars (None = cannot be trained)
        hp: Max HP (None for naval units, which default to 10)
    """

    cost: Optional[int]
    hp: Optional[int]
    atk: float
    defense: float
    movement: int
    attack_range: int
    skills: FrozenSet[UnitSkill]


def _stats(cost, hp, atk, defense, movement, attack_range, *skills) -> UnitStats:
    return UnitStats(cost, hp, atk, defense, movement, attack_range, frozenset(skills))


S = UnitSkill

UNIT_STATS = {
    UnitType.WARRIOR: _stats(2, 10, 2, 2, 1, 1, S.DASH, S.FORTIFY),
    UnitType.ARCHER: _stats(3, 10, 2, 1, 1, 2, S.DASH, S.FORTIFY),
    UnitType.DEFENDER: _stats(3, 15, 1, 3, 1, 1, S.FORTIFY),
    UnitType.RIDER: _stats(3, 10, 2, 1, 2, 1, S.DASH, S.ESCAPE, S.FORTIFY),
    UnitType.SWORDSMAN: _stats(5, 15, 3, 3, 1, 1, S.DASH),
    UnitType.MIND_BENDER: _stats(5, 10, 0, 1, 1, 1, S.HEAL, S.CONVERT, S.STIFF),
    UnitType.CATAPULT: _stats(8, 10, 4, 0, 1, 3, S.STIFF),
    UnitType.KNIGHT: _stats(8, 10, 3.5, 1, 3, 1, S.DASH, S.PERSIST, S.FORTIFY),
    UnitType.CLOAK: _stats(
        8, 5, 0, 0.5, 2, 1, S.HIDE, S.CREEP, S.INFILTRATE, S.DASH, S.STIFF, S.SCOUT
    ),
    UnitType.GIANT: _stats(None, 40, 5, 4, 1, 1),
    # Naval
    UnitType.RAFT: _stats(0, None, 0, 1, 2, 0, S.WATER, S.CARRY, S.STIFF),
    UnitType.SCOUT: _stats(5, None, 2, 1, 3, 2, S.WATER, S.DASH, S.CARRY, S.SCOUT),
    UnitType.RAMMER: _stats(5, None, 3, 3, 3, 1, S.WATER, S.DASH, S.CARRY),
    UnitType.BOMBER: _stats(15, None, 3, 2, 2, 3, S.WATER, S.CARRY, S.SPLASH, S.STIFF),
}

del S


def get_unit_stats(unit_type: str) -> UnitStats:
    return UNIT_STATS[UnitType(unit_type)]


def get_unit_cost(unit_type: str) -> Optional[int]:
    return get_unit_stats(unit_type).cost


def is_trainable(unit_type: str) -> bool:
    """Land units with a star cost can be trained in a city.

    Giants only come from city rewards. Naval units are launched from
    ports, which this core does not model.
    """
    stats = get_unit_stats(unit_type)
    return stats.cost is not None and UnitSkill.WATER not in stats.skills


def create_unit(unit_type: str, owner: int, x: int, y: int, unit_id: str) -> Unit:
    """Create a full-health unit with its type's base stats.

    Args:
        unit_type: Type of unit to create
        owner: Owning player index
        x: Column
        y: Row
        unit_id: Unique id; the game state hands out "unit-N" ids

    Returns:
        New Unit
    """
    unit_type = UnitType(unit_type)
    stats = UNIT_STATS[unit_type]
    hp = stats.hp if stats.hp is not None else NAVAL_DEFAULT_HP

    return Unit(
        id=unit_id,
        type=unit_type,
        owner=owner,
        x=x,
        y=y,
        current_hp=hp,
        max_hp=hp,
        atk=stats.atk,
        defense=stats.defense,
        movement=stats.movement,
        attack_range=stats.attack_range,
        skills=stats.skills,
    )
