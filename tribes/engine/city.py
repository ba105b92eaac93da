"""City growth, leveling and income.

This module handles:
1. Population thresholds per level
2. Level-up with one of two rewards per level band
3. Star income (SPT) and territory
4. City capture

Rewards that touch the wider game (immediate stars, super unit, explorer)
only bump the city's level here; the simulation applies their effects.
"""

from dataclasses import replace
from typing import List, Tuple

from ..models.city import City, CityReward, RewardKind
from ..models.tile import Coord
from ..models.unit import UnitType
from ..utils.constants import (
    BORDER_SIZE_GROWN,
    LEVEL_UP_POPULATION,
    LEVEL_UP_STARS,
)

# Population needed to leave each level; index = current level
POP_THRESHOLDS = (0, 2, 3, 4, 5)


def pop_to_next_level(level: int) -> int:
    """Population needed to go from `level` to `level + 1`.

    Levels past the table continue the progression: level N needs N + 1.
    """
    if level < 1:
        return 0
    if level < len(POP_THRESHOLDS):
        return POP_THRESHOLDS[level]
    return level + 1


def cumulative_pop_for_level(level: int) -> int:
    """Total population grown from level 1 to reach `level` (0, 2, 5, 9, 14, ...)."""
    return sum(pop_to_next_level(lvl) for lvl in range(1, level))


def unit_capacity(level: int) -> int:
    """Number of units a city supports: 2 at level 1, +1 per level."""
    return level + 1


def level_rewards(level: int) -> Tuple[CityReward, CityReward]:
    """The two mutually exclusive rewards for reaching `level`.

    Args:
        level: The level the city is growing into (2 or more)

    Returns:
        Tuple of (option A, option B)
    """
    if level == 2:
        return (
            CityReward(RewardKind.WORKSHOP, "+1 SPT"),
            CityReward(RewardKind.EXPLORER, "Reveals surrounding map"),
        )
    if level == 3:
        return (
            CityReward(RewardKind.CITY_WALL, "4x defense bonus"),
            CityReward(RewardKind.STARS, "Immediate stars", amount=LEVEL_UP_STARS),
        )
    if level == 4:
        return (
            CityReward(RewardKind.BORDER_GROWTH, "3x3 -> 5x5 territory"),
            CityReward(
                RewardKind.POPULATION, "+3 population", amount=LEVEL_UP_POPULATION
            ),
        )
    return (
        CityReward(RewardKind.PARK, "+1 SPT, +250 pts"),
        CityReward(RewardKind.SUPER_UNIT, "Spawn Giant", unit_type=UnitType.GIANT),
    )


def create_city(owner: str, position: Coord, name: str, is_capital: bool = False) -> City:
    return City(owner=owner, position=Coord(*position), name=name, is_capital=is_capital)


def add_population(city: City, amount: int) -> City:
    """Add population without leveling; call can_level_up() afterwards."""
    return replace(city, population=max(0, city.population + amount))


def can_level_up(city: City) -> bool:
    return city.population >= pop_to_next_level(city.level)


def level_up(city: City, reward: CityReward) -> City:
    """Level up a city and apply the chosen reward.

    Consumes exactly the threshold; any surplus population carries over.

    Returns:
        The updated city, or the same city if it is below the threshold
    """
    if not can_level_up(city):
        return city

    updated = replace(
        city,
        level=city.level + 1,
        population=city.population - pop_to_next_level(city.level),
    )

    if reward.kind == RewardKind.WORKSHOP:
        updated = replace(updated, has_workshop=True)
    elif reward.kind == RewardKind.CITY_WALL:
        updated = replace(updated, has_wall=True)
    elif reward.kind == RewardKind.BORDER_GROWTH:
        updated = replace(updated, border_size=BORDER_SIZE_GROWN)
    elif reward.kind == RewardKind.PARK:
        updated = replace(updated, has_park=True)
    elif reward.kind == RewardKind.POPULATION:
        updated = replace(updated, population=updated.population + reward.amount)

    return updated


def city_income(city: City) -> int:
    """Stars per turn: level, +1 capital, +1 workshop, +1 park."""
    income = city.level
    if city.is_capital:
        income += 1
    if city.has_workshop:
        income += 1
    if city.has_park:
        income += 1
    return income


def city_territory(city: City) -> List[Coord]:
    """Coordinates of the border_size x border_size block centered on the city.

    Not clipped to the map; callers filter out-of-bounds coordinates.
    """
    half = city.border_size // 2
    cx, cy = city.position
    return [
        Coord(cx + dx, cy + dy)
        for dy in range(-half, half + 1)
        for dx in range(-half, half + 1)
    ]


def capture_city(city: City, new_owner: str) -> City:
    """Transfer ownership. Level and population survive; everything else resets."""
    return replace(
        city,
        owner=new_owner,
        is_capital=False,
        has_wall=False,
        has_workshop=False,
        has_park=False,
    )
