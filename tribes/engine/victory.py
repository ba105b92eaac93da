"""Victory condition checking.

This module handles:
1. Deciding which players are still alive
2. Domination: the last player alive wins
3. Perfection: when the turn limit passes, the best score wins
"""

from typing import Iterable, List, Sequence

from ..models.city import City
from ..models.unit import Unit
from ..utils.constants import NO_WINNER

SCORE_PER_CITY_LEVEL = 100
SCORE_PER_PARK = 250
SCORE_PER_TECH = 100


def alive_players(
    tribes: Sequence[str], units: Iterable[Unit], cities: Iterable[City]
) -> List[int]:
    """Players who still own at least one city or one unit.

    Args:
        tribes: Tribe id per player index
        units: All units on the board
        cities: All cities on the board

    Returns:
        Sorted list of alive player indices
    """
    alive = {unit.owner for unit in units}
    city_owners = {city.owner for city in cities}
    alive.update(i for i, tribe in enumerate(tribes) if tribe in city_owners)
    return sorted(alive)


def check_domination(alive: Sequence[int]) -> int:
    """Return the winner if exactly one player is alive, else NO_WINNER."""
    if len(alive) == 1:
        return alive[0]
    return NO_WINNER


def player_score(cities: Iterable[City], techs_researched: int) -> int:
    """Score used for perfection games.

    100 per city level, 250 per park, 100 per researched tech.
    """
    score = SCORE_PER_TECH * techs_researched
    for city in cities:
        score += SCORE_PER_CITY_LEVEL * city.level
        if city.has_park:
            score += SCORE_PER_PARK
    return score


def check_perfection(turn: int, turn_limit: int, scores: Sequence[int], alive: Sequence[int]) -> int:
    """Return the top scorer once `turn` is past `turn_limit`, else NO_WINNER.

    Only alive players are ranked. Ties go to the lowest player index.
    """
    if turn <= turn_limit or not alive:
        return NO_WINNER
    return max(alive, key=lambda player: (scores[player], -player))
