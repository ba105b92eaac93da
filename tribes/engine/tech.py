"""Technology tree and per-player research state.

This module handles:
1. The fixed 25-node tech tree (5 branches x 3 tiers)
2. Prerequisite validation for research
3. Research cost, including the permanent Literacy discount
4. Unlock lookup over the researched set
"""

import logging
import math
from typing import Iterable, List, Optional, Set

from ..models.tech import TechDefinition, TechId, TechUnlock, UnlockKind
from ..models.tile import BuildingType, ResourceType
from ..models.unit import UnitType
from ..utils.constants import TECH_BASE_COST

logger = logging.getLogger(__name__)


def _unit(unit_type: UnitType) -> TechUnlock:
    return TechUnlock(UnlockKind.UNIT, unit_type.value)


def _building(building: BuildingType) -> TechUnlock:
    return TechUnlock(UnlockKind.BUILDING, building.value)


def _resource(resource: ResourceType) -> TechUnlock:
    return TechUnlock(UnlockKind.RESOURCE, resource.value)


def _action(text: str) -> TechUnlock:
    return TechUnlock(UnlockKind.ACTION, text)


def _ability(text: str) -> TechUnlock:
    return TechUnlock(UnlockKind.ABILITY, text)


def _tech(
    tech_id: TechId,
    name: str,
    tier: int,
    prerequisite: Optional[TechId],
    *unlocks: TechUnlock,
) -> TechDefinition:
    return TechDefinition(
        id=tech_id, name=name, tier=tier, prerequisite=prerequisite, unlocks=unlocks
    )


TECH_TREE = {
    tech.id: tech
    for tech in (
        # Tier 1
        _tech(
            TechId.CLIMBING, "Climbing", 1, None,
            _ability("Mountain movement"),
            _ability("Mountain defense bonus"),
            _resource(ResourceType.METAL),
        ),
        _tech(
            TechId.HUNTING, "Hunting", 1, None,
            _action("Hunt Animals (+1 pop, 2 stars)"),
            _resource(ResourceType.ANIMAL),
        ),
        _tech(
            TechId.ORGANIZATION, "Organization", 1, None,
            _action("Harvest Fruit (+1 pop, 2 stars)"),
            _resource(ResourceType.CROP),
        ),
        _tech(TechId.RIDING, "Riding", 1, None, _unit(UnitType.RIDER)),
        _tech(
            TechId.FISHING, "Fishing", 1, None,
            _action("Fish (+1 pop, 2 stars)"),
            _building(BuildingType.PORT),
            _unit(UnitType.RAFT),
            _ability("Shallow water movement"),
        ),
        # Tier 2
        _tech(TechId.MINING, "Mining", 2, TechId.CLIMBING, _building(BuildingType.MINE)),
        _tech(
            TechId.MEDITATION, "Meditation", 2, TechId.CLIMBING,
            _building(BuildingType.MOUNTAIN_TEMPLE),
        ),
        _tech(
            TechId.ARCHERY, "Archery", 2, TechId.HUNTING,
            _unit(UnitType.ARCHER),
            _ability("Forest defense bonus"),
        ),
        _tech(
            TechId.FORESTRY, "Forestry", 2, TechId.HUNTING,
            _building(BuildingType.LUMBER_HUT),
            _action("Clear Forest (+1 star)"),
        ),
        _tech(TechId.FARMING, "Farming", 2, TechId.ORGANIZATION, _building(BuildingType.FARM)),
        _tech(
            TechId.STRATEGY, "Strategy", 2, TechId.ORGANIZATION,
            _unit(UnitType.DEFENDER),
            _ability("Peace Treaty"),
        ),
        _tech(
            TechId.ROADS, "Roads", 2, TechId.RIDING,
            _building(BuildingType.ROAD),
            _ability("City connections"),
        ),
        _tech(
            TechId.FREE_SPIRIT, "Free Spirit", 2, TechId.RIDING,
            _building(BuildingType.TEMPLE),
            _action("Disband unit (refund half cost)"),
        ),
        _tech(
            TechId.SAILING, "Sailing", 2, TechId.FISHING,
            _unit(UnitType.SCOUT),
            _ability("Ocean movement"),
        ),
        _tech(TechId.RAMMING, "Ramming", 2, TechId.FISHING, _unit(UnitType.RAMMER)),
        # Tier 3
        _tech(
            TechId.SMITHERY, "Smithery", 3, TechId.MINING,
            _unit(UnitType.SWORDSMAN),
            _building(BuildingType.FORGE),
        ),
        _tech(
            TechId.PHILOSOPHY, "Philosophy", 3, TechId.MEDITATION,
            _unit(UnitType.MIND_BENDER),
            _ability("Literacy (-33% tech costs)"),
        ),
        _tech(
            TechId.SPIRITUALISM, "Spiritualism", 3, TechId.ARCHERY,
            _building(BuildingType.FOREST_TEMPLE),
            _action("Grow Forest (5 stars, field -> forest)"),
        ),
        _tech(
            TechId.MATHEMATICS, "Mathematics", 3, TechId.FORESTRY,
            _unit(UnitType.CATAPULT),
            _building(BuildingType.SAWMILL),
        ),
        _tech(
            TechId.CONSTRUCTION, "Construction", 3, TechId.FARMING,
            _building(BuildingType.WINDMILL),
            _action("Burn Forest (5 stars, forest -> field with crop)"),
        ),
        _tech(
            TechId.DIPLOMACY, "Diplomacy", 3, TechId.STRATEGY,
            _unit(UnitType.CLOAK),
            _ability("Embassy (+2 SPT)"),
            _ability("Capital Vision"),
        ),
        _tech(TechId.TRADE, "Trade", 3, TechId.ROADS, _building(BuildingType.MARKET)),
        _tech(TechId.CHIVALRY, "Chivalry", 3, TechId.FREE_SPIRIT, _unit(UnitType.KNIGHT)),
        _tech(
            TechId.NAVIGATION, "Navigation", 3, TechId.SAILING,
            _unit(UnitType.BOMBER),
            _action("Harvest Starfish (+8 stars)"),
        ),
        _tech(
            TechId.AQUATISM, "Aquatism", 3, TechId.RAMMING,
            _building(BuildingType.WATER_TEMPLE),
            _ability("Ocean defense bonus"),
        ),
    )
}

# Researching this tech grants Literacy
LITERACY_TECH = TechId.PHILOSOPHY


def get_tech_definition(tech_id: str) -> TechDefinition:
    """Look up a tech by id.

    Raises:
        ValueError: If the id is not part of the tree
    """
    try:
        return TECH_TREE[TechId(tech_id)]
    except ValueError:
        raise ValueError(f"Unknown tech: {tech_id!r}") from None


def get_all_techs() -> List[TechDefinition]:
    return list(TECH_TREE.values())


def calculate_tech_cost(tech_id: str, num_cities: int, has_literacy: bool = False) -> int:
    """Stars needed to research a tech.

    cost = tier x cities + 4, reduced to ceil(cost x 2/3) with Literacy.
    """
    tech = get_tech_definition(tech_id)
    cost = tech.tier * num_cities + TECH_BASE_COST
    if has_literacy:
        cost = math.ceil(cost * 2 / 3)
    return cost


class TechState:
    """Researched techs for one player. Membership only ever grows."""

    def __init__(self, starting_techs: Iterable[str] = ()):
        self._researched: Set[TechId] = set()
        for tech_id in starting_techs:
            self._researched.add(get_tech_definition(tech_id).id)

    def has_researched(self, tech_id: str) -> bool:
        return get_tech_definition(tech_id).id in self._researched

    @property
    def researched(self) -> List[TechId]:
        """Researched ids in tree order."""
        return [tech_id for tech_id in TECH_TREE if tech_id in self._researched]

    def can_research(self, tech_id: str) -> bool:
        tech = get_tech_definition(tech_id)
        if tech.id in self._researched:
            return False
        return tech.prerequisite is None or tech.prerequisite in self._researched

    def available_techs(self) -> List[TechDefinition]:
        return [tech for tech in TECH_TREE.values() if self.can_research(tech.id)]

    def research(self, tech_id: str) -> bool:
        """Add a tech to the researched set if its prerequisite is met.

        Stars are not handled here; the simulation charges the cost.

        Returns:
            True if the tech was added, False if already researched or locked
        """
        if not self.can_research(tech_id):
            logger.debug(f"Tech {tech_id} cannot be researched")
            return False
        self._researched.add(get_tech_definition(tech_id).id)
        return True

    def has_literacy(self) -> bool:
        return LITERACY_TECH in self._researched

    def all_unlocks(self) -> List[TechUnlock]:
        return [
            unlock
            for tech_id in self.researched
            for unlock in TECH_TREE[tech_id].unlocks
        ]

    def _is_unlocked(self, kind: UnlockKind, value: str) -> bool:
        return any(
            unlock.kind == kind and unlock.value == value for unlock in self.all_unlocks()
        )

    def is_unit_unlocked(self, unit_type: str) -> bool:
        """Warriors need no tech; every other trainable unit does."""
        unit_type = UnitType(unit_type)
        if unit_type == UnitType.WARRIOR:
            return True
        return self._is_unlocked(UnlockKind.UNIT, unit_type.value)

    def is_building_unlocked(self, building: str) -> bool:
        return self._is_unlocked(UnlockKind.BUILDING, BuildingType(building).value)
