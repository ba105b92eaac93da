"""Tests for the technology tree and research state."""

import math

import pytest

from tribes.engine.tech import (
    TECH_TREE,
    TechState,
    calculate_tech_cost,
    get_all_techs,
    get_tech_definition,
)
from tribes.models.tech import TechId, UnlockKind


def test_tree_shape():
    """Test 5 tier-1 roots, 10 tier-2 and 10 tier-3 techs."""
    tiers = [tech.tier for tech in get_all_techs()]

    assert len(TECH_TREE) == 25
    assert tiers.count(1) == 5
    assert tiers.count(2) == 10
    assert tiers.count(3) == 10


def test_prerequisites_follow_tiers():
    """Test that each tech requires a tech exactly one tier below it."""
    for tech in get_all_techs():
        if tech.tier == 1:
            assert tech.prerequisite is None
        else:
            assert TECH_TREE[tech.prerequisite].tier == tech.tier - 1


def test_each_root_has_two_children():
    """Test that every tier-1 tech leads to two tier-2 techs, each with one tier-3 child."""
    for root in (t for t in get_all_techs() if t.tier == 1):
        children = [t for t in get_all_techs() if t.prerequisite == root.id]
        assert len(children) == 2
        for child in children:
            grandchildren = [t for t in get_all_techs() if t.prerequisite == child.id]
            assert len(grandchildren) == 1


def test_unknown_tech_raises():
    """Test that looking up an unknown tech id fails loudly."""
    with pytest.raises(ValueError, match="Unknown tech"):
        get_tech_definition("alchemy")

    with pytest.raises(ValueError):
        calculate_tech_cost("alchemy", 1)

    with pytest.raises(ValueError):
        TechState().can_research("alchemy")


class TestResearch:
    """Per-player research state."""

    def test_starting_techs(self):
        """Test that starting techs are researched from the outset."""
        state = TechState(["climbing"])

        assert state.has_researched("climbing")
        assert not state.has_researched("mining")

    def test_tier1_needs_no_prerequisite(self):
        """Test that any root tech can be researched immediately."""
        state = TechState()

        for tech_id in ("climbing", "hunting", "organization", "riding", "fishing"):
            assert state.can_research(tech_id)

    def test_research_adds_tech(self):
        """Test that a successful research adds the tech to the set."""
        state = TechState(["climbing"])

        assert state.research("mining")
        assert state.has_researched("mining")

    def test_cannot_research_twice(self):
        """Test that a researched tech is no longer researchable."""
        state = TechState(["climbing"])

        assert not state.can_research("climbing")
        assert not state.research("climbing")

    def test_tier3_requires_its_tier2(self):
        """Test that a tier-3 tech stays locked while only its tier-1 root is known."""
        state = TechState(["climbing"])

        assert not state.can_research("smithery")
        assert not state.research("smithery")
        assert not state.has_researched("smithery")

        state.research("mining")
        assert state.can_research("smithery")

    def test_tier3_locked_for_every_branch(self):
        """Test tier-3 monotonicity across the whole tree."""
        for tech in (t for t in get_all_techs() if t.tier == 3):
            tier2 = TECH_TREE[tech.prerequisite]
            state = TechState([tier2.prerequisite])

            assert not state.can_research(tech.id)
            # Researching the sibling tier-2 does not help
            siblings = [
                t.id
                for t in get_all_techs()
                if t.prerequisite == tier2.prerequisite and t.id != tier2.id
            ]
            for sibling in siblings:
                state.research(sibling)
            assert not state.can_research(tech.id)

            state.research(tier2.id)
            assert state.can_research(tech.id)

    def test_available_techs(self):
        """Test that available techs are the roots plus children of known techs."""
        state = TechState(["riding"])

        available = {tech.id for tech in state.available_techs()}

        assert available == {
            TechId.CLIMBING,
            TechId.HUNTING,
            TechId.ORGANIZATION,
            TechId.FISHING,
            TechId.ROADS,
            TechId.FREE_SPIRIT,
        }

    def test_researched_is_in_tree_order(self):
        """Test that researched techs are listed in definition order."""
        state = TechState(["riding", "climbing"])

        assert state.researched == [TechId.CLIMBING, TechId.RIDING]


class TestUnlocks:
    """Unlock lookup over the researched set."""

    def test_warrior_needs_no_tech(self):
        """Test that warriors are always trainable."""
        assert TechState().is_unit_unlocked("warrior")

    def test_riding_unlocks_rider(self):
        """Test that riders require riding."""
        assert not TechState().is_unit_unlocked("rider")
        assert TechState(["riding"]).is_unit_unlocked("rider")

    def test_archery_unlocks_archer(self):
        """Test that archers require archery, not just hunting."""
        state = TechState(["hunting"])
        assert not state.is_unit_unlocked("archer")

        state.research("archery")
        assert state.is_unit_unlocked("archer")

    def test_building_unlocks(self):
        """Test building unlocks from researched techs."""
        state = TechState(["organization", "farming"])

        assert state.is_building_unlocked("farm")
        assert not state.is_building_unlocked("mine")

    def test_all_unlocks_collects_every_kind(self):
        """Test that all_unlocks gathers units, buildings, actions and abilities."""
        state = TechState(["fishing"])

        kinds = {unlock.kind for unlock in state.all_unlocks()}

        assert kinds == {UnlockKind.ACTION, UnlockKind.BUILDING, UnlockKind.UNIT, UnlockKind.ABILITY}

    def test_philosophy_grants_literacy(self):
        """Test that literacy comes only from philosophy."""
        state = TechState(["climbing", "meditation"])
        assert not state.has_literacy()

        state.research("philosophy")
        assert state.has_literacy()


class TestCost:
    """Research cost."""

    @pytest.mark.parametrize("cities", [0, 1, 2, 5, 9])
    def test_cost_formula(self, cities):
        """Test cost = tier x cities + 4 for every tech."""
        for tech in get_all_techs():
            assert calculate_tech_cost(tech.id, cities) == tech.tier * cities + 4

    @pytest.mark.parametrize("cities", [0, 1, 2, 5, 9])
    def test_literacy_discount(self, cities):
        """Test cost' = ceil(cost x 2/3) with literacy."""
        for tech in get_all_techs():
            cost = tech.tier * cities + 4
            assert calculate_tech_cost(tech.id, cities, has_literacy=True) == math.ceil(
                cost * 2 / 3
            )

    def test_known_costs(self):
        """Test a few costs by hand."""
        assert calculate_tech_cost("mining", 1) == 6
        assert calculate_tech_cost("smithery", 2) == 10
        assert calculate_tech_cost("smithery", 2, has_literacy=True) == 7
        assert calculate_tech_cost("climbing", 1, has_literacy=True) == 4
