"""Tests for combat resolution."""

from dataclasses import replace

import pytest

from tribes.engine.combat import (
    can_promote,
    city_defense_bonus,
    preview_combat,
    promote_to_veteran,
    resolve_combat,
    round_half_up,
    terrain_defense_bonus,
)
from tribes.engine.units import create_unit
from tribes.models.tile import TerrainType
from tribes.models.unit import Unit, UnitSkill, UnitType


def make_unit(unit_type, owner=0, unit_id=None, **changes) -> Unit:
    unit = create_unit(unit_type, owner, 0, 0, unit_id=unit_id or f"{unit_type}-{owner}")
    return replace(unit, **changes) if changes else unit


def test_worked_scenario_on_defensive_terrain():
    """Test 15/3/3 attacker vs 15/1/3 defender on 1.5x terrain: 5 and 8 damage."""
    attacker = make_unit(UnitType.SWORDSMAN, owner=0)
    defender = make_unit(UnitType.DEFENDER, owner=1)
    assert (attacker.current_hp, attacker.atk, attacker.defense) == (15, 3, 3)
    assert (defender.current_hp, defender.atk, defender.defense) == (15, 1, 3)

    result = resolve_combat(attacker, defender, defense_bonus=1.5, distance=1)

    assert result.damage_to_defender == 5
    assert result.damage_to_attacker == 8
    assert result.defender.current_hp == 10
    assert result.attacker.current_hp == 7
    assert not result.defender_killed
    assert not result.attacker_killed


def test_worked_scenario_is_reproducible():
    """Test that identical inputs always yield identical results."""
    attacker = make_unit(UnitType.SWORDSMAN, owner=0)
    defender = make_unit(UnitType.DEFENDER, owner=1)

    results = [resolve_combat(attacker, defender, 1.5, 1) for _ in range(5)]

    assert all(r == results[0] for r in results)
    # Inputs are never mutated
    assert attacker.current_hp == 15
    assert defender.current_hp == 15


def test_identical_units_deal_equal_damage():
    """Test that two identical units on identical terrain hurt each other equally."""
    attacker = make_unit(UnitType.WARRIOR, owner=0)
    defender = make_unit(UnitType.WARRIOR, owner=1)

    result = resolve_combat(attacker, defender, defense_bonus=1.0, distance=1)

    assert result.damage_to_defender == result.damage_to_attacker


def test_rounding_is_half_up():
    """Test that 4.5 damage rounds to 5, not to the even 4."""
    attacker = make_unit(UnitType.WARRIOR, owner=0)
    defender = make_unit(UnitType.WARRIOR, owner=1)

    # 2 / (2 + 2) x 2 x 4.5 = 4.5
    result = resolve_combat(attacker, defender, defense_bonus=1.0, distance=1)

    assert result.damage_to_defender == 5
    assert result.damage_to_attacker == 5


@pytest.mark.parametrize(
    "value, expected",
    [(0.5, 1), (1.49, 1), (2.5, 3), (3.5, 4), (8.1, 8), (0.0, 0)],
)
def test_round_half_up(value, expected):
    """Test the half-up rounding helper."""
    assert round_half_up(value) == expected


def test_kill_suppresses_retaliation():
    """Test that a killed defender deals no counter-damage and the attacker gains a kill."""
    knight = make_unit(UnitType.KNIGHT, owner=0)
    warrior = make_unit(UnitType.WARRIOR, owner=1, current_hp=5)

    # 3.5 / (3.5 + 1.0) x 3.5 x 4.5 = 12.25
    result = resolve_combat(knight, warrior, defense_bonus=1.0, distance=1)

    assert result.damage_to_defender == 12
    assert result.defender_killed
    assert result.damage_to_attacker == 0
    assert result.defender.current_hp == 0
    assert result.attacker.current_hp == knight.current_hp
    assert result.attacker.kills == 1


def test_out_of_range_attacker_takes_no_retaliation():
    """Test that a ranged attack beyond the defender's range is not answered."""
    archer = make_unit(UnitType.ARCHER, owner=0)
    warrior = make_unit(UnitType.WARRIOR, owner=1)

    result = resolve_combat(archer, warrior, defense_bonus=1.0, distance=2)

    assert not result.defender_killed
    assert result.damage_to_attacker == 0
    assert result.attacker.current_hp == archer.current_hp


def test_stiff_defender_never_retaliates():
    """Test that a defender with the stiff skill deals no counter-damage."""
    warrior = make_unit(UnitType.WARRIOR, owner=0)
    mind_bender = make_unit(UnitType.MIND_BENDER, owner=1)
    assert mind_bender.has_skill(UnitSkill.STIFF)

    result = resolve_combat(warrior, mind_bender, defense_bonus=1.0, distance=1)

    assert result.damage_to_defender == 6
    assert not result.defender_killed
    assert result.damage_to_attacker == 0


def test_retaliation_can_kill_attacker():
    """Test that retaliation from a healthy defender can destroy a wounded attacker."""
    attacker = make_unit(UnitType.WARRIOR, owner=0, current_hp=1)
    defender = make_unit(UnitType.WARRIOR, owner=1)

    result = resolve_combat(attacker, defender, defense_bonus=1.0, distance=1)

    assert result.damage_to_defender == 1
    assert result.damage_to_attacker == 8
    assert result.attacker_killed
    assert result.attacker.current_hp == 0
    assert result.attacker.kills == 0


def test_zero_force_combat_changes_nothing():
    """Test that an attack with no force on either side deals no damage."""
    mind_bender = make_unit(UnitType.MIND_BENDER, owner=0)
    catapult = make_unit(UnitType.CATAPULT, owner=1)

    result = resolve_combat(mind_bender, catapult, defense_bonus=1.0, distance=1)

    assert result.damage_to_defender == 0
    assert result.damage_to_attacker == 0
    assert result.attacker is mind_bender
    assert result.defender is catapult


def test_preview_matches_resolution():
    """Test that the preview reports exactly the numbers combat will produce."""
    cases = [
        (make_unit(UnitType.SWORDSMAN, 0), make_unit(UnitType.DEFENDER, 1), 1.5, 1),
        (make_unit(UnitType.KNIGHT, 0), make_unit(UnitType.WARRIOR, 1, current_hp=5), 1.0, 1),
        (make_unit(UnitType.WARRIOR, 0, current_hp=1), make_unit(UnitType.WARRIOR, 1), 1.0, 1),
        (make_unit(UnitType.CATAPULT, 0), make_unit(UnitType.GIANT, 1), 4.0, 3),
    ]
    for attacker, defender, bonus, distance in cases:
        preview = preview_combat(attacker, defender, bonus, distance)
        result = resolve_combat(attacker, defender, bonus, distance)

        assert preview.damage_to_defender == result.damage_to_defender
        assert preview.damage_to_attacker == result.damage_to_attacker
        assert preview.defender_killed == result.defender_killed
        assert preview.attacker_killed == result.attacker_killed


def test_defense_bonuses():
    """Test terrain and city defense multipliers."""
    assert terrain_defense_bonus(TerrainType.FIELD) == 1.0
    assert terrain_defense_bonus(TerrainType.FOREST) == 1.5
    assert terrain_defense_bonus(TerrainType.MOUNTAIN) == 1.5
    assert terrain_defense_bonus(TerrainType.OCEAN) == 1.5
    assert city_defense_bonus(has_wall=False) == 1.5
    assert city_defense_bonus(has_wall=True) == 4.0


def test_wall_reduces_damage():
    """Test that a walled city makes the defender much harder to hurt."""
    attacker = make_unit(UnitType.WARRIOR, owner=0)
    defender = make_unit(UnitType.WARRIOR, owner=1)

    open_field = resolve_combat(attacker, defender, 1.0, 1)
    walled = resolve_combat(attacker, defender, city_defense_bonus(True), 1)

    assert walled.damage_to_defender < open_field.damage_to_defender
    assert walled.damage_to_attacker > open_field.damage_to_attacker


class TestPromotion:
    """Veteran promotion."""

    def test_three_kills_make_unit_eligible(self):
        """Test that a unit with 3 kills can be promoted."""
        assert can_promote(make_unit(UnitType.WARRIOR, kills=3))
        assert not can_promote(make_unit(UnitType.WARRIOR, kills=2))

    def test_promotion_raises_max_hp_and_heals(self):
        """Test that promotion adds 5 max HP and fully heals."""
        unit = make_unit(UnitType.WARRIOR, kills=3, current_hp=4)

        promoted = promote_to_veteran(unit)

        assert promoted.is_veteran
        assert promoted.max_hp == 15
        assert promoted.current_hp == 15

    def test_veteran_cannot_promote_again(self):
        """Test that a veteran is never promoted twice."""
        veteran = promote_to_veteran(make_unit(UnitType.WARRIOR, kills=3))
        veteran = replace(veteran, kills=6)

        assert not can_promote(veteran)
        assert promote_to_veteran(veteran) is veteran

    def test_static_unit_cannot_promote(self):
        """Test that the static skill blocks promotion."""
        unit = make_unit(UnitType.WARRIOR, kills=5, skills=frozenset({UnitSkill.STATIC}))

        assert not can_promote(unit)
        assert promote_to_veteran(unit) is unit
