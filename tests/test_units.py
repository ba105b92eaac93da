"""Tests for the unit catalogue."""

import pytest

from tribes.engine.units import (
    NAVAL_DEFAULT_HP,
    UNIT_STATS,
    create_unit,
    get_unit_cost,
    get_unit_stats,
    is_trainable,
)
from tribes.models import UnitSkill, UnitType


def test_every_type_has_stats():
    """Test that the catalogue covers every unit type."""
    assert set(UNIT_STATS) == set(UnitType)


@pytest.mark.parametrize(
    "unit_type, cost, hp, atk, defense, movement, attack_range",
    [
        ("warrior", 2, 10, 2, 2, 1, 1),
        ("archer", 3, 10, 2, 1, 1, 2),
        ("defender", 3, 15, 1, 3, 1, 1),
        ("rider", 3, 10, 2, 1, 2, 1),
        ("swordsman", 5, 15, 3, 3, 1, 1),
        ("catapult", 8, 10, 4, 0, 1, 3),
        ("knight", 8, 10, 3.5, 1, 3, 1),
        ("giant", None, 40, 5, 4, 1, 1),
    ],
)
def test_land_stats(unit_type, cost, hp, atk, defense, movement, attack_range):
    """Test base stats of land units."""
    stats = get_unit_stats(unit_type)

    assert (stats.cost, stats.hp, stats.atk, stats.defense) == (cost, hp, atk, defense)
    assert (stats.movement, stats.attack_range) == (movement, attack_range)


def test_naval_units_default_hp():
    """Test that naval units start at the default HP."""
    for unit_type in ("raft", "scout", "rammer", "bomber"):
        unit = create_unit(unit_type, 0, 0, 0, unit_id="n")
        assert unit.max_hp == NAVAL_DEFAULT_HP
        assert unit.has_skill(UnitSkill.WATER)


def test_id_is_kept():
    """Test that the given id is used as-is."""
    assert create_unit("rider", 0, 0, 0, unit_id="scout-7").id == "scout-7"


def test_create_unit_full_health():
    """Test that new units start at full HP with no kills."""
    unit = create_unit(UnitType.SWORDSMAN, 1, 3, 4, unit_id="s")

    assert unit.current_hp == unit.max_hp == 15
    assert unit.kills == 0
    assert not unit.is_veteran
    assert unit.owner == 1
    assert (unit.x, unit.y) == (3, 4)


def test_trainable():
    """Test that only costed land units can be trained in a city."""
    assert is_trainable("warrior")
    assert is_trainable("cloak")
    assert not is_trainable("giant")
    assert not is_trainable("raft")
    assert get_unit_cost("bomber") == 15


def test_unknown_type_raises():
    """Test that unknown unit types raise ValueError."""
    with pytest.raises(ValueError):
        create_unit("dragon", 0, 0, 0, unit_id="d")
