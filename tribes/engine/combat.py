"""Combat resolution.

This module handles:
1. The proportional damage formula with half-up rounding
2. Conditional retaliation from the defender
3. A side-effect-free preview with identical numbers
4. Veteran promotion
"""

import math
from dataclasses import dataclass, replace

from ..models.tile import TerrainType
from ..models.unit import Unit, UnitSkill
from ..utils.constants import (
    CITY_DEFENSE_BONUS,
    CITY_WALL_DEFENSE_BONUS,
    DAMAGE_MULTIPLIER,
    VETERAN_HP_BONUS,
    VETERAN_KILLS,
)
from .grid import TERRAIN_DEFENSE


@dataclass
class CombatResult:
    """Result of resolving a single attack.

    Attributes:
        damage_to_defender: Damage dealt to the defender
        damage_to_attacker: Retaliation damage dealt to the attacker (0 if none)
        defender_killed: Whether the defender's HP reached 0
        attacker_killed: Whether retaliation killed the attacker
        attacker: Attacker after combat (HP, kill count)
        defender: Defender after combat (HP floored at 0)
    """

    damage_to_defender: int
    damage_to_attacker: int
    defender_killed: bool
    attacker_killed: bool
    attacker: Unit
    defender: Unit


@dataclass
class CombatPreview:
    """Expected outcome of an attack, computed without touching any unit."""

    damage_to_defender: int
    damage_to_attacker: int
    defender_killed: bool
    attacker_killed: bool


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always rounding up."""
    return math.floor(value + 0.5)


def terrain_defense_bonus(terrain: TerrainType) -> float:
    """Defense multiplier granted by terrain.

    Only the defender's tile matters; attacking from defensive terrain
    grants nothing.
    """
    return TERRAIN_DEFENSE[terrain]


def city_defense_bonus(has_wall: bool) -> float:
    """Defense multiplier for a unit inside a city."""
    return CITY_WALL_DEFENSE_BONUS if has_wall else CITY_DEFENSE_BONUS


def _calculate_damage(
    attacker: Unit, defender: Unit, defense_bonus: float, distance: int
) -> tuple[int, int, bool] | None:
    """Shared damage math for resolve_combat and preview_combat.

    Both results derive from pre-attack HP, so retaliation is simultaneous
    rather than sequential.

    Returns:
        Tuple of (damage to defender, damage to attacker, defender killed),
        or None when neither side has any force
    """
    attack_force = attacker.atk * (attacker.current_hp / attacker.max_hp)
    defense_force = defender.defense * (defender.current_hp / defender.max_hp) * defense_bonus
    total = attack_force + defense_force
    if total == 0:
        return None

    attack_result = round_half_up(attack_force / total * attacker.atk * DAMAGE_MULTIPLIER)
    defense_result = round_half_up(defense_force / total * defender.defense * DAMAGE_MULTIPLIER)

    defender_killed = defender.current_hp - attack_result <= 0
    retaliates = (
        not defender_killed
        and distance <= defender.attack_range
        and not defender.has_skill(UnitSkill.STIFF)
        and defense_result > 0
    )
    damage_to_attacker = defense_result if retaliates else 0

    return attack_result, damage_to_attacker, defender_killed


def resolve_combat(
    attacker: Unit, defender: Unit, defense_bonus: float, distance: int
) -> CombatResult:
    """Resolve an attack between two units.

    Combat rules:
    - attack force = ATK x (HP / max HP)
    - defense force = DEF x (HP / max HP) x defense bonus
    - damage to defender = round(attack force / total x ATK x 4.5)
    - retaliation = round(defense force / total x DEF x 4.5), only if the
      defender survives, the attacker is within the defender's range, the
      defender is not Stiff and the value is positive
    - a kill increments the attacker's kill count; removing dead units is
      the caller's job

    Args:
        attacker: Attacking unit
        defender: Defending unit
        defense_bonus: Multiplier for the defender's tile (terrain or city)
        distance: Chebyshev distance between the two units

    Returns:
        CombatResult with updated copies of both units
    """
    damage = _calculate_damage(attacker, defender, defense_bonus, distance)
    if damage is None:
        return CombatResult(
            damage_to_defender=0,
            damage_to_attacker=0,
            defender_killed=False,
            attacker_killed=False,
            attacker=attacker,
            defender=defender,
        )

    damage_to_defender, damage_to_attacker, defender_killed = damage
    attacker_hp = attacker.current_hp - damage_to_attacker
    defender_hp = defender.current_hp - damage_to_defender

    updated_attacker = replace(
        attacker,
        current_hp=max(0, attacker_hp),
        kills=attacker.kills + 1 if defender_killed else attacker.kills,
    )
    updated_defender = replace(defender, current_hp=max(0, defender_hp))

    return CombatResult(
        damage_to_defender=damage_to_defender,
        damage_to_attacker=damage_to_attacker,
        defender_killed=defender_killed,
        attacker_killed=attacker_hp <= 0,
        attacker=updated_attacker,
        defender=updated_defender,
    )


def preview_combat(
    attacker: Unit, defender: Unit, defense_bonus: float, distance: int
) -> CombatPreview:
    """Calculate the outcome of an attack without applying it."""
    damage = _calculate_damage(attacker, defender, defense_bonus, distance)
    if damage is None:
        return CombatPreview(0, 0, False, False)
    damage_to_defender, damage_to_attacker, defender_killed = damage
    return CombatPreview(
        damage_to_defender=damage_to_defender,
        damage_to_attacker=damage_to_attacker,
        defender_killed=defender_killed,
        attacker_killed=attacker.current_hp - damage_to_attacker <= 0,
    )


def can_promote(unit: Unit) -> bool:
    """Check if a unit is eligible for veteran promotion.

    Requires 3+ kills; veterans and Static units cannot be promoted.
    """
    if unit.is_veteran or unit.has_skill(UnitSkill.STATIC):
        return False
    return unit.kills >= VETERAN_KILLS


def promote_to_veteran(unit: Unit) -> Unit:
    """Promote a unit: +5 max HP and a full heal to the new maximum.

    Returns the same unit unchanged when it is not eligible.
    """
    if not can_promote(unit):
        return unit
    new_max_hp = unit.max_hp + VETERAN_HP_BONUS
    return replace(unit, max_hp=new_max_hp, current_hp=new_max_hp, is_veteran=True)
