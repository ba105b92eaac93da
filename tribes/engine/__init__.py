"""Game engine components."""

from .combat import CombatPreview, CombatResult, preview_combat, resolve_combat
from .grid import CONSUMES_REMAINING, IMPASSABLE, CostKind, GameMap, MoveCost
from .map_generator import GeneratedMap, generate_map
from .movement import compute_movement_range
from .simulation import SimulationState, TurnStart
from .tech import TechState, calculate_tech_cost, get_tech_definition

__all__ = [
    "CONSUMES_REMAINING",
    "CombatPreview",
    "CombatResult",
    "CostKind",
    "GameMap",
    "GeneratedMap",
    "IMPASSABLE",
    "MoveCost",
    "SimulationState",
    "TechState",
    "TurnStart",
    "calculate_tech_cost",
    "compute_movement_range",
    "generate_map",
    "get_tech_definition",
    "preview_combat",
    "resolve_combat",
]
