"""Movement reachability.

This module handles:
1. Per-unit terrain costs (land units vs naval units)
2. Best-remaining-budget search over the grid
3. Pass-through of allied units and blocking by enemy units

The search is a breadth-first expansion where each tile remembers the most
movement left over when it was reached. A tile is expanded again only when
reached with strictly more left over, so the result does not depend on the
order neighbors are visited.
"""

from collections import deque
from typing import Callable, Optional, Set

from ..models.tile import Coord
from ..models.unit import Unit
from .grid import IMPASSABLE, CostKind, GameMap, MoveCost

UnitLookup = Callable[[Coord], Optional[Unit]]

NAVAL_STEP = MoveCost.cost(1.0)


def step_cost(grid: GameMap, unit: Unit, origin: Coord, dest: Coord) -> MoveCost:
    """Cost for `unit` to step from origin into dest.

    Land units can never enter water, whatever the terrain cost says.
    Naval units move over water at a flat cost and cannot land.
    """
    if not grid.is_in_bounds(dest.x, dest.y):
        return IMPASSABLE
    if unit.is_naval:
        return NAVAL_STEP if grid.is_water(dest.x, dest.y) else IMPASSABLE
    if grid.is_water(dest.x, dest.y):
        return IMPASSABLE
    return grid.get_movement_cost(origin, dest)


def compute_movement_range(grid: GameMap, unit: Unit, unit_at: UnitLookup) -> Set[Coord]:
    """Compute every tile a unit can move to this turn.

    Rules:
    - COST tiles spend their amount from the remaining budget
    - CONSUMES_REMAINING tiles can be entered only with the full budget
      still in hand; the move ends there
    - IMPASSABLE tiles are never entered
    - Allied units can be passed through but not landed on
    - Enemy units block the tile outright

    Args:
        grid: The map
        unit: Unit to move
        unit_at: Lookup returning the unit on a coordinate, if any

    Returns:
        Set of reachable coordinates, never including the unit's own tile
    """
    start = unit.position
    best_remaining = {start: float(unit.movement)}
    reachable: Set[Coord] = set()
    queue = deque([(start, float(unit.movement))])

    while queue:
        current, remaining = queue.popleft()

        for neighbor in grid.get_neighbors(current.x, current.y):
            dest = neighbor.coord
            cost = step_cost(grid, unit, current, dest)

            if cost.kind == CostKind.IMPASSABLE:
                continue
            if cost.kind == CostKind.CONSUMES_REMAINING:
                if remaining < unit.movement or unit.movement < 1:
                    continue
                new_remaining = 0.0
            else:
                if remaining < cost.amount:
                    continue
                new_remaining = remaining - cost.amount

            previous = best_remaining.get(dest)
            if previous is not None and previous >= new_remaining:
                continue
            best_remaining[dest] = new_remaining

            occupant = unit_at(dest)
            if occupant is None:
                reachable.add(dest)
            elif occupant.owner != unit.owner:
                continue  # Enemy: no landing, no pass-through

            if new_remaining > 0:
                queue.append((dest, new_remaining))

    return reachable
