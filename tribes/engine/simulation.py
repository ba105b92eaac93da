"""Game state and turn sequencing.

SimulationState is the only mutation surface of the core. It composes the
grid, units, cities, star balances and tech states, validates every
command before touching anything, and drives the round-robin turn order.

Command rules:
- Rejected commands return None/False, log a warning and change nothing
- Unknown tech ids raise ValueError
- Which units have moved or attacked is tracked here, per round, and
  cleared for a player when their turn begins
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Set, Union

from ..models.city import City, CityReward, RewardKind
from ..models.config import GameConfig, WinCondition
from ..models.tile import Coord, Tile
from ..models.tribe import TribeId, get_tribe
from ..models.unit import Unit, UnitType
from ..utils import chebyshev_distance
from ..utils.constants import DIFFICULTY_BONUS, HUMAN_PLAYER, NO_WINNER, STARTING_STARS
from .city import (
    can_level_up,
    capture_city,
    city_income,
    city_territory,
    create_city,
    level_rewards,
    level_up,
)
from .combat import (
    CombatResult,
    can_promote,
    city_defense_bonus,
    promote_to_veteran,
    resolve_combat,
)
from .grid import GameMap
from .map_generator import generate_map
from .movement import compute_movement_range
from .tech import TechState, calculate_tech_cost, get_tech_definition
from .units import create_unit, get_unit_cost, is_trainable
from .victory import alive_players, check_domination, check_perfection, player_score

logger = logging.getLogger(__name__)


@dataclass
class TurnStart:
    """What happened when a new player became active.

    Attributes:
        player: Index of the player whose turn it now is
        turn: Turn number (one turn = one full round)
        income: Stars credited to the player
    """

    player: int
    turn: int
    income: int


class SimulationState:
    """Authoritative state of one game."""

    def __init__(self, grid: GameMap, config: GameConfig):
        self.grid = grid
        self.config = config
        self.player_count = config.player_count
        self.villages: List[Coord] = []

        self._tribes = [TribeId(tribe).value for tribe in config.tribes]
        self._current_player = 0
        self._turn = 1
        self._winner = NO_WINNER
        self._stars = [STARTING_STARS] * self.player_count
        self._tech_states = [
            TechState([get_tribe(tribe).starting_tech]) for tribe in self._tribes
        ]
        self._units: Dict[str, Unit] = {}
        self._cities: Dict[Coord, City] = {}
        self._moved: Set[str] = set()
        self._attacked: Set[str] = set()
        self._next_unit_id = 1

    @classmethod
    def new_game(cls, config: GameConfig, seed: int) -> "SimulationState":
        """Generate a map and set up capitals and starting units.

        Player i founds a capital on the i-th generated capital position and
        gets their tribe's starting unit on it.
        """
        generated = generate_map(config, seed)
        state = cls(generated.grid, config)
        state.villages = list(generated.villages)

        for player, (tribe, pos) in enumerate(zip(state._tribes, generated.capitals)):
            definition = get_tribe(tribe)
            state.add_city(create_city(tribe, pos, f"{definition.name} Capital", is_capital=True))
            state.add_unit(state._new_unit(definition.starting_unit, player, pos.x, pos.y))

        logger.info(
            f"New game: {config.map_size}x{config.map_size}, "
            f"tribes={', '.join(state._tribes)}, seed={seed}"
        )
        return state

    # =========================================================================
    # QUERIES
    # =========================================================================

    def get_current_player(self) -> int:
        return self._current_player

    def get_turn_number(self) -> int:
        return self._turn

    def get_winner(self) -> int:
        """Winning player index, or NO_WINNER (-1) while undecided."""
        return self._winner

    def get_tribe_for_player(self, player: int) -> str:
        return self._tribes[player]

    def get_player_for_tribe(self, tribe: str) -> Optional[int]:
        tribe = TribeId(tribe).value
        return self._tribes.index(tribe) if tribe in self._tribes else None

    def get_tile(self, x: int, y: int) -> Optional[Tile]:
        return self.grid.get_tile(x, y)

    def get_unit(self, unit_id: str) -> Optional[Unit]:
        return self._units.get(unit_id)

    def get_unit_at(self, x: int, y: int) -> Optional[Unit]:
        for unit in self._units.values():
            if unit.x == x and unit.y == y:
                return unit
        return None

    def get_units_for_player(self, player: int) -> List[Unit]:
        return [unit for unit in self._units.values() if unit.owner == player]

    def get_all_units(self) -> List[Unit]:
        return list(self._units.values())

    def get_city_at(self, x: int, y: int) -> Optional[City]:
        return self._cities.get(Coord(x, y))

    def get_cities_for_player(self, player: int) -> List[City]:
        tribe = self._tribes[player]
        return [city for city in self._cities.values() if city.owner == tribe]

    def get_all_cities(self) -> List[City]:
        return list(self._cities.values())

    def get_movement_range(self, unit_id: str) -> Set[Coord]:
        """Tiles the unit can move to; empty for unknown units."""
        unit = self._units.get(unit_id)
        if unit is None:
            return set()
        return compute_movement_range(
            self.grid, unit, lambda pos: self.get_unit_at(pos.x, pos.y)
        )

    def get_stars(self, player: int) -> int:
        return self._stars[player]

    def get_income(self, player: int) -> int:
        """Stars per turn: city income plus the difficulty bonus for non-human players."""
        income = sum(city_income(city) for city in self.get_cities_for_player(player))
        if player != HUMAN_PLAYER:
            income += DIFFICULTY_BONUS[self.config.difficulty.value]
        return income

    def get_tech_state(self, player: int) -> TechState:
        return self._tech_states[player]

    def get_tech_cost(self, player: int, tech_id: str) -> int:
        return calculate_tech_cost(
            tech_id,
            len(self.get_cities_for_player(player)),
            self._tech_states[player].has_literacy(),
        )

    def get_score(self, player: int) -> int:
        return player_score(
            self.get_cities_for_player(player),
            len(self._tech_states[player].researched),
        )

    def has_moved(self, unit_id: str) -> bool:
        return unit_id in self._moved

    def has_attacked(self, unit_id: str) -> bool:
        return unit_id in self._attacked

    # =========================================================================
    # SETUP HELPERS
    # =========================================================================

    def add_unit(self, unit: Unit) -> bool:
        """Place a unit. Fails if its tile is taken or its id is in use."""
        if unit.id in self._units or self.get_unit_at(unit.x, unit.y) is not None:
            return False
        self._units[unit.id] = unit
        return True

    def remove_unit(self, unit_id: str) -> bool:
        if self._units.pop(unit_id, None) is None:
            return False
        self._moved.discard(unit_id)
        self._attacked.discard(unit_id)
        return True

    def add_city(self, city: City) -> bool:
        """Place a city and claim its territory. Fails if a city is already there."""
        if city.position in self._cities:
            return False
        self._cities[city.position] = city
        self._claim_territory(city)
        return True

    def add_stars(self, player: int, amount: int) -> None:
        self._stars[player] += amount

    def spend_stars(self, player: int, amount: int) -> bool:
        """Deduct stars if the player can afford it."""
        if self._stars[player] < amount:
            return False
        self._stars[player] -= amount
        return True

    # =========================================================================
    # COMMANDS
    # =========================================================================

    def end_turn(self) -> TurnStart:
        """Hand the turn to the next player.

        1. Advance the active index; a wrap to player 0 starts a new turn
        2. Credit the new player's income
        3. Clear the moved/attacked marks of the new player's units
        4. Re-check the win conditions
        """
        self._current_player = (self._current_player + 1) % self.player_count
        if self._current_player == 0:
            self._turn += 1

        income = self._begin_turn(self._current_player)
        self._check_victory()

        logger.info(
            f"Turn {self._turn}: player {self._current_player} "
            f"({self._tribes[self._current_player]}) +{income} stars"
        )
        return TurnStart(player=self._current_player, turn=self._turn, income=income)

    def move_unit(self, unit_id: str, x: int, y: int) -> bool:
        """Move a unit to a reachable tile; landing on a foreign city captures it.

        Returns:
            True if the unit moved, False if the move was rejected
        """
        unit = self._units.get(unit_id)
        if unit is None:
            logger.warning(f"Move rejected: unknown unit {unit_id}")
            return False
        if unit.owner != self._current_player:
            logger.warning(f"Move rejected: {unit_id} does not belong to player {self._current_player}")
            return False
        if unit_id in self._moved:
            logger.warning(f"Move rejected: {unit_id} has already moved this turn")
            return False
        if Coord(x, y) not in self.get_movement_range(unit_id):
            logger.warning(f"Move rejected: ({x}, {y}) is out of reach for {unit_id}")
            return False

        self._units[unit_id] = replace(unit, x=x, y=y)
        self._moved.add(unit_id)

        city = self._cities.get(Coord(x, y))
        tribe = self._tribes[unit.owner]
        if city is not None and city.owner != tribe:
            self._capture(city, tribe)
        return True

    def attack_unit(self, unit_id: str, x: int, y: int) -> Optional[CombatResult]:
        """Attack the enemy unit on (x, y).

        The defender's tile sets the defense bonus; a city on it overrides
        the terrain bonus. Dead units are removed from the board.

        Returns:
            CombatResult, or None if the attack was rejected
        """
        attacker = self._units.get(unit_id)
        if attacker is None:
            logger.warning(f"Attack rejected: unknown unit {unit_id}")
            return None
        if attacker.owner != self._current_player:
            logger.warning(f"Attack rejected: {unit_id} does not belong to player {self._current_player}")
            return None
        if unit_id in self._attacked:
            logger.warning(f"Attack rejected: {unit_id} has already attacked this turn")
            return None

        defender = self.get_unit_at(x, y)
        if defender is None or defender.owner == attacker.owner:
            logger.warning(f"Attack rejected: no enemy unit at ({x}, {y})")
            return None

        distance = chebyshev_distance(attacker.x, attacker.y, x, y)
        if distance > attacker.attack_range:
            logger.warning(
                f"Attack rejected: ({x}, {y}) is {distance} tiles from {unit_id} "
                f"(range {attacker.attack_range})"
            )
            return None

        city = self._cities.get(Coord(x, y))
        if city is not None:
            defense_bonus = city_defense_bonus(city.has_wall)
        else:
            defense_bonus = self.grid.get_defense_bonus(x, y)

        result = resolve_combat(attacker, defender, defense_bonus, distance)

        if result.defender_killed:
            self.remove_unit(defender.id)
            logger.info(f"{defender.id} destroyed by {unit_id}")
        else:
            self._units[defender.id] = result.defender

        if result.attacker_killed:
            self.remove_unit(unit_id)
            logger.info(f"{unit_id} destroyed by retaliation from {defender.id}")
        else:
            self._units[unit_id] = result.attacker
            self._attacked.add(unit_id)

        return result

    def research_tech(self, player: int, tech_id: str) -> bool:
        """Research a tech, paying its current cost.

        Raises:
            ValueError: If tech_id is not part of the tech tree
        """
        tech = get_tech_definition(tech_id)
        if player != self._current_player:
            logger.warning(f"Research rejected: it is not player {player}'s turn")
            return False

        tech_state = self._tech_states[player]
        if not tech_state.can_research(tech.id):
            logger.warning(f"Research rejected: {tech.name} is researched or locked for player {player}")
            return False

        cost = self.get_tech_cost(player, tech.id)
        if not self.spend_stars(player, cost):
            logger.warning(
                f"Research rejected: {tech.name} costs {cost}, player {player} has {self._stars[player]}"
            )
            return False

        tech_state.research(tech.id)
        logger.info(f"Player {player} researched {tech.name} for {cost} stars")
        return True

    def train_unit(self, city_x: int, city_y: int, unit_type: str) -> Optional[Unit]:
        """Train a unit on a city tile owned by the active player.

        Requires the unit's tech, enough stars and an empty city tile.

        Returns:
            The new unit, or None if training was rejected
        """
        try:
            unit_type = UnitType(unit_type)
        except ValueError:
            logger.warning(f"Train rejected: unknown unit type {unit_type!r}")
            return None
        player = self._current_player
        city = self._cities.get(Coord(city_x, city_y))
        if city is None or city.owner != self._tribes[player]:
            logger.warning(f"Train rejected: player {player} has no city at ({city_x}, {city_y})")
            return None
        if not is_trainable(unit_type):
            logger.warning(f"Train rejected: {unit_type.value} cannot be trained in a city")
            return None
        if not self._tech_states[player].is_unit_unlocked(unit_type):
            logger.warning(f"Train rejected: {unit_type.value} is not unlocked for player {player}")
            return None
        if self.get_unit_at(city_x, city_y) is not None:
            logger.warning(f"Train rejected: city tile ({city_x}, {city_y}) is occupied")
            return None

        cost = get_unit_cost(unit_type)
        if not self.spend_stars(player, cost):
            logger.warning(
                f"Train rejected: {unit_type.value} costs {cost}, player {player} has {self._stars[player]}"
            )
            return None

        unit = self._new_unit(unit_type, player, city_x, city_y)
        self._units[unit.id] = unit
        return unit

    def level_up_city(self, x: int, y: int, reward: Union[CityReward, str]) -> Optional[City]:
        """Level up a city of the active player with one of its two rewards.

        Immediate stars go to the owner. A super unit spawns on the city
        tile, or on the first free land neighbor when the tile is taken;
        with no free tile the level-up is rejected.

        Returns:
            The updated city, or None if the level-up was rejected
        """
        player = self._current_player
        city = self._cities.get(Coord(x, y))
        if city is None or city.owner != self._tribes[player]:
            logger.warning(f"Level-up rejected: player {player} has no city at ({x}, {y})")
            return None
        if not can_level_up(city):
            logger.warning(f"Level-up rejected: {city.name} lacks population")
            return None

        options = {option.kind: option for option in level_rewards(city.level + 1)}
        name = reward.kind if isinstance(reward, CityReward) else reward
        try:
            kind = RewardKind(name)
        except ValueError:
            logger.warning(f"Level-up rejected: unknown reward {name!r}")
            return None
        chosen = options.get(kind)
        if chosen is None:
            logger.warning(f"Level-up rejected: {kind.value} is not offered at level {city.level + 1}")
            return None

        spawn = None
        if chosen.kind == RewardKind.SUPER_UNIT:
            spawn = self._free_land_tile(city.position)
            if spawn is None:
                logger.warning(
                    f"Level-up rejected: no free tile near {city.name} "
                    f"for a {chosen.unit_type.value}"
                )
                return None

        updated = level_up(city, chosen)
        self._cities[updated.position] = updated

        if chosen.kind == RewardKind.STARS:
            self.add_stars(player, chosen.amount)
        elif chosen.kind == RewardKind.SUPER_UNIT:
            unit = self._new_unit(chosen.unit_type, player, spawn.x, spawn.y)
            self._units[unit.id] = unit
            logger.info(f"{unit.type.value} {unit.id} spawned at ({spawn.x}, {spawn.y})")
        elif chosen.kind == RewardKind.BORDER_GROWTH:
            self._claim_territory(updated)

        logger.info(f"{updated.name} reached level {updated.level} ({chosen.kind.value})")
        return updated

    def promote_unit(self, unit_id: str) -> Optional[Unit]:
        """Promote an eligible unit of the active player to veteran."""
        unit = self._units.get(unit_id)
        if unit is None or unit.owner != self._current_player:
            logger.warning(f"Promotion rejected: player {self._current_player} has no unit {unit_id}")
            return None
        if not can_promote(unit):
            logger.warning(f"Promotion rejected: {unit_id} is not eligible ({unit.kills} kills)")
            return None

        promoted = promote_to_veteran(unit)
        self._units[unit_id] = promoted
        logger.info(f"{unit_id} promoted to veteran ({promoted.max_hp} HP)")
        return promoted

    # =========================================================================
    # SNAPSHOT
    # =========================================================================

    def snapshot(self) -> dict:
        """Plain-data copy of the full state, suitable for json.dumps."""
        return {
            "turn": self._turn,
            "current_player": self._current_player,
            "winner": self._winner,
            "tribes": list(self._tribes),
            "stars": list(self._stars),
            "techs": [
                [tech_id.value for tech_id in state.researched] for state in self._tech_states
            ],
            "terrain": [
                [self.grid.get_tile(x, y).terrain.value for x in range(self.grid.width)]
                for y in range(self.grid.height)
            ],
            "villages": [[pos.x, pos.y] for pos in self.villages],
            "units": [
                {
                    "id": unit.id,
                    "type": unit.type.value,
                    "owner": unit.owner,
                    "x": unit.x,
                    "y": unit.y,
                    "hp": unit.current_hp,
                    "max_hp": unit.max_hp,
                    "kills": unit.kills,
                    "veteran": unit.is_veteran,
                    "moved": unit.id in self._moved,
                    "attacked": unit.id in self._attacked,
                }
                for unit in sorted(self._units.values(), key=lambda u: u.id)
            ],
            "cities": [
                {
                    "owner": city.owner,
                    "x": city.position.x,
                    "y": city.position.y,
                    "name": city.name,
                    "level": city.level,
                    "population": city.population,
                    "capital": city.is_capital,
                    "wall": city.has_wall,
                    "workshop": city.has_workshop,
                    "park": city.has_park,
                    "border_size": city.border_size,
                }
                for city in sorted(self._cities.values(), key=lambda c: (c.position.y, c.position.x))
            ],
        }

    # =========================================================================
    # INTERNAL
    # =========================================================================

    def _new_unit(self, unit_type: UnitType, owner: int, x: int, y: int) -> Unit:
        """Create a unit with the next free "unit-N" id of this game."""
        while f"unit-{self._next_unit_id}" in self._units:
            self._next_unit_id += 1
        unit_id = f"unit-{self._next_unit_id}"
        self._next_unit_id += 1
        return create_unit(unit_type, owner, x, y, unit_id=unit_id)

    def _begin_turn(self, player: int) -> int:
        """Credit income and clear the acted marks of the player's units."""
        income = self.get_income(player)
        self._stars[player] += income
        own_units = {unit.id for unit in self._units.values() if unit.owner == player}
        self._moved -= own_units
        self._attacked -= own_units
        return income

    def _check_victory(self) -> None:
        """Re-evaluate the win conditions. A recorded winner is never replaced."""
        if self._winner != NO_WINNER:
            return

        alive = alive_players(self._tribes, self._units.values(), self._cities.values())
        winner = check_domination(alive)

        if winner == NO_WINNER and self.config.win_condition == WinCondition.PERFECTION:
            scores = [self.get_score(player) for player in range(self.player_count)]
            winner = check_perfection(self._turn, self.config.turn_limit, scores, alive)

        if winner != NO_WINNER:
            self._winner = winner
            logger.info(f"Player {winner} ({self._tribes[winner]}) wins on turn {self._turn}")

    def _capture(self, city: City, tribe: str) -> None:
        captured = capture_city(city, tribe)
        self._cities[captured.position] = captured
        self._claim_territory(captured)
        logger.info(f"{city.name} captured by {tribe} (was {city.owner})")

    def _claim_territory(self, city: City) -> None:
        for pos in city_territory(city):
            self.grid.update_tile(pos.x, pos.y, owner=city.owner)

    def _free_land_tile(self, pos: Coord) -> Optional[Coord]:
        """pos if it is empty, else the first empty land neighbor, else None."""
        if self.get_unit_at(pos.x, pos.y) is None:
            return pos
        return next(
            (
                tile.coord
                for tile in self.grid.get_neighbors(pos.x, pos.y)
                if not tile.is_water and self.get_unit_at(tile.x, tile.y) is None
            ),
            None,
        )
