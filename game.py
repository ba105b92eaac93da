#!/usr/bin/env python3
"""Tribes - Main entry point.

Generates a seeded game, fast-forwards a number of rounds by ending turns
and prints a summary of the resulting state. Useful for checking map
generation and the star economy from the command line.
"""

import argparse
import logging
import sys

from pydantic import ValidationError

from tribes.engine.map_generator import count_terrain, map_size_for
from tribes.engine.simulation import SimulationState
from tribes.models import Difficulty, GameConfig, TribeId, WinCondition
from tribes.utils import NO_WINNER, RNG_SEED_DEFAULT


def print_summary(state: SimulationState) -> None:
    """Print terrain counts, capitals, villages and star balances."""
    print("\n" + "=" * 60)
    print(f"Turn {state.get_turn_number()} - player {state.get_current_player()} to act")
    print("=" * 60)

    print("\nTerrain:")
    for terrain, count in count_terrain(state.grid).items():
        print(f"  {terrain.value:<14} {count:>4}")

    print("\nPlayers:")
    for player in range(state.player_count):
        tribe = state.get_tribe_for_player(player)
        cities = state.get_cities_for_player(player)
        units = state.get_units_for_player(player)
        capitals = [f"({c.position.x}, {c.position.y})" for c in cities if c.is_capital]
        print(
            f"  P{player} {tribe:<9} stars={state.get_stars(player):<4} "
            f"income={state.get_income(player):<3} cities={len(cities)} units={len(units)} "
            f"capital={', '.join(capitals) or '-'}"
        )

    print(f"\nVillages ({len(state.villages)}):")
    print("  " + (" ".join(f"({v.x}, {v.y})" for v in state.villages) or "-"))

    winner = state.get_winner()
    if winner != NO_WINNER:
        print(f"\nWinner: player {winner} ({state.get_tribe_for_player(winner)})")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Tribes - deterministic turn-based strategy simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                   # Default 16x16 map, xinxi vs imperius
  %(prog)s --preset tiny --seed 7            # 11x11 map with seed 7
  %(prog)s --tribes oumaji bardur xinxi      # Three-player game
  %(prog)s --water 0 --rounds 10 --verbose   # Dry map, 10 rounds, debug logging
        """,
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=RNG_SEED_DEFAULT,
        help=f"Random seed for map generation (default: {RNG_SEED_DEFAULT})",
    )
    size_group = parser.add_mutually_exclusive_group()
    size_group.add_argument("--map-size", type=int, default=None, help="Map width and height")
    size_group.add_argument(
        "--preset",
        choices=["tiny", "small", "normal", "large"],
        default=None,
        help="Named map size (tiny=11, small=14, normal=16, large=18)",
    )
    parser.add_argument(
        "--water",
        type=float,
        default=0.3,
        help="Fraction of tiles to turn into water, 0-1 (default: 0.3)",
    )
    parser.add_argument(
        "--tribes",
        nargs="+",
        choices=[tribe.value for tribe in TribeId if tribe != TribeId.NEUTRAL],
        default=["xinxi", "imperius"],
        help="Tribes in player order, 2-4 (default: xinxi imperius)",
    )
    parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        default="normal",
        help="Star bonus tier for non-human players (default: normal)",
    )
    parser.add_argument(
        "--turn-limit",
        type=int,
        default=None,
        help="Play a perfection game that is scored after this many turns",
    )
    parser.add_argument(
        "--rounds",
        type=int,
        default=0,
        help="Number of full rounds to fast-forward (default: 0)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    map_size = args.map_size
    if map_size is None:
        map_size = map_size_for(args.preset or "normal")

    try:
        config = GameConfig(
            map_size=map_size,
            water_level=args.water,
            tribes=args.tribes,
            difficulty=args.difficulty,
            win_condition=(
                WinCondition.PERFECTION if args.turn_limit else WinCondition.DOMINATION
            ),
            turn_limit=args.turn_limit,
        )
    except ValidationError as e:
        print(f"Invalid configuration:\n{e}")
        sys.exit(2)

    state = SimulationState.new_game(config, args.seed)

    for _ in range(args.rounds * config.player_count):
        if state.get_winner() != NO_WINNER:
            break
        state.end_turn()

    print_summary(state)


if __name__ == "__main__":
    main()
