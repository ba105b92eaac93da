"""Deterministic simulation core for a 2-4 tribe turn-based strategy game."""

__version__ = "0.1.0"
