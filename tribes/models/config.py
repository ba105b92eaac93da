"""Pydantic game configuration model."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .tribe import TribeId


class Difficulty(str, Enum):
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"
    CRAZY = "crazy"


class WinCondition(str, Enum):
    DOMINATION = "domination"
    PERFECTION = "perfection"


class GameConfig(BaseModel):
    """Construction-time configuration of a game.

    The configuration is frozen: map dimensions and the faction list never
    change once a game is created.
    """

    model_config = ConfigDict(frozen=True)

    map_size: int = Field(default=16, ge=6, le=64, description="Width and height of the grid")
    water_level: float = Field(
        default=0.3, ge=0.0, le=1.0, description="Fraction of tiles to turn into water"
    )
    tribes: tuple[TribeId, ...] = Field(
        default=(TribeId.XINXI, TribeId.IMPERIUS),
        min_length=2,
        max_length=4,
        description="Ordered faction list; index is the player number",
    )
    difficulty: Difficulty = Field(default=Difficulty.NORMAL)
    win_condition: WinCondition = Field(default=WinCondition.DOMINATION)
    turn_limit: int | None = Field(
        default=None, gt=0, description="Rounds before a perfection game is scored"
    )

    @field_validator("tribes")
    @classmethod
    def _check_tribes(cls, tribes: tuple[TribeId, ...]) -> tuple[TribeId, ...]:
        if TribeId.NEUTRAL in tribes:
            raise ValueError("neutral is not a playable tribe")
        if len(set(tribes)) != len(tribes):
            raise ValueError(f"tribes must be unique, got {[t.value for t in tribes]}")
        return tribes

    @model_validator(mode="after")
    def _check_turn_limit(self) -> "GameConfig":
        if self.win_condition == WinCondition.PERFECTION and self.turn_limit is None:
            raise ValueError("perfection games need a turn_limit")
        return self

    @property
    def player_count(self) -> int:
        return len(self.tribes)
