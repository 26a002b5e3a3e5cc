"""
Search configuration.

Which color the search plays for is an explicit choice rather than something
inferred from whoever happens to be on move:

    SideToMove()          the side to move at the root (default)
    FixedColor(color)     always score from `color`'s point of view

With a fixed color the root still picks a move for the side to move; it
maximizes the score when that side is the fixed color and minimizes it
otherwise.
"""

import os
from dataclasses import dataclass, field

from hexbot.constants import KING_SAFETY_PENALTY, MAX_DEPTH
from hexbot.errors import ConfigError
from hexbot.model import Color


@dataclass(frozen=True)
class SideToMove:
    def resolve(self, turn: Color) -> Color:
        return turn


@dataclass(frozen=True)
class FixedColor:
    color: Color

    def resolve(self, turn: Color) -> Color:
        return self.color


Perspective = SideToMove | FixedColor


def parse_perspective(value: str) -> Perspective:
    """
    Parse a perspective name: "side-to-move", "w" or "b".

    Raises:
        ConfigError: for any other value.
    """
    value = value.strip().lower()
    if value in ("side-to-move", "side_to_move", ""):
        return SideToMove()
    try:
        return FixedColor(Color(value))
    except ValueError as exc:
        raise ConfigError(
            f"Unknown perspective {value!r}; expected 'side-to-move', 'w' or 'b'"
        ) from exc


@dataclass(frozen=True)
class SearchConfig:
    """
    Runtime knobs for a Bot.

    Attributes:
        perspective:         Whose material the search maximizes.
        king_safety_penalty: Deducted from unforced root king moves.
        max_depth:           Largest depth `Bot.search` accepts.
    """

    perspective: Perspective = field(default_factory=SideToMove)
    king_safety_penalty: int = KING_SAFETY_PENALTY
    max_depth: int = MAX_DEPTH

    @classmethod
    def from_env(cls, environ=None) -> "SearchConfig":
        """
        Build a config from HEXBOT_PERSPECTIVE, HEXBOT_MAX_DEPTH and
        HEXBOT_KING_PENALTY. Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        perspective = parse_perspective(env.get("HEXBOT_PERSPECTIVE", "side-to-move"))
        max_depth = _int_var(env, "HEXBOT_MAX_DEPTH", MAX_DEPTH)
        penalty = _int_var(env, "HEXBOT_KING_PENALTY", KING_SAFETY_PENALTY)
        if max_depth < 0:
            raise ConfigError(f"HEXBOT_MAX_DEPTH must be >= 0, got {max_depth}")
        return cls(perspective=perspective, king_safety_penalty=penalty, max_depth=max_depth)


def _int_var(env, name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc
