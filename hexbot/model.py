"""
Value types shared by the search and the rules engine adapters.

Cells are opaque to the search: whatever hashable identifier the rules engine
uses (square names for the python-chess adapter, hexagon names for a
hexagonal engine) is passed through untouched.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Hashable

Cell = Hashable


class Color(str, Enum):
    LIGHT = "w"
    DARK = "b"

    @property
    def opponent(self) -> "Color":
        return Color.DARK if self is Color.LIGHT else Color.LIGHT


class PieceKind(str, Enum):
    PAWN = "p"
    KNIGHT = "n"
    BISHOP = "b"
    ROOK = "r"
    QUEEN = "q"
    KING = "k"


@dataclass(frozen=True)
class Piece:
    kind: PieceKind
    color: Color


@dataclass(frozen=True)
class Move:
    """
    A move from one cell to another.

    `promotion` is only set when a pawn lands on its side's promotion cells.
    Instances are immutable.
    """

    from_cell: Cell
    to_cell: Cell
    promotion: PieceKind | None = None

    def uci(self) -> str:
        """Long algebraic rendering, e.g. "e7e8q"."""
        suffix = self.promotion.value if self.promotion is not None else ""
        return f"{self.from_cell}{self.to_cell}{suffix}"

    def __str__(self) -> str:
        return self.uci()
