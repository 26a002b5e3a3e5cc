"""
Static material evaluation.

The score is a plain material balance seen from a reference color: the sum of
that color's piece values minus the opponent's. Kings count zero. There is no
positional term, so the evaluation is exactly antisymmetric: scoring the same
board for the other color, or swapping the color of every piece, negates it.
"""

from typing import Mapping

from hexbot.constants import PIECE_VALUES
from hexbot.model import Cell, Color, Piece


def evaluate(board: Mapping[Cell, Piece | None], reference: Color) -> int:
    """
    Material balance of `board` from `reference`'s point of view.

    Args:
        board:     Placement snapshot from the rules engine. Not modified.
        reference: Color whose advantage is positive.

    Returns:
        Material units. Positive = `reference` is ahead.

    Example:
        >>> from hexbot.model import Piece, PieceKind
        >>> b = {"a1": Piece(PieceKind.ROOK, Color.LIGHT), "a8": None}
        >>> evaluate(b, Color.LIGHT), evaluate(b, Color.DARK)
        (5, -5)
    """
    score = 0
    for piece in board.values():
        if piece is None:
            continue
        value = PIECE_VALUES[piece.kind]
        score += value if piece.color == reference else -value
    return score
