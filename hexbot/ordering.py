"""
MVV-LVA move ordering.

Ordering only decides which sibling is searched first; it never changes the
value the search returns, just how much of the tree alpha-beta can skip.
Captures of valuable pieces by cheap ones come first, promotions get the
promoted piece's value on top, everything else scores 0.

    capture:    10 * victim - attacker
    promotion:  + value(promoted kind)
"""

from typing import Iterable, Mapping

from hexbot.constants import PIECE_VALUES, VICTIM_WEIGHT
from hexbot.model import Cell, Move, Piece


def score_move(board: Mapping[Cell, Piece | None], move: Move) -> int:
    """Ordering priority of `move` on `board`; higher is searched first."""
    score = 0
    mover = board.get(move.from_cell)
    victim = board.get(move.to_cell)
    if victim is not None and (mover is None or victim.color != mover.color):
        attacker_val = PIECE_VALUES[mover.kind] if mover is not None else 0
        score += VICTIM_WEIGHT * PIECE_VALUES[victim.kind] - attacker_val
    if move.promotion is not None:
        score += PIECE_VALUES[move.promotion]
    return score


def order_moves(board: Mapping[Cell, Piece | None], moves: Iterable[Move]) -> list[Move]:
    """
    Sort moves by descending ordering score.

    sorted() is stable, so moves with equal scores keep the rules engine's
    enumeration order and the search stays deterministic.
    """
    return sorted(moves, key=lambda m: score_move(board, m), reverse=True)
