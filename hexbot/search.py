"""
Search entry point: fixed-depth minimax with alpha-beta pruning.

The rules engine handle is passed explicitly to every function here and is the
only mutable state the search touches. Each explored move is applied and
undone inside `played()`, so when any call returns the position is exactly
what it was on entry.

Scores are always from a single reference color's point of view (see
hexbot.config). Nodes where the reference color is on move maximize, the others
minimize. Node counts are returned alongside values in SearchResult and summed
by the caller; nothing is accumulated on an instance.

Root search:
    The root shares one alpha-beta window across its siblings. Moves are
    ordered MVV-LVA first, so an early capture usually tightens the window for
    everything after it. Root king moves that neither escape an attack nor
    capture anything are penalized, which keeps the engine from shuffling its
    king around when nothing is happening.
"""

import logging
import time
from dataclasses import dataclass, field

from hexbot.config import SearchConfig
from hexbot.constants import CHECKMATE_SCORE, DRAW_SCORE, INF, KING_SAFETY_PENALTY
from hexbot.errors import InvalidDepthError
from hexbot.evaluate import evaluate
from hexbot.model import Color, Move, PieceKind
from hexbot.ordering import order_moves, score_move
from hexbot.rules import ChessRules, RulesEngine, legal_moves, played

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResult:
    """Value of a subtree plus the number of nodes visited to get it."""

    value: int
    nodes: int


@dataclass(frozen=True)
class ScoredMove:
    """
    One root move as the root saw it.

    Attributes:
        move:     The move.
        raw:      Value returned by the reply search.
        adjusted: `raw` after the king-safety adjustment (equal for non-king moves).
        ordering: MVV-LVA ordering score.
    """

    move: Move
    raw: int
    adjusted: int
    ordering: int


@dataclass(frozen=True)
class RootResult:
    """
    Outcome of Bot.search().

    Attributes:
        move:       Chosen move, or None if the side to move has no legal move.
        value:      Adjusted value of `move` from the reference color's view.
        nodes:      Nodes visited under all searched root moves.
        depth:      Requested depth (plies beyond the root move).
        elapsed_ms: Wall time of the search.
        candidates: Root moves in the order they were searched.
    """

    move: Move | None
    value: int
    nodes: int
    depth: int
    elapsed_ms: int
    candidates: tuple[ScoredMove, ...] = field(default_factory=tuple)


def terminal_score(rules: RulesEngine, reference: Color, ply: int) -> int:
    """
    Score of a position where the side to move has no legal move.

    In check it is mated: the loss is encoded as CHECKMATE_SCORE - ply so a
    quicker mate scores further from zero than a slower one. Otherwise it is
    stalemate and scores DRAW_SCORE.
    """
    if not rules.is_check():
        return DRAW_SCORE
    mate = CHECKMATE_SCORE - ply
    return -mate if rules.turn() == reference else mate


def minimax(
    rules: RulesEngine,
    depth: int,
    alpha: int,
    beta: int,
    maximizing: bool,
    reference: Color,
    ply: int = 1,
) -> SearchResult:
    """
    Minimax with alpha-beta pruning over the rules engine's current position.

    Args:
        rules:      Rules engine. Moves are applied and undone in place; the
                    position is unchanged when this returns.
        depth:      Remaining plies. At 0 the position is evaluated statically.
        alpha:      Lower bound of the window (best the maximizer has so far).
        beta:       Upper bound of the window (best the minimizer has so far).
        maximizing: True if this node picks the largest child value.
        reference:  Color the scores are measured for.
        ply:        Distance from the root, for mate distance.

    Returns:
        SearchResult with this node's value and the nodes visited beneath and
        including it. A window that is already closed on entry returns the
        current bound without visiting anything.

    Raises:
        InvalidDepthError: if depth is negative.
    """
    if alpha >= beta:
        return SearchResult(alpha if maximizing else beta, 0)

    if depth <= 0:
        if depth < 0:
            raise InvalidDepthError(f"Search depth must be >= 0, got {depth}")
        return SearchResult(evaluate(rules.board(), reference), 1)

    moves = legal_moves(rules)
    if not moves:
        return SearchResult(terminal_score(rules, reference, ply), 1)

    best = -INF if maximizing else INF
    nodes = 1

    for move in moves:
        with played(rules, move):
            child = minimax(rules, depth - 1, alpha, beta, not maximizing, reference, ply + 1)
        nodes += child.nodes

        if maximizing:
            best = max(best, child.value)
            alpha = max(alpha, best)
        else:
            best = min(best, child.value)
            beta = min(beta, best)

        # Cutoff: the side choosing at the parent already has something better.
        if beta <= alpha:
            break

    return SearchResult(best, nodes)


def king_move_penalty(
    rules: RulesEngine,
    move: Move,
    penalty: int = KING_SAFETY_PENALTY,
) -> int:
    """
    Penalty for an unforced king move, judged on the position before `move`.

    A king move is unforced when the king is not attacked where it stands, the
    move captures nothing, and no opposing piece can reach either the origin
    or the destination. Unforced moves cost `penalty`; anything else costs 0,
    as do moves of pieces other than the king.
    """
    board = rules.board()
    mover = board.get(move.from_cell)
    if mover is None or mover.kind != PieceKind.KING:
        return 0

    reach: set = set()
    for cell, piece in board.items():
        if piece is not None and piece.color != mover.color:
            reach.update(rules.moves(cell))

    under_attack = move.from_cell in reach
    capturing = board.get(move.to_cell) is not None
    safe = move.from_cell not in reach and move.to_cell not in reach

    if not under_attack and not capturing and safe:
        return penalty
    return 0


def check_depth(depth, max_depth: int) -> None:
    """Reject depths that are not ints in [0, max_depth]."""
    if isinstance(depth, bool) or not isinstance(depth, int):
        raise InvalidDepthError(f"Search depth must be an integer, got {depth!r}")
    if depth < 0:
        raise InvalidDepthError(f"Search depth must be >= 0, got {depth}")
    if depth > max_depth:
        raise InvalidDepthError(f"Search depth {depth} exceeds the maximum of {max_depth}")


class Bot:
    """
    Picks moves for whichever side is to move in the rules engine's position.

    Args:
        record: Moves to replay from the starting position (SAN tokens or PGN
                text for the bundled adapter). Empty for the start position.
        rules:  Rules engine to play in. Defaults to a fresh ChessRules.
        config: Search configuration. Defaults to SearchConfig().

    The Bot owns its rules engine for the duration of a search; do not share
    one rules engine between Bots searching at the same time.
    """

    def __init__(
        self,
        record=(),
        rules: RulesEngine | None = None,
        config: SearchConfig | None = None,
    ) -> None:
        self.rules = rules if rules is not None else ChessRules()
        self.config = config if config is not None else SearchConfig()
        self.rules.load_pgn(record)

    def generate(self, depth: int = 0) -> Move | None:
        """
        Best move for the side to move, or None if it has no legal move.

        `depth` counts plies searched after the root move itself, so depth 0
        scores each root move by the material right after playing it.
        """
        return self.search(depth).move

    def search(self, depth: int = 0) -> RootResult:
        """
        Run the root search and return the chosen move with its diagnostics.

        Raises:
            InvalidDepthError: if depth is not an int in [0, config.max_depth].
        """
        check_depth(depth, self.config.max_depth)

        start = time.monotonic()
        rules = self.rules
        turn = rules.turn()
        reference = self.config.perspective.resolve(turn)
        maximizing = turn == reference

        board = rules.board()
        moves = order_moves(board, legal_moves(rules))

        best_move: Move | None = None
        best_value = -INF if maximizing else INF
        alpha, beta = -INF, INF
        nodes = 0
        candidates: list[ScoredMove] = []

        for move in moves:
            with played(rules, move):
                result = minimax(rules, depth, alpha, beta, not maximizing, reference)
            nodes += result.nodes

            value = result.value
            mover = board.get(move.from_cell)
            if mover is not None and mover.kind == PieceKind.KING:
                penalty = king_move_penalty(rules, move, self.config.king_safety_penalty)
                value = value - penalty if maximizing else value + penalty

            candidates.append(ScoredMove(move, result.value, value, score_move(board, move)))
            _log.debug("root %s raw=%d adjusted=%d nodes=%d", move, result.value, value, result.nodes)

            improved = value > best_value if maximizing else value < best_value
            if best_move is None or improved:
                best_move = move
                best_value = value

            if maximizing:
                alpha = max(alpha, best_value)
            else:
                beta = min(beta, best_value)
            if beta <= alpha:
                break

        elapsed_ms = int((time.monotonic() - start) * 1000)
        _log.info(
            "depth=%d elapsed_ms=%d nodes=%d knps=%.1f best=%s value=%s",
            depth + 1,
            elapsed_ms,
            nodes,
            nodes / max(1, elapsed_ms),
            best_move,
            best_value if best_move is not None else None,
        )

        return RootResult(
            move=best_move,
            value=best_value if best_move is not None else 0,
            nodes=nodes,
            depth=depth,
            elapsed_ms=elapsed_ms,
            candidates=tuple(candidates),
        )
