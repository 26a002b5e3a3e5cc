"""
Engine constants: piece values, special scores, search bounds.

All numeric constants used by the search are defined here so that no module
needs to introduce its own magic numbers.

Values are in whole material units (1 pawn = 1). The king is worth nothing in
material counting; it is never captured, only mated.
"""

from hexbot.model import PieceKind

# ---------------------------------------------------------------------------
# Piece values (material units)
# ---------------------------------------------------------------------------

PAWN_VALUE: int = 1
KNIGHT_VALUE: int = 3
BISHOP_VALUE: int = 3
ROOK_VALUE: int = 5
QUEEN_VALUE: int = 9
KING_VALUE: int = 0

# Used by the evaluator and by MVV-LVA move ordering.
PIECE_VALUES: dict[PieceKind, int] = {
    PieceKind.PAWN:   PAWN_VALUE,
    PieceKind.KNIGHT: KNIGHT_VALUE,
    PieceKind.BISHOP: BISHOP_VALUE,
    PieceKind.ROOK:   ROOK_VALUE,
    PieceKind.QUEEN:  QUEEN_VALUE,
    PieceKind.KING:   KING_VALUE,
}

# Victim weight in the ordering score: 10 * victim - attacker.
VICTIM_WEIGHT: int = 10

# ---------------------------------------------------------------------------
# Special scores
# ---------------------------------------------------------------------------
# Integers only. CHECKMATE_SCORE is far above any reachable material balance.

CHECKMATE_SCORE: int = 10_000
DRAW_SCORE: int = 0  # Stalemate

# Window bound standing in for infinity. Strictly outside every real score.
INF: int = CHECKMATE_SCORE + 1

# ---------------------------------------------------------------------------
# Search parameters
# ---------------------------------------------------------------------------

# Upper bound on requested depth. Recursion depth is depth + 1 frames of
# minimax, far below the interpreter's recursion limit.
MAX_DEPTH: int = 16

# Subtracted from root king moves that neither escape an attack nor capture.
KING_SAFETY_PENALTY: int = 5

# Only promotion the root offers.
PROMOTION_KIND: PieceKind = PieceKind.QUEEN
