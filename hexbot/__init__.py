"""
Hexbot: move selection for hexagonal-board chess variants.

Fixed-depth minimax with alpha-beta pruning over any rules engine that
implements hexbot.rules.RulesEngine.

Modules:
    constants: Piece values, special scores, search bounds
    model: Color, PieceKind, Piece, Move
    config: SearchConfig and the perspective choice
    errors: Exception hierarchy
    rules: RulesEngine protocol, apply/undo guard, python-chess adapter
    evaluate: Static material evaluation
    ordering: MVV-LVA move ordering
    search: Minimax, king-safety penalty, root move selection (Bot)
"""
