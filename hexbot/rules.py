"""
Rules engine boundary.

The search never inspects board geometry. Everything it knows about the game
comes through the RulesEngine protocol: the current placement, whose turn it
is, where a piece may go, whether the side to move is in check, and which
cells promote. Position changes happen only through move()/undo(), strictly
stack ordered.

ChessRules adapts python-chess to the protocol. A hexagonal rules engine
implements the same six methods and drops in unchanged.
"""

import io
from contextlib import contextmanager
from typing import Collection, Iterator, Mapping, Protocol, Sequence, runtime_checkable

import chess
import chess.pgn

from hexbot.constants import PROMOTION_KIND
from hexbot.errors import IllegalMoveError, InvalidRecordError
from hexbot.model import Cell, Color, Move, Piece, PieceKind


@runtime_checkable
class RulesEngine(Protocol):
    """Everything the search needs from a game implementation."""

    def board(self) -> Mapping[Cell, Piece | None]:
        """Snapshot of the current placement. Empty cells may map to None."""
        ...

    def turn(self) -> Color:
        ...

    def moves(self, cell: Cell) -> Sequence[Cell]:
        """
        Legal destinations for the piece on `cell`.

        For a piece of the side not to move, the destinations it would have
        were it that side's turn. Empty cells have no destinations.
        """
        ...

    def move(self, move: Move, strict: bool = False) -> None:
        ...

    def undo(self) -> None:
        ...

    def load_pgn(self, record: str | Sequence[str]) -> None:
        ...

    def is_check(self) -> bool:
        """True if the side to move is in check."""
        ...

    def promotion_cells(self, color: Color) -> Collection[Cell]:
        ...


@contextmanager
def played(rules: RulesEngine, move: Move) -> Iterator[None]:
    """
    Apply `move` for the duration of the block and undo it on exit.

    The undo runs even if the block raises, so no caller can leave a
    half-applied position behind for its siblings.
    """
    rules.move(move, strict=True)
    try:
        yield
    finally:
        rules.undo()


def legal_moves(rules: RulesEngine) -> list[Move]:
    """
    All legal moves for the side to move, in cell enumeration order.

    Pawn moves onto the mover's promotion cells are built as queen
    promotions; no other promotion is offered.
    """
    board = rules.board()
    turn = rules.turn()
    promotion_cells = rules.promotion_cells(turn)

    result: list[Move] = []
    for cell, piece in board.items():
        if piece is None or piece.color != turn:
            continue
        promotes = piece.kind == PieceKind.PAWN
        for dest in rules.moves(cell):
            if promotes and dest in promotion_cells:
                result.append(Move(cell, dest, PROMOTION_KIND))
            else:
                result.append(Move(cell, dest))
    return result


# ---------------------------------------------------------------------------
# python-chess adapter
# ---------------------------------------------------------------------------

_COLORS: dict[bool, Color] = {chess.WHITE: Color.LIGHT, chess.BLACK: Color.DARK}

_KINDS: dict[int, PieceKind] = {
    chess.PAWN:   PieceKind.PAWN,
    chess.KNIGHT: PieceKind.KNIGHT,
    chess.BISHOP: PieceKind.BISHOP,
    chess.ROOK:   PieceKind.ROOK,
    chess.QUEEN:  PieceKind.QUEEN,
    chess.KING:   PieceKind.KING,
}
_PIECE_TYPES: dict[PieceKind, int] = {kind: pt for pt, kind in _KINDS.items()}

_PROMOTION_CELLS: dict[Color, frozenset[str]] = {
    Color.LIGHT: frozenset(chess.square_name(chess.square(f, 7)) for f in range(8)),
    Color.DARK:  frozenset(chess.square_name(chess.square(f, 0)) for f in range(8)),
}


def _to_piece(piece: chess.Piece | None) -> Piece | None:
    if piece is None:
        return None
    return Piece(_KINDS[piece.piece_type], _COLORS[piece.color])


class ChessRules:
    """
    RulesEngine over a python-chess Board.

    Cells are square names ("a1" .. "h8"). Records are SAN: either a list of
    tokens (["e4", "e5", "Nf3"]) or PGN text, which is read with chess.pgn.

    Args:
        fen: Starting position. Defaults to the standard starting position.
    """

    def __init__(self, fen: str | None = None) -> None:
        try:
            self._start = chess.Board(fen) if fen else chess.Board()
        except ValueError as exc:
            raise InvalidRecordError(f"Invalid FEN: {exc}") from exc
        self._fen = fen
        self._board = self._start.copy()

    @property
    def chess_board(self) -> chess.Board:
        """The underlying board. Read it, do not push to it."""
        return self._board

    def board(self) -> dict[str, Piece | None]:
        return {
            chess.square_name(sq): _to_piece(self._board.piece_at(sq))
            for sq in chess.SQUARES
        }

    def turn(self) -> Color:
        return _COLORS[self._board.turn]

    def moves(self, cell: str) -> list[str]:
        sq = chess.parse_square(cell)
        piece = self._board.piece_at(sq)
        if piece is None:
            return []

        board = self._board
        if piece.color != board.turn:
            # Pretend it is the other side's turn. En passant rights belong to
            # the real side to move, so drop them.
            board = board.copy(stack=False)
            board.turn = piece.color
            board.ep_square = None

        # Promotions come once per piece type; report each destination once.
        seen: dict[str, None] = {}
        for m in board.generate_legal_moves(from_mask=chess.BB_SQUARES[sq]):
            seen.setdefault(chess.square_name(m.to_square), None)
        return list(seen)

    def move(self, move: Move, strict: bool = False) -> None:
        try:
            native = chess.Move(
                chess.parse_square(move.from_cell),
                chess.parse_square(move.to_cell),
                _PIECE_TYPES[move.promotion] if move.promotion is not None else None,
            )
        except ValueError as exc:
            raise IllegalMoveError(f"Unknown cell in move {move}") from exc

        if strict and not self._board.is_legal(native):
            raise IllegalMoveError(f"Illegal move {move} in {self._board.fen()}")
        self._board.push(native)

    def undo(self) -> None:
        self._board.pop()

    def load_pgn(self, record: str | Sequence[str] = ()) -> None:
        """
        Reset to the starting position and replay `record`.

        Raises:
            InvalidRecordError: if the record does not parse or a move in it
                is illegal. The position is left at the starting position.
        """
        self._board = self._start.copy()
        if isinstance(record, str):
            board = self._read_pgn_text(record)
        else:
            board = self._start.copy()
            for token in record:
                try:
                    board.push_san(token)
                except ValueError as exc:
                    raise InvalidRecordError(f"Bad move {token!r}: {exc}") from exc
        self._board = board

    def is_check(self) -> bool:
        return self._board.is_check()

    def promotion_cells(self, color: Color) -> frozenset[str]:
        return _PROMOTION_CELLS[color]

    def _read_pgn_text(self, text: str) -> chess.Board:
        if not text.strip():
            return self._start.copy()
        if self._fen and "[FEN " not in text:
            text = f'[SetUp "1"]\n[FEN "{self._fen}"]\n\n{text}'

        game = chess.pgn.read_game(io.StringIO(text))
        if game is None:
            return self._start.copy()
        if game.errors:
            raise InvalidRecordError(f"Invalid record: {game.errors[0]}")
        return game.end().board()
