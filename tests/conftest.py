"""Shared fixtures: rules engines set up from FEN."""

import pytest

from hexbot.rules import ChessRules


@pytest.fixture
def rules_at():
    """Factory: a ChessRules engine starting from the given FEN."""

    def _make(fen: str | None = None) -> ChessRules:
        return ChessRules(fen)

    return _make
