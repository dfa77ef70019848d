"""Notation package: PGN splitting, parsing and serialization."""

from pgnbase.core.notation.models import ParsedGame
from pgnbase.core.notation.pgn import (
    PGN_RESULT_TOKENS,
    PgnGameSplitter,
    build_pgn,
    iter_pgn_games,
    parse_movetext,
    parse_pgn_game,
    pgn_movetext,
)

__all__ = [
    "PGN_RESULT_TOKENS",
    "ParsedGame",
    "PgnGameSplitter",
    "build_pgn",
    "iter_pgn_games",
    "parse_movetext",
    "parse_pgn_game",
    "pgn_movetext",
]
