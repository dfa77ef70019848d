"""Core domain layer: game records, move encoding and PGN notation.

Quick start::

    from pgnbase.core import encode_moves, parse_pgn_game

    game = parse_pgn_game(pgn_text)
    blob = encode_moves(game.sans)
"""

from pgnbase.core.encoding import (
    PLY_WIDTH,
    decode_move,
    decode_moves,
    encode_move,
    encode_moves,
    ply_count,
)
from pgnbase.core.notation import (
    ParsedGame,
    build_pgn,
    iter_pgn_games,
    parse_pgn_game,
)
from pgnbase.core.records import GameRecord, game_record_from_headers

__all__ = [
    "PLY_WIDTH",
    "GameRecord",
    "ParsedGame",
    "build_pgn",
    "decode_move",
    "decode_moves",
    "encode_move",
    "encode_moves",
    "game_record_from_headers",
    "iter_pgn_games",
    "parse_pgn_game",
    "ply_count",
]
