"""Game record model shared by the reader, the store and the game list."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class GameRecord:
    """One stored game: header summary plus the encoded mainline."""

    game_id: int
    white: str = ""
    black: str = ""
    event: str = ""
    site: str = ""
    round: str = ""
    date: str = ""
    result: str = "*"
    eco: str = ""
    white_elo: int = 0
    black_elo: int = 0
    moves: bytes = b""
    ply_count: int = 0


def _elo(value: str | None) -> int:
    if not value:
        return 0
    try:
        return max(0, int(value.strip()))
    except ValueError:
        return 0


def game_record_from_headers(
    headers: dict[str, str],
    moves: bytes,
    ply_count: int,
    result_token: str,
    game_id: int = 0,
) -> GameRecord:
    """Build a :class:`GameRecord` from parsed PGN headers."""
    return GameRecord(
        game_id=game_id,
        white=headers.get("White", ""),
        black=headers.get("Black", ""),
        event=headers.get("Event", ""),
        site=headers.get("Site", ""),
        round=headers.get("Round", ""),
        date=headers.get("Date", ""),
        result=result_token,
        eco=headers.get("ECO", ""),
        white_elo=_elo(headers.get("WhiteElo")),
        black_elo=_elo(headers.get("BlackElo")),
        moves=moves,
        ply_count=ply_count,
    )
