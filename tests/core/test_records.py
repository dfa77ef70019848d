"""Tests for GameRecord construction from PGN headers."""

from __future__ import annotations

import pytest

from pgnbase.core.records import GameRecord, game_record_from_headers


def test_headers_map_to_fields() -> None:
    headers = {
        "Event": "Linares",
        "Site": "Linares ESP",
        "Date": "1994.02.25",
        "Round": "3",
        "White": "Karpov",
        "Black": "Topalov",
        "ECO": "B40",
        "WhiteElo": "2740",
        "BlackElo": " 2640 ",
    }

    record = game_record_from_headers(headers, b"\x00\x1c\x00", 1, "1-0", game_id=7)

    assert record.game_id == 7
    assert record.white == "Karpov"
    assert record.event == "Linares"
    assert record.round == "3"
    assert record.eco == "B40"
    assert record.white_elo == 2740
    assert record.black_elo == 2640
    assert record.result == "1-0"
    assert record.ply_count == 1


def test_missing_or_bad_elo_is_zero() -> None:
    record = game_record_from_headers({"WhiteElo": "?", "BlackElo": "-5"}, b"", 0, "*")
    assert record.white_elo == 0
    assert record.black_elo == 0
    assert record.white == ""


def test_record_is_frozen() -> None:
    record = GameRecord(1)
    with pytest.raises(AttributeError):
        record.white = "x"  # type: ignore[misc]
