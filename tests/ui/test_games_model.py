"""Tests for the game list table model."""

from __future__ import annotations

from PyQt6.QtCore import Qt

from pgnbase.core.encoding import encode_moves
from pgnbase.core.records import GameRecord
from pgnbase.sorting import GameColumn, SortOrder
from pgnbase.ui.games_model import GamesTableModel, moves_preview
from pgnbase.ui.i18n import set_language


def _games() -> list[GameRecord]:
    return [
        GameRecord(1, white="Carlsen", white_elo=2850, moves=encode_moves(["e4", "c5"])),
        GameRecord(2, white="anand", moves=encode_moves(["d4", "d5"])),
        GameRecord(3, white="Botvinnik", moves=encode_moves(["d4", "d5"])),
    ]


def test_moves_preview_numbers_moves() -> None:
    blob = encode_moves(["e4", "e5", "Nf3"])
    assert moves_preview(blob) == "1.e4 e5 2.Nf3"


def test_moves_preview_truncates_long_games() -> None:
    blob = encode_moves(["Nf3", "Nf6", "Ng1", "Ng8"] * 3)
    assert moves_preview(blob, max_plies=4) == "1.Nf3 Nf6 2.Ng1 Ng8 ..."


def test_moves_preview_of_damaged_blob() -> None:
    assert moves_preview(b"\x00\x1c") == "?"


def test_model_exposes_rows_and_columns() -> None:
    model = GamesTableModel()
    model.set_games(_games())

    assert model.rowCount() == 3
    assert model.columnCount() == len(GameColumn)
    assert model.data(model.index(0, GameColumn.WHITE)) == "Carlsen"
    assert model.data(model.index(0, GameColumn.WHITE_ELO)) == "2850"
    assert model.data(model.index(1, GameColumn.WHITE_ELO)) == ""
    assert model.data(model.index(0, GameColumn.MOVES)) == "1.e4 c5"
    assert model.data(model.index(0, GameColumn.RESULT)) == "*"


def test_numeric_columns_are_right_aligned() -> None:
    model = GamesTableModel()
    model.set_games(_games())

    role = Qt.ItemDataRole.TextAlignmentRole
    assert model.data(model.index(0, GameColumn.GAME_ID), role) is not None
    assert model.data(model.index(0, GameColumn.WHITE), role) is None


def test_header_titles_follow_language() -> None:
    model = GamesTableModel()
    horizontal = Qt.Orientation.Horizontal

    assert model.headerData(GameColumn.WHITE, horizontal) == "White"
    set_language("Russian")
    assert model.headerData(GameColumn.WHITE, horizontal) == "Белые"
    assert model.headerData(99, horizontal) is None


def test_sort_by_column_toggles_and_keeps_rows() -> None:
    model = GamesTableModel()
    model.set_games(_games())

    assert model.sort_by_column(GameColumn.WHITE) == SortOrder.ASCENDING
    assert [g.game_id for g in model.games] == [2, 3, 1]
    assert model.sort_by_column(GameColumn.WHITE) == SortOrder.DESCENDING
    assert [g.game_id for g in model.games] == [1, 3, 2]


def test_sort_by_moves_groups_popular_opening() -> None:
    model = GamesTableModel()
    model.set_games(_games())

    assert model.sort_by_column(GameColumn.MOVES) == SortOrder.POPULARITY
    assert [g.game_id for g in model.games] == [2, 3, 1]
    assert model.game_at(0).white == "anand"


def test_sort_on_empty_model_is_noop() -> None:
    model = GamesTableModel()
    assert model.sort_by_column(GameColumn.WHITE) is None
