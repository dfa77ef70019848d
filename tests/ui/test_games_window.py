"""Tests for the main game list window."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from pgnbase.db.importer import BulkImporter, ImportJob, ImportMode
from pgnbase.sorting import GameColumn
from pgnbase.ui.games_window import GamesWindow

WritePgn = Callable[..., Path]


class _WarningBox:
    shown: list[tuple[str, str]] = []

    @classmethod
    def warning(cls, _parent: object, title: str, text: str) -> None:
        cls.shown.append((title, text))


def _database(tmp_path: Path, write_pgn: WritePgn) -> Path:
    target = tmp_path / "games.pgnbase"
    source = write_pgn("a.pgn", ["e4", "c5"], ["d4", "d5"], ["d4", "d5", "c4"])
    assert BulkImporter().run(ImportJob(target, [source], ImportMode.CREATE))
    return target


def test_open_database_fills_model(tmp_path: Path, write_pgn: WritePgn) -> None:
    target = _database(tmp_path, write_pgn)
    window = GamesWindow()

    assert window.open_database(target) is True

    assert window.model.rowCount() == 3
    assert window.database_path == target
    assert window.windowTitle() == "pgnbase - games.pgnbase"
    assert window._status_label.text() == "Loaded 3 games from games.pgnbase"


def test_open_database_failure_warns(tmp_path: Path) -> None:
    broken = tmp_path / "broken.pgnbase"
    broken.write_text("not a database at all, just some text" * 10, encoding="utf-8")
    _WarningBox.shown = []
    window = GamesWindow(message_box_cls=_WarningBox)

    assert window.open_database(broken) is False

    assert window.database_path is None
    assert len(_WarningBox.shown) == 1
    assert _WarningBox.shown[0][0] == "Open database"


def test_header_click_on_moves_runs_popularity(
    tmp_path: Path, write_pgn: WritePgn
) -> None:
    window = GamesWindow()
    window.open_database(_database(tmp_path, write_pgn))

    window._on_header_clicked(GameColumn.MOVES)

    assert [g.game_id for g in window.model.games] == [2, 3, 1]
    assert window._status_label.text() == "Sorted by opening popularity"


def test_header_click_on_text_column_sets_indicator(
    tmp_path: Path, write_pgn: WritePgn
) -> None:
    window = GamesWindow()
    window.open_database(_database(tmp_path, write_pgn))
    header = window._table.horizontalHeader()

    window._on_header_clicked(GameColumn.GAME_ID)
    window._on_header_clicked(GameColumn.GAME_ID)

    assert header.isSortIndicatorShown()
    assert header.sortIndicatorSection() == GameColumn.GAME_ID
    assert [g.game_id for g in window.model.games] == [3, 2, 1]


def test_append_prefills_current_database_and_reloads(
    tmp_path: Path, write_pgn: WritePgn
) -> None:
    target = _database(tmp_path, write_pgn)
    created: list[Any] = []

    class _StubDialog:
        def __init__(self, mode: ImportMode, _parent: object) -> None:
            self.mode = mode
            self.path: Path | None = None
            self.succeeded = True
            created.append(self)

        def set_database_path(self, path: Path) -> None:
            self.path = path

        def database_path(self) -> Path | None:
            return self.path

        def exec(self) -> int:
            return 1

    window = GamesWindow(import_dialog_cls=_StubDialog)
    window.open_database(target)

    window._on_import(ImportMode.APPEND)

    assert created[0].mode == ImportMode.APPEND
    assert created[0].path == target
    assert window.model.rowCount() == 3
