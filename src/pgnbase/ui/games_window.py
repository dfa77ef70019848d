"""GamesWindow — main window listing the games of one database."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QFileDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
    QStatusBar,
    QTableView,
    QWidget,
)

from pgnbase.db.importer import ImportMode
from pgnbase.db.store import load_games
from pgnbase.errors import StorageError
from pgnbase.sorting import SortOrder
from pgnbase.ui.dialogs.import_dialog import ImportDialog
from pgnbase.ui.games_model import GamesTableModel
from pgnbase.ui.i18n import t


class GamesWindow(QMainWindow):
    """Game list with a database menu and click-to-sort column headers."""

    def __init__(
        self,
        parent: QWidget | None = None,
        *,
        import_dialog_cls: type[Any] = ImportDialog,
        file_dialog_cls: type[Any] = QFileDialog,
        message_box_cls: type[Any] = QMessageBox,
    ) -> None:
        super().__init__(parent)
        self._import_dialog_cls = import_dialog_cls
        self._file_dialog_cls = file_dialog_cls
        self._message_box_cls = message_box_cls
        self._database_path: Path | None = None

        self._model = GamesTableModel(self)
        self._setup_ui()
        self._setup_menu()
        self.retranslate_ui()
        self.resize(1100, 640)

    def _setup_ui(self) -> None:
        self._table = QTableView()
        self._table.setModel(self._model)
        self._table.setAlternatingRowColors(True)
        self._table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self._table.verticalHeader().setVisible(False)
        header = self._table.horizontalHeader()
        header.setSectionsClickable(True)
        header.setStretchLastSection(True)
        header.sectionClicked.connect(self._on_header_clicked)
        self.setCentralWidget(self._table)

        self._status = QStatusBar()
        self.setStatusBar(self._status)
        self._status_label = QLabel()
        self._status.addWidget(self._status_label)

    def _setup_menu(self) -> None:
        menu_bar = self.menuBar()
        assert menu_bar is not None
        self._menu_database = menu_bar.addMenu("")
        assert self._menu_database is not None

        self._act_open = QAction(self)
        self._act_open.setShortcut("Ctrl+O")
        self._act_open.triggered.connect(self._on_open_database)
        self._menu_database.addAction(self._act_open)

        self._act_create = QAction(self)
        self._act_create.triggered.connect(
            lambda: self._on_import(ImportMode.CREATE)
        )
        self._menu_database.addAction(self._act_create)

        self._act_append = QAction(self)
        self._act_append.triggered.connect(
            lambda: self._on_import(ImportMode.APPEND)
        )
        self._menu_database.addAction(self._act_append)

        self._menu_database.addSeparator()
        self._act_quit = QAction(self)
        self._act_quit.setShortcut("Ctrl+Q")
        self._act_quit.triggered.connect(self.close)
        self._menu_database.addAction(self._act_quit)

    def retranslate_ui(self) -> None:
        s = t()
        self.setWindowTitle(
            s.window_title
            if self._database_path is None
            else f"{s.window_title} - {self._database_path.name}"
        )
        self._menu_database.setTitle(s.menu_database)
        self._act_open.setText(s.menu_open_database)
        self._act_create.setText(s.menu_create_database)
        self._act_append.setText(s.menu_append_games)
        self._act_quit.setText(s.menu_quit)
        self._status_label.setText(s.status_ready)
        self._model.retranslate_ui()

    @property
    def model(self) -> GamesTableModel:
        return self._model

    @property
    def database_path(self) -> Path | None:
        return self._database_path

    def open_database(self, path: Path) -> bool:
        """Load every game of the database at *path* into the list."""
        try:
            games = load_games(path)
        except StorageError as exc:
            self._message_box_cls.warning(
                self,
                t().open_database_title,
                t().open_database_failed.format(exc=exc),
            )
            return False
        self._database_path = path
        self._model.set_games(games)
        self._table.horizontalHeader().setSortIndicatorShown(False)
        self.retranslate_ui()
        self._status_label.setText(
            t().status_loaded.format(count=len(games), name=path.name)
        )
        return True

    # ── Slots ────────────────────────────────────────────────────────────

    def _on_open_database(self) -> None:
        file_path, _ = self._file_dialog_cls.getOpenFileName(
            self, t().open_database_title, "", t().database_filter
        )
        if file_path:
            self.open_database(Path(file_path))

    def _on_import(self, mode: ImportMode) -> None:
        dlg = self._import_dialog_cls(mode, self)
        if mode == ImportMode.APPEND and self._database_path is not None:
            dlg.set_database_path(self._database_path)
        if dlg.exec() and dlg.succeeded:
            path = dlg.database_path()
            if path is not None:
                self.open_database(path)

    def _on_header_clicked(self, section: int) -> None:
        order = self._model.sort_by_column(section)
        header = self._table.horizontalHeader()
        if order is None:
            return
        if order == SortOrder.POPULARITY:
            header.setSortIndicatorShown(False)
            self._status_label.setText(t().status_sorted_popularity)
            return
        header.setSortIndicatorShown(True)
        header.setSortIndicator(
            section,
            Qt.SortOrder.DescendingOrder
            if order == SortOrder.DESCENDING
            else Qt.SortOrder.AscendingOrder,
        )
