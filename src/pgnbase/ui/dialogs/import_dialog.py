"""ImportDialog — create a database or add games to an existing one."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from pgnbase.db.importer import BulkImporter, ImportJob, ImportMode
from pgnbase.ui.i18n import t
from pgnbase.ui.progress import ImportProgressDialog

ProgressDialogFactory = Callable[[ImportMode, QWidget], Any]


class ImportDialog(QDialog):
    """Collects a database path and PGN files, then runs the import."""

    def __init__(
        self,
        mode: ImportMode,
        parent: QWidget | None = None,
        *,
        importer: BulkImporter | None = None,
        file_dialog_cls: type[Any] = QFileDialog,
        message_box_cls: type[Any] = QMessageBox,
        progress_dialog_factory: ProgressDialogFactory = ImportProgressDialog,
    ) -> None:
        super().__init__(parent)
        self.setModal(True)
        self.setMinimumWidth(480)
        self.setWindowFlags(
            self.windowFlags() & ~Qt.WindowType.WindowContextHelpButtonHint
        )

        self._mode = mode
        self._importer = importer or BulkImporter()
        self._file_dialog_cls = file_dialog_cls
        self._message_box_cls = message_box_cls
        self._progress_dialog_factory = progress_dialog_factory
        self._succeeded = False

        self._setup_ui()
        self.retranslate_ui()

    def _setup_ui(self) -> None:
        main = QVBoxLayout(self)

        self._description = QLabel()
        self._description.setWordWrap(True)
        main.addWidget(self._description)

        self._db_label = QLabel()
        main.addWidget(self._db_label)
        db_row = QHBoxLayout()
        self._db_edit = QLineEdit()
        db_row.addWidget(self._db_edit, stretch=1)
        self._db_browse = QPushButton()
        self._db_browse.clicked.connect(self._on_browse_database)
        db_row.addWidget(self._db_browse)
        main.addLayout(db_row)

        self._pgn_label = QLabel()
        main.addWidget(self._pgn_label)
        self._pgn_list = QListWidget()
        self._pgn_list.setSelectionMode(QListWidget.SelectionMode.ExtendedSelection)
        main.addWidget(self._pgn_list, stretch=1)

        pgn_buttons = QHBoxLayout()
        pgn_buttons.addStretch()
        self._add_btn = QPushButton()
        self._add_btn.clicked.connect(self._on_add_pgn_files)
        pgn_buttons.addWidget(self._add_btn)
        self._remove_btn = QPushButton()
        self._remove_btn.clicked.connect(self._on_remove_selected)
        pgn_buttons.addWidget(self._remove_btn)
        main.addLayout(pgn_buttons)

        self._buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        self._buttons.accepted.connect(self._on_ok)
        self._buttons.rejected.connect(self.reject)
        main.addWidget(self._buttons)

    def retranslate_ui(self) -> None:
        s = t()
        create = self._mode == ImportMode.CREATE
        self.setWindowTitle(s.create_title if create else s.append_title)
        self._description.setText(
            s.create_description if create else s.append_description
        )
        self._db_label.setText(
            s.database_file_new if create else s.database_file_existing
        )
        self._db_browse.setText(s.browse)
        self._pgn_label.setText(s.pgn_files_label)
        self._add_btn.setText(s.add_files)
        self._remove_btn.setText(s.remove_file)

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def mode(self) -> ImportMode:
        return self._mode

    @property
    def succeeded(self) -> bool:
        """True once an import finished successfully."""
        return self._succeeded

    @property
    def games_added(self) -> int:
        return self._importer.games_added

    @property
    def last_error(self) -> str:
        return self._importer.last_error

    def database_path(self) -> Path | None:
        text = self._db_edit.text().strip()
        return Path(text) if text else None

    def set_database_path(self, path: Path | str) -> None:
        self._db_edit.setText(str(path))

    def pgn_paths(self) -> list[Path]:
        return [
            Path(item.text())
            for row in range(self._pgn_list.count())
            if (item := self._pgn_list.item(row)) is not None
        ]

    def add_pgn_files(self, paths: Iterable[Path | str]) -> None:
        existing = {str(path) for path in self.pgn_paths()}
        for path in paths:
            text = str(path)
            if text and text not in existing:
                self._pgn_list.addItem(text)
                existing.add(text)

    # ── Slots ────────────────────────────────────────────────────────────

    def _on_browse_database(self) -> None:
        s = t()
        if self._mode == ImportMode.CREATE:
            file_path, _ = self._file_dialog_cls.getSaveFileName(
                self, s.create_title, "", s.database_filter
            )
        else:
            file_path, _ = self._file_dialog_cls.getOpenFileName(
                self, s.append_title, "", s.database_filter
            )
        if file_path:
            self.set_database_path(file_path)

    def _on_add_pgn_files(self) -> None:
        s = t()
        file_paths, _ = self._file_dialog_cls.getOpenFileNames(
            self, s.pgn_files_label, "", s.pgn_filter
        )
        self.add_pgn_files(file_paths)

    def _on_remove_selected(self) -> None:
        for item in self._pgn_list.selectedItems():
            self._pgn_list.takeItem(self._pgn_list.row(item))

    def _on_ok(self) -> None:
        if self.run_import():
            self.accept()
            return
        s = t()
        self._message_box_cls.critical(
            self,
            s.create_failed_title
            if self._mode == ImportMode.CREATE
            else s.append_failed_title,
            self._importer.last_error,
        )

    def run_import(self) -> bool:
        """Run the import with a progress dialog; return the success flag."""
        job = ImportJob(
            target=self.database_path(),
            sources=self.pgn_paths(),
            mode=self._mode,
        )
        progress = self._progress_dialog_factory(self._mode, self)
        try:
            self._succeeded = self._importer.run(
                job,
                is_cancelled=progress.is_cancelled,
                on_progress=progress.on_progress,
            )
        finally:
            progress.close()
        return self._succeeded
