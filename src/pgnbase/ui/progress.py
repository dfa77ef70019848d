"""Modal progress dialog driving the import progress/cancel callbacks."""

from __future__ import annotations

from PyQt6.QtCore import QCoreApplication, Qt
from PyQt6.QtWidgets import QProgressDialog, QWidget

from pgnbase.db.importer import ImportMode, ImportProgress
from pgnbase.ui.i18n import t

_SCALE = 1000


class ImportProgressDialog(QProgressDialog):
    """Shows per-file progress; its Cancel button aborts the import."""

    def __init__(self, mode: ImportMode, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        s = t()
        self.setWindowTitle(
            s.progress_create_title
            if mode == ImportMode.CREATE
            else s.progress_append_title
        )
        self.setCancelButtonText(s.cancel)
        self.setRange(0, _SCALE)
        self.setMinimumDuration(0)
        self.setAutoClose(False)
        self.setAutoReset(False)
        self.setWindowModality(Qt.WindowModality.WindowModal)
        self._file_index = -1

    def on_progress(self, progress: ImportProgress) -> None:
        if progress.file_index != self._file_index:
            self._file_index = progress.file_index
            self.setLabelText(
                t().progress_reading_file.format(
                    number=progress.file_index + 1,
                    count=progress.file_count,
                )
            )
        self.setValue(int(progress.fraction * _SCALE))
        # Let a click on Cancel land before the next chunk is read
        QCoreApplication.processEvents()

    def is_cancelled(self) -> bool:
        return self.wasCanceled()
