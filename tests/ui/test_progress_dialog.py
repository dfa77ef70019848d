"""Tests for the import progress dialog."""

from __future__ import annotations

from pathlib import Path

from pgnbase.db.importer import ImportMode, ImportProgress
from pgnbase.ui.progress import ImportProgressDialog


def test_title_follows_mode() -> None:
    assert ImportProgressDialog(ImportMode.CREATE).windowTitle() == "Creating database"
    assert (
        ImportProgressDialog(ImportMode.APPEND).windowTitle()
        == "Adding games to database"
    )


def test_progress_updates_label_and_value() -> None:
    dialog = ImportProgressDialog(ImportMode.CREATE)

    dialog.on_progress(ImportProgress(1, 3, Path("b.pgn"), 50, 100))

    assert dialog.labelText() == "Reading file #2 of 3"
    assert dialog.value() == 500


def test_cancel_button_requests_cancellation() -> None:
    dialog = ImportProgressDialog(ImportMode.APPEND)
    assert dialog.is_cancelled() is False

    dialog.cancel()

    assert dialog.is_cancelled() is True
