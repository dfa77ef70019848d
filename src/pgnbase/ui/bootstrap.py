"""Qt application bootstrap helpers."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

_LOGGER = logging.getLogger(__name__)


def _configure_application(app: QApplication) -> None:
    """Apply app-wide settings."""
    app.setApplicationName("pgnbase")
    app.setStyle("Fusion")


def run_application(argv: list[str] | None = None) -> int:
    """Create and run the main Qt application.

    A database path given as the first argument is opened on start.
    """
    from PyQt6.QtWidgets import QApplication

    from pgnbase.ui.games_window import GamesWindow

    args = sys.argv if argv is None else argv
    app = QApplication(args)
    _configure_application(app)

    window = GamesWindow()
    if len(args) > 1:
        database = Path(args[1])
        if database.is_file():
            window.open_database(database)
        else:
            _LOGGER.warning("Database not found: %s", database)
    window.show()

    return app.exec()
