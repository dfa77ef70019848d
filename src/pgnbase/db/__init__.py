"""Storage layer: SQLite game store, streaming PGN reader and bulk importer.

Quick start::

    from pgnbase.db import BulkImporter, ImportJob, ImportMode

    importer = BulkImporter()
    job = ImportJob(Path("games.pgnbase"), [Path("a.pgn")], ImportMode.CREATE)
    if not importer.run(job):
        print(importer.last_error)
"""

from pgnbase.db.importer import (
    BulkImporter,
    ImportJob,
    ImportMode,
    ImportProgress,
    validate_job,
)
from pgnbase.db.reader import GameSink, PgnReader, ReadOutcome, ReadStatus
from pgnbase.db.store import GameStore, load_games

__all__ = [
    "BulkImporter",
    "GameSink",
    "GameStore",
    "ImportJob",
    "ImportMode",
    "ImportProgress",
    "PgnReader",
    "ReadOutcome",
    "ReadStatus",
    "load_games",
    "validate_job",
]
