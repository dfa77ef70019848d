"""Transactional multi-file PGN import into a game store."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field, replace
from enum import StrEnum
from pathlib import Path

from pgnbase.core.records import GameRecord
from pgnbase.db.reader import CancelCheck, PgnReader, ReadStatus
from pgnbase.db.store import GameStore
from pgnbase.errors import (
    ParseError,
    PgnBaseError,
    SourceFileError,
    StorageError,
    UserCancelled,
    ValidationError,
)
from pgnbase.settings import ImportSettings

_LOGGER = logging.getLogger(__name__)


class ImportMode(StrEnum):
    """Whether an import builds a new database or extends an existing one."""

    CREATE = "create"
    APPEND = "append"

    @property
    def cancelled_message(self) -> str:
        if self == ImportMode.CREATE:
            return "Database creation cancelled"
        return "Adding games to database cancelled"


@dataclass(slots=True)
class ImportJob:
    """One user request: a target database and an ordered list of PGN files."""

    target: Path | None
    sources: Sequence[Path] = field(default_factory=list)
    mode: ImportMode = ImportMode.CREATE

    def resolved_sources(self) -> list[Path]:
        """Sources that exist as files, in the given order."""
        return [path for path in self.sources if path.is_file()]


@dataclass(slots=True, frozen=True)
class ImportProgress:
    """One progress tick of a running import."""

    file_index: int
    file_count: int
    path: Path
    bytes_done: int
    bytes_total: int

    @property
    def fraction(self) -> float:
        if self.bytes_total <= 0:
            return 1.0
        return min(1.0, self.bytes_done / self.bytes_total)


ImportProgressCallback = Callable[[ImportProgress], None]
StoreFactory = Callable[[ImportSettings], GameStore]


def validate_job(job: ImportJob) -> list[Path]:
    """Check *job* without touching the filesystem beyond existence tests.

    Returns the resolved source files.

    Raises:
        ValidationError: if the target or source selection is unusable.
    """
    sources = job.resolved_sources()
    # Path("") normalises to "."
    if job.target is None or str(job.target).strip() in ("", "."):
        raise ValidationError("No database file specified")
    if job.mode == ImportMode.CREATE:
        if job.target.exists():
            raise ValidationError(f"Database file {job.target} already exists")
    elif not job.target.is_file():
        raise ValidationError(f"Database file {job.target} doesn't exist")
    if not sources:
        raise ValidationError("No usable PGN files specified")
    return sources


class _GameWriter:
    """Sink that numbers games before handing them to the store."""

    __slots__ = ("_store", "_ids", "written")

    def __init__(self, store: GameStore, ids: Iterator[int]) -> None:
        self._store = store
        self._ids = ids
        self.written = 0

    def add_game(self, record: GameRecord) -> None:
        self._store.add_game(replace(record, game_id=next(self._ids)))
        self.written += 1


class BulkImporter:
    """Merges PGN files into a store under a single transaction.

    Every source file runs inside its own savepoint. A failing file is rolled
    back to its savepoint and stops the run, while games merged from earlier
    files are still committed. A failed create-mode run deletes the new
    database file; a failed append-mode run never touches the target file.
    """

    __slots__ = (
        "_settings",
        "_store_factory",
        "_reader",
        "last_error",
        "last_failure",
        "games_added",
    )

    def __init__(
        self,
        settings: ImportSettings | None = None,
        *,
        store_factory: StoreFactory = GameStore,
        reader: PgnReader | None = None,
    ) -> None:
        self._settings = settings or ImportSettings()
        self._store_factory = store_factory
        self._reader = reader or PgnReader(self._settings)
        self.last_error = ""
        self.last_failure: PgnBaseError | None = None
        self.games_added = 0

    def run(
        self,
        job: ImportJob,
        *,
        is_cancelled: CancelCheck | None = None,
        on_progress: ImportProgressCallback | None = None,
    ) -> bool:
        """Run *job*; return ``True`` only if every file was merged."""
        self.last_error = ""
        self.last_failure = None
        self.games_added = 0

        try:
            sources = validate_job(job)
        except ValidationError as exc:
            self._record(exc)
            return False
        assert job.target is not None

        create = job.mode == ImportMode.CREATE
        _LOGGER.info(
            "Importing %d PGN file(s) into %s (%s)", len(sources), job.target, job.mode
        )
        store = self._store_factory(self._settings)
        created = False
        failure: PgnBaseError | None = None
        try:
            store.open(job.target, create_new=create)
            created = create
            store.begin_transaction()
            if create:
                store.create_schema()
            writer = _GameWriter(store, itertools.count(store.count_games() + 1))
            failure = self._import_files(
                store,
                writer,
                sources,
                job.mode,
                is_cancelled=is_cancelled,
                on_progress=on_progress,
            )
            if failure is not None and writer.written == 0:
                # Nothing merged before the failing file: leave the store as it was
                store.rollback()
            else:
                store.end_transaction()
            self.games_added = writer.written
            if failure is None and create:
                store.create_indexes()
        except StorageError as exc:
            failure = failure or exc
        finally:
            store.close()

        if failure is not None:
            self._record(failure)
            if created:
                self._discard(job.target)
            return False

        _LOGGER.info("Committed %d game(s) to %s", self.games_added, job.target)
        return True

    def _import_files(
        self,
        store: GameStore,
        writer: _GameWriter,
        sources: list[Path],
        mode: ImportMode,
        *,
        is_cancelled: CancelCheck | None,
        on_progress: ImportProgressCallback | None,
    ) -> PgnBaseError | None:
        """Merge each file in order; return the failure that stopped the loop."""
        count = len(sources)
        for index, path in enumerate(sources):
            try:
                total = path.stat().st_size
                stream = path.open("rb")
            except OSError as exc:
                _LOGGER.warning("Cannot open %s: %s", path, exc)
                return SourceFileError(f"Cannot open {path}")

            def _progress(done: int, size: int) -> None:
                if on_progress is not None:
                    on_progress(ImportProgress(index, count, path, done, size))

            savepoint = f"file_{index}"
            written_before = writer.written
            with stream:
                store.savepoint(savepoint)
                try:
                    outcome = self._reader.process(
                        stream,
                        total,
                        writer,
                        is_cancelled=is_cancelled,
                        on_progress=_progress,
                    )
                except StorageError as exc:
                    _LOGGER.warning("Cannot store games from %s: %s", path, exc)
                    store.rollback_to_savepoint(savepoint)
                    writer.written = written_before
                    return exc

            if outcome.status == ReadStatus.COMPLETED:
                store.release_savepoint(savepoint)
                _LOGGER.debug(
                    "Merged %s: %d game(s), %d skipped",
                    path,
                    outcome.games_read,
                    outcome.games_skipped,
                )
                continue

            store.rollback_to_savepoint(savepoint)
            writer.written = written_before
            if outcome.status == ReadStatus.CANCELLED:
                return UserCancelled(mode.cancelled_message)
            return ParseError(outcome.reason or mode.cancelled_message)
        return None

    def _record(self, failure: PgnBaseError) -> None:
        self.last_failure = failure
        self.last_error = str(failure)
        _LOGGER.warning("Import failed: %s", self.last_error)

    @staticmethod
    def _discard(target: Path) -> None:
        try:
            target.unlink(missing_ok=True)
        except OSError as exc:
            _LOGGER.warning("Cannot remove incomplete database %s: %s", target, exc)
        else:
            _LOGGER.info("Removed incomplete database %s", target)
