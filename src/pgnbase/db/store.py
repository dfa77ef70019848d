"""SQLite-backed game store with explicit transaction control."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from pgnbase.core.records import GameRecord
from pgnbase.errors import StorageError
from pgnbase.settings import ImportSettings

_LOGGER = logging.getLogger(__name__)

SCHEMA_VERSION = 1

_GAME_COLUMNS = (
    "game_id",
    "white",
    "black",
    "event",
    "site",
    "round",
    "date",
    "result",
    "eco",
    "white_elo",
    "black_elo",
    "moves",
    "ply_count",
)

_SCHEMA = (
    """
    CREATE TABLE games (
        game_id   INTEGER PRIMARY KEY,
        white     TEXT NOT NULL DEFAULT '',
        black     TEXT NOT NULL DEFAULT '',
        event     TEXT NOT NULL DEFAULT '',
        site      TEXT NOT NULL DEFAULT '',
        round     TEXT NOT NULL DEFAULT '',
        date      TEXT NOT NULL DEFAULT '',
        result    TEXT NOT NULL DEFAULT '*',
        eco       TEXT NOT NULL DEFAULT '',
        white_elo INTEGER NOT NULL DEFAULT 0,
        black_elo INTEGER NOT NULL DEFAULT 0,
        moves     BLOB NOT NULL,
        ply_count INTEGER NOT NULL DEFAULT 0
    )
    """,
    "CREATE TABLE description (key TEXT PRIMARY KEY, value TEXT NOT NULL)",
)

_INDEXES = {
    "idx_games_white": "white",
    "idx_games_black": "black",
    "idx_games_event": "event",
    "idx_games_eco": "eco",
    "idx_games_moves": "moves",
}

_INSERT_SQL = (
    f"INSERT INTO games ({', '.join(_GAME_COLUMNS)}) "
    f"VALUES ({', '.join('?' for _ in _GAME_COLUMNS)})"
)


@contextmanager
def _sqlite_errors(action: str) -> Iterator[None]:
    try:
        yield
    except sqlite3.Error as exc:
        raise StorageError(f"Cannot {action}: {exc}") from exc


def _row(record: GameRecord) -> tuple[object, ...]:
    return tuple(getattr(record, column) for column in _GAME_COLUMNS)


class GameStore:
    """Owns one SQLite connection and a buffer of pending inserts.

    The connection runs in autocommit mode; transactions and savepoints are
    issued explicitly so one transaction can span a whole multi-file import.
    """

    __slots__ = ("_settings", "_conn", "_path", "_pending")

    def __init__(self, settings: ImportSettings | None = None) -> None:
        self._settings = settings or ImportSettings()
        self._conn: sqlite3.Connection | None = None
        self._path: Path | None = None
        self._pending: list[tuple[object, ...]] = []

    # ── Connection ───────────────────────────────────────────────────────

    def open(self, path: Path, *, create_new: bool) -> None:
        """Create a new store at *path*, or open an existing one read-write."""
        if self._conn is not None:
            raise StorageError("Store is already open")
        if create_new:
            if path.exists():
                raise StorageError(f"Database file {path} already exists")
            target = str(path)
            uri = False
        else:
            if not path.is_file():
                raise StorageError(f"Database file {path} doesn't exist")
            target = f"{path.resolve().as_uri()}?mode=rw"
            uri = True

        with _sqlite_errors(f"open {path}"):
            self._conn = sqlite3.connect(target, uri=uri, isolation_level=None)
        self._path = path
        _LOGGER.debug("Opened game store %s (create_new=%s)", path, create_new)

    def close(self) -> None:
        """Close the connection; an open transaction is rolled back."""
        if self._conn is None:
            return
        self._pending.clear()
        try:
            if self._conn.in_transaction:
                _LOGGER.warning("Closing %s with an open transaction", self._path)
                self._conn.rollback()
        finally:
            self._conn.close()
            self._conn = None
            _LOGGER.debug("Closed game store %s", self._path)

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageError("Store is not open")
        return self._conn

    # ── Transactions ─────────────────────────────────────────────────────

    def begin_transaction(self) -> None:
        with _sqlite_errors("begin transaction"):
            self._connection().execute("BEGIN IMMEDIATE")

    def end_transaction(self) -> None:
        """Flush pending inserts and commit."""
        self.flush()
        with _sqlite_errors("commit transaction"):
            self._connection().execute("COMMIT")

    def rollback(self) -> None:
        self._pending.clear()
        conn = self._connection()
        if conn.in_transaction:
            with _sqlite_errors("roll back transaction"):
                conn.execute("ROLLBACK")

    def savepoint(self, name: str) -> None:
        with _sqlite_errors(f"create savepoint {name}"):
            self._connection().execute(f'SAVEPOINT "{name}"')

    def release_savepoint(self, name: str) -> None:
        self.flush()
        with _sqlite_errors(f"release savepoint {name}"):
            self._connection().execute(f'RELEASE SAVEPOINT "{name}"')

    def rollback_to_savepoint(self, name: str) -> None:
        """Discard everything written since :meth:`savepoint` *name*."""
        self._pending.clear()
        conn = self._connection()
        with _sqlite_errors(f"roll back to savepoint {name}"):
            conn.execute(f'ROLLBACK TO SAVEPOINT "{name}"')
            conn.execute(f'RELEASE SAVEPOINT "{name}"')

    # ── Schema ───────────────────────────────────────────────────────────

    def create_schema(self) -> None:
        conn = self._connection()
        with _sqlite_errors("create schema"):
            for statement in _SCHEMA:
                conn.execute(statement)
            conn.execute(
                "INSERT INTO description (key, value) VALUES ('schema_version', ?)",
                (str(SCHEMA_VERSION),),
            )

    def create_indexes(self) -> None:
        conn = self._connection()
        with _sqlite_errors("create indexes"):
            for name, column in _INDEXES.items():
                conn.execute(f"CREATE INDEX IF NOT EXISTS {name} ON games ({column})")

    # ── Games ────────────────────────────────────────────────────────────

    def count_games(self) -> int:
        with _sqlite_errors("count games"):
            row = self._connection().execute("SELECT COUNT(*) FROM games").fetchone()
        return int(row[0])

    def add_game(self, record: GameRecord) -> None:
        """Buffer one game; buffered games are written in batches."""
        self._connection()
        self._pending.append(_row(record))
        if len(self._pending) >= self._settings.insert_batch_size:
            self.flush()

    def flush(self) -> None:
        """Write all buffered games."""
        if not self._pending:
            return
        rows, self._pending = self._pending, []
        with _sqlite_errors("write games"):
            self._connection().executemany(_INSERT_SQL, rows)
        _LOGGER.debug("Flushed %d games to %s", len(rows), self._path)

    def load_games(self) -> list[GameRecord]:
        """Return every stored game ordered by id."""
        with _sqlite_errors("load games"):
            rows = self._connection().execute(
                f"SELECT {', '.join(_GAME_COLUMNS)} FROM games ORDER BY game_id"
            )
            return [
                GameRecord(**dict(zip(_GAME_COLUMNS, row, strict=True)))
                for row in rows
            ]


def load_games(path: Path) -> list[GameRecord]:
    """Read all games from the store at *path*."""
    store = GameStore()
    store.open(path, create_new=False)
    try:
        return store.load_games()
    finally:
        store.close()
