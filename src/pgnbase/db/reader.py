"""Streaming PGN reader that feeds encoded games into a sink."""

from __future__ import annotations

import codecs
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import BinaryIO, Protocol

from pgnbase.core.encoding import encode_moves
from pgnbase.core.notation import PgnGameSplitter, parse_pgn_game
from pgnbase.core.records import GameRecord, game_record_from_headers
from pgnbase.settings import ImportSettings

_LOGGER = logging.getLogger(__name__)

CancelCheck = Callable[[], bool]
ByteProgressCallback = Callable[[int, int], None]


class GameSink(Protocol):
    """Receives every successfully parsed game."""

    def add_game(self, record: GameRecord) -> None: ...


class ReadStatus(StrEnum):
    """How a call to :meth:`PgnReader.process` ended."""

    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class ReadOutcome:
    """Result variant of reading one PGN source."""

    status: ReadStatus
    reason: str = ""
    games_read: int = 0
    games_skipped: int = 0

    @property
    def aborted(self) -> bool:
        return self.status != ReadStatus.COMPLETED


class PgnReader:
    """Reads a PGN byte stream chunk by chunk and hands games to a sink.

    Malformed games are logged and skipped. Cancellation is checked once per
    chunk, so its latency is bounded by ``read_chunk_bytes``.

    Read and decode failures end the file with ``FAILED``. Errors raised by the
    sink, such as a failed store write, propagate to the caller.
    """

    __slots__ = ("_settings",)

    def __init__(self, settings: ImportSettings | None = None) -> None:
        self._settings = settings or ImportSettings()

    def process(
        self,
        stream: BinaryIO,
        total_bytes: int,
        sink: GameSink,
        *,
        is_cancelled: CancelCheck | None = None,
        on_progress: ByteProgressCallback | None = None,
    ) -> ReadOutcome:
        cancelled = is_cancelled or (lambda: False)
        splitter = PgnGameSplitter()
        read = 0
        skipped = 0
        done_bytes = 0

        try:
            for chunk_lines, done_bytes in self._chunks(stream):
                for line in chunk_lines:
                    text = splitter.feed(line)
                    if text:
                        ok = self._emit(text, sink)
                        read += ok
                        skipped += not ok
                if on_progress is not None:
                    on_progress(done_bytes, total_bytes)
                if cancelled():
                    _LOGGER.info("PGN read cancelled after %d bytes", done_bytes)
                    return ReadOutcome(ReadStatus.CANCELLED, "", read, skipped)

            text = splitter.finish()
            if text:
                ok = self._emit(text, sink)
                read += ok
                skipped += not ok
        except (OSError, UnicodeError, LookupError) as exc:
            _LOGGER.warning("PGN read failed after %d bytes: %s", done_bytes, exc)
            return ReadOutcome(ReadStatus.FAILED, str(exc), read, skipped)

        return ReadOutcome(ReadStatus.COMPLETED, "", read, skipped)

    def _chunks(self, stream: BinaryIO) -> Iterator[tuple[list[str], int]]:
        """Yield complete decoded lines per raw chunk, with the byte offset."""
        decoder = codecs.getincrementaldecoder(self._settings.source_encoding)(
            errors=self._settings.decode_errors
        )
        partial = ""
        offset = 0
        while True:
            chunk = stream.read(self._settings.read_chunk_bytes)
            offset += len(chunk)
            text = partial + decoder.decode(chunk, final=not chunk)
            lines = text.splitlines(keepends=True)
            if chunk and lines and not lines[-1].endswith("\n"):
                partial = lines.pop()
            else:
                partial = ""
            yield lines, offset
            if not chunk:
                return

    def _emit(self, text: str, sink: GameSink) -> bool:
        try:
            game = parse_pgn_game(text)
            if game.is_empty:
                return False
            blob = encode_moves(game.sans)
        except ValueError as exc:
            _LOGGER.warning("Skipping malformed PGN game: %s", exc)
            return False
        sink.add_game(
            game_record_from_headers(
                game.headers,
                moves=blob,
                ply_count=len(game.sans),
                result_token=game.result_token,
            )
        )
        return True
