"""Click-to-sort dispatch for game list columns."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import Any, Generic, TypeVar

from pgnbase.core.records import GameRecord
from pgnbase.sorting.popularity import popularity_sort

T = TypeVar("T")
SortKey = Callable[[T], Any]


class GameColumn(IntEnum):
    """Columns of the game list view."""

    GAME_ID = 0
    WHITE = 1
    WHITE_ELO = 2
    BLACK = 3
    BLACK_ELO = 4
    DATE = 5
    EVENT = 6
    SITE = 7
    ROUND = 8
    RESULT = 9
    MOVES = 10
    ECO = 11


class SortOrder(StrEnum):
    ASCENDING = "ascending"
    DESCENDING = "descending"
    POPULARITY = "popularity"


@dataclass(slots=True)
class SortState:
    """Last clicked column and how many times in a row it was clicked."""

    last_column: int | None = None
    consecutive: int = 0

    def click(self, column: int) -> int:
        if column == self.last_column:
            self.consecutive += 1
        else:
            self.consecutive = 0
        self.last_column = column
        return self.consecutive


class ColumnSorter(Generic[T]):
    """Sorts a list by the clicked column, toggling direction on repeat clicks.

    The popularity column ignores click parity and always runs the popularity
    sort.
    """

    __slots__ = ("_keys", "_popularity_column", "_popularity", "_state")

    def __init__(
        self,
        keys: Mapping[int, SortKey[T]],
        *,
        popularity_column: int | None = None,
        popularity: Callable[[list[T]], None] = popularity_sort,
    ) -> None:
        self._keys = dict(keys)
        self._popularity_column = popularity_column
        self._popularity = popularity
        self._state = SortState()

    @property
    def state(self) -> SortState:
        return self._state

    @property
    def popularity_column(self) -> int | None:
        return self._popularity_column

    def sort(self, column: int, items: list[T]) -> SortOrder | None:
        """Sort *items* in place for a click on *column*.

        Returns the applied order, or ``None`` when *items* is empty (the
        click is then not recorded).

        Raises:
            KeyError: if *column* has no registered key.
        """
        if column != self._popularity_column and column not in self._keys:
            raise KeyError(f"No sort key registered for column {column}")
        if not items:
            return None

        clicks = self._state.click(column)
        if column == self._popularity_column:
            self._popularity(items)
            return SortOrder.POPULARITY

        descending = clicks % 2 == 1
        items.sort(key=self._keys[column], reverse=descending)
        return SortOrder.DESCENDING if descending else SortOrder.ASCENDING


def _text(value: str) -> str:
    return value.casefold()


GAME_SORT_KEYS: dict[int, SortKey[GameRecord]] = {
    GameColumn.GAME_ID: lambda game: game.game_id,
    GameColumn.WHITE: lambda game: _text(game.white),
    GameColumn.WHITE_ELO: lambda game: game.white_elo,
    GameColumn.BLACK: lambda game: _text(game.black),
    GameColumn.BLACK_ELO: lambda game: game.black_elo,
    GameColumn.DATE: lambda game: game.date,
    GameColumn.EVENT: lambda game: _text(game.event),
    GameColumn.SITE: lambda game: _text(game.site),
    GameColumn.ROUND: lambda game: game.round,
    GameColumn.RESULT: lambda game: game.result,
    GameColumn.ECO: lambda game: game.eco,
}


def game_column_sorter() -> ColumnSorter[GameRecord]:
    """Column sorter for the game list, with MOVES as the popularity column."""
    return ColumnSorter(GAME_SORT_KEYS, popularity_column=GameColumn.MOVES)
