"""Table model for the in-memory game list."""

from __future__ import annotations

from PyQt6.QtCore import QAbstractTableModel, QModelIndex, QObject, Qt

from pgnbase.core.encoding import decode_moves
from pgnbase.core.records import GameRecord
from pgnbase.sorting import GameColumn, SortOrder, game_column_sorter
from pgnbase.ui.i18n import t

_PREVIEW_PLIES = 10
_NUMERIC_COLUMNS = {GameColumn.GAME_ID, GameColumn.WHITE_ELO, GameColumn.BLACK_ELO}


def moves_preview(blob: bytes, max_plies: int = _PREVIEW_PLIES) -> str:
    """Numbered SAN text for the first *max_plies* plies of *blob*."""
    try:
        sans = decode_moves(blob)
    except ValueError:
        return "?"
    parts: list[str] = []
    for ply, san in enumerate(sans[:max_plies]):
        if ply % 2 == 0:
            parts.append(f"{ply // 2 + 1}.{san}")
        else:
            parts.append(san)
    if len(sans) > max_plies:
        parts.append("...")
    return " ".join(parts)


def _display(game: GameRecord, column: GameColumn) -> str:
    if column == GameColumn.GAME_ID:
        return str(game.game_id)
    if column == GameColumn.WHITE_ELO:
        return str(game.white_elo) if game.white_elo else ""
    if column == GameColumn.BLACK_ELO:
        return str(game.black_elo) if game.black_elo else ""
    if column == GameColumn.MOVES:
        return moves_preview(game.moves)
    return str(getattr(game, column.name.lower()))


class GamesTableModel(QAbstractTableModel):
    """Exposes a list of :class:`GameRecord` to a ``QTableView``."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._games: list[GameRecord] = []
        self._sorter = game_column_sorter()

    @property
    def games(self) -> list[GameRecord]:
        return list(self._games)

    def set_games(self, games: list[GameRecord]) -> None:
        self.beginResetModel()
        self._games = list(games)
        self.endResetModel()

    def game_at(self, row: int) -> GameRecord:
        return self._games[row]

    def sort_by_column(self, column: int) -> SortOrder | None:
        """Apply a header click on *column* to the game list."""
        self.layoutAboutToBeChanged.emit()
        try:
            order = self._sorter.sort(column, self._games)
        finally:
            self.layoutChanged.emit()
        return order

    # ── QAbstractTableModel ──────────────────────────────────────────────

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:  # noqa: B008
        return 0 if parent.isValid() else len(self._games)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:  # noqa: B008
        return 0 if parent.isValid() else len(GameColumn)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> object:
        if not index.isValid():
            return None
        column = GameColumn(index.column())
        if role == Qt.ItemDataRole.DisplayRole:
            return _display(self._games[index.row()], column)
        if role == Qt.ItemDataRole.TextAlignmentRole and column in _NUMERIC_COLUMNS:
            return Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
        return None

    def headerData(
        self,
        section: int,
        orientation: Qt.Orientation,
        role: int = Qt.ItemDataRole.DisplayRole,
    ) -> object:
        if role != Qt.ItemDataRole.DisplayRole:
            return None
        if orientation == Qt.Orientation.Horizontal:
            titles = t().column_titles
            return titles[section] if 0 <= section < len(titles) else None
        return str(section + 1)

    def retranslate_ui(self) -> None:
        self.headerDataChanged.emit(
            Qt.Orientation.Horizontal, 0, self.columnCount() - 1
        )
