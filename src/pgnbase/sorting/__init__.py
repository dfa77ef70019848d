"""Game list ordering: popularity clustering and column sorting."""

from pgnbase.sorting.columns import (
    GAME_SORT_KEYS,
    ColumnSorter,
    GameColumn,
    SortOrder,
    SortState,
    game_column_sorter,
)
from pgnbase.sorting.popularity import (
    ClusterElement,
    build_elements,
    count_runs,
    popularity_order,
    popularity_sort,
    tokenize,
)

__all__ = [
    "GAME_SORT_KEYS",
    "ClusterElement",
    "ColumnSorter",
    "GameColumn",
    "SortOrder",
    "SortState",
    "build_elements",
    "count_runs",
    "game_column_sorter",
    "popularity_order",
    "popularity_sort",
    "tokenize",
]
