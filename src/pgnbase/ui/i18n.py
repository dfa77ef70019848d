"""Internationalisation strings for the pgnbase UI.

Usage::

    from pgnbase.ui.i18n import t, set_language

    set_language("Russian")
    print(t().menu_database)       # "База"
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Strings:
    # ── Main window ──────────────────────────────────────────────────────
    window_title: str
    menu_database: str
    menu_open_database: str
    menu_create_database: str
    menu_append_games: str
    menu_quit: str

    status_ready: str
    status_loaded: str  # "Loaded {count} games from {name}"
    status_sorted_popularity: str
    open_database_title: str
    open_database_failed: str  # "Failed to open database:\n{exc}"

    # ── Game list columns (GameColumn order) ────────────────────────────
    column_titles: tuple[str, ...]

    # ── Import dialog ────────────────────────────────────────────────────
    create_title: str
    append_title: str
    create_description: str
    append_description: str
    database_file_new: str
    database_file_existing: str
    pgn_files_label: str
    browse: str
    add_files: str
    remove_file: str
    database_filter: str
    pgn_filter: str
    create_failed_title: str
    append_failed_title: str

    # ── Progress dialog ──────────────────────────────────────────────────
    progress_create_title: str
    progress_append_title: str
    progress_reading_file: str  # "Reading file #{number} of {count}"
    cancel: str


_EN = Strings(
    window_title="pgnbase",
    menu_database="&Database",
    menu_open_database="&Open database...",
    menu_create_database="&Create database...",
    menu_append_games="&Add games to database...",
    menu_quit="&Quit",
    status_ready="Ready",
    status_loaded="Loaded {count} games from {name}",
    status_sorted_popularity="Sorted by opening popularity",
    open_database_title="Open database",
    open_database_failed="Failed to open database:\n{exc}",
    column_titles=(
        "#",
        "White",
        "Elo W",
        "Black",
        "Elo B",
        "Date",
        "Event",
        "Site",
        "Round",
        "Result",
        "Moves",
        "ECO",
    ),
    create_title="Create Database",
    append_title="Add Games to Database",
    create_description=(
        "To create a new database from scratch, name the new database and "
        "select one or more .pgn files with the games to go into the database."
    ),
    append_description=(
        "To add games to an existing database, select the database and one or "
        "more .pgn files with the additional games to go into the database."
    ),
    database_file_new="Choose a new database file",
    database_file_existing="Choose an existing database file",
    pgn_files_label="Select one or more .pgn files to add to the database",
    browse="Browse...",
    add_files="Add...",
    remove_file="Remove",
    database_filter="Game databases (*.pgnbase);;All files (*)",
    pgn_filter="PGN files (*.pgn);;All files (*)",
    create_failed_title="Database creation failed",
    append_failed_title="Appending to database failed",
    progress_create_title="Creating database",
    progress_append_title="Adding games to database",
    progress_reading_file="Reading file #{number} of {count}",
    cancel="Cancel",
)

_RU = Strings(
    window_title="pgnbase",
    menu_database="&База",
    menu_open_database="&Открыть базу...",
    menu_create_database="&Создать базу...",
    menu_append_games="&Добавить партии в базу...",
    menu_quit="&Выход",
    status_ready="Готово",
    status_loaded="Загружено партий: {count} из {name}",
    status_sorted_popularity="Отсортировано по популярности дебютов",
    open_database_title="Открыть базу",
    open_database_failed="Не удалось открыть базу:\n{exc}",
    column_titles=(
        "#",
        "Белые",
        "Эло Б",
        "Чёрные",
        "Эло Ч",
        "Дата",
        "Турнир",
        "Место",
        "Тур",
        "Результат",
        "Ходы",
        "ECO",
    ),
    create_title="Создание базы",
    append_title="Добавление партий в базу",
    create_description=(
        "Чтобы создать новую базу, укажите её файл и выберите один или "
        "несколько .pgn файлов с партиями."
    ),
    append_description=(
        "Чтобы добавить партии в существующую базу, выберите базу и один или "
        "несколько .pgn файлов с новыми партиями."
    ),
    database_file_new="Выберите файл новой базы",
    database_file_existing="Выберите существующий файл базы",
    pgn_files_label="Выберите один или несколько .pgn файлов",
    browse="Обзор...",
    add_files="Добавить...",
    remove_file="Удалить",
    database_filter="Базы партий (*.pgnbase);;Все файлы (*)",
    pgn_filter="Файлы PGN (*.pgn);;Все файлы (*)",
    create_failed_title="Не удалось создать базу",
    append_failed_title="Не удалось добавить партии",
    progress_create_title="Создание базы",
    progress_append_title="Добавление партий",
    progress_reading_file="Чтение файла {number} из {count}",
    cancel="Отмена",
)

_LOCALES: dict[str, Strings] = {
    "English": _EN,
    "Russian": _RU,
}

LANGUAGES: list[str] = list(_LOCALES.keys())

_current: Strings = _EN


def t() -> Strings:
    """Return the active locale strings."""
    return _current


def set_language(language: str) -> None:
    """Switch the global locale. Unknown names fall back to English."""
    global _current
    _current = _LOCALES.get(language, _EN)
