"""PGN parsing helpers: game splitting, tag pairs and mainline extraction."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from pgnbase.core.notation.models import ParsedGame

PGN_RESULT_TOKENS = frozenset({"1-0", "0-1", "1/2-1/2", "*"})

_TAG_RE = re.compile(r'^\[(\w+)\s+"((?:[^"\\]|\\.)*)"\]\s*$')
_MOVE_NUMBER_RE = re.compile(r"^\d+\.*$")
_TOKEN_RE = re.compile(r"\{[^}]*\}?|;[^\n]*|[()]|[^\s{}();]+")


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _unescape(value: str) -> str:
    return value.replace('\\"', '"').replace("\\\\", "\\")


def parse_movetext(movetext: str) -> tuple[list[str], str]:
    """Return the SAN mainline and result token from PGN movetext.

    Comments, NAGs and recursive variations are skipped.
    """
    sans: list[str] = []
    result_token = "*"
    depth = 0

    for token in _TOKEN_RE.findall(movetext):
        if token[0] in "{;":
            continue
        if token == "(":
            depth += 1
            continue
        if token == ")":
            depth = max(0, depth - 1)
            continue
        if depth:
            continue
        if token in PGN_RESULT_TOKENS:
            result_token = token
            continue
        if token[0] == "$" or _MOVE_NUMBER_RE.match(token):
            continue

        # "12.e4" and "12...e5" glue the move number to the move
        san = token.rsplit(".", 1)[-1]
        if san:
            sans.append(san)

    return sans, result_token


def parse_pgn_game(pgn_text: str) -> ParsedGame:
    """Parse a single PGN game.

    Raises:
        ValueError: if a tag-pair line is malformed.
    """
    game = ParsedGame()
    movetext: list[str] = []
    in_tags = True

    for raw_line in pgn_text.splitlines():
        line = raw_line.strip()
        if not line:
            if game.headers:
                in_tags = False
            continue
        if line.startswith("%"):
            continue
        if in_tags and line.startswith("["):
            match = _TAG_RE.match(line)
            if match is None:
                raise ValueError(f"Invalid PGN tag line: {line}")
            key, value = match.groups()
            game.headers[key] = _unescape(value)
            continue
        in_tags = False
        movetext.append(line)

    game.sans, game.result_token = parse_movetext("\n".join(movetext))
    header_result = game.headers.get("Result")
    if game.result_token == "*" and header_result in PGN_RESULT_TOKENS:
        game.result_token = header_result
    return game


class PgnGameSplitter:
    """Incrementally cut a stream of PGN lines into per-game text blocks.

    A new game starts at a tag line that follows movetext, or at any line
    after a result token closed the previous game.
    """

    __slots__ = ("_lines", "_seen_movetext", "_closed", "_in_comment")

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._seen_movetext = False
        self._closed = False
        self._in_comment = False

    def feed(self, line: str) -> str | None:
        """Add one line; return the previous game's text when it is complete."""
        stripped = line.strip()
        completed: str | None = None

        if not self._in_comment and stripped and (
            self._closed or (self._seen_movetext and stripped.startswith("["))
        ):
            completed = self._take()

        if not stripped:
            if self._lines:
                self._lines.append("")
            return completed

        self._lines.append(stripped)
        if self._in_comment:
            self._in_comment = "}" not in stripped
            return completed
        if not stripped.startswith("[") and not stripped.startswith("%"):
            self._seen_movetext = True
            self._track_comment(stripped)
            if not self._in_comment:
                last = stripped.split()[-1]
                self._closed = last in PGN_RESULT_TOKENS
        return completed

    def finish(self) -> str | None:
        """Return any trailing game text."""
        if any(self._lines):
            return self._take()
        self._lines.clear()
        return None

    def _track_comment(self, line: str) -> None:
        outside = re.sub(r"\{[^}]*\}", "", line)
        self._in_comment = "{" in outside

    def _take(self) -> str:
        text = "\n".join(self._lines).strip()
        self._lines = []
        self._seen_movetext = False
        self._closed = False
        self._in_comment = False
        return text


def iter_pgn_games(lines: Iterable[str]) -> Iterator[str]:
    """Yield the text of each game found in *lines*."""
    splitter = PgnGameSplitter()
    for line in lines:
        text = splitter.feed(line)
        if text:
            yield text
    tail = splitter.finish()
    if tail:
        yield tail


def pgn_movetext(sans: list[str], result_token: str) -> str:
    """Build numbered PGN movetext from a SAN mainline."""
    parts: list[str] = []
    for ply, san in enumerate(sans):
        if ply % 2 == 0:
            parts.append(f"{ply // 2 + 1}.")
        parts.append(san)
    parts.append(result_token)
    return " ".join(parts)


def build_pgn(headers: dict[str, str], sans: list[str], result_token: str) -> str:
    """Build a single-game PGN document."""
    lines = [f'[{key} "{_escape(value)}"]' for key, value in headers.items()]
    lines.append("")
    lines.append(pgn_movetext(sans, result_token))
    lines.append("")
    return "\n".join(lines)
