"""Popularity sort: cluster games by shared move-sequence prefixes.

A blob is cut into fixed-width tokens, one per ply for move blobs. Games are
first sorted lexicographically by their token sequence, which makes every
shared prefix a contiguous block. For each depth ``j`` the length of the run
of identical tokens at ``j`` is the number of games still following the same
line through that depth, i.e. the population of that subtree of the opening
tree. Re-sorting on those per-depth populations (larger first) puts the most
popular lines at the top without building the tree.

Example, moves written out instead of encoded::

    A) 1.d4 Nf6 2.c4 e6 3.Nc3     7 3 7 6 1
    B) 1.d4 Nf6 2.c4 e6 3.Nf3     7 3 7 6 2
    C) 1.d4 Nf6 2.c4 e6 3.Nf3     7 3 7 6 2
    D) 1.d4 d5  2.c4 e6 3.Nc3     7 4 7 6 1
    E) 1.d4 d5  2.c4 e6 3.Nf3     7 4 7 6 2
    F) 1.d4 d5  2.c4 e6 3.Nf3     7 4 7 6 2
    G) 1.d4 d5  2.c4 c5 3.d5      7 4 7 1 1

    popularity order: E F D G B C A
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from pgnbase.core.encoding import PLY_WIDTH

T = TypeVar("T")


@dataclass(slots=True)
class ClusterElement:
    """Working record for one game during a popularity sort."""

    index: int
    group: int
    tokens: tuple[bytes, ...]
    counts: list[int]


def tokenize(blob: bytes, width: int = 1) -> tuple[bytes, ...]:
    """Split *blob* into ``width``-byte tokens; a trailing remainder is kept."""
    if width < 1:
        raise ValueError("token width must be positive")
    data = bytes(blob)
    return tuple(data[pos : pos + width] for pos in range(0, len(data), width))


def build_elements(
    blobs: Sequence[bytes],
    groups: Sequence[int] | None = None,
    *,
    token_width: int = 1,
) -> list[ClusterElement]:
    if groups is not None and len(groups) != len(blobs):
        raise ValueError("groups length must match blobs length")
    elements = []
    for index, blob in enumerate(blobs):
        tokens = tokenize(blob, token_width)
        elements.append(
            ClusterElement(
                index=index,
                group=0 if groups is None else groups[index],
                tokens=tokens,
                counts=[0] * len(tokens),
            )
        )
    return elements


def _close_run(
    elements: list[ClusterElement], start: int, stop: int, depth: int
) -> None:
    count = stop - start
    for element in elements[start:stop]:
        element.counts[depth] = count


def count_runs(elements: list[ClusterElement]) -> None:
    """Fill ``counts`` for elements already sorted by ``(group, tokens)``."""
    depth = 0
    active = True
    while active:
        active = False
        start: int | None = None
        current: tuple[int, bytes] | None = None
        for pos, element in enumerate(elements):
            if depth >= len(element.tokens):
                # A game that ended before this depth breaks the run
                if start is not None:
                    _close_run(elements, start, pos, depth)
                    start = None
                continue
            active = True
            token = (element.group, element.tokens[depth])
            if start is None:
                start, current = pos, token
            elif token != current:
                _close_run(elements, start, pos, depth)
                start, current = pos, token
        if start is not None:
            _close_run(elements, start, len(elements), depth)
        depth += 1


def _popularity_key(element: ClusterElement) -> tuple[int, tuple[int, ...]]:
    # Tuple comparison stops at the shorter tuple and then ranks it first,
    # which is exactly "bigger count wins, then shorter sequence wins".
    return element.group, tuple(-count for count in element.counts)


def popularity_order(
    blobs: Sequence[bytes],
    groups: Sequence[int] | None = None,
    *,
    token_width: int = 1,
) -> list[int]:
    """Return the permutation of ``range(len(blobs))`` in popularity order."""
    elements = build_elements(blobs, groups, token_width=token_width)
    if len(elements) < 2:
        return [element.index for element in elements]
    elements.sort(key=lambda element: (element.group, element.tokens))
    count_runs(elements)
    elements.sort(key=_popularity_key)
    return [element.index for element in elements]


def _moves_of(game: Any) -> bytes:
    return game.moves


def popularity_sort(
    games: list[T],
    *,
    blob_of: Callable[[T], bytes] = _moves_of,
    group_of: Callable[[T], int] | None = None,
    token_width: int = PLY_WIDTH,
) -> None:
    """Reorder *games* in place, most popular opening lines first.

    By default each game's ``moves`` blob is compared one ply at a time.
    """
    if len(games) < 2:
        return
    groups = None if group_of is None else [group_of(game) for game in games]
    order = popularity_order(
        [blob_of(game) for game in games], groups, token_width=token_width
    )
    games[:] = [games[index] for index in order]
