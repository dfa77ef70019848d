"""Fixed-width byte encoding of SAN mainlines.

Every ply becomes three bytes::

    byte 0   piece code (3 bits) | promotion (3 bits) | capture (1 bit) | 0
    byte 1   destination square, a1 = 0 ... h8 = 63
    byte 2   disambiguation file (high nibble) | rank (low nibble), 0 = none

Because the width is fixed, two games share a blob prefix exactly when they
share the corresponding opening moves. Check, mate and annotation glyphs are
not encoded.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

PLY_WIDTH = 3

_PAWN = 0
_CASTLE_SHORT = 6
_CASTLE_LONG = 7

_PIECE_CODE: dict[str, int] = {"N": 1, "B": 2, "R": 3, "Q": 4, "K": 5}
_PIECE_LETTER: dict[int, str] = {v: k for k, v in _PIECE_CODE.items()}
_PROMO_CODE: dict[str, int] = {"N": 1, "B": 2, "R": 3, "Q": 4}
_PROMO_LETTER: dict[int, str] = {v: k for k, v in _PROMO_CODE.items()}

_SAN_RE = re.compile(
    r"^(?P<piece>[NBRQK])?"
    r"(?P<file>[a-h])?(?P<rank>[1-8])?"
    r"(?P<capture>x)?"
    r"(?P<dest>[a-h][1-8])"
    r"(?:=?(?P<promo>[NBRQ]))?$"
)


def _strip_glyphs(san: str) -> str:
    return san.strip().rstrip("+#!?")


def encode_move(san: str) -> bytes:
    """Encode a single SAN move into :data:`PLY_WIDTH` bytes."""
    clean = _strip_glyphs(san)
    if clean in ("O-O", "0-0"):
        return bytes((_CASTLE_SHORT << 5, 0, 0))
    if clean in ("O-O-O", "0-0-0"):
        return bytes((_CASTLE_LONG << 5, 0, 0))

    match = _SAN_RE.match(clean)
    if match is None:
        raise ValueError(f"Invalid SAN move: {san}")

    piece = _PIECE_CODE[match["piece"]] if match["piece"] else _PAWN
    promo = _PROMO_CODE[match["promo"]] if match["promo"] else 0
    if promo and piece != _PAWN:
        raise ValueError(f"Only pawns can promote: {san}")
    capture = 1 if match["capture"] else 0

    dest = match["dest"]
    square = (ord(dest[0]) - ord("a")) + 8 * (int(dest[1]) - 1)

    from_file = ord(match["file"]) - ord("a") + 1 if match["file"] else 0
    from_rank = int(match["rank"]) if match["rank"] else 0

    return bytes(
        (
            (piece << 5) | (promo << 2) | (capture << 1),
            square,
            (from_file << 4) | from_rank,
        )
    )


def encode_moves(sans: Iterable[str]) -> bytes:
    """Encode a SAN mainline into one blob."""
    return b"".join(encode_move(san) for san in sans)


def decode_move(code: bytes) -> str:
    """Decode one ply back into normalized SAN (no check/mate suffix)."""
    if len(code) != PLY_WIDTH:
        raise ValueError(f"Ply code must be {PLY_WIDTH} bytes, got {len(code)}")
    head, square, disamb = code
    piece = head >> 5
    if piece == _CASTLE_SHORT:
        return "O-O"
    if piece == _CASTLE_LONG:
        return "O-O-O"
    if square > 63:
        raise ValueError(f"Invalid destination square code: {square}")

    promo = (head >> 2) & 0b111
    capture = (head >> 1) & 1
    from_file = disamb >> 4
    from_rank = disamb & 0x0F

    parts: list[str] = []
    if piece != _PAWN:
        parts.append(_PIECE_LETTER[piece])
    if from_file:
        parts.append(chr(ord("a") + from_file - 1))
    if from_rank:
        parts.append(str(from_rank))
    if capture:
        parts.append("x")
    parts.append(f"{chr(ord('a') + square % 8)}{square // 8 + 1}")
    if promo:
        parts.append(f"={_PROMO_LETTER[promo]}")
    return "".join(parts)


def decode_moves(blob: bytes) -> list[str]:
    """Decode a blob produced by :func:`encode_moves`."""
    if len(blob) % PLY_WIDTH:
        raise ValueError("Blob length is not a whole number of plies")
    return [
        decode_move(blob[offset : offset + PLY_WIDTH])
        for offset in range(0, len(blob), PLY_WIDTH)
    ]


def ply_count(blob: bytes) -> int:
    return len(blob) // PLY_WIDTH
