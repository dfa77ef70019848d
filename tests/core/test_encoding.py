"""Tests for the fixed-width SAN move encoding."""

from __future__ import annotations

import pytest

from pgnbase.core.encoding import (
    PLY_WIDTH,
    decode_move,
    decode_moves,
    encode_move,
    encode_moves,
    ply_count,
)


class TestEncodeMove:
    def test_knight_move_layout(self) -> None:
        # N = 1 in the top three bits, f3 = file 5 + 8 * rank 2
        assert encode_move("Nf3") == bytes((1 << 5, 21, 0))

    def test_pawn_push(self) -> None:
        assert encode_move("e4") == bytes((0, 28, 0))

    def test_pawn_capture_keeps_source_file(self) -> None:
        head, square, disamb = encode_move("exd5")
        assert head == 0b10
        assert square == 35
        assert disamb == 5 << 4

    def test_castling(self) -> None:
        assert encode_move("O-O") == bytes((6 << 5, 0, 0))
        assert encode_move("0-0-0") == bytes((7 << 5, 0, 0))

    def test_check_and_annotation_glyphs_ignored(self) -> None:
        assert encode_move("Qh5+") == encode_move("Qh5")
        assert encode_move("Qxf7#") == encode_move("Qxf7")
        assert encode_move("e4!?") == encode_move("e4")

    def test_disambiguation_distinguishes_moves(self) -> None:
        assert encode_move("Nbd7") != encode_move("Nfd7")
        assert encode_move("R1a3") != encode_move("R8a3")

    def test_promotion(self) -> None:
        assert encode_move("e8=Q") == encode_move("e8Q")
        assert encode_move("e8=Q") != encode_move("e8=N")

    @pytest.mark.parametrize("san", ["", "Zf3", "e9", "Ke8=Q", "--"])
    def test_invalid_san_raises(self, san: str) -> None:
        with pytest.raises(ValueError):
            encode_move(san)


class TestBlobs:
    def test_blob_is_fixed_width_per_ply(self) -> None:
        blob = encode_moves(["e4", "e5", "Nf3"])
        assert len(blob) == 3 * PLY_WIDTH
        assert ply_count(blob) == 3

    def test_shared_opening_shares_prefix(self) -> None:
        ruy = encode_moves(["e4", "e5", "Nf3", "Nc6", "Bb5"])
        italian = encode_moves(["e4", "e5", "Nf3", "Nc6", "Bc4"])
        common = encode_moves(["e4", "e5", "Nf3", "Nc6"])
        assert ruy.startswith(common)
        assert italian.startswith(common)
        assert ruy[len(common) :] != italian[len(common) :]

    def test_decode_normalizes_san(self) -> None:
        blob = encode_moves(["e4", "d5", "exd5", "Qxd5", "Nc3", "Qa5", "O-O-O+"])
        assert decode_moves(blob) == [
            "e4",
            "d5",
            "exd5",
            "Qxd5",
            "Nc3",
            "Qa5",
            "O-O-O",
        ]

    def test_decode_promotion_and_disambiguation(self) -> None:
        assert decode_move(encode_move("bxa8=N+")) == "bxa8=N"
        assert decode_move(encode_move("Nbd7")) == "Nbd7"
        assert decode_move(encode_move("R1a3")) == "R1a3"

    def test_decode_rejects_partial_ply(self) -> None:
        with pytest.raises(ValueError):
            decode_moves(b"\x00\x1c")
