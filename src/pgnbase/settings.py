"""Tunable settings for reading PGN files and writing the game store."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ImportSettings:
    """All import-related settings."""

    # Reader
    read_chunk_bytes: int = 64 * 1024  # cancellation is polled once per chunk
    source_encoding: str = "utf-8"
    decode_errors: str = "replace"

    # Store
    insert_batch_size: int = 500
