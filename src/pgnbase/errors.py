"""Exception hierarchy for the import pipeline and storage layer."""

from __future__ import annotations


class PgnBaseError(Exception):
    """Base class for all recoverable pgnbase failures."""


class ValidationError(PgnBaseError):
    """Raised when an import request is rejected before any I/O happens."""


class SourceFileError(PgnBaseError):
    """Raised when a PGN source file cannot be opened."""


class ParseError(PgnBaseError):
    """Raised when the PGN reader aborts a file with its own reason."""


class UserCancelled(PgnBaseError):
    """Raised when the user cancels a running import."""


class StorageError(PgnBaseError):
    """Raised by the game store for transaction/schema/flush/index failures."""
