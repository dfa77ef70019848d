"""Notation-layer data models."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class ParsedGame:
    """One PGN game: tag pairs, SAN mainline and result token."""

    headers: dict[str, str] = field(default_factory=dict)
    sans: list[str] = field(default_factory=list)
    result_token: str = "*"

    @property
    def is_empty(self) -> bool:
        return not self.headers and not self.sans
