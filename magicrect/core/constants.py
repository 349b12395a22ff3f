"""Shared constants and enumerations for the magic rectangle search."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

ALPHABET = "abcdefghijklmnopqrstuvwxyz"
BLANK = "_"
ROW_SEPARATOR = "/"
DEFAULT_WORD_LIST = "/usr/share/dict/words"


class Direction(str, Enum):
    """Orientation of a span."""

    ROW = "ROW"
    COLUMN = "COLUMN"


class SearchOutcome(str, Enum):
    """Terminal states of a search."""

    SOLVED = "SOLVED"
    EXHAUSTED = "EXHAUSTED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    @property
    def area(self) -> int:
        return self.rows * self.cols
