"""Data models supporting the magic rectangle search."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .constants import Direction


@dataclass
class Cell:
    """A single grid position."""

    letter: Optional[str] = None
    fixed: bool = False

    def is_set(self) -> bool:
        return self.letter is not None


@dataclass
class Span:
    """A full row or column of the grid."""

    direction: Direction
    index: int
    length: int
    _cells: Optional[List[Tuple[int, int]]] = field(default=None, repr=False, compare=False)

    @property
    def cells(self) -> List[Tuple[int, int]]:
        if self._cells is None:
            if self.direction == Direction.ROW:
                self._cells = [(self.index, i) for i in range(self.length)]
            else:
                self._cells = [(i, self.index) for i in range(self.length)]
        return self._cells

    @property
    def label(self) -> str:
        return f"{self.direction.value.lower()} {self.index}"
