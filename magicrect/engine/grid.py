"""Grid representation and helper utilities."""

from __future__ import annotations

import copy
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..core.constants import ALPHABET, BLANK, Bounds, Direction
from ..core.exceptions import FixedCellViolation, InvalidShape, InvalidTemplate
from ..core.models import Cell, Span
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

Position = Tuple[int, int]


class Grid:
    """Rectangular letter buffer with template-fixed cells."""

    def __init__(
        self,
        rows: int,
        cols: int,
        template: Optional[Mapping[Position, Optional[str]]] = None,
        alphabet: str = ALPHABET,
    ) -> None:
        if rows <= 0 or cols <= 0:
            raise InvalidShape(f"Rectangle must have positive dimensions, got {rows}x{cols}")
        self.bounds = Bounds(rows=rows, cols=cols)
        self.cells: List[List[Cell]] = [[Cell() for _ in range(cols)] for _ in range(rows)]
        for (row, col), letter in (template or {}).items():
            if not self.bounds.contains(row, col):
                raise InvalidShape(f"Template cell {(row, col)} outside {rows}x{cols} rectangle")
            if letter is None or letter == BLANK:
                continue
            if len(letter) != 1 or letter not in alphabet:
                raise InvalidTemplate(f"Unusable template letter {letter!r} at {(row, col)}")
            cell = self.cells[row][col]
            cell.letter = letter
            cell.fixed = True
        LOGGER.debug(
            "Created %sx%s grid with %s fixed cells", rows, cols, self.fixed_count()
        )

    @classmethod
    def from_rows(cls, rows: Sequence[str], alphabet: str = ALPHABET) -> "Grid":
        """Build a grid from row strings where ``_`` marks a blank."""

        if not rows:
            raise InvalidShape("At least one row is required")
        width = len(rows[0])
        template: Dict[Position, Optional[str]] = {}
        for r, text in enumerate(rows):
            if len(text) != width:
                raise InvalidShape(f"Row {r} has length {len(text)}, expected {width}")
            for c, char in enumerate(text):
                if char != BLANK:
                    template[(r, c)] = char
        return cls(len(rows), width, template, alphabet=alphabet)

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    @property
    def rows(self) -> int:
        return self.bounds.rows

    @property
    def cols(self) -> int:
        return self.bounds.cols

    def get(self, row: int, col: int) -> Optional[str]:
        return self.cells[row][col].letter

    def is_fixed(self, row: int, col: int) -> bool:
        return self.cells[row][col].fixed

    def set(self, row: int, col: int, letter: str) -> None:
        cell = self.cells[row][col]
        if cell.fixed:
            raise FixedCellViolation(f"Cell {(row, col)} is fixed to {cell.letter!r}")
        cell.letter = letter

    def clear(self, row: int, col: int) -> None:
        cell = self.cells[row][col]
        if cell.fixed:
            raise FixedCellViolation(f"Cannot clear fixed cell {(row, col)}")
        cell.letter = None

    # ------------------------------------------------------------------
    # Spans
    # ------------------------------------------------------------------
    def row_span(self, row: int) -> List[Optional[str]]:
        return [cell.letter for cell in self.cells[row]]

    def col_span(self, col: int) -> List[Optional[str]]:
        return [self.cells[r][col].letter for r in range(self.bounds.rows)]

    def spans(self) -> List[Span]:
        """All ``rows + cols`` spans, rows first."""

        result = [Span(Direction.ROW, r, self.bounds.cols) for r in range(self.bounds.rows)]
        result.extend(Span(Direction.COLUMN, c, self.bounds.rows) for c in range(self.bounds.cols))
        return result

    def span_letters(self, span: Span) -> List[Optional[str]]:
        if span.direction == Direction.ROW:
            return self.row_span(span.index)
        return self.col_span(span.index)

    def free_cells_in_traversal_order(self) -> List[Position]:
        """Non-fixed positions, left to right then top to bottom."""

        return [
            (r, c)
            for r in range(self.bounds.rows)
            for c in range(self.bounds.cols)
            if not self.cells[r][c].fixed
        ]

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def fixed_count(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell.fixed)

    def filled_count(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell.is_set())

    def is_complete(self) -> bool:
        return self.filled_count() == self.bounds.area

    def copy(self) -> "Grid":
        return copy.deepcopy(self)

    def to_strings(self) -> List[str]:
        return ["".join(letter or BLANK for letter in self.row_span(r)) for r in range(self.bounds.rows)]

    def column_strings(self) -> List[str]:
        return ["".join(letter or BLANK for letter in self.col_span(c)) for c in range(self.bounds.cols)]

    def __str__(self) -> str:
        return "\n".join(self.to_strings())
