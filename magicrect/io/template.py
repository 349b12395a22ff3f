"""Parsing of the slash/underscore template notation.

``he_p/____`` describes a rectangle four letters wide whose first row is
``he?p``; each ``/`` starts the next row and ``_`` leaves a cell blank. Rows
not covered by the template are entirely blank.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..core.constants import BLANK, ROW_SEPARATOR
from ..core.exceptions import InvalidShape, InvalidTemplate

Position = Tuple[int, int]


@dataclass
class Template:
    """Rectangle shape plus the letters the search must keep."""

    rows: int
    cols: int
    fixed: Dict[Position, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise InvalidShape(f"Rectangle must have positive dimensions, got {self.rows}x{self.cols}")

    def with_row(self, index: int, word: str) -> "Template":
        """Overlay ``word`` (underscores allowed) onto row ``index``."""

        if not 0 <= index < self.rows:
            raise InvalidShape(f"Row {index} outside a {self.rows}-row rectangle")
        cells = _letters(word)
        if len(cells) != self.cols:
            raise InvalidShape(f"Row word {word!r} has length {len(cells)}, expected {self.cols}")
        return self._overlay({(index, c): letter for c, letter in enumerate(cells)})

    def with_column(self, index: int, pattern: str) -> "Template":
        """Overlay ``pattern`` (underscores allowed) onto column ``index``."""

        if not 0 <= index < self.cols:
            raise InvalidShape(f"Column {index} outside a {self.cols}-column rectangle")
        cells = _letters(pattern)
        if len(cells) != self.rows:
            raise InvalidShape(
                f"Column pattern {pattern!r} has length {len(cells)}, expected {self.rows}"
            )
        return self._overlay({(r, index): letter for r, letter in enumerate(cells)})

    def _overlay(self, cells: Dict[Position, Optional[str]]) -> "Template":
        fixed = dict(self.fixed)
        for position, letter in cells.items():
            if letter is None:
                continue
            current = fixed.get(position)
            if current is not None and current != letter:
                raise InvalidTemplate(
                    f"Conflicting letters {current!r} and {letter!r} at {position}"
                )
            fixed[position] = letter
        return Template(self.rows, self.cols, fixed)

    def row_strings(self) -> List[str]:
        return [
            "".join(self.fixed.get((r, c), BLANK) for c in range(self.cols))
            for r in range(self.rows)
        ]


def blank_template(rows: int, cols: int) -> Template:
    return Template(rows, cols)


def parse_template(text: str, rows: Optional[int] = None) -> Template:
    """Parse slash-separated rows into a :class:`Template`.

    ``rows`` defaults to the number of segments and may exceed it.
    """

    segments = text.strip().split(ROW_SEPARATOR)
    width = len(segments[0])
    if width == 0:
        raise InvalidShape(f"Template {text!r} has an empty first row")
    for number, segment in enumerate(segments):
        if len(segment) != width:
            raise InvalidShape(
                f"Template row {number} ({segment!r}) has length {len(segment)}, expected {width}"
            )

    height = len(segments) if rows is None else rows
    if height < len(segments):
        raise InvalidShape(f"Template has {len(segments)} rows but only {height} were requested")

    fixed: Dict[Position, str] = {}
    for r, segment in enumerate(segments):
        for c, letter in enumerate(_letters(segment)):
            if letter is not None:
                fixed[(r, c)] = letter
    return Template(height, width, fixed)


def _letters(text: str) -> List[Optional[str]]:
    cells: List[Optional[str]] = []
    for char in text:
        if char == BLANK:
            cells.append(None)
        elif char.isalpha():
            cells.append(char.lower())
        else:
            raise InvalidTemplate(f"Unexpected character {char!r} in {text!r}")
    return cells
