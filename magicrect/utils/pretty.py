"""Pretty-print helpers for magic rectangles."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, List

from ..core.constants import BLANK

if TYPE_CHECKING:
    from ..engine.grid import Grid
    from ..engine.solver import SearchResult


CLEAR_SCREEN = "\x1b[2J"


def format_grid(grid: Grid) -> str:
    """Letters separated by spaces, one row per line."""

    lines = []
    for r in range(grid.rows):
        lines.append(" ".join(letter or BLANK for letter in grid.row_span(r)))
    return "\n".join(lines)


def format_spans(grid: Grid) -> str:
    """Every row word followed by every column word."""

    return "\n".join(grid.to_strings() + grid.column_strings())


def format_banner(grid: Grid) -> str:
    """All letters in row-major order, uppercased."""

    return "".join(grid.to_strings()).upper()


def render_progress(grid: Grid, attempts: int, *, stream=None) -> None:
    """Redraw the partial grid in place."""

    stream = stream or sys.stdout
    print(CLEAR_SCREEN, end="", file=stream)
    print(format_grid(grid), file=stream)
    print(f"attempts: {attempts}", file=stream)
    stream.flush()


def format_solution(result: SearchResult) -> str:
    if result.grid is None:
        return "Could not fill square."
    sections: List[str] = [
        format_spans(result.grid),
        "",
        format_grid(result.grid),
        "",
        format_banner(result.grid),
    ]
    return "\n".join(sections)


def print_solution(result: SearchResult, *, stream=None) -> None:
    stream = stream or sys.stdout
    print(format_solution(result), file=stream)
