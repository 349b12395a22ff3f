"""Span admissibility checks and final grid validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..core.exceptions import ValidationError
from ..data.dictionary import DictionaryIndex
from .grid import Grid
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class SpanValidator:
    """Decides whether a row or column can still become a dictionary word."""

    def __init__(self, dictionary: DictionaryIndex) -> None:
        self.dictionary = dictionary

    def validate_span(self, cells: Sequence[Optional[str]]) -> bool:
        if all(letter is not None for letter in cells):
            return self.dictionary.contains_exact("".join(cells))  # type: ignore[arg-type]
        return self.dictionary.has_match(cells, len(cells))

    def validate_all_touching(self, grid: Grid, row: int, col: int) -> bool:
        return self.validate_span(grid.row_span(row)) and self.validate_span(grid.col_span(col))

    def validate_grid(self, grid: Grid) -> bool:
        """Check every span, including ones no assignment will ever touch."""

        return all(self.validate_span(grid.span_letters(span)) for span in grid.spans())


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class GridValidator:
    """Runs deterministic validation over a finished grid."""

    def __init__(self, dictionary: DictionaryIndex) -> None:
        self.dictionary = dictionary

    def validate(self, grid: Grid) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_complete(grid)
        except ValidationError as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])

        for span in grid.spans():
            text = "".join(grid.span_letters(span))  # type: ignore[arg-type]
            if not self.dictionary.contains_exact(text):
                messages.append(f"Invalid word '{text}' in {span.label}")
        if messages:
            LOGGER.error("Validation failed: %s", "; ".join(messages))
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    @staticmethod
    def _check_complete(grid: Grid) -> None:
        for r in range(grid.rows):
            for c in range(grid.cols):
                if grid.get(r, c) is None:
                    raise ValidationError(f"Unfilled cell at ({r},{c})")
