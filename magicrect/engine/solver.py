"""Depth-first backtracking search over the free cells of a grid."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..core.constants import ALPHABET, SearchOutcome
from ..data.dictionary import DictionaryIndex
from ..utils.logger import get_logger
from .grid import Grid
from .validator import SpanValidator

LOGGER = get_logger(__name__)

ProgressCallback = Callable[[Grid, int], None]


@dataclass
class SolverConfig:
    """Knobs for the backtracking engine.

    ``alphabet`` is the letter trial order; the first solution reached is the
    first one in row-major order under this ordering. ``timeout_seconds`` of
    ``None`` runs until solved or exhausted.
    """

    alphabet: str = ALPHABET
    timeout_seconds: Optional[float] = None
    progress_interval: int = 0

    def __post_init__(self) -> None:
        if not self.alphabet:
            raise ValueError("alphabet must contain at least one letter")
        if len(set(self.alphabet)) != len(self.alphabet):
            raise ValueError(f"alphabet has repeated letters: {self.alphabet!r}")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        if self.progress_interval < 0:
            raise ValueError("progress_interval must be >= 0")


@dataclass
class SearchResult:
    outcome: SearchOutcome
    grid: Optional[Grid] = None
    attempts: int = 0
    backtracks: int = 0
    elapsed: float = 0.0

    @property
    def solved(self) -> bool:
        return self.outcome == SearchOutcome.SOLVED


class BacktrackingSolver:
    """Assigns letters cell by cell, pruning on any unsatisfiable span.

    The search keeps one frame per free cell: the index of the next letter
    to try there. A frame that runs out of letters clears its cell and hands
    control back to the previous frame.
    """

    def __init__(
        self,
        dictionary: DictionaryIndex,
        config: Optional[SolverConfig] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> None:
        self.dictionary = dictionary
        self.config = config or SolverConfig()
        self.validator = SpanValidator(dictionary)
        self.on_progress = on_progress

    def solve(self, grid: Grid) -> SearchResult:
        """Fill ``grid`` in place; it holds the answer when the outcome is SOLVED."""

        start = time.monotonic()
        free = grid.free_cells_in_traversal_order()

        if not self.validator.validate_grid(grid):
            LOGGER.info("Template already contains an unsatisfiable span")
            return SearchResult(SearchOutcome.EXHAUSTED, elapsed=time.monotonic() - start)

        LOGGER.info(
            "Searching %sx%s rectangle with %s free cells",
            grid.rows,
            grid.cols,
            len(free),
        )

        letters = self.config.alphabet
        interval = self.config.progress_interval
        deadline = (
            start + self.config.timeout_seconds if self.config.timeout_seconds is not None else None
        )
        next_letter: List[int] = [0] * len(free)
        attempts = 0
        backtracks = 0
        depth = 0

        while 0 <= depth < len(free):
            row, col = free[depth]
            index = next_letter[depth]
            if index >= len(letters):
                grid.clear(row, col)
                next_letter[depth] = 0
                depth -= 1
                backtracks += 1
                continue

            if deadline is not None and time.monotonic() >= deadline:
                for r, c in free:
                    grid.clear(r, c)
                LOGGER.warning("Search cancelled after %s attempts", attempts)
                return SearchResult(
                    SearchOutcome.CANCELLED,
                    attempts=attempts,
                    backtracks=backtracks,
                    elapsed=time.monotonic() - start,
                )

            next_letter[depth] = index + 1
            attempts += 1
            grid.set(row, col, letters[index])

            if interval and attempts % interval == 0:
                LOGGER.debug("Attempt %s at depth %s/%s", attempts, depth, len(free))
                if self.on_progress is not None:
                    self.on_progress(grid, attempts)

            if self.validator.validate_all_touching(grid, row, col):
                depth += 1

        elapsed = time.monotonic() - start
        if depth < 0:
            LOGGER.info("Search exhausted after %s attempts (%.2fs)", attempts, elapsed)
            return SearchResult(
                SearchOutcome.EXHAUSTED, attempts=attempts, backtracks=backtracks, elapsed=elapsed
            )

        LOGGER.info("Solved after %s attempts (%.2fs)", attempts, elapsed)
        return SearchResult(
            SearchOutcome.SOLVED,
            grid=grid,
            attempts=attempts,
            backtracks=backtracks,
            elapsed=elapsed,
        )
