"""CP-SAT rectangle filling using OR-Tools.

Unlike :class:`~magicrect.engine.solver.BacktrackingSolver` this engine makes
no promise about which solution it returns, only that it is valid.
"""

from __future__ import annotations

import time
from typing import Dict, Optional, Tuple, Union

from ortools.sat.python import cp_model

from ..core.constants import ALPHABET, SearchOutcome
from ..data.dictionary import DictionaryIndex
from ..utils.logger import get_logger
from .grid import Grid
from .solver import SearchResult

LOGGER = get_logger(__name__)

CellVar = Union[cp_model.IntVar, int]


class CpSatSolver:
    """One integer variable per free cell, one table constraint per span."""

    def __init__(
        self,
        dictionary: DictionaryIndex,
        alphabet: str = ALPHABET,
        timeout_seconds: Optional[float] = None,
        num_workers: int = 1,
    ) -> None:
        self.dictionary = dictionary
        self.alphabet = alphabet
        self.timeout_seconds = timeout_seconds
        self.num_workers = num_workers

    def solve(self, grid: Grid) -> SearchResult:
        start = time.monotonic()
        model = cp_model.CpModel()
        codes = {letter: i for i, letter in enumerate(self.alphabet)}

        # ------------------------------------------------------------------
        # Cell letter variables
        # ------------------------------------------------------------------
        cell_vars: Dict[Tuple[int, int], CellVar] = {}
        for r in range(grid.rows):
            for c in range(grid.cols):
                existing = grid.get(r, c)
                if grid.is_fixed(r, c) and existing is not None:
                    cell_vars[(r, c)] = codes[existing]
                else:
                    cell_vars[(r, c)] = model.new_int_var(0, len(self.alphabet) - 1, f"L_{r}_{c}")

        # ------------------------------------------------------------------
        # Per-span word tables
        # ------------------------------------------------------------------
        for span in grid.spans():
            pattern = grid.span_letters(span)
            surfaces = [
                word
                for word in self.dictionary.find_matches(pattern)
                if all(ch in codes for ch in word)
            ]
            if not surfaces:
                LOGGER.debug("No candidates for %s", span.label)
                return SearchResult(SearchOutcome.EXHAUSTED, elapsed=time.monotonic() - start)

            cell_list = [cell_vars[pos] for pos in span.cells]
            if not any(isinstance(v, cp_model.IntVar) for v in cell_list):
                continue
            tuples = [[codes[ch] for ch in word] for word in surfaces]
            model.add_allowed_assignments(cell_list, tuples)

        # ------------------------------------------------------------------
        # Solve
        # ------------------------------------------------------------------
        solver = cp_model.CpSolver()
        if self.timeout_seconds is not None:
            solver.parameters.max_time_in_seconds = self.timeout_seconds
        solver.parameters.num_workers = self.num_workers

        LOGGER.info(
            "CP-SAT: %d spans, %d cell vars, solving...",
            grid.rows + grid.cols,
            sum(1 for v in cell_vars.values() if isinstance(v, cp_model.IntVar)),
        )
        status = solver.solve(model)
        elapsed = time.monotonic() - start

        if status == cp_model.INFEASIBLE:
            LOGGER.info("CP-SAT: proved infeasible in %.2fs", elapsed)
            return SearchResult(SearchOutcome.EXHAUSTED, elapsed=elapsed)
        if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
            LOGGER.warning("CP-SAT: no solution found (status=%s)", solver.status_name(status))
            return SearchResult(SearchOutcome.CANCELLED, elapsed=elapsed)

        LOGGER.info("CP-SAT: solution found in %.2fs", solver.wall_time)
        for (r, c), var in cell_vars.items():
            if not grid.is_fixed(r, c):
                grid.set(r, c, self.alphabet[_resolve_var(solver, var)])
        return SearchResult(SearchOutcome.SOLVED, grid=grid, elapsed=elapsed)


def _resolve_var(solver: cp_model.CpSolver, var_or_const: CellVar) -> int:
    """Get the value of a variable or constant."""
    if isinstance(var_or_const, cp_model.IntVar):
        return solver.value(var_or_const)
    return var_or_const

