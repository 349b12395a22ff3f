"""Magic rectangle generation orchestration.

Setup (dictionary, shape, template) is checked completely before any letter
is tried; the selected engine then runs to a terminal outcome.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.constants import SearchOutcome
from ..core.exceptions import InvalidShape, ValidationError
from ..data.dictionary import DictionaryConfig, DictionaryIndex, load_dictionary
from ..io.template import Template, blank_template
from ..utils.logger import get_logger
from .grid import Grid
from .solver import BacktrackingSolver, ProgressCallback, SearchResult, SolverConfig
from .validator import GridValidator

LOGGER = get_logger(__name__)

ENGINES = ("backtracking", "cp-sat")


@dataclass
class GeneratorConfig:
    rows: int
    cols: Optional[int] = None
    template: Optional[Template] = None
    dictionary: DictionaryConfig = field(default_factory=DictionaryConfig)
    solver: SolverConfig = field(default_factory=SolverConfig)
    engine: str = "backtracking"

    def resolve_template(self) -> Template:
        """Reconcile the declared shape with the template's."""

        if self.rows <= 0:
            raise InvalidShape(f"Row count must be positive, got {self.rows}")
        if self.template is None:
            if self.cols is None:
                raise InvalidShape("Column count is required when no template is given")
            return blank_template(self.rows, self.cols)
        if self.cols is not None and self.cols != self.template.cols:
            raise InvalidShape(
                f"Template is {self.template.cols} letters wide but {self.cols} columns were requested"
            )
        if self.template.rows > self.rows:
            raise InvalidShape(
                f"Template covers {self.template.rows} rows but only {self.rows} were requested"
            )
        return Template(self.rows, self.template.cols, dict(self.template.fixed))


class MagicRectangleGenerator:
    """Builds the grid for a configuration and hands it to an engine."""

    def __init__(
        self,
        config: GeneratorConfig,
        dictionary: Optional[DictionaryIndex] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> None:
        if config.engine not in ENGINES:
            raise ValueError(f"Unknown engine {config.engine!r}; choose from {ENGINES}")
        self.config = config
        self.on_progress = on_progress
        self._dictionary = dictionary

    @property
    def dictionary(self) -> DictionaryIndex:
        if self._dictionary is None:
            self._dictionary = load_dictionary(self.config.dictionary)
        return self._dictionary

    def build_grid(self) -> Grid:
        template = self.config.resolve_template()
        return Grid(
            template.rows,
            template.cols,
            template.fixed,
            alphabet=self.config.solver.alphabet,
        )

    def generate(self) -> SearchResult:
        dictionary = self.dictionary
        grid = self.build_grid()
        LOGGER.info(
            "Generating %sx%s rectangle (%s fixed cells, engine=%s)",
            grid.rows,
            grid.cols,
            grid.fixed_count(),
            self.config.engine,
        )
        if not dictionary.words(grid.cols) or not dictionary.words(grid.rows):
            LOGGER.warning(
                "Dictionary has no words of length %s or %s", grid.cols, grid.rows
            )

        result = self._engine(dictionary).solve(grid)

        if result.outcome == SearchOutcome.SOLVED and result.grid is not None:
            validation = GridValidator(dictionary).validate(result.grid)
            if not validation.ok:
                raise ValidationError("; ".join(validation.messages))
        elif result.outcome == SearchOutcome.EXHAUSTED:
            LOGGER.warning("No magic rectangle exists for these constraints")
        return result

    def _engine(self, dictionary: DictionaryIndex):
        if self.config.engine == "cp-sat":
            from .cpsat import CpSatSolver

            return CpSatSolver(
                dictionary,
                alphabet=self.config.solver.alphabet,
                timeout_seconds=self.config.solver.timeout_seconds,
            )
        return BacktrackingSolver(dictionary, self.config.solver, on_progress=self.on_progress)
