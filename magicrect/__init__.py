"""Magic rectangle generator.

Fills a rectangle of letters so that every row and every column is a word
from a supplied dictionary. The public API surface is:

- ``magicrect.data.dictionary.DictionaryIndex``: length-partitioned word lookups.
- ``magicrect.engine.grid.Grid``: the letter buffer with template-fixed cells.
- ``magicrect.engine.solver.BacktrackingSolver``: deterministic depth-first search.
- ``magicrect.engine.generator.MagicRectangleGenerator``: setup checks plus solving.
"""

from .data.dictionary import DictionaryConfig, DictionaryIndex
from .engine.generator import GeneratorConfig, MagicRectangleGenerator
from .engine.grid import Grid
from .engine.solver import BacktrackingSolver, SearchResult, SolverConfig

__all__ = [
    "BacktrackingSolver",
    "DictionaryConfig",
    "DictionaryIndex",
    "GeneratorConfig",
    "Grid",
    "MagicRectangleGenerator",
    "SearchResult",
    "SolverConfig",
]

__version__ = "0.1.0"
