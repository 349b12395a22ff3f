"""CLI entrypoint for the magic rectangle generator."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from magicrect.core.constants import ALPHABET, SearchOutcome
from magicrect.core.exceptions import MagicRectangleError
from magicrect.data.dictionary import DictionaryConfig
from magicrect.engine.generator import ENGINES, GeneratorConfig, MagicRectangleGenerator
from magicrect.engine.solver import SolverConfig
from magicrect.io.template import Template, blank_template, parse_template
from magicrect.utils.logger import configure_logging, get_logger
from magicrect.utils.pretty import print_solution, render_progress

DEFAULT_TEMPLATE = "_____"
DEFAULT_ROWS = 4
ATTEMPT_RENDER_FREQ = 5

EXIT_SOLVED = 0
EXIT_NO_SOLUTION = 1
EXIT_INPUT_ERROR = 2

LOGGER = get_logger("magicrect.cli")


def indexed_word(text: str) -> Tuple[int, str]:
    """Parse ``INDEX=WORD`` arguments."""

    index, sep, word = text.partition("=")
    if not sep or not word:
        raise argparse.ArgumentTypeError(f"expected INDEX=WORD, got {text!r}")
    try:
        return int(index), word
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid index in {text!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fill a rectangle so that every row and column is a dictionary word",
    )
    # Positional form of the original tool: DICT TEMPLATE ROWS
    parser.add_argument("dictionary_pos", nargs="?", type=Path, default=None, metavar="DICT")
    parser.add_argument("template_pos", nargs="?", default=None, metavar="TEMPLATE")
    parser.add_argument("rows_pos", nargs="?", type=int, default=None, metavar="ROWS")
    parser.add_argument(
        "--dictionary",
        type=Path,
        default=None,
        help="Word list, one word per line (default: /usr/share/dict/words)",
    )
    parser.add_argument(
        "--template",
        default=None,
        help="Slash-separated rows, '_' for blanks, e.g. 'help/____' (default: _____)",
    )
    parser.add_argument(
        "--rows",
        type=int,
        default=None,
        help=f"Number of rows in the rectangle (default: {DEFAULT_ROWS})",
    )
    parser.add_argument("--cols", type=int, default=None, help="Number of columns")
    parser.add_argument(
        "--row",
        dest="row_words",
        action="append",
        type=indexed_word,
        default=[],
        metavar="I=WORD",
        help="Fix row I to WORD ('_' allowed); repeatable",
    )
    parser.add_argument(
        "--column",
        dest="column_words",
        action="append",
        type=indexed_word,
        default=[],
        metavar="I=PATTERN",
        help="Fix column I to PATTERN ('_' allowed); repeatable",
    )
    parser.add_argument("--engine", choices=ENGINES, default="backtracking", help="Search engine")
    parser.add_argument(
        "--alphabet",
        type=str,
        default=ALPHABET,
        help="Letters to try, in trial order",
    )
    parser.add_argument(
        "--min-length",
        type=int,
        default=1,
        help="Ignore dictionary words shorter than this",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Give up after this many seconds",
    )
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Redraw the partial grid while searching",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def merge_positionals(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    """Fold DICT TEMPLATE ROWS into the matching options."""

    for name in ("dictionary", "template", "rows"):
        positional = getattr(args, f"{name}_pos")
        if positional is None:
            continue
        if getattr(args, name) is not None:
            parser.error(f"{name} given both positionally and as --{name}")
        setattr(args, name, positional)
    if args.rows is None:
        args.rows = DEFAULT_ROWS


def build_template(args: argparse.Namespace) -> Template:
    if args.template is None and args.cols is not None:
        template = blank_template(args.rows, args.cols)
    else:
        template = parse_template(args.template or DEFAULT_TEMPLATE, args.rows)
    for index, word in args.row_words:
        template = template.with_row(index, word)
    for index, pattern in args.column_words:
        template = template.with_column(index, pattern)
    return template


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    merge_positionals(parser, args)
    level = getattr(logging, args.log_level.upper(), logging.WARNING)
    configure_logging(level)

    alphabet = args.alphabet.lower()
    try:
        solver_config = SolverConfig(
            alphabet=alphabet,
            timeout_seconds=args.timeout,
            progress_interval=ATTEMPT_RENDER_FREQ if args.watch else 0,
        )
    except ValueError as exc:
        parser.error(str(exc))

    try:
        config = GeneratorConfig(
            rows=args.rows,
            cols=args.cols,
            template=build_template(args),
            dictionary=DictionaryConfig(
                path=args.dictionary,
                min_length=args.min_length,
                alphabet=alphabet,
            ),
            solver=solver_config,
            engine=args.engine,
        )
        generator = MagicRectangleGenerator(
            config,
            on_progress=render_progress if args.watch else None,
        )
        result = generator.generate()
    except MagicRectangleError as exc:
        LOGGER.error("%s", exc)
        return EXIT_INPUT_ERROR

    print_solution(result)
    if result.outcome == SearchOutcome.SOLVED:
        return EXIT_SOLVED
    if result.outcome == SearchOutcome.CANCELLED:
        LOGGER.warning("Search timed out after %.1fs", result.elapsed)
    return EXIT_NO_SOLUTION


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
