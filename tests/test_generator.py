import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from magicrect.core.constants import SearchOutcome
from magicrect.core.exceptions import EmptyDictionary, InvalidShape
from magicrect.data.dictionary import DictionaryConfig, DictionaryIndex
from magicrect.engine.generator import GeneratorConfig, MagicRectangleGenerator
from magicrect.io.template import blank_template, parse_template


HELP_WORDS = ["help", "oval", "amen", "land", "hoal", "evma", "laen", "plnd"]


class GeneratorTests(unittest.TestCase):
    def test_generate_with_fixed_first_row(self) -> None:
        config = GeneratorConfig(rows=4, template=parse_template("help"))
        generator = MagicRectangleGenerator(config, dictionary=DictionaryIndex.build(HELP_WORDS))
        result = generator.generate()
        self.assertEqual(result.outcome, SearchOutcome.SOLVED)
        assert result.grid is not None
        self.assertEqual(result.grid.to_strings()[0], "help")

    def test_generate_loads_dictionary_from_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            source = Path(tmpdir) / "words.txt"
            source.write_text("\n".join(HELP_WORDS) + "\n", encoding="utf-8")
            config = GeneratorConfig(
                rows=4,
                template=parse_template("help"),
                dictionary=DictionaryConfig(path=source),
            )
            result = MagicRectangleGenerator(config).generate()
        self.assertTrue(result.solved)

    def test_empty_dictionary_stops_before_search(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            source = Path(tmpdir) / "words.txt"
            source.write_text("", encoding="utf-8")
            config = GeneratorConfig(rows=2, cols=2, dictionary=DictionaryConfig(path=source))
            with patch("magicrect.engine.generator.BacktrackingSolver") as solver_cls:
                with self.assertRaises(EmptyDictionary):
                    MagicRectangleGenerator(config).generate()
                solver_cls.assert_not_called()

    def test_template_width_must_match_columns(self) -> None:
        config = GeneratorConfig(rows=4, cols=3, template=parse_template("help"))
        generator = MagicRectangleGenerator(config, dictionary=DictionaryIndex.build(HELP_WORDS))
        with patch("magicrect.engine.generator.BacktrackingSolver") as solver_cls:
            with self.assertRaises(InvalidShape):
                generator.generate()
            solver_cls.assert_not_called()

    def test_shape_errors(self) -> None:
        with self.assertRaises(InvalidShape):
            GeneratorConfig(rows=0, cols=3).resolve_template()
        with self.assertRaises(InvalidShape):
            GeneratorConfig(rows=3).resolve_template()
        with self.assertRaises(InvalidShape):
            GeneratorConfig(rows=1, template=parse_template("ab/cd")).resolve_template()

    def test_resolve_template_pads_rows(self) -> None:
        template = GeneratorConfig(rows=3, template=parse_template("ab")).resolve_template()
        self.assertEqual(template.row_strings(), ["ab", "__", "__"])
        blank = GeneratorConfig(rows=2, cols=5).resolve_template()
        self.assertEqual(blank, blank_template(2, 5))

    def test_unsatisfiable_template_reports_exhausted(self) -> None:
        config = GeneratorConfig(rows=4, cols=4)
        dictionary = DictionaryIndex.build(["help", "oval"])
        result = MagicRectangleGenerator(config, dictionary=dictionary).generate()
        self.assertEqual(result.outcome, SearchOutcome.EXHAUSTED)

    def test_missing_length_warns_then_engine_exhausts_without_search(self) -> None:
        config = GeneratorConfig(rows=7, cols=3)
        dictionary = DictionaryIndex.build(["abc", "bca"])
        with self.assertLogs("magicrect.engine.generator", level="WARNING") as logs:
            result = MagicRectangleGenerator(config, dictionary=dictionary).generate()
        self.assertTrue(any("no words of length 3 or 7" in line for line in logs.output))
        self.assertEqual(result.outcome, SearchOutcome.EXHAUSTED)
        self.assertEqual(result.attempts, 0)

    def test_unknown_engine(self) -> None:
        with self.assertRaises(ValueError):
            MagicRectangleGenerator(GeneratorConfig(rows=2, cols=2, engine="annealing"))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
