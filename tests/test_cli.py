import argparse
import contextlib
import io
import tempfile
import unittest
from pathlib import Path

import main as cli


HELP_WORDS = ["help", "oval", "amen", "land", "hoal", "evma", "laen", "plnd"]


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmpdir.cleanup)
        self.words = Path(self._tmpdir.name) / "words.txt"
        self.words.write_text("\n".join(HELP_WORDS) + "\n", encoding="utf-8")

    def run_cli(self, *argv: str):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            code = cli.main([str(arg) for arg in argv])
        return code, stdout.getvalue()

    def test_solved_rectangle_is_printed(self) -> None:
        code, output = self.run_cli(self.words, "help", "4")
        self.assertEqual(code, cli.EXIT_SOLVED)
        lines = output.splitlines()
        self.assertEqual(lines[:4], ["help", "oval", "amen", "land"])
        self.assertEqual(lines[4:8], ["hoal", "evma", "laen", "plnd"])
        self.assertIn("h e l p", lines)
        self.assertEqual(lines[-1], "HELPOVALAMENLAND")

    def test_named_options_match_positional_form(self) -> None:
        code, output = self.run_cli(
            "--dictionary", self.words, "--template", "help", "--rows", "4"
        )
        self.assertEqual(code, cli.EXIT_SOLVED)
        self.assertEqual(output.splitlines()[:4], ["help", "oval", "amen", "land"])

    def test_positional_dictionary_with_named_template(self) -> None:
        code, output = self.run_cli(self.words, "--template", "help", "--min-length", "4")
        self.assertEqual(code, cli.EXIT_SOLVED)
        self.assertEqual(output.splitlines()[-1], "HELPOVALAMENLAND")

    def test_same_argument_twice_is_rejected(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                self.run_cli(self.words, "help", "--template", "oval")
        self.assertEqual(ctx.exception.code, 2)

    def test_row_option_fixes_a_word(self) -> None:
        code, output = self.run_cli(self.words, "--cols", "4", "--row", "0=help")
        self.assertEqual(code, cli.EXIT_SOLVED)
        self.assertTrue(output.startswith("help\n"))

    def test_no_solution_exit_code(self) -> None:
        code, output = self.run_cli(self.words, "oval", "4")
        self.assertEqual(code, cli.EXIT_NO_SOLUTION)
        self.assertIn("Could not fill square.", output)

    def test_shape_mismatch_is_input_error(self) -> None:
        code, output = self.run_cli(self.words, "help", "4", "--cols", "3")
        self.assertEqual(code, cli.EXIT_INPUT_ERROR)
        self.assertEqual(output, "")

    def test_missing_dictionary_is_input_error(self) -> None:
        code, _ = self.run_cli(Path(self._tmpdir.name) / "missing.txt", "help", "4")
        self.assertEqual(code, cli.EXIT_INPUT_ERROR)

    def test_bad_alphabet_is_rejected_by_parser(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                self.run_cli(self.words, "help", "4", "--alphabet", "aab")
        self.assertEqual(ctx.exception.code, 2)

    def test_indexed_word_parsing(self) -> None:
        self.assertEqual(cli.indexed_word("2=f_n"), (2, "f_n"))
        with self.assertRaises(argparse.ArgumentTypeError):
            cli.indexed_word("f_n")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
