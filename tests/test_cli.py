import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from crossfill.cli import main
from crossfill.engine.samples import sample_crossword
from crossfill.io.grid_file import load_crossword, save_crossword


SOLUTION_WORDS = ["PEER", "PILLOW", "PEEL", "DYER"]


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.grid = save_crossword(sample_crossword("partial"), self.tmp / "partial.txt")
        self.words = self.tmp / "words.txt"
        self.words.write_text("\n".join(SOLUTION_WORDS) + "\n", encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def run_cli(self, *argv: str) -> tuple:
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = main([*argv, "--log-level", "ERROR"])
        return code, buffer.getvalue()

    def test_show_with_details(self) -> None:
        code, out = self.run_cli("show", str(self.grid), "--details")
        self.assertEqual(code, 0)
        self.assertIn("Horizontal:", out)
        self.assertIn(" - 'GOLDEN' at (1, 1)", out)
        self.assertIn("was manually placed (count=inf)", out)

    def test_fill_saves_and_reports(self) -> None:
        saved = self.tmp / "filled.txt"
        report = self.tmp / "report.json"
        code, out = self.run_cli(
            "fill",
            str(self.grid),
            "--dictionary",
            str(self.words),
            "--seed",
            "5",
            "--save",
            str(saved),
            "--output",
            str(report),
        )
        self.assertEqual(code, 0)
        self.assertIn("P  I  L  L  O  W", out)
        self.assertTrue(load_crossword(saved).is_full())
        payload = json.loads(report.read_text(encoding="utf-8"))
        self.assertEqual(payload["status"], "filled")
        self.assertEqual(payload["seed"], 5)
        self.assertEqual(payload["puzzle"]["rows"], 6)

    def test_fill_with_cpsat(self) -> None:
        saved = self.tmp / "filled.txt"
        code, _ = self.run_cli(
            "fill",
            str(self.grid),
            "--dictionary",
            str(self.words),
            "--solver",
            "cpsat",
            "--timeout",
            "10",
            "--save",
            str(saved),
        )
        self.assertEqual(code, 0)
        self.assertEqual(load_crossword(saved).cell(2, 4).letter, "Y")

    def test_fill_failure_returns_one(self) -> None:
        self.words.write_text("PEER\nPILLOW\n", encoding="utf-8")
        code, _ = self.run_cli("fill", str(self.grid), "--dictionary", str(self.words))
        self.assertEqual(code, 1)

    def test_slots_lists_candidates(self) -> None:
        code, out = self.run_cli(
            "slots", str(self.grid), "--dictionary", str(self.words), "--split", "--flexible", "1"
        )
        self.assertEqual(code, 0)
        self.assertIn("(6, 1) horizontal len=6 '.I...W' => 1 options: PILLOW", out)
        self.assertIn("(1, 4) vertical len=4 'D..R' => 1 options: DYER", out)
        self.assertIn("black cell at", out)

    def test_generate_layout(self) -> None:
        report = self.tmp / "layout.json"
        code, _ = self.run_cli(
            "generate", "--rows", "7", "--cols", "7", "--seed", "9", "--output", str(report)
        )
        self.assertEqual(code, 0)
        payload = json.loads(report.read_text(encoding="utf-8"))
        self.assertEqual((payload["puzzle"]["rows"], payload["puzzle"]["cols"]), (7, 7))
        self.assertNotIn("status", payload)
        self.assertTrue(all(black["manual"] for black in payload["puzzle"]["black_cells"]))

    def test_generate_fill_needs_dictionary(self) -> None:
        with self.assertRaises(SystemExit):
            with redirect_stdout(io.StringIO()):
                main(["generate", "--rows", "5", "--cols", "5", "--fill"])

    def test_missing_grid_returns_two(self) -> None:
        code, _ = self.run_cli("show", str(self.tmp / "missing.txt"))
        self.assertEqual(code, 2)

    def test_invalid_density_returns_two(self) -> None:
        code, _ = self.run_cli("generate", "--rows", "5", "--cols", "5", "--max-density", "2")
        self.assertEqual(code, 2)

    def test_double_symmetry_without_symmetry_returns_two(self) -> None:
        code, _ = self.run_cli(
            "generate", "--rows", "5", "--cols", "5", "--no-symmetry", "--double-symmetry"
        )
        self.assertEqual(code, 2)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
