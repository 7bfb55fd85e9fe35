import contextlib
import io
import os
import tempfile
import unittest
from unittest import mock

from main import EXIT_BAD_INPUT, EXIT_OK, EXIT_UNSOLVED, SudokuApp, main
from tests.puzzles import DEAD_END, PUZZLE, SOLUTION, grid


def run_main(argv):
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        status = main(argv)
    return status, out.getvalue()


class MainTests(unittest.TestCase):
    def test_solves_puzzle(self):
        status, out = run_main([PUZZLE])
        self.assertEqual(status, EXIT_OK)
        self.assertIn("Sudoku solved!", out)
        self.assertIn("5 3 4 | 6 7 8 | 9 1 2", out)

    def test_invalid_grid_is_refused(self):
        status, out = run_main(["55" + "0" * 79])
        self.assertEqual(status, EXIT_UNSOLVED)
        self.assertIn("The grid is invalid", out)
        self.assertIn("[0,0], [0,1]", out)
        self.assertNotIn("Solving", out)

    def test_unsolvable(self):
        status, out = run_main([DEAD_END])
        self.assertEqual(status, EXIT_UNSOLVED)
        self.assertIn("Cannot solve Sudoku", out)

    def test_budget_exhausted(self):
        status, out = run_main([PUZZLE, "--max-steps", "5"])
        self.assertEqual(status, EXIT_UNSOLVED)
        self.assertIn("Gave up after 5 placements", out)

    def test_bad_input(self):
        status, out = run_main(["123"])
        self.assertEqual(status, EXIT_BAD_INPUT)
        self.assertIn("Error:", out)

    def test_missing_file(self):
        status, _ = run_main(["--file", "/nonexistent/puzzle.txt"])
        self.assertEqual(status, EXIT_BAD_INPUT)

    def test_file_and_image(self):
        with tempfile.TemporaryDirectory() as tmp:
            puzzle_path = os.path.join(tmp, "puzzle.txt")
            image_path = os.path.join(tmp, "solution.png")
            with open(puzzle_path, "w", encoding="utf-8") as f:
                f.write(PUZZLE)
            status, out = run_main(["--file", puzzle_path, "--image", image_path])
            self.assertEqual(status, EXIT_OK)
            self.assertTrue(os.path.exists(image_path))

    def test_binary_file_is_bad_input(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "puzzle.txt")
            with open(path, "wb") as f:
                f.write(b"\xff\xfe" + PUZZLE.encode("ascii"))
            status, out = run_main(["--file", path])
        self.assertEqual(status, EXIT_BAD_INPUT)
        self.assertIn("is not a text file", out)

    def test_image_in_missing_directory_still_solves(self):
        status, out = run_main([PUZZLE, "--image", "/nonexistent/dir/solution.png"])
        self.assertEqual(status, EXIT_OK)
        self.assertIn("Could not save image", out)

    def test_image_without_extension_still_solves(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "solution")
            status, out = run_main([PUZZLE, "--image", path])
            self.assertEqual(status, EXIT_OK)
            self.assertIn("Could not save image", out)
            self.assertFalse(os.path.exists(path))

    def test_corrections_from_stdin(self):
        # Input ends without a blank line
        broken = "55" + PUZZLE[2:]
        with mock.patch("sys.stdin", io.StringIO("0,1,3\n")):
            status, out = run_main([broken, "--correct"])
        self.assertEqual(status, EXIT_OK)
        self.assertIn("Corrected cell [0,1] to 3", out)
        self.assertIn(SOLUTION, out)

    def test_verbose(self):
        with self.assertLogs("models.sudoku_solver", level="DEBUG") as logs:
            status, _ = run_main([PUZZLE, "--verbose"])
        self.assertEqual(status, EXIT_OK)
        self.assertTrue(any("placements" in line for line in logs.output))

    def test_already_complete(self):
        status, out = run_main([SOLUTION])
        self.assertEqual(status, EXIT_OK)
        self.assertIn("Puzzle is already complete.", out)
        self.assertIn("(0 placements)", out)


class AppTests(unittest.TestCase):
    def quiet(self, func, *args, **kwargs):
        with contextlib.redirect_stdout(io.StringIO()):
            return func(*args, **kwargs)

    def test_keeps_original_and_solution(self):
        app = SudokuApp()
        g = grid(PUZZLE)
        self.assertEqual(self.quiet(app.process_grid, g), EXIT_OK)
        self.assertEqual(app.current_grid, grid(PUZZLE))
        self.assertEqual(app.solution_grid, grid(SOLUTION))
        # caller's grid is not touched
        self.assertEqual(g, grid(PUZZLE))

    def test_unsolvable_resets_grid(self):
        app = SudokuApp()
        self.quiet(app.process_grid, grid(DEAD_END))
        self.assertEqual(app.current_grid, [[0] * 9 for _ in range(9)])
        self.assertIsNone(app.solution_grid)

    def test_corrections(self):
        answers = iter(["0,2,4", "bad", "9,0,1", "0,3,x", "0,0,", ""])
        app = SudokuApp(input_func=lambda prompt: next(answers))
        g = self.quiet(app.correct_grid, grid(PUZZLE))
        self.assertEqual(g[0][2], 4)
        self.assertEqual(g[0][0], 0)
        self.assertEqual(g[0][3], 0)

    def test_end_of_input_ends_corrections(self):
        def closed(prompt):
            raise EOFError

        app = SudokuApp(input_func=closed)
        g = self.quiet(app.correct_grid, grid(PUZZLE))
        self.assertEqual(g, grid(PUZZLE))


if __name__ == "__main__":
    unittest.main()
