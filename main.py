import argparse
import copy
import logging
import sys

import cv2

from models.grid_validator import find_conflicts, is_complete
from models.sudoku_solver import SudokuSolver
from utils.grid_io import (
    GridFormatError, empty_grid, format_grid, load_grid, parse_cell, parse_grid,
    to_string
)
from utils.image_processing import save_grid_image

EXIT_OK = 0
EXIT_UNSOLVED = 1
EXIT_BAD_INPUT = 2


class SudokuApp:
    def __init__(self, max_steps=None, input_func=input):
        self.sudoku_solver = SudokuSolver(max_steps=max_steps)
        self.input_func = input_func
        self.current_grid = None
        self.solution_grid = None

    def process_grid(self, grid, image_path=None):
        """Validate and solve grid, returning an exit status"""
        self.print_grid(grid, "Puzzle:")

        # Check if the grid is valid before solving
        if not self.sudoku_solver.is_valid_sudoku(grid):
            print("The grid is invalid. Please check your input.")
            cells = ", ".join(f"[{r},{c}]" for r, c in find_conflicts(grid))
            print(f"Conflicting cells: {cells}")
            return EXIT_UNSOLVED

        if is_complete(grid):
            print("Puzzle is already complete.")
        else:
            print("Solving Sudoku...")

        solution = self.sudoku_solver.solved_copy(grid)
        if solution is not None:
            print(f"Sudoku solved! ({self.sudoku_solver.steps} placements)")
            self.print_grid(solution, "Solution:")
            print(to_string(solution))

            self.current_grid = copy.deepcopy(grid)
            self.solution_grid = solution

            if image_path:
                self.save_image(image_path)
            return EXIT_OK

        if self.sudoku_solver.budget_exhausted:
            print(f"Gave up after {self.sudoku_solver.steps} placements.")
        else:
            print("Cannot solve Sudoku with this configuration.")
        # Reset the grid in case solving is not possible
        self.reset_solution()
        return EXIT_UNSOLVED

    def save_image(self, image_path):
        """Write the current solution as an image; a failed write is only reported"""
        try:
            save_grid_image(image_path, self.current_grid, self.solution_grid)
        except (OSError, cv2.error) as e:
            print(f"Could not save image: {e}")
            return False
        print(f"Solution image saved to {image_path}")
        return True

    def correct_grid(self, grid):
        """Let the user fix cells before solving"""
        print("\nIf any digits are wrong, you can correct them.")
        print("Enter corrections in format: row,col,digit (e.g., 0,1,5); digit empty to clear")
        print("Press Enter to skip corrections")

        while True:
            try:
                correction = self.input_func("Enter correction (or press Enter to continue): ").strip()
            except EOFError:
                break
            if not correction:
                break

            parts = [p.strip() for p in correction.split(',')]
            if len(parts) != 3:
                print("Invalid format. Use: row,col,digit")
                continue

            try:
                row, col = int(parts[0]), int(parts[1])
                digit = parse_cell(parts[2])
            except ValueError:
                print("Invalid input. Use row,col values 0-8 and a digit 1-9")
                continue

            if not (0 <= row < 9 and 0 <= col < 9):
                print("Invalid values. Use row,col,digit with values 0-8 for row/col")
                continue

            grid[row][col] = digit
            print(f"Corrected cell [{row},{col}] to {digit}")
            self.print_grid(grid, "Corrected Grid:")

        return grid

    def reset_solution(self):
        """Reset current grid and solution"""
        self.current_grid = empty_grid()
        self.solution_grid = None
        print("Grid reset!")

    def print_grid(self, grid, title="Grid:"):
        """Print grid to console"""
        print(f"\n{title}")
        print(format_grid(grid))


def build_parser():
    parser = argparse.ArgumentParser(description="Validate and solve a 9x9 Sudoku puzzle.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("puzzle", nargs="?",
                        help="81 cells, 1-9 for givens and 0 or . for empty")
    source.add_argument("-f", "--file", help="read the puzzle from a text file")
    parser.add_argument("--image", help="write the solved grid as an image to this path")
    parser.add_argument("--correct", action="store_true",
                        help="edit cells interactively before solving")
    parser.add_argument("--max-steps", type=int, default=None,
                        help="give up after this many tentative placements")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    try:
        grid = load_grid(args.file) if args.file else parse_grid(args.puzzle)
    except (GridFormatError, OSError) as e:
        print(f"Error: {e}")
        return EXIT_BAD_INPUT

    app = SudokuApp(max_steps=args.max_steps)
    if args.correct:
        grid = app.correct_grid(grid)
    return app.process_grid(grid, image_path=args.image)


if __name__ == "__main__":
    sys.exit(main())
