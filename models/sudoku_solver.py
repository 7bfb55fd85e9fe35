import copy
import logging

from models.grid_validator import EMPTY, DIGITS, SIZE, can_place, is_valid

log = logging.getLogger(__name__)


class SearchBudgetExceeded(Exception):
    """Raised inside the search when the placement budget runs out"""


class SudokuSolver:
    """Fill a Sudoku grid by depth-first search with backtracking.

    Empty cells are visited in row-major order and candidate digits are
    tried in ascending order, so the same puzzle always yields the same
    completion. ``max_steps`` optionally caps the number of tentative
    placements per call; when it is hit the search gives up and ``solve``
    returns False with ``budget_exhausted`` set.
    """

    def __init__(self, max_steps=None):
        self.max_steps = max_steps
        self.steps = 0
        self.budget_exhausted = False

    def is_valid(self, grid, row, col, num):
        """Check if placing num at (row, col) is valid"""
        return can_place(grid, row, col, num)

    def solve(self, grid):
        """Solve Sudoku in place using backtracking, return True on success"""
        self.steps = 0
        self.budget_exhausted = False

        log.debug("Starting search (max_steps=%s)", self.max_steps)
        try:
            solved = self._solve_helper(grid)
        except SearchBudgetExceeded:
            self.budget_exhausted = True
            log.debug("Gave up after %d placements", self.steps)
            return False

        log.debug("Search %s after %d placements",
                  "succeeded" if solved else "exhausted", self.steps)
        return solved

    def solved_copy(self, grid):
        """Return a solved copy of grid, or None if it is invalid or unsolvable"""
        if not self.is_valid_sudoku(grid):
            return None

        # Create a copy to avoid modifying original
        solution = copy.deepcopy(grid)

        if self.solve(solution):
            return solution
        return None

    def _solve_helper(self, grid):
        """Recursive helper for solving"""
        cell = self._find_empty(grid)
        if cell is None:
            return True

        i, j = cell
        for num in DIGITS:
            if self.is_valid(grid, i, j, num):
                self._count_step()
                grid[i][j] = num

                try:
                    if self._solve_helper(grid):
                        return True
                except SearchBudgetExceeded:
                    grid[i][j] = EMPTY
                    raise

                grid[i][j] = EMPTY  # Backtrack

        return False

    def _count_step(self):
        if self.max_steps is not None and self.steps >= self.max_steps:
            raise SearchBudgetExceeded()
        self.steps += 1

    @staticmethod
    def _find_empty(grid):
        for i in range(SIZE):
            for j in range(SIZE):
                if grid[i][j] == EMPTY:
                    return i, j
        return None

    def is_valid_sudoku(self, grid):
        """Check if the current grid state is valid"""
        return is_valid(grid)
