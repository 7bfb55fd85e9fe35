import logging

log = logging.getLogger(__name__)

SIZE = 9
BOX_SIZE = 3
EMPTY = 0
DIGITS = range(1, SIZE + 1)


def box_origin(row, col):
    """Top-left coordinate of the 3x3 box holding (row, col)"""
    return row - row % BOX_SIZE, col - col % BOX_SIZE


def check_rows(grid):
    """No digit repeats within any row"""
    for i in range(SIZE):
        seen = set()
        for j in range(SIZE):
            value = grid[i][j]
            if value == EMPTY:
                continue
            if value in seen:
                log.debug("Duplicate %d in row %d", value, i)
                return False
            seen.add(value)
    return True


def check_columns(grid):
    """No digit repeats within any column"""
    for j in range(SIZE):
        seen = set()
        for i in range(SIZE):
            value = grid[i][j]
            if value == EMPTY:
                continue
            if value in seen:
                log.debug("Duplicate %d in column %d", value, j)
                return False
            seen.add(value)
    return True


def check_boxes(grid):
    """No digit repeats within any 3x3 box"""
    for start_row in range(0, SIZE, BOX_SIZE):
        for start_col in range(0, SIZE, BOX_SIZE):
            seen = set()
            for i in range(start_row, start_row + BOX_SIZE):
                for j in range(start_col, start_col + BOX_SIZE):
                    value = grid[i][j]
                    if value == EMPTY:
                        continue
                    if value in seen:
                        log.debug("Duplicate %d in box at (%d, %d)", value, start_row, start_col)
                        return False
                    seen.add(value)
    return True


def is_valid(grid):
    """Check that the placed digits of a grid break no Sudoku rule.

    Empty cells are ignored, so a partially filled grid is valid as long
    as no row, column or box holds the same digit twice.
    """
    return check_rows(grid) and check_columns(grid) and check_boxes(grid)


def can_place(grid, row, col, digit):
    """Check if placing digit at (row, col) is valid"""
    # Check row
    for j in range(SIZE):
        if j != col and grid[row][j] == digit:
            return False

    # Check column
    for i in range(SIZE):
        if i != row and grid[i][col] == digit:
            return False

    # Check 3x3 box
    start_row, start_col = box_origin(row, col)
    for i in range(start_row, start_row + BOX_SIZE):
        for j in range(start_col, start_col + BOX_SIZE):
            if (i, j) != (row, col) and grid[i][j] == digit:
                return False

    return True


def is_complete(grid):
    return all(grid[i][j] != EMPTY for i in range(SIZE) for j in range(SIZE))


def find_conflicts(grid):
    """Return the sorted (row, col) of every digit that clashes with another"""
    conflicts = set()
    for i in range(SIZE):
        for j in range(SIZE):
            value = grid[i][j]
            if value != EMPTY and not can_place(grid, i, j, value):
                conflicts.add((i, j))
    return sorted(conflicts)
