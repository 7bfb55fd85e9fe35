from models.grid_validator import EMPTY, SIZE

SEPARATORS = set("|-+")
EMPTY_MARKS = set("0.")


class GridFormatError(ValueError):
    pass


def empty_grid():
    return [[EMPTY] * SIZE for _ in range(SIZE)]


def parse_cell(text):
    """Turn a single cell's text entry into a digit, 0 for empty"""
    if text == "":
        return EMPTY
    if len(text) == 1 and text in "123456789":
        return int(text)
    raise GridFormatError(f"Cell entry must be a single digit 1-9, got {text!r}")


def parse_grid(text):
    """Parse 81 cells of puzzle text into a 9x9 grid.

    Digits 1-9 are givens, '0' or '.' mark empty cells. Whitespace and the
    box separators written by format_grid are skipped, so printed grids can
    be read back.
    """
    cells = []
    for ch in text:
        if ch.isspace() or ch in SEPARATORS:
            continue
        if ch in EMPTY_MARKS:
            cells.append(EMPTY)
        elif ch in "123456789":
            cells.append(int(ch))
        else:
            raise GridFormatError(f"Unexpected character {ch!r} in puzzle")

    if len(cells) != SIZE * SIZE:
        raise GridFormatError(f"Puzzle must have {SIZE * SIZE} cells, got {len(cells)}")

    return [cells[i * SIZE:(i + 1) * SIZE] for i in range(SIZE)]


def load_grid(path):
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except UnicodeDecodeError:
        raise GridFormatError(f"{path} is not a text file") from None
    return parse_grid(text)


def to_string(grid):
    return "".join(str(int(grid[i][j])) for i in range(SIZE) for j in range(SIZE))


def format_grid(grid):
    """Render grid as text, '.' for empty cells"""
    lines = []
    for i in range(SIZE):
        if i % 3 == 0 and i != 0:
            lines.append("------+-------+------")

        row_str = ""
        for j in range(SIZE):
            if j % 3 == 0 and j != 0:
                row_str += "| "
            cell = int(grid[i][j])
            row_str += str(cell if cell != EMPTY else '.') + " "

        lines.append(row_str.rstrip())
    return "\n".join(lines)
