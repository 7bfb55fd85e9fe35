import cv2
import numpy as np

from models.grid_validator import EMPTY, SIZE

CELL_SIZE = 50

# BGR colours
BACKGROUND = (255, 255, 255)
LINE_COLOR = (0, 0, 0)
GIVEN_COLOR = (255, 0, 0)     # blue for digits from the puzzle
SOLVED_COLOR = (0, 150, 0)    # green for digits filled by the solver


def render_grid(original_grid, solution_grid, cell_size=CELL_SIZE):
    """Draw solution_grid, colouring cells by whether they were given"""
    side = cell_size * SIZE
    image = np.full((side, side, 3), BACKGROUND, dtype=np.uint8)

    # Draw grid lines
    for i in range(SIZE + 1):
        thickness = 3 if i % 3 == 0 else 1
        cv2.line(image, (i * cell_size, 0), (i * cell_size, side), LINE_COLOR, thickness)
        cv2.line(image, (0, i * cell_size), (side, i * cell_size), LINE_COLOR, thickness)

    # Draw numbers
    scale = cell_size / 62.5
    for i in range(SIZE):
        for j in range(SIZE):
            digit = int(solution_grid[i][j])
            if digit == EMPTY:
                continue

            x = j * cell_size + cell_size // 2
            y = i * cell_size + cell_size // 2
            color = GIVEN_COLOR if original_grid[i][j] != EMPTY else SOLVED_COLOR

            (w, h), _ = cv2.getTextSize(str(digit), cv2.FONT_HERSHEY_SIMPLEX, scale, 2)
            cv2.putText(image, str(digit), (x - w // 2, y + h // 2),
                        cv2.FONT_HERSHEY_SIMPLEX, scale, color, 2)

    return image


def save_grid_image(path, original_grid, solution_grid, cell_size=CELL_SIZE):
    image = render_grid(original_grid, solution_grid, cell_size)
    if not cv2.imwrite(str(path), image):
        raise IOError(f"Could not write image to {path}")
    return image
