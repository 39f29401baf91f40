"""Recursive-backtracker maze generation."""

import logging
import numpy as np
from typing import List, Tuple

from .grid import MazeGrid, GridPos

logger = logging.getLogger(__name__)

MIN_SIZE = 3

# Cells two steps away: north, east, south, west
_CARVE_STEPS = [(0, -2), (2, 0), (0, 2), (-2, 0)]


class MazeGenerationError(RuntimeError):
    """Raised when carving produces an unusable maze."""


def normalize_dimensions(cols: int, rows: int) -> Tuple[int, int]:
    """Force odd sizes (even inputs lose one) with a floor of 3 per axis."""
    cols = cols - 1 if cols % 2 == 0 else cols
    rows = rows - 1 if rows % 2 == 0 else rows
    return max(cols, MIN_SIZE), max(rows, MIN_SIZE)


def generate_maze(requested_cols: int, requested_rows: int,
                  rng: np.random.Generator) -> Tuple[MazeGrid, int, int]:
    """
    Carve a perfect maze with a randomized depth-first search.

    Cell centres sit on odd coordinates and the walls between them on even
    coordinates. Every carved cell is reachable from the start cell by
    exactly one simple path. Cells (1, 1) and (cols-2, rows-2) are forced
    open afterwards so the colony and food can be seeded near the corners.

    Returns the grid and the actual (odd) column and row counts.
    """
    cols, rows = normalize_dimensions(requested_cols, requested_rows)
    if cols < MIN_SIZE or rows < MIN_SIZE:
        raise MazeGenerationError(f"Degenerate maze size {cols}x{rows}")

    walls = np.ones((rows, cols), dtype=bool)
    visited = np.zeros((rows, cols), dtype=bool)

    start_x = int(rng.integers(0, (cols - 1) // 2)) * 2 + 1
    start_y = int(rng.integers(0, (rows - 1) // 2)) * 2 + 1
    visited[start_y, start_x] = True
    walls[start_y, start_x] = False
    stack: List[GridPos] = [(start_x, start_y)]

    while stack:
        x, y = stack[-1]
        neighbors = []
        for dx, dy in _CARVE_STEPS:
            nx, ny = x + dx, y + dy
            if (0 < nx < cols - 1 and 0 < ny < rows - 1
                    and not visited[ny, nx]):
                neighbors.append((nx, ny))

        if not neighbors:
            stack.pop()
            continue

        nx, ny = neighbors[int(rng.integers(len(neighbors)))]
        # Knock down the wall between current and chosen
        walls[y + (ny - y) // 2, x + (nx - x) // 2] = False
        visited[ny, nx] = True
        walls[ny, nx] = False
        stack.append((nx, ny))

    walls[1, 1] = False
    walls[rows - 2, cols - 2] = False

    grid = MazeGrid(walls)
    components = grid.path_components()
    if components != 1:
        raise MazeGenerationError(
            f"Carved maze has {components} disconnected regions")

    logger.info("Generated %dx%d maze from start (%d, %d)",
                cols, rows, start_x, start_y)
    return grid, cols, rows
