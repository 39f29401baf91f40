"""Maze grid for the ant maze simulation."""

import math
import numpy as np
from typing import Iterable, Iterator, Optional, Tuple
from scipy.ndimage import label

GridPos = Tuple[int, int]


class MazeGrid:
    """
    Static wall/path layout shared by the pheromone field and every ant.

    Coordinate convention: (x, y) for API, [y, x] for array indexing.
    Continuous positions are measured in cell units, so cell (x, y) covers
    [x, x+1) x [y, y+1) and its centre is (x + 0.5, y + 0.5).
    """

    def __init__(self, walls: np.ndarray):
        walls = np.array(walls, dtype=bool)
        if walls.ndim != 2 or walls.size == 0:
            raise ValueError(f"Wall mask must be a non-empty 2D array, "
                             f"got shape {walls.shape}")
        # Boolean mask: True = wall (impassable)
        self.walls = walls
        self.walls.setflags(write=False)
        self.height, self.width = walls.shape

    @classmethod
    def open(cls, width: int, height: int) -> "MazeGrid":
        """Maze with a wall border and no interior walls."""
        walls = np.zeros((height, width), dtype=bool)
        walls[0, :] = walls[-1, :] = True
        walls[:, 0] = walls[:, -1] = True
        return cls(walls)

    @classmethod
    def from_layout(cls, rows: Iterable[str]) -> "MazeGrid":
        """Build a maze from text rows, '#' = wall and anything else = path."""
        rows = list(rows)
        walls = np.array([[ch == '#' for ch in row] for row in rows],
                         dtype=bool)
        return cls(walls)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_walkable(self, x: int, y: int) -> bool:
        """Check if cell is within bounds and not a wall."""
        if not self.in_bounds(x, y):
            return False
        return not self.walls[y, x]

    def to_grid(self, px: float, py: float) -> GridPos:
        """Cell containing a continuous position (may be out of range)."""
        return int(math.floor(px)), int(math.floor(py))

    def clamp_cell(self, x: int, y: int) -> GridPos:
        return (min(max(x, 0), self.width - 1),
                min(max(y, 0), self.height - 1))

    @staticmethod
    def cell_center(x: int, y: int) -> Tuple[float, float]:
        return x + 0.5, y + 0.5

    def path_cells(self) -> Iterator[GridPos]:
        ys, xs = np.nonzero(~self.walls)
        for x, y in zip(xs, ys):
            yield int(x), int(y)

    def path_components(self) -> int:
        """Number of 4-connected regions of path cells."""
        _, count = label(~self.walls)
        return int(count)

    def _ring(self, cx: int, cy: int, radius: int) -> Iterator[GridPos]:
        # Perimeter of the Chebyshev square, column-major like the scan below
        for i in range(-radius, radius + 1):
            for j in range(-radius, radius + 1):
                if abs(i) != radius and abs(j) != radius:
                    continue
                yield cx + i, cy + j

    def place_near(self, x: int, y: int) -> Optional[GridPos]:
        """
        Nearest path cell to (x, y) by expanding square rings.

        The target is clamped into the grid first. Returns None when no
        path cell lies within max(width, height) rings.
        """
        x, y = self.clamp_cell(x, y)
        if self.is_walkable(x, y):
            return (x, y)

        for radius in range(1, max(self.width, self.height)):
            for cx, cy in self._ring(x, y, radius):
                if self.is_walkable(cx, cy):
                    return (cx, cy)
        return None

    def __repr__(self) -> str:
        return f"MazeGrid({self.width}x{self.height})"
