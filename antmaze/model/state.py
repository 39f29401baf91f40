"""State snapshot dataclasses for the ant maze simulation."""

from dataclasses import dataclass
from typing import List, Dict, Tuple
import numpy as np


@dataclass(frozen=True)
class AntSnapshot:
    """Immutable snapshot of an ant's state at a given tick."""
    ant_id: int
    x: float
    y: float
    heading: float
    state: str  # "searching", "returning"
    grid_x: int
    grid_y: int


@dataclass
class SimulationState:
    """
    Complete read-only view of the simulation after a tick.

    Arrays are copies; renderers may keep them across ticks.
    """
    step: int
    ants: List[AntSnapshot]
    walls: np.ndarray            # Maze wall mask, [y, x]
    explore_field: np.ndarray    # Copy of explore pheromone grid
    return_field: np.ndarray     # Copy of return pheromone grid
    colony: Tuple[int, int]
    food: Tuple[int, int]
    food_found: int
    metrics: Dict[str, float]    # population, trail mass, etc.

    def count(self, state: str) -> int:
        return sum(1 for a in self.ants if a.state == state)
