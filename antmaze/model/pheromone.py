"""Two-channel pheromone field for the ant maze simulation."""

from enum import Enum
import numpy as np

# Concentrations below this are snapped to zero after evaporation
EPSILON = 0.01


class Channel(Enum):
    """Trail laid by searching ants (explore) or returning ants (return)."""
    EXPLORE = "explore"
    RETURN = "return"


class PheromoneField:
    """
    Time-varying trail concentrations for both channels.

    Values always stay within [0, max_value]. Decay is multiplicative, so
    old trails fade exponentially while reinforced ones persist.
    """

    def __init__(self, grid_width: int, grid_height: int,
                 max_value: float = 255.0):
        if max_value <= 0:
            raise ValueError(f"max_value must be > 0, got {max_value}")
        self.width = grid_width
        self.height = grid_height
        self.max_value = max_value

        self.explore = np.zeros((grid_height, grid_width), dtype=np.float64)
        self.return_ = np.zeros((grid_height, grid_width), dtype=np.float64)

    def grid(self, channel: Channel) -> np.ndarray:
        if channel is Channel.EXPLORE:
            return self.explore
        return self.return_

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def evaporate(self, rate: float) -> None:
        """
        Apply one tick of decay to both channels.
        Formula: P(t+1) = (1 - rate) * P(t), zeroed where below EPSILON.
        """
        if not 0.0 <= rate <= 1.0:
            raise ValueError(f"Evaporation rate must be in [0, 1], got {rate}")
        keep = 1.0 - rate
        for field in (self.explore, self.return_):
            field *= keep
            field[field < EPSILON] = 0.0

    def deposit(self, channel: Channel, x: int, y: int,
                amount: float) -> None:
        """Add pheromone at a cell, clamped to max_value."""
        if amount < 0:
            raise ValueError(f"Deposit amount must be >= 0, got {amount}")
        if not self.in_bounds(x, y):
            return
        field = self.grid(channel)
        field[y, x] = min(field[y, x] + amount, self.max_value)

    def query(self, channel: Channel, x: int, y: int) -> float:
        """Return concentration at position, 0 outside the grid."""
        if not self.in_bounds(x, y):
            return 0.0
        return float(self.grid(channel)[y, x])

    def total(self, channel: Channel) -> float:
        return float(self.grid(channel).sum())
