"""Simulation engine for the ant maze colony."""

import logging
import numpy as np
from typing import List, Dict, Optional, TYPE_CHECKING

from .grid import MazeGrid, GridPos
from .maze import generate_maze
from .agent import Ant, AntState, Environment
from .pheromone import PheromoneField, Channel
from .state import SimulationState

if TYPE_CHECKING:
    from ..config import SimulationConfig

logger = logging.getLogger(__name__)


class PlacementError(RuntimeError):
    """No path cell could be found for the colony or the food."""


class ColonySimulation:
    """
    Orchestrates the discrete-time foraging loop.

    Each tick:
    1. Evaporate both pheromone channels
    2. Update every ant in spawn order (sense, move, deposit)
    3. Admit one new ant at the colony if the cap and cadence allow
    4. Return a state snapshot

    Ants see deposits made by ants earlier in the same tick.
    """

    def __init__(self, config: "SimulationConfig",
                 maze: Optional[MazeGrid] = None,
                 colony_target: Optional[GridPos] = None,
                 food_target: Optional[GridPos] = None,
                 rng: Optional[np.random.Generator] = None):
        config.validate()
        self.config = config
        self.current_step = 0
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)

        # Initialize maze
        if maze is None:
            maze, _, _ = generate_maze(
                config.grid.cols, config.grid.rows, self.rng)
        self.maze = maze

        self.field = PheromoneField(
            maze.width, maze.height, config.pheromone.pheromone_max)

        # Colony and food near opposite corners unless told otherwise
        if colony_target is None:
            colony_target = (1, 1)
        if food_target is None:
            food_target = (maze.width - 2, maze.height - 2)
        self.colony_pos = self._place(colony_target, "colony")
        self.food_pos = self._place(food_target, "food")
        logger.info("Colony at %s, food at %s", self.colony_pos, self.food_pos)

        self.env = Environment(maze=self.maze, field=self.field,
                               colony=self.colony_pos, food=self.food_pos)

        # Initialize ants
        self.ants: List[Ant] = []
        self._next_id = 1
        self.last_spawn_step = 0
        for _ in range(config.colony.initial_burst):
            self.spawn_ant()

        # Metrics tracking
        self.food_found_count = 0
        self.first_delivery_step: Optional[int] = None

    def place_near(self, target: GridPos) -> Optional[GridPos]:
        """Nearest path cell to target by ring search, or None."""
        return self.maze.place_near(*target)

    def _place(self, target: GridPos, what: str) -> GridPos:
        pos = self.place_near(target)
        if pos is None:
            logger.error("Could not place %s near %s: no path cell", what,
                         target)
            raise PlacementError(
                f"Could not place {what} on a valid path near {target}")
        return pos

    def spawn_ant(self, heading: Optional[float] = None) -> Optional[Ant]:
        """Add one ant at the colony, unless the population cap is reached."""
        if len(self.ants) >= self.config.colony.num_ants:
            return None
        ant = Ant(
            ant_id=self._next_id,
            cell=self.colony_pos,
            params=self.config.ants,
            pheromone=self.config.pheromone,
            rng=self.rng,
            heading=heading
        )
        self._next_id += 1
        self.ants.append(ant)
        self.last_spawn_step = self.current_step
        logger.debug("Spawned ant %d at step %d", ant.id, self.current_step)
        return ant

    def _spawn_due(self) -> bool:
        return (len(self.ants) < self.config.colony.num_ants
                and self.current_step - self.last_spawn_step
                >= self.config.colony.spawn_interval)

    def tick(self) -> SimulationState:
        """Execute one discrete time step."""
        self.current_step += 1

        # Decay strictly precedes this tick's deposits
        self.field.evaporate(self.config.pheromone.evaporation_rate)

        for ant in self.ants:
            if ant.update(self.env):
                self.food_found_count += 1
                if self.first_delivery_step is None:
                    self.first_delivery_step = self.current_step

        if self._spawn_due():
            self.spawn_ant()

        return self.snapshot()

    def run(self, steps: int) -> Optional[SimulationState]:
        """Advance several ticks and return the last snapshot."""
        state = None
        for _ in range(steps):
            state = self.tick()
        return state

    def snapshot(self) -> SimulationState:
        """Create immutable snapshot of current simulation state."""
        ant_snapshots = [a.snapshot() for a in self.ants]
        searching = sum(1 for a in self.ants if a.state is AntState.SEARCHING)

        metrics = {
            'population': len(self.ants),
            'searching': searching,
            'returning': len(self.ants) - searching,
            'food_found': self.food_found_count,
            'explore_total': self.field.total(Channel.EXPLORE),
            'return_total': self.field.total(Channel.RETURN),
        }

        return SimulationState(
            step=self.current_step,
            ants=ant_snapshots,
            walls=self.maze.walls.copy(),
            explore_field=self.field.explore.copy(),
            return_field=self.field.return_.copy(),
            colony=self.colony_pos,
            food=self.food_pos,
            food_found=self.food_found_count,
            metrics=metrics
        )

    def is_finished(self) -> bool:
        """Check if simulation should terminate."""
        return self.current_step >= self.config.max_steps

    def get_summary(self) -> Dict:
        """Get summary statistics for the simulation."""
        return {
            'total_steps': self.current_step,
            'maze_size': (self.maze.width, self.maze.height),
            'ants_total': len(self.ants),
            'food_found': self.food_found_count,
            'first_delivery_step': self.first_delivery_step,
            'delivery_rate': self.food_found_count / max(1, self.current_step)
        }
