"""Model package for the ant maze simulation."""

from .state import AntSnapshot, SimulationState
from .grid import MazeGrid
from .maze import generate_maze, MazeGenerationError
from .pheromone import PheromoneField, Channel
from .agent import Ant, AntState, Environment
from .engine import ColonySimulation, PlacementError

__all__ = [
    'AntSnapshot',
    'SimulationState',
    'MazeGrid',
    'generate_maze',
    'MazeGenerationError',
    'PheromoneField',
    'Channel',
    'Ant',
    'AntState',
    'Environment',
    'ColonySimulation',
    'PlacementError',
]
