"""Shared fixtures for the ant maze tests."""

import dataclasses
import pytest
import numpy as np

from antmaze.config import AntConfig, PheromoneConfig, SimulationConfig
from antmaze.model.grid import MazeGrid
from antmaze.model.pheromone import PheromoneField
from antmaze.model.agent import Ant, Environment


def make_params(**overrides) -> AntConfig:
    return dataclasses.replace(AntConfig(), **overrides)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def open_maze():
    """21x21 maze with only the border walled."""
    return MazeGrid.open(21, 21)


@pytest.fixture
def open_env(open_maze):
    field = PheromoneField(open_maze.width, open_maze.height, 255.0)
    return Environment(maze=open_maze, field=field,
                       colony=(1, 1), food=(19, 19))


@pytest.fixture
def make_ant(rng):
    def _make(cell, heading=0.0, pheromone=None, **overrides):
        return Ant(
            ant_id=1,
            cell=cell,
            params=make_params(**overrides),
            pheromone=pheromone or PheromoneConfig(),
            rng=rng,
            heading=heading
        )
    return _make


@pytest.fixture
def small_config():
    config = SimulationConfig.default()
    config.colony.num_ants = 20
    config.colony.initial_ants = 2
    config.colony.spawn_interval = 3
    config.seed = 7
    return config
