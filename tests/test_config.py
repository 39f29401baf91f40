"""
Tests for configuration loading and validation.
"""

import math

import pytest
import yaml

from antmaze.config import (
    ColonyConfig,
    SimulationConfig,
    config_from_dict,
    load_config,
)


class TestDefaults:

    def test_defaults_match_reference_colony(self):
        config = SimulationConfig.default()
        assert (config.grid.cols, config.grid.rows) == (20, 16)
        assert config.colony.num_ants == 600
        assert config.pheromone.evaporation_rate == 0.005
        assert config.pheromone.pheromone_max == 255.0
        assert config.ants.turn_angle == pytest.approx(math.pi / 6)
        assert config.ants.history_length == 20

    def test_initial_burst(self):
        assert ColonyConfig(num_ants=600).initial_burst == 60
        assert ColonyConfig(num_ants=5).initial_burst == 1
        assert ColonyConfig(num_ants=0).initial_burst == 0
        assert ColonyConfig(num_ants=3, initial_ants=10).initial_burst == 3

    def test_initial_burst_rounds_up(self):
        """A cap that is not a multiple of ten still seeds a tenth, rounded up."""
        assert ColonyConfig(num_ants=15).initial_burst == 2
        assert ColonyConfig(num_ants=1).initial_burst == 1

    def test_empty_mapping_gives_defaults(self):
        config = config_from_dict(None)
        assert config.colony.spawn_interval == ColonyConfig().spawn_interval


class TestLoading:

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "colony.yaml"
        path.write_text(yaml.safe_dump({
            'grid': {'cols': 31, 'rows': 21},
            'colony': {'num_ants': 50, 'initial_ants': 5, 'spawn_interval': 2},
            'pheromone': {'evaporation_rate': 0.02, 'max': 100, 'duration': 300},
            'ants': {'turn_angle': 45, 'sense_angle': 90, 'speed': 0.5},
            'simulation': {'max_steps': 10, 'seed': 11},
            'export': {'gif': True},
        }))
        config = load_config(path)
        assert (config.grid.cols, config.grid.rows) == (31, 21)
        assert config.colony.initial_burst == 5
        assert config.pheromone.pheromone_max == 100.0
        assert config.pheromone.pheromone_duration == 300
        assert config.ants.turn_angle == pytest.approx(math.pi / 4)
        assert config.ants.sense_angle == pytest.approx(math.pi / 2)
        assert config.ants.speed == 0.5
        assert config.max_steps == 10
        assert config.seed == 11
        assert config.gif_enabled is True

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")


class TestValidation:

    @pytest.mark.parametrize("section,key,value", [
        ('grid', 'cols', 0),
        ('colony', 'num_ants', -1),
        ('pheromone', 'evaporation_rate', 1.5),
        ('pheromone', 'deposition_rate_return', -2.0),
        ('pheromone', 'max', 0),
        ('ants', 'speed', 0),
        ('ants', 'history_length', 0),
        ('ants', 'random_turn_chance', 2.0),
        ('ants', 'sense_radius', -1.0),
        ('ants', 'goal_sense_radius', -0.5),
        ('ants', 'food_detection_radius', -1),
        ('ants', 'colony_detection_radius', -1),
        ('ants', 'follow_strength_weight', -5),
    ])
    def test_bad_values_rejected(self, section, key, value):
        with pytest.raises(ValueError):
            config_from_dict({section: {key: value}})

    def test_seed_cast_to_int(self):
        config = config_from_dict({'simulation': {'seed': '42'}})
        assert config.seed == 42

    def test_bad_seed_rejected(self):
        with pytest.raises(ValueError):
            config_from_dict({'simulation': {'seed': 'abc'}})

    def test_even_grid_is_not_an_error(self):
        config = config_from_dict({'grid': {'cols': 10, 'rows': 8}})
        assert config.grid.cols == 10
