"""Configuration dataclasses and YAML loader for the ant maze simulation."""

import math
from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from pathlib import Path
import yaml


@dataclass
class GridConfig:
    cols: int = 20  # requested; the maze generator forces odd sizes
    rows: int = 16


@dataclass
class ColonyConfig:
    num_ants: int = 600
    initial_ants: Optional[int] = None  # defaults to ceil(num_ants / 10)
    spawn_interval: int = 6  # ticks between admissions

    @property
    def initial_burst(self) -> int:
        if self.initial_ants is not None:
            return min(self.initial_ants, self.num_ants)
        return math.ceil(self.num_ants / 10)


@dataclass
class PheromoneConfig:
    evaporation_rate: float = 0.005
    deposition_rate_explore: float = 15.0
    deposition_rate_return: float = 15.0
    pheromone_max: float = 255.0
    pheromone_duration: int = 5000  # charge granted per state transition


@dataclass
class AntConfig:
    speed: float = 1.0               # cells per tick
    sense_radius: float = 1.1        # cells
    sense_angle: float = math.pi / 2.5
    goal_sense_radius: float = 2.0
    turn_angle: float = math.pi / 6
    follow_strength_weight: float = 5.0
    random_turn_chance: float = 0.1
    food_detection_radius: float = 1.0
    colony_detection_radius: float = 1.0
    history_length: int = 20


@dataclass
class SimulationConfig:
    grid: GridConfig = field(default_factory=GridConfig)
    colony: ColonyConfig = field(default_factory=ColonyConfig)
    pheromone: PheromoneConfig = field(default_factory=PheromoneConfig)
    ants: AntConfig = field(default_factory=AntConfig)
    max_steps: int = 2000

    # Export flags (can be overridden by CLI)
    snapshot_enabled: bool = True
    gif_enabled: bool = False
    quiet: bool = False
    seed: Optional[int] = None
    out_dir: Path = field(default_factory=lambda: Path("./output"))

    @classmethod
    def default(cls) -> "SimulationConfig":
        return cls()

    def validate(self) -> None:
        """Raise ValueError on settings the engine cannot run with."""
        if self.grid.cols < 1 or self.grid.rows < 1:
            raise ValueError(
                f"Grid dimensions must be positive, got "
                f"{self.grid.cols}x{self.grid.rows}")
        if self.colony.num_ants < 0:
            raise ValueError("num_ants must be >= 0")
        if self.colony.initial_ants is not None and self.colony.initial_ants < 0:
            raise ValueError("initial_ants must be >= 0")
        if self.colony.spawn_interval < 0:
            raise ValueError("spawn_interval must be >= 0")

        ph = self.pheromone
        if not 0.0 <= ph.evaporation_rate <= 1.0:
            raise ValueError(
                f"evaporation_rate must be in [0, 1], got {ph.evaporation_rate}")
        if ph.deposition_rate_explore < 0 or ph.deposition_rate_return < 0:
            raise ValueError("Deposition rates must be >= 0")
        if ph.pheromone_max <= 0:
            raise ValueError("pheromone_max must be > 0")
        if ph.pheromone_duration < 0:
            raise ValueError("pheromone_duration must be >= 0")

        ants = self.ants
        if ants.speed <= 0:
            raise ValueError("Ant speed must be > 0")
        if ants.history_length < 1:
            raise ValueError("history_length must be >= 1")
        if not 0.0 <= ants.random_turn_chance <= 1.0:
            raise ValueError("random_turn_chance must be in [0, 1]")
        if ants.turn_angle < 0 or ants.sense_angle < 0:
            raise ValueError("Angles must be >= 0")
        for name in ('sense_radius', 'goal_sense_radius',
                     'food_detection_radius', 'colony_detection_radius',
                     'follow_strength_weight'):
            if getattr(ants, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(ants, name)}")
        if self.max_steps < 0:
            raise ValueError("max_steps must be >= 0")


def _angle(raw: Dict[str, Any], key: str, default: float) -> float:
    """Read an angle given in degrees, returning radians."""
    if key in raw:
        return math.radians(float(raw[key]))
    return default


def _parse_ants(ants_raw: Dict[str, Any]) -> AntConfig:
    defaults = AntConfig()
    return AntConfig(
        speed=float(ants_raw.get('speed', defaults.speed)),
        sense_radius=float(ants_raw.get('sense_radius', defaults.sense_radius)),
        sense_angle=_angle(ants_raw, 'sense_angle', defaults.sense_angle),
        goal_sense_radius=float(
            ants_raw.get('goal_sense_radius', defaults.goal_sense_radius)),
        turn_angle=_angle(ants_raw, 'turn_angle', defaults.turn_angle),
        follow_strength_weight=float(
            ants_raw.get('follow_strength_weight',
                         defaults.follow_strength_weight)),
        random_turn_chance=float(
            ants_raw.get('random_turn_chance', defaults.random_turn_chance)),
        food_detection_radius=float(
            ants_raw.get('food_detection_radius',
                         defaults.food_detection_radius)),
        colony_detection_radius=float(
            ants_raw.get('colony_detection_radius',
                         defaults.colony_detection_radius)),
        history_length=int(
            ants_raw.get('history_length', defaults.history_length)),
    )


def _parse_pheromone(ph_raw: Dict[str, Any]) -> PheromoneConfig:
    defaults = PheromoneConfig()
    return PheromoneConfig(
        evaporation_rate=float(
            ph_raw.get('evaporation_rate', defaults.evaporation_rate)),
        deposition_rate_explore=float(
            ph_raw.get('deposition_rate_explore',
                       defaults.deposition_rate_explore)),
        deposition_rate_return=float(
            ph_raw.get('deposition_rate_return',
                       defaults.deposition_rate_return)),
        pheromone_max=float(ph_raw.get('max', defaults.pheromone_max)),
        pheromone_duration=int(
            ph_raw.get('duration', defaults.pheromone_duration)),
    )


def config_from_dict(raw: Optional[Dict[str, Any]]) -> SimulationConfig:
    """Build a validated config from an already-parsed YAML mapping."""
    raw = raw or {}

    grid_raw = raw.get('grid', {})
    grid = GridConfig(
        cols=int(grid_raw.get('cols', GridConfig.cols)),
        rows=int(grid_raw.get('rows', GridConfig.rows))
    )

    colony_raw = raw.get('colony', {})
    initial = colony_raw.get('initial_ants')
    colony = ColonyConfig(
        num_ants=int(colony_raw.get('num_ants', ColonyConfig.num_ants)),
        initial_ants=int(initial) if initial is not None else None,
        spawn_interval=int(
            colony_raw.get('spawn_interval', ColonyConfig.spawn_interval))
    )

    sim_raw = raw.get('simulation', {})
    seed = sim_raw.get('seed')
    export_raw = raw.get('export', {})

    config = SimulationConfig(
        grid=grid,
        colony=colony,
        pheromone=_parse_pheromone(raw.get('pheromone', {})),
        ants=_parse_ants(raw.get('ants', {})),
        max_steps=int(sim_raw.get('max_steps', SimulationConfig.max_steps)),
        seed=int(seed) if seed is not None else None,
        snapshot_enabled=export_raw.get('snapshot', True),
        gif_enabled=export_raw.get('gif', False)
    )
    config.validate()
    return config


def load_config(config_path: Path) -> SimulationConfig:
    """Load and validate YAML configuration file."""
    with open(config_path) as f:
        raw = yaml.safe_load(f)
    return config_from_dict(raw)
