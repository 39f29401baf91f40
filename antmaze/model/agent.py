"""Foraging ant agent: sensing, steering, movement and trail laying."""

import math
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Optional, Tuple
import numpy as np

from .grid import MazeGrid, GridPos
from .pheromone import PheromoneField, Channel
from .state import AntSnapshot
from ..config import AntConfig, PheromoneConfig

# Fractions of the sense radius at which each cone direction is probed
SENSE_DISTANCES = (0.5, 1.0)
SENSE_DIRECTIONS = 5


class AntState(Enum):
    """Possible states for an ant. There is no terminal state."""
    SEARCHING = "searching"
    RETURNING = "returning"


@dataclass
class Environment:
    """Shared world an ant reads and writes during its update."""
    maze: MazeGrid
    field: PheromoneField
    colony: GridPos
    food: GridPos


def wrap_angle(angle: float) -> float:
    """Normalize an angle into (-pi, pi]."""
    while angle > math.pi:
        angle -= 2 * math.pi
    while angle <= -math.pi:
        angle += 2 * math.pi
    return angle


def turn_toward(current: float, desired: float, max_turn: float) -> float:
    """Rotate from current toward desired by at most max_turn, shortest way."""
    diff = wrap_angle(desired - current)
    turn = min(max(diff, -max_turn), max_turn)
    return wrap_angle(current + turn)


def grid_distance(a: GridPos, b: GridPos) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


class Ant:
    """
    Single forager cycling between searching for food and returning home.

    Searching ants lay the explore trail and follow the return trail;
    returning ants lay the return trail and follow the explore trail. Trail
    strength fades as the charge granted at each state change runs down.
    """

    def __init__(self, ant_id: int,
                 cell: GridPos,
                 params: AntConfig,
                 pheromone: PheromoneConfig,
                 rng: np.random.Generator,
                 heading: Optional[float] = None):
        self.id = ant_id
        self.params = params
        self.pheromone = pheromone
        self.rng = rng

        self.x, self.y = MazeGrid.cell_center(*cell)
        self.grid_x, self.grid_y = cell
        if heading is None:
            heading = rng.uniform(-math.pi, math.pi)
        self.heading = wrap_angle(heading)

        self.state = AntState.SEARCHING
        self.charge = pheromone.pheromone_duration
        self.history: Deque[GridPos] = deque(maxlen=params.history_length)
        self.deliveries = 0

    @property
    def cell(self) -> GridPos:
        return (self.grid_x, self.grid_y)

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def update(self, env: Environment) -> bool:
        """
        Advance one tick. Returns True when the ant delivered food to the
        colony on this tick.
        """
        self.update_grid_pos(env.maze)
        delivered = self.check_environment(env)
        self.charge = max(0, self.charge - 1)
        self.move(env)
        self.deposit_pheromone(env.field)
        self.add_to_history()
        return delivered

    def update_grid_pos(self, maze: MazeGrid) -> None:
        gx, gy = maze.to_grid(self.x, self.y)
        self.grid_x, self.grid_y = maze.clamp_cell(gx, gy)

    def check_environment(self, env: Environment) -> bool:
        """Fire state transitions when close enough to food or colony."""
        if self.state is AntState.SEARCHING:
            if (grid_distance(self.cell, env.food)
                    <= self.params.food_detection_radius):
                self.state = AntState.RETURNING
                self.heading = wrap_angle(self.heading + math.pi)
                self.charge = self.pheromone.pheromone_duration
            return False

        if (grid_distance(self.cell, env.colony)
                <= self.params.colony_detection_radius):
            self.state = AntState.SEARCHING
            self.heading = self.rng.uniform(-math.pi, math.pi)
            self.charge = self.pheromone.pheromone_duration
            self.deliveries += 1
            return True
        return False

    def goal(self, env: Environment) -> GridPos:
        return env.food if self.state is AntState.SEARCHING else env.colony

    def followed_channel(self) -> Channel:
        """Searching ants follow the return trail and vice versa."""
        if self.state is AntState.SEARCHING:
            return Channel.RETURN
        return Channel.EXPLORE

    def laid_channel(self) -> Channel:
        if self.state is AntState.SEARCHING:
            return Channel.EXPLORE
        return Channel.RETURN

    def was_recently_visited(self, x: int, y: int) -> bool:
        """Check history, ignoring the most recent entry."""
        recent = list(self.history)[:-1]
        return (x, y) in recent

    def sense_and_decide_angle(self, env: Environment) -> float:
        """
        Choose the desired heading for this tick.

        Near the goal the ant homes straight in. Otherwise it probes a cone
        ahead of it and picks the direction with the strongest goal-directed
        trail, plus a small jitter to break ties.
        """
        params = self.params
        goal = self.goal(env)
        if grid_distance(self.cell, goal) <= params.goal_sense_radius:
            gx, gy = MazeGrid.cell_center(*goal)
            return math.atan2(gy - self.y, gx - self.x)

        channel = self.followed_channel()
        jitter_max = self.pheromone.pheromone_max * 0.1
        step = params.sense_angle / (SENSE_DIRECTIONS - 1)
        best_angle = self.heading
        best_score = -1.0

        for k in range(SENSE_DIRECTIONS):
            angle = self.heading - params.sense_angle / 2 + k * step
            dx, dy = math.cos(angle), math.sin(angle)
            for fraction in SENSE_DISTANCES:
                reach = params.sense_radius * fraction
                cx, cy = env.maze.to_grid(self.x + dx * reach,
                                          self.y + dy * reach)
                if (not env.maze.is_walkable(cx, cy)
                        or self.was_recently_visited(cx, cy)):
                    continue
                score = (env.field.query(channel, cx, cy)
                         * params.follow_strength_weight)
                score += self.rng.uniform(0, jitter_max)
                if score > best_score:
                    best_score = score
                    best_angle = angle

        if best_score <= 0:
            half = params.turn_angle * 0.5
            best_angle = self.heading + self.rng.uniform(-half, half)
        return wrap_angle(best_angle)

    def move(self, env: Environment) -> bool:
        """
        Steer and step forward. A blocked step leaves the ant in place and
        picks a fresh random heading for the next attempt.
        """
        params = self.params
        desired = self.sense_and_decide_angle(env)
        heading = turn_toward(self.heading, desired, params.turn_angle)
        if self.rng.random() < params.random_turn_chance:
            half = params.turn_angle * 0.5
            heading += self.rng.uniform(-half, half)
        self.heading = wrap_angle(heading)

        next_x = self.x + math.cos(self.heading) * params.speed
        next_y = self.y + math.sin(self.heading) * params.speed
        moved = env.maze.is_walkable(*env.maze.to_grid(next_x, next_y))
        if moved:
            self.x, self.y = next_x, next_y
        else:
            self.heading = self.rng.uniform(-math.pi, math.pi)

        self.x = min(max(self.x, 0.0), float(env.maze.width))
        self.y = min(max(self.y, 0.0), float(env.maze.height))
        self.update_grid_pos(env.maze)
        return moved

    def deposition_amount(self) -> float:
        """Deposit rate ramped linearly down with the remaining charge."""
        duration = self.pheromone.pheromone_duration
        if self.charge <= 0 or duration <= 0:
            return 0.0
        if self.state is AntState.SEARCHING:
            rate = self.pheromone.deposition_rate_explore
        else:
            rate = self.pheromone.deposition_rate_return
        return max(0.0, rate * self.charge / duration)

    def deposit_pheromone(self, field: PheromoneField) -> None:
        if self.charge <= 0 or not field.in_bounds(self.grid_x, self.grid_y):
            return
        field.deposit(self.laid_channel(), self.grid_x, self.grid_y,
                      self.deposition_amount())

    def add_to_history(self) -> None:
        """Record the current cell unless it repeats the last entry."""
        if not self.history or self.history[-1] != self.cell:
            self.history.append(self.cell)

    def snapshot(self) -> AntSnapshot:
        return AntSnapshot(
            ant_id=self.id,
            x=self.x,
            y=self.y,
            heading=self.heading,
            state=self.state.value,
            grid_x=self.grid_x,
            grid_y=self.grid_y
        )

    def __repr__(self) -> str:
        return (f"Ant(id={self.id}, pos=({self.x:.2f}, {self.y:.2f}), "
                f"state={self.state.value})")
