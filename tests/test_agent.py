"""
Tests for the foraging ant: transitions, sensing, steering, movement,
deposition and loop-avoidance memory.
"""

import math

import numpy as np
import pytest

from antmaze.config import PheromoneConfig
from antmaze.model.agent import (
    AntState,
    Environment,
    turn_toward,
    wrap_angle,
)
from antmaze.model.grid import MazeGrid
from antmaze.model.pheromone import PheromoneField, Channel


def env_for(maze, colony=(1, 1), food=(50, 50)):
    field = PheromoneField(maze.width, maze.height, 255.0)
    return Environment(maze=maze, field=field, colony=colony, food=food)


class TestAngles:
    """Angle helpers."""

    def test_wrap_angle_range(self):
        for angle in np.linspace(-10, 10, 101):
            wrapped = wrap_angle(angle)
            assert -math.pi < wrapped <= math.pi
            assert math.isclose(math.cos(wrapped), math.cos(angle), abs_tol=1e-9)

    def test_turn_is_bounded(self, rng):
        """Heading never changes by more than the turn angle."""
        max_turn = math.pi / 6
        for _ in range(500):
            current, desired = rng.uniform(-math.pi, math.pi, size=2)
            new = turn_toward(current, desired, max_turn)
            assert abs(wrap_angle(new - current)) <= max_turn + 1e-9

    def test_small_turn_reaches_target(self):
        assert turn_toward(0.1, 0.2, math.pi / 6) == pytest.approx(0.2)

    def test_turns_the_short_way(self):
        # Crossing the +/-pi seam is a 0.1 rad turn
        new = turn_toward(math.pi - 0.05, -math.pi + 0.05, math.pi / 6)
        assert new == pytest.approx(-math.pi + 0.05)


class TestStateTransitions:
    """Searching <-> Returning."""

    def test_food_at_detection_radius_triggers_return(self, make_ant):
        maze = MazeGrid.open(9, 9)
        env = env_for(maze, colony=(7, 7), food=(3, 1))
        ant = make_ant((2, 1), heading=0.0, food_detection_radius=1.0)
        ant.update(env)
        assert ant.state is AntState.RETURNING

    def test_food_beyond_radius_does_not_trigger(self, make_ant):
        maze = MazeGrid.open(9, 9)
        env = env_for(maze, colony=(7, 7), food=(3, 1))
        ant = make_ant((1, 1), heading=0.0, food_detection_radius=1.0)
        ant.update(env)
        assert ant.state is AntState.SEARCHING

    def test_finding_food_reverses_heading_and_recharges(self, make_ant):
        maze = MazeGrid.open(9, 9)
        env = env_for(maze, colony=(7, 7), food=(2, 1))
        ant = make_ant((2, 1), heading=0.5)
        ant.charge = 3
        ant.update_grid_pos(maze)
        assert ant.check_environment(env) is False
        assert ant.heading == pytest.approx(0.5 - math.pi)
        assert ant.charge == ant.pheromone.pheromone_duration

    def test_reaching_colony_counts_delivery(self, make_ant):
        maze = MazeGrid.open(9, 9)
        env = env_for(maze, colony=(1, 1), food=(7, 7))
        ant = make_ant((1, 2))
        ant.state = AntState.RETURNING
        ant.charge = 0
        ant.update_grid_pos(maze)
        assert ant.check_environment(env) is True
        assert ant.state is AntState.SEARCHING
        assert ant.charge == ant.pheromone.pheromone_duration
        assert ant.deliveries == 1

    def test_searching_ant_at_colony_does_not_deliver(self, make_ant):
        maze = MazeGrid.open(9, 9)
        env = env_for(maze, colony=(1, 1), food=(7, 7))
        ant = make_ant((1, 1))
        assert ant.update(env) is False
        assert ant.deliveries == 0

    def test_charge_counts_down_and_floors(self, make_ant, open_env):
        ant = make_ant((10, 10), pheromone=PheromoneConfig(pheromone_duration=2))
        for _ in range(5):
            ant.update(open_env)
        assert ant.charge == 0


class TestSensing:
    """Sensing cone and goal homing."""

    def test_homes_in_when_goal_close(self, make_ant):
        maze = MazeGrid.open(9, 9)
        env = env_for(maze, food=(3, 1))
        ant = make_ant((1, 1), heading=math.pi / 2, goal_sense_radius=2.0)
        ant.update_grid_pos(maze)
        assert ant.sense_and_decide_angle(env) == pytest.approx(0.0)

    def test_follows_strongest_goal_trail(self, make_ant, open_env):
        """A searching ant steers toward the return trail."""
        ant = make_ant((10, 10), heading=0.0)
        open_env.field.deposit(Channel.RETURN, 11, 11, 255.0)
        desired = ant.sense_and_decide_angle(open_env)
        assert desired == pytest.approx(ant.params.sense_angle / 2)

    def test_ignores_own_trail_channel(self, make_ant, open_env):
        """Explore trail does not attract a searching ant."""
        ant = make_ant((10, 10), heading=0.0)
        open_env.field.deposit(Channel.EXPLORE, 11, 11, 255.0)
        picks = [ant.sense_and_decide_angle(open_env) for _ in range(50)]
        half = ant.params.sense_angle / 2
        assert not all(math.isclose(p, half) for p in picks)

    def test_returning_ant_follows_explore_trail(self, make_ant, open_env):
        ant = make_ant((10, 10), heading=0.0)
        ant.state = AntState.RETURNING
        open_env.colony = (19, 1)
        open_env.field.deposit(Channel.EXPLORE, 11, 9, 255.0)
        desired = ant.sense_and_decide_angle(open_env)
        assert desired == pytest.approx(-ant.params.sense_angle / 2)

    def test_recent_cells_are_skipped(self, make_ant, open_env):
        ant = make_ant((10, 10), heading=0.0)
        open_env.field.deposit(Channel.RETURN, 11, 11, 255.0)
        ant.history.extend([(11, 11), (10, 10), (9, 9)])
        half = ant.params.sense_angle / 2
        for _ in range(20):
            assert not math.isclose(ant.sense_and_decide_angle(open_env), half)

    def test_no_eligible_probe_wanders(self, make_ant):
        maze = MazeGrid.from_layout(["###", "#.#", "###"])
        env = env_for(maze, colony=(40, 40), food=(50, 50))
        ant = make_ant((1, 1), heading=1.0)
        ant.history.extend([(1, 1), (0, 0)])
        for _ in range(20):
            desired = ant.sense_and_decide_angle(env)
            assert abs(desired - 1.0) <= ant.params.turn_angle / 2 + 1e-9

    def test_recently_visited_excludes_latest(self, make_ant):
        ant = make_ant((1, 1))
        ant.history.extend([(1, 1), (2, 1)])
        assert ant.was_recently_visited(1, 1)
        assert not ant.was_recently_visited(2, 1)


class TestMovement:
    """Steering, stepping and wall collisions."""

    def test_turn_rate_bounded_while_moving(self, make_ant, open_env):
        ant = make_ant((10, 10), heading=0.0, speed=0.1,
                       random_turn_chance=0.0)
        open_env.field.deposit(Channel.RETURN, 9, 10, 255.0)
        for _ in range(30):
            before = ant.heading
            assert ant.move(open_env)
            assert abs(wrap_angle(ant.heading - before)) <= ant.params.turn_angle + 1e-9

    def test_random_turn_adds_at_most_half_turn(self, make_ant):
        """Extra noise after the turn clamp stays within turn_angle / 2."""
        maze = MazeGrid.open(41, 41)
        env = env_for(maze, colony=(90, 90), food=(99, 99))
        ant = make_ant((20, 20), heading=0.0, speed=0.05,
                       random_turn_chance=1.0)
        limit = ant.params.turn_angle * 1.5
        changes = []
        for _ in range(300):
            before = ant.heading
            if ant.move(env):
                change = abs(wrap_angle(ant.heading - before))
                assert change <= limit + 1e-9
                changes.append(change)
        assert len(changes) == 300
        assert any(c > ant.params.turn_angle for c in changes)

    def test_moves_at_constant_speed(self, make_ant, open_env):
        ant = make_ant((10, 10), speed=0.75)
        x, y = ant.position
        assert ant.move(open_env)
        assert math.hypot(ant.x - x, ant.y - y) == pytest.approx(0.75)

    def test_wall_blocks_and_redirects(self, make_ant):
        maze = MazeGrid.from_layout(["#####", "#...#", "#####"])
        env = env_for(maze, colony=(40, 40), food=(50, 50))
        ant = make_ant((1, 1), heading=math.pi, turn_angle=0.0,
                       random_turn_chance=0.0, goal_sense_radius=0.0)
        assert ant.move(env) is False
        assert ant.position == (1.5, 1.5)
        assert ant.heading != pytest.approx(math.pi)

    def test_never_enters_wall(self, make_ant):
        maze = MazeGrid.from_layout([
            "#######",
            "#.....#",
            "#.###.#",
            "#.....#",
            "#######",
        ])
        env = env_for(maze, colony=(1, 1), food=(5, 3))
        ant = make_ant((1, 1), speed=0.6)
        for _ in range(300):
            ant.update(env)
            assert maze.is_walkable(*maze.to_grid(ant.x, ant.y))


class TestDeposition:
    """Charge-ramped trail laying."""

    def test_full_charge_deposits_full_rate(self, make_ant):
        ant = make_ant((1, 1))
        assert ant.deposition_amount() == pytest.approx(15.0)

    def test_amount_ramps_with_charge(self, make_ant):
        ant = make_ant((1, 1))
        ant.charge = ant.pheromone.pheromone_duration // 2
        assert ant.deposition_amount() == pytest.approx(7.5)

    def test_returning_uses_return_rate(self, make_ant):
        ant = make_ant((1, 1), pheromone=PheromoneConfig(
            deposition_rate_explore=15.0, deposition_rate_return=40.0))
        ant.state = AntState.RETURNING
        assert ant.deposition_amount() == pytest.approx(40.0)

    def test_no_charge_no_deposit(self, make_ant, open_env):
        ant = make_ant((10, 10))
        ant.charge = 0
        ant.deposit_pheromone(open_env.field)
        assert open_env.field.total(Channel.EXPLORE) == 0.0

    def test_searching_lays_explore_trail(self, make_ant, open_env):
        ant = make_ant((10, 10))
        ant.update(open_env)
        duration = ant.pheromone.pheromone_duration
        assert open_env.field.query(Channel.EXPLORE, *ant.cell) == pytest.approx(
            15.0 * (duration - 1) / duration)
        assert open_env.field.total(Channel.RETURN) == 0.0

    def test_returning_lays_return_trail(self, make_ant, open_env):
        ant = make_ant((10, 10))
        ant.state = AntState.RETURNING
        ant.update(open_env)
        assert open_env.field.total(Channel.RETURN) > 0.0
        assert open_env.field.total(Channel.EXPLORE) == 0.0


class TestHistory:
    """Loop-avoidance memory."""

    def test_history_bounded_without_repeats(self, make_ant, open_env):
        ant = make_ant((10, 10), speed=0.4, history_length=7)
        for _ in range(400):
            ant.update(open_env)
            assert len(ant.history) <= 7
            entries = list(ant.history)
            assert all(a != b for a, b in zip(entries, entries[1:]))

    def test_stationary_ant_records_once(self, make_ant, open_env):
        ant = make_ant((10, 10))
        for _ in range(3):
            ant.add_to_history()
        assert list(ant.history) == [(10, 10)]

    def test_oldest_entry_dropped(self, make_ant):
        ant = make_ant((1, 1), history_length=2)
        for cell in [(1, 1), (2, 1), (3, 1)]:
            ant.grid_x, ant.grid_y = cell
            ant.add_to_history()
        assert list(ant.history) == [(2, 1), (3, 1)]


class TestSnapshot:

    def test_snapshot_fields(self, make_ant):
        ant = make_ant((3, 4), heading=0.25)
        snap = ant.snapshot()
        assert (snap.x, snap.y) == (3.5, 4.5)
        assert (snap.grid_x, snap.grid_y) == (3, 4)
        assert snap.heading == 0.25
        assert snap.state == "searching"
