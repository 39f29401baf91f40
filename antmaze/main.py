#!/usr/bin/env python3
"""
Ant Maze Foraging Simulation

Ants leave a colony, wander a generated maze and lay two pheromone trails
that converge on a path to the food.

Usage:
    antmaze [--config configs/default.yaml] [options]

Examples:
    antmaze --config configs/default.yaml
    antmaze --config configs/default.yaml --gif --out-dir results/
    antmaze --steps 500 --no-snapshot --quiet
    antmaze --config configs/default.yaml --seed 42
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from antmaze.config import load_config, SimulationConfig
from antmaze.model.engine import ColonySimulation
from antmaze.export.visualizer import Visualizer
from antmaze.export.reporter import Reporter


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Ant Maze Foraging Simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    antmaze --config configs/default.yaml
    antmaze --config configs/default.yaml --gif --out-dir results/
    antmaze --steps 500 --no-snapshot --quiet
    antmaze --config configs/default.yaml --seed 42
        """
    )

    parser.add_argument('--config', type=Path, default=None,
                        help='Path to YAML configuration file '
                             '(built-in defaults if omitted)')

    # Optional overrides
    parser.add_argument('--steps', type=int, default=None,
                        help='Override max simulation steps')
    parser.add_argument('--out-dir', type=Path, default=Path('./output'),
                        help='Output directory for exports (default: ./output)')

    # Export toggles
    parser.add_argument('--snapshot', dest='snapshot', action='store_true', default=None,
                        help='Enable final snapshot (default)')
    parser.add_argument('--no-snapshot', dest='snapshot', action='store_false',
                        help='Disable final snapshot')

    parser.add_argument('--gif', action='store_true', default=False,
                        help='Enable GIF animation export')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Suppress stdout output')
    parser.add_argument('--verbose', action='store_true', default=False,
                        help='Enable debug logging')

    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducibility')

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s'
    )

    # Load configuration
    try:
        if args.config is None:
            config = SimulationConfig.default()
        else:
            config = load_config(args.config)
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    # Apply CLI overrides
    if args.steps is not None:
        config.max_steps = args.steps
    if args.snapshot is not None:
        config.snapshot_enabled = args.snapshot
    if args.gif:
        config.gif_enabled = True
    config.quiet = args.quiet
    if args.seed is not None:
        config.seed = args.seed
    config.out_dir = args.out_dir

    if not config.quiet:
        print(f"Initializing simulation...")
        print(f"  Requested grid: {config.grid.cols}x{config.grid.rows}")
        print(f"  Ant cap: {config.colony.num_ants}")
        print(f"  Max steps: {config.max_steps}")

    try:
        engine = ColonySimulation(config)
    except (RuntimeError, ValueError) as e:
        print(f"Error initializing simulation: {e}", file=sys.stderr)
        return 1

    if not config.quiet:
        print(f"  Maze: {engine.maze.width}x{engine.maze.height}")
        print(f"  Colony: {engine.colony_pos}  Food: {engine.food_pos}")
        print(f"  Spawned: {len(engine.ants)} ants")

    visualizer = Visualizer(config.pheromone.pheromone_max)
    reporter = Reporter(str(args.config or '(defaults)'), config.seed)

    if not config.quiet:
        print(f"\nRunning simulation...")

    final_state = engine.snapshot()
    try:
        while not engine.is_finished():
            state = engine.tick()
            final_state = state

            # Buffer GIF frame (every N steps to reduce memory)
            if config.gif_enabled:
                if state.step % 5 == 0 or engine.is_finished():
                    visualizer.buffer_frame(state)

            reporter.update(state)

            if not config.quiet and state.step % 100 == 0:
                print(f"  Step {state.step}: {len(state.ants)} ants, "
                      f"{state.food_found} food found")

    except KeyboardInterrupt:
        if not config.quiet:
            print("\nSimulation interrupted by user.")

    if config.snapshot_enabled:
        snapshot_path = config.out_dir / 'final_state.png'
        visualizer.save_snapshot(final_state, snapshot_path)
        if not config.quiet:
            print(f"Snapshot saved: {snapshot_path}")

    if config.gif_enabled:
        gif_path = config.out_dir / 'simulation.gif'
        if not config.quiet:
            print(f"Generating GIF ({len(visualizer.frames)} frames)...")
        visualizer.generate_gif(gif_path, fps=10)
        if not config.quiet:
            print(f"Animation saved: {gif_path}")

    if not config.quiet:
        report = reporter.generate_summary(
            final_state,
            config.out_dir,
            config.snapshot_enabled,
            config.gif_enabled
        )
        print(report)

    return 0


if __name__ == '__main__':
    sys.exit(main())
