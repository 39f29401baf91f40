"""Summary report generation for the ant maze simulation."""

from typing import List, Dict, Optional, TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from ..model.state import SimulationState


class Reporter:
    """Generates summary statistics and formatted text report."""

    def __init__(self, config_path: str, seed: Optional[int]):
        self.config_path = config_path
        self.seed = seed
        self.step_metrics: List[Dict] = []
        self.peak_return_trail = 0.0
        self.first_delivery_step: Optional[int] = None
        self._prev_food_found = 0

    def update(self, state: "SimulationState") -> None:
        """Accumulate metrics per step."""
        self.step_metrics.append(state.metrics.copy())

        trail = state.metrics.get('return_total', 0.0)
        if trail > self.peak_return_trail:
            self.peak_return_trail = trail

        if (self.first_delivery_step is None
                and state.food_found > self._prev_food_found):
            self.first_delivery_step = state.step
        self._prev_food_found = state.food_found

    def deliveries_per_window(self, window: int = 100) -> List[int]:
        """Food delivered in consecutive windows of `window` steps."""
        counts = []
        previous = 0
        for end in range(window, len(self.step_metrics) + 1, window):
            found = int(self.step_metrics[end - 1].get('food_found', 0))
            counts.append(found - previous)
            previous = found
        return counts

    def generate_summary(self, final_state: "SimulationState",
                         output_dir: Path,
                         snapshot_enabled: bool,
                         gif_enabled: bool) -> str:
        """Returns formatted text report."""
        metrics = final_state.metrics
        population = int(metrics.get('population', 0))
        returning = int(metrics.get('returning', 0))
        food_found = final_state.food_found
        rate = food_found / max(1, final_state.step)
        height, width = final_state.walls.shape

        windows = self.deliveries_per_window()
        trend = " ".join(str(c) for c in windows[-10:]) if windows else "n/a"

        lines = [
            "",
            "=" * 80,
            "                     ANT MAZE FORAGING REPORT",
            "=" * 80,
            f"Configuration: {self.config_path}",
            f"Random Seed: {self.seed if self.seed is not None else 'None (random)'}",
            f"Maze: {width}x{height}  Colony: {final_state.colony}  "
            f"Food: {final_state.food}",
            "",
            "SIMULATION METRICS",
            "-" * 40,
            f"Total Steps:           {final_state.step}",
            f"Ants:                  {population} ({returning} returning)",
            f"Food Found:            {food_found}",
            f"Delivery Rate:         {rate:.4f} per step",
            f"First Delivery:        "
            f"{self.first_delivery_step if self.first_delivery_step else 'never'}",
            f"Peak Return Trail:     {self.peak_return_trail:.1f}",
            f"Deliveries / 100 steps (latest): {trend}",
            "",
            "OUTPUT FILES",
            "-" * 40,
        ]

        if snapshot_enabled:
            lines.append(f"Snapshot:   {output_dir / 'final_state.png'}")
        else:
            lines.append("Snapshot:   (disabled)")

        if gif_enabled:
            lines.append(f"Animation:  {output_dir / 'simulation.gif'}")
        else:
            lines.append("Animation:  (disabled)")

        lines.append("=" * 80)

        return "\n".join(lines)
