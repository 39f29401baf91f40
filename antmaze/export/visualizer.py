"""Visualization and export for the ant maze simulation."""

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgb
from pathlib import Path
from typing import List, TYPE_CHECKING
from PIL import Image
import io

if TYPE_CHECKING:
    from ..model.state import SimulationState


class Visualizer:
    """
    Renders simulation snapshots using matplotlib.

    Only reads SimulationState; never touches the engine.

    Supports:
    - Single PNG snapshots
    - Animated GIF compilation
    """

    # Color scheme
    COLORS = {
        'background': '#333333',
        'wall': '#000000',
        'path': '#464646',
        'colony': '#0000FF',
        'food': '#FF0000',
        'searching': '#00FF00',
        'returning': '#FFFF00',
        'explore': '#0096FF',
        'return': '#FF6400',
    }

    def __init__(self, pheromone_max: float):
        self.pheromone_max = pheromone_max
        self.frames: List[Image.Image] = []

    def _compose_base(self, state: "SimulationState") -> np.ndarray:
        """RGB image of maze with both pheromone channels blended in."""
        height, width = state.walls.shape
        base = np.empty((height, width, 3))
        base[:, :] = to_rgb(self.COLORS['path'])

        for field, key in ((state.explore_field, 'explore'),
                           (state.return_field, 'return')):
            alpha = np.clip(field / self.pheromone_max, 0, 1) * (180 / 255)
            color = np.array(to_rgb(self.COLORS[key]))
            base = base * (1 - alpha[..., None]) + color * alpha[..., None]

        base[state.walls] = to_rgb(self.COLORS['wall'])
        return np.clip(base, 0, 1)

    def _create_figure(self, state: "SimulationState") -> plt.Figure:
        """Create matplotlib figure for state visualization."""
        height, width = state.walls.shape
        aspect = width / height
        fig_height = 6
        fig_width = max(6, fig_height * aspect)
        fig, ax = plt.subplots(figsize=(fig_width, fig_height))
        fig.patch.set_facecolor(self.COLORS['background'])

        # Screen convention: row 0 at the top
        ax.imshow(self._compose_base(state), origin='upper', aspect='equal',
                  extent=[0, width, height, 0], interpolation='nearest')

        for pos, key in ((state.colony, 'colony'), (state.food, 'food')):
            ax.add_patch(plt.Circle((pos[0] + 0.5, pos[1] + 0.5), 0.75,
                                    color=self.COLORS[key], alpha=0.8))

        # Draw ants with heading arrows
        for ant_state in ('searching', 'returning'):
            ants = [a for a in state.ants if a.state == ant_state]
            if not ants:
                continue
            xs = np.array([a.x for a in ants])
            ys = np.array([a.y for a in ants])
            headings = np.array([a.heading for a in ants])
            ax.quiver(xs, ys, np.cos(headings), np.sin(headings),
                      color=self.COLORS[ant_state], angles='xy',
                      scale_units='xy', scale=2.5, width=0.004)

        ax.set_title(f'Step {state.step} | Ants: {len(state.ants)} | '
                     f'Food Found: {state.food_found}', color='white')
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)
        ax.set_xticks([])
        ax.set_yticks([])

        plt.tight_layout()
        return fig

    def buffer_frame(self, state: "SimulationState") -> None:
        """Store frame for GIF generation."""
        fig = self._create_figure(state)

        # Convert to PIL Image
        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=80,
                    facecolor=fig.get_facecolor())
        buf.seek(0)
        img = Image.open(buf).copy()
        self.frames.append(img)
        buf.close()
        plt.close(fig)

    def save_snapshot(self, state: "SimulationState", output_path: Path) -> None:
        """Save single PNG image of current state."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig = self._create_figure(state)
        fig.savefig(output_path, dpi=150, bbox_inches='tight',
                    facecolor=fig.get_facecolor())
        plt.close(fig)

    def generate_gif(self, output_path: Path, fps: int = 10) -> None:
        """Compile buffered frames into animated GIF."""
        if not self.frames:
            return

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        duration = int(1000 / fps)  # milliseconds per frame

        self.frames[0].save(
            output_path,
            save_all=True,
            append_images=self.frames[1:],
            duration=duration,
            loop=0
        )

    def clear_frames(self) -> None:
        """Clear buffered frames."""
        self.frames.clear()
