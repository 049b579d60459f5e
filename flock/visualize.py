"""Visualization utilities for the boid simulation."""

from typing import Dict, List, Optional

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.collections import PolyCollection
from matplotlib.widgets import Button, Slider

from .boids import RenderState
from .config import LABELS, RANGES
from .controls import ControlSurface
from .simulation import Simulation


def boid_triangles(states: List[RenderState], size: float) -> np.ndarray:
    """Triangle outlines pointing along each boid's heading.

    Args:
        states: Render states from Simulation.render_states()
        size: Half-length of a triangle

    Returns:
        Vertex array (N, 3, 2)
    """
    if not states:
        return np.zeros((0, 3, 2))

    # Nose, left tail, right tail in the boid's own frame
    shape = np.array([[size, 0.0], [-size, -size / 2], [-size, size / 2]])

    xs = np.array([s.x for s in states])
    ys = np.array([s.y for s in states])
    angles = np.array([s.heading for s in states])
    cos, sin = np.cos(angles)[:, None], np.sin(angles)[:, None]

    rx = shape[None, :, 0] * cos - shape[None, :, 1] * sin
    ry = shape[None, :, 0] * sin + shape[None, :, 1] * cos
    return np.stack([rx + xs[:, None], ry + ys[:, None]], axis=2)


def _style_axes(ax, simulation: Simulation):
    config = simulation.config
    ax.set_xlim(0, simulation.width)
    # Screen coordinates: y grows downwards
    ax.set_ylim(simulation.height, 0)
    ax.set_aspect('equal')
    ax.set_facecolor(config.background)
    ax.set_xticks([])
    ax.set_yticks([])


class BoidVisualizer:
    """Live matplotlib view of a Simulation with a slider control panel."""

    def __init__(self, simulation: Simulation, controls: Optional[ControlSurface] = None,
                 show_controls: bool = True):
        """Initialize the visualizer.

        Args:
            simulation: Simulation to draw and advance
            controls: Control surface the sliders drive; created if omitted
            show_controls: Build the slider panel next to the canvas
        """
        self.simulation = simulation
        self.controls = controls if controls is not None else ControlSurface(simulation)
        self.config = simulation.config

        self.fig = plt.figure(figsize=(12, 7))
        self.fig.patch.set_facecolor(self.config.background)
        if show_controls:
            self.ax = self.fig.add_axes([0.02, 0.05, 0.66, 0.9])
        else:
            self.ax = self.fig.add_axes([0.02, 0.05, 0.96, 0.9])
        self.setup_plot()

        self.collection = PolyCollection(
            [], facecolors=self.config.boid_color, edgecolors='black', linewidths=0.5
        )
        self.ax.add_collection(self.collection)

        self.sliders: Dict[str, Slider] = {}
        self.reset_button: Optional[Button] = None
        if show_controls:
            self.setup_controls()

    def setup_plot(self):
        """Set up the matplotlib plot."""
        _style_axes(self.ax, self.simulation)
        self.ax.set_title('Boids Simulation', color='white')

    def setup_controls(self):
        """Build one slider per control plus a reset button."""
        top, height, gap = 0.85, 0.04, 0.07
        for i, name in enumerate(ControlSurface.names):
            lo, hi, step = RANGES[name]
            slider_ax = self.fig.add_axes([0.8, top - i * gap, 0.15, height])
            slider = Slider(
                slider_ax,
                LABELS[name],
                lo,
                hi,
                valinit=self.controls.get(name),
                valstep=step,
            )
            slider.label.set_color('white')
            slider.valtext.set_color('white')
            slider.on_changed(lambda value, name=name: self.controls.set(name, value))
            self.sliders[name] = slider

        button_ax = self.fig.add_axes([0.8, top - len(self.sliders) * gap, 0.15, 0.05])
        self.reset_button = Button(button_ax, 'Reset to Defaults')
        self.reset_button.on_clicked(self.on_reset)

    def on_reset(self, event=None):
        self.controls.reset()
        self.refresh_controls()

    def refresh_controls(self):
        """Move every slider to the control surface's current value."""
        for name, slider in self.sliders.items():
            slider.set_val(self.controls.get(name))

    def draw_boids(self):
        """Draw boids as triangles oriented along their velocity."""
        states = self.simulation.render_states()
        self.collection.set_verts(boid_triangles(states, self.config.boid_size))

    def animate(self, num_frames: Optional[int] = None, interval: Optional[int] = None):
        """Create an animation that steps the simulation once per frame.

        Args:
            num_frames: Number of frames to animate; None runs until closed
            interval: Delay between frames in milliseconds

        Returns:
            matplotlib animation object
        """
        interval = interval if interval is not None else self.config.interval

        def update_frame(frame):
            self.simulation.update()
            self.draw_boids()
            return (self.collection,)

        self.draw_boids()
        self.anim = FuncAnimation(
            self.fig,
            update_frame,
            frames=num_frames,
            interval=interval,
            blit=False,
            cache_frame_data=False,
        )
        return self.anim

    def show(self):
        """Display the plot."""
        plt.show()

    def save_animation(self, filename: str, num_frames: int = 500, fps: int = 30):
        """Save animation to file.

        Args:
            filename: Output filename (e.g., 'boids.mp4' or 'boids.gif')
            num_frames: Number of frames to render
            fps: Frames per second
        """
        anim = self.animate(num_frames=num_frames, interval=1000 // fps)

        if filename.endswith('.gif'):
            writer = 'pillow'
        else:
            writer = 'ffmpeg'

        anim.save(filename, writer=writer, fps=fps)
        print(f"Animation saved to {filename}")


def plot_single_frame(simulation: Simulation, save_path: Optional[str] = None):
    """Plot the current state of a simulation.

    Args:
        simulation: Simulation to draw
        save_path: Optional path to save the figure
    """
    config = simulation.config
    fig, ax = plt.subplots(figsize=(10, 10 * simulation.height / max(simulation.width, 1)))
    fig.patch.set_facecolor(config.background)
    _style_axes(ax, simulation)
    ax.set_title(f'Boids Simulation - {simulation.count} boids', color='white')

    triangles = boid_triangles(simulation.render_states(), config.boid_size)
    ax.add_collection(PolyCollection(
        triangles, facecolors=config.boid_color, edgecolors='black', linewidths=0.5
    ))

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight', facecolor=fig.get_facecolor())
        print(f"Figure saved to {save_path}")
    else:
        plt.show()

    plt.close(fig)
