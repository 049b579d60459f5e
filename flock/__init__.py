"""Boids flocking simulation: separation, alignment and cohesion on a wrapping 2D world."""

from .boids import Boid, RenderState, spawn_boids
from .config import BoidConfig, default_config
from .controls import ControlSurface
from .simulation import Simulation

__all__ = [
    'Boid',
    'BoidConfig',
    'ControlSurface',
    'RenderState',
    'Simulation',
    'default_config',
    'spawn_boids',
]
