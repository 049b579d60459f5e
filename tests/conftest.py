"""Pytest configuration - headless matplotlib and shared fixtures."""
import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from flock.boids import Boid
from flock.simulation import Simulation


@pytest.fixture
def make_boid():
    """Factory for boids with a known velocity instead of a random heading."""
    def _make(x, y, vx=0.0, vy=0.0, **kwargs):
        return Boid(x, y, velocity=np.array([vx, vy]), **kwargs)
    return _make


@pytest.fixture
def simulation():
    """Empty 800x600 simulation with default knobs."""
    return Simulation(800, 600, seed=1)


@pytest.fixture
def pair(make_boid):
    """Two motionless boids 10 units apart on the x axis."""
    return make_boid(100.0, 100.0), make_boid(110.0, 100.0)
