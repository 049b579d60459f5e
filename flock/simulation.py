"""Flock orchestrator: owns the boids and the shared tunables, advances one tick at a time."""

import logging
from typing import List, Optional

import numpy as np
from jax import random

from .boids import Boid, FlockArrays, RenderState, spawn_boids
from .config import BoidConfig

logger = logging.getLogger(__name__)


class Simulation:
    """Ordered collection of boids plus the knobs every tick reads.

    The knobs live on ``self.config``; the attribute accessors below
    (``separation_force`` etc.) read and write that same object so a UI can
    bind to either. The world size is kept on the simulation, never written
    back to the config. Boids are processed sequentially: a boid later in the
    list sees the already-moved state of the ones before it.
    """

    def __init__(self, width: float, height: float,
                 config: Optional[BoidConfig] = None, seed: Optional[int] = None):
        self.config = config if config is not None else BoidConfig()
        self.width = width
        self.height = height
        self.boids: List[Boid] = []
        self._key = random.PRNGKey(self.config.seed if seed is None else seed)

    # Knobs, forwarded to the config object

    @property
    def separation_force(self) -> float:
        return self.config.separation_force

    @separation_force.setter
    def separation_force(self, value: float) -> None:
        self.config.separation_force = value

    @property
    def alignment_force(self) -> float:
        return self.config.alignment_force

    @alignment_force.setter
    def alignment_force(self, value: float) -> None:
        self.config.alignment_force = value

    @property
    def cohesion_force(self) -> float:
        return self.config.cohesion_force

    @cohesion_force.setter
    def cohesion_force(self, value: float) -> None:
        self.config.cohesion_force = value

    @property
    def perception_radius(self) -> float:
        return self.config.perception_radius

    @perception_radius.setter
    def perception_radius(self, value: float) -> None:
        self.config.perception_radius = value

    # Collection management

    def add_boid(self, boid: Boid) -> None:
        self.boids.append(boid)

    def remove_boid(self, boid: Boid) -> None:
        """Remove the first occurrence of ``boid`` (by identity); absent boids are ignored."""
        for index, candidate in enumerate(self.boids):
            if candidate is boid:
                del self.boids[index]
                return

    def clear(self) -> None:
        self.boids = []

    def get_boids(self) -> List[Boid]:
        return self.boids

    @property
    def count(self) -> int:
        return len(self.boids)

    def __len__(self) -> int:
        return len(self.boids)

    def spawn(self, count: int) -> List[Boid]:
        """Append ``count`` boids at random positions inside the world.

        New boids take their speed and force limits from the config so a
        changed max speed also applies to boids created later.
        """
        self._key, subkey = random.split(self._key)
        new_boids = spawn_boids(
            subkey, count, self.width, self.height,
            max_speed=self.config.max_speed, max_force=self.config.max_force,
        )
        self.boids.extend(new_boids)
        if new_boids:
            logger.debug("Spawned %d boids (total %d)", len(new_boids), len(self.boids))
        return new_boids

    # Per-tick update

    def update(self, config: Optional[BoidConfig] = None) -> None:
        """Advance every boid by one tick, in insertion order.

        Args:
            config: Tunables to use for this tick; defaults to ``self.config``
        """
        cfg = config if config is not None else self.config
        radius = cfg.perception_radius

        # Extreme knob values produce inf/nan, never exceptions
        with np.errstate(all='ignore'):
            flock = FlockArrays(self.boids)
            for boid in self.boids:
                sep, align, coh = boid.steering_forces(
                    flock, radius,
                    cfg.separation_force, cfg.alignment_force, cfg.cohesion_force,
                )

                boid.apply_force(sep)
                boid.apply_force(align)
                boid.apply_force(coh)

                boid.update()
                boid.wrap_around(self.width, self.height)
                flock.refresh(boid)

    def render_states(self) -> List[RenderState]:
        """Position and heading of every boid, in flock order."""
        return [boid.render_state() for boid in self.boids]

    def positions(self) -> np.ndarray:
        """Snapshot of boid positions, shape (N, 2)."""
        if not self.boids:
            return np.zeros((0, 2))
        return np.array([boid.position for boid in self.boids])

    def velocities(self) -> np.ndarray:
        """Snapshot of boid velocities, shape (N, 2)."""
        if not self.boids:
            return np.zeros((0, 2))
        return np.array([boid.velocity for boid in self.boids])
