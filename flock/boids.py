"""Boid agent: the three steering rules, physics integration and edge wrapping."""

import math
from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np
from jax import random

from .vector import heading, limit, normalize, vec, zero


class RenderState(NamedTuple):
    """What a renderer needs to draw one boid."""
    x: float
    y: float
    heading: float  # radians


def random_heading(rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """Unit vector pointing in a uniformly random direction."""
    rng = rng if rng is not None else np.random.default_rng()
    angle = rng.uniform(0.0, 2.0 * math.pi)
    return vec(math.cos(angle), math.sin(angle))


def _ordered_sum(rows: np.ndarray) -> np.ndarray:
    """Sum 2D rows strictly left to right, starting from the zero vector.

    np.sum uses pairwise summation; accumulate keeps the order of a plain loop.
    """
    return np.cumsum(np.vstack((zero(), rows)), axis=0)[-1]


class FlockArrays:
    """Positions and velocities of a flock as (N, 2) arrays.

    During a tick the simulation calls ``refresh`` right after a boid moves,
    so boids later in the order read its new state.
    """

    def __init__(self, boids: Sequence['Boid']):
        self.boids = boids
        self.positions = np.array([b.position for b in boids], dtype=np.float64).reshape(-1, 2)
        self.velocities = np.array([b.velocity for b in boids], dtype=np.float64).reshape(-1, 2)
        # A boid listed twice owns several rows
        self._rows = {}
        for i, boid in enumerate(boids):
            self._rows.setdefault(id(boid), []).append(i)

    def refresh(self, boid: 'Boid') -> None:
        for i in self._rows.get(id(boid), ()):
            self.positions[i] = boid.position
            self.velocities[i] = boid.velocity


class Boid:
    """A single flocking agent.

    The boid only knows its own kinematic state. Every rule receives the whole
    flock (itself included) and filters neighbors by distance.
    """

    def __init__(self, x: float, y: float, velocity=None,
                 max_speed: float = 4.0, max_force: float = 0.2):
        self.position = vec(x, y)
        if velocity is None:
            velocity = random_heading()
        self.velocity = np.array(velocity, dtype=np.float64)
        self.acceleration = zero()
        self.max_speed = max_speed
        self.max_force = max_force

    def __repr__(self) -> str:
        return (f"Boid(pos=({self.position[0]:.2f}, {self.position[1]:.2f}), "
                f"vel=({self.velocity[0]:.2f}, {self.velocity[1]:.2f}))")

    @property
    def heading(self) -> float:
        return heading(self.velocity)

    def render_state(self) -> RenderState:
        return RenderState(float(self.position[0]), float(self.position[1]), self.heading)

    def apply_force(self, force: np.ndarray) -> None:
        """Accumulate a force into the acceleration (unit mass)."""
        self.acceleration = self.acceleration + force

    def update(self) -> None:
        """Integrate one step: acceleration -> velocity -> position."""
        self.acceleration = limit(self.acceleration, self.max_force)
        self.velocity = limit(self.velocity + self.acceleration, self.max_speed)
        self.position = self.position + self.velocity
        self.acceleration = zero()

    def _scan(self, flock: 'FlockArrays', perception_radius: float) -> Tuple[np.ndarray, np.ndarray]:
        """Indices and distances of flockmates with 0 < d < perception_radius."""
        dx = flock.positions[:, 0] - self.position[0]
        dy = flock.positions[:, 1] - self.position[1]
        distances = np.sqrt(dx * dx + dy * dy)
        index = np.flatnonzero((distances > 0) & (distances < perception_radius))
        return index, distances[index]

    def neighbors(self, boids: Sequence['Boid'],
                  perception_radius: float) -> List[Tuple['Boid', float]]:
        """Flockmates strictly inside the perception radius, in flock order.

        Args:
            boids: Full flock, may include self
            perception_radius: Exclusive upper bound on distance

        Returns:
            List of (boid, distance) pairs; zero-distance boids are excluded
        """
        index, distances = self._scan(FlockArrays(boids), perception_radius)
        return [(boids[i], d) for i, d in zip(index, distances)]

    def steering_forces(self, flock: 'FlockArrays', perception_radius: float,
                        separation_weight: float, alignment_weight: float,
                        cohesion_weight: float) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Separation, alignment and cohesion from a single neighbor scan.

        Gives the same vectors as calling the three rules one by one.
        """
        index, distances = self._scan(flock, perception_radius)
        return (
            self._separation(flock, index, distances, separation_weight),
            self._alignment(flock, index, alignment_weight),
            self._cohesion(flock, index, cohesion_weight),
        )

    def separation(self, boids: Sequence['Boid'], perception_radius: float,
                   force_weight: float) -> np.ndarray:
        """Steer to avoid crowding local flockmates."""
        flock = FlockArrays(boids)
        index, distances = self._scan(flock, perception_radius)
        return self._separation(flock, index, distances, force_weight)

    def alignment(self, boids: Sequence['Boid'], perception_radius: float,
                  force_weight: float) -> np.ndarray:
        """Steer towards the average heading of local flockmates."""
        flock = FlockArrays(boids)
        index, _ = self._scan(flock, perception_radius)
        return self._alignment(flock, index, force_weight)

    def cohesion(self, boids: Sequence['Boid'], perception_radius: float,
                 force_weight: float) -> np.ndarray:
        """Steer towards the average position of local flockmates."""
        flock = FlockArrays(boids)
        index, _ = self._scan(flock, perception_radius)
        return self._cohesion(flock, index, force_weight)

    def _separation(self, flock, index, distances, force_weight):
        count = index.size
        if count == 0:
            return zero()

        diff = self.position - flock.positions[index]
        mag = np.sqrt(diff[:, 0] * diff[:, 0] + diff[:, 1] * diff[:, 1])
        # Unit push away from each neighbor, closer neighbors push harder
        pushes = diff / mag[:, None] * (1 / distances)[:, None]

        steer = _ordered_sum(pushes) / count
        steer = normalize(steer) * self.max_speed
        steer = limit(steer - self.velocity, self.max_force)
        return steer * force_weight

    def _alignment(self, flock, index, force_weight):
        count = index.size
        if count == 0:
            return zero()

        avg_velocity = _ordered_sum(flock.velocities[index]) / count
        desired = normalize(avg_velocity) * self.max_speed
        steer = limit(desired - self.velocity, self.max_force)
        return steer * force_weight

    def _cohesion(self, flock, index, force_weight):
        count = index.size
        if count == 0:
            return zero()

        return self.seek(_ordered_sum(flock.positions[index]) / count, force_weight)

    def seek(self, target: np.ndarray, force_weight: float) -> np.ndarray:
        """Steering force towards a target point."""
        desired = normalize(target - self.position) * self.max_speed
        steer = limit(desired - self.velocity, self.max_force)
        return steer * force_weight

    def wrap_around(self, width: float, height: float) -> None:
        """Teleport to the opposite edge when outside [0, width) x [0, height).

        Each axis is checked on its own; velocity is left untouched.
        """
        if self.position[0] >= width:
            self.position[0] = 0.0
        if self.position[0] < 0:
            self.position[0] = width
        if self.position[1] >= height:
            self.position[1] = 0.0
        if self.position[1] < 0:
            self.position[1] = height


def spawn_boids(key: random.PRNGKey, count: int, width: float, height: float,
                max_speed: float = 4.0, max_force: float = 0.2) -> List[Boid]:
    """Create boids at uniformly random positions with random unit headings.

    Args:
        key: JAX random key
        count: Number of boids to create
        width: World width; x is drawn from [0, width)
        height: World height; y is drawn from [0, height)
        max_speed: Speed limit given to every new boid
        max_force: Steering limit given to every new boid

    Returns:
        Newly created boids, not yet attached to any simulation
    """
    if count <= 0:
        return []

    key_pos, key_vel = random.split(key)

    # Unit draws scaled in float64 so positions stay strictly below the bounds
    unit = np.asarray(random.uniform(key_pos, shape=(count, 2)), dtype=np.float64)
    positions = unit * np.array([width, height], dtype=np.float64)

    angles = np.asarray(
        random.uniform(key_vel, shape=(count,), minval=0, maxval=2 * np.pi),
        dtype=np.float64,
    )
    velocities = np.stack([np.cos(angles), np.sin(angles)], axis=1)

    return [
        Boid(x, y, velocity=v, max_speed=max_speed, max_force=max_force)
        for (x, y), v in zip(positions, velocities)
    ]
