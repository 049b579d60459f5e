"""Flock-level summary statistics computed with JAX on a state snapshot."""

from typing import Dict

import jax.numpy as jnp
import numpy as np


def compute_pairwise_distances(positions: jnp.ndarray) -> jnp.ndarray:
    """Compute pairwise distances between all boids.

    Args:
        positions: Boid positions (N, 2)

    Returns:
        Distance matrix (N, N)
    """
    # (N, 1, 2) - (1, N, 2) = (N, N, 2)
    diff = positions[:, None, :] - positions[None, :, :]
    return jnp.sqrt(jnp.sum(diff * diff, axis=2))


def polarization(velocities: jnp.ndarray) -> float:
    """Order parameter: length of the mean unit heading.

    1 means every boid flies the same way, 0 means headings cancel out.
    Boids with zero velocity contribute nothing.

    Args:
        velocities: Boid velocities (N, 2)

    Returns:
        Value in [0, 1]; 0 for an empty flock
    """
    if velocities.shape[0] == 0:
        return 0.0
    speeds = jnp.linalg.norm(velocities, axis=1, keepdims=True)
    unit = jnp.where(speeds > 0, velocities / jnp.where(speeds > 0, speeds, 1.0), 0.0)
    return float(jnp.linalg.norm(jnp.mean(unit, axis=0)))


def neighbor_counts(positions: jnp.ndarray, perception_radius: float) -> jnp.ndarray:
    """Number of flockmates each boid can see, using the steering rules' 0 < d < r test.

    Args:
        positions: Boid positions (N, 2)
        perception_radius: Exclusive distance bound

    Returns:
        Neighbor counts (N,)
    """
    distances = compute_pairwise_distances(positions)
    mask = (distances > 0) & (distances < perception_radius)
    return jnp.sum(mask, axis=1)


def mean_nearest_neighbor_distance(positions: jnp.ndarray) -> float:
    """Average distance from each boid to its closest flockmate (NaN below two boids)."""
    if positions.shape[0] < 2:
        return float('nan')
    distances = compute_pairwise_distances(positions)
    distances = jnp.where(jnp.eye(positions.shape[0], dtype=bool), jnp.inf, distances)
    return float(jnp.mean(jnp.min(distances, axis=1)))


def summarize(positions, velocities, perception_radius: float) -> Dict[str, float]:
    """Collect the flock statistics the CLI reports.

    Args:
        positions: Boid positions (N, 2), any array-like
        velocities: Boid velocities (N, 2), any array-like
        perception_radius: Radius used for the neighbor count

    Returns:
        Dict with boid count, polarization, nearest-neighbor distance,
        mean neighbor count and mean speed
    """
    positions = jnp.asarray(np.asarray(positions, dtype=np.float32).reshape(-1, 2))
    velocities = jnp.asarray(np.asarray(velocities, dtype=np.float32).reshape(-1, 2))
    n = positions.shape[0]

    if n == 0:
        return {
            'count': 0,
            'polarization': 0.0,
            'nearest_neighbor': float('nan'),
            'mean_neighbors': 0.0,
            'mean_speed': 0.0,
        }

    return {
        'count': int(n),
        'polarization': polarization(velocities),
        'nearest_neighbor': mean_nearest_neighbor_distance(positions),
        'mean_neighbors': float(jnp.mean(neighbor_counts(positions, perception_radius))),
        'mean_speed': float(jnp.mean(jnp.linalg.norm(velocities, axis=1))),
    }
