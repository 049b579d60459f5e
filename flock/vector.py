"""2D vector primitives shared by the steering rules.

Vectors are numpy float64 arrays of shape (2,). Every function is total:
zero vectors, infinities and NaNs propagate as values, never as exceptions.
"""

import numpy as np


def vec(x: float = 0.0, y: float = 0.0) -> np.ndarray:
    """Build a 2D vector."""
    return np.array([x, y], dtype=np.float64)


def zero() -> np.ndarray:
    return np.zeros(2, dtype=np.float64)


def magnitude(v: np.ndarray) -> float:
    """Length of a vector, sqrt(x^2 + y^2)."""
    return float(np.sqrt(v[0] * v[0] + v[1] * v[1]))


def distance(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance between two points."""
    return magnitude(b - a)


def normalize(v: np.ndarray) -> np.ndarray:
    """Unit vector in the direction of v, or the zero vector when |v| == 0."""
    mag = magnitude(v)
    if mag == 0:
        return zero()
    return v / mag


def limit(v: np.ndarray, max_mag: float) -> np.ndarray:
    """Cap the magnitude of v at max_mag, preserving direction.

    Args:
        v: Input vector
        max_mag: Maximum magnitude

    Returns:
        v itself when already short enough, otherwise a rescaled copy
    """
    if magnitude(v) > max_mag:
        return normalize(v) * max_mag
    return v


def heading(v: np.ndarray) -> float:
    """Angle of v in radians; 0 for the zero vector."""
    return float(np.arctan2(v[1], v[0]))
