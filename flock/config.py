"""Configuration parameters for the boid simulation."""

from typing import Dict, Tuple


# Values restored by the reset control
DEFAULTS: Dict[str, float] = {
    'separation_force': 1.5,
    'alignment_force': 1.0,
    'cohesion_force': 1.0,
    'perception_radius': 100.0,
    'max_speed': 4.0,
    'boid_count': 50,
}

# Slider ranges (min, max, step). Guidance only, never enforced.
RANGES: Dict[str, Tuple[float, float, float]] = {
    'separation_force': (0.0, 5.0, 0.1),
    'alignment_force': (0.0, 5.0, 0.1),
    'cohesion_force': (0.0, 5.0, 0.1),
    'perception_radius': (10.0, 200.0, 5.0),
    'max_speed': (1.0, 10.0, 0.5),
    'boid_count': (10, 500, 10),
}

LABELS: Dict[str, str] = {
    'separation_force': 'Separation',
    'alignment_force': 'Alignment',
    'cohesion_force': 'Cohesion',
    'perception_radius': 'Perception Radius',
    'max_speed': 'Max Speed',
    'boid_count': 'Boid Count',
}


class BoidConfig:
    """Configuration for boid simulation parameters."""

    # Simulation parameters
    num_boids: int = 50
    seed: int = 0

    # World boundaries
    world_width: float = 800.0
    world_height: float = 600.0

    # Boid behavior parameters
    max_speed: float = 4.0
    max_force: float = 0.2

    # Perception radius (shared by all three rules)
    perception_radius: float = 100.0

    # Behavior weights
    separation_force: float = 1.5
    alignment_force: float = 1.0
    cohesion_force: float = 1.0

    # Visualization
    boid_size: float = 8.0
    interval: int = 16  # ms between frames
    background: str = '#141414'
    boid_color: str = '#0064c8'

    def __init__(self, **overrides):
        for name, value in overrides.items():
            if not hasattr(type(self), name):
                raise AttributeError(f"Unknown configuration field: {name}")
            setattr(self, name, value)

    def copy(self) -> 'BoidConfig':
        """Return an independent copy carrying the same overrides."""
        return BoidConfig(**self.__dict__)

    def to_dict(self) -> Dict[str, object]:
        return {
            name: getattr(self, name)
            for name in type(self).__annotations__
        }

    def __repr__(self) -> str:
        return (
            f"BoidConfig(N={self.num_boids}, world={self.world_width}x{self.world_height}, "
            f"sep={self.separation_force}, ali={self.alignment_force}, "
            f"coh={self.cohesion_force}, radius={self.perception_radius})"
        )


# Default configuration
default_config = BoidConfig()
