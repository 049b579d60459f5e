"""Named, independently settable knobs over a running simulation.

This is the headless half of the control panel: the slider UI in
``visualize`` only ever calls ``get``/``set``/``reset`` on a ControlSurface.
"""

import logging
import math
from typing import Dict

from .config import DEFAULTS, RANGES
from .simulation import Simulation

logger = logging.getLogger(__name__)

# Knobs stored directly on the simulation's config
SIMULATION_KNOBS = ('separation_force', 'alignment_force', 'cohesion_force', 'perception_radius')

# Knobs handled by the control surface itself
CONTROL_KNOBS = ('max_speed', 'boid_count')


class ControlSurface:
    """Configuration surface bound to one Simulation.

    No value is validated or clamped; ``RANGES`` is only advice for sliders.
    """

    names = tuple(RANGES)

    def __init__(self, simulation: Simulation):
        self.simulation = simulation

    @property
    def max_speed(self) -> float:
        # All boids share the same limit, so the first one is representative
        boids = self.simulation.boids
        return boids[0].max_speed if boids else self.simulation.config.max_speed

    @max_speed.setter
    def max_speed(self, value: float) -> None:
        self.simulation.config.max_speed = value
        for boid in self.simulation.boids:
            boid.max_speed = value

    @property
    def boid_count(self) -> int:
        return self.simulation.count

    @boid_count.setter
    def boid_count(self, count: int) -> None:
        if not math.isfinite(count):
            return
        count = int(count)
        current = self.simulation.count

        if count > current:
            self.simulation.spawn(count - current)
        elif count < current:
            # Remove from the end
            for _ in range(current - max(count, 0)):
                self.simulation.remove_boid(self.simulation.boids[-1])
            logger.debug("Removed %d boids (total %d)", current - self.simulation.count,
                         self.simulation.count)

    def get(self, name: str) -> float:
        if name in SIMULATION_KNOBS:
            return getattr(self.simulation, name)
        if name in CONTROL_KNOBS:
            return getattr(self, name)
        raise KeyError(f"Unknown control: {name}")

    def set(self, name: str, value: float) -> None:
        """Set one knob by name; raises KeyError for names outside ``names``."""
        if name in SIMULATION_KNOBS:
            setattr(self.simulation, name, value)
        elif name in CONTROL_KNOBS:
            setattr(self, name, value)
        else:
            raise KeyError(f"Unknown control: {name}")

    def values(self) -> Dict[str, float]:
        return {name: self.get(name) for name in self.names}

    def reset(self) -> None:
        """Restore every knob to its default, adjusting the flock size to match."""
        for name in SIMULATION_KNOBS:
            setattr(self.simulation, name, DEFAULTS[name])
        self.max_speed = DEFAULTS['max_speed']
        self.boid_count = DEFAULTS['boid_count']
        logger.debug("Controls reset to defaults")
