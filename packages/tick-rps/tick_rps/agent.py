"""Agent - a single mobile entity in the arena."""
from __future__ import annotations

import math
import random
from dataclasses import dataclass

from tick_rps.kinds import Kind

DEFAULT_RADIUS = 5.0
DEFAULT_MAX_SPEED = 2.0


@dataclass(slots=True)
class Agent:
    """Circle with a kind, a position and a per-tick velocity.

    Only ``kind``, the position and the velocity change after
    construction; ``radius`` is fixed.
    """

    kind: Kind
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    radius: float = DEFAULT_RADIUS

    def __post_init__(self) -> None:
        if self.radius <= 0.0:
            raise ValueError("radius must be positive")

    @classmethod
    def spawn(
        cls,
        kind: Kind,
        x: float,
        y: float,
        rng: random.Random,
        radius: float = DEFAULT_RADIUS,
        max_speed: float = DEFAULT_MAX_SPEED,
    ) -> Agent:
        """Create an agent at (x, y) with a uniformly random velocity.

        Each component is drawn independently from [-max_speed, max_speed],
        vx first. The magnitude is not normalised.
        """
        vx = rng.uniform(-max_speed, max_speed)
        vy = rng.uniform(-max_speed, max_speed)
        return cls(kind=kind, x=x, y=y, vx=vx, vy=vy, radius=radius)

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    @property
    def velocity(self) -> tuple[float, float]:
        return (self.vx, self.vy)

    def integrate(self) -> None:
        self.x += self.vx
        self.y += self.vy

    def reflect(self, width: float, height: float) -> None:
        """Bounce off the walls of a width x height box.

        A circle touching or crossing a wall has that velocity component
        negated and its centre clamped back inside.
        """
        r = self.radius
        if self.x - r <= 0.0 or self.x + r >= width:
            self.vx = -self.vx
            self.x = max(r, min(width - r, self.x))
        if self.y - r <= 0.0 or self.y + r >= height:
            self.vy = -self.vy
            self.y = max(r, min(height - r, self.y))

    def distance_to(self, other: Agent) -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return math.sqrt(dx * dx + dy * dy)

    def overlaps(self, other: Agent) -> bool:
        # Touching circles do not overlap.
        return self.distance_to(other) < self.radius + other.radius
