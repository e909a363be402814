"""Arena configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass

from tick_rps.agent import DEFAULT_MAX_SPEED, DEFAULT_RADIUS


@dataclass(frozen=True)
class ArenaConfig:
    """Immutable population and contact settings for an arena.

    Attributes:
        agents_per_kind: Agents of each kind created at start-up.
        radius: Shared agent radius.
        max_speed: Bound of the uniform draw for each velocity component.
        spawn_margin: Minimum distance from a wall for start positions.
        separation: Distance each agent is pushed on contact.
    """

    agents_per_kind: int = 5
    radius: float = DEFAULT_RADIUS
    max_speed: float = DEFAULT_MAX_SPEED
    spawn_margin: float = 10.0
    separation: float = 2.0

    def __post_init__(self) -> None:
        if self.radius <= 0.0:
            raise ValueError("radius must be positive")
        if self.agents_per_kind < 0:
            raise ValueError("agents_per_kind must not be negative")
        if self.max_speed < 0.0:
            raise ValueError("max_speed must not be negative")
        if self.separation < 0.0:
            raise ValueError("separation must not be negative")
        if self.spawn_margin < self.radius:
            raise ValueError(
                f"spawn_margin ({self.spawn_margin}) must be at least radius ({self.radius})"
            )

    def check_geometry(self, width: float, height: float) -> None:
        """Raise ValueError unless a width x height box fits this population."""
        for name, size in (("width", width), ("height", height)):
            if size <= 0.0:
                raise ValueError(f"{name} must be positive")
            minimum = 2.0 * self.radius + 2.0 * self.spawn_margin
            if size <= 2.0 * self.radius or size < minimum:
                raise ValueError(
                    f"{name} {size} is too small: need at least {minimum} "
                    f"for radius {self.radius} and spawn margin {self.spawn_margin}"
                )
