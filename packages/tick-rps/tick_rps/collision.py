"""Pure circle contact detection and separation for agents."""
from __future__ import annotations

from dataclasses import dataclass

from tick_rps.agent import Agent


@dataclass(frozen=True)
class Contact:
    """Overlap between two agents. Offset points from B toward A."""

    index_a: int
    index_b: int
    dx: float
    dy: float
    distance: float

    @property
    def coincident(self) -> bool:
        return self.distance == 0.0


def detect(
    agent_a: Agent,
    agent_b: Agent,
    index_a: int = 0,
    index_b: int = 1,
) -> Contact | None:
    """Return a Contact when the two circles overlap, else None."""
    if not agent_a.overlaps(agent_b):
        return None
    return Contact(
        index_a,
        index_b,
        agent_a.x - agent_b.x,
        agent_a.y - agent_b.y,
        agent_a.distance_to(agent_b),
    )


def separate(agent_a: Agent, agent_b: Agent, contact: Contact, strength: float) -> None:
    """Push the pair apart along the contact normal by ``strength`` each.

    Coincident centres have no normal and are left in place.
    Velocities are never touched.
    """
    if contact.coincident:
        return
    ux = contact.dx / contact.distance
    uy = contact.dy / contact.distance
    agent_a.x += ux * strength
    agent_a.y += uy * strength
    agent_b.x -= ux * strength
    agent_b.y -= uy * strength
