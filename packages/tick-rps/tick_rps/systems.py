"""System factories for one arena generation."""
from __future__ import annotations

from typing import Sequence

from tick_rps.agent import Agent
from tick_rps.collision import detect, separate
from tick_rps.kinds import winner
from tick_rps.types import Conversion, ConversionCallback, System, TickContext


def make_motion_system() -> System:
    """Integrate every agent, then bounce it off the walls.

    Runs in index order; reflection sees the post-integration position.
    """

    def motion_system(agents: Sequence[Agent], ctx: TickContext) -> None:
        for agent in agents:
            agent.integrate()
            agent.reflect(ctx.width, ctx.height)

    return motion_system


def make_conversion_system(
    on_conversion: ConversionCallback | None = None,
    separation: float = 2.0,
) -> System:
    """Resolve overlaps for every unordered pair. O(n^2).

    Pairs are visited (i, j), i < j, in index order and resolved in
    place: kinds and nudged positions from an earlier pair are what
    later pairs see, so an agent can convert more than once per tick.
    """

    def conversion_system(agents: Sequence[Agent], ctx: TickContext) -> None:
        n = len(agents)
        for i in range(n):
            agent_a = agents[i]
            for j in range(i + 1, n):
                agent_b = agents[j]
                contact = detect(agent_a, agent_b, i, j)
                if contact is None:
                    continue
                before_a = agent_a.kind
                before_b = agent_b.kind
                w = winner(before_a, before_b)
                agent_a.kind = w
                agent_b.kind = w
                separate(agent_a, agent_b, contact, separation)
                if on_conversion is not None:
                    on_conversion(
                        ctx,
                        Conversion(ctx.generation, i, j, before_a, before_b, w),
                    )

    return conversion_system
