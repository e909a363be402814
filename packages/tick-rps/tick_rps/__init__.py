"""tick-rps - Rock, Paper, Scissors arena simulation on a fixed tick."""
from __future__ import annotations

from tick_rps.agent import Agent
from tick_rps.arena import Arena
from tick_rps.config import ArenaConfig
from tick_rps.kinds import Kind, beats, winner
from tick_rps.types import (
    AgentView,
    ArenaError,
    Conversion,
    Counts,
    SimulationNotOverError,
    SnapshotError,
    TickContext,
)

__all__ = [
    "Agent",
    "AgentView",
    "Arena",
    "ArenaConfig",
    "ArenaError",
    "Conversion",
    "Counts",
    "Kind",
    "SimulationNotOverError",
    "SnapshotError",
    "TickContext",
    "beats",
    "winner",
]
