"""Shared types, events, and errors for the arena."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, NamedTuple, Sequence

from tick_rps.kinds import Kind

if TYPE_CHECKING:
    from tick_rps.agent import Agent


@dataclass(frozen=True, slots=True)
class TickContext:
    generation: int
    width: float
    height: float
    request_stop: Callable[[], None]


@dataclass(frozen=True)
class Conversion:
    """One resolved overlap. Not stored; passed to conversion callbacks."""

    generation: int
    index_a: int
    index_b: int
    kind_a: Kind
    kind_b: Kind
    winner: Kind

    @property
    def changed(self) -> bool:
        return self.kind_a is not self.winner or self.kind_b is not self.winner


class Counts(NamedTuple):
    rocks: int
    papers: int
    scissors: int

    @property
    def total(self) -> int:
        return self.rocks + self.papers + self.scissors

    @property
    def survivors(self) -> tuple[Kind, ...]:
        return tuple(kind for kind in Kind if self.of(kind) > 0)

    def of(self, kind: Kind) -> int:
        if kind is Kind.ROCK:
            return self.rocks
        if kind is Kind.PAPER:
            return self.papers
        return self.scissors


class AgentView(NamedTuple):
    """Read-only (kind, x, y) triple handed to renderers."""

    kind: Kind
    x: float
    y: float


class ArenaError(Exception):
    """Base class for arena errors."""


class SimulationNotOverError(ArenaError, RuntimeError):
    """Raised when asking for the winner while more than one kind survives."""

    def __init__(self, counts: Counts) -> None:
        self.counts = counts
        super().__init__(
            f"Simulation is not over: {len(counts.survivors)} kinds remain {tuple(counts)}"
        )


class SnapshotError(ArenaError):
    """Raised on restore failures (version mismatch, dimension mismatch, bad data)."""


System = Callable[[Sequence["Agent"], TickContext], None]
ConversionCallback = Callable[[TickContext, Conversion], None]
