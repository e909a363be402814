"""Arena - owns the agents and advances the simulation one generation at a time."""
from __future__ import annotations

import dataclasses
import os
import random
from typing import Any, Callable, Iterable

from tick_rps.agent import Agent
from tick_rps.config import ArenaConfig
from tick_rps.kinds import Kind
from tick_rps.systems import make_conversion_system, make_motion_system
from tick_rps.types import (
    AgentView,
    Conversion,
    ConversionCallback,
    Counts,
    SimulationNotOverError,
    SnapshotError,
    System,
    TickContext,
)

_SNAPSHOT_VERSION = 1

# Construction order within each round of initialisation.
_SPAWN_ORDER = (Kind.ROCK, Kind.PAPER, Kind.SCISSORS)

Hook = Callable[["Arena", TickContext], None]


class Arena:
    def __init__(
        self,
        width: float = 100.0,
        height: float = 100.0,
        seed: int | None = None,
        *,
        config: ArenaConfig | None = None,
        agents: Iterable[Agent] | None = None,
    ) -> None:
        self._config = config if config is not None else ArenaConfig()
        self._config.check_geometry(width, height)
        self._width = float(width)
        self._height = float(height)
        self._generation = 0
        self._conversions = 0
        self._stop_requested = False
        self._conversion_callbacks: list[ConversionCallback] = []
        self._start_hooks: list[Hook] = []
        self._stop_hooks: list[Hook] = []

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

        self._systems: list[System] = [
            make_motion_system(),
            make_conversion_system(self._dispatch_conversion, self._config.separation),
        ]

        if agents is None:
            self._agents = self._populate()
        else:
            self._agents = [dataclasses.replace(agent) for agent in agents]
            for agent in self._agents:
                self._check_fits(agent)

    @classmethod
    def from_agents(
        cls,
        agents: Iterable[Agent],
        width: float = 100.0,
        height: float = 100.0,
        config: ArenaConfig | None = None,
    ) -> Arena:
        """Build an arena around caller-supplied agents (copied, not shared)."""
        return cls(width, height, seed=0, config=config, agents=agents)

    def _populate(self) -> list[Agent]:
        cfg = self._config
        margin = cfg.spawn_margin
        agents: list[Agent] = []
        for _ in range(cfg.agents_per_kind):
            for kind in _SPAWN_ORDER:
                x = self._rng.uniform(margin, self._width - margin)
                y = self._rng.uniform(margin, self._height - margin)
                agents.append(
                    Agent.spawn(
                        kind, x, y, self._rng,
                        radius=cfg.radius, max_speed=cfg.max_speed,
                    )
                )
        return agents

    def _check_fits(self, agent: Agent) -> None:
        if 2.0 * agent.radius >= min(self._width, self._height):
            raise ValueError(
                f"Agent radius {agent.radius} does not fit a "
                f"{self._width:g}x{self._height:g} arena"
            )

    # -- Properties --

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def config(self) -> ArenaConfig:
        return self._config

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def conversions(self) -> int:
        """Number of agent kind changes since generation 0."""
        return self._conversions

    def __len__(self) -> int:
        return len(self._agents)

    # -- Registration --

    def add_system(self, system: System) -> None:
        """Append a system that runs after motion and conversion each tick."""
        self._systems.append(system)

    def on_conversion(self, callback: ConversionCallback) -> None:
        self._conversion_callbacks.append(callback)

    def off_conversion(self, callback: ConversionCallback) -> None:
        try:
            self._conversion_callbacks.remove(callback)
        except ValueError:
            pass

    def on_start(self, hook: Hook) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Hook) -> None:
        self._stop_hooks.append(hook)

    def _dispatch_conversion(self, ctx: TickContext, event: Conversion) -> None:
        if event.kind_a is not event.winner:
            self._conversions += 1
        if event.kind_b is not event.winner:
            self._conversions += 1
        for cb in self._conversion_callbacks:
            cb(ctx, event)

    # -- Simulation --

    def _request_stop(self) -> None:
        self._stop_requested = True

    def _context(self, generation: int) -> TickContext:
        return TickContext(
            generation=generation,
            width=self._width,
            height=self._height,
            request_stop=self._request_stop,
        )

    def tick(self) -> None:
        """Advance one generation: motion, then conversion, then bookkeeping."""
        # Systems see the number of the generation being produced.
        ctx = self._context(self._generation + 1)
        for system in self._systems:
            system(self._agents, ctx)
        self._generation += 1

    def run(self, n: int, until_over: bool = True) -> int:
        """Tick up to ``n`` times and return how many ticks ran.

        Stops early once a single kind remains (when ``until_over``) or
        when a system calls ``ctx.request_stop()``.
        """
        self._stop_requested = False
        ctx = self._context(self._generation)
        for hook in self._start_hooks:
            hook(self, ctx)

        ran = 0
        for _ in range(n):
            if until_over and self.is_over():
                break
            self.tick()
            ran += 1
            if self._stop_requested:
                break

        ctx = self._context(self._generation)
        for hook in self._stop_hooks:
            hook(self, ctx)
        return ran

    # -- Observation --

    def counts(self) -> Counts:
        rocks = papers = scissors = 0
        for agent in self._agents:
            if agent.kind is Kind.ROCK:
                rocks += 1
            elif agent.kind is Kind.PAPER:
                papers += 1
            else:
                scissors += 1
        return Counts(rocks, papers, scissors)

    def is_over(self) -> bool:
        return len(self.counts().survivors) <= 1

    def winner(self) -> Kind:
        """The single surviving kind. Raises SimulationNotOverError otherwise."""
        counts = self.counts()
        survivors = counts.survivors
        if len(survivors) > 1:
            raise SimulationNotOverError(counts)
        if not survivors:
            return Kind.ROCK
        return survivors[0]

    def agents(self) -> tuple[AgentView, ...]:
        return tuple(AgentView(a.kind, a.x, a.y) for a in self._agents)

    # -- Snapshot / restore --

    def snapshot(self) -> dict[str, Any]:
        return {
            "version": _SNAPSHOT_VERSION,
            "generation": self._generation,
            "width": self._width,
            "height": self._height,
            "seed": self._seed,
            "conversions": self._conversions,
            "rng_state": _serialize_rng_state(self._rng.getstate()),
            "config": dataclasses.asdict(self._config),
            "agents": [
                {
                    "kind": a.kind.value,
                    "x": a.x,
                    "y": a.y,
                    "vx": a.vx,
                    "vy": a.vy,
                    "radius": a.radius,
                }
                for a in self._agents
            ],
        }

    def restore(self, data: dict[str, Any]) -> None:
        version = data.get("version")
        if version != _SNAPSHOT_VERSION:
            raise SnapshotError(
                f"Unsupported snapshot version {version!r}, expected {_SNAPSHOT_VERSION}"
            )

        snap_size = (data.get("width"), data.get("height"))
        if snap_size != (self._width, self._height):
            raise SnapshotError(
                f"Size mismatch: snapshot has {snap_size[0]}x{snap_size[1]}, "
                f"arena has {self._width:g}x{self._height:g}"
            )

        try:
            config = ArenaConfig(**data["config"])
            agents = [
                Agent(
                    kind=Kind(fields["kind"]),
                    x=float(fields["x"]),
                    y=float(fields["y"]),
                    vx=float(fields["vx"]),
                    vy=float(fields["vy"]),
                    radius=float(fields["radius"]),
                )
                for fields in data["agents"]
            ]
            config.check_geometry(self._width, self._height)
            for agent in agents:
                self._check_fits(agent)
            rng = random.Random()
            rng.setstate(_deserialize_rng_state(data["rng_state"]))
            generation = int(data["generation"])
            seed = data["seed"]
            conversions = int(data.get("conversions", 0))
        except (KeyError, TypeError, ValueError) as exc:
            raise SnapshotError(f"Malformed snapshot: {exc}") from exc

        self._config = config
        self._systems[1] = make_conversion_system(
            self._dispatch_conversion, config.separation
        )
        self._agents = agents
        self._rng = rng
        self._generation = generation
        self._seed = seed
        self._conversions = conversions


def _serialize_rng_state(state: tuple[int, tuple[int, ...], float | None]) -> list[Any]:
    """Convert Random.getstate() to a JSON-compatible list."""
    version, internalstate, gauss_next = state
    return [version, list(internalstate), gauss_next]


def _deserialize_rng_state(data: list[Any]) -> tuple[int, tuple[int, ...], float | None]:
    version, internalstate, gauss_next = data
    return (version, tuple(internalstate), gauss_next)
