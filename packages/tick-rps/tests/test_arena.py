"""Tests for arena initialisation, ticking, lifecycle, and observation."""

import random

import pytest

from tick_rps.agent import Agent
from tick_rps.arena import Arena
from tick_rps.config import ArenaConfig
from tick_rps.kinds import Kind
from tick_rps.types import AgentView, Counts, SimulationNotOverError


def _far_apart() -> list[Agent]:
    """Three agents moving in separate columns; they never touch."""
    return [
        Agent(Kind.ROCK, 20.0, 50.0, vx=0.0, vy=1.5),
        Agent(Kind.PAPER, 50.0, 30.0, vx=0.0, vy=-1.0),
        Agent(Kind.SCISSORS, 80.0, 70.0, vx=0.0, vy=2.0),
    ]


# --- Initialization ---


def test_standard_population():
    arena = Arena(100.0, 100.0, seed=1)
    assert len(arena) == 15
    assert arena.counts() == Counts(5, 5, 5)
    assert arena.generation == 0


def test_construction_order_is_rock_paper_scissors():
    arena = Arena(seed=2)
    kinds = [view.kind for view in arena.agents()]
    assert kinds == [Kind.ROCK, Kind.PAPER, Kind.SCISSORS] * 5


def test_start_positions_inside_margin():
    for seed in range(20):
        arena = Arena(100.0, 60.0, seed=seed)
        for _, x, y in arena.agents():
            assert 10.0 <= x <= 90.0
            assert 10.0 <= y <= 50.0


def test_initial_draw_order():
    """Per agent: x, y, then vx, vy, all from the arena's seeded RNG."""
    arena = Arena(100.0, 100.0, seed=7)
    ref = random.Random(7)
    for fields in arena.snapshot()["agents"]:
        assert fields["x"] == ref.uniform(10.0, 90.0)
        assert fields["y"] == ref.uniform(10.0, 90.0)
        assert fields["vx"] == ref.uniform(-2.0, 2.0)
        assert fields["vy"] == ref.uniform(-2.0, 2.0)
        assert fields["radius"] == 5.0


def test_same_seed_same_initial_state():
    a = Arena(100.0, 100.0, seed=12345)
    b = Arena(100.0, 100.0, seed=12345)
    assert a.snapshot() == b.snapshot()


def test_different_seed_different_initial_state():
    a = Arena(seed=111)
    b = Arena(seed=222)
    assert a.agents() != b.agents()


def test_auto_generated_seed():
    arena = Arena()
    assert isinstance(arena.seed, int)
    arena.run(10)


def test_custom_population_size():
    arena = Arena(seed=3, config=ArenaConfig(agents_per_kind=2))
    assert len(arena) == 6
    assert arena.counts() == Counts(2, 2, 2)


def test_from_agents_copies():
    agents = _far_apart()
    arena = Arena.from_agents(agents)
    arena.tick()
    assert agents[0].y == 50.0
    assert arena.agents()[0].y == 51.5


def test_from_agents_rejects_oversized_agent():
    with pytest.raises(ValueError, match="radius"):
        Arena.from_agents([Agent(Kind.ROCK, 50.0, 50.0, radius=60.0)])


# --- tick() ---


def test_tick_advances_generation_by_one():
    arena = Arena(seed=5)
    for expected in range(1, 21):
        arena.tick()
        assert arena.generation == expected


def test_tick_without_contacts_is_pure_motion():
    arena = Arena.from_agents(_far_apart())
    expected = _far_apart()
    for _ in range(60):
        arena.tick()
        for agent in expected:
            agent.integrate()
            agent.reflect(100.0, 100.0)
        assert arena.agents() == tuple(AgentView(a.kind, a.x, a.y) for a in expected)
    assert arena.conversions == 0


def test_extra_system_runs_after_conversion():
    arena = Arena.from_agents(
        [Agent(Kind.ROCK, 46.0, 50.0), Agent(Kind.SCISSORS, 54.0, 50.0)]
    )
    seen = []

    def observer(agents, ctx):
        seen.append((ctx.generation, [a.kind for a in agents]))

    arena.add_system(observer)
    arena.tick()
    assert seen == [(1, [Kind.ROCK, Kind.ROCK])]
    assert arena.generation == 1


# --- run() ---


def test_run_n_ticks():
    arena = Arena.from_agents(_far_apart())
    assert arena.run(25) == 25
    assert arena.generation == 25


def test_run_stops_when_over():
    arena = Arena.from_agents(
        [
            Agent(Kind.ROCK, 40.0, 50.0, vx=1.0, vy=0.0),
            Agent(Kind.SCISSORS, 60.0, 50.0, vx=-1.0, vy=0.0),
        ]
    )
    ran = arena.run(100)
    assert ran == 6
    assert arena.is_over()
    assert arena.winner() is Kind.ROCK


def test_run_ignores_over_when_asked():
    arena = Arena.from_agents([Agent(Kind.ROCK, 50.0, 50.0, vx=1.0)])
    assert arena.run(10, until_over=False) == 10
    assert arena.run(10) == 0


def test_run_calls_start_and_stop_hooks():
    arena = Arena.from_agents(_far_apart())
    events = []
    arena.on_start(lambda a, c: events.append(("start", c.generation)))
    arena.on_stop(lambda a, c: events.append(("stop", c.generation)))
    arena.add_system(lambda agents, c: events.append(("tick", c.generation)))
    arena.run(2)
    assert events == [("start", 0), ("tick", 1), ("tick", 2), ("stop", 2)]


def test_request_stop_ends_run():
    arena = Arena.from_agents(_far_apart())

    def stopper(agents, ctx):
        if ctx.generation == 3:
            ctx.request_stop()

    arena.add_system(stopper)
    assert arena.run(50) == 3
    assert arena.generation == 3
    # A new run clears the request.
    assert arena.run(2) == 2


# --- Observation ---


def test_counts_sum_to_population():
    arena = Arena(seed=9)
    for _ in range(100):
        arena.tick()
        assert arena.counts().total == len(arena) == 15


def test_is_over_and_winner_single_kind():
    arena = Arena.from_agents(
        [Agent(Kind.PAPER, 20.0, 20.0), Agent(Kind.PAPER, 70.0, 70.0)]
    )
    assert arena.is_over()
    assert arena.winner() is Kind.PAPER


def test_winner_raises_when_not_over():
    arena = Arena(seed=4)
    assert not arena.is_over()
    with pytest.raises(SimulationNotOverError) as excinfo:
        arena.winner()
    assert excinfo.value.counts == Counts(5, 5, 5)
    assert isinstance(excinfo.value, RuntimeError)


def test_empty_arena_defaults_to_rock():
    arena = Arena(seed=1, config=ArenaConfig(agents_per_kind=0))
    assert len(arena) == 0
    assert arena.is_over()
    assert arena.winner() is Kind.ROCK


def test_agents_view_is_read_only_copy():
    arena = Arena(seed=6)
    view = arena.agents()
    assert isinstance(view, tuple)
    assert all(isinstance(v, AgentView) for v in view)
    with pytest.raises(AttributeError):
        view[0].x = 0.0  # type: ignore[misc]


def test_counts_helpers():
    counts = Counts(3, 0, 2)
    assert counts.total == 5
    assert counts.survivors == (Kind.ROCK, Kind.SCISSORS)
    assert counts.of(Kind.PAPER) == 0
    assert counts.of(Kind.SCISSORS) == 2


# --- Conversion events ---


def test_conversion_callbacks_and_counter():
    arena = Arena.from_agents(
        [Agent(Kind.ROCK, 46.0, 50.0), Agent(Kind.SCISSORS, 54.0, 50.0)]
    )
    events = []

    def record(ctx, event):
        events.append(event)

    arena.on_conversion(record)
    arena.tick()
    assert len(events) == 1
    assert events[0].winner is Kind.ROCK
    assert events[0].changed
    assert arena.conversions == 1

    arena.off_conversion(record)
    arena.off_conversion(record)
    arena.tick()
    assert len(events) == 1
