"""Console demo: run an arena and print periodic snapshots.

Run:
    python -m tick_rps [--seed N] [--max-generations N] [--delay S]
"""
from __future__ import annotations

import argparse
import time
from dataclasses import dataclass
from typing import Callable, Sequence

from tick_rps.arena import Arena
from tick_rps.config import ArenaConfig
from tick_rps.kinds import Kind
from tick_rps.render import RULE, render_state
from tick_rps.types import Counts

TITLE = "Rock Paper Scissors Simulator"
MAX_GENERATIONS = 1000
DISPLAY_EVERY = 10
DISPLAY_DELAY = 0.5


@dataclass(frozen=True)
class Outcome:
    """How a console run ended."""

    generations: int
    winner: Kind | None
    counts: Counts
    conversions: int


def run_simulation(
    arena: Arena,
    max_generations: int = MAX_GENERATIONS,
    display_every: int = DISPLAY_EVERY,
    delay: float = DISPLAY_DELAY,
    out: Callable[[str], None] = print,
    sleep: Callable[[float], None] = time.sleep,
) -> Outcome:
    """Drive ``arena`` until one kind remains or ``max_generations`` ticks pass.

    The state is printed before the first tick, after every
    ``display_every``-th tick (the first tick included), and once more
    at the end. ``delay`` only paces the output.
    """
    if display_every <= 0:
        raise ValueError("display_every must be positive")

    out(render_state(arena))

    for gen in range(max_generations):
        if arena.is_over():
            break
        arena.tick()
        if gen % display_every == 0:
            out(render_state(arena))
            if delay > 0:
                sleep(delay)

    out("")
    out(RULE)
    out("SIMULATION COMPLETE!")
    out(render_state(arena))

    winner: Kind | None = None
    if arena.is_over():
        winner = arena.winner()
        out(f"\nWinner: {winner.label}!")
    else:
        out("\nSimulation ended after maximum generations.")

    return Outcome(
        generations=arena.generation,
        winner=winner,
        counts=arena.counts(),
        conversions=arena.conversions,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tick-rps",
        description="Rock Paper Scissors arena simulation (text mode)",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="RNG seed (random if omitted)",
    )
    parser.add_argument(
        "--width", type=float, default=100.0,
        help="Arena width (default: 100)",
    )
    parser.add_argument(
        "--height", type=float, default=100.0,
        help="Arena height (default: 100)",
    )
    parser.add_argument(
        "--per-kind", type=int, default=5,
        help="Agents of each kind at start (default: 5)",
    )
    parser.add_argument(
        "--max-generations", type=int, default=MAX_GENERATIONS,
        help=f"Generation cap (default: {MAX_GENERATIONS})",
    )
    parser.add_argument(
        "--every", type=int, default=DISPLAY_EVERY,
        help=f"Print the arena every N generations (default: {DISPLAY_EVERY})",
    )
    parser.add_argument(
        "--delay", type=float, default=DISPLAY_DELAY,
        help=f"Seconds to pause after each printout (default: {DISPLAY_DELAY})",
    )
    return parser


def main(
    argv: Sequence[str] | None = None,
    out: Callable[[str], None] = print,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.every <= 0:
        parser.error("--every must be positive")
    if args.max_generations < 0:
        parser.error("--max-generations must not be negative")

    try:
        config = ArenaConfig(agents_per_kind=args.per_kind)
        arena = Arena(args.width, args.height, seed=args.seed, config=config)
    except ValueError as exc:
        parser.error(str(exc))

    out(TITLE)
    out("=" * len(TITLE) + "\n")
    out(
        f"Starting simulation with {args.per_kind} Rocks, {args.per_kind} Papers, "
        f"and {args.per_kind} Scissors..."
    )
    out("Legend: R = Rock, P = Paper, S = Scissors")

    run_simulation(
        arena,
        max_generations=args.max_generations,
        display_every=args.every,
        delay=args.delay,
        out=out,
        sleep=sleep,
    )
    return 0
