"""ASCII rendering of an arena for the console demo."""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from tick_rps.types import AgentView

if TYPE_CHECKING:
    from tick_rps.arena import Arena

GRID_COLUMNS = 40
GRID_ROWS = 20
EMPTY_CELL = "."
RULE = "=" * 50


def render_grid(
    agents: Iterable[AgentView],
    width: float,
    height: float,
    columns: int = GRID_COLUMNS,
    rows: int = GRID_ROWS,
) -> list[str]:
    """Map agents onto a columns x rows character grid.

    The first agent (in index order) to land in a cell owns it.
    Agents mapped outside the grid are not drawn.
    """
    cells = [[EMPTY_CELL] * columns for _ in range(rows)]
    for kind, x, y in agents:
        col = int(x * columns / width)
        row = int(y * rows / height)
        if 0 <= col < columns and 0 <= row < rows and cells[row][col] == EMPTY_CELL:
            cells[row][col] = kind.symbol
    return ["".join(row) for row in cells]


def render_state(arena: Arena) -> str:
    counts = arena.counts()
    lines = [
        "",
        RULE,
        f"Generation: {arena.generation}",
        f"Rocks: {counts.rocks} | Papers: {counts.papers} | Scissors: {counts.scissors}",
        "",
        f"Simulation Box ({arena.width:g}x{arena.height:g}):",
    ]
    lines.extend(render_grid(arena.agents(), arena.width, arena.height))
    return "\n".join(lines)
