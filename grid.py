from __future__ import annotations

from typing import List, Sequence

from cell import CandidateCell

SIZE = 9
CELL_COUNT = SIZE * SIZE

Grid = List[CandidateCell]


def build_grid(clues: Sequence[int]) -> Grid:
    """Row-major 81 values (0 blank, 1-9 clue) to a grid of candidate cells."""
    return [CandidateCell.from_value(v) for v in clues]


def copy_grid(grid: Grid) -> Grid:
    return [c.copy() for c in grid]


def grid_is_invalid(grid: Grid) -> bool:
    return any(c.is_invalid() for c in grid)


def grid_is_solved(grid: Grid) -> bool:
    return all(c.is_solved() for c in grid)


def grid_values(grid: Grid) -> List[List[int]]:
    return [[grid[r * SIZE + c].value() for c in range(SIZE)] for r in range(SIZE)]


def _compact_char(cell: CandidateCell) -> str:
    if cell.is_solved():
        return cell.render()
    if cell.is_invalid():
        return "X"
    return "?"


def render_compact(grid: Grid) -> str:
    lines = []
    for r in range(SIZE):
        lines.append("".join(_compact_char(grid[r * SIZE + c]) for c in range(SIZE)))
    return "\n".join(lines)


def render_verbose(grid: Grid) -> str:
    return "\n".join(
        f"({i // SIZE},{i % SIZE}) {cell.render()}" for i, cell in enumerate(grid)
    )
