from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Set, Tuple

from grid import SIZE, Grid


@dataclass(frozen=True)
class ConstraintGroup:
    """Nine grid indices that must hold each digit exactly once."""

    name: str
    cells: Tuple[int, ...]

    def is_satisfied(self, values: List[List[int]]) -> bool:
        """Return True if a fully assigned 9x9 value grid satisfies the group."""
        vals = [values[i // SIZE][i % SIZE] for i in self.cells]
        return sorted(vals) == list(range(1, SIZE + 1))


def cascade(grid: Grid, group: ConstraintGroup) -> bool:
    """Eliminate digits claimed by solved cells of ``group`` until stable.

    A solved digit seen twice in the same pass clears the second cell, which
    leaves the grid invalid for the caller to detect. Returns whether any
    candidate was removed.
    """
    changed_ever = False
    while True:
        changed = False
        solved_mask = 0
        for i in group.cells:
            if grid[i].is_solved():
                solved_mask |= grid[i].bits
        seen: Set[int] = set()
        for i in group.cells:
            cell = grid[i]
            if not cell.is_solved() and cell.restrict(solved_mask):
                changed = True
            if cell.is_solved():
                val = cell.value()
                if val in seen:
                    cell.clear()
                else:
                    seen.add(val)
        if not changed:
            break
        changed_ever = True
    return changed_ever


def cascade_all(grid: Grid, groups: Sequence[ConstraintGroup]) -> bool:
    """Cascade every group until a full sweep changes nothing."""
    changed_ever = False
    while True:
        changed_any = False
        for group in groups:
            if cascade(grid, group):
                changed_any = True
        if not changed_any:
            break
        changed_ever = True
    return changed_ever


def build_row_groups() -> List[ConstraintGroup]:
    return [
        ConstraintGroup("row", tuple(r * SIZE + c for c in range(SIZE)))
        for r in range(SIZE)
    ]


def build_col_groups() -> List[ConstraintGroup]:
    return [
        ConstraintGroup("col", tuple(r * SIZE + c for r in range(SIZE)))
        for c in range(SIZE)
    ]


def build_box_groups() -> List[ConstraintGroup]:
    groups: List[ConstraintGroup] = []
    for box_r in range(3):
        for box_c in range(3):
            cells = []
            for dr in range(3):
                for dc in range(3):
                    cells.append((box_r * 3 + dr) * SIZE + box_c * 3 + dc)
            groups.append(ConstraintGroup("box", tuple(cells)))
    return groups


def build_unique_groups() -> List[ConstraintGroup]:
    groups: List[ConstraintGroup] = []
    groups.extend(build_row_groups())
    groups.extend(build_col_groups())
    groups.extend(build_box_groups())
    return groups
