from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from constraints import ConstraintGroup, build_unique_groups, cascade_all
from grid import (
    CELL_COUNT,
    SIZE,
    Grid,
    build_grid,
    copy_grid,
    grid_is_invalid,
    grid_values,
)

log = logging.getLogger(__name__)

Values = List[List[int]]
TraceLogger = Callable[[str], None]

PROGRESS_INTERVAL_S = 60


@dataclass
class SolverResult:
    status: str
    solution: Optional[Values]
    duration_ms: int
    solutions_found: int = 0
    message: str = ""
    grid: Optional[Grid] = None


@dataclass
class _Progress:
    start: float
    last_report: float = 0.0
    nodes: int = 0

    def tick(self, grid: Grid, solutions: List[Grid]) -> None:
        self.nodes += 1
        now = time.time()
        if now - self.last_report < PROGRESS_INTERVAL_S:
            return
        filled = sum(1 for c in grid if c.is_solved())
        log.info(
            "%ds elapsed; %d nodes; filled %d/%d cells; solutions found %d",
            int(now - self.start),
            self.nodes,
            filled,
            CELL_COUNT,
            len(solutions),
        )
        self.last_report = now


def _cell_name(index: int) -> str:
    return f"r{index // SIZE + 1}c{index % SIZE + 1}"


def _first_unsolved(grid: Grid, start_index: int) -> Optional[int]:
    for i in range(start_index, len(grid)):
        if not grid[i].is_solved():
            return i
    return None


def _search(
    grid: Grid,
    start_index: int,
    groups: Sequence[ConstraintGroup],
    solutions: List[Grid],
    max_solutions: int,
    progress: Optional[_Progress] = None,
    logger: Optional[TraceLogger] = None,
) -> None:
    # grid is owned by this call; siblings each get their own copy
    if progress:
        progress.tick(grid, solutions)
    cascade_all(grid, groups)
    if grid_is_invalid(grid):
        return
    index = _first_unsolved(grid, start_index)
    if index is None:
        solutions.append(grid)
        return
    for guess in grid[index].solutions():
        digit = guess.value()
        branch = copy_grid(grid)
        branch[index] = guess
        if logger:
            logger(f"Guess: {_cell_name(index)} = {digit}")
        found = len(solutions)
        _search(branch, index, groups, solutions, max_solutions, progress, logger)
        if len(solutions) >= max_solutions:
            return
        if logger and len(solutions) == found:
            logger(f"Backtrack: {_cell_name(index)} != {digit}")


def solve(
    grid: Grid, start_index: int, groups: Sequence[ConstraintGroup]
) -> Optional[Grid]:
    """Return a fully solved copy of ``grid``, or None if no solution exists.

    Cells before ``start_index`` are assumed solved by the caller; passing 0
    is always correct. The caller's grid is left untouched.
    """
    solutions: List[Grid] = []
    _search(copy_grid(grid), start_index, groups, solutions, 1)
    return solutions[0] if solutions else None


def find_solutions(
    grid: Grid,
    groups: Sequence[ConstraintGroup],
    max_solutions: int,
    logger: Optional[TraceLogger] = None,
) -> List[Grid]:
    """Collect up to ``max_solutions`` solutions in search order."""
    solutions: List[Grid] = []
    if max_solutions < 1:
        return solutions
    _search(copy_grid(grid), 0, groups, solutions, max_solutions, logger=logger)
    return solutions


class SudokuSolver:
    def __init__(self, givens: Values, logger: Optional[TraceLogger] = None) -> None:
        self.givens = givens
        self.logger = logger
        self.groups = build_unique_groups()

    def _clues(self) -> List[int]:
        return [self.givens[r][c] for r in range(SIZE) for c in range(SIZE)]

    def initial_candidates(self) -> Grid:
        """Candidate grid after propagating the givens, before any guess."""
        grid = build_grid(self._clues())
        cascade_all(grid, self.groups)
        return grid

    def solve(self, require_uniqueness: bool = False) -> SolverResult:
        start = time.time()
        log.info("solve start")
        candidates = self.initial_candidates()
        if grid_is_invalid(candidates):
            duration_ms = int((time.time() - start) * 1000)
            log.info("contradiction in givens after %d ms", duration_ms)
            return SolverResult(
                status="no-solution",
                solution=None,
                duration_ms=duration_ms,
                message="Contradiction in givens.",
            )
        solutions: List[Grid] = []
        max_solutions = 2 if require_uniqueness else 1
        progress = _Progress(start=start, last_report=start)
        _search(
            candidates,
            0,
            self.groups,
            solutions,
            max_solutions,
            progress,
            self.logger,
        )
        duration_ms = int((time.time() - start) * 1000)
        log.info(
            "solve end in %d ms; %d nodes; solutions found %d",
            duration_ms,
            progress.nodes,
            len(solutions),
        )
        if not solutions:
            return SolverResult(
                status="no-solution",
                solution=None,
                duration_ms=duration_ms,
                solutions_found=0,
                message="No solution found.",
            )
        first = solutions[0]
        if require_uniqueness and len(solutions) > 1:
            return SolverResult(
                status="multiple",
                solution=grid_values(first),
                duration_ms=duration_ms,
                solutions_found=len(solutions),
                message="Multiple solutions exist.",
                grid=first,
            )
        return SolverResult(
            status="solved",
            solution=grid_values(first),
            duration_ms=duration_ms,
            solutions_found=len(solutions),
            message="Solved successfully.",
            grid=first,
        )
