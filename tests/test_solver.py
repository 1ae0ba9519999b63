"""Tests for the backtracking search and the solver facade."""

from constraints import build_unique_groups, cascade_all
from grid import (
    build_grid,
    grid_is_invalid,
    grid_is_solved,
    grid_values,
    render_compact,
)
from puzzles import DEAD_END, PUZZLE, SAMPLE, SOLUTION, to_rows, to_values
from solver import SudokuSolver, find_solutions, solve


def _assert_valid_solution(grid, groups):
    assert grid_is_solved(grid)
    values = grid_values(grid)
    assert all(g.is_satisfied(values) for g in groups)


def test_solve_unique_puzzle():
    groups = build_unique_groups()
    result = solve(build_grid(to_values(PUZZLE)), 0, groups)
    assert result is not None
    assert grid_values(result) == to_rows(SOLUTION)


def test_solve_preserves_clues_and_input_grid():
    groups = build_unique_groups()
    grid = build_grid(to_values(SAMPLE))
    before = [c.bits for c in grid]
    result = solve(grid, 0, groups)
    assert result is not None
    _assert_valid_solution(result, groups)
    assert [c.bits for c in grid] == before
    for clue, cell in zip(to_values(SAMPLE), result):
        if clue:
            assert cell.value() == clue


def test_solved_input_is_returned_unchanged():
    groups = build_unique_groups()
    grid = build_grid(to_values(SOLUTION))
    result = solve(grid, 0, groups)
    assert result == grid


def test_empty_grid_converges_to_valid_solution():
    groups = build_unique_groups()
    result = solve(build_grid([0] * 81), 0, groups)
    assert result is not None
    _assert_valid_solution(result, groups)


def test_duplicate_clues_have_no_solution():
    groups = build_unique_groups()
    assert solve(build_grid([5, 5] + [0] * 79), 0, groups) is None


def test_unsatisfiable_puzzle_has_no_solution():
    bad = PUZZLE[:-1] + "1"
    assert solve(build_grid(to_values(bad)), 0, build_unique_groups()) is None


def test_find_solutions_stops_at_limit():
    groups = build_unique_groups()
    sols = find_solutions(build_grid([0] * 81), groups, 2)
    assert len(sols) == 2
    assert grid_values(sols[0]) != grid_values(sols[1])
    for sol in sols:
        _assert_valid_solution(sol, groups)


def test_find_solutions_on_unique_puzzle():
    sols = find_solutions(build_grid(to_values(PUZZLE)), build_unique_groups(), 5)
    assert len(sols) == 1


def test_solver_result_solved():
    result = SudokuSolver(to_rows(PUZZLE)).solve()
    assert result.status == "solved"
    assert result.solution == to_rows(SOLUTION)
    assert result.solutions_found == 1
    assert render_compact(result.grid).replace("\n", "") == SOLUTION


def test_solver_uniqueness_check():
    unique = SudokuSolver(to_rows(PUZZLE)).solve(require_uniqueness=True)
    assert unique.status == "solved"
    multiple = SudokuSolver(to_rows("0" * 81)).solve(require_uniqueness=True)
    assert multiple.status == "multiple"
    assert multiple.solutions_found == 2


def test_solver_reports_contradiction_in_givens():
    result = SudokuSolver(to_rows("55" + "0" * 79)).solve()
    assert result.status == "no-solution"
    assert result.solution is None
    assert result.grid is None
    assert result.message == "Contradiction in givens."


def test_solver_trace_logger_records_guesses():
    lines = []
    result = SudokuSolver(to_rows("0" * 81), logger=lines.append).solve()
    assert result.status == "solved"
    assert lines[0] == "Guess: r1c1 = 1"
    assert all(line.startswith(("Guess:", "Backtrack:")) for line in lines)


def test_initial_candidates_are_propagated():
    grid = SudokuSolver(to_rows(SAMPLE)).initial_candidates()
    assert grid[0].render() != "123456789"
    assert grid[2].value() == 9


def test_search_exhausts_branches_after_clean_cascade():
    groups = build_unique_groups()
    grid = build_grid(to_values(DEAD_END))
    cascade_all(grid, groups)
    assert not grid_is_invalid(grid)
    assert [grid[i].digits() for i in (6, 7, 8)] == [[8, 9]] * 3
    assert solve(build_grid(to_values(DEAD_END)), 0, groups) is None


def test_solver_traces_backtracks_when_every_guess_fails():
    lines = []
    result = SudokuSolver(to_rows(DEAD_END), logger=lines.append).solve()
    assert result.status == "no-solution"
    assert result.message == "No solution found."
    assert lines == [
        "Guess: r1c7 = 8",
        "Backtrack: r1c7 != 8",
        "Guess: r1c7 = 9",
        "Backtrack: r1c7 != 9",
    ]


def test_solve_from_later_start_index():
    groups = build_unique_groups()
    clues = to_values(SOLUTION[:72] + "0" * 9)
    result = solve(build_grid(clues), 72, groups)
    assert result is not None
    assert grid_values(result) == to_rows(SOLUTION)
    assert grid_values(solve(build_grid(to_values(PUZZLE)), 2, groups)) == to_rows(
        SOLUTION
    )


def test_duplicate_clues_in_column_have_no_solution():
    clues = [0] * 81
    clues[0] = clues[27] = 5
    assert solve(build_grid(clues), 0, build_unique_groups()) is None


def test_duplicate_clues_in_box_have_no_solution():
    clues = [0] * 81
    clues[0] = clues[10] = 5
    assert solve(build_grid(clues), 0, build_unique_groups()) is None
