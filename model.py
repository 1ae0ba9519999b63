from __future__ import annotations

import json
from typing import Iterable, List

from grid import CELL_COUNT, SIZE

Values = List[List[int]]

BLANK_CHARS = {".", "_", "-"}
FORMAT_VERSION = 1


class PuzzleModel:
    """The clue grid handed to the solver. All input validation happens here."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.grid: Values = [[0 for _ in range(SIZE)] for _ in range(SIZE)]

    def set_value(self, row: int, col: int, value: int) -> None:
        if not 0 <= value <= SIZE:
            raise ValueError(f"Value out of range at r{row + 1}c{col + 1}: {value}")
        self.grid[row][col] = value

    def clear_value(self, row: int, col: int) -> None:
        self.grid[row][col] = 0

    def clear_digits(self) -> None:
        for r in range(SIZE):
            for c in range(SIZE):
                self.grid[r][c] = 0

    def copy_grid(self) -> Values:
        return [[self.grid[r][c] for c in range(SIZE)] for r in range(SIZE)]

    def clues(self) -> List[int]:
        return [self.grid[r][c] for r in range(SIZE) for c in range(SIZE)]

    @classmethod
    def from_flat(cls, values: Iterable[int]) -> PuzzleModel:
        vals = [int(v) for v in values]
        if len(vals) != CELL_COUNT:
            raise ValueError(f"Puzzle must have {CELL_COUNT} cells, got {len(vals)}")
        model = cls()
        for i, v in enumerate(vals):
            model.set_value(i // SIZE, i % SIZE, v)
        return model

    @classmethod
    def from_string(cls, text: str) -> PuzzleModel:
        digits = []
        for ch in text:
            if ch.isspace():
                continue
            if ch in BLANK_CHARS:
                digits.append(0)
            elif ch.isdigit():
                digits.append(int(ch))
            else:
                raise ValueError(f"Invalid character in puzzle: {ch!r}")
        return cls.from_flat(digits)

    def to_dict(self) -> dict:
        return {"version": FORMAT_VERSION, "grid": self.copy_grid()}

    def apply_dict(self, data: dict) -> None:
        grid = data.get("grid")
        if not isinstance(grid, list) or len(grid) != SIZE:
            raise ValueError("Invalid grid")
        if any(not isinstance(row, list) or len(row) != SIZE for row in grid):
            raise ValueError("Invalid grid")
        self.reset()
        for r in range(SIZE):
            for c in range(SIZE):
                value = grid[r][c]
                # bool is an int subclass; JSON true/false are not digits
                if not isinstance(value, int) or isinstance(value, bool):
                    raise ValueError(f"Invalid value at r{r + 1}c{c + 1}: {value!r}")
                self.set_value(r, c, value)


def load_puzzle(path: str) -> PuzzleModel:
    with open(path, "r") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("Puzzle file must contain a JSON object")
    model = PuzzleModel()
    model.apply_dict(data)
    return model


def save_puzzle(model: PuzzleModel, path: str) -> None:
    with open(path, "w") as f:
        json.dump(model.to_dict(), f, indent=2)
