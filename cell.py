from __future__ import annotations

from dataclasses import dataclass
from typing import List

WIDTH = 9
FULL_MASK = (1 << WIDTH) - 1  # 0b111111111


def bit(digit: int) -> int:
    return 1 << (digit - 1)


@dataclass
class CandidateCell:
    """Digits still possible for one square, stored as a 9-bit mask.

    Bit ``i`` set means digit ``i + 1`` is possible. No bits set is a
    contradiction, exactly one bit set is a solved square.
    """

    bits: int = FULL_MASK

    def __post_init__(self) -> None:
        self.bits &= FULL_MASK

    @classmethod
    def full(cls) -> CandidateCell:
        return cls(FULL_MASK)

    @classmethod
    def from_digit(cls, digit: int) -> CandidateCell:
        return cls(bit(digit))

    @classmethod
    def from_value(cls, value: int) -> CandidateCell:
        """0 is a blank square, 1-9 a given clue."""
        return cls.full() if value == 0 else cls.from_digit(value)

    def is_solved(self) -> bool:
        return self.bits.bit_count() == 1

    def is_invalid(self) -> bool:
        return self.bits == 0

    def digits(self) -> List[int]:
        return [d for d in range(1, WIDTH + 1) if self.bits & bit(d)]

    def value(self) -> int:
        """Return the digit if the cell is solved, else 0."""
        return self.digits()[0] if self.is_solved() else 0

    def solutions(self) -> List[CandidateCell]:
        return [CandidateCell.from_digit(d) for d in self.digits()]

    def render(self) -> str:
        return "".join(str(d) for d in self.digits())

    def restrict(self, mask: int) -> bool:
        """Remove every digit in ``mask``; report whether anything was removed."""
        before = self.bits
        self.bits &= ~mask & FULL_MASK
        return self.bits != before

    def clear(self) -> None:
        self.bits = 0

    def copy(self) -> CandidateCell:
        return CandidateCell(self.bits)
