from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List

from .topology import FILES, RINGS, SQUARES


FULL_MASK = (1 << SQUARES) - 1


@dataclass(frozen=True)
class Bitboard:
    """Immutable 64-bit set of squares, one bit per square index.

    The wrapped integer is always masked to 64 bits, so the complement of a
    bitboard never sets positions outside the board.
    """

    value: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", self.value & FULL_MASK)

    @classmethod
    def empty(cls) -> "Bitboard":
        return _EMPTY

    @classmethod
    def full(cls) -> "Bitboard":
        return _FULL

    @classmethod
    def from_index(cls, index: int) -> "Bitboard":
        return cls(1 << index)

    @classmethod
    def from_indices(cls, indices: Iterable[int]) -> "Bitboard":
        value = 0
        for index in indices:
            value |= 1 << index
        return cls(value)

    # --- single bits ---
    def get_bit(self, index: int) -> bool:
        return (self.value >> index) & 1 == 1

    def set_bit(self, index: int) -> "Bitboard":
        return Bitboard(self.value | (1 << index))

    def clear_bit(self, index: int) -> "Bitboard":
        return Bitboard(self.value & ~(1 << index))

    def toggle_bit(self, index: int) -> "Bitboard":
        return Bitboard(self.value ^ (1 << index))

    # --- set algebra ---
    def __or__(self, other: "Bitboard") -> "Bitboard":
        return Bitboard(self.value | other.value)

    def __and__(self, other: "Bitboard") -> "Bitboard":
        return Bitboard(self.value & other.value)

    def __xor__(self, other: "Bitboard") -> "Bitboard":
        return Bitboard(self.value ^ other.value)

    def __invert__(self) -> "Bitboard":
        return Bitboard(~self.value)

    or_ = __or__
    and_ = __and__
    xor = __xor__
    not_ = __invert__

    # --- queries ---
    def is_empty(self) -> bool:
        return self.value == 0

    def __bool__(self) -> bool:
        return self.value != 0

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and 0 <= index < SQUARES and self.get_bit(index)

    def pop_count(self) -> int:
        return bin(self.value).count("1")

    __len__ = pop_count

    def __iter__(self) -> Iterator[int]:
        """Yield set square indices in ascending order."""
        value = self.value
        while value:
            lsb = value & -value
            yield lsb.bit_length() - 1
            value ^= lsb

    def set_bits(self) -> List[int]:
        return list(self)

    def render(self) -> str:
        """Return a text grid of the bitboard, outer ring on top."""
        lines = []
        for ring in range(RINGS - 1, -1, -1):
            cells = ("1" if self.get_bit(ring * FILES + f) else "." for f in range(FILES))
            lines.append(f"Ring {ring}: " + " ".join(cells))
        lines.append("        " + " ".join(format(f, "x") for f in range(FILES)))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Bitboard(0x{self.value:016x})"


_EMPTY = Bitboard(0)
_FULL = Bitboard(FULL_MASK)
