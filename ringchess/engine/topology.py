from __future__ import annotations

from dataclasses import dataclass


RINGS = 4
FILES = 16
SQUARES = RINGS * FILES

# Index returned for coordinates whose ring lies outside the board
OFF_BOARD = -1

FILE_NAMES = "abcdefghijklmnop"


def normalize_file(file: int) -> int:
    """Wrap a file index into ``0..FILES-1`` (file -1 is file 15)."""
    return file % FILES


def is_valid_ring(ring: int) -> bool:
    return 0 <= ring < RINGS


def to_index(ring: int, file: int) -> int:
    """Convert ``(ring, file)`` into a square index.

    Args:
        ring (int): Ring number, 0 (innermost) to 3 (outermost).
        file (int): File number; any integer, wrapped modulo 16.

    Returns:
        int: ``ring * 16 + file`` or ``OFF_BOARD`` when the ring is invalid.
    """
    if not is_valid_ring(ring):
        return OFF_BOARD
    return ring * FILES + normalize_file(file)


def to_coord(index: int) -> "Coordinate":
    return Coordinate(index // FILES, index % FILES)


def is_valid_index(index: int) -> bool:
    return 0 <= index < SQUARES


@dataclass(frozen=True)
class Coordinate:
    """Square position as ``(ring, file)``.

    The file is normalized on construction; the ring is kept as given so that
    offsets running off the inner or outer edge stay detectable.
    """

    ring: int
    file: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "file", normalize_file(self.file))

    @classmethod
    def from_index(cls, index: int) -> "Coordinate":
        return to_coord(index)

    def is_valid(self) -> bool:
        return is_valid_ring(self.ring)

    def to_index(self) -> int:
        return to_index(self.ring, self.file)

    def offset(self, ring_offset: int, file_offset: int) -> "Coordinate":
        return Coordinate(self.ring + ring_offset, self.file + file_offset)

    def __str__(self) -> str:
        return f"({self.ring}, {self.file})"


def str_to_square(s: str) -> int:
    """Convert square notation into a square index.

    Args:
        s (str): File letter ``a``..``p`` followed by ring digit ``1``..``4``,
            e.g. ``"a1"`` (ring 0, file 0) or ``"p4"`` (ring 3, file 15).

    Returns:
        int: Zero-based square index.

    Raises:
        ValueError: If ``s`` is not a valid square.
    """
    if len(s) != 2 or s[0] not in FILE_NAMES or s[1] < "1" or s[1] > str(RINGS):
        raise ValueError(f"invalid square: {s!r}")
    file = FILE_NAMES.index(s[0])
    ring = int(s[1]) - 1
    return ring * FILES + file


def square_to_str(idx: int) -> str:
    """Convert a square index into notation such as ``"c2"``.

    Raises:
        ValueError: If ``idx`` is outside the valid square range.
    """
    if not is_valid_index(idx):
        raise ValueError(f"invalid square index: {idx}")
    coord = to_coord(idx)
    return FILE_NAMES[coord.file] + str(coord.ring + 1)
