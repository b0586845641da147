"""Shared constants and enumerations for the loop puzzle engine."""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class Status(str, Enum):
    """Solve status of a puzzle or of a search branch."""

    IN_PROGRESS = "IN_PROGRESS"
    UNSOLVABLE = "UNSOLVABLE"
    UNIQUE_SOLUTION = "UNIQUE_SOLUTION"
    MULTIPLE_SOLUTIONS = "MULTIPLE_SOLUTIONS"


class EdgeState(str, Enum):
    """Tri-state value of a single edge."""

    UNKNOWN = "UNKNOWN"
    ON = "ON"
    OFF = "OFF"


class EdgeKind(str, Enum):
    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"


class EntryStatus(str, Enum):
    """Whether a cell corner is used by the loop to enter or leave the cell."""

    ENTRY_FOR_SURE = "ENTRY_FOR_SURE"
    POTENTIAL_ENTRY = "POTENTIAL_ENTRY"
    NOT_ENTRY_FOR_SURE = "NOT_ENTRY_FOR_SURE"


class Direction(str, Enum):
    """Orthogonal directions, listed in clockwise order starting from UP."""

    UP = "UP"
    RIGHT = "RIGHT"
    DOWN = "DOWN"
    LEFT = "LEFT"

    @property
    def delta(self) -> Tuple[int, int]:
        return _DELTAS[self]

    def opposite(self) -> "Direction":
        return CLOCKWISE[(CLOCKWISE.index(self) + 2) % 4]

    def clockwise(self) -> "Direction":
        return CLOCKWISE[(CLOCKWISE.index(self) + 1) % 4]

    def counter_clockwise(self) -> "Direction":
        return CLOCKWISE[(CLOCKWISE.index(self) + 3) % 4]


class HDirection(str, Enum):
    """Horizontal half of a corner address."""

    LEFT = "LEFT"
    RIGHT = "RIGHT"

    def opposite(self) -> "HDirection":
        return HDirection.RIGHT if self == HDirection.LEFT else HDirection.LEFT

    def to_direction(self) -> Direction:
        return Direction.LEFT if self == HDirection.LEFT else Direction.RIGHT


class VDirection(str, Enum):
    """Vertical half of a corner address."""

    UP = "UP"
    DOWN = "DOWN"

    def opposite(self) -> "VDirection":
        return VDirection.DOWN if self == VDirection.UP else VDirection.UP

    def to_direction(self) -> Direction:
        return Direction.UP if self == VDirection.UP else Direction.DOWN


CLOCKWISE: Tuple[Direction, ...] = (Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT)

_DELTAS = {
    Direction.UP: (-1, 0),
    Direction.RIGHT: (0, 1),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
}

QUADRANTS: Tuple[Tuple[HDirection, VDirection], ...] = (
    (HDirection.RIGHT, VDirection.UP),
    (HDirection.RIGHT, VDirection.DOWN),
    (HDirection.LEFT, VDirection.DOWN),
    (HDirection.LEFT, VDirection.UP),
)

MAX_HINT = 4
HINT_VALUES: Tuple[int, ...] = (0, 1, 2, 3, 4)
EMPTY_HINT_SYMBOLS = (".", "·")
