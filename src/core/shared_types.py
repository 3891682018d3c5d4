"""
Type definitions used across layers
"""

from enum import StrEnum
from typing import Self

# Numeric encoding of a cell in the board grid (and in snapshots sent to clients)
EMPTY_CELL = 0


class GameState(StrEnum):
    WAITING_FOR_OPPONENT = "waiting for opponent"
    ONGOING = "ongoing"
    FINISHED = "finished"


class DiscColor(StrEnum):
    BLACK = "black"
    WHITE = "white"

    @property
    def cell_value(self) -> int:
        """Black discs are stored as -1, White discs as +1"""
        return CELL_VALUES[self]

    @property
    def opponent(self) -> "DiscColor":
        return DiscColor.WHITE if self == DiscColor.BLACK else DiscColor.BLACK

    @classmethod
    def from_cell_value(cls, value: int) -> Self | None:
        """Reverse mapping. An empty cell has no color."""
        if value == EMPTY_CELL:
            return None
        return next(color for color, cell in CELL_VALUES.items() if cell == value)


CELL_VALUES: dict[DiscColor, int] = {
    DiscColor.BLACK: -1,
    DiscColor.WHITE: 1,
}
