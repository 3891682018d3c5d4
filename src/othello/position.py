"""
A position on the board and a move placing a disc on it

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.shared_types import DiscColor

# Othello is played on an 8x8 board. Rows and columns are 0-indexed.
BOARD_SIZE = 8

Vector = tuple[int, int]

# Compass directions, scanned in this order: N, NE, E, SE, S, SW, W, NW
DIRECTIONS: tuple[Vector, ...] = (
    (-1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
)


@dataclass(frozen=True)
class Position:
    row: int
    column: int

    @classmethod
    def from_algebraic(cls, square: str) -> Position:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7). The letter is the column, the digit the row."""
        column = ord(square[0].lower()) - ord("a")
        row = int(square[1]) - 1
        return cls(row, column)

    def to_algebraic(self) -> str:
        return f"{chr(self.column + ord('a'))}{self.row + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_SIZE) and (0 <= self.column < BOARD_SIZE)

    def step(self, direction: Vector) -> Position:
        """Neighbouring position in the given direction (may fall off the board)"""
        return Position(self.row + direction[0], self.column + direction[1])


@dataclass(frozen=True)
class Move:
    position: Position
    color: DiscColor


def all_positions() -> list[Position]:
    """Every position on the board, row by row"""
    return [Position(row, column) for row in range(BOARD_SIZE) for column in range(BOARD_SIZE)]
