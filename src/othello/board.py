"""The Board implements all rules that effect the placement of discs. It knows nothing about players or turns."""

from copy import deepcopy
from dataclasses import dataclass, field
from textwrap import dedent
from typing import Self

from src.core.shared_types import EMPTY_CELL, CELL_VALUES, DiscColor
from src.othello.position import (
    BOARD_SIZE,
    DIRECTIONS,
    Move,
    Position,
    Vector,
    all_positions,
)

Grid = list[list[int]]

DIAGRAM_TO_CELL: dict[str, int] = {
    "X": DiscColor.BLACK.cell_value,
    "O": DiscColor.WHITE.cell_value,
    ".": EMPTY_CELL,
    " ": EMPTY_CELL,
}

CELL_TO_DIAGRAM: dict[int, str] = {
    DiscColor.BLACK.cell_value: "X",
    DiscColor.WHITE.cell_value: "O",
    EMPTY_CELL: ".",
}


def starting_grid() -> Grid:
    """Standard opening: two discs of each color on the four center cells, diagonally opposed."""
    grid = [[EMPTY_CELL] * BOARD_SIZE for _ in range(BOARD_SIZE)]
    low, high = BOARD_SIZE // 2 - 1, BOARD_SIZE // 2
    grid[low][low] = grid[high][high] = DiscColor.WHITE.cell_value
    grid[low][high] = grid[high][low] = DiscColor.BLACK.cell_value
    return grid


@dataclass(frozen=True)
class MoveResult:
    """A successful move: the placed disc and every disc it flipped (ordered by direction, then distance)"""

    move: Move
    flipped: tuple[Position, ...]

    @property
    def changed_positions(self) -> tuple[Position, ...]:
        return (self.move.position, *self.flipped)


@dataclass
class Board:
    grid: Grid = field(default_factory=starting_grid)

    def __post_init__(self) -> None:
        # Broken grids can only come from a programming error, never from a player's request
        assert len(self.grid) == BOARD_SIZE, f"Board needs {BOARD_SIZE} rows"
        for row in self.grid:
            assert len(row) == BOARD_SIZE, f"Board needs {BOARD_SIZE} columns"
            assert all(
                cell in DIAGRAM_TO_CELL.values() for cell in row
            ), f"Invalid cell value in row {row}"

    @classmethod
    def from_diagram(cls, diagram: str) -> Self:
        """Construct a board from a text diagram.

        8 lines of 8 characters, top line is row 0:
        * X: a black disc
        * O: a white disc
        * . (or a space): an empty cell

        ex. standard starting position:
        ........
        ........
        ........
        ...OX...
        ...XO...
        ........
        ........
        ........
        """
        lines = dedent(diagram).strip("\n").split("\n")
        grid = [
            [DIAGRAM_TO_CELL[character] for character in line.ljust(BOARD_SIZE)]
            for line in lines
        ]
        return cls(grid)

    def to_diagram(self) -> str:
        return "\n".join(
            "".join(CELL_TO_DIAGRAM[cell] for cell in row) for row in self.grid
        )

    def __str__(self) -> str:
        return self.to_diagram()

    # --- QUERIES ---
    def disc_at(self, position: Position) -> DiscColor | None:
        return DiscColor.from_cell_value(self.grid[position.row][position.column])

    def is_empty(self, position: Position) -> bool:
        return self.grid[position.row][position.column] == EMPTY_CELL

    def cells(self) -> tuple[tuple[int, ...], ...]:
        """Immutable snapshot of the numeric grid"""
        return tuple(tuple(row) for row in self.grid)

    def count(self, color: DiscColor) -> int:
        return sum(row.count(color.cell_value) for row in self.grid)

    def scores(self) -> dict[DiscColor, int]:
        """Live tally of discs per color. Never cached."""
        return {color: self.count(color) for color in DiscColor}

    def is_full(self) -> bool:
        return all(EMPTY_CELL not in row for row in self.grid)

    def legal_moves(self, color: DiscColor) -> list[Position]:
        return [
            position
            for position in all_positions()
            if self.is_empty(position) and self._captures(Move(position, color))
        ]

    def has_moves(self, color: DiscColor) -> bool:
        """True if any empty cell would capture at least one opposing disc when played by 'color'"""
        return any(
            self.is_empty(position) and self._captures(Move(position, color))
            for position in all_positions()
        )

    # --- MUTATIONS ---
    def try_move(self, move: Move) -> MoveResult | None:
        """
        Place a disc and flip every captured disc.
        ----

        Returns None (and leaves the board untouched) if the target cell is occupied,
        or if the move does not capture along any of the 8 directions.
        """
        if not move.position.is_within_bounds() or not self.is_empty(move.position):
            return None

        flipped = self._captures(move)
        if not flipped:
            return None

        self._set(move.position, move.color)
        for position in flipped:
            self._set(position, move.color)
        return MoveResult(move=move, flipped=tuple(flipped))

    def remove_discs_for_color(self, color: DiscColor) -> None:
        """Empty every cell holding a disc of the given color"""
        for row in self.grid:
            for column, cell in enumerate(row):
                if cell == color.cell_value:
                    row[column] = EMPTY_CELL

    def copy(self) -> Self:
        return type(self)(deepcopy(self.grid))

    # --- PRIVATE HELPERS ---
    def _set(self, position: Position, color: DiscColor) -> None:
        self.grid[position.row][position.column] = CELL_VALUES[color]

    def _captures(self, move: Move) -> list[Position]:
        """All positions captured by the move, direction by direction (does not mutate the board)"""
        captured: list[Position] = []
        for direction in DIRECTIONS:
            captured.extend(self._captures_in_direction(move, direction))
        return captured

    def _captures_in_direction(self, move: Move, direction: Vector) -> list[Position]:
        """
        Raycasting along a single direction
        -----

        Walk outward from the move: collect contiguous opponent discs, and only keep them
        if the run is closed off by a disc of the mover's color before hitting an empty cell or the edge.
        """
        opponent = move.color.opponent
        line: list[Position] = []
        position = move.position.step(direction)
        while position.is_within_bounds():
            disc = self.disc_at(position)
            if disc == opponent:
                line.append(position)
                position = position.step(direction)
                continue
            if disc == move.color:
                return line
            # empty cell: nothing gets captured
            return []
        # ran off the board
        return []
