"""
board.py

Grid model and move engine for the sliding-tile game. Cells hold tile
EXPONENTS (the tile value is 2 ** exponent), an empty cell holds none.
"""

import random
from enum import IntEnum
from typing import Any, List, Optional, Sequence

import numpy as np

BoardType = np.ndarray[Any, np.dtype[np.int64]]


class Direction(IntEnum):
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3


# Order in which moves are enumerated by the search; ties resolve to the first.
SEARCH_ORDER = (Direction.DOWN, Direction.LEFT, Direction.RIGHT, Direction.UP)


class Cell:
    def __init__(self, exponent: Optional[int] = None):
        self._exponent: Optional[int] = None
        if exponent is not None:
            self.set_exponent(exponent)

    @property
    def exponent(self) -> Optional[int]:
        return self._exponent

    @property
    def value(self) -> int:
        """Tile value, 0 for an empty cell."""
        return 0 if self._exponent is None else 1 << self._exponent

    def is_set(self) -> bool:
        return self._exponent is not None

    def set_exponent(self, exponent: int) -> None:
        if exponent < 0:
            raise ValueError(f"Tile exponent must be non-negative, got {exponent}")
        self._exponent = int(exponent)

    def clear(self) -> None:
        self._exponent = None

    def increment(self) -> bool:
        if self._exponent is None:
            return False
        self._exponent += 1
        return True

    def as_symbol(self) -> str:
        return "*" if self._exponent is None else str(self._exponent)

    def as_string(self) -> str:
        return "" if self._exponent is None else str(self.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self._exponent == other._exponent

    def __repr__(self) -> str:
        return f"Cell({self._exponent})"


def merge_line(line: Sequence[Cell]) -> bool:
    """
    Slide/merge a row or column view towards index 0, in place.

    Tiles slide over empty cells, two equal neighbours become one tile with
    exponent + 1 and a merged tile does not merge again during the same move.
    Returns True if any cell changed.
    """
    before = [cell.exponent for cell in line]
    tight = [e for e in before if e is not None]

    merged: List[int] = []
    i = 0
    while i < len(tight):
        if i + 1 < len(tight) and tight[i] == tight[i + 1]:
            merged.append(tight[i] + 1)
            i += 2
        else:
            merged.append(tight[i])
            i += 1

    after: List[Optional[int]] = merged + [None] * (len(line) - len(merged))
    if after == before:
        return False

    for cell, exponent in zip(line, after):
        if exponent is None:
            cell.clear()
        else:
            cell.set_exponent(exponent)
    return True


class Board:
    """
    Row-major width x height grid of cells.

    The board is mutated in place by the live game loop; anything that needs
    a hypothetical state works on ``clone()``.
    """

    width: int
    height: int
    data: List[Cell]

    def __init__(self, width: int = 4, height: int = 4):
        if width <= 0 or height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.data = [Cell() for _ in range(width * height)]

    # ------------------------------------------------------------------ #
    #                           CONSTRUCTION                              #
    # ------------------------------------------------------------------ #
    @classmethod
    def from_exponents(cls, rows: Sequence[Sequence[Optional[int]]]) -> "Board":
        """Build a board from nested rows of exponents, ``None`` for empty."""
        height = len(rows)
        width = len(rows[0]) if height else 0
        board = cls(width, height)
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError("All rows must have the same length")
            for x, exponent in enumerate(row):
                if exponent is not None:
                    board.get_cell(x, y).set_exponent(exponent)
        return board

    @classmethod
    def from_numpy(cls, arr: BoardType) -> "Board":
        """Build a board from a grid of tile VALUES (0 = empty)."""
        height, width = arr.shape
        board = cls(width, height)
        for y in range(height):
            for x in range(width):
                value = int(arr[y, x])
                if value == 0:
                    continue
                if value < 0 or value & (value - 1):
                    raise ValueError(f"Not a tile value: {value}")
                board.get_cell(x, y).set_exponent(value.bit_length() - 1)
        return board

    def to_numpy(self) -> BoardType:
        """Grid of tile values, 0 for empty cells."""
        values = [cell.value for cell in self.data]
        return np.array(values, dtype=np.int64).reshape(self.height, self.width)

    def exponents(self) -> BoardType:
        """Grid of exponents, -1 for empty cells."""
        grid = [-1 if cell.exponent is None else cell.exponent for cell in self.data]
        return np.array(grid, dtype=np.int64).reshape(self.height, self.width)

    def clone(self) -> "Board":
        twin = Board.__new__(Board)
        twin.width = self.width
        twin.height = self.height
        twin.data = [Cell(cell.exponent) for cell in self.data]
        return twin

    # ------------------------------------------------------------------ #
    #                              ACCESS                                 #
    # ------------------------------------------------------------------ #
    def get_cell(self, x: int, y: int) -> Cell:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Cell ({x}, {y}) outside {self.width}x{self.height} board")
        return self.data[y * self.width + x]

    def row(self, index: int) -> List[Cell]:
        return [self.get_cell(x, index) for x in range(self.width)]

    def col(self, index: int) -> List[Cell]:
        return [self.get_cell(index, y) for y in range(self.height)]

    def edge(self, direction: Direction) -> List[Cell]:
        """The line opposite to where ``direction`` pushes the tiles."""
        if direction == Direction.UP:
            return self.row(self.height - 1)
        if direction == Direction.DOWN:
            return self.row(0)
        if direction == Direction.LEFT:
            return self.col(self.width - 1)
        return self.col(0)

    def occupied_count(self) -> int:
        return sum(1 for cell in self.data if cell.is_set())

    def empty_count(self) -> int:
        return len(self.data) - self.occupied_count()

    def max_exponent(self) -> Optional[int]:
        exponents = [cell.exponent for cell in self.data if cell.is_set()]
        return max(exponents) if exponents else None

    # ------------------------------------------------------------------ #
    #                            MOVE ENGINE                              #
    # ------------------------------------------------------------------ #
    def shift_and_merge(self, direction: Direction) -> bool:
        changed = False
        if direction in (Direction.UP, Direction.DOWN):
            for i in range(self.width):
                line = self.col(i)
                if direction == Direction.DOWN:
                    line.reverse()
                changed |= merge_line(line)
        else:
            for i in range(self.height):
                line = self.row(i)
                if direction == Direction.RIGHT:
                    line.reverse()
                changed |= merge_line(line)
        return changed

    def insert_random_tile(self, direction: Direction, rng: Optional[random.Random] = None) -> bool:
        """
        Put an exponent-0 tile on a random empty cell of ``edge(direction)``.
        Returns False when that edge is full.
        """
        empty = [cell for cell in self.edge(direction) if not cell.is_set()]
        if not empty:
            return False
        cell = (rng or random).choice(empty)
        cell.set_exponent(0)
        return True

    def insert_tile_at(self, direction: Direction, index: int) -> bool:
        """Deterministic placement used by the search. False if occupied."""
        edge = self.edge(direction)
        if not 0 <= index < len(edge):
            raise IndexError(f"Edge index {index} outside 0..{len(edge) - 1}")
        cell = edge[index]
        if cell.is_set():
            return False
        cell.set_exponent(0)
        return True

    def step(self, direction: Direction, rng: Optional[random.Random] = None) -> bool:
        """
        Shift-and-merge followed by a random insertion on the opposite edge.
        False only when neither the shift nor the insertion did anything.
        """
        changed = self.shift_and_merge(direction)
        inserted = self.insert_random_tile(direction, rng)
        return changed or inserted

    def legal_directions(self) -> List[Direction]:
        return [d for d in SEARCH_ORDER if self.clone().shift_and_merge(d)]

    def is_stuck(self) -> bool:
        return not self.legal_directions()

    # ------------------------------------------------------------------ #
    #                             RENDERING                               #
    # ------------------------------------------------------------------ #
    def render(self) -> str:
        return "\n".join(
            "".join(cell.as_symbol() for cell in self.row(y)) for y in range(self.height)
        )

    def render_ascii(self, cell_width: int = 6) -> str:
        separator = "+" + ("-" * cell_width + "+") * self.width
        output: List[str] = [separator]
        for y in range(self.height):
            row_str: List[str] = ["|"]
            for cell in self.row(y):
                row_str.append((cell.as_string() or ".").center(cell_width))
                row_str.append("|")
            output.append("".join(row_str))
            output.append(separator)
        return "\n".join(output)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and all(a == b for a, b in zip(self.data, other.data))
        )

    def __repr__(self) -> str:
        return f"Board({self.width}x{self.height}, occupied={self.occupied_count()})"
