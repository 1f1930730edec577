"""9x9 Sudoku board with region scoring for the genetic algorithm."""

from __future__ import annotations

from typing import Iterable

import numpy as np


SIZE = 9
SUBBLOCK_SIZE = 3
NUM_SUBBLOCKS = 9
EMPTY = 0

# 9 unique digits in each of 9 rows and 9 columns
MAX_SCORE = 2 * SIZE * SIZE


class InvalidPuzzle(ValueError):
    """Raised when a puzzle definition cannot be turned into a grid."""


def _unique_counts(lines: np.ndarray) -> np.ndarray:
    """Count distinct digits 1-9 along each row of a 2D array."""
    present = np.zeros((lines.shape[0], SIZE + 1), dtype=bool)
    present[np.arange(lines.shape[0])[:, None], lines] = True
    return present[:, 1:].sum(axis=1)


def _check_index(name: str, index: int, upper: int) -> None:
    if not 0 <= index < upper:
        raise IndexError(f"{name} {index} out of range [0, {upper - 1}]")


class SudokuGrid:
    """Cell values plus a parallel mask of cells given by the puzzle.

    Sub-blocks are numbered left-to-right, top-to-bottom:

         0 | 1 | 2
        ---+---+---
         3 | 4 | 5
        ---+---+---
         6 | 7 | 8

    Every write bumps ``version`` so that cached scores derived from the
    grid can tell whether they are still current.
    """

    SIZE = SIZE
    SUBBLOCK_SIZE = SUBBLOCK_SIZE
    NUM_SUBBLOCKS = NUM_SUBBLOCKS
    MAX_SCORE = MAX_SCORE

    def __init__(self, puzzle: Iterable[str] | None = None) -> None:
        """Build a grid from an 81-symbol puzzle definition.

        Args:
            puzzle: Symbols read row-major. '1'-'9' become fixed givens,
                anything else (conventionally '0' or '.') an empty cell.
                Symbols past the 81st are ignored. ``None`` gives an
                all-empty grid.

        Raises:
            InvalidPuzzle: If fewer than 81 symbols are supplied.
        """
        self.values = np.zeros((SIZE, SIZE), dtype=np.int8)
        self.fixed = np.zeros((SIZE, SIZE), dtype=bool)
        self.version = 0

        if puzzle is None:
            return

        symbols = list(puzzle)
        if len(symbols) < SIZE * SIZE:
            raise InvalidPuzzle(
                f"puzzle must have at least {SIZE * SIZE} symbols, "
                f"got {len(symbols)}"
            )

        for i, symbol in enumerate(symbols[: SIZE * SIZE]):
            if isinstance(symbol, str) and len(symbol) == 1 and "1" <= symbol <= "9":
                row, col = divmod(i, SIZE)
                self.values[row, col] = int(symbol)
                self.fixed[row, col] = True

    @classmethod
    def from_string(cls, puzzle: str) -> SudokuGrid:
        """Build a grid from an 81-character puzzle string."""
        return cls(puzzle)

    # --- Cell access ---

    def get(self, row: int, col: int) -> int:
        _check_index("row", row, SIZE)
        _check_index("col", col, SIZE)
        return int(self.values[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        _check_index("row", row, SIZE)
        _check_index("col", col, SIZE)
        if not 0 <= value <= SIZE:
            raise ValueError(f"cell value {value} out of range [0, {SIZE}]")
        self.values[row, col] = value
        self.version += 1

    def is_fixed(self, row: int, col: int) -> bool:
        """Return True if the cell was given by the original puzzle."""
        _check_index("row", row, SIZE)
        _check_index("col", col, SIZE)
        return bool(self.fixed[row, col])

    # --- Scoring ---

    def row_score(self, row: int) -> int:
        """Number of distinct digits in a row (max 9)."""
        _check_index("row", row, SIZE)
        return int(_unique_counts(self.values[row : row + 1])[0])

    def column_score(self, col: int) -> int:
        """Number of distinct digits in a column (max 9)."""
        _check_index("col", col, SIZE)
        return int(_unique_counts(self.values[:, col : col + 1].T)[0])

    def row_band_score(self, band_index: int) -> int:
        """Summed row scores of rows [3*band, 3*band + 3)."""
        _check_index("band", band_index, SUBBLOCK_SIZE)
        start = band_index * SUBBLOCK_SIZE
        return int(_unique_counts(self.values[start : start + SUBBLOCK_SIZE]).sum())

    def column_stack_score(self, stack_index: int) -> int:
        """Summed column scores of columns [3*stack, 3*stack + 3)."""
        _check_index("stack", stack_index, SUBBLOCK_SIZE)
        start = stack_index * SUBBLOCK_SIZE
        stack = self.values[:, start : start + SUBBLOCK_SIZE].T
        return int(_unique_counts(stack).sum())

    def total_score(self) -> int:
        """Sum of all row and column scores (max 162)."""
        rows = _unique_counts(self.values).sum()
        cols = _unique_counts(self.values.T).sum()
        return int(rows + cols)

    def is_solved(self) -> bool:
        return self.total_score() == MAX_SCORE

    # --- Sub-block helpers ---

    @staticmethod
    def subblock_top_left(subblock_index: int) -> tuple[int, int]:
        """Grid coordinates of a sub-block's top-left cell."""
        _check_index("subblock", subblock_index, NUM_SUBBLOCKS)
        block_row, block_col = divmod(subblock_index, SUBBLOCK_SIZE)
        return block_row * SUBBLOCK_SIZE, block_col * SUBBLOCK_SIZE

    def subblock_cells(self, subblock_index: int) -> list[tuple[int, int]]:
        """All cells of a sub-block in row-major order."""
        top, left = self.subblock_top_left(subblock_index)
        return [
            (r, c)
            for r in range(top, top + SUBBLOCK_SIZE)
            for c in range(left, left + SUBBLOCK_SIZE)
        ]

    def non_fixed_positions(self, subblock_index: int) -> list[tuple[int, int]]:
        """Cells of a sub-block the search is allowed to change."""
        return [
            (r, c)
            for r, c in self.subblock_cells(subblock_index)
            if not self.fixed[r, c]
        ]

    def subblock_values(self, subblock_index: int) -> list[int]:
        return [int(self.values[r, c]) for r, c in self.subblock_cells(subblock_index)]

    # --- Crossover helpers ---

    def copy_row_band_from(self, other: SudokuGrid, band_index: int) -> None:
        """Overwrite 3 rows (values and fixed mask) with another grid's."""
        _check_index("band", band_index, SUBBLOCK_SIZE)
        rows = slice(band_index * SUBBLOCK_SIZE, (band_index + 1) * SUBBLOCK_SIZE)
        self.values[rows] = other.values[rows]
        self.fixed[rows] = other.fixed[rows]
        self.version += 1

    def copy_column_stack_from(self, other: SudokuGrid, stack_index: int) -> None:
        """Overwrite 3 columns (values and fixed mask) with another grid's."""
        _check_index("stack", stack_index, SUBBLOCK_SIZE)
        cols = slice(stack_index * SUBBLOCK_SIZE, (stack_index + 1) * SUBBLOCK_SIZE)
        self.values[:, cols] = other.values[:, cols]
        self.fixed[:, cols] = other.fixed[:, cols]
        self.version += 1

    # --- Conversion ---

    def copy(self) -> SudokuGrid:
        grid = SudokuGrid()
        grid.values = self.values.copy()
        grid.fixed = self.fixed.copy()
        grid.version = self.version
        return grid

    def to_string(self) -> str:
        """81-character row-major form, '0' for empty cells."""
        return "".join(str(int(v)) for v in self.values.flat)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuGrid):
            return NotImplemented
        return bool(
            np.array_equal(self.values, other.values)
            and np.array_equal(self.fixed, other.fixed)
        )

    def __str__(self) -> str:
        lines = []
        for row in range(SIZE):
            if row > 0 and row % SUBBLOCK_SIZE == 0:
                lines.append("------+-------+------")
            line = ""
            for col in range(SIZE):
                if col > 0 and col % SUBBLOCK_SIZE == 0:
                    line += " |"
                value = int(self.values[row, col])
                line += " ." if value == EMPTY else f" {value}"
            lines.append(line)
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        return f"SudokuGrid({self.to_string()!r})"
