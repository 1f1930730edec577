"""Board modules."""

from __future__ import annotations

from sudoku_ga.board.grid import (
    SudokuGrid,
    InvalidPuzzle,
    SIZE,
    SUBBLOCK_SIZE,
    NUM_SUBBLOCKS,
    MAX_SCORE,
    EMPTY,
)
from sudoku_ga.board.renderer import GridRenderer

__all__ = [
    "SudokuGrid",
    "InvalidPuzzle",
    "SIZE",
    "SUBBLOCK_SIZE",
    "NUM_SUBBLOCKS",
    "MAX_SCORE",
    "EMPTY",
    "GridRenderer",
]
