"""Evolution module for the Sudoku genetic algorithm."""

from __future__ import annotations

__all__ = [
    "sampling",
    "individual",
    "operators",
    "selection",
    "population",
]
