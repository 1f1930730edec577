"""Shared fixtures for the Sudoku GA tests."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

EXAMPLE_PUZZLE = (
    "000260701680070090190004500820100040004602900"
    "050003028009300074040050036703018000"
)

# Valid completed grid: row r is shifted by 3*(r%3) + r//3
SOLVED_GRID = "".join(
    str((3 * (r % 3) + r // 3 + c) % 9 + 1) for r in range(9) for c in range(9)
)


def blank_cells(solution: str, cells: list[tuple[int, int]]) -> str:
    """Return the solution string with the given cells emptied."""
    symbols = list(solution)
    for row, col in cells:
        symbols[row * 9 + col] = "0"
    return "".join(symbols)


@pytest.fixture
def rng() -> Generator:
    """Seeded random generator."""
    return np.random.default_rng(seed=42)


@pytest.fixture
def example_puzzle() -> str:
    return EXAMPLE_PUZZLE


@pytest.fixture
def solved_grid() -> str:
    return SOLVED_GRID


@pytest.fixture
def near_solved_puzzle() -> str:
    """Completed grid with three cells blanked in each of four sub-blocks."""
    return blank_cells(
        SOLVED_GRID,
        [
            (0, 0), (1, 1), (2, 2),
            (3, 4), (4, 3), (5, 5),
            (6, 6), (7, 8), (8, 7),
            (0, 6), (1, 8), (2, 7),
        ],
    )
