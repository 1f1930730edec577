"""Candidate solution (chromosome) for evolutionary runs."""

from __future__ import annotations

import numpy as np
from numpy.random import Generator

from sudoku_ga.board.grid import (
    EMPTY,
    MAX_SCORE,
    NUM_SUBBLOCKS,
    InvalidPuzzle,
    SudokuGrid,
)


class StaleFitnessError(RuntimeError):
    """Raised when fitness is read after the grid changed without a recompute."""


class Individual:
    """A Sudoku grid plus its cached fitness.

    Fitness is the number of distinct digits summed over every row and
    column. Sub-blocks are always kept complete, so they are not scored.
    The cache is refreshed only by ``recalculate_fitness()``; reading it
    after a grid write without a refresh raises ``StaleFitnessError``.

    Individuals order by fitness alone: two candidates with the same
    score compare equal whatever their grids hold.
    """

    def __init__(self, puzzle: SudokuGrid | None = None) -> None:
        self.grid = puzzle.copy() if puzzle is not None else SudokuGrid()
        self._fitness = 0
        self._scored_version = -1
        self.recalculate_fitness()

    @property
    def fitness(self) -> int:
        """Cached fitness, valid only while the grid is unchanged."""
        if self._scored_version != self.grid.version:
            raise StaleFitnessError(
                "grid modified since last recalculate_fitness()"
            )
        return self._fitness

    def recalculate_fitness(self) -> int:
        self._fitness = self.grid.total_score()
        self._scored_version = self.grid.version
        return self._fitness

    def is_solution(self) -> bool:
        return self.fitness == MAX_SCORE

    def initialize_random(self, rng: Generator | None = None) -> None:
        """Fill every empty cell so each sub-block holds 1-9 exactly once."""
        generator = rng or np.random.default_rng()
        for block in range(NUM_SUBBLOCKS):
            self._fill_subblock_random(block, generator)
        self.recalculate_fitness()

    def _fill_subblock_random(self, subblock_index: int, rng: Generator) -> None:
        """Place the sub-block's missing digits in its empty cells, shuffled."""
        cells = self.grid.subblock_cells(subblock_index)
        present = {self.grid.get(r, c) for r, c in cells}
        missing = [d for d in range(1, 10) if d not in present]
        empty_count = sum(1 for r, c in cells if self.grid.get(r, c) == EMPTY)
        if len(missing) != empty_count:
            raise InvalidPuzzle(
                f"sub-block {subblock_index} repeats a given digit"
            )
        rng.shuffle(missing)

        idx = 0
        for r, c in cells:
            if self.grid.get(r, c) == EMPTY:
                self.grid.set(r, c, missing[idx])
                idx += 1

    def copy(self) -> Individual:
        """Deep copy; the clone keeps the cached fitness."""
        clone = Individual.__new__(Individual)
        clone.grid = self.grid.copy()
        clone._fitness = self._fitness
        clone._scored_version = self._scored_version
        return clone

    def __lt__(self, other: Individual) -> bool:
        return self.fitness < other.fitness

    def __gt__(self, other: Individual) -> bool:
        return self.fitness > other.fitness

    def __le__(self, other: Individual) -> bool:
        return self.fitness <= other.fitness

    def __ge__(self, other: Individual) -> bool:
        return self.fitness >= other.fitness

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Individual):
            return NotImplemented
        return self.fitness == other.fitness

    # Equality is fitness-only for sorting; hashing stays identity-based so
    # distinct individuals remain distinct members of sets and dict keys.
    __hash__ = object.__hash__

    def __str__(self) -> str:
        text = f"{self.grid}Fitness: {self.fitness} / {MAX_SCORE}"
        if self.is_solution():
            text += " [SOLVED]"
        return text + "\n"
