"""Genetic operators: crossover, mutation and local search."""

from __future__ import annotations

import numpy as np
from numpy.random import Generator

from sudoku_ga.board.grid import NUM_SUBBLOCKS, SUBBLOCK_SIZE
from sudoku_ga.evolution.individual import Individual
from sudoku_ga.evolution.sampling import two_distinct_indices


class GeneticOperators:
    """Genetic operators for Sudoku individuals.

    Every operator only rearranges digits inside a sub-block or copies
    whole bands/stacks, so sub-blocks stay complete throughout a run.
    """

    @staticmethod
    def crossover(
        parent1: Individual,
        parent2: Individual,
    ) -> tuple[Individual, Individual]:
        """Best-of-two recombination by row band and column stack.

        Child 1 takes each band of 3 rows from whichever parent scores
        higher on it, child 2 does the same per stack of 3 columns. Ties go
        to parent1. Cells are copied together with their fixed flag.
        """
        child1 = parent1.copy()
        child2 = parent1.copy()

        for band in range(SUBBLOCK_SIZE):
            score1 = parent1.grid.row_band_score(band)
            score2 = parent2.grid.row_band_score(band)
            if score2 > score1:
                child1.grid.copy_row_band_from(parent2.grid, band)

        for stack in range(SUBBLOCK_SIZE):
            score1 = parent1.grid.column_stack_score(stack)
            score2 = parent2.grid.column_stack_score(stack)
            source = parent2 if score2 > score1 else parent1
            child2.grid.copy_column_stack_from(source.grid, stack)

        child1.recalculate_fitness()
        child2.recalculate_fitness()
        return child1, child2

    @staticmethod
    def mutate_subblock(
        individual: Individual,
        subblock_index: int,
        rng: Generator | None = None,
    ) -> None:
        """Swap two random non-fixed cells of one sub-block in place.

        Leaves fitness stale; the caller recomputes it.
        """
        positions = individual.grid.non_fixed_positions(subblock_index)
        if len(positions) < 2:
            return

        generator = rng or np.random.default_rng()
        idx1, idx2 = two_distinct_indices(generator, len(positions) - 1)
        r1, c1 = positions[idx1]
        r2, c2 = positions[idx2]

        grid = individual.grid
        temp = grid.get(r1, c1)
        grid.set(r1, c1, grid.get(r2, c2))
        grid.set(r2, c2, temp)

    @staticmethod
    def mutate(
        individual: Individual,
        mutation_rate: float = 0.3,
        rng: Generator | None = None,
    ) -> None:
        """Mutate each sub-block in place with probability ``mutation_rate``."""
        generator = rng or np.random.default_rng()
        mutated = False

        for block in range(NUM_SUBBLOCKS):
            if generator.random() < mutation_rate:
                GeneticOperators.mutate_subblock(individual, block, rng=generator)
                mutated = True

        if mutated:
            individual.recalculate_fitness()

    @staticmethod
    def local_search(
        individual: Individual,
        num_candidates: int = 2,
        rng: Generator | None = None,
    ) -> Individual:
        """Hill climbing: keep the best of a few single-swap variants.

        Returns the input's copy when no candidate scores strictly higher.
        """
        generator = rng or np.random.default_rng()
        best = individual.copy()
        best_fitness = individual.fitness

        for _ in range(num_candidates):
            candidate = individual.copy()
            block = int(generator.integers(0, NUM_SUBBLOCKS))
            GeneticOperators.mutate_subblock(candidate, block, rng=generator)
            candidate.recalculate_fitness()

            if candidate.fitness > best_fitness:
                best = candidate
                best_fitness = candidate.fitness

        return best
