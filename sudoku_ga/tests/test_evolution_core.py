"""Unit tests for evolution core modules."""

from __future__ import annotations

from collections import Counter

import numpy as np
import pytest
from numpy.random import Generator

from sudoku_ga.board.grid import MAX_SCORE, InvalidPuzzle, SudokuGrid
from sudoku_ga.evolution.individual import Individual, StaleFitnessError
from sudoku_ga.evolution.operators import GeneticOperators
from sudoku_ga.evolution.sampling import sample_indices, two_distinct_indices
from sudoku_ga.evolution.selection import Selection


def random_individual(puzzle: str, rng: Generator) -> Individual:
    individual = Individual(SudokuGrid(puzzle))
    individual.initialize_random(rng)
    return individual


def assert_subblocks_complete(individual: Individual) -> None:
    for block in range(9):
        assert sorted(individual.grid.subblock_values(block)) == list(range(1, 10))


class TestIndividual:
    """Tests for Individual."""

    def test_random_init_completes_subblocks(self, example_puzzle: str, rng: Generator) -> None:
        for _ in range(20):
            individual = random_individual(example_puzzle, rng)
            assert_subblocks_complete(individual)
            assert 0 <= individual.fitness <= MAX_SCORE

    def test_random_init_keeps_givens(self, example_puzzle: str, rng: Generator) -> None:
        puzzle = SudokuGrid(example_puzzle)
        individual = Individual(puzzle)
        individual.initialize_random(rng)
        for r in range(9):
            for c in range(9):
                if puzzle.is_fixed(r, c):
                    assert individual.grid.get(r, c) == puzzle.get(r, c)
                    assert individual.grid.is_fixed(r, c)

    def test_template_not_modified(self, example_puzzle: str, rng: Generator) -> None:
        puzzle = SudokuGrid(example_puzzle)
        Individual(puzzle).initialize_random(rng)
        assert puzzle.to_string() == example_puzzle

    def test_repeated_given_in_subblock_rejected(self, rng: Generator) -> None:
        individual = Individual(SudokuGrid("11" + "0" * 79))
        with pytest.raises(InvalidPuzzle):
            individual.initialize_random(rng)

    def test_fitness_matches_grid(self, example_puzzle: str, rng: Generator) -> None:
        individual = random_individual(example_puzzle, rng)
        assert individual.fitness == individual.grid.total_score()

    def test_unfilled_individual_scores_givens(self, example_puzzle: str) -> None:
        individual = Individual(SudokuGrid(example_puzzle))
        assert individual.fitness == SudokuGrid(example_puzzle).total_score()

    def test_stale_fitness_raises(self, example_puzzle: str, rng: Generator) -> None:
        individual = random_individual(example_puzzle, rng)
        r, c = individual.grid.non_fixed_positions(0)[0]
        individual.grid.set(r, c, individual.grid.get(r, c))
        with pytest.raises(StaleFitnessError):
            _ = individual.fitness
        individual.recalculate_fitness()
        assert individual.fitness == individual.grid.total_score()

    def test_solution_detection(self, solved_grid: str) -> None:
        individual = Individual(SudokuGrid(solved_grid))
        assert individual.fitness == MAX_SCORE
        assert individual.is_solution()
        assert "Fitness: 162 / 162 [SOLVED]" in str(individual)

    def test_non_solution(self, example_puzzle: str, rng: Generator) -> None:
        individual = random_individual(example_puzzle, rng)
        assert individual.is_solution() == (individual.fitness == MAX_SCORE)
        assert individual.is_solution() == individual.grid.is_solved()

    def test_ordering_by_fitness_only(self, example_puzzle: str, solved_grid: str, rng: Generator) -> None:
        solved = Individual(SudokuGrid(solved_grid))
        partial = random_individual(example_puzzle, rng)
        assert solved > partial
        assert partial < solved

        twin = partial.copy()
        twin.grid.set(0, 0, partial.grid.get(0, 1))
        twin.grid.set(0, 1, partial.grid.get(0, 0))
        twin.recalculate_fitness()
        if twin.fitness == partial.fitness:
            assert twin == partial
            assert twin.grid != partial.grid

    def test_equal_fitness_individuals_stay_distinct_in_sets(
        self, example_puzzle: str, rng: Generator
    ) -> None:
        individual = random_individual(example_puzzle, rng)
        clone = individual.copy()
        assert clone == individual
        assert len({individual, clone}) == 2
        assert {individual: "a", clone: "b"}[individual] == "a"

    def test_copy_is_deep(self, example_puzzle: str, rng: Generator) -> None:
        individual = random_individual(example_puzzle, rng)
        clone = individual.copy()
        assert clone.fitness == individual.fitness
        clone.grid.set(0, 0, 0)
        assert individual.grid.get(0, 0) != 0


class TestSampling:
    """Tests for index sampling helpers."""

    def test_two_distinct_indices_distinct(self, rng: Generator) -> None:
        for max_index in (1, 2, 5, 8):
            for _ in range(200):
                i, j = two_distinct_indices(rng, max_index)
                assert i != j
                assert 0 <= i <= max_index
                assert 0 <= j <= max_index

    def test_two_distinct_indices_draw_order(self) -> None:
        rng_a = np.random.default_rng(seed=7)
        rng_b = np.random.default_rng(seed=7)
        for _ in range(50):
            i, j = two_distinct_indices(rng_a, 4)
            expected_i = int(rng_b.integers(0, 5))
            expected_j = int(rng_b.integers(0, 4))
            if expected_j >= expected_i:
                expected_j += 1
            assert (i, j) == (expected_i, expected_j)

    def test_two_distinct_indices_needs_two(self, rng: Generator) -> None:
        with pytest.raises(ValueError):
            two_distinct_indices(rng, 0)

    def test_sample_indices_distinct(self, rng: Generator) -> None:
        indices = sample_indices(rng, 10, 4)
        assert len(set(indices.tolist())) == 4
        assert all(0 <= i < 10 for i in indices)


class TestGeneticOperators:
    """Tests for GeneticOperators."""

    def test_crossover_picks_better_bands(self, example_puzzle: str, solved_grid: str, rng: Generator) -> None:
        parent1 = random_individual(example_puzzle, rng)
        parent2 = Individual(SudokuGrid(solved_grid))
        child1, _ = GeneticOperators.crossover(parent1, parent2)

        for band in range(3):
            rows = slice(3 * band, 3 * band + 3)
            if parent2.grid.row_band_score(band) > parent1.grid.row_band_score(band):
                source = parent2
            else:
                source = parent1
            assert np.array_equal(child1.grid.values[rows], source.grid.values[rows])
            assert np.array_equal(child1.grid.fixed[rows], source.grid.fixed[rows])

    def test_crossover_picks_better_stacks(self, example_puzzle: str, solved_grid: str, rng: Generator) -> None:
        parent1 = random_individual(example_puzzle, rng)
        parent2 = Individual(SudokuGrid(solved_grid))
        _, child2 = GeneticOperators.crossover(parent1, parent2)

        for stack in range(3):
            cols = slice(3 * stack, 3 * stack + 3)
            if parent2.grid.column_stack_score(stack) > parent1.grid.column_stack_score(stack):
                source = parent2
            else:
                source = parent1
            assert np.array_equal(child2.grid.values[:, cols], source.grid.values[:, cols])
            assert np.array_equal(child2.grid.fixed[:, cols], source.grid.fixed[:, cols])

    def test_crossover_ties_favor_parent1(self, example_puzzle: str, rng: Generator) -> None:
        parent1 = random_individual(example_puzzle, rng)
        parent2 = parent1.copy()
        # Swapping two rows of a band keeps every band and stack score
        parent2.grid.values[[0, 1]] = parent1.grid.values[[1, 0]]
        parent2.grid.fixed[[0, 1]] = parent1.grid.fixed[[1, 0]]
        parent2.grid.version += 1
        parent2.recalculate_fitness()

        assert parent2.grid != parent1.grid
        for i in range(3):
            assert parent2.grid.row_band_score(i) == parent1.grid.row_band_score(i)
            assert parent2.grid.column_stack_score(i) == parent1.grid.column_stack_score(i)

        child1, child2 = GeneticOperators.crossover(parent1, parent2)
        assert child1.grid == parent1.grid
        assert child2.grid == parent1.grid

    def test_crossover_children_scored(self, example_puzzle: str, rng: Generator) -> None:
        parent1 = random_individual(example_puzzle, rng)
        parent2 = random_individual(example_puzzle, rng)
        child1, child2 = GeneticOperators.crossover(parent1, parent2)
        assert child1.fitness == child1.grid.total_score()
        assert child2.fitness == child2.grid.total_score()
        assert child1.grid.values.shape == (9, 9)
        assert_subblocks_complete(child1)
        assert_subblocks_complete(child2)

    def test_crossover_leaves_parents(self, example_puzzle: str, rng: Generator) -> None:
        parent1 = random_individual(example_puzzle, rng)
        parent2 = random_individual(example_puzzle, rng)
        before1 = parent1.grid.copy()
        before2 = parent2.grid.copy()
        GeneticOperators.crossover(parent1, parent2)
        assert parent1.grid == before1
        assert parent2.grid == before2

    def test_mutate_subblock_swaps_two_cells(self, example_puzzle: str, rng: Generator) -> None:
        individual = random_individual(example_puzzle, rng)
        before = individual.grid.copy()
        GeneticOperators.mutate_subblock(individual, 0, rng=rng)

        changed = np.argwhere(before.values != individual.grid.values)
        assert len(changed) == 2
        assert Counter(before.subblock_values(0)) == Counter(
            individual.grid.subblock_values(0)
        )
        for r, c in changed:
            assert not individual.grid.is_fixed(int(r), int(c))

    def test_mutate_subblock_noop_with_one_free_cell(self, solved_grid: str, rng: Generator) -> None:
        puzzle = SudokuGrid("0" + solved_grid[1:])
        individual = Individual(puzzle)
        individual.initialize_random(rng)
        version = individual.grid.version
        GeneticOperators.mutate_subblock(individual, 0, rng=rng)
        assert individual.grid.version == version
        assert individual.is_solution()

    def test_mutate_rate_zero_is_noop(self, example_puzzle: str, rng: Generator) -> None:
        individual = random_individual(example_puzzle, rng)
        before = individual.grid.copy()
        GeneticOperators.mutate(individual, mutation_rate=0.0, rng=rng)
        assert individual.grid == before
        assert individual.fitness == individual.grid.total_score()

    def test_mutate_rate_one_keeps_subblocks(self, example_puzzle: str, rng: Generator) -> None:
        individual = random_individual(example_puzzle, rng)
        for _ in range(20):
            GeneticOperators.mutate(individual, mutation_rate=1.0, rng=rng)
            assert_subblocks_complete(individual)
            assert individual.fitness == individual.grid.total_score()

    def test_local_search_never_worse(self, example_puzzle: str, rng: Generator) -> None:
        for _ in range(30):
            individual = random_individual(example_puzzle, rng)
            improved = GeneticOperators.local_search(individual, 3, rng=rng)
            assert improved.fitness >= individual.fitness
            assert improved is not individual
            assert_subblocks_complete(improved)

    def test_local_search_leaves_input(self, example_puzzle: str, rng: Generator) -> None:
        individual = random_individual(example_puzzle, rng)
        before = individual.grid.copy()
        GeneticOperators.local_search(individual, 5, rng=rng)
        assert individual.grid == before

    def test_local_search_on_solution_returns_solution(self, solved_grid: str, rng: Generator) -> None:
        puzzle = SudokuGrid(solved_grid[:60] + "0" * 21)
        individual = Individual(puzzle)
        for r, c in [(r, c) for r in range(9) for c in range(9) if not puzzle.is_fixed(r, c)]:
            individual.grid.set(r, c, int(solved_grid[r * 9 + c]))
        individual.recalculate_fitness()
        best = GeneticOperators.local_search(individual, 4, rng=rng)
        assert best.is_solution()


class TestSelection:
    """Tests for Selection."""

    def test_tournament_returns_valid_index(self, rng: Generator) -> None:
        scores = [10, 20, 30, 40, 50]
        for _ in range(50):
            idx = Selection.tournament_select(scores, tournament_size=3, rng=rng)
            assert 0 <= idx < len(scores)

    def test_tournament_clamps_size(self, rng: Generator) -> None:
        scores = [3, 9, 1]
        for _ in range(20):
            assert Selection.tournament_select(scores, tournament_size=50, rng=rng) == 1

    def test_tournament_size_zero_picks_one(self, rng: Generator) -> None:
        scores = [3, 9, 1]
        idx = Selection.tournament_select(scores, tournament_size=0, rng=rng)
        assert idx in (0, 1, 2)

    def test_tournament_pressure(self, rng: Generator) -> None:
        scores = list(range(20))
        picks = [
            Selection.tournament_select(scores, tournament_size=3, rng=rng)
            for _ in range(500)
        ]
        assert np.mean(picks) > np.mean(scores)

    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 4, 5])
    def test_tournament_tie_first_drawn_wins(self, seed: int) -> None:
        scores = [5, 5, 5, 5]
        expected = int(
            np.random.default_rng(seed).choice(4, size=3, replace=False)[0]
        )
        idx = Selection.tournament_select(
            scores, tournament_size=3, rng=np.random.default_rng(seed)
        )
        assert idx == expected

    def test_tournament_empty_raises(self, rng: Generator) -> None:
        with pytest.raises(ValueError):
            Selection.tournament_select([], rng=rng)
