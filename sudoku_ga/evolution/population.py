"""Population management for evolutionary runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

import numpy as np
from numpy.random import Generator

from sudoku_ga.board.grid import SudokuGrid
from sudoku_ga.evolution.individual import Individual
from sudoku_ga.evolution.selection import Selection

MAX_PARENT_DRAWS = 10


class EmptyPopulation(RuntimeError):
    """Raised when best/worst/selection is asked of an empty population."""


class InsufficientPopulation(RuntimeError):
    """Raised when two distinct parents cannot exist."""


@dataclass
class PopulationHistory:
    """Summary history for a population."""

    generation: list[int] = field(default_factory=list)
    best_fitness: list[int] = field(default_factory=list)
    avg_fitness: list[float] = field(default_factory=list)
    worst_fitness: list[int] = field(default_factory=list)


class Population:
    """Ordered collection of candidate grids with selection helpers."""

    def __init__(
        self,
        puzzle: SudokuGrid | None = None,
        size: int = 0,
        rng: Generator | None = None,
    ) -> None:
        self.rng = rng or np.random.default_rng()
        self.individuals: list[Individual] = []
        self.generation = 0
        self.history = PopulationHistory()

        if puzzle is not None:
            self.initialize_random(puzzle, size)

    def initialize_random(self, puzzle: SudokuGrid, size: int) -> None:
        """Fill the population with randomly completed copies of a puzzle."""
        individuals = []
        for _ in range(size):
            individual = Individual(puzzle)
            individual.initialize_random(self.rng)
            individuals.append(individual)
        self.individuals = individuals
        self.generation = 0

    def __len__(self) -> int:
        return len(self.individuals)

    def __getitem__(self, index: int) -> Individual:
        return self.individuals[index]

    def __iter__(self) -> Iterator[Individual]:
        return iter(self.individuals)

    # --- Best / worst ---

    def get_best(self) -> Individual:
        """Fittest individual; the earliest one wins ties."""
        if not self.individuals:
            raise EmptyPopulation("population is empty")
        return max(self.individuals, key=lambda ind: ind.fitness)

    def get_worst(self) -> Individual:
        """Least fit individual; the earliest one wins ties."""
        if not self.individuals:
            raise EmptyPopulation("population is empty")
        return min(self.individuals, key=lambda ind: ind.fitness)

    # --- Selection ---

    def tournament_select(self, tournament_size: int = 3) -> Individual:
        if not self.individuals:
            raise EmptyPopulation("population is empty")
        fitness_scores = [ind.fitness for ind in self.individuals]
        idx = Selection.tournament_select(
            fitness_scores,
            tournament_size=tournament_size,
            rng=self.rng,
        )
        return self.individuals[idx]

    def select_parents(self, tournament_size: int = 3) -> tuple[Individual, Individual]:
        """Select two different individuals by independent tournaments.

        Returns references into the population, not copies. If repeated
        tournaments keep returning parent1, parent2 falls back to the
        first other individual in order.
        """
        if len(self.individuals) < 2:
            raise InsufficientPopulation(
                "population must have at least 2 individuals"
            )

        parent1 = self.tournament_select(tournament_size)
        parent2 = parent1
        for _ in range(MAX_PARENT_DRAWS):
            parent2 = self.tournament_select(tournament_size)
            if parent2 is not parent1:
                break

        if parent2 is parent1:
            parent2 = next(ind for ind in self.individuals if ind is not parent1)

        return parent1, parent2

    # --- Generation management ---

    def replace_generation(self, individuals: list[Individual]) -> None:
        """Swap in a whole new generation; its size may differ."""
        self.individuals = list(individuals)
        self.generation += 1

    # --- Statistics ---

    def best_fitness(self) -> int:
        if not self.individuals:
            return 0
        return self.get_best().fitness

    def worst_fitness(self) -> int:
        if not self.individuals:
            return 0
        return self.get_worst().fitness

    def average_fitness(self) -> float:
        if not self.individuals:
            return 0.0
        return float(np.mean([ind.fitness for ind in self.individuals]))

    def has_solution(self) -> bool:
        return any(ind.is_solution() for ind in self.individuals)

    def get_solution(self) -> Individual | None:
        """First individual at maximum fitness, or None."""
        for ind in self.individuals:
            if ind.is_solution():
                return ind
        return None

    def record_generation(self) -> None:
        """Record generation statistics."""
        self.history.generation.append(self.generation)
        self.history.best_fitness.append(self.best_fitness())
        self.history.avg_fitness.append(self.average_fitness())
        self.history.worst_fitness.append(self.worst_fitness())
