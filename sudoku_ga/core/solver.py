"""Generational GA driver for Sudoku puzzles."""

from __future__ import annotations

import json
import time
from dataclasses import asdict, dataclass
from pathlib import Path

import numpy as np
from numpy.random import Generator

from sudoku_ga.board.grid import MAX_SCORE, SudokuGrid
from sudoku_ga.config import Config
from sudoku_ga.evolution.individual import Individual
from sudoku_ga.evolution.operators import GeneticOperators
from sudoku_ga.evolution.population import Population


@dataclass
class SolverResult:
    """Outcome of a solve attempt."""

    solved: bool
    generations: int
    best_fitness: int
    best_individual: Individual
    elapsed_seconds: float


class Solver:
    """Evolves a population until a grid scores 162 or the budget runs out."""

    def __init__(
        self,
        config: type[Config] | None = None,
        rng: Generator | None = None,
    ) -> None:
        self.config = config or Config
        self.rng = rng or np.random.default_rng()
        self._validate_config()
        self.population: Population | None = None

    def _validate_config(self) -> None:
        cfg = self.config
        if cfg.POPULATION_SIZE < 1:
            raise ValueError("POPULATION_SIZE must be at least 1")
        if cfg.MAX_GENERATIONS < 0:
            raise ValueError("MAX_GENERATIONS must not be negative")
        for name in ("CROSSOVER_RATE", "MUTATION_RATE"):
            rate = getattr(cfg, name)
            if not 0.0 <= rate <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {rate}")

    def solve(self, puzzle: SudokuGrid | str) -> SolverResult:
        """Run the genetic algorithm on a puzzle."""
        start_time = time.perf_counter()
        if not isinstance(puzzle, SudokuGrid):
            puzzle = SudokuGrid(puzzle)

        self.population = Population(
            puzzle, self.config.POPULATION_SIZE, rng=self.rng
        )
        self.population.record_generation()

        solution = self.population.get_solution()
        if solution is not None:
            return self._result(True, 0, solution, start_time)

        self._print_progress(0)

        for gen in range(1, self.config.MAX_GENERATIONS + 1):
            self.run_generation()
            self.population.record_generation()

            solution = self.population.get_solution()
            if solution is not None:
                if self.config.REPORT_INTERVAL > 0:
                    print(f"Solution found at generation {gen}!")
                self._maybe_checkpoint(gen, force=True)
                return self._result(True, gen, solution, start_time)

            self._print_progress(gen)
            self._maybe_checkpoint(gen)

        return self._result(
            False,
            self.config.MAX_GENERATIONS,
            self.population.get_best(),
            start_time,
        )

    def run_generation(self) -> None:
        """One cycle: selection, crossover, mutation, local search, replacement."""
        population = self.population
        cfg = self.config
        target_size = len(population)
        new_generation: list[Individual] = []

        if cfg.ELITISM:
            new_generation.append(population.get_best().copy())

        while len(new_generation) < target_size:
            parent1, parent2 = population.select_parents(cfg.TOURNAMENT_SIZE)

            if self.rng.random() < cfg.CROSSOVER_RATE:
                child1, child2 = GeneticOperators.crossover(parent1, parent2)
            else:
                child1 = parent1.copy()
                child2 = parent2.copy()

            GeneticOperators.mutate(child1, cfg.MUTATION_RATE, rng=self.rng)
            GeneticOperators.mutate(child2, cfg.MUTATION_RATE, rng=self.rng)

            if cfg.USE_LOCAL_SEARCH and cfg.LOCAL_SEARCH_CANDIDATES > 1:
                child1 = GeneticOperators.local_search(
                    child1, cfg.LOCAL_SEARCH_CANDIDATES, rng=self.rng
                )
                child2 = GeneticOperators.local_search(
                    child2, cfg.LOCAL_SEARCH_CANDIDATES, rng=self.rng
                )

            new_generation.append(child1)
            if len(new_generation) < target_size:
                new_generation.append(child2)

        population.replace_generation(new_generation)

    def save_checkpoint(self, generation: int) -> Path:
        """Save run history and the current best grid."""
        out_dir = Path(self.config.CHECKPOINT_DIR)
        out_dir.mkdir(parents=True, exist_ok=True)
        path = out_dir / f"solver_gen_{generation:06d}.json"

        best = self.population.get_best()
        payload = {
            "generation": generation,
            "history": asdict(self.population.history),
            "best_grid": best.grid.to_string(),
            "best_fitness": best.fitness,
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        return path

    def _maybe_checkpoint(self, generation: int, force: bool = False) -> None:
        interval = self.config.CHECKPOINT_INTERVAL
        if interval <= 0:
            return
        if force or generation % interval == 0:
            self.save_checkpoint(generation)

    def _result(
        self,
        solved: bool,
        generations: int,
        best: Individual,
        start_time: float,
    ) -> SolverResult:
        return SolverResult(
            solved=solved,
            generations=generations,
            best_fitness=MAX_SCORE if solved else best.fitness,
            best_individual=best.copy(),
            elapsed_seconds=time.perf_counter() - start_time,
        )

    def _print_progress(self, generation: int) -> None:
        """Print a one-line population summary every REPORT_INTERVAL generations."""
        interval = self.config.REPORT_INTERVAL
        if interval <= 0 or generation % interval != 0:
            return
        population = self.population
        print(
            f"Generation {generation}"
            f" | Best: {population.best_fitness()}"
            f" | Avg: {population.average_fitness():.2f}"
            f" | Worst: {population.worst_fitness()}"
        )
