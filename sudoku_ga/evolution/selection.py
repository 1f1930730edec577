"""Selection strategies for evolutionary runs."""

from __future__ import annotations

import numpy as np
from numpy.random import Generator

from sudoku_ga.evolution.sampling import sample_indices


class Selection:
    """Parent selection over a list of fitness scores."""

    @staticmethod
    def tournament_select(
        fitness_scores: list[int],
        tournament_size: int = 3,
        rng: Generator | None = None,
    ) -> int:
        """Select one index via tournament selection.

        The tournament size is clamped to [1, len(fitness_scores)] and
        contestants are drawn without replacement. Among equally fit
        contestants the one drawn first wins.
        """

        if not fitness_scores:
            raise ValueError("fitness_scores must not be empty")

        generator = rng or np.random.default_rng()
        population_size = len(fitness_scores)
        tournament_size = max(1, min(tournament_size, population_size))

        indices = sample_indices(generator, population_size, tournament_size)
        best_idx = int(indices[0])
        for idx in indices:
            if fitness_scores[int(idx)] > fitness_scores[best_idx]:
                best_idx = int(idx)
        return best_idx
