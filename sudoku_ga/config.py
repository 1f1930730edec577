"""Project-wide configuration constants."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar


@dataclass(frozen=True)
class Config:
    """Central configuration constants for the Sudoku GA."""

    # Evolution parameters
    POPULATION_SIZE: ClassVar[int] = 150  # Candidates per generation
    MAX_GENERATIONS: ClassVar[int] = 100000  # Give up after this many
    CROSSOVER_RATE: ClassVar[float] = 0.3  # Probability of recombining parents
    MUTATION_RATE: ClassVar[float] = 0.3  # Per sub-block swap probability
    TOURNAMENT_SIZE: ClassVar[int] = 3  # Contestants per tournament
    LOCAL_SEARCH_CANDIDATES: ClassVar[int] = 2  # Mutations tried by hill climbing
    USE_LOCAL_SEARCH: ClassVar[bool] = True
    ELITISM: ClassVar[bool] = True  # Carry the best individual over

    # Reporting parameters
    REPORT_INTERVAL: ClassVar[int] = 1000  # 0 = quiet
    CHECKPOINT_INTERVAL: ClassVar[int] = 0  # 0 = no periodic checkpoints

    # Path parameters
    DATA_DIR: ClassVar[str] = "data"
    CHECKPOINT_DIR: ClassVar[str] = "data/checkpoints"
    ANALYSIS_DIR: ClassVar[str] = "data/analysis"

    @classmethod
    def with_overrides(cls, **values: Any) -> type[Config]:
        """Return a Config subclass with the given constants replaced."""
        for name in values:
            if not name.isupper() or not hasattr(cls, name):
                raise AttributeError(f"unknown config constant: {name}")
        return type("RunConfig", (cls,), dict(values))

    @classmethod
    def create_dirs(cls) -> None:
        """Create required data directories."""
        paths = (
            cls.DATA_DIR,
            cls.CHECKPOINT_DIR,
            cls.ANALYSIS_DIR,
        )
        for path in paths:
            Path(path).mkdir(parents=True, exist_ok=True)
