"""Analysis tools for solver runs."""

from __future__ import annotations

from sudoku_ga.analysis.evolution_analysis import EvolutionAnalyzer

__all__ = ["EvolutionAnalyzer"]
