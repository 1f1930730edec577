"""Solver drivers."""

from __future__ import annotations

from sudoku_ga.core.solver import Solver, SolverResult

__all__ = ["Solver", "SolverResult"]
