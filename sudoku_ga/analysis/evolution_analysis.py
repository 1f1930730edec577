"""Analysis utilities for solver runs."""

from __future__ import annotations

import json
from pathlib import Path

import matplotlib.pyplot as plt

from sudoku_ga.board.grid import MAX_SCORE, SudokuGrid


class EvolutionAnalyzer:
    """Analyze solver checkpoints."""

    def __init__(self, checkpoint_path: str | Path) -> None:
        self.checkpoint_path = Path(checkpoint_path)
        self.history: dict[str, list] = {}
        self.payload: dict = {}

    def load(self) -> dict:
        """Load checkpoint JSON."""
        with open(self.checkpoint_path, "r", encoding="utf-8") as f:
            self.payload = json.load(f)
        self.history = self.payload.get("history", {})
        return self.payload

    def best_grid(self) -> SudokuGrid | None:
        """Best grid stored in the checkpoint (fixed mask is not stored)."""
        text = self.payload.get("best_grid")
        if not text:
            return None
        grid = SudokuGrid()
        for i, symbol in enumerate(text):
            row, col = divmod(i, SudokuGrid.SIZE)
            grid.set(row, col, int(symbol))
        return grid

    def plot_fitness_curves(self, output_dir: str | Path) -> Path | None:
        """Plot best, average and worst fitness per generation."""
        if not self.history:
            return None
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        generations = self.history.get("generation", [])
        fig, ax = plt.subplots(figsize=(10, 5))
        ax.plot(generations, self.history.get("best_fitness", []), label="Best")
        ax.plot(generations, self.history.get("avg_fitness", []), label="Avg")
        ax.plot(generations, self.history.get("worst_fitness", []), label="Worst")
        ax.axhline(MAX_SCORE, color="gray", linestyle="--", linewidth=0.8)
        ax.set_xlabel("Generation")
        ax.set_ylabel("Fitness")
        ax.set_title("Fitness Curves")
        ax.legend()
        path = output_dir / "fitness_curves.png"
        plt.tight_layout()
        plt.savefig(path, dpi=150)
        plt.close(fig)
        return path

    def summary(self) -> dict[str, float | int]:
        """Headline numbers for the run."""
        best = self.history.get("best_fitness", [])
        avg = self.history.get("avg_fitness", [])
        if not best:
            return {}
        return {
            "generations": int(self.payload.get("generation", len(best) - 1)),
            "initial_best": int(best[0]),
            "final_best": int(best[-1]),
            "final_avg": float(avg[-1]) if avg else 0.0,
            "improvement": int(best[-1]) - int(best[0]),
        }
