"""Grid visualization using matplotlib."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
import numpy as np

from sudoku_ga.board.grid import EMPTY, SIZE, SUBBLOCK_SIZE

if TYPE_CHECKING:
    from sudoku_ga.board.grid import SudokuGrid

# Color scheme (RGB tuples)
COLORS = {
    "given": (0.0, 0.0, 0.0),  # Black
    "filled": (0.1, 0.3, 0.8),  # Blue
    "conflict": (1.0, 0.85, 0.85),  # Light red cell background
    "background": (1.0, 1.0, 1.0),  # White
}


class GridRenderer:
    """Draws a Sudoku grid as an image.

    Givens are bold black, evolved digits blue. Cells whose digit repeats
    in their row or column get a light red background.
    """

    def __init__(self, figsize: float = 5.0) -> None:
        plt.ioff()
        self.fig, self.ax = plt.subplots(figsize=(figsize, figsize))
        self.image_data: np.ndarray | None = None

    def render(self, grid: SudokuGrid, title: str | None = None) -> None:
        """Draw the grid onto the figure, replacing previous content."""
        ax = self.ax
        ax.clear()

        self.image_data = self._background(grid)
        ax.imshow(self.image_data, extent=(0, SIZE, SIZE, 0))

        for i in range(SIZE + 1):
            width = 2.0 if i % SUBBLOCK_SIZE == 0 else 0.5
            ax.axhline(i, color="black", linewidth=width)
            ax.axvline(i, color="black", linewidth=width)

        for row in range(SIZE):
            for col in range(SIZE):
                value = grid.get(row, col)
                if value == EMPTY:
                    continue
                given = grid.is_fixed(row, col)
                ax.text(
                    col + 0.5,
                    row + 0.5,
                    str(value),
                    ha="center",
                    va="center",
                    fontsize=14,
                    fontweight="bold" if given else "normal",
                    color=COLORS["given"] if given else COLORS["filled"],
                )

        ax.set_xlim(0, SIZE)
        ax.set_ylim(SIZE, 0)
        ax.set_xticks([])
        ax.set_yticks([])
        if title:
            ax.set_title(title)

    @staticmethod
    def _background(grid: SudokuGrid) -> np.ndarray:
        """RGB image with conflicting cells highlighted."""
        image = np.ones((SIZE, SIZE, 3))
        image[:, :] = COLORS["background"]
        values = grid.values
        for row in range(SIZE):
            for col in range(SIZE):
                value = values[row, col]
                if value == EMPTY:
                    continue
                in_row = np.count_nonzero(values[row, :] == value)
                in_col = np.count_nonzero(values[:, col] == value)
                if in_row > 1 or in_col > 1:
                    image[row, col] = COLORS["conflict"]
        return image

    def save(self, filename: str | Path) -> Path:
        """Save the current figure to a file."""
        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.fig.savefig(path, dpi=100, bbox_inches="tight")
        return path

    def close(self) -> None:
        """Close the figure."""
        plt.close(self.fig)

    def __enter__(self) -> GridRenderer:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
