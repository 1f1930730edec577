"""Solve a Sudoku puzzle with the genetic algorithm."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np

from sudoku_ga.analysis.evolution_analysis import EvolutionAnalyzer
from sudoku_ga.board.grid import MAX_SCORE, InvalidPuzzle, SudokuGrid
from sudoku_ga.board.renderer import GridRenderer
from sudoku_ga.config import Config
from sudoku_ga.core.solver import Solver

EXAMPLE_PUZZLE = (
    "000260701"
    "680070090"
    "190004500"
    "820100040"
    "004602900"
    "050003028"
    "009300074"
    "040050036"
    "703018000"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Solve Sudoku with a genetic algorithm")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--puzzle", type=str, default=None, help="81-char puzzle, 0 or . for blanks")
    source.add_argument("--puzzle-file", type=str, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--population", type=int, default=None)
    parser.add_argument("--generations", type=int, default=None)
    parser.add_argument("--crossover-rate", type=float, default=None)
    parser.add_argument("--mutation-rate", type=float, default=None)
    parser.add_argument("--tournament-size", type=int, default=None)
    parser.add_argument("--local-search-candidates", type=int, default=None)
    parser.add_argument("--no-local-search", action="store_true")
    parser.add_argument("--no-elitism", action="store_true")
    parser.add_argument("--report-interval", type=int, default=None)
    parser.add_argument("--checkpoint-interval", type=int, default=None)
    parser.add_argument("--plot", action="store_true", help="Save fitness curves and solution image")
    parser.add_argument("--output-dir", type=str, default=None)
    return parser


def load_puzzle(args: argparse.Namespace) -> str:
    if args.puzzle_file:
        text = Path(args.puzzle_file).read_text(encoding="utf-8")
        return "".join(text.split())
    return args.puzzle or EXAMPLE_PUZZLE


def config_from_args(args: argparse.Namespace) -> type[Config]:
    overrides = {
        "POPULATION_SIZE": args.population,
        "MAX_GENERATIONS": args.generations,
        "CROSSOVER_RATE": args.crossover_rate,
        "MUTATION_RATE": args.mutation_rate,
        "TOURNAMENT_SIZE": args.tournament_size,
        "LOCAL_SEARCH_CANDIDATES": args.local_search_candidates,
        "REPORT_INTERVAL": args.report_interval,
        "CHECKPOINT_INTERVAL": args.checkpoint_interval,
    }
    values = {name: value for name, value in overrides.items() if value is not None}
    if args.no_local_search:
        values["USE_LOCAL_SEARCH"] = False
    if args.no_elitism:
        values["ELITISM"] = False
    return Config.with_overrides(**values)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        puzzle = SudokuGrid(load_puzzle(args))
    except InvalidPuzzle as exc:
        print(f"Invalid puzzle: {exc}", file=sys.stderr)
        return 2

    run_config = config_from_args(args)
    rng = np.random.default_rng(args.seed)

    print("Puzzle:")
    print(puzzle)

    solver = Solver(config=run_config, rng=rng)
    try:
        result = solver.solve(puzzle)
    except InvalidPuzzle as exc:
        print(f"Invalid puzzle: {exc}", file=sys.stderr)
        return 2

    if result.solved:
        print(f"Solved in {result.generations} generations!")
        print(f"Time: {result.elapsed_seconds:.2f} seconds\n")
        print("Solution:")
    else:
        print(f"No solution found after {result.generations} generations.")
        print(f"Best fitness achieved: {result.best_fitness} / {MAX_SCORE}\n")
        print("Best attempt:")
    print(result.best_individual.grid)

    if args.plot:
        output_dir = Path(args.output_dir or run_config.ANALYSIS_DIR)
        checkpoint = solver.save_checkpoint(result.generations)
        analyzer = EvolutionAnalyzer(checkpoint)
        analyzer.load()
        analyzer.plot_fitness_curves(output_dir)
        with GridRenderer() as renderer:
            label = "Solved" if result.solved else "Best attempt"
            renderer.render(
                result.best_individual.grid,
                title=f"{label} (gen {result.generations}, fitness {result.best_fitness})",
            )
            renderer.save(output_dir / "solution.png")
        print(f"Plots written to {output_dir}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
