"""Board balance explorer.

Generates one board per seed for every (rows, cols, inactive %) combination
and prints the combinations whose horizontal and vertical move counts come
out closest. ``--plot`` additionally draws a heatmap of the average absolute
move difference for a single inactive percentage.

Run with: ``python fairness_analysis.py [--plot 18]``
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

import matplotlib.pyplot as plt

# Ensure src/ is on the import path when run from a checkout.
SRC_PATH = Path(__file__).parent / "src"
if SRC_PATH.exists() and str(SRC_PATH) not in sys.path:
    sys.path.append(str(SRC_PATH))

from squart.analysis.fairness_report import (  # type: ignore
    PERCENTAGES,
    ROW_RANGE,
    SEED_COUNT,
    diff_matrix,
    run_analysis,
)
from squart.utils.logger import configure_logging  # type: ignore

TOP_COUNT = 25


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rank board shapes by move balance")
    parser.add_argument("--min-size", type=int, default=ROW_RANGE[0], help="Smallest rows/cols value")
    parser.add_argument("--max-size", type=int, default=ROW_RANGE[1], help="Largest rows/cols value")
    parser.add_argument(
        "--percentages",
        type=float,
        nargs="+",
        default=list(PERCENTAGES),
        help="Inactive percentages to sweep",
    )
    parser.add_argument("--seeds", type=int, default=SEED_COUNT, help="Boards generated per combination")
    parser.add_argument("--top", type=int, default=TOP_COUNT, help="Number of combinations to print")
    parser.add_argument(
        "--plot",
        type=float,
        metavar="PERCENT",
        help="Show a heatmap of avg |diff| for this inactive percentage",
    )
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level")
    return parser


def plot_heatmap(results, percentage: float, size_range) -> None:
    matrix = diff_matrix(results, percentage, size_range, size_range)
    low, high = size_range
    plt.figure(figsize=(7, 6))
    plt.imshow(matrix, origin="lower", cmap="viridis", extent=(low - 0.5, high + 0.5, low - 0.5, high + 0.5))
    plt.colorbar(label="Average |H - V| moves")
    plt.xlabel("Columns")
    plt.ylabel("Rows")
    plt.title(f"Move imbalance at {percentage:g}% inactive")
    plt.show()


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(getattr(logging, args.log_level.upper(), logging.WARNING))

    size_range = (args.min_size, args.max_size)
    results = run_analysis(size_range, size_range, args.percentages, args.seeds)

    print(
        f"Top {args.top} balanced configurations "
        "(rows x cols, inactive %, avg abs diff, zero diff rate, avg moves H, avg moves V)"
    )
    for record in results[: args.top]:
        print(record.format_line())

    if args.plot is not None:
        plot_heatmap(results, args.plot, size_range)


if __name__ == "__main__":
    main()
