"""Pretty-print helpers for finished layouts."""

from __future__ import annotations

import sys
from collections import Counter
from typing import TYPE_CHECKING, Dict, Optional, Sequence

from ..core.constants import EMPTY_CELL, Orientation

if TYPE_CHECKING:
    from ..core.models import Coordinate, FinishedLayout
    from ..engine.generator import GenerationResult


BLANK = "."


def format_table(
    table: Sequence[Sequence[str]],
    numbers: Optional[Dict["Coordinate", int]] = None,
) -> str:
    width = len(table[0]) if table else 0
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for y, row in enumerate(table):
        symbols = []
        for x, cell in enumerate(row):
            if cell == EMPTY_CELL:
                symbols.append(BLANK)
            elif numbers and (x, y) in numbers:
                symbols.append(f"{cell}{numbers[(x, y)]}")
            else:
                symbols.append(cell)
        row_render = " ".join(f"{symbol:>2}" for symbol in symbols)
        lines.append(f"{y:>2} | {row_render}")
    return "\n".join(lines)


def format_stats(layout: "FinishedLayout") -> str:
    metrics = layout.metrics
    return (
        f"Words: {metrics.word_count} | Density: {metrics.density:.1f}% | "
        f"Avg intersections: {metrics.avg_intersections:.2f} | "
        f"Intersections: {metrics.intersections}"
    )


def print_layout_stats(layout: "FinishedLayout", *, stream=None) -> None:
    """Print table + metrics + word list for one finished layout."""

    stream = stream or sys.stdout
    print(format_table(layout.table), file=stream)
    metrics = layout.metrics

    print(file=stream)
    print("--- Layout ---", file=stream)
    print(f"  Size:          {layout.height} x {layout.width} ({layout.height * layout.width} cells)", file=stream)
    print(f"  Density:       {metrics.density:.1f}%", file=stream)
    print(f"  Compactness:   {metrics.compactness:.3f}", file=stream)
    print(f"  Enclosed:      {metrics.filled_cells}", file=stream)
    print(f"  Outliers:      {metrics.outliers}", file=stream)

    across = sorted(p.word for p in layout.placements if p.orientation == Orientation.ACROSS)
    down = sorted(p.word for p in layout.placements if p.orientation == Orientation.DOWN)
    lengths = Counter(len(p.word) for p in layout.placements)

    print(file=stream)
    print("--- Words ---", file=stream)
    print(f"  Placed:        {metrics.word_count}/{metrics.total_words}", file=stream)
    print(f"  Across:        {' '.join(across) or '-'}", file=stream)
    print(f"  Down:          {' '.join(down) or '-'}", file=stream)
    if lengths:
        dist_parts = [f"{length}:{count}" for length, count in sorted(lengths.items())]
        print(f"  Distribution:  {' '.join(dist_parts)}", file=stream)
    if layout.remaining:
        print(f"  Leftover:      {' '.join(layout.remaining)}", file=stream)

    print(file=stream)
    print("--- Score ---", file=stream)
    print(f"  Intersections: {metrics.intersections} (avg {metrics.avg_intersections:.2f})", file=stream)
    print(f"  Score:         {metrics.score:.2f}", file=stream)


def print_ranking(result: "GenerationResult", *, stream=None) -> None:
    """One line per ranked layout."""

    stream = stream or sys.stdout
    for rank, layout in enumerate(result.layouts, start=1):
        print(f"#{rank:<3} iter {layout.id:<4} score {layout.score:8.2f} | {format_stats(layout)}", file=stream)
