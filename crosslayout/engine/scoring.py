"""Layout fitness: intersections, compactness and shape metrics.

Two scores are computed from the same ingredients:

- :func:`beam_score` ranks in-progress beam states and uses only the
  average intersections and compactness.
- :func:`attempt_metrics` scores a finished attempt and blends in the
  filled-interior count, bounding-box density and an outlier penalty.

Both are pure functions of the layout.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import List, Optional, Sequence, Set, Tuple

from ..core.constants import EMPTY_CELL
from ..core.models import Coordinate, LayoutMetrics, Placement
from ..utils.traversal import border_cells, breadth_first, table_neighbors
from .grid import LayoutGrid


# ----------------------------------------------------------------------
# Intersections
# ----------------------------------------------------------------------
def _coverage(placements: Sequence[Placement]) -> Counter:
    coverage: Counter = Counter()
    for placement in placements:
        coverage.update(placement.cells)
    return coverage


def intersections_per_word(placements: Sequence[Placement]) -> List[int]:
    """Number of each placement's cells shared with another placement."""
    coverage = _coverage(placements)
    return [sum(1 for cell in p.cells if coverage[cell] > 1) for p in placements]


def count_intersections(placements: Sequence[Placement]) -> int:
    """Number of cells covered by more than one placement."""
    return sum(1 for count in _coverage(placements).values() if count > 1)


def average_intersections(placements: Sequence[Placement]) -> float:
    if not placements:
        return 0.0
    return sum(intersections_per_word(placements)) / len(placements)


# ----------------------------------------------------------------------
# Shape
# ----------------------------------------------------------------------
def compactness(grid: LayoutGrid, placed_count: Optional[int] = None) -> float:
    """Ideal perimeter for the occupied cell count over the actual one, capped at 1.

    A layout with fewer than two words has no shape to judge and counts as 1.
    """
    if len(grid) < 2 or (placed_count is not None and placed_count < 2):
        return 1.0
    ideal = 4 * math.sqrt(len(grid))
    return min(1.0, ideal / grid.bounds.perimeter)


def density(grid: LayoutGrid) -> float:
    """Occupied share of the bounding box, in percent."""
    return len(grid) / grid.bounds.area * 100


def filled_interior_cells(table: Sequence[Sequence[str]]) -> Set[Coordinate]:
    """Empty table cells enclosed by letters (not reachable from the border)."""
    height = len(table)
    width = len(table[0]) if height else 0
    if width * height <= 1:
        return set()

    def is_empty(x: int, y: int) -> bool:
        return table[y][x] == EMPTY_CELL

    outside = set(
        breadth_first(
            (cell for cell in border_cells(width, height) if is_empty(*cell)),
            table_neighbors(width, height, is_empty),
        )
    )
    return {
        (x, y)
        for y in range(height)
        for x in range(width)
        if is_empty(x, y) and (x, y) not in outside
    }


def count_outliers(grid: LayoutGrid) -> int:
    """Count occupied or enclosed cells that are not part of any full 2x2 block."""
    bounds = grid.bounds
    if bounds.area <= 1:
        return 0
    table = grid.to_table()
    solid: Set[Tuple[int, int]] = {
        (x + bounds.min_x, y + bounds.min_y) for x, y in filled_interior_cells(table)
    }
    solid.update(coord for coord, _ in grid)

    core: Set[Tuple[int, int]] = set()
    for y in range(bounds.min_y, bounds.max_y):
        for x in range(bounds.min_x, bounds.max_x):
            block = ((x, y), (x + 1, y), (x, y + 1), (x + 1, y + 1))
            if all(cell in solid for cell in block):
                core.update(block)
    return len(solid - core)


def outlier_penalty(outliers: int) -> float:
    return outliers * outliers / 2 + outliers * 2


# ----------------------------------------------------------------------
# Scores
# ----------------------------------------------------------------------
def beam_score(grid: LayoutGrid, placed_count: int, intersections: int) -> float:
    """In-progress fitness: ``avgIntersections * compactness * 100``.

    ``intersections`` is the number of crossing cells; every crossing is
    shared by exactly two words.
    """
    if not placed_count:
        return 0.0
    avg = 2 * intersections / placed_count
    return avg * compactness(grid, placed_count) * 100


def attempt_metrics(
    grid: LayoutGrid, placements: Sequence[Placement], total_words: int
) -> LayoutMetrics:
    """Metrics and blended score of a finished attempt."""
    bounds = grid.bounds
    avg = average_intersections(placements)
    compact = compactness(grid, len(placements))
    occupied_pct = density(grid)
    filled = len(filled_interior_cells(grid.to_table()))
    outliers = count_outliers(grid)
    score = (
        avg * compact * 100
        + (bounds.area / 4 + filled) * occupied_pct / 4
        - outlier_penalty(outliers)
    )
    return LayoutMetrics(
        density=occupied_pct,
        intersections=count_intersections(placements),
        avg_intersections=avg,
        compactness=compact,
        filled_cells=filled,
        outliers=outliers,
        word_count=len(placements),
        total_words=total_words,
        score=score,
    )
