"""Candidate generation for placing one word against the current grid."""

from __future__ import annotations

from typing import Iterable, List, Set, Tuple

from ..core.constants import (
    ASPECT_WEIGHT,
    DENSITY_WEIGHT,
    EXPANSION_TOLERANCE,
    EXPANSION_WEIGHT,
    FUTURE_LINK_WEIGHT,
    INTERSECTION_WEIGHT,
    MAX_CANDIDATES,
    Orientation,
)
from ..core.models import Candidate
from .grid import LayoutGrid
from .validator import check_placement


def future_links(word: str, others: Iterable[str]) -> int:
    """Count letters of ``word`` that also occur in any other unplaced word."""
    pool: Set[str] = set()
    for other in others:
        pool.update(other)
    return sum(1 for letter in word if letter in pool)


def find_candidates(
    grid: LayoutGrid,
    word: str,
    others: Iterable[str],
    limit: int = MAX_CANDIDATES,
) -> List[Candidate]:
    """Return the best valid placements of ``word``, highest score first.

    An empty grid yields the two seed placements at the origin. Otherwise
    every occupied cell holding one of the word's letters is tried as a
    crossing point in both orientations.
    """

    if grid.is_empty:
        return [
            Candidate(0, 0, Orientation.ACROSS, 0.0, 0),
            Candidate(0, 0, Orientation.DOWN, 0.0, 0),
        ][:limit]

    word_letters = set(word)
    bounds = grid.bounds
    occupied = len(grid)
    links = future_links(word, others) * FUTURE_LINK_WEIGHT
    length = len(word)

    seen: Set[Tuple[int, int, Orientation]] = set()
    candidates: List[Candidate] = []
    for (gx, gy), letter in grid:
        if letter not in word_letters:
            continue
        for index, char in enumerate(word):
            if char != letter:
                continue
            for orientation, x, y in (
                (Orientation.ACROSS, gx - index, gy),
                (Orientation.DOWN, gx, gy - index),
            ):
                key = (x, y, orientation)
                if key in seen:
                    continue
                seen.add(key)
                check = check_placement(grid, word, x, y, orientation)
                if not check.valid:
                    continue

                grown = bounds.including(x, y, orientation, length)
                density = (occupied + length - check.intersections) / grown.area
                aspect = min(grown.width, grown.height) / max(grown.width, grown.height)
                expansion = grown.area / bounds.area
                score = (
                    check.intersections * check.intersections * INTERSECTION_WEIGHT
                    + density * DENSITY_WEIGHT
                    + aspect * ASPECT_WEIGHT
                    + links
                )
                if expansion > EXPANSION_TOLERANCE:
                    score -= (expansion - 1) * EXPANSION_WEIGHT
                candidates.append(Candidate(x, y, orientation, score, check.intersections))

    candidates.sort(key=lambda candidate: candidate.score, reverse=True)
    return candidates[:limit]
