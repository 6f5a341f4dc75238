"""Sparse grid representation and bounding-box helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from ..core.constants import EMPTY_CELL, Orientation
from ..core.exceptions import PlacementError
from ..core.models import Coordinate, Placement


@dataclass(frozen=True)
class Bounds:
    """Inclusive bounding box of the occupied cells."""

    min_x: int
    max_x: int
    min_y: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def perimeter(self) -> int:
        return 2 * (self.width + self.height)

    def contains(self, x: int, y: int) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def including(self, x: int, y: int, orientation: Orientation, length: int) -> "Bounds":
        """Return the box grown to cover a run of ``length`` cells."""
        dx, dy = orientation.step
        end_x = x + dx * (length - 1)
        end_y = y + dy * (length - 1)
        return Bounds(
            min_x=min(self.min_x, x),
            max_x=max(self.max_x, end_x),
            min_y=min(self.min_y, y),
            max_y=max(self.max_y, end_y),
        )


EMPTY_BOUNDS = Bounds(0, 0, 0, 0)


class LayoutGrid:
    """Coordinate-keyed letter store on an unbounded plane.

    Consistency between crossing words is enforced by the placement
    validator before :meth:`place` is called; :meth:`place` itself only
    refuses to overwrite a different letter.
    """

    def __init__(self, cells: Optional[Dict[Coordinate, str]] = None) -> None:
        self.cells: Dict[Coordinate, str] = dict(cells) if cells else {}
        self._bounds: Optional[Bounds] = None

    @classmethod
    def from_placements(cls, placements: Iterable[Placement]) -> "LayoutGrid":
        grid = cls()
        for placement in placements:
            grid.place(placement)
        return grid

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self.cells)

    def __contains__(self, coord: object) -> bool:
        return coord in self.cells

    def __iter__(self) -> Iterator[Tuple[Coordinate, str]]:
        return iter(self.cells.items())

    @property
    def is_empty(self) -> bool:
        return not self.cells

    def get(self, x: int, y: int) -> Optional[str]:
        return self.cells.get((x, y))

    def letters(self) -> Set[str]:
        return set(self.cells.values())

    @property
    def bounds(self) -> Bounds:
        """Bounding box; an empty grid reports a 1x1 box at the origin."""
        if self._bounds is None:
            if not self.cells:
                return EMPTY_BOUNDS
            xs = [x for x, _ in self.cells]
            ys = [y for _, y in self.cells]
            self._bounds = Bounds(min(xs), max(xs), min(ys), max(ys))
        return self._bounds

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def clone(self) -> "LayoutGrid":
        copy = LayoutGrid()
        copy.cells = dict(self.cells)
        copy._bounds = self._bounds
        return copy

    def place(self, placement: Placement) -> None:
        """Write a word into the grid."""
        cells = placement.cells
        for (x, y), letter in zip(cells, placement.word):
            existing = self.cells.get((x, y))
            if existing is not None and existing != letter:
                raise PlacementError(
                    f"Letter conflict at ({x},{y}): '{existing}' vs '{letter}' for {placement.word}"
                )

        was_empty = not self.cells
        for coord, letter in zip(cells, placement.word):
            self.cells[coord] = letter

        if was_empty:
            self._bounds = None
        elif self._bounds is not None:
            self._bounds = self._bounds.including(
                placement.x, placement.y, placement.orientation, placement.length
            )

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------
    def to_table(self) -> List[List[str]]:
        """Rectangular table of the bounding box, empty cells as ``EMPTY_CELL``."""
        bounds = self.bounds
        table = [[EMPTY_CELL] * bounds.width for _ in range(bounds.height)]
        for (x, y), letter in self.cells.items():
            table[y - bounds.min_y][x - bounds.min_x] = letter
        return table
