"""Data models supporting the layout engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from .constants import EMPTY_CELL, Orientation

if TYPE_CHECKING:
    from ..engine.grid import LayoutGrid


Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class Placement:
    """A word laid out from an origin along one axis."""

    word: str
    x: int
    y: int
    orientation: Orientation

    @property
    def length(self) -> int:
        return len(self.word)

    @property
    def cells(self) -> List[Coordinate]:
        dx, dy = self.orientation.step
        return [(self.x + dx * i, self.y + dy * i) for i in range(len(self.word))]

    @property
    def end(self) -> Coordinate:
        dx, dy = self.orientation.step
        return (self.x + dx * (len(self.word) - 1), self.y + dy * (len(self.word) - 1))

    @property
    def caps(self) -> Tuple[Coordinate, Coordinate]:
        """Cells immediately before the start and after the end."""
        dx, dy = self.orientation.step
        end_x, end_y = self.end
        return (self.x - dx, self.y - dy), (end_x + dx, end_y + dy)

    @property
    def key(self) -> str:
        return f"{self.word}:{self.x},{self.y}"

    def shifted(self, dx: int, dy: int) -> "Placement":
        return Placement(self.word, self.x + dx, self.y + dy, self.orientation)

    def transposed(self) -> "Placement":
        return Placement(self.word, self.y, self.x, self.orientation.flipped())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "x": self.x,
            "y": self.y,
            "orientation": self.orientation.value,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Placement":
        return cls(
            word=payload["word"],
            x=int(payload["x"]),
            y=int(payload["y"]),
            orientation=Orientation(payload["orientation"]),
        )


@dataclass(frozen=True)
class Candidate:
    """A scored, validated origin for one word."""

    x: int
    y: int
    orientation: Orientation
    score: float
    intersections: int

    def to_placement(self, word: str) -> Placement:
        return Placement(word, self.x, self.y, self.orientation)


@dataclass(frozen=True)
class BeamState:
    """One partial layout owned by a single search branch.

    ``grid`` is never shared between states; every child is built from a
    clone of its parent's grid.
    """

    grid: "LayoutGrid"
    placements: Tuple[Placement, ...]
    remaining: Tuple[str, ...]
    score: float = 0.0
    intersections: int = 0

    @property
    def placed_count(self) -> int:
        return len(self.placements)

    @property
    def key(self) -> str:
        return "|".join(sorted(p.key for p in self.placements))


@dataclass
class LayoutMetrics:
    """Derived metrics of a finished attempt."""

    density: float
    intersections: int
    avg_intersections: float
    compactness: float
    filled_cells: int
    outliers: int
    word_count: int
    total_words: int
    score: float

    @property
    def leftover(self) -> int:
        return self.total_words - self.word_count

    def to_dict(self) -> Dict[str, Any]:
        return {
            "density": round(self.density, 3),
            "intersections": self.intersections,
            "avg_intersections": round(self.avg_intersections, 4),
            "compactness": round(self.compactness, 4),
            "filled_cells": self.filled_cells,
            "outliers": self.outliers,
            "word_count": self.word_count,
            "total_words": self.total_words,
            "leftover": self.leftover,
            "score": round(self.score, 4),
        }


@dataclass
class FinishedLayout:
    """Result of one attempt, normalized to the table origin."""

    id: int
    table: List[List[str]]
    placements: List[Placement]
    metrics: LayoutMetrics
    remaining: List[str] = field(default_factory=list)
    beam_width: Optional[int] = None

    @property
    def width(self) -> int:
        return len(self.table[0]) if self.table else 0

    @property
    def height(self) -> int:
        return len(self.table)

    @property
    def score(self) -> float:
        return self.metrics.score

    def rows(self) -> List[str]:
        return ["".join(row) for row in self.table]

    def transposed(self) -> "FinishedLayout":
        """Swap axes: every across word becomes a down word and vice versa."""
        table = [
            [self.table[y][x] for y in range(self.height)] for x in range(self.width)
        ]
        return FinishedLayout(
            id=self.id,
            table=table,
            placements=[p.transposed() for p in self.placements],
            metrics=self.metrics,
            remaining=list(self.remaining),
            beam_width=self.beam_width,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "grid": self.rows(),
            "empty_cell": EMPTY_CELL,
            "placements": [p.to_dict() for p in self.placements],
            "remaining": list(self.remaining),
            "beam_width": self.beam_width,
            "metrics": self.metrics.to_dict(),
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "FinishedLayout":
        metrics = {k: v for k, v in payload["metrics"].items() if k != "leftover"}
        return cls(
            id=int(payload["id"]),
            table=[list(row) for row in payload["grid"]],
            placements=[Placement.from_dict(p) for p in payload["placements"]],
            metrics=LayoutMetrics(**metrics),
            remaining=list(payload.get("remaining") or []),
            beam_width=payload.get("beam_width"),
        )
