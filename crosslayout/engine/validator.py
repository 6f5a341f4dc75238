"""Placement checks and deterministic rule validation for layouts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

from ..core.constants import Orientation
from ..core.exceptions import LayoutError
from ..core.models import Coordinate, Placement
from ..utils.logger import get_logger
from .grid import LayoutGrid


LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class PlacementCheck:
    valid: bool
    intersections: int


REJECTED = PlacementCheck(valid=False, intersections=0)


def check_placement(
    grid: LayoutGrid, word: str, x: int, y: int, orientation: Orientation
) -> PlacementCheck:
    """Check one proposed placement against the grid without mutating it.

    Occupied cells must carry the same letter and count as intersections.
    Empty cells must not touch an occupied cell across the word's axis, and
    the cells just before the start and after the end must be empty. Two
    consecutive occupied cells mean the word would run along an existing
    word of the same orientation, which is rejected as well.
    """

    cells = grid.cells
    dx, dy = orientation.step
    perpendicular = orientation.perpendicular
    intersections = 0
    previous_occupied = False
    for index, letter in enumerate(word):
        cx, cy = x + dx * index, y + dy * index
        existing = cells.get((cx, cy))
        if existing is not None:
            if existing != letter or previous_occupied:
                return REJECTED
            intersections += 1
            previous_occupied = True
        elif any((cx + px, cy + py) in cells for px, py in perpendicular):
            return REJECTED
        else:
            previous_occupied = False

    before = (x - dx, y - dy)
    after = (x + dx * len(word), y + dy * len(word))
    capped = before not in cells and after not in cells
    valid = (intersections > 0 or not cells) and capped
    return PlacementCheck(valid=valid, intersections=intersections)


class ValidationError(LayoutError):
    """Raised internally when a finished layout breaks a structural rule."""


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class LayoutValidator:
    """Runs deterministic validation over an ordered placement list."""

    def validate(self, placements: Sequence[Placement]) -> ValidationResult:
        try:
            letters = self._check_consistency(placements)
            self._check_crossings(placements)
            self._check_caps(placements, letters)
        except ValidationError as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    def _check_consistency(self, placements: Sequence[Placement]) -> Dict[Coordinate, str]:
        letters: Dict[Coordinate, str] = {}
        for placement in placements:
            for coord, letter in zip(placement.cells, placement.word):
                existing = letters.setdefault(coord, letter)
                if existing != letter:
                    raise ValidationError(
                        f"Cell {coord} holds '{existing}' but {placement.word} needs '{letter}'"
                    )
        return letters

    def _check_crossings(self, placements: Sequence[Placement]) -> None:
        covered = set()
        for index, placement in enumerate(placements):
            cells = placement.cells
            if index and not covered.intersection(cells):
                raise ValidationError(
                    f"{placement.word} at ({placement.x},{placement.y}) crosses no earlier word"
                )
            covered.update(cells)

    def _check_caps(self, placements: Sequence[Placement], letters: Dict[Coordinate, str]) -> None:
        for placement in placements:
            for cap in placement.caps:
                if cap in letters:
                    raise ValidationError(
                        f"{placement.word} at ({placement.x},{placement.y}) runs into {cap}"
                    )
