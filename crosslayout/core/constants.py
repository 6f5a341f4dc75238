"""Shared constants and enumerations for the layout engine."""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class Orientation(str, Enum):
    """Axis along which a word's letters are laid out."""

    ACROSS = "ACROSS"
    DOWN = "DOWN"

    @property
    def step(self) -> Tuple[int, int]:
        return (1, 0) if self is Orientation.ACROSS else (0, 1)

    @property
    def perpendicular(self) -> Tuple[Tuple[int, int], ...]:
        if self is Orientation.ACROSS:
            return ((0, -1), (0, 1))
        return ((-1, 0), (1, 0))

    def flipped(self) -> "Orientation":
        return Orientation.DOWN if self is Orientation.ACROSS else Orientation.ACROSS


ORTHOGONAL_STEPS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))

# Marks an empty cell in a finished table. Never a valid letter.
EMPTY_CELL = "-"
ROW_SEPARATOR = "|"

MIN_WORD_LENGTH = 2

# Candidate scoring weights.
INTERSECTION_WEIGHT = 300
DENSITY_WEIGHT = 40
ASPECT_WEIGHT = 40
FUTURE_LINK_WEIGHT = 10
EXPANSION_WEIGHT = 150
EXPANSION_TOLERANCE = 1.1
MAX_CANDIDATES = 30

# Beam search and completion defaults.
WORD_SHORTLIST = 12
CANDIDATES_PER_WORD = 8
MAX_STAGNATION = 5
COMPLETION_ROUNDS = 5
SHARED_LETTER_WEIGHT = 10
