"""Overlay a solution phrase onto the letters of a finished table.

Each phrase character is matched to the first unused table cell holding
the same letter (row-major). Characters with no match are "given": a
renderer prints them in the solution strip instead of numbering a cell.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..core.models import Coordinate


@dataclass
class SolutionChar:
    char: str
    new_word: bool
    position: Optional[Coordinate]
    is_given: bool
    number: int


@dataclass
class SolutionOverlay:
    chars: List[SolutionChar]
    numbers: Dict[Coordinate, int]

    @property
    def given(self) -> List[SolutionChar]:
        return [c for c in self.chars if c.is_given]


def split_phrase(phrase: str) -> List[Tuple[str, bool]]:
    """Non-space characters paired with whether each starts a new word."""
    result: List[Tuple[str, bool]] = []
    for index, char in enumerate(phrase):
        if not char.strip():
            continue
        new_word = index == 0 or not phrase[index - 1].strip()
        result.append((char, new_word))
    return result


def assign_solution_positions(table: Sequence[Sequence[str]], phrase: str) -> SolutionOverlay:
    used: Set[Coordinate] = set()
    numbers: Dict[Coordinate, int] = {}
    chars: List[SolutionChar] = []
    for index, (char, new_word) in enumerate(split_phrase(phrase)):
        number = index + 1
        position = _first_free(table, char.upper(), used)
        if position is not None:
            used.add(position)
            numbers[position] = number
        chars.append(
            SolutionChar(
                char=char,
                new_word=new_word,
                position=position,
                is_given=position is None,
                number=number,
            )
        )
    return SolutionOverlay(chars=chars, numbers=numbers)


def _first_free(
    table: Sequence[Sequence[str]], letter: str, used: Set[Coordinate]
) -> Optional[Coordinate]:
    for y, row in enumerate(table):
        for x, cell in enumerate(row):
            if cell == letter and (x, y) not in used:
                return x, y
    return None
