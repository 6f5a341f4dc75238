"""Symmetry-aware signatures for recognizing equivalent layouts."""

from __future__ import annotations

from typing import FrozenSet, Iterable, List, Sequence, Set

from ..core.constants import ROW_SEPARATOR
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

Table = List[List[str]]


def encode(table: Sequence[Sequence[str]]) -> str:
    """Row-major encoding, rows joined by ``ROW_SEPARATOR``."""
    return ROW_SEPARATOR.join("".join(row) for row in table)


def rotate90(table: Sequence[Sequence[str]]) -> Table:
    """Rotate clockwise: column ``x`` read bottom-up becomes row ``x``."""
    height = len(table)
    width = len(table[0]) if height else 0
    return [[table[y][x] for y in range(height - 1, -1, -1)] for x in range(width)]


def mirror_horizontal(table: Sequence[Sequence[str]]) -> Table:
    return [list(reversed(row)) for row in table]


def mirror_vertical(table: Sequence[Sequence[str]]) -> Table:
    return [list(row) for row in reversed(table)]


def transforms(table: Sequence[Sequence[str]]) -> List[Table]:
    """The table under each rotation, each followed by its two axis mirrors."""
    result: List[Table] = []
    current: Table = [list(row) for row in table]
    for _ in range(4):
        result.append(current)
        result.append(mirror_horizontal(current))
        result.append(mirror_vertical(current))
        current = rotate90(current)
    return result


def signature(table: Sequence[Sequence[str]]) -> FrozenSet[str]:
    """Encodings of all eight rotations and reflections of ``table``."""
    return frozenset(encode(variant) for variant in transforms(table))


def equivalent(a: Sequence[Sequence[str]], b: Sequence[Sequence[str]]) -> bool:
    return not signature(a).isdisjoint(signature(b))


class SignatureRegistry:
    """Running set of every encoding accepted so far."""

    def __init__(self) -> None:
        self._seen: Set[str] = set()

    def __len__(self) -> int:
        return len(self._seen)

    def __contains__(self, encoding: object) -> bool:
        return encoding in self._seen

    def is_duplicate(self, encodings: Iterable[str]) -> bool:
        return any(encoding in self._seen for encoding in encodings)

    def register(self, table: Sequence[Sequence[str]]) -> bool:
        """Record ``table`` if new; return ``False`` when it is a duplicate."""
        encodings = signature(table)
        if self.is_duplicate(encodings):
            LOGGER.debug("Rejected duplicate layout %s", encode(table))
            return False
        self._seen.update(encodings)
        return True
