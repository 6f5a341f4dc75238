"""Read-only connectivity queries over placed words."""

from __future__ import annotations

from typing import Dict, List, Sequence, Set, Tuple

from ..core.models import Coordinate, Placement
from ..utils.traversal import breadth_first
from .grid import LayoutGrid


def word_adjacency(placements: Sequence[Placement]) -> Dict[int, Set[int]]:
    """Map each placement index to the indices it shares a cell with."""
    owners: Dict[Coordinate, List[int]] = {}
    for index, placement in enumerate(placements):
        for cell in placement.cells:
            owners.setdefault(cell, []).append(index)

    adjacency: Dict[int, Set[int]] = {index: set() for index in range(len(placements))}
    for indices in owners.values():
        for a in indices:
            adjacency[a].update(b for b in indices if b != a)
    return adjacency


def _reachable(placements: Sequence[Placement]) -> Set[int]:
    if not placements:
        return set()
    adjacency = word_adjacency(placements)
    return set(breadth_first([0], lambda index: sorted(adjacency[index])))


def connected_placements(placements: Sequence[Placement]) -> List[Placement]:
    """Placements reachable from the first one through shared cells, in input order."""
    reached = _reachable(placements)
    return [p for index, p in enumerate(placements) if index in reached]


def split_connected(
    placements: Sequence[Placement],
) -> Tuple[List[Placement], List[Placement]]:
    """Partition into the connected group and the words cut off from it."""
    reached = _reachable(placements)
    connected = [p for index, p in enumerate(placements) if index in reached]
    cut_off = [p for index, p in enumerate(placements) if index not in reached]
    return connected, cut_off


def visible_placements(
    placements: Sequence[Placement], hidden_words: Set[str]
) -> Tuple[List[Placement], Set[str]]:
    """Drop ``hidden_words`` and report which further words became disconnected."""
    visible = [p for p in placements if p.word not in hidden_words]
    connected, cut_off = split_connected(visible)
    return connected, {p.word for p in cut_off}


def visible_table(placements: Sequence[Placement], hidden_words: Set[str]) -> List[List[str]]:
    """Table of the words still linked to the first visible one."""
    connected, _ = visible_placements(placements, hidden_words)
    return LayoutGrid.from_placements(connected).to_table()
