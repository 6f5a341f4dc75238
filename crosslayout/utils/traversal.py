"""Breadth-first traversal shared by grid metrics and word connectivity."""

from __future__ import annotations

from collections import deque
from typing import Callable, Hashable, Iterable, Iterator, List, Tuple, TypeVar

from ..core.constants import ORTHOGONAL_STEPS

T = TypeVar("T", bound=Hashable)


def breadth_first(starts: Iterable[T], neighbors: Callable[[T], Iterable[T]]) -> List[T]:
    """Return every node reachable from ``starts``, in visit order."""

    visited = set()
    order: List[T] = []
    queue: deque = deque()
    for start in starts:
        if start not in visited:
            visited.add(start)
            order.append(start)
            queue.append(start)
    while queue:
        node = queue.popleft()
        for nxt in neighbors(node):
            if nxt not in visited:
                visited.add(nxt)
                order.append(nxt)
                queue.append(nxt)
    return order


def table_neighbors(
    width: int, height: int, passable: Callable[[int, int], bool]
) -> Callable[[Tuple[int, int]], Iterator[Tuple[int, int]]]:
    """Orthogonal in-bounds neighbors of a table cell that satisfy ``passable``."""

    def _neighbors(cell: Tuple[int, int]) -> Iterator[Tuple[int, int]]:
        x, y = cell
        for dx, dy in ORTHOGONAL_STEPS:
            nx, ny = x + dx, y + dy
            if 0 <= nx < width and 0 <= ny < height and passable(nx, ny):
                yield nx, ny

    return _neighbors


def border_cells(width: int, height: int) -> Iterator[Tuple[int, int]]:
    for y in range(height):
        for x in range(width):
            if y == 0 or y == height - 1 or x == 0 or x == width - 1:
                yield x, y
