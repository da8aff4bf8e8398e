import logging
from collections import deque
from typing import Deque, List

from .constants import NODE_DIRECTIONS
from .grid import FloorGrid, GridPos, midpoint, offset

logger = logging.getLogger(__name__)


def _maximal_paths(floor: FloorGrid, start: GridPos) -> List[List[GridPos]]:
    """Enumerate every simple path from `start` that cannot be extended further."""
    paths: Deque[List[GridPos]] = deque([[start]])
    finished: List[List[GridPos]] = []

    while paths:
        path = paths.popleft()
        pos = path[-1]
        end_of_path = True

        for d_col, d_row in NODE_DIRECTIONS:
            next_pos = offset(pos, d_col, d_row)
            # The midpoint is always on the grid; the outer ring is never visited
            if not floor.cell(midpoint(pos, next_pos)).is_visited:
                continue
            if next_pos in path:
                continue
            paths.append(path + [next_pos])
            end_of_path = False

        if end_of_path:
            finished.append(path)

    return finished


def longest_path(floor: FloorGrid, start: GridPos) -> List[GridPos]:
    """
    The longest simple path through the carved tree starting at `start`.

    Ties go to the path found first in breadth-first order.
    """
    longest: List[GridPos] = []
    for path in _maximal_paths(floor, start):
        if len(path) > len(longest):
            longest = path
    logger.debug("Longest path on floor %d from %s has %d nodes", floor.level, start, len(longest))
    return longest


def find_furthest_point(floor: FloorGrid, start: GridPos) -> List[GridPos]:
    """
    The last two nodes of the longest path from `start`.

    The pair gives both the far end of the tree and the direction it is
    approached from. A floor with a single node returns just `[start]`.
    """
    return longest_path(floor, start)[-2:]
