import logging
import random
from typing import Dict, List, Optional

from .grid import Cell, FloorGrid, GridPos, midpoint

logger = logging.getLogger(__name__)


def carve_floor(floor: FloorGrid, rng: Optional[random.Random] = None) -> List[GridPos]:
    """
    Carve a perfect maze into one floor with loop-erased random walks.

    A random node seeds the tree. Each following walk starts at a random
    unvisited node and wanders until it touches the tree; the whole walk is
    then committed, node and midpoint alternately, in the order walked.

    Args:
        floor: The floor grid to carve. Its cells' `is_visited` flags are updated.
        rng: Random source, defaults to a fresh unseeded `random.Random`.

    Returns:
        The drill path: grid positions in the order they become passable.
    """
    rng = rng or random.Random()
    # Insertion-ordered set so seeded runs are reproducible
    unvisited: Dict[GridPos, None] = dict.fromkeys(floor.interior_nodes())
    drill_path: List[GridPos] = []

    starter = _random_unvisited_cell(floor, unvisited, rng)
    starter.is_visited = True
    del unvisited[starter.grid_pos]
    drill_path.append(starter.grid_pos)

    walks = 0
    while unvisited:
        _add_path(floor, unvisited, drill_path, rng)
        walks += 1

    logger.debug(
        "Carved floor %d: %d walks, drill path of %d cells",
        floor.level, walks, len(drill_path),
    )
    return drill_path


def _add_path(floor: FloorGrid, unvisited: Dict[GridPos, None], drill_path: List[GridPos], rng: random.Random):
    """Walk from a random unvisited node until reaching the tree, then commit the walk."""
    path: List[Cell] = [_random_unvisited_cell(floor, unvisited, rng)]
    # Every cell this walk has touched, including steps that were backed out
    touched = {path[0].grid_pos}

    while not path[-1].is_visited:
        directions = floor.neighbor_nodes(path[-1].grid_pos)

        choice: Optional[Cell] = None
        while choice is None and directions:
            candidate = directions.pop(rng.randrange(len(directions)))
            if candidate in touched:
                continue
            choice = floor.cell(candidate)

        if choice is None:
            # Dead end for this walk: step back and try again from there
            path.pop()
        else:
            touched.add(choice.grid_pos)
            path.append(choice)

    for cell, following in zip(path, path[1:]):
        middle = floor.cell(midpoint(cell.grid_pos, following.grid_pos))
        cell.is_visited = True
        drill_path.append(cell.grid_pos)
        unvisited.pop(cell.grid_pos, None)
        middle.is_visited = True
        drill_path.append(middle.grid_pos)


def _random_unvisited_cell(floor: FloorGrid, unvisited: Dict[GridPos, None], rng: random.Random) -> Cell:
    return floor.cell(rng.choice(list(unvisited)))
