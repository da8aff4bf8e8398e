from dataclasses import dataclass
from typing import Iterator, List, Tuple

from .constants import NODE_DIRECTIONS, grid_extent

# Floor-local (col, row) position on the doubled grid
GridPos = Tuple[int, int]


class GridIndexError(IndexError):
    """Raised when a grid position or floor index falls outside the maze."""


@dataclass
class Cell:
    """A single grid unit of one floor."""
    grid_pos: GridPos
    world_origin: Tuple[int, int, int]
    is_wall: bool = False
    is_visited: bool = False

    @property
    def is_node(self) -> bool:
        """True for maze junctions (both coordinates odd)."""
        col, row = self.grid_pos
        return col % 2 == 1 and row % 2 == 1


def offset(pos: GridPos, d_col: int = 0, d_row: int = 0) -> GridPos:
    return (pos[0] + d_col, pos[1] + d_row)


def midpoint(a: GridPos, b: GridPos) -> GridPos:
    """The wall cell between two adjacent nodes."""
    return ((a[0] + b[0]) // 2, (a[1] + b[1]) // 2)


class FloorGrid:
    """
    The cells of one maze floor.

    Cells are kept in a flat row-major list. The outer ring is marked as
    permanent wall; only odd/odd positions are maze nodes, everything else is
    a wall between nodes until carved.
    """

    def __init__(self, level: int, size_x: int, size_z: int):
        if size_x < 1 or size_z < 1:
            raise ValueError(f"Floor footprint must be at least 1x1 nodes, got {size_x}x{size_z}")
        self.level = level
        self.size_x = size_x
        self.size_z = size_z
        self.cols = grid_extent(size_x)
        self.rows = grid_extent(size_z)
        self.cells: List[Cell] = []
        for row in range(self.rows):
            for col in range(self.cols):
                cell = Cell(grid_pos=(col, row), world_origin=(col, level, row))
                cell.is_wall = col == 0 or row == 0 or col == self.cols - 1 or row == self.rows - 1
                self.cells.append(cell)

    @property
    def max_col(self) -> int:
        return self.cols - 1

    @property
    def max_row(self) -> int:
        return self.rows - 1

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.cols and 0 <= row < self.rows

    def node_at(self, col: int, row: int) -> Cell:
        if not self.in_bounds(col, row):
            raise GridIndexError(
                f"Position ({col}, {row}) outside floor {self.level} of size {self.cols}x{self.rows}"
            )
        return self.cells[row * self.cols + col]

    def cell(self, pos: GridPos) -> Cell:
        return self.node_at(pos[0], pos[1])

    def interior_nodes(self) -> Iterator[GridPos]:
        """Yield every maze node position, column-major like the carving order."""
        for col in range(1, self.cols - 1, 2):
            for row in range(1, self.rows - 1, 2):
                yield (col, row)

    def neighbor_nodes(self, pos: GridPos) -> List[GridPos]:
        """Adjacent node positions that stay inside the interior."""
        neighbors = []
        for d_col, d_row in NODE_DIRECTIONS:
            col, row = pos[0] + d_col, pos[1] + d_row
            if 1 <= col <= self.cols - 2 and 1 <= row <= self.rows - 2:
                neighbors.append((col, row))
        return neighbors

    def is_connected(self, a: GridPos, b: GridPos) -> bool:
        """True when the midpoint between two adjacent nodes has been carved."""
        return self.cell(midpoint(a, b)).is_visited

    def visited_positions(self) -> List[GridPos]:
        return [cell.grid_pos for cell in self.cells if cell.is_visited]

    def visited_count(self) -> int:
        return sum(1 for cell in self.cells if cell.is_visited)

    def reset(self):
        """Forget all carving so the floor can be carved again."""
        for cell in self.cells:
            cell.is_visited = False

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)


class MazeGrid:
    """All floors of a maze, indexed by vertical level."""

    def __init__(self, floor_count: int, size_x: int, size_z: int):
        if floor_count < 1:
            raise ValueError(f"A maze needs at least one floor, got {floor_count}")
        self.size_x = size_x
        self.size_z = size_z
        self.floors: List[FloorGrid] = [FloorGrid(level, size_x, size_z) for level in range(floor_count)]

    @property
    def floor_count(self) -> int:
        return len(self.floors)

    def floor(self, level: int) -> FloorGrid:
        if not 0 <= level < len(self.floors):
            raise GridIndexError(f"Floor {level} outside maze of {len(self.floors)} floors")
        return self.floors[level]

    def node_at(self, level: int, col: int, row: int) -> Cell:
        return self.floor(level).node_at(col, row)
