from collections import defaultdict
from dataclasses import dataclass
import logging
from typing import Dict, Iterator, List, Sequence, Tuple

import numpy as np
import trimesh

from .grid import GridPos
from .materials import ColorTuple, Facing, Material, color_for, ladder

logger = logging.getLogger(__name__)

Vec3 = Tuple[int, int, int]


@dataclass(frozen=True)
class Volume:
    """An axis-aligned cuboid of voxels, inclusive on both corners."""
    min_corner: Vec3
    max_corner: Vec3

    @classmethod
    def between(cls, a: Sequence[int], b: Sequence[int]) -> "Volume":
        """Build a volume from two opposite corners given in any order."""
        low = tuple(int(min(p, q)) for p, q in zip(a, b))
        high = tuple(int(max(p, q)) for p, q in zip(a, b))
        return cls(low, high)

    @property
    def size(self) -> Vec3:
        return tuple(high - low + 1 for low, high in zip(self.min_corner, self.max_corner))

    @property
    def block_count(self) -> int:
        size_x, size_y, size_z = self.size
        return size_x * size_y * size_z

    def contains(self, point: Sequence[int]) -> bool:
        return all(low <= p <= high for p, low, high in zip(point, self.min_corner, self.max_corner))

    def positions(self) -> Iterator[Vec3]:
        (x0, y0, z0), (x1, y1, z1) = self.min_corner, self.max_corner
        for x in range(x0, x1 + 1):
            for y in range(y0, y1 + 1):
                for z in range(z0, z1 + 1):
                    yield (x, y, z)

    def to_list(self) -> List[List[int]]:
        return [list(self.min_corner), list(self.max_corner)]


# =============================================================================
# Grid to world mapping
# =============================================================================

def floor_base_y(origin: Vec3, floor: int, wall_height: int) -> int:
    """Y of the floor slab under `floor`; each level is a slab plus `wall_height` of walls."""
    return origin[1] + floor * (wall_height + 1)


def cell_volume(origin: Vec3, floor: int, pos: GridPos, path_width: int, wall_height: int) -> Volume:
    """
    Map a grid cell to the world volume it occupies.

    Args:
        origin: World corner the maze is built from.
        floor: Vertical level of the cell.
        pos: (col, row) of the cell; col runs along X, row along Z.
        path_width: Blocks per cell along X and Z.
        wall_height: Blocks per cell along Y.

    Returns:
        The cell's volume, starting one block above its floor slab.
    """
    col, row = pos
    low = (
        origin[0] + path_width * col,
        floor_base_y(origin, floor, wall_height) + 1,
        origin[2] + path_width * row,
    )
    high = (
        low[0] + path_width - 1,
        floor_base_y(origin, floor, wall_height) + wall_height,
        low[2] + path_width - 1,
    )
    return Volume(low, high)


def floor_slab(volume: Volume) -> Volume:
    """The single layer directly below a cell volume."""
    x0, y0, z0 = volume.min_corner
    x1, _, z1 = volume.max_corner
    return Volume((x0, y0 - 1, z0), (x1, y0 - 1, z1))


def shaft_volume(origin: Vec3, floor: int, pos: GridPos, path_width: int, wall_height: int) -> Volume:
    """The slab of `floor` above a cell of the floor below, opened to link the two."""
    col, row = pos
    base_y = floor_base_y(origin, floor, wall_height)
    low = (origin[0] + path_width * col, base_y, origin[2] + path_width * row)
    return Volume(low, (low[0] + path_width - 1, base_y, low[2] + path_width - 1))


# =============================================================================
# Connectors
# =============================================================================

_FACING_BY_DIRECTION: Dict[Tuple[int, int], Facing] = {
    (0, 1): Facing.NORTH,
    (0, -1): Facing.SOUTH,
    (1, 0): Facing.WEST,
    (-1, 0): Facing.EAST,
}


def facing_for(direction: Tuple[int, int]) -> Facing:
    """Connector facing for a unit (x, z) approach vector."""
    try:
        return _FACING_BY_DIRECTION[tuple(direction)]
    except KeyError:
        raise ValueError(f"Not a cardinal direction: {direction}") from None


def approach_direction(ending_path: Sequence[GridPos]) -> Tuple[int, int]:
    """Unit (x, z) vector from the second-to-last node to the last node."""
    (c0, r0), (c1, r1) = ending_path[-2], ending_path[-1]
    return ((c1 - c0) // 2, (r1 - r0) // 2)


def connector_placements(
    origin: Vec3,
    ending_path: Sequence[GridPos],
    floor: int,
    path_width: int,
    wall_height: int,
) -> List[Tuple[Material, Volume]]:
    """
    Ladder columns for the shaft at the end of `ending_path`.

    The main column hugs the far wall of the last cell in the approach
    direction and spans the whole passage width. Wider passages get two more
    single columns on the opposite corners, each facing along the axis across
    the approach.

    Args:
        origin: World corner the maze is built from.
        ending_path: The last two nodes of the longest path on `floor`.
        floor: Level the ladders stand on.
        path_width: Blocks per cell along X and Z.
        wall_height: Blocks per cell along Y.

    Returns:
        (material, volume) pairs in placement order.
    """
    dx, dz = approach_direction(ending_path)
    cell = cell_volume(origin, floor, ending_path[-1], path_width, wall_height)
    (min_x, min_y, min_z), (max_x, _, max_z) = cell.min_corner, cell.max_corner

    first = (max_x if dx == 1 else min_x, min_y, max_z if dz == 1 else min_z)
    last = (max_x if dx == 0 else first[0], min_y, max_z if dz == 0 else first[2])
    placements = [
        (ladder(facing_for((dx, dz))), Volume.between(first, (last[0], last[1] + wall_height, last[2]))),
    ]
    if path_width == 1:
        return placements

    corner = [min_x if dx == 1 else max_x, min_y, min_z if dz == 1 else max_z]
    others = [list(corner), list(corner)]
    if dz != 0:
        others[1][0] = max_x if dx == 1 else min_x
    if dx != 0:
        others[1][2] = max_z if dz == 1 else min_z

    for x, y, z in others:
        if dz != 0:
            side = (-1, 0) if x == min_x else (1, 0)
        else:
            side = (0, -1) if z == min_z else (0, 1)
        placements.append((ladder(facing_for(side)), Volume((x, y, z), (x, y + wall_height, z))))
    return placements


# =============================================================================
# Preview meshes
# =============================================================================

def create_block_mesh(position: np.ndarray = np.array([0.0, 0.0, 0.0]),
                      dimensions: np.ndarray = np.array([1.0, 1.0, 1.0])) -> trimesh.Trimesh:
    """
    Creates a rectangular prism mesh centered at a specified position.

    Args:
        position: A numpy array representing the center of the prism (x, y, z).
        dimensions: A numpy array for width(X), height(Y), depth(Z).

    Returns:
        A trimesh.Trimesh object representing the prism.
    """
    primitive = trimesh.primitives.Box(extents=dimensions)
    primitive.apply_translation(position)
    return trimesh.Trimesh(vertices=primitive.vertices, faces=primitive.faces)


def create_voxel_mesh(voxels: np.ndarray) -> trimesh.Trimesh:
    """
    One mesh holding a unit cube for every voxel.

    Args:
        voxels: (N, 3) integer array of voxel min corners.

    Returns:
        The concatenated cubes, with the cube template tiled by numpy.
    """
    template = create_block_mesh(np.array([0.5, 0.5, 0.5]))
    voxels = np.asarray(voxels, dtype=float).reshape(-1, 3)
    vertex_count = len(template.vertices)
    vertices = (template.vertices[None, :, :] + voxels[:, None, :]).reshape(-1, 3)
    faces = (template.faces[None, :, :] + (np.arange(len(voxels)) * vertex_count)[:, None, None]).reshape(-1, 3)
    return trimesh.Trimesh(vertices=vertices, faces=faces, process=False)


def _color_mesh(mesh: trimesh.Trimesh, color: ColorTuple) -> trimesh.Trimesh:
    mesh.visual.face_colors = np.tile(color, (len(mesh.faces), 1))
    return mesh


def build_world_meshes(world) -> List[trimesh.Trimesh]:
    """
    Group a world's voxels by material into one coloured mesh per material.

    Args:
        world: A VoxelWorld.

    Returns:
        A list of trimesh.Trimesh objects, ordered by material name.
    """
    voxels_by_material: Dict[Material, List[Vec3]] = defaultdict(list)
    for position, material in world.blocks.items():
        voxels_by_material[material].append(position)

    meshes = []
    for material in sorted(voxels_by_material, key=str):
        mesh = create_voxel_mesh(np.array(voxels_by_material[material]))
        meshes.append(_color_mesh(mesh, color_for(material)))
        logger.debug("Mesh for %s: %d voxels", material, len(voxels_by_material[material]))
    logger.info("Built %d meshes from %d voxels", len(meshes), len(world.blocks))
    return meshes
