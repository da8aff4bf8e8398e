import unittest
import numpy as np
import trimesh

import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mazegen.geometry import (
    Volume,
    approach_direction,
    build_world_meshes,
    cell_volume,
    connector_placements,
    create_block_mesh,
    create_voxel_mesh,
    facing_for,
    floor_slab,
    shaft_volume,
)
from mazegen.materials import Facing, Material, color_for, LADDER_NAME
from mazegen.world import VoxelWorld

STONE = Material("minecraft:stone")
BRICKS = Material("minecraft:stone_bricks")


class TestVolume(unittest.TestCase):

    def test_between_normalises_corners(self):
        volume = Volume.between((3, 5, -1), (1, 2, 4))
        self.assertEqual(volume.min_corner, (1, 2, -1))
        self.assertEqual(volume.max_corner, (3, 5, 4))
        self.assertEqual(volume.size, (3, 4, 6))
        self.assertEqual(volume.block_count, 72)

    def test_positions_cover_volume(self):
        volume = Volume((0, 0, 0), (1, 2, 0))
        positions = list(volume.positions())
        self.assertEqual(len(positions), 6)
        self.assertTrue(all(volume.contains(p) for p in positions))
        self.assertFalse(volume.contains((2, 0, 0)))


class TestCellMapping(unittest.TestCase):

    def test_cell_volume(self):
        volume = cell_volume((10, 64, -5), floor=1, pos=(3, 5), path_width=2, wall_height=3)
        self.assertEqual(volume.min_corner, (16, 69, 5))
        self.assertEqual(volume.max_corner, (17, 71, 6))

    def test_ground_floor_leaves_slab_below(self):
        volume = cell_volume((0, 0, 0), floor=0, pos=(0, 0), path_width=1, wall_height=3)
        self.assertEqual(volume, Volume((0, 1, 0), (0, 3, 0)))
        self.assertEqual(floor_slab(volume), Volume((0, 0, 0), (0, 0, 0)))

    def test_mapping_is_idempotent(self):
        args = ((4, 8, 15), 2, (7, 3), 3, 4)
        self.assertEqual(cell_volume(*args), cell_volume(*args))

    def test_floors_stack_with_a_slab_between(self):
        lower = cell_volume((0, 0, 0), floor=0, pos=(1, 1), path_width=2, wall_height=3)
        upper = cell_volume((0, 0, 0), floor=1, pos=(1, 1), path_width=2, wall_height=3)
        self.assertEqual(floor_slab(upper).min_corner[1], lower.max_corner[1] + 1)

    def test_shaft_is_upper_floor_slab(self):
        upper = cell_volume((0, 0, 0), floor=1, pos=(3, 1), path_width=2, wall_height=3)
        shaft = shaft_volume((0, 0, 0), floor=1, pos=(3, 1), path_width=2, wall_height=3)
        self.assertEqual(shaft, floor_slab(upper))


class TestConnectors(unittest.TestCase):

    def test_cardinal_facings(self):
        facings = {
            (0, 1): facing_for((0, 1)),
            (0, -1): facing_for((0, -1)),
            (1, 0): facing_for((1, 0)),
            (-1, 0): facing_for((-1, 0)),
        }
        self.assertEqual(facings[(0, 1)], Facing.NORTH)
        self.assertEqual(facings[(0, -1)], Facing.SOUTH)
        self.assertEqual(facings[(1, 0)], Facing.WEST)
        self.assertEqual(facings[(-1, 0)], Facing.EAST)
        self.assertEqual(len(set(facings.values())), 4)
        for (dx, dz), facing in facings.items():
            self.assertEqual(facing_for((-dx, -dz)), facing.opposite)

    def test_non_cardinal_direction(self):
        with self.assertRaises(ValueError):
            facing_for((1, 1))

    def test_approach_direction(self):
        self.assertEqual(approach_direction([(3, 3), (3, 1)]), (0, -1))
        self.assertEqual(approach_direction([(1, 1), (3, 1)]), (1, 0))

    def test_single_width_connector(self):
        placements = connector_placements((0, 0, 0), [(1, 1), (3, 1)], floor=0, path_width=1, wall_height=3)
        self.assertEqual(len(placements), 1)
        material, volume = placements[0]
        self.assertEqual(material.name, LADDER_NAME)
        self.assertEqual(material.facing, Facing.WEST)
        # From the floor level up through the slab of the floor above
        self.assertEqual(volume, Volume((3, 1, 1), (3, 4, 1)))

    def test_double_width_connector_facing_west(self):
        placements = connector_placements((0, 0, 0), [(1, 1), (3, 1)], floor=0, path_width=2, wall_height=3)
        main_material, main_volume = placements[0]

        self.assertEqual(main_material.facing, Facing.WEST)
        self.assertEqual(main_volume, Volume((7, 1, 2), (7, 4, 3)))
        # Two parallel columns one block apart along z
        columns = {(x, z) for x, _, z in main_volume.positions()}
        self.assertEqual(columns, {(7, 2), (7, 3)})

        sides = {volume.min_corner: material.facing for material, volume in placements[1:]}
        self.assertEqual(sides, {(6, 1, 3): Facing.NORTH, (6, 1, 2): Facing.SOUTH})

    def test_double_width_connector_along_z(self):
        placements = connector_placements((0, 0, 0), [(1, 3), (1, 1)], floor=0, path_width=2, wall_height=2)
        main_material, main_volume = placements[0]

        self.assertEqual(main_material.facing, Facing.SOUTH)
        self.assertEqual(main_volume, Volume((2, 1, 2), (3, 3, 2)))
        sides = {volume.min_corner: material.facing for material, volume in placements[1:]}
        self.assertEqual(sides, {(3, 1, 3): Facing.WEST, (2, 1, 3): Facing.EAST})

    def test_connector_on_upper_floor(self):
        placements = connector_placements((5, 10, 5), [(3, 3), (3, 5)], floor=2, path_width=1, wall_height=4)
        material, volume = placements[0]
        self.assertEqual(material.facing, Facing.NORTH)
        self.assertEqual(volume, Volume((8, 21, 10), (8, 25, 10)))


class TestMeshes(unittest.TestCase):

    def test_block_mesh_centered(self):
        mesh = create_block_mesh(np.array([1.0, 2.0, 3.0]), np.array([2.0, 2.0, 2.0]))
        self.assertIsInstance(mesh, trimesh.Trimesh)
        np.testing.assert_allclose(mesh.bounds, [[0.0, 1.0, 2.0], [2.0, 3.0, 4.0]])

    def test_voxel_mesh_tiles_cubes(self):
        mesh = create_voxel_mesh(np.array([[0, 0, 0], [2, 0, 0]]))
        self.assertEqual(len(mesh.vertices), 16)
        self.assertEqual(len(mesh.faces), 24)
        np.testing.assert_allclose(mesh.bounds, [[0.0, 0.0, 0.0], [3.0, 1.0, 1.0]])

    def test_world_meshes_one_per_material(self):
        world = VoxelWorld()
        world.fill_volume(STONE, (0, 0, 0), (1, 0, 1))
        world.fill_volume(BRICKS, (0, 1, 0), (0, 3, 0))

        meshes = build_world_meshes(world)
        self.assertEqual(len(meshes), 2)
        self.assertEqual(sum(len(m.faces) for m in meshes), (4 + 3) * 12)
        stone_mesh = meshes[0]
        np.testing.assert_array_equal(stone_mesh.visual.face_colors[0], color_for(STONE))

    def test_empty_world_has_no_meshes(self):
        self.assertEqual(build_world_meshes(VoxelWorld()), [])


if __name__ == '__main__':
    unittest.main()
