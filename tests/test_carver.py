import os
import random
import sys
import unittest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mazegen.carver import carve_floor
from mazegen.grid import FloorGrid, midpoint

from maze_test_utils import carved_edges, reachable_nodes


class TestCarveFloor(unittest.TestCase):

    def _carve(self, size_x: int, size_z: int, seed: int = 1234):
        floor = FloorGrid(level=0, size_x=size_x, size_z=size_z)
        drill_path = carve_floor(floor, random.Random(seed))
        return floor, drill_path

    def test_two_by_two_floor(self):
        floor, drill_path = self._carve(2, 2)
        nodes = [pos for pos in drill_path if floor.cell(pos).is_node]
        midpoints = [pos for pos in drill_path if not floor.cell(pos).is_node]

        self.assertEqual((floor.cols, floor.rows), (5, 5))
        self.assertEqual(sorted(nodes), [(1, 1), (1, 3), (3, 1), (3, 3)])
        self.assertEqual(len(midpoints), 3)
        self.assertEqual(len(drill_path), 7)

    def test_every_node_visited_exactly_once(self):
        for seed in range(10):
            floor, drill_path = self._carve(5, 4, seed)
            nodes = list(floor.interior_nodes())
            self.assertEqual(len(drill_path), len(set(drill_path)), "Drill path repeats a cell")
            self.assertEqual(sorted(p for p in drill_path if floor.cell(p).is_node), sorted(nodes))
            for node in nodes:
                self.assertTrue(floor.cell(node).is_visited)

    def test_carved_graph_is_a_spanning_tree(self):
        for seed in range(10):
            floor, _ = self._carve(6, 5, seed)
            nodes = list(floor.interior_nodes())
            edges = carved_edges(floor)
            self.assertEqual(len(edges), len(nodes) - 1, f"Seed {seed} carved a cycle or left a gap")
            self.assertEqual(reachable_nodes(floor, (1, 1)), set(nodes))

    def test_walls_are_never_carved(self):
        floor, drill_path = self._carve(4, 4)
        for pos in drill_path:
            self.assertFalse(floor.cell(pos).is_wall, f"Drilled into the outer ring at {pos}")
        for cell in floor:
            if cell.is_wall:
                self.assertFalse(cell.is_visited)

    def test_midpoints_follow_their_node(self):
        floor, drill_path = self._carve(4, 3)
        # After the root, entries alternate node, midpoint; each midpoint touches the node before it
        for node, middle in zip(drill_path[1::2], drill_path[2::2]):
            self.assertTrue(floor.cell(node).is_node)
            self.assertFalse(floor.cell(middle).is_node)
            self.assertEqual(abs(node[0] - middle[0]) + abs(node[1] - middle[1]), 1)

    def test_visited_cells_match_drill_path(self):
        floor, drill_path = self._carve(3, 5)
        self.assertEqual(sorted(floor.visited_positions()), sorted(drill_path))

    def test_single_node_floor(self):
        floor, drill_path = self._carve(1, 1)
        self.assertEqual(drill_path, [(1, 1)])
        self.assertEqual(floor.visited_count(), 1)

    def test_single_row_floor(self):
        floor, drill_path = self._carve(5, 1)
        self.assertEqual(len(drill_path), 9)
        self.assertEqual(len(carved_edges(floor)), 4)

    def test_seed_reproduces_drill_path(self):
        _, first = self._carve(5, 5, seed=99)
        _, second = self._carve(5, 5, seed=99)
        self.assertEqual(first, second)

    def test_default_rng(self):
        floor = FloorGrid(level=0, size_x=3, size_z=3)
        drill_path = carve_floor(floor)
        self.assertEqual(len(drill_path), 9 + 8)
        for a, b in carved_edges(floor):
            self.assertIn(midpoint(a, b), drill_path)


if __name__ == '__main__':
    unittest.main()
