import os
import random
import sys
import unittest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from mazegen.carver import carve_floor
from mazegen.grid import FloorGrid
from mazegen.pathfinding import find_furthest_point, longest_path

from maze_test_utils import mark_path


class TestLongestPath(unittest.TestCase):

    def test_straight_corridor(self):
        floor = FloorGrid(level=0, size_x=3, size_z=1)
        mark_path(floor, [(1, 1), (3, 1), (5, 1)])

        self.assertEqual(longest_path(floor, (1, 1)), [(1, 1), (3, 1), (5, 1)])
        self.assertEqual(find_furthest_point(floor, (1, 1)), [(3, 1), (5, 1)])

    def test_tie_goes_to_first_found(self):
        floor = FloorGrid(level=0, size_x=3, size_z=1)
        mark_path(floor, [(1, 1), (3, 1), (5, 1)])

        # Both arms have two nodes; the -x arm is explored first
        self.assertEqual(find_furthest_point(floor, (3, 1)), [(3, 1), (1, 1)])

    def test_picks_longer_branch(self):
        floor = FloorGrid(level=0, size_x=2, size_z=2)
        mark_path(floor, [(1, 3), (1, 1), (3, 1), (3, 3)])

        self.assertEqual(longest_path(floor, (1, 1)), [(1, 1), (3, 1), (3, 3)])
        self.assertEqual(find_furthest_point(floor, (1, 1)), [(3, 1), (3, 3)])
        self.assertEqual(find_furthest_point(floor, (1, 3)), [(3, 1), (3, 3)])

    def test_ignores_uncarved_neighbors(self):
        floor = FloorGrid(level=0, size_x=2, size_z=2)
        mark_path(floor, [(1, 1), (3, 1)])
        # Visited node with no carved midpoint to it
        floor.cell((1, 3)).is_visited = True

        self.assertEqual(longest_path(floor, (1, 1)), [(1, 1), (3, 1)])

    def test_single_node(self):
        floor = FloorGrid(level=0, size_x=1, size_z=1)
        floor.cell((1, 1)).is_visited = True

        self.assertEqual(find_furthest_point(floor, (1, 1)), [(1, 1)])

    def test_result_is_stable_on_a_carved_tree(self):
        floor = FloorGrid(level=0, size_x=5, size_z=5)
        carve_floor(floor, random.Random(42))

        first = longest_path(floor, (1, 1))
        second = longest_path(floor, (1, 1))
        self.assertEqual(first, second)
        self.assertEqual(first[0], (1, 1))
        self.assertEqual(len(first), len(set(first)))
        for a, b in zip(first, first[1:]):
            self.assertTrue(floor.is_connected(a, b))

    def test_far_end_is_a_leaf(self):
        floor = FloorGrid(level=0, size_x=4, size_z=4)
        carve_floor(floor, random.Random(7))

        before, end = find_furthest_point(floor, (1, 1))
        connected = [n for n in floor.neighbor_nodes(end) if floor.is_connected(end, n)]
        self.assertEqual(connected, [before])


if __name__ == '__main__':
    unittest.main()
