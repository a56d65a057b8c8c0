import unittest
from collections import Counter

import numpy as np

from cube_sim.cube import CubeModel
from cube_sim.geometry import FaceDir
from cube_sim.notation import parse_algorithm


class TestSolvedOrientations(unittest.TestCase):
    def setUp(self):
        self.cubes = CubeModel.all_possible_solved_cubes(2)

    def test_there_are_24_solved_orientations(self):
        self.assertEqual(len(self.cubes), 24)
        for cube in self.cubes:
            self.assertTrue(cube.is_solved())

    def test_orientations_are_pairwise_distinct(self):
        for i, a in enumerate(self.cubes):
            self.assertEqual(a.hamming_distance(a), 0)
            for b in self.cubes[i + 1 :]:
                self.assertNotEqual(a, b)
                self.assertGreater(a.hamming_distance(b), 0)

    def test_initial_orientation_is_included_once(self):
        self.assertEqual(sum(cube == CubeModel(2) for cube in self.cubes), 1)

    def test_each_color_faces_front_four_times(self):
        fronts = Counter(int(cube.face(FaceDir.FRONT).colors[0, 0]) for cube in self.cubes)
        self.assertEqual(len(fronts), 6)
        self.assertTrue(all(n == 4 for n in fronts.values()))

    def test_opposite_layers_turned_together_give_a_listed_orientation(self):
        cube = CubeModel(2)
        cube.apply_algorithm(parse_algorithm("L R'"))
        self.assertTrue(cube.is_solved())
        self.assertNotEqual(cube, CubeModel(2))
        self.assertTrue(any(cube == solved for solved in self.cubes))

    def test_works_for_larger_sizes(self):
        cubes = CubeModel.all_possible_solved_cubes(3)
        self.assertEqual(len(cubes), 24)
        keys = {cube.stickers()[:, 0, 0].tobytes() for cube in cubes}
        self.assertEqual(len(keys), 24)
        self.assertTrue(all(np.all(c.stickers()[:, 1, 1] == c.stickers()[:, 0, 0]) for c in cubes))


if __name__ == "__main__":
    unittest.main()
