import unittest

from cube_search.heuristics import all_l0, single_l0
from cube_search.idastar import BRANCH_TURNS, SearchTree, idastar
from cube_sim.cube import CubeModel
from cube_sim.face import Face
from cube_sim.geometry import Color, FaceDir, Turn, TurnDir
from cube_sim.notation import parse_algorithm

HEURISTICS = {"single_l0": single_l0, "all_l0": all_l0}


class TestIdaStar(unittest.TestCase):
    def test_solved_cube_needs_no_turns(self):
        for name, heuristic in HEURISTICS.items():
            result = idastar(CubeModel(2), heuristic)
            self.assertEqual(result.solution, [], msg=name)
            self.assertEqual(result.solution_len, 0, msg=name)
            self.assertEqual(result.node_visited, 1, msg=name)
            self.assertTrue(result.solved)

    def test_single_turn_is_undone_by_its_reverse(self):
        for name, heuristic in HEURISTICS.items():
            for turn in BRANCH_TURNS:
                cube = CubeModel(2)
                cube.turn(turn)
                result = idastar(cube, heuristic)
                self.assertEqual(result.solution, [turn.reversed()], msg=f"{name} {turn}")
                self.assertEqual(result.solution_len, 1)

    def test_single_turn_of_other_faces_takes_one_turn(self):
        for face_dir in (FaceDir.LEFT, FaceDir.DOWN, FaceDir.BACK):
            for turn_dir in TurnDir:
                cube = CubeModel(2)
                cube.turn(Turn(face_dir, turn_dir))
                result = idastar(cube, all_l0)
                self.assertEqual(result.solution_len, 1, msg=f"{face_dir} {turn_dir}")
                cube.apply_algorithm(result.solution)
                self.assertTrue(cube.is_solved())

    def test_random_scrambles_are_solved_optimally(self):
        for seed in range(6):
            for k in (2, 3, 4):
                cube = CubeModel(2)
                scramble = cube.scramble(k, seed=seed)
                result = idastar(cube, all_l0)
                self.assertTrue(result.solved, msg=f"seed={seed} scramble={scramble}")
                self.assertLessEqual(result.solution_len, k)
                cube.apply_algorithm(result.solution)
                self.assertTrue(cube.is_solved())

    def test_single_goal_heuristic_on_branch_turn_scrambles(self):
        cube = CubeModel(2)
        cube.apply_algorithm(parse_algorithm("R U F'"))
        result = idastar(cube, single_l0)
        self.assertTrue(result.solved)
        self.assertLessEqual(result.solution_len, 3)
        cube.apply_algorithm(result.solution)
        self.assertTrue(cube.is_solved())

    def test_input_cube_is_not_mutated(self):
        cube = CubeModel(2)
        cube.apply_algorithm(parse_algorithm("R U"))
        snapshot = cube.copy()
        idastar(cube, all_l0)
        self.assertEqual(cube, snapshot)

    def test_give_up_limit_returns_failure(self):
        cube = CubeModel(2)
        cube.apply_algorithm(parse_algorithm("R U F"))
        result = idastar(cube, all_l0, give_up_limit=0)
        self.assertFalse(result.solved)
        self.assertIsNone(result.solution)
        self.assertIsNone(result.solution_len)
        self.assertEqual(result.node_visited, 0)
        self.assertGreaterEqual(result.wall_time, 0.0)

    def test_exhausted_threshold_reports_nodes(self):
        cube = CubeModel(2)
        cube.apply_algorithm(parse_algorithm("R U"))
        result = idastar(cube, lambda c: 0.0, give_up_limit=1)
        self.assertFalse(result.solved)
        self.assertGreater(result.node_visited, 1)

    def test_progress_reports_growing_thresholds(self):
        cube = CubeModel(2)
        cube.apply_algorithm(parse_algorithm("R U' F"))
        limits: list[int] = []
        result = idastar(cube, all_l0, progress=limits.append)
        self.assertTrue(result.solved)
        self.assertTrue(limits)
        self.assertEqual(limits, sorted(limits))
        self.assertLessEqual(limits[-1], result.solution_len)

    def test_result_formatting(self):
        cube = CubeModel(2)
        cube.turn(Turn(FaceDir.UP))
        result = idastar(cube, all_l0)
        self.assertIn("Solution: U'", str(result))
        self.assertIn("Node Visited:", str(result))
        out = result.to_dict()
        self.assertEqual(out["solution"], "U'")
        self.assertEqual(out["solution_len"], 1)


class TestSearchTree(unittest.TestCase):
    def test_evaluation_is_cached(self):
        calls = []

        def heuristic(cube):
            calls.append(1)
            return 1.5

        tree = SearchTree(CubeModel(2))
        self.assertEqual(tree.evaluate(0, heuristic), 2)
        self.assertEqual(tree.evaluate(0, heuristic), 2)
        self.assertEqual(len(calls), 1)

    def test_evaluation_never_drops_below_parent(self):
        root = CubeModel(2)
        root.turn(Turn(FaceDir.RIGHT))

        def inconsistent(cube):
            return 5.0 if cube == root else 0.0

        tree = SearchTree(root)
        root_f = tree.evaluate(0, inconsistent)
        self.assertEqual(root_f, 5)
        for child in tree.expand(0):
            self.assertEqual(tree.evaluate(child, inconsistent), 5)

    def test_children_skip_reverse_of_last_action(self):
        tree = SearchTree(CubeModel(2))
        children = tree.expand(0)
        self.assertEqual(len(children), 6)
        r_child = next(i for i in children if tree.nodes[i].action == Turn(FaceDir.RIGHT))
        grandchildren = tree.expand(r_child)
        self.assertEqual(len(grandchildren), 5)
        actions = [tree.nodes[i].action for i in grandchildren]
        self.assertNotIn(Turn(FaceDir.RIGHT, TurnDir.COUNTER_CLOCKWISE), actions)
        for i in grandchildren:
            self.assertEqual(tree.nodes[i].path_cost, 2)
            self.assertEqual(tree.nodes[i].parent, r_child)

    def test_truncate_drops_finished_subtrees(self):
        tree = SearchTree(CubeModel(2))
        children = tree.expand(0)
        last = children[-1]
        grandchildren = tree.expand(last)
        self.assertEqual(len(tree), 1 + 6 + 5)

        tree.truncate(children[-2])
        self.assertEqual(len(tree), children[-2] + 1)
        self.assertNotIn(grandchildren[0], range(len(tree)))
        self.assertEqual(tree.path(children[-2]), [tree.nodes[children[-2]].action])

    def test_arena_stays_bounded_by_depth(self):
        tree_sizes = []
        original_evaluate = SearchTree.evaluate

        def recording_evaluate(self, index, heuristic):
            tree_sizes.append(len(self.nodes))
            return original_evaluate(self, index, heuristic)

        # One recolored sticker: no turn sequence reaches a solved state.
        cube = CubeModel(2)
        grid = cube.face(FaceDir.UP).colors.copy()
        grid[0, 0] = Color.WHITE
        cube.faces[cube.dir_order.index(FaceDir.UP)] = Face.from_array(grid)
        SearchTree.evaluate = recording_evaluate
        try:
            result = idastar(cube, lambda c: 0.0, give_up_limit=3)
        finally:
            SearchTree.evaluate = original_evaluate

        self.assertFalse(result.solved)
        self.assertGreater(result.node_visited, 100)
        # Root, its six children, then five per deeper level on the current path.
        self.assertLessEqual(max(tree_sizes), 1 + 6 + 5 * 3)

    def test_path_walks_parent_links(self):
        tree = SearchTree(CubeModel(2))
        first = tree.expand(0)[0]
        second = tree.expand(first)[-1]
        self.assertEqual(tree.path(second), [tree.nodes[first].action, tree.nodes[second].action])
        self.assertEqual(tree.path(0), [])


if __name__ == "__main__":
    unittest.main()
