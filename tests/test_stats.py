import argparse
import csv
import importlib.util
import json
import tempfile
import unittest
from pathlib import Path

import numpy as np

from cube_search.stats import _aggregate_heuristic, _aggregate_idastar, build_parser, check_heuristic, check_idastar


def make_args(output_dir: str, **overrides) -> argparse.Namespace:
    values = dict(
        heuristic="all_l0",
        depth_min=1,
        depth_max=2,
        samples_per_depth=3,
        seed=123,
        output_dir=output_dir,
        output_prefix="smoke",
        progress="off",
        give_up_limit=28,
    )
    values.update(overrides)
    return argparse.Namespace(**values)


class TestStats(unittest.TestCase):
    def test_parser_defaults(self):
        args = build_parser().parse_args(["heuristic"])
        self.assertEqual(args.depth_min, 1)
        self.assertEqual(args.depth_max, 29)
        self.assertEqual(args.samples_per_depth, 1000)
        self.assertEqual(args.progress, "on")

        args = build_parser().parse_args(["idastar", "--heuristic", "single_l0"])
        self.assertEqual(args.depth_max, 9)
        self.assertEqual(args.samples_per_depth, 16)
        self.assertEqual(args.give_up_limit, 28)
        self.assertEqual(args.heuristic, "single_l0")

    def test_heuristic_aggregation(self):
        m = _aggregate_heuristic(3, np.array([0.5, 1.0, 1.5]), np.array([10, 20, 30]))
        self.assertEqual(m.samples, 3)
        self.assertAlmostEqual(m.heuristic_min, 0.5)
        self.assertAlmostEqual(m.heuristic_mean, 1.0)
        self.assertAlmostEqual(m.heuristic_max, 1.5)
        self.assertAlmostEqual(m.wall_time_ns_mean, 20.0)

    def test_idastar_aggregation(self):
        m = _aggregate_idastar(4, [2, None, 4], np.array([10, 100, 40]), np.array([5, 50, 20]))
        self.assertEqual(m.samples, 3)
        self.assertEqual(m.solved_count, 2)
        self.assertAlmostEqual(m.solution_len_mean, 3.0)
        self.assertAlmostEqual(m.solution_len_max, 4.0)
        self.assertAlmostEqual(m.node_visited_mean, 50.0)
        self.assertAlmostEqual(m.node_visited_max, 100.0)

        empty = _aggregate_idastar(5, [None], np.array([7]), np.array([1]))
        self.assertIsNone(empty.solution_len_mean)
        self.assertIsNone(empty.solution_len_max)

    def test_heuristic_experiment_writes_artifacts(self):
        with tempfile.TemporaryDirectory() as td:
            out = check_heuristic(make_args(td, heuristic="single_l0"))
            self.assertTrue(Path(out["csv"]).exists())
            self.assertTrue(Path(out["json"]).exists())
            self.assertTrue(Path(out["plot"]).exists())
            self.assertEqual(len(out["metrics"]), 2)

            with open(out["json"], encoding="utf-8") as f:
                payload = json.load(f)
            self.assertEqual(payload["config"]["heuristic"], "single_l0")
            self.assertEqual(len(payload["metrics"]), 2)

    def test_idastar_experiment_solves_and_appends(self):
        with tempfile.TemporaryDirectory() as td:
            args = make_args(td)
            out = check_idastar(args)
            for m in out["metrics"]:
                self.assertEqual(m.solved_count, m.samples)
                self.assertLessEqual(m.solution_len_max, m.scramble_depth)

            check_idastar(args)
            with open(out["csv"], newline="", encoding="utf-8") as f:
                rows = list(csv.reader(f))
            self.assertEqual(rows[0][0], "Scramble")
            self.assertEqual(sum(1 for row in rows if row[0] == "Scramble"), 1)
            self.assertEqual(len(rows), 1 + 2 * 2 * 3)

    def test_compare_script_reads_samples(self):
        script = Path(__file__).resolve().parents[1] / "scripts" / "plot_heuristic_compare.py"
        spec = importlib.util.spec_from_file_location("plot_heuristic_compare", script)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)

        with tempfile.TemporaryDirectory() as td:
            check_idastar(make_args(td, heuristic="single_l0", samples_per_depth=2))
            out = check_idastar(make_args(td, samples_per_depth=2))
            curves = module.parse_samples(Path(out["csv"]))
            self.assertEqual(set(curves), {"single_l0", "all_l0"})
            depths, means = curves["all_l0"]
            self.assertEqual(depths.tolist(), [1, 2])
            self.assertTrue(np.all(means >= 1.0))

    def test_invalid_ranges_raise(self):
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(ValueError):
                check_idastar(make_args(td, depth_min=3, depth_max=2))
            with self.assertRaises(ValueError):
                check_heuristic(make_args(td, samples_per_depth=0))
            with self.assertRaises(ValueError):
                check_heuristic(make_args(td, heuristic="nope"))


if __name__ == "__main__":
    unittest.main()
