"""Offline experiments: heuristic values and IDA* runs over scramble depths."""

from __future__ import annotations

import argparse
import csv
import json
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
from tqdm import tqdm

from cube_sim.cube import CubeModel
from cube_sim.notation import algorithm_string

from .heuristics import HEURISTICS, get_heuristic
from .idastar import GIVE_UP_LIMIT, idastar

matplotlib.use("Agg")

HEURISTIC_SAMPLE_FIELDS = ["Scramble", "Scramble Length", "Heuristic Type", "Heuristic", "Wall Time (ns)"]
IDASTAR_SAMPLE_FIELDS = [
    "Scramble",
    "Scramble Length",
    "Solution",
    "Solution Length",
    "Heuristic Type",
    "Wall Time (ns)",
    "Node Visited",
]


@dataclass
class HeuristicDepthMetrics:
    scramble_depth: int
    samples: int
    heuristic_min: float
    heuristic_mean: float
    heuristic_max: float
    wall_time_ns_mean: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "scramble_depth": self.scramble_depth,
            "samples": self.samples,
            "heuristic_min": self.heuristic_min,
            "heuristic_mean": self.heuristic_mean,
            "heuristic_max": self.heuristic_max,
            "wall_time_ns_mean": self.wall_time_ns_mean,
        }


@dataclass
class IdastarDepthMetrics:
    scramble_depth: int
    samples: int
    solved_count: int
    solution_len_mean: float | None
    solution_len_max: float | None
    node_visited_mean: float
    node_visited_max: float
    wall_time_ns_mean: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "scramble_depth": self.scramble_depth,
            "samples": self.samples,
            "solved_count": self.solved_count,
            "solution_len_mean": self.solution_len_mean,
            "solution_len_max": self.solution_len_max,
            "node_visited_mean": self.node_visited_mean,
            "node_visited_max": self.node_visited_max,
            "wall_time_ns_mean": self.wall_time_ns_mean,
        }


def _log(message: str, bar: tqdm | None = None) -> None:
    ts = datetime.now().strftime("%H:%M:%S")
    text = f"[{ts}] {message}"
    if bar is not None:
        bar.write(text)
    else:
        print(text, flush=True)


def _aggregate_heuristic(scramble_depth: int, values: np.ndarray, times_ns: np.ndarray) -> HeuristicDepthMetrics:
    values = np.asarray(values, dtype=np.float64)
    times_ns = np.asarray(times_ns, dtype=np.float64)
    return HeuristicDepthMetrics(
        scramble_depth=scramble_depth,
        samples=int(values.size),
        heuristic_min=float(np.min(values)),
        heuristic_mean=float(np.mean(values)),
        heuristic_max=float(np.max(values)),
        wall_time_ns_mean=float(np.mean(times_ns)),
    )


def _aggregate_idastar(
    scramble_depth: int,
    solution_lens: list[int | None],
    nodes: np.ndarray,
    times_ns: np.ndarray,
) -> IdastarDepthMetrics:
    nodes = np.asarray(nodes, dtype=np.float64)
    times_ns = np.asarray(times_ns, dtype=np.float64)
    solved = np.array([n for n in solution_lens if n is not None], dtype=np.float64)
    return IdastarDepthMetrics(
        scramble_depth=scramble_depth,
        samples=len(solution_lens),
        solved_count=int(solved.size),
        solution_len_mean=float(np.mean(solved)) if solved.size else None,
        solution_len_max=float(np.max(solved)) if solved.size else None,
        node_visited_mean=float(np.mean(nodes)),
        node_visited_max=float(np.max(nodes)),
        wall_time_ns_mean=float(np.mean(times_ns)),
    )


def _append_samples(path: Path, fieldnames: list[str], rows: list[list[Any]]) -> None:
    """Append rows, writing the header only when the file is new."""
    file_exists = path.exists()
    with path.open("a", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        if not file_exists:
            writer.writerow(fieldnames)
        writer.writerows(rows)


def _save_metrics_json(path: Path, args: argparse.Namespace, metrics: list[Any]) -> None:
    payload = {
        "config": {
            "heuristic": args.heuristic,
            "depth_min": int(args.depth_min),
            "depth_max": int(args.depth_max),
            "samples_per_depth": int(args.samples_per_depth),
            "seed": args.seed,
        },
        "metrics": [m.to_dict() for m in metrics],
    }
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)


def _plot_heuristic(metrics: list[HeuristicDepthMetrics], path: Path, heuristic_name: str) -> None:
    depths = np.array([m.scramble_depth for m in metrics], dtype=np.int64)
    fig = plt.figure(figsize=(10, 5))
    ax = fig.add_subplot(111)
    ax.plot(depths, [m.heuristic_mean for m in metrics], marker="o", linewidth=2.0, label="Mean")
    ax.plot(depths, [m.heuristic_min for m in metrics], linestyle="--", alpha=0.7, label="Min")
    ax.plot(depths, [m.heuristic_max for m in metrics], linestyle="--", alpha=0.7, label="Max")
    ax.plot(depths, depths, color="gray", alpha=0.4, label="Scramble depth")
    ax.set_title(f"Heuristic {heuristic_name} vs Scramble Depth")
    ax.set_xlabel("Scramble depth")
    ax.set_ylabel("Heuristic value (turns)")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="best")
    fig.tight_layout()
    fig.savefig(path, dpi=160)
    plt.close(fig)


def _plot_idastar(metrics: list[IdastarDepthMetrics], path: Path, heuristic_name: str) -> None:
    depths = np.array([m.scramble_depth for m in metrics], dtype=np.int64)
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))
    ax1.plot(depths, [m.node_visited_mean for m in metrics], marker="o", linewidth=2.0)
    ax1.set_yscale("log")
    ax1.set_title("Nodes Visited (mean)")
    ax1.set_xlabel("Scramble depth")
    ax1.grid(True, alpha=0.3)
    ax2.plot(depths, [m.wall_time_ns_mean / 1e6 for m in metrics], marker="o", linewidth=2.0)
    ax2.set_yscale("log")
    ax2.set_title("Wall Time (ms, mean)")
    ax2.set_xlabel("Scramble depth")
    ax2.grid(True, alpha=0.3)
    fig.suptitle(f"IDA* with {heuristic_name}")
    fig.tight_layout()
    fig.savefig(path, dpi=160)
    plt.close(fig)


def _validate_args(args: argparse.Namespace) -> None:
    if args.depth_min < 0 or args.depth_max < args.depth_min:
        raise ValueError("Require 0 <= depth_min <= depth_max")
    if args.samples_per_depth < 1:
        raise ValueError("--samples-per-depth must be >= 1")
    get_heuristic(args.heuristic)


def _depth_iter(args: argparse.Namespace, desc: str):
    depths = range(int(args.depth_min), int(args.depth_max) + 1)
    if args.progress == "on":
        return tqdm(depths, desc=desc, unit="depth")
    return depths


def check_heuristic(args: argparse.Namespace) -> dict[str, Any]:
    """Sample the heuristic on random scrambles of every depth in range."""
    _validate_args(args)
    heuristic = get_heuristic(args.heuristic)
    rng = np.random.default_rng(args.seed)
    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    prefix = f"{args.output_prefix}_heuristic"

    _log(
        "experiment_init kind=heuristic "
        f"heuristic={args.heuristic} depth_range={args.depth_min}..{args.depth_max} "
        f"samples_per_depth={args.samples_per_depth}"
    )

    rows: list[list[Any]] = []
    metrics: list[HeuristicDepthMetrics] = []
    bar = _depth_iter(args, "heuristic")
    for depth in bar:
        values = np.zeros((args.samples_per_depth,), dtype=np.float64)
        times_ns = np.zeros((args.samples_per_depth,), dtype=np.int64)
        for i in range(args.samples_per_depth):
            cube = CubeModel(2)
            scramble = cube.scramble(depth, rng=rng)
            t0 = time.perf_counter_ns()
            values[i] = heuristic(cube)
            times_ns[i] = time.perf_counter_ns() - t0
            rows.append([algorithm_string(scramble), depth, args.heuristic, float(values[i]), int(times_ns[i])])
        metrics.append(_aggregate_heuristic(depth, values, times_ns))

    samples_path = output_dir / f"{prefix}_samples.csv"
    json_path = output_dir / f"{prefix}_metrics.json"
    plot_path = output_dir / f"{prefix}.png"
    _append_samples(samples_path, HEURISTIC_SAMPLE_FIELDS, rows)
    _save_metrics_json(json_path, args, metrics)
    _plot_heuristic(metrics, plot_path, args.heuristic)

    _log(f"experiment_summary kind=heuristic samples={len(rows)} csv={samples_path} json={json_path} plot={plot_path}")
    return {"metrics": metrics, "csv": samples_path, "json": json_path, "plot": plot_path}


def check_idastar(args: argparse.Namespace) -> dict[str, Any]:
    """Scramble and solve with IDA* for every depth in range."""
    _validate_args(args)
    heuristic = get_heuristic(args.heuristic)
    rng = np.random.default_rng(args.seed)
    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    prefix = f"{args.output_prefix}_idastar"

    _log(
        "experiment_init kind=idastar "
        f"heuristic={args.heuristic} depth_range={args.depth_min}..{args.depth_max} "
        f"samples_per_depth={args.samples_per_depth} give_up_limit={args.give_up_limit}"
    )

    rows: list[list[Any]] = []
    metrics: list[IdastarDepthMetrics] = []
    bar = _depth_iter(args, "idastar")
    for depth in bar:
        solution_lens: list[int | None] = []
        nodes = np.zeros((args.samples_per_depth,), dtype=np.int64)
        times_ns = np.zeros((args.samples_per_depth,), dtype=np.int64)
        for i in range(args.samples_per_depth):
            cube = CubeModel(2)
            scramble = cube.scramble(depth, rng=rng)
            result = idastar(cube, heuristic, give_up_limit=args.give_up_limit)
            if not result.solved:
                _log(f"search_gave_up depth={depth} scramble={algorithm_string(scramble)}", bar if args.progress == "on" else None)
            out = result.to_dict()
            solution_lens.append(result.solution_len)
            nodes[i] = result.node_visited
            times_ns[i] = out["wall_time_ns"]
            rows.append(
                [
                    algorithm_string(scramble),
                    depth,
                    out["solution"] or "",
                    "" if result.solution_len is None else result.solution_len,
                    args.heuristic,
                    out["wall_time_ns"],
                    result.node_visited,
                ]
            )
        metrics.append(_aggregate_idastar(depth, solution_lens, nodes, times_ns))

    samples_path = output_dir / f"{prefix}_samples.csv"
    json_path = output_dir / f"{prefix}_metrics.json"
    plot_path = output_dir / f"{prefix}.png"
    _append_samples(samples_path, IDASTAR_SAMPLE_FIELDS, rows)
    _save_metrics_json(json_path, args, metrics)
    _plot_idastar(metrics, plot_path, args.heuristic)

    solved_total = sum(m.solved_count for m in metrics)
    _log(
        f"experiment_summary kind=idastar solved={solved_total}/{len(rows)} "
        f"csv={samples_path} json={json_path} plot={plot_path}"
    )
    return {"metrics": metrics, "csv": samples_path, "json": json_path, "plot": plot_path}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Heuristic and IDA* experiments on the 2x2 cube")
    sub = p.add_subparsers(dest="kind", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--heuristic", default="all_l0", choices=sorted(HEURISTICS))
    common.add_argument("--depth-min", type=int, default=1)
    common.add_argument("--seed", type=int, default=None)
    common.add_argument("--output-dir", default="stats_reports")
    common.add_argument("--output-prefix", default="cube")
    common.add_argument("--progress", default="on", choices=["on", "off"])

    heuristic = sub.add_parser("heuristic", parents=[common], help="Sample heuristic values")
    heuristic.add_argument("--depth-max", type=int, default=29)
    heuristic.add_argument("--samples-per-depth", type=int, default=1000)

    search = sub.add_parser("idastar", parents=[common], help="Run IDA* on random scrambles")
    search.add_argument("--depth-max", type=int, default=9)
    search.add_argument("--samples-per-depth", type=int, default=16)
    search.add_argument("--give-up-limit", type=int, default=GIVE_UP_LIMIT)
    return p


def main() -> None:
    args = build_parser().parse_args()
    if args.kind == "heuristic":
        check_heuristic(args)
    else:
        check_idastar(args)


if __name__ == "__main__":
    main()
