import argparse
import csv
from collections import defaultdict
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np


def parse_samples(csv_path: Path):
    """Mean nodes visited per (heuristic, scramble length) from an idastar samples CSV."""
    nodes = defaultdict(lambda: defaultdict(list))

    with open(csv_path, "r", newline="", encoding="utf-8") as f:
        for row in csv.DictReader(f):
            if not row["Solution Length"]:
                continue
            nodes[row["Heuristic Type"]][int(row["Scramble Length"])].append(int(row["Node Visited"]))

    curves = {}
    for name, per_depth in nodes.items():
        depths = np.array(sorted(per_depth), dtype=np.int64)
        means = np.array([np.mean(per_depth[d]) for d in depths], dtype=np.float64)
        curves[name] = (depths, means)
    return curves


def main():
    parser = argparse.ArgumentParser(description="Compare nodes visited by IDA* across heuristics")
    parser.add_argument("csv", nargs="+", help="idastar samples CSV files written by cube-stats")
    parser.add_argument("--output", default="compare_nodes_visited.png", help="Output image path")
    args = parser.parse_args()

    curves = {}
    for raw in args.csv:
        path = Path(raw)
        if not path.exists():
            raise FileNotFoundError(f"Samples file not found: {path}")
        curves.update(parse_samples(path))

    if not curves:
        raise RuntimeError("No solved samples found in the given files")

    plt.figure(figsize=(9, 5))
    for name, (depths, means) in sorted(curves.items()):
        plt.plot(depths, means, marker="o", linewidth=2, label=name)

    plt.xlabel("Scramble length")
    plt.ylabel("Nodes visited (mean)")
    plt.yscale("log")
    plt.title("IDA* nodes visited by heuristic")
    plt.grid(True)
    plt.legend()
    plt.tight_layout()

    out = Path(args.output)
    out.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(out, dpi=300)
    print(f"Saved: {out.resolve()}")


if __name__ == "__main__":
    main()
