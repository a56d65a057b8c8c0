"""Shared dataclasses for the search pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from cube_sim.cube import CubeModel
from cube_sim.geometry import Turn
from cube_sim.notation import algorithm_string

Heuristic = Callable[[CubeModel], float]


@dataclass
class SearchNode:
    state: CubeModel | None  # None once the node has been processed
    parent: int | None  # arena index
    action: Turn | None
    path_cost: int
    evaluation: int | None = None  # cached f, filled once


@dataclass
class SearchResult:
    solution: list[Turn] | None
    solution_len: int | None
    node_visited: int
    wall_time: float  # seconds

    @property
    def solved(self) -> bool:
        return self.solution is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "solution": None if self.solution is None else algorithm_string(self.solution),
            "solution_len": self.solution_len,
            "node_visited": self.node_visited,
            "wall_time_ns": int(self.wall_time * 1e9),
        }

    def __str__(self) -> str:
        solution = "Can't find solution" if self.solution is None else algorithm_string(self.solution)
        return (
            f"Solution: {solution}\t"
            f"Wall Time: {int(self.wall_time * 1e9)} ns\t"
            f"Node Visited: {self.node_visited}"
        )
