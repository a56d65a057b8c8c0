"""Iterative-deepening A* over cube states, after Korf."""

from __future__ import annotations

import math
import time
from typing import Callable

from cube_sim.cube import CubeModel
from cube_sim.geometry import FaceDir, Turn, TurnDir

from .types import Heuristic, SearchNode, SearchResult

GIVE_UP_LIMIT = 28

# One face per axis is enough: the opposite faces give the same positions up to a
# whole-cube rotation, and the goal test accepts every orientation.
BRANCH_TURNS: tuple[Turn, ...] = tuple(
    Turn(face_dir, turn_dir)
    for face_dir in (FaceDir.RIGHT, FaceDir.UP, FaceDir.FRONT)
    for turn_dir in (TurnDir.CLOCKWISE, TurnDir.COUNTER_CLOCKWISE)
)


class SearchTree:
    """Arena of explored nodes; parents are referenced by index."""

    def __init__(self, root_state: CubeModel):
        self.nodes: list[SearchNode] = [SearchNode(state=root_state, parent=None, action=None, path_cost=0)]

    def __len__(self) -> int:
        return len(self.nodes)

    def evaluate(self, index: int, heuristic: Heuristic) -> int:
        node = self.nodes[index]
        if node.evaluation is not None:
            return node.evaluation
        h = math.ceil(heuristic(node.state))
        if node.parent is None:
            f = h
        else:
            # Keep f monotone along the path (Korf, p. 104).
            f = max(node.path_cost + h, self.evaluate(node.parent, heuristic))
        node.evaluation = f
        return f

    def expand(self, index: int) -> list[int]:
        parent = self.nodes[index]
        children: list[int] = []
        for turn in BRANCH_TURNS:
            if parent.action is not None and parent.action.is_reverse(turn):
                continue
            state = parent.state.copy()
            state.turn_layer(turn, 1)
            self.nodes.append(
                SearchNode(state=state, parent=index, action=turn, path_cost=parent.path_cost + 1)
            )
            children.append(len(self.nodes) - 1)
        return children

    def release(self, index: int) -> None:
        """Drop the state snapshot of a node that has been fully processed."""
        self.nodes[index].state = None

    def truncate(self, index: int) -> None:
        """
        Forget every node appended after `index`.

        Called with the node just popped off a depth-first stack: the stack holds
        increasing indices, so everything past the top belongs to subtrees that are
        already finished and is neither pending nor an ancestor of a pending node.
        """
        del self.nodes[index + 1 :]

    def path(self, index: int) -> list[Turn]:
        turns: list[Turn] = []
        node = self.nodes[index]
        while node.parent is not None:
            turns.append(node.action)
            node = self.nodes[node.parent]
        turns.reverse()
        return turns


def idastar(
    init_cube: CubeModel,
    heuristic: Heuristic,
    progress: Callable[[int], None] | None = None,
    give_up_limit: int = GIVE_UP_LIMIT,
) -> SearchResult:
    """
    Search for a turn sequence solving `init_cube`.

    `heuristic` must be a non-negative lower bound on the number of turns left; it is
    rounded up before use. Returns a failed result (no solution) once the threshold
    grows past `give_up_limit`. `progress`, if given, receives every threshold tried.
    """
    start_time = time.perf_counter()
    root_state = init_cube.copy()
    limit = SearchTree(root_state).evaluate(0, heuristic)
    node_visited = 0

    while limit <= give_up_limit:
        if progress is not None:
            progress(limit)

        tree = SearchTree(root_state)
        stack = [0]
        min_f: int | None = None

        while stack:
            index = stack.pop()
            tree.truncate(index)
            node_visited += 1
            f = tree.evaluate(index, heuristic)

            if f > limit:
                if min_f is None or f < min_f:
                    min_f = f
                tree.release(index)
                continue

            if tree.nodes[index].state.is_solved():
                path = tree.path(index)
                return SearchResult(
                    solution=path,
                    solution_len=len(path),
                    node_visited=node_visited,
                    wall_time=time.perf_counter() - start_time,
                )

            stack.extend(tree.expand(index))
            tree.release(index)

        if min_f is None:
            break
        limit = min_f

    return SearchResult(
        solution=None,
        solution_len=None,
        node_visited=node_visited,
        wall_time=time.perf_counter() - start_time,
    )
