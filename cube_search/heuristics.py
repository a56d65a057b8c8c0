"""Admissible Hamming-distance heuristics for IDA* on the 2x2."""

from __future__ import annotations

import threading

import numpy as np

from cube_sim.cube import CubeModel

from .types import Heuristic

# Most stickers a single quarter turn can move on the 2x2.
MAX_STICKERS_PER_TURN = 12.0


def single_l0(cube: CubeModel) -> float:
    """Hamming distance to the solved cube in its initial orientation, in turns."""
    return cube.hamming_distance(CubeModel(cube.size)) / MAX_STICKERS_PER_TURN


class SolvedOrientations:
    """
    The 24 orientations of a solved cube for one size, stacked as
    (24, 6, size, size) color ids. Built once; read-only afterwards.
    """

    _shared: dict[int, SolvedOrientations] = {}
    _shared_lock = threading.Lock()

    def __init__(self, size: int):
        self.size = size
        self.cubes = CubeModel.all_possible_solved_cubes(size)
        self.stickers = np.stack([cube.stickers() for cube in self.cubes])
        self.stickers.flags.writeable = False

    @classmethod
    def for_size(cls, size: int) -> SolvedOrientations:
        with cls._shared_lock:
            context = cls._shared.get(size)
            if context is None:
                context = cls(size)
                cls._shared[size] = context
            return context

    def __len__(self) -> int:
        return len(self.cubes)

    def min_hamming_distance(self, cube: CubeModel) -> int:
        if cube.size != self.size:
            raise ValueError(f"Context holds size {self.size} orientations, got cube of size {cube.size}")
        mismatches = self.stickers != cube.stickers()[np.newaxis]
        return int(mismatches.reshape(len(self.cubes), -1).sum(axis=1).min())


class AllOrientationsL0:
    """Minimum Hamming distance over all solved orientations, in turns."""

    def __init__(self, context: SolvedOrientations):
        self.context = context

    def __call__(self, cube: CubeModel) -> float:
        return self.context.min_hamming_distance(cube) / MAX_STICKERS_PER_TURN


def all_l0(cube: CubeModel) -> float:
    return AllOrientationsL0(SolvedOrientations.for_size(cube.size))(cube)


HEURISTICS = {
    "single_l0": single_l0,
    "all_l0": all_l0,
}


def get_heuristic(name: str) -> Heuristic:
    try:
        return HEURISTICS[name]
    except KeyError:
        raise ValueError(f"Unknown heuristic '{name}'; choose from {', '.join(HEURISTICS)}") from None
