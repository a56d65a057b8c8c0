"""Core N x N cube model: face turns, band rotation and whole-cube reorientation."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from .face import Face
from .geometry import (
    ALL_FACE_DIRS,
    BAND_REVERSED,
    INIT_CONFIG,
    MAX_SCRAMBLE_SIZE,
    CubeAxis,
    CubeContractError,
    FaceDir,
    Turn,
    TurnDir,
    positive_face_dir,
    surrounding_dirs,
)


class CubeModel:
    """Six faces plus the face direction each slot currently points to."""

    def __init__(self, size: int = 2):
        if size < 1:
            raise CubeContractError("Cube size must be at least 1")
        self.size = size
        self.faces: list[Face] = [Face(size, color) for _, color in INIT_CONFIG]
        self.dir_order: list[FaceDir] = [face_dir for face_dir, _ in INIT_CONFIG]

    def copy(self) -> CubeModel:
        clone = CubeModel.__new__(CubeModel)
        clone.size = self.size
        clone.faces = [face.copy() for face in self.faces]
        clone.dir_order = list(self.dir_order)
        return clone

    def _dir_index(self, face_dir: FaceDir) -> int:
        return self.dir_order.index(face_dir)

    def face(self, face_dir: FaceDir) -> Face:
        """Face currently pointing to `face_dir`."""
        return self.faces[self._dir_index(face_dir)]

    def stickers(self) -> np.ndarray:
        """Color ids with shape (6, size, size), ordered U D L R F B."""
        return np.stack([self.face(face_dir).colors for face_dir in ALL_FACE_DIRS])

    def _rotate_band(self, turn: Turn, layer: int) -> None:
        axis, rotate_dir = turn.face_dir.rotate_axis_and_dir(turn.turn_dir)
        turned_positive = turn.face_dir.is_positive
        reversed_dirs = BAND_REVERSED[(axis, rotate_dir)]

        def slice_index(face_dir: FaceDir) -> int:
            # A face axis along the rotation axis pointing away from the turned face means
            # the band sits at the start of that index.
            for axis_dir in face_dir.axes_order:
                if axis_dir.axis is axis and axis_dir.is_positive != turned_positive:
                    return layer - 1
            return self.size - layer

        def is_column(face_dir: FaceDir) -> bool:
            return face_dir.axes_order[0].axis is not axis

        cycle = surrounding_dirs(axis, rotate_dir)
        slots = [(d, slice_index(d), is_column(d)) for d in cycle]
        originals = [self.face(d).get_slice(i, col) for d, i, col in slots]

        for k, (face_dir, i, col) in enumerate(slots):
            incoming = originals[k - 1]
            if face_dir in reversed_dirs:
                incoming = incoming[::-1]
            self.face(face_dir).set_slice(i, col, incoming)

    def turn_layer(self, turn: Turn, layer: int = 1) -> None:
        """
        Turn `layer` (1 is the outermost) of the face `turn.face_dir`.

        Layer 1 also rotates the turned face's own grid. The deepest layer (`layer == size`)
        is the opposite face's outer layer, so it rotates that face's grid, in the reverse
        sense as seen from outside it.
        """
        if layer < 1:
            raise CubeContractError("layer must be nonzero; layers are counted from 1")
        if layer > self.size:
            raise CubeContractError(f"layer {layer} is deeper than cube size {self.size}")
        if layer == 1:
            self.face(turn.face_dir).rotate(turn.turn_dir)
        if layer == self.size:
            self.face(turn.face_dir.opposite).rotate(turn.turn_dir.reversed())
        self._rotate_band(turn, layer)

    def turn(self, turn: Turn) -> None:
        self.turn_layer(turn, 1)

    def apply_algorithm(self, turns: Iterable[Turn]) -> None:
        for turn in turns:
            self.turn_layer(turn, 1)

    def rotate_whole_cube(self, axis: CubeAxis, turn_dir: TurnDir) -> None:
        """
        Relabel face directions; sticker grids stay as they are.

        Only a true reorientation for cubes whose faces are single-colored. Use
        `turn_whole_cube` to reorient a scrambled cube.
        """
        self.dir_order = [face_dir.rotated(axis, turn_dir) for face_dir in self.dir_order]

    def turn_whole_cube(self, axis: CubeAxis, turn_dir: TurnDir) -> None:
        """Physically rotate the cube about `axis` by turning every layer (sense seen from the positive end)."""
        turn = Turn(positive_face_dir(axis), turn_dir)
        for layer in range(1, self.size + 1):
            self.turn_layer(turn, layer)

    def is_solved(self) -> bool:
        return all(face.is_single_color() for face in self.faces)

    def hamming_distance(self, other: CubeModel) -> int:
        if self.size != other.size:
            raise CubeContractError("Can't get hamming distance between cubes of different sizes")
        return int(np.count_nonzero(self.stickers() != other.stickers()))

    def scramble(
        self,
        k: int,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> list[Turn]:
        """Apply `k` random quarter turns, never undoing the previous one. Returns the turns."""
        if self.size > MAX_SCRAMBLE_SIZE:
            raise CubeContractError(
                f"Scrambling is only supported up to size {MAX_SCRAMBLE_SIZE}, got {self.size}"
            )
        if not isinstance(k, int) or k < 0:
            raise CubeContractError("Scramble length must be a non-negative integer")

        if rng is None:
            rng = np.random.default_rng(seed)
        turns: list[Turn] = []
        prev_turn: Turn | None = None
        for _ in range(k):
            turn = Turn.random(rng)
            while prev_turn is not None and turn.is_reverse(prev_turn):
                turn = Turn.random(rng)
            self.turn_layer(turn, 1)
            turns.append(turn)
            prev_turn = turn
        return turns

    @staticmethod
    def all_possible_solved_cubes(size: int) -> list[CubeModel]:
        """The 24 orientations of a solved cube: each face to the front, spun four ways."""
        result: list[CubeModel] = []
        cube = CubeModel(size)

        def collect_spins() -> None:
            for _ in range(4):
                result.append(cube.copy())
                cube.rotate_whole_cube(CubeAxis.Z, TurnDir.CLOCKWISE)

        for _ in range(4):
            collect_spins()
            cube.rotate_whole_cube(CubeAxis.Y, TurnDir.CLOCKWISE)
        cube.rotate_whole_cube(CubeAxis.X, TurnDir.CLOCKWISE)
        collect_spins()
        cube.rotate_whole_cube(CubeAxis.X, TurnDir.CLOCKWISE)
        cube.rotate_whole_cube(CubeAxis.X, TurnDir.CLOCKWISE)
        collect_spins()
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CubeModel):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self.stickers(), other.stickers()))

    def __repr__(self) -> str:
        return f"CubeModel(size={self.size}, solved={self.is_solved()})"
