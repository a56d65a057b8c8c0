"""Geometry primitives for the twisty-cube model: colors, axes, face directions and turns."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

import numpy as np

MAX_SCRAMBLE_SIZE = 2


class CubeContractError(ValueError):
    """Raised when a cube operation is called with arguments that break its contract."""


class Color(IntEnum):
    WHITE = 0
    RED = 1
    BLUE = 2
    YELLOW = 3
    ORANGE = 4
    GREEN = 5

    @property
    def letter(self) -> str:
        return self.name[0]


class TurnDir(Enum):
    CLOCKWISE = "cw"
    COUNTER_CLOCKWISE = "ccw"

    def reversed(self) -> TurnDir:
        if self is TurnDir.CLOCKWISE:
            return TurnDir.COUNTER_CLOCKWISE
        return TurnDir.CLOCKWISE


class CubeAxis(Enum):
    """X goes left to right, Y bottom to top, Z back to front."""

    X = "x"
    Y = "y"
    Z = "z"


class FaceDir(Enum):
    UP = "U"
    DOWN = "D"
    LEFT = "L"
    RIGHT = "R"
    FRONT = "F"
    BACK = "B"

    @property
    def letter(self) -> str:
        return self.value

    @property
    def axis(self) -> CubeAxis:
        return FACE_DIR_TABLE[self][0]

    @property
    def is_positive(self) -> bool:
        return FACE_DIR_TABLE[self][1]

    @property
    def axes_order(self) -> tuple[FaceDir, FaceDir]:
        """Directions the row index and the column index of this face's grid point to."""
        return FACE_DIR_TABLE[self][2]

    @property
    def opposite(self) -> FaceDir:
        return _OPPOSITE[self]

    def rotate_axis_and_dir(self, turn_dir: TurnDir) -> tuple[CubeAxis, TurnDir]:
        """Axis and rotation sense (seen from the positive end) of turning this face."""
        if self.is_positive:
            return self.axis, turn_dir
        return self.axis, turn_dir.reversed()

    def rotated(self, axis: CubeAxis, turn_dir: TurnDir) -> FaceDir:
        """Direction this one points to after rotating the whole cube about `axis`."""
        cycle = surrounding_dirs(axis, turn_dir)
        if self not in cycle:
            return self
        return cycle[(cycle.index(self) + 1) % 4]


# Face direction -> (axis, positive, (row direction, column direction)).
# Grids are indexed top to bottom and left to right as seen from outside the face.
FACE_DIR_TABLE: dict[FaceDir, tuple[CubeAxis, bool, tuple[FaceDir, FaceDir]]] = {
    FaceDir.UP: (CubeAxis.Y, True, (FaceDir.FRONT, FaceDir.RIGHT)),
    FaceDir.DOWN: (CubeAxis.Y, False, (FaceDir.BACK, FaceDir.RIGHT)),
    FaceDir.LEFT: (CubeAxis.X, False, (FaceDir.DOWN, FaceDir.FRONT)),
    FaceDir.RIGHT: (CubeAxis.X, True, (FaceDir.DOWN, FaceDir.BACK)),
    FaceDir.FRONT: (CubeAxis.Z, True, (FaceDir.DOWN, FaceDir.RIGHT)),
    FaceDir.BACK: (CubeAxis.Z, False, (FaceDir.DOWN, FaceDir.LEFT)),
}

ALL_FACE_DIRS: tuple[FaceDir, ...] = (
    FaceDir.UP,
    FaceDir.DOWN,
    FaceDir.LEFT,
    FaceDir.RIGHT,
    FaceDir.FRONT,
    FaceDir.BACK,
)
FACE_DIR_INDEX = {face_dir: i for i, face_dir in enumerate(ALL_FACE_DIRS)}
FACE_DIR_BY_LETTER = {face_dir.letter: face_dir for face_dir in ALL_FACE_DIRS}
_OPPOSITE = {
    face_dir: next(d for d in ALL_FACE_DIRS if d.axis is face_dir.axis and d is not face_dir)
    for face_dir in ALL_FACE_DIRS
}

# Clockwise order around each axis, looking from its positive end, starting at the
# alphabetically first direction.
_SURROUNDING_CLOCKWISE: dict[CubeAxis, tuple[FaceDir, ...]] = {
    CubeAxis.X: (FaceDir.BACK, FaceDir.DOWN, FaceDir.FRONT, FaceDir.UP),
    CubeAxis.Y: (FaceDir.BACK, FaceDir.RIGHT, FaceDir.FRONT, FaceDir.LEFT),
    CubeAxis.Z: (FaceDir.DOWN, FaceDir.LEFT, FaceDir.UP, FaceDir.RIGHT),
}

# Band faces whose incoming slice runs against their own index order.
BAND_REVERSED: dict[tuple[CubeAxis, TurnDir], frozenset[FaceDir]] = {
    (CubeAxis.X, TurnDir.CLOCKWISE): frozenset({FaceDir.BACK, FaceDir.DOWN}),
    (CubeAxis.X, TurnDir.COUNTER_CLOCKWISE): frozenset({FaceDir.BACK, FaceDir.UP}),
    (CubeAxis.Y, TurnDir.CLOCKWISE): frozenset(),
    (CubeAxis.Y, TurnDir.COUNTER_CLOCKWISE): frozenset(),
    (CubeAxis.Z, TurnDir.CLOCKWISE): frozenset({FaceDir.DOWN, FaceDir.UP}),
    (CubeAxis.Z, TurnDir.COUNTER_CLOCKWISE): frozenset({FaceDir.RIGHT, FaceDir.LEFT}),
}

INIT_CONFIG: tuple[tuple[FaceDir, Color], ...] = (
    (FaceDir.UP, Color.YELLOW),
    (FaceDir.DOWN, Color.WHITE),
    (FaceDir.LEFT, Color.GREEN),
    (FaceDir.RIGHT, Color.BLUE),
    (FaceDir.FRONT, Color.ORANGE),
    (FaceDir.BACK, Color.RED),
)


def surrounding_dirs(axis: CubeAxis, turn_dir: TurnDir) -> tuple[FaceDir, ...]:
    """The four directions orthogonal to `axis`, in rotation order for `turn_dir`."""
    cycle = _SURROUNDING_CLOCKWISE[axis]
    if turn_dir is TurnDir.COUNTER_CLOCKWISE:
        return tuple(reversed(cycle))
    return cycle


def positive_face_dir(axis: CubeAxis) -> FaceDir:
    return next(d for d in ALL_FACE_DIRS if d.axis is axis and d.is_positive)


@dataclass(frozen=True)
class Turn:
    face_dir: FaceDir
    turn_dir: TurnDir = TurnDir.CLOCKWISE

    @classmethod
    def random(cls, rng: np.random.Generator) -> Turn:
        face_dir = ALL_FACE_DIRS[int(rng.integers(len(ALL_FACE_DIRS)))]
        turn_dir = TurnDir.CLOCKWISE if rng.random() < 0.5 else TurnDir.COUNTER_CLOCKWISE
        return cls(face_dir, turn_dir)

    def is_reverse(self, other: Turn) -> bool:
        return self.face_dir == other.face_dir and self.turn_dir == other.turn_dir.reversed()

    def reversed(self) -> Turn:
        return Turn(self.face_dir, self.turn_dir.reversed())

    def __str__(self) -> str:
        if self.turn_dir is TurnDir.COUNTER_CLOCKWISE:
            return f"{self.face_dir.letter}'"
        return self.face_dir.letter
