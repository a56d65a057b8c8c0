"""Square sticker grid for one face of the cube."""

from __future__ import annotations

import numpy as np

from .geometry import Color, CubeContractError, TurnDir


class Face:
    """N x N grid of color ids, indexed top to bottom and left to right."""

    def __init__(self, size: int, color: Color):
        if size < 1:
            raise CubeContractError("Face size must be at least 1")
        self.size = size
        self._colors = np.full((size, size), int(color), dtype=np.int8)

    @classmethod
    def from_array(cls, colors: np.ndarray) -> Face:
        arr = np.asarray(colors, dtype=np.int8)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            raise CubeContractError(f"Face grid must be square, got shape {arr.shape}")
        face = cls(arr.shape[0], Color.WHITE)
        face._colors = arr.copy()
        return face

    @property
    def colors(self) -> np.ndarray:
        """Read-only view of the grid."""
        view = self._colors.view()
        view.flags.writeable = False
        return view

    def color_at(self, row: int, col: int) -> Color:
        return Color(int(self._colors[row, col]))

    def rotate(self, turn_dir: TurnDir) -> None:
        """Rotate the grid 90 degrees: transpose, then flip one axis."""
        transposed = self._colors.T
        if turn_dir is TurnDir.CLOCKWISE:
            self._colors = transposed[:, ::-1].copy()
        else:
            self._colors = transposed[::-1, :].copy()

    def get_slice(self, i: int, is_column: bool) -> np.ndarray:
        if is_column:
            return self._colors[:, i].copy()
        return self._colors[i, :].copy()

    def set_slice(self, i: int, is_column: bool, values: np.ndarray) -> None:
        if is_column:
            self._colors[:, i] = values
        else:
            self._colors[i, :] = values

    def is_single_color(self) -> bool:
        return bool(np.all(self._colors == self._colors.flat[0]))

    def copy(self) -> Face:
        return Face.from_array(self._colors)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Face):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self._colors, other._colors))

    def __repr__(self) -> str:
        rows = ["".join(Color(int(c)).letter for c in row) for row in self._colors]
        return f"Face({'/'.join(rows)})"
