"""Plain-text net rendering of a cube."""

from __future__ import annotations

from .cube import CubeModel
from .geometry import Color, FaceDir

ANSI_COLOR_MAP = {
    Color.WHITE: "\x1b[30;47m",
    Color.RED: "\x1b[30;41m",
    Color.BLUE: "\x1b[30;44m",
    Color.YELLOW: "\x1b[30;103m",
    Color.ORANGE: "\x1b[30;43m",
    Color.GREEN: "\x1b[30;42m",
}
ANSI_RESET = "\x1b[0m"

BAND_ORDER = (FaceDir.LEFT, FaceDir.FRONT, FaceDir.RIGHT, FaceDir.BACK)


def sticker(color: Color, color_output: bool = True) -> str:
    if not color_output:
        return color.letter
    return f"{ANSI_COLOR_MAP[color]}{color.letter}{ANSI_RESET}"


def face_rows(cube: CubeModel, face_dir: FaceDir, color_output: bool = True) -> list[str]:
    face = cube.face(face_dir)
    return [
        "".join(sticker(face.color_at(row, col), color_output) for col in range(face.size))
        for row in range(face.size)
    ]


def render_net(cube: CubeModel, color_output: bool = True, padding: int = 1) -> str:
    """Unfolded cube: U on top, then L F R B, then D."""
    indent = " " * (cube.size + padding)
    gap = " " * padding
    lines: list[str] = []

    lines.extend(indent + row for row in face_rows(cube, FaceDir.UP, color_output))
    lines.extend([""] * padding)

    band = [face_rows(cube, face_dir, color_output) for face_dir in BAND_ORDER]
    for i in range(cube.size):
        lines.append(gap.join(rows[i] for rows in band))
    lines.extend([""] * padding)

    lines.extend(indent + row for row in face_rows(cube, FaceDir.DOWN, color_output))
    return "\n".join(lines)
