"""Turn notation parsing and formatting."""

from __future__ import annotations

from typing import Iterable, Sequence

from .geometry import FACE_DIR_BY_LETTER, FaceDir, Turn, TurnDir


class NotationError(ValueError):
    """Raised when a turn token can't be parsed."""


def _parse_face_dir(token: str, original: str) -> FaceDir:
    face_dir = FACE_DIR_BY_LETTER.get(token.strip().upper())
    if face_dir is None:
        raise NotationError(f"Unknown face in turn '{original}'; expected one of U D L R F B")
    return face_dir


def parse_turn(token: str) -> list[Turn]:
    """Parse one token. `X` is clockwise, `X'` counter-clockwise, `X2` two clockwise turns."""
    if not token:
        raise NotationError("Empty turn token")
    suffix = token[-1]
    if suffix == "'":
        return [Turn(_parse_face_dir(token[:-1], token), TurnDir.COUNTER_CLOCKWISE)]
    if suffix == "2":
        face_dir = _parse_face_dir(token[:-1], token)
        return [Turn(face_dir, TurnDir.CLOCKWISE), Turn(face_dir, TurnDir.CLOCKWISE)]
    return [Turn(_parse_face_dir(token, token), TurnDir.CLOCKWISE)]


def parse_algorithm(algorithm: str | Sequence[str]) -> list[Turn]:
    tokens = algorithm.split() if isinstance(algorithm, str) else list(algorithm)
    turns: list[Turn] = []
    for token in tokens:
        turns.extend(parse_turn(token))
    return turns


def algorithm_string(turns: Iterable[Turn]) -> str:
    return " ".join(str(turn) for turn in turns)


def reverse_algorithm(turns: Sequence[Turn]) -> list[Turn]:
    return [turn.reversed() for turn in reversed(turns)]
