"""Twisty-cube simulator package."""

from .cube import CubeModel
from .geometry import Color, CubeAxis, CubeContractError, FaceDir, Turn, TurnDir
from .notation import NotationError, algorithm_string, parse_algorithm

__all__ = [
    "CubeModel",
    "Color",
    "CubeAxis",
    "CubeContractError",
    "FaceDir",
    "Turn",
    "TurnDir",
    "NotationError",
    "algorithm_string",
    "parse_algorithm",
]
