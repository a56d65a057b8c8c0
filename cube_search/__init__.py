"""IDA* search and heuristics for the twisty-cube simulator."""

from .heuristics import AllOrientationsL0, SolvedOrientations, all_l0, single_l0
from .idastar import GIVE_UP_LIMIT, idastar
from .types import SearchResult

__all__ = [
    "AllOrientationsL0",
    "SolvedOrientations",
    "all_l0",
    "single_l0",
    "GIVE_UP_LIMIT",
    "idastar",
    "SearchResult",
]
