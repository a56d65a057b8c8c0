"""CLI entrypoint for the cube simulator and solver."""

from __future__ import annotations

import argparse
import sys
from typing import Callable, TextIO

from cube_search.heuristics import HEURISTICS, get_heuristic
from cube_search.idastar import GIVE_UP_LIMIT, idastar

from .cube import CubeModel
from .geometry import CubeAxis, TurnDir
from .notation import NotationError, algorithm_string, parse_algorithm
from .render import render_net

PROMPT_HELP = (
    "Q to quit. X to reset. C to check if the cube is solved. M to scramble the cube.\n"
    "U/D/R/L/F/B to turn the corresponding face clockwise. Add ' to turn counter-clockwise.\n"
    "V + W/A/S/D to rotate the whole cube\n"
    "S to find the solution for the cube using IDA*"
)

VIEW_ROTATIONS = {
    "VW": (CubeAxis.X, TurnDir.COUNTER_CLOCKWISE),
    "VS": (CubeAxis.X, TurnDir.CLOCKWISE),
    "VA": (CubeAxis.Y, TurnDir.COUNTER_CLOCKWISE),
    "VD": (CubeAxis.Y, TurnDir.CLOCKWISE),
}


class CubeShell:
    """Command dispatcher for the interactive prompt."""

    def __init__(
        self,
        size: int = 2,
        heuristic_name: str = "all_l0",
        give_up_limit: int = GIVE_UP_LIMIT,
        color_output: bool = True,
        out: TextIO | None = None,
        read_line: Callable[[str], str] = input,
    ):
        self.size = size
        self.cube = CubeModel(size)
        self.heuristic_name = heuristic_name
        self.heuristic = get_heuristic(heuristic_name)
        self.give_up_limit = give_up_limit
        self.color_output = color_output
        self.out = out if out is not None else sys.stdout
        self.read_line = read_line

    def _print(self, text: str = "", end: str = "\n") -> None:
        print(text, end=end, file=self.out, flush=True)

    def _report_limit(self, limit: int) -> None:
        self._print(f"\rSearching with limit = {limit:<10}", end="")

    def show(self) -> None:
        self._print(render_net(self.cube, color_output=self.color_output))

    def handle(self, line: str) -> bool:
        """Run one command. Returns False when the prompt should exit."""
        cmd = line.strip().upper()
        if cmd == "Q":
            return False
        if cmd == "X":
            self.cube = CubeModel(self.size)
        elif cmd == "C":
            self._print("The cube is solved" if self.cube.is_solved() else "The cube is not solved")
        elif cmd == "M":
            raw = self.read_line("Type number of turns to scramble: ")
            try:
                k = int(raw.strip())
            except ValueError:
                k = -1
            if k < 0:
                self._print("Can't parse to a non-negative number")
                return True
            turns = self.cube.scramble(k)
            self._print(f"Scramble sequence: {algorithm_string(turns)}")
        elif cmd in VIEW_ROTATIONS:
            axis, turn_dir = VIEW_ROTATIONS[cmd]
            self.cube.turn_whole_cube(axis, turn_dir)
        elif cmd == "S":
            result = idastar(self.cube, self.heuristic, progress=self._report_limit, give_up_limit=self.give_up_limit)
            self._print()
            self._print(str(result))
        else:
            try:
                turns = parse_algorithm(line)
            except NotationError:
                self._print("Invalid command")
                return True
            if not turns:
                self._print("Invalid command")
                return True
            self.cube.apply_algorithm(turns)
        return True

    def run(self) -> None:
        while True:
            self.show()
            self._print(PROMPT_HELP)
            try:
                line = self.read_line("TYPE COMMAND: ")
            except EOFError:
                break
            if not self.handle(line):
                break


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="2x2 twisty cube simulator with IDA* solver")
    sub = parser.add_subparsers(dest="mode", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--cube-size", type=int, default=2, choices=[2])
    common.add_argument("--no-color", action="store_true", help="Print sticker letters without ANSI colors")

    solver = argparse.ArgumentParser(add_help=False)
    solver.add_argument("--heuristic", default="all_l0", choices=sorted(HEURISTICS))
    solver.add_argument("--give-up-limit", type=int, default=GIVE_UP_LIMIT)

    scramble = sub.add_parser("scramble", parents=[common], help="Scramble and print the cube")
    scramble.add_argument("--moves", type=int, required=True)
    scramble.add_argument("--seed", type=int, default=None)

    solve = sub.add_parser("solve", parents=[common, solver], help="Scramble or apply turns, then solve")
    source = solve.add_mutually_exclusive_group(required=True)
    source.add_argument("--moves", type=int, default=None)
    source.add_argument("--algorithm", type=str, default=None, help="Turns to apply, e.g. \"R U R' U'\"")
    solve.add_argument("--seed", type=int, default=None)

    sub.add_parser("shell", parents=[common, solver], help="Interactive prompt")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    color_output = not args.no_color

    if args.mode == "shell":
        CubeShell(
            size=args.cube_size,
            heuristic_name=args.heuristic,
            give_up_limit=args.give_up_limit,
            color_output=color_output,
        ).run()
        return

    cube = CubeModel(args.cube_size)
    if args.mode == "scramble":
        turns = cube.scramble(args.moves, seed=args.seed)
        print(f"Scramble sequence: {algorithm_string(turns)}", flush=True)
        print(render_net(cube, color_output=color_output), flush=True)
        return

    if args.mode == "solve":
        if args.algorithm is not None:
            try:
                turns = parse_algorithm(args.algorithm)
            except NotationError as exc:
                parser.error(str(exc))
            cube.apply_algorithm(turns)
        else:
            turns = cube.scramble(args.moves, seed=args.seed)
            print(f"Scramble sequence: {algorithm_string(turns)}", flush=True)
        print(render_net(cube, color_output=color_output), flush=True)
        result = idastar(
            cube,
            get_heuristic(args.heuristic),
            progress=lambda limit: print(f"\rSearching with limit = {limit:<10}", end="", flush=True),
            give_up_limit=args.give_up_limit,
        )
        print(flush=True)
        print(result, flush=True)
        return

    parser.error(f"Unsupported mode: {args.mode}")


if __name__ == "__main__":
    main()
