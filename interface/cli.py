"""Play Reversi in the terminal."""

import argparse
import sys

from reversi.config import CONFIG
from reversi.core.board import Player
from reversi.core.utils import parse_square, square_name
from reversi.log import setup_logging
from reversi.main import Game
from reversi.orchestrator import SearchPool
from reversi.session import MAX_PLACEMENTS, Control

HELP = "Commands: <square> (e.g. d3), hint, undo, redo, reset, log, quit"


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reversi against the engine")
    parser.add_argument(
        "--black", "-b",
        choices=[c.value for c in Control],
        default=CONFIG.session.black,
        help=f"Who plays Black (default: {CONFIG.session.black})",
    )
    parser.add_argument(
        "--white", "-w",
        choices=[c.value for c in Control],
        default=CONFIG.session.white,
        help=f"Who plays White (default: {CONFIG.session.white})",
    )
    parser.add_argument(
        "--depth", "-d",
        type=int,
        default=CONFIG.search.depth,
        help=f"Search depth {CONFIG.search.min_depth}-{CONFIG.search.max_depth} "
             f"(default: {CONFIG.search.depth})",
    )
    parser.add_argument(
        "--pool",
        action="store_true",
        help="Run engine searches in a worker process pool",
    )
    parser.add_argument(
        "--log-level",
        default=CONFIG.log_level,
        help=f"Logging level (default: {CONFIG.log_level})",
    )
    return parser.parse_args(argv)


def render(game: Game) -> str:
    counts = game.counts
    marks = set(game.valid_moves)
    if game.hint:
        marks = {game.hint}
    lines = ["  " + " ".join("ABCDEFGH")]
    for y, row in enumerate(game.board.to_rows()):
        cells = ["*" if (x, y) in marks else ch for x, ch in enumerate(row)]
        lines.append(f"{y + 1} " + " ".join(cells))
    lines.append(
        f"Black {counts[Player.BLACK]} · White {counts[Player.WHITE]} · "
        f"move {game.session.placements}/{MAX_PLACEMENTS}"
    )
    if game.result:
        lines.append(f"Game over: {game.result}")
    else:
        lines.append(f"{game.side_to_move.label} to move")
    return "\n".join(lines)


def print_log(game: Game, out=sys.stdout):
    for i, entry in enumerate(game.move_log(), start=1):
        print(f"{i:3d}. {entry}", file=out)


def run(game: Game, read=input, out=sys.stdout):
    while True:
        game.wait()
        print(render(game), file=out)
        print("----------------------------", file=out)
        if game.result:
            print_log(game, out)
            return game.result

        try:
            command = read(f"{game.side_to_move.label}> ").strip().lower()
        except EOFError:
            return None

        if command in ("quit", "exit", "q"):
            return None
        elif command == "help":
            print(HELP, file=out)
        elif command == "undo":
            game.undo()
        elif command == "redo":
            game.redo()
        elif command == "reset":
            game.reset()
        elif command == "log":
            print_log(game, out)
        elif command == "hint":
            if game.request_hint() and game.wait() and game.hint:
                print(f"Hint: {square_name(*game.hint)}", file=out)
            else:
                print("No hint available", file=out)
        else:
            square = parse_square(command)
            if square is None or not game.play(*square):
                print(f"Illegal move, try again. {HELP}", file=out)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level)
    pool = None
    if args.pool:
        pool = SearchPool(depth=args.depth)
        pool.start()
    try:
        game = Game(
            black=Control(args.black),
            white=Control(args.white),
            depth=args.depth,
            pool=pool,
        )
        result = run(game)
    finally:
        if pool:
            pool.shutdown()
    print(f"Result: {result or 'abandoned'}")


if __name__ == "__main__":
    main()
