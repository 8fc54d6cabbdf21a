#!/usr/bin/env python3
"""
Minefield - Main entry point.

Usage:
    python main.py play [--width W] [--height H] [--mines N] [--seed S]
    python main.py demo [--seed S]
"""
import argparse
import logging
import random
import sys
from typing import Tuple

from src.minefield.board import Board, BoardConfig, GameState
from src.minefield.render import TextRenderer
from src.minefield.session import Command, GameSession


def build_session(args: argparse.Namespace) -> Tuple[GameSession, TextRenderer]:
    """Create a board and text renderer from command-line options."""
    config = BoardConfig(width=args.width, height=args.height, num_mines=args.mines)
    board = Board(config, rng=random.Random(args.seed))
    renderer = TextRenderer(config.width, config.height, ansi=args.color)
    session = GameSession(board, renderer)
    session.start()
    return session, renderer


def show(session: GameSession, renderer: TextRenderer) -> None:
    """Print the board with the cursor cell showing its content."""
    session.show_cursor_content()
    board = session.board
    print(renderer.render())
    print(f"Cursor at x={board.cursor_col} y={board.cursor_row}")
    print()


def play(args: argparse.Namespace) -> None:
    """Play interactively, one command per input line."""
    session, renderer = build_session(args)
    print("Keys: h/j/k/l move, o open, g X Y go to cell, q quit")
    show(session, renderer)

    for line in sys.stdin:
        words = line.split()
        if not words:
            continue
        if words[0] == "g" and len(words) == 3:
            try:
                x, y = int(words[1]), int(words[2])
            except ValueError:
                print("Coordinates must be integers")
                continue
            if not session.point(x, y):
                print("Off the board")
                continue
        elif not session.handle_key(words[0]):
            break
        show(session, renderer)
        if session.ended:
            break

    report(session)


def demo(args: argparse.Namespace) -> None:
    """Open random closed cells until the game ends."""
    session, renderer = build_session(args)
    board = session.board
    chooser = random.Random(args.seed)

    while not board.is_end:
        closed = [
            (row, col)
            for row in range(board.height)
            for col in range(board.width)
            if not board.get_cell(row, col).is_opened
        ]
        row, col = chooser.choice(closed)
        session.point(col, row)
        session.handle(Command.OPEN)

    show(session, renderer)
    report(session)


def report(session: GameSession) -> None:
    outcome = session.outcome
    if outcome == GameState.WON:
        print("Cleared the field!")
    elif outcome == GameState.LOST:
        print("Boom.")
    else:
        print("Game abandoned.")
    print(f"Opened {session.board.opened_count} cells")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minefield - terminal minesweeper")
    parser.add_argument(
        "--verbose", action="store_true", help="Log board events"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    for name, help_text in (("play", "Play a game"), ("demo", "Watch random play")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--width", type=int, default=9, help="Board columns")
        sub.add_argument("--height", type=int, default=9, help="Board rows")
        sub.add_argument("--mines", type=int, default=10, help="Number of mines")
        sub.add_argument("--seed", type=int, default=None, help="Random seed")
        sub.add_argument(
            "--color", action="store_true", help="Use ANSI colors"
        )

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "play":
        play(args)
    elif args.command == "demo":
        demo(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
