#!/usr/bin/env python3
"""
Minefield - Main entry point.

Usage:
    python main.py play [--preset NAME | --rows R --cols C --mines M]
    python main.py layout [--row R --col C] [--seed S]
    python main.py demo [--games N] [--delay D]
"""
import argparse
import os
import time
from typing import List, Optional, Tuple

import numpy as np

from src.minefield import (
    CellStatus,
    ConstructionError,
    FieldConfig,
    MineLayout,
    MinefieldEnv,
    PRESETS,
    PreconditionError,
    VisibleState,
)


PLAY_HELP = "Commands: u ROW COL (uncover), f ROW COL (cycle flag), r (reset), q (quit)"


def build_config(args: argparse.Namespace) -> FieldConfig:
    """Field configuration from --preset or explicit dimensions."""
    if args.preset:
        return PRESETS[args.preset]
    return FieldConfig(args.rows, args.cols, args.mines)


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def parse_location(command: List[str]) -> Optional[Tuple[int, int]]:
    """Row and column from a play command, or None if they are not integers."""
    try:
        return int(command[1]), int(command[2])
    except ValueError:
        print("Row and column must be integers")
        return None


def clear_screen() -> None:
    os.system('cls' if os.name == 'nt' else 'clear')


def print_field(visible: VisibleState) -> None:
    """Print the visible field with row and column indices."""
    num_cols = visible.get_layout().num_cols()
    print("    " + " ".join(str(col % 10) for col in range(num_cols)))
    for row, line in enumerate(visible.to_display_string().splitlines()):
        print(f"{row:3d} {line}")
    print(f"Mines left: {visible.mines_left()}")


def play(args: argparse.Namespace) -> None:
    """Play an interactive game in the terminal."""
    config = build_config(args)
    rng = np.random.default_rng(args.seed)
    layout = MineLayout.from_config(config)
    visible = VisibleState(layout)
    populated = False

    print(f"Field: {config.rows}x{config.cols} with {config.num_mines} mines")
    print(PLAY_HELP)

    while True:
        print_field(visible)
        if visible.is_game_over():
            print("You win!" if visible.is_won() else "Boom! Game over.")
            print("Enter r to play again or q to quit.")

        try:
            command = input("> ").split()
        except EOFError:
            break
        if not command:
            continue

        action = command[0].lower()
        if action == "q":
            break
        if action == "r":
            layout.reset_empty()
            visible.reset()
            populated = False
            continue
        if action not in ("u", "f") or len(command) != 3:
            print(PLAY_HELP)
            continue
        if visible.is_game_over():
            continue

        location = parse_location(command)
        if location is None:
            continue
        row, col = location

        try:
            if action == "f":
                visible.cycle_flag(row, col)
            else:
                if not populated and visible.get_status(row, col) == CellStatus.COVERED:
                    layout.populate(row, col, rng=rng)
                    populated = True
                visible.uncover(row, col)
        except PreconditionError as error:
            print(error)


def show_layout(args: argparse.Namespace) -> None:
    """Populate a layout around a safe location and print it."""
    config = build_config(args)
    layout = MineLayout.from_config(config)
    layout.populate(args.row, args.col, rng=np.random.default_rng(args.seed))
    print(layout.to_debug_string())


def demo(args: argparse.Namespace) -> None:
    """Watch random uncovers play out through the environment."""
    config = build_config(args)
    env = MinefieldEnv(config=config, render_mode="ansi")

    wins = 0
    for game in range(args.games):
        obs, _ = env.reset(seed=None if args.seed is None else args.seed + game)
        done = False
        step = 0

        while not done:
            valid = np.flatnonzero(env.get_action_mask())
            action = int(env.np_random.choice(valid))
            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Game {game + 1}/{args.games} | Step {step} ===")
            print(env.render())
            print(f"Reward: {reward:+.1f} | Uncovered: {info['uncovered']}/{info['total_safe']}")
            time.sleep(args.delay)

        if info["won"]:
            wins += 1
            print("\nWON!")
        else:
            print("\nLOST")
        time.sleep(args.delay * 3)

    print(f"\nResults: {wins}/{args.games} wins ({100 * wins / args.games:.0f}%)")


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Minefield game core")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    field_parser = argparse.ArgumentParser(add_help=False)
    field_parser.add_argument(
        "--preset", choices=sorted(PRESETS), help="Use a preset field size"
    )
    field_parser.add_argument("--rows", type=int, default=9, help="Number of rows")
    field_parser.add_argument("--cols", type=int, default=9, help="Number of columns")
    field_parser.add_argument("--mines", type=int, default=10, help="Number of mines")
    field_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    subparsers.add_parser("play", parents=[field_parser], help="Play in the terminal")

    layout_parser = subparsers.add_parser(
        "layout", parents=[field_parser], help="Print a populated layout"
    )
    layout_parser.add_argument("--row", type=int, default=0, help="Safe row")
    layout_parser.add_argument("--col", type=int, default=0, help="Safe column")

    demo_parser = subparsers.add_parser(
        "demo", parents=[field_parser], help="Watch random play"
    )
    demo_parser.add_argument("--games", type=positive_int, default=3, help="Number of games")
    demo_parser.add_argument("--delay", type=float, default=0.3, help="Seconds between moves")

    args = parser.parse_args()

    commands = {"play": play, "layout": show_layout, "demo": demo}
    if args.command not in commands:
        parser.print_help()
        return

    try:
        commands[args.command](args)
    except (ConstructionError, PreconditionError) as error:
        parser.error(str(error))


if __name__ == "__main__":
    main()
