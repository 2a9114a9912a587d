from __future__ import annotations
import argparse
import logging
from typing import Callable, Optional, Tuple

from minesweeper.config import DEFAULT_MINES, DEFAULT_SIDE, GameConfig
from minesweeper.engine import Minesweeper, MoveResult

PROMPT = 'Enter row, col and action (o = open, f = flag): '


def parse_command(line: str) -> Optional[Tuple[int, int, str]]:
    parts = line.split()
    if len(parts) != 3:
        return None
    try:
        row, col = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    return row, col, parts[2]


def run_session(game: Minesweeper, read_line: Optional[Callable[[str], str]] = None,
                write: Optional[Callable[[str], None]] = None) -> Optional[MoveResult]:
    """Drive one game until it ends or input runs out. Returns the terminal result, if any."""
    read_line = read_line or input
    write = write or print
    while not game.game_over:
        write('\n' + game.render_ascii())
        try:
            line = read_line('\n' + PROMPT)
        except (EOFError, KeyboardInterrupt):
            write('\n[play] Session ended.')
            return None
        command = parse_command(line)
        if command is None:
            write('Invalid input.')
            continue
        result = game.play(*command)
        if result.terminal:
            write('\n' + game.render_ascii())
            write('\n' + result.message)
            return result
        if result.message:
            write(result.message)
    return None


def main():
    parser = argparse.ArgumentParser(description='Console Minesweeper')
    parser.add_argument('--side', type=int, default=DEFAULT_SIDE)
    parser.add_argument('--mines', type=int, default=DEFAULT_MINES)
    parser.add_argument('--seed', type=int, default=-1, help='RNG seed; <0 uses OS entropy (random every run)')
    parser.add_argument('--verbose', action='store_true', help='Log engine events to stderr')
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s')

    try:
        config = GameConfig(side=args.side, mines=args.mines, seed=(None if args.seed < 0 else args.seed))
    except ValueError as exc:
        parser.error(str(exc))

    print(f"Welcome to Minesweeper! ({config.side}x{config.side} with {config.mines} mines)")
    run_session(Minesweeper(config))


if __name__ == '__main__':
    main()
