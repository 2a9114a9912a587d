"""Shared fixtures: boards with fixed mine layouts."""

import pytest

from minesweeper.board import Board
from minesweeper.engine import Minesweeper


def make_game(side, mines):
    return Minesweeper(board=Board.from_mines(side, mines))


@pytest.fixture
def tiny_game() -> Minesweeper:
    """2x2 with a mine at (0, 0): every safe cell shows 1, so nothing cascades."""
    return make_game(2, [(0, 0)])


@pytest.fixture
def walled_game() -> Minesweeper:
    """5x5 with a full column of mines at col 2 splitting the board in two."""
    return make_game(5, [(r, 2) for r in range(5)])


@pytest.fixture
def two_corner_game() -> Minesweeper:
    """4x4 with mines in opposite corners."""
    return make_game(4, [(0, 0), (3, 3)])
