from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np

from minesweeper.config import GameConfig

Coordinate = Tuple[int, int]

logger = logging.getLogger(__name__)


@dataclass
class Cell:
    is_mine: bool = False
    adj_mines: int = 0


class Board:
    """Hidden truth grid: where the mines are and how many touch each cell."""

    def __init__(self, side: int, num_mines: int, rng: Optional[random.Random] = None):
        assert 0 <= num_mines < side * side
        self.side = side
        self.num_mines = num_mines
        self.rng = rng if rng is not None else random.Random()
        self.grid: List[List[Cell]] = [[Cell() for _ in range(side)] for _ in range(side)]

    @classmethod
    def generate(cls, config: GameConfig) -> "Board":
        rng = random.Random(int(config.seed)) if config.seed is not None else random.Random()
        board = cls(config.side, config.mines, rng=rng)
        board.place_mines()
        board.calculate_adjacents()
        return board

    @classmethod
    def from_mines(cls, side: int, positions: Iterable[Coordinate]) -> "Board":
        positions = list(positions)
        if len(set(positions)) != len(positions):
            raise ValueError("duplicate mine positions")
        if len(positions) >= side * side:
            raise ValueError(f"{len(positions)} mines leave no safe cell on a {side}x{side} board")
        board = cls(side, len(positions))
        for r, c in positions:
            if not board.in_bounds(r, c):
                raise ValueError(f"mine position {(r, c)} outside {side}x{side} board")
            board.grid[r][c].is_mine = True
        board.calculate_adjacents()
        return board

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.side and 0 <= col < self.side

    def neighbors(self, row: int, col: int) -> List[Coordinate]:
        coords = []
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                nr, nc = row + dr, col + dc
                if self.in_bounds(nr, nc):
                    coords.append((nr, nc))
        return coords

    def place_mines(self) -> None:
        # Rejection sampling: redraw on collision
        placed = 0
        while placed < self.num_mines:
            r = self.rng.randrange(self.side)
            c = self.rng.randrange(self.side)
            if not self.grid[r][c].is_mine:
                self.grid[r][c].is_mine = True
                placed += 1

    def mine_mask(self) -> np.ndarray:
        return np.array([[c.is_mine for c in row] for row in self.grid], dtype=bool)

    def calculate_adjacents(self) -> None:
        mask = self.mine_mask().astype(int)
        pad = np.pad(mask, ((1, 1), (1, 1)), mode='constant')
        counts = (
            pad[:-2, :-2] + pad[:-2, 1:-1] + pad[:-2, 2:] +
            pad[1:-1, :-2]                 + pad[1:-1, 2:] +
            pad[2:, :-2]  + pad[2:, 1:-1]  + pad[2:, 2:]
        )
        for r in range(self.side):
            for c in range(self.side):
                cell = self.grid[r][c]
                cell.adj_mines = 0 if cell.is_mine else int(counts[r, c])

    def relocate_mine(self, avoid_row: int, avoid_col: int) -> Optional[Coordinate]:
        """Move the mine at (avoid_row, avoid_col) to the first free cell in row-major order.

        Returns the new mine position, or None if every other cell already holds a mine.
        Adjacency counts are not touched; call calculate_adjacents() afterwards.
        """
        for r in range(self.side):
            for c in range(self.side):
                if (r, c) == (avoid_row, avoid_col) or self.grid[r][c].is_mine:
                    continue
                self.grid[r][c].is_mine = True
                self.grid[avoid_row][avoid_col].is_mine = False
                logger.debug("relocated mine from %s to %s", (avoid_row, avoid_col), (r, c))
                return (r, c)
        return None

    def mine_positions(self) -> Iterable[Coordinate]:
        for r in range(self.side):
            for c in range(self.side):
                if self.grid[r][c].is_mine:
                    yield (r, c)

    def mine_count(self) -> int:
        return int(self.mine_mask().sum())
