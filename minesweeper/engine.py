from __future__ import annotations
import enum
import logging
from typing import List, Optional

from minesweeper.board import Board, Coordinate
from minesweeper.config import GameConfig

logger = logging.getLogger(__name__)


class CellState(enum.Enum):
    HIDDEN = '.'
    REVEALED = 'revealed'
    FLAGGED = '!'


class MoveResult(enum.Enum):
    """Outcome of one command. Each member carries the line shown to the player."""

    OPENED = ('opened', '')
    ALREADY_REVEALED = ('already_revealed', 'Cell is already open.')
    FLAGGED = ('flagged', '')
    UNFLAGGED = ('unflagged', '')
    INVALID_COORDINATES = ('invalid_coordinates', 'Invalid coordinates.')
    UNKNOWN_ACTION = ('unknown_action', 'Unknown action.')
    CELL_FLAGGED = ('cell_flagged', 'Cell is flagged. Unflag to open.')
    CANNOT_FLAG_REVEALED = ('cannot_flag_revealed', "Can't flag a revealed cell.")
    GAME_OVER = ('game_over', 'The game is already over.')
    LOSS = ('loss', 'BOOM! You hit a mine. Game Over.')
    WIN = ('win', 'Congratulations! You cleared the board!')

    def __init__(self, key: str, message: str):
        self.key = key
        self.message = message

    @property
    def rejected(self) -> bool:
        return self in _REJECTIONS

    @property
    def terminal(self) -> bool:
        return self in (MoveResult.LOSS, MoveResult.WIN)


_REJECTIONS = frozenset({
    MoveResult.ALREADY_REVEALED,
    MoveResult.INVALID_COORDINATES,
    MoveResult.UNKNOWN_ACTION,
    MoveResult.CELL_FLAGGED,
    MoveResult.CANNOT_FLAG_REVEALED,
    MoveResult.GAME_OVER,
})

MINE_GLYPH = '*'


class Minesweeper:
    def __init__(self, config: Optional[GameConfig] = None, board: Optional[Board] = None):
        if board is None:
            config = config or GameConfig()
            board = Board.generate(config)
        elif config is None:
            config = GameConfig(side=board.side, mines=board.num_mines)
        assert (config.side, config.mines) == (board.side, board.num_mines)
        self.config = config
        self.side = config.side
        self.num_mines = config.mines
        self.board = board
        self.visible: List[List[CellState]] = [[CellState.HIDDEN for _ in range(self.side)] for _ in range(self.side)]
        self.moves_left = config.safe_cells
        self.turn = 0
        self.game_over = False
        self.win = False

    def in_bounds(self, row: int, col: int) -> bool:
        return self.board.in_bounds(row, col)

    def state(self, row: int, col: int) -> CellState:
        return self.visible[row][col]

    def open_cell(self, row: int, col: int) -> bool:
        """Reveal (row, col) and flood-fill outward from zero cells.

        Returns False only if this cell is a mine. Out-of-bounds and already
        revealed cells are left alone and count as safe.
        """
        if not self.in_bounds(row, col):
            return True
        if self.visible[row][col] is CellState.REVEALED:
            return True

        self.visible[row][col] = CellState.REVEALED
        if self.board.grid[row][col].is_mine:
            return False

        opened = 0
        stack: List[Coordinate] = [(row, col)]
        while stack:
            r, c = stack.pop()
            self.moves_left -= 1
            opened += 1
            if self.board.grid[r][c].adj_mines != 0:
                continue
            for nr, nc in self.board.neighbors(r, c):
                if self.visible[nr][nc] is CellState.HIDDEN:
                    # Marked on push so a cell is never queued twice
                    self.visible[nr][nc] = CellState.REVEALED
                    stack.append((nr, nc))
        logger.debug("opened %d cell(s) from %s, %d left", opened, (row, col), self.moves_left)
        return True

    def toggle_flag(self, row: int, col: int) -> MoveResult:
        current = self.visible[row][col]
        if current is CellState.REVEALED:
            return MoveResult.CANNOT_FLAG_REVEALED
        if current is CellState.FLAGGED:
            self.visible[row][col] = CellState.HIDDEN
            return MoveResult.UNFLAGGED
        self.visible[row][col] = CellState.FLAGGED
        return MoveResult.FLAGGED

    def play(self, row: int, col: int, action: str) -> MoveResult:
        if self.game_over:
            return MoveResult.GAME_OVER
        if not self.in_bounds(row, col):
            return MoveResult.INVALID_COORDINATES

        action = action.lower()
        if action == 'f':
            return self.toggle_flag(row, col)
        if action != 'o':
            return MoveResult.UNKNOWN_ACTION

        if self.visible[row][col] is CellState.FLAGGED:
            return MoveResult.CELL_FLAGGED
        if self.visible[row][col] is CellState.REVEALED:
            return MoveResult.ALREADY_REVEALED

        if self.turn == 0 and self.board.grid[row][col].is_mine:
            if self.board.relocate_mine(row, col) is not None:
                self.board.calculate_adjacents()

        safe = self.open_cell(row, col)
        self.turn += 1
        if not safe:
            self._finish(win=False)
            return MoveResult.LOSS
        if self.moves_left == 0:
            self._finish(win=True)
            return MoveResult.WIN
        return MoveResult.OPENED

    def _finish(self, win: bool) -> None:
        self.reveal_mines()
        self.game_over = True
        self.win = win
        logger.debug("game over after %d turn(s): %s", self.turn, 'win' if win else 'loss')

    def reveal_mines(self) -> None:
        for r, c in self.board.mine_positions():
            self.visible[r][c] = CellState.REVEALED

    def count_unrevealed_safe(self) -> int:
        count = 0
        for r in range(self.side):
            for c in range(self.side):
                if not self.board.grid[r][c].is_mine and self.visible[r][c] is not CellState.REVEALED:
                    count += 1
        return count

    def glyph(self, row: int, col: int) -> str:
        state = self.visible[row][col]
        if state is not CellState.REVEALED:
            return state.value
        cell = self.board.grid[row][col]
        if cell.is_mine:
            return MINE_GLYPH
        return str(cell.adj_mines)

    def render_ascii(self) -> str:
        width = max(2, len(str(self.side - 1)) + 1)
        header = ' ' * (width + 1) + ''.join(str(i).rjust(width) for i in range(self.side))
        rows = [header, '']
        for r in range(self.side):
            cells = ''.join(self.glyph(r, c).rjust(width) for c in range(self.side))
            rows.append(str(r).rjust(width) + ' ' + cells)
        return '\n'.join(rows)
