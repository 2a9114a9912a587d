from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

DEFAULT_SIDE = 10
DEFAULT_MINES = 10


@dataclass(frozen=True)
class GameConfig:
    side: int = DEFAULT_SIDE
    mines: int = DEFAULT_MINES
    seed: Optional[int] = None

    def __post_init__(self):
        if self.side < 1:
            raise ValueError(f"side must be positive, got {self.side}")
        if self.mines < 0:
            raise ValueError(f"mines must be non-negative, got {self.mines}")
        if self.mines >= self.side * self.side:
            raise ValueError(f"mines ({self.mines}) must be less than side*side ({self.side * self.side})")

    @property
    def cells(self) -> int:
        return self.side * self.side

    @property
    def safe_cells(self) -> int:
        return self.cells - self.mines
