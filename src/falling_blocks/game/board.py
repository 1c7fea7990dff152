from __future__ import annotations

from typing import List

import numpy as np


class OutOfRangeError(IndexError):
    """Raised when a cell outside the grid is accessed directly."""


class Board:
    """Fixed-size grid of settled blocks.

    The grid uses 0 for empty cells and positive integers for filled cells.
    The integer is the catalog identity of the piece that was frozen there,
    so the same array serves as both occupancy and color grid.
    """

    def __init__(self, cols: int = 10, rows: int = 20) -> None:
        if cols <= 0 or rows <= 0:
            raise ValueError(f"board dimensions must be positive, got {cols}x{rows}")
        self.cols = int(cols)
        self.rows = int(rows)
        self.grid = np.zeros((self.rows, self.cols), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def _check(self, x: int, y: int) -> None:
        if not self.is_inside(x, y):
            raise OutOfRangeError(f"cell ({x}, {y}) outside {self.cols}x{self.rows} board")

    def is_occupied(self, x: int, y: int) -> bool:
        self._check(x, y)
        return bool(self.grid[y, x] != 0)

    def identity_at(self, x: int, y: int) -> int:
        self._check(x, y)
        return int(self.grid[y, x])

    def set_cell(self, x: int, y: int, identity: int) -> None:
        self._check(x, y)
        if identity <= 0:
            raise ValueError(f"identity must be positive, got {identity}")
        self.grid[y, x] = identity

    def full_rows(self) -> List[int]:
        return [int(r) for r in np.where(np.all(self.grid != 0, axis=1))[0]]

    def clear_full_rows(self) -> int:
        """Remove full rows and let everything above them fall.

        Surviving rows are compacted downwards in place, scanning bottom to
        top, and the vacated rows at the top are emptied. Returns the number
        of rows removed.
        """
        full = np.all(self.grid != 0, axis=1)
        num = int(full.sum())
        if num == 0:
            return 0
        write = self.rows - 1
        for read in range(self.rows - 1, -1, -1):
            if full[read]:
                continue
            if write != read:
                self.grid[write, :] = self.grid[read, :]
            write -= 1
        # Rows 0..write are the ones freed by compaction
        self.grid[: write + 1, :] = 0
        return num

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
