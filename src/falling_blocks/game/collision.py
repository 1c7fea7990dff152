from __future__ import annotations

from typing import Optional

import numpy as np

from .board import Board
from .pieces import ActivePiece, Shape


def is_valid_placement(board: Board, shape: Shape, x: int, y: int) -> bool:
    """Check whether ``shape`` anchored at ``(x, y)`` fits on ``board``.

    Columns must stay inside the board and rows must stay above the floor.
    Cells above the visible top (negative rows) are allowed and never
    collide, which lets freshly spawned pieces slide into view.
    """
    ys, xs = np.nonzero(shape)
    for cy, cx in zip(ys, xs):
        bx = x + int(cx)
        by = y + int(cy)
        if bx < 0 or bx >= board.cols or by >= board.rows:
            return False
        if by < 0:
            continue
        if board.grid[by, bx] != 0:
            return False
    return True


def piece_fits(board: Board, piece: ActivePiece) -> bool:
    return is_valid_placement(board, piece.shape, piece.x, piece.y)


def try_move(board: Board, piece: ActivePiece, dx: int, dy: int) -> Optional[ActivePiece]:
    moved = piece.moved(dx, dy)
    return moved if piece_fits(board, moved) else None


def try_rotate(board: Board, piece: ActivePiece) -> Optional[ActivePiece]:
    """Rotate clockwise in place; no kicks. None when the result collides."""
    rotated = piece.rotated()
    return rotated if piece_fits(board, rotated) else None


def landing_y(board: Board, piece: ActivePiece) -> int:
    """Lowest row the piece can reach by falling straight down."""
    y = piece.y
    while is_valid_placement(board, piece.shape, piece.x, y + 1):
        y += 1
    return y
