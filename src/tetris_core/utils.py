"""Utility helpers for the Tetris engine."""

from __future__ import annotations

from typing import List, Optional

from .board import Board, PIECE_VALUES
from .tetromino import Tetromino


def is_legal(board: Board, tetromino: Tetromino) -> bool:
    """Return ``True`` if ``tetromino`` may occupy its cells on ``board``.

    Every one of the four cells is checked: it must lie between the side
    walls, above the floor and off any placed cell.  Cells above the top edge
    are allowed.  The active piece is never part of ``board`` so it does not
    block its own successor.
    """

    return all(board.is_empty(y, x) for x, y in tetromino.blocks())


def can_move(board: Board, tetromino: Tetromino, dx: int, dy: int) -> bool:
    """Return ``True`` if ``tetromino`` can move by ``dx`` and ``dy`` on ``board``."""

    return is_legal(board, tetromino.moved(dx, dy))


def render_grid(board: Board, active: Optional[Tetromino] = None) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without mutating the underlying board state (i.e. without locking the
    piece). Cells occupied by the active piece receive the mapped integer
    value for the piece's shape.
    """

    grid = board.grid.tolist()
    if active is not None:
        for x, y in active.blocks():
            if 0 <= y < board.height and 0 <= x < board.width:
                grid[y][x] = PIECE_VALUES[active.shape]
    return grid
