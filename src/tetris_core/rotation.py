"""Rotation with wall kicks."""

from __future__ import annotations

import logging

from .board import Board
from .tetromino import Tetromino, kick_offsets
from .utils import is_legal


LOGGER = logging.getLogger(__name__)


def rotate(board: Board, tetromino: Tetromino, clockwise: bool = True) -> Tetromino:
    """Return ``tetromino`` turned a quarter in the requested direction.

    The plain rotation about the same origin is tried first, then each kick
    offset for the transition in order.  The first legal candidate wins.  If
    none is legal the original piece is returned unchanged.
    """

    turned = tetromino.rotated(1 if clockwise else -1)
    if is_legal(board, turned):
        return turned

    for dx, dy in kick_offsets(tetromino.shape, tetromino.rotation, turned.rotation):
        candidate = turned.moved(dx, dy)
        if is_legal(board, candidate):
            LOGGER.debug(
                "Kicked %s %d->%d by (%d, %d)",
                tetromino.shape.value,
                tetromino.rotation,
                turned.rotation,
                dx,
                dy,
            )
            return candidate
    return tetromino
