"""High level game state container."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .board import Board
from .rotation import rotate
from .tetromino import PLAYABLE_TYPES, ROTATION_STATES, Tetromino, TetrominoType, spawn_origin
from .utils import can_move, is_legal


QUEUE_SIZE = 5

# Points awarded for clearing the given number of rows with one piece.
SCORE_TABLE: Dict[int, int] = {1: 100, 2: 300, 3: 500, 4: 800}


def find_spawn(board: Board, shape: TetrominoType) -> Optional[Tetromino]:
    """Return a legal spawn placement for ``shape`` or ``None``.

    Every rotation state is tried at the spawn anchor, then again one row
    higher so a piece can still enter over a tall stack.
    """

    x, y = spawn_origin(shape)
    for origin in ((x, y), (x, y - 1)):
        for rotation in range(ROTATION_STATES):
            candidate = Tetromino(shape, rotation, origin)
            if is_legal(board, candidate):
                return candidate
    return None


@dataclass
class GameState:
    """Mutable state for a Tetris game session.

    Holds the board, the active piece, the queue of upcoming shapes and the
    hold slot.  ``topped_out`` is set once a piece can no longer spawn.
    """

    rng: random.Random = field(default_factory=random.Random)
    queue_size: int = QUEUE_SIZE
    board: Board = field(default_factory=Board)
    active: Optional[Tetromino] = None
    queue: List[TetrominoType] = field(default_factory=list)
    held: TetrominoType = TetrominoType.NONE
    can_hold: bool = True
    score: int = 0
    lines: int = 0
    pieces: int = 0
    topped_out: bool = False

    def _random_type(self) -> TetrominoType:
        """Return a random tetromino type."""

        return self.rng.choice(PLAYABLE_TYPES)

    def pop_queue(self) -> TetrominoType:
        """Remove and return the next shape, topping the queue back up."""

        shape = self.queue.pop(0)
        self.queue.append(self._random_type())
        return shape

    def spawn_tetromino(self, shape: TetrominoType) -> bool:
        """Place ``shape`` at the top of the board as the active piece.

        Returns ``False`` and marks the game as topped out when no spawn
        placement is legal.
        """

        self.active = find_spawn(self.board, shape)
        if self.active is None:
            self.topped_out = True
            return False
        return True

    def try_move(self, dx: int, dy: int) -> bool:
        """Move the active piece if the destination is legal."""

        if self.active is None or not can_move(self.board, self.active, dx, dy):
            return False
        self.active = self.active.moved(dx, dy)
        return True

    def try_rotate(self, clockwise: bool = True) -> bool:
        """Rotate the active piece, applying wall kicks when needed."""

        if self.active is None:
            return False
        turned = rotate(self.board, self.active, clockwise)
        if turned == self.active:
            return False
        self.active = turned
        return True

    def hard_drop(self) -> int:
        """Drop the active piece as far as it goes and return the rows fallen."""

        rows = 0
        while self.try_move(0, 1):
            rows += 1
        return rows

    def swap_hold(self) -> None:
        """Swap the active piece with the held one.

        Implements the standard Tetris hold mechanic.  The swap may only happen
        once per locked piece; additional calls are ignored until the next
        piece locks.  The swapped-in piece always re-enters at the top.
        """

        if self.active is None or not self.can_hold:
            return

        current = self.active.shape
        if self.held is TetrominoType.NONE:
            incoming = self.pop_queue()
        else:
            incoming = self.held
        self.held = current
        self.spawn_tetromino(incoming)
        self.can_hold = False

    def lock_active(self) -> int:
        """Lock the active piece, clear rows, score and spawn the next piece.

        Returns the number of rows cleared.
        """

        if self.active is None:
            return 0
        self.board, cleared = self.board.lock_and_clear(self.active)
        self.score += SCORE_TABLE.get(cleared, 0)
        self.lines += cleared
        self.pieces += 1
        self.spawn_tetromino(self.pop_queue())
        self.can_hold = True
        return cleared

    def reset_game(self) -> None:
        """Reset the entire game state for a new game."""

        self.board = Board()
        self.queue = [self._random_type() for _ in range(self.queue_size)]
        self.held = TetrominoType.NONE
        self.can_hold = True
        self.score = 0
        self.lines = 0
        self.pieces = 0
        self.topped_out = False
        self.active = None
        self.spawn_tetromino(self.pop_queue())
