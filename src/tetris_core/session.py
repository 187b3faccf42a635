"""Session controller: commands, ticks and the Playing/Paused/GameOver machine.

A :class:`Session` owns every piece of game state.  Front-ends drive it through
two synchronous entry points:

* :meth:`Session.tick` is called every ``tick_ms`` by an external timer.  It
  first applies the debounced key presses, then advances gravity.
* :meth:`Session.dispatch` applies one classified :class:`Command` right away.

Raw key transitions go through :meth:`Session.press` and
:meth:`Session.release`, which feed the session's :class:`InputDebouncer`.
Everything else is read-only queries for renderers.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .board import Cell
from .config import SessionConfig
from .game_state import GameState
from .input import InputDebouncer
from .tetromino import TetrominoType
from .timing import GravityTimer
from .utils import render_grid


LOGGER = logging.getLogger(__name__)


class Command(str, Enum):
    """Player intents understood by the session.

    Declaration order is the order in which simultaneously pressed keys are
    applied during a tick.
    """

    MOVE_LEFT = "MoveLeft"
    MOVE_RIGHT = "MoveRight"
    ROTATE_CW = "RotateCW"
    ROTATE_CCW = "RotateCCW"
    HOLD = "Hold"
    SOFT_DROP = "SoftDrop"
    HARD_DROP = "HardDrop"
    PAUSE = "Pause"
    RESUME = "Resume"
    RESTART = "Restart"


class SessionState(str, Enum):
    PLAYING = "Playing"
    PAUSED = "Paused"
    GAME_OVER = "GameOver"


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a session for renderers."""

    board: Tuple[Cell, ...]
    active: Tuple[Tuple[int, int], ...]
    active_type: TetrominoType
    held: TetrominoType
    queue: Tuple[TetrominoType, ...]
    score: int
    lines: int
    pieces: int
    can_hold: bool
    state: SessionState


def _parse_command(command: object) -> Optional[Command]:
    if isinstance(command, Command):
        return command
    try:
        return Command(command)
    except ValueError:
        return None


class Session:
    """Single-player game session."""

    def __init__(self, config: Optional[SessionConfig] = None) -> None:
        self.config = config or SessionConfig()
        self._rng = random.Random(self.config.seed)
        self._input = InputDebouncer(Command)
        self._timer = GravityTimer(self.config.long_tick)
        self._game = GameState(rng=self._rng, queue_size=self.config.queue_size)
        self._state = SessionState.PLAYING
        self.restart()

    # Queries ----------------------------------------------------------
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def game(self) -> GameState:
        """Underlying piece/queue/hold state.  Treat as read-only."""

        return self._game

    @property
    def tick_count(self) -> int:
        return self._timer.count

    def snapshot(self) -> Snapshot:
        game = self._game
        active = game.active
        return Snapshot(
            board=tuple(game.board.cells()),
            active=tuple(active.blocks()) if active else (),
            active_type=active.shape if active else TetrominoType.NONE,
            held=game.held,
            queue=tuple(game.queue),
            score=game.score,
            lines=game.lines,
            pieces=game.pieces,
            can_hold=game.can_hold,
            state=self._state,
        )

    def render_grid(self) -> List[List[int]]:
        """Return the board grid with the active piece overlaid."""

        return render_grid(self._game.board, self._game.active)

    # Input ------------------------------------------------------------
    def press(self, command: Command | str, repeat: bool = False) -> None:
        """Record a key-down for ``command``; ``repeat`` marks OS auto-repeat."""

        parsed = _parse_command(command)
        if parsed is not None:
            self._input.key_down(parsed, repeat)

    def release(self, command: Command | str) -> None:
        parsed = _parse_command(command)
        if parsed is not None:
            self._input.key_up(parsed)

    # Entry points -----------------------------------------------------
    def restart(self) -> None:
        """Start a fresh game: new board, queue and score."""

        self._game.reset_game()
        self._timer.reset()
        if self._game.topped_out:
            self._game_over()
        else:
            self._state = SessionState.PLAYING
            LOGGER.info("Game started")

    def tick(self) -> None:
        """Advance the session by one tick.

        Debounced key presses are applied before gravity, so a move or
        rotation pressed during the tick that would lock the piece still
        counts.
        """

        for command in self._input.consume():
            self.dispatch(command)
        if self._state is not SessionState.PLAYING:
            return
        if not self._timer.advance():
            return
        self._timer.reset()
        if self._game.try_move(0, 1):
            return
        self._lock()

    def dispatch(self, command: Command | str) -> bool:
        """Apply one command and return ``True`` if it changed anything.

        Unknown commands, and gameplay commands while paused or over, are
        ignored.
        """

        parsed = _parse_command(command)
        if parsed is None:
            LOGGER.debug("Ignoring unknown command %r", command)
            return False

        if parsed is Command.RESTART:
            self.restart()
            return True
        if parsed is Command.PAUSE:
            if self._state is not SessionState.PLAYING:
                return False
            self._state = SessionState.PAUSED
            LOGGER.info("Paused")
            return True
        if parsed is Command.RESUME:
            if self._state is not SessionState.PAUSED:
                return False
            self._state = SessionState.PLAYING
            LOGGER.info("Resumed")
            return True

        if self._state is not SessionState.PLAYING:
            LOGGER.debug("Ignoring %s while %s", parsed.value, self._state.value)
            return False

        game = self._game
        if parsed is Command.MOVE_LEFT:
            return game.try_move(-1, 0)
        if parsed is Command.MOVE_RIGHT:
            return game.try_move(1, 0)
        if parsed is Command.ROTATE_CW:
            return game.try_rotate(clockwise=True)
        if parsed is Command.ROTATE_CCW:
            return game.try_rotate(clockwise=False)
        if parsed is Command.SOFT_DROP:
            was_due = self._timer.due
            self._timer.force()
            return not was_due
        if parsed is Command.HARD_DROP:
            rows = game.hard_drop()
            was_due = self._timer.due
            self._timer.force()
            return rows > 0 or not was_due
        # Command.HOLD
        if not game.can_hold:
            return False
        game.swap_hold()
        if game.topped_out:
            self._game_over()
        return True

    # Internal helpers -------------------------------------------------
    def _lock(self) -> None:
        cleared = self._game.lock_active()
        if cleared:
            LOGGER.info("Cleared %d row(s). Score: %d", cleared, self._game.score)
        if self._game.topped_out:
            self._game_over()

    def _game_over(self) -> None:
        self._state = SessionState.GAME_OVER
        LOGGER.info("Game over. Score: %d", self._game.score)
