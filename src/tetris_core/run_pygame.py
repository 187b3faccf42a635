"""Simple pygame front-end for the Tetris engine.

This module provides a minimal playable version of Tetris on top of
:class:`~tetris_core.session.Session`.  It only drives the session: a clock
calls :meth:`Session.tick` every ``tick_ms`` and keyboard events are passed
through :meth:`Session.press` / :meth:`Session.release`.  pygame's key repeat
supplies the auto-repeat cadence for held keys.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Dict, Optional, Set

import pygame

from .board import Board, PIECE_VALUES
from .config import SessionConfig
from .session import Command, Session, SessionState
from .tetromino import TetrominoType, cell_offsets

LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 30
# Frames per second to run the game loop at
FPS = 60
# Width of the side panel showing hold, queue and score
PANEL_WIDTH = 6 * CELL_SIZE
# pygame key repeat (delay, interval) in milliseconds
KEY_REPEAT = (170, 50)

# Colours for each tetromino type
SHAPE_COLORS = {
    TetrominoType.I: (0, 255, 255),
    TetrominoType.O: (255, 255, 0),
    TetrominoType.T: (128, 0, 128),
    TetrominoType.S: (0, 255, 0),
    TetrominoType.Z: (255, 0, 0),
    TetrominoType.J: (0, 0, 255),
    TetrominoType.L: (255, 165, 0),
}

# Mapping from the integer stored in the board grid to a colour
CELL_COLORS = {0: (0, 0, 0)}
for shape, value in PIECE_VALUES.items():
    CELL_COLORS[value] = SHAPE_COLORS[shape]

KEY_COMMANDS: Dict[int, Command] = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_SPACE: Command.HARD_DROP,
    pygame.K_UP: Command.ROTATE_CW,
    pygame.K_x: Command.ROTATE_CW,
    pygame.K_z: Command.ROTATE_CCW,
    pygame.K_c: Command.HOLD,
    pygame.K_LSHIFT: Command.HOLD,
    pygame.K_r: Command.RESTART,
}
PAUSE_KEY = pygame.K_p


def command_for_key(key: int, state: SessionState) -> Optional[Command]:
    """Translate a pygame key into a session command.

    The pause key toggles, so its command depends on the session state.
    """

    if key == PAUSE_KEY:
        return Command.RESUME if state is SessionState.PAUSED else Command.PAUSE
    return KEY_COMMANDS.get(key)


def draw_cell(screen: pygame.Surface, x: int, y: int, color, size: int = CELL_SIZE) -> None:
    rect = pygame.Rect(x, y, size, size)
    pygame.draw.rect(screen, color, rect)
    pygame.draw.rect(screen, (50, 50, 50), rect, 1)


def draw_board(screen: pygame.Surface, session: Session) -> None:
    """Render the board with the active piece overlaid."""

    for r, row in enumerate(session.render_grid()):
        for c, value in enumerate(row):
            draw_cell(screen, c * CELL_SIZE, r * CELL_SIZE, CELL_COLORS[value])


def draw_preview(screen: pygame.Surface, shape: TetrominoType, left: int, top: int) -> None:
    """Draw a small picture of ``shape`` in its spawn orientation."""

    if shape is TetrominoType.NONE:
        return
    size = CELL_SIZE // 2
    for dx, dy in cell_offsets(shape, 0):
        draw_cell(screen, left + (dx + 1) * size, top + (dy + 1) * size, SHAPE_COLORS[shape], size)


def draw_panel(screen: pygame.Surface, font: pygame.font.Font, session: Session) -> None:
    snap = session.snapshot()
    left = Board.width * CELL_SIZE + 10
    screen.blit(font.render("Hold", True, (255, 255, 255)), (left, 10))
    draw_preview(screen, snap.held, left, 30)
    screen.blit(font.render("Next", True, (255, 255, 255)), (left, 100))
    for i, shape in enumerate(snap.queue):
        draw_preview(screen, shape, left, 120 + i * 2 * CELL_SIZE)
    screen.blit(font.render(f"Score: {snap.score}", True, (255, 255, 255)), (left, 440))
    if snap.state is not SessionState.PLAYING:
        screen.blit(font.render(snap.state.value, True, (255, 80, 80)), (left, 470))


class GameRunner:
    """Drive a session from pygame's clock and keyboard."""

    def __init__(self, config: Optional[SessionConfig] = None) -> None:
        self.session = Session(config or SessionConfig.from_env())
        self._running = False
        self._held_keys: Set[int] = set()
        self._tick_accum = 0

    @property
    def running(self) -> bool:
        return self._running

    def handle_event(self, event: pygame.event.Event) -> None:
        """Forward one pygame event to the session."""

        if event.type == pygame.QUIT:
            self._running = False
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self._running = False
                return
            # pygame does not flag repeats, a key-down for a key we already
            # hold is one.
            repeat = event.key in self._held_keys
            self._held_keys.add(event.key)
            command = command_for_key(event.key, self.session.state)
            if command is not None:
                self.session.press(command, repeat=repeat)
        elif event.type == pygame.KEYUP:
            self._held_keys.discard(event.key)
            if event.key == PAUSE_KEY:
                self.session.release(Command.PAUSE)
                self.session.release(Command.RESUME)
                return
            command = KEY_COMMANDS.get(event.key)
            if command is not None:
                self.session.release(command)

    def advance(self, dt: int) -> int:
        """Run as many session ticks as ``dt`` milliseconds cover."""

        self._tick_accum += dt
        ticks = 0
        tick_ms = self.session.config.tick_ms
        while self._tick_accum >= tick_ms:
            self._tick_accum -= tick_ms
            self.session.tick()
            ticks += 1
        return ticks

    async def _run_loop(self) -> None:
        # Ensure SDL/pygame binds to the visible canvas in the page when running on Web.
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_CANVAS_ELEMENT_ID", "#canvas")
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_KEYBOARD_ELEMENT", "#canvas")
        pygame.init()
        pygame.key.set_repeat(*KEY_REPEAT)
        screen = pygame.display.set_mode(
            (Board.width * CELL_SIZE + PANEL_WIDTH, Board.height * CELL_SIZE)
        )
        pygame.display.set_caption("Tetris")
        font = pygame.font.Font(None, 24)
        clock = pygame.time.Clock()

        self._running = True
        while self._running:
            dt = clock.tick(FPS)
            for event in pygame.event.get():
                self.handle_event(event)
            self.advance(dt)

            screen.fill((0, 0, 0))
            draw_board(screen, self.session)
            draw_panel(screen, font, self.session)
            pygame.display.flip()

            # Yield to the browser/host event loop to keep UI responsive
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Game stopped")


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    asyncio.run(GameRunner()._run_loop())


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
