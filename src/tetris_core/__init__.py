"""Falling-block puzzle engine with a tick-driven session controller."""

from .board import Board, Cell
from .config import SessionConfig
from .game_state import GameState, SCORE_TABLE, find_spawn
from .input import InputDebouncer, KeyState
from .rotation import rotate
from .session import Command, Session, SessionState, Snapshot
from .tetromino import Tetromino, TetrominoType, cell_offsets, kick_offsets, spawn_origin
from .timing import GravityTimer
from .utils import can_move, is_legal, render_grid

__all__ = [
    "Board",
    "Cell",
    "Command",
    "GameState",
    "GravityTimer",
    "InputDebouncer",
    "KeyState",
    "SCORE_TABLE",
    "Session",
    "SessionConfig",
    "SessionState",
    "Snapshot",
    "Tetromino",
    "TetrominoType",
    "can_move",
    "cell_offsets",
    "find_spawn",
    "is_legal",
    "kick_offsets",
    "render_grid",
    "rotate",
    "spawn_origin",
]
