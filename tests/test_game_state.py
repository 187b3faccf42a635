from __future__ import annotations

import random

from tetris_core.board import Board
from tetris_core.game_state import GameState, QUEUE_SIZE, SCORE_TABLE, find_spawn
from tetris_core.tetromino import PLAYABLE_TYPES, Tetromino, TetrominoType


def _state(seed: int = 0) -> GameState:
    state = GameState(rng=random.Random(seed))
    state.reset_game()
    return state


def test_reset_fills_queue_and_spawns() -> None:
    state = _state()
    assert len(state.queue) == QUEUE_SIZE
    assert all(t in PLAYABLE_TYPES for t in state.queue)
    assert state.active is not None
    assert state.held is TetrominoType.NONE
    assert state.can_hold
    assert state.score == 0
    assert not state.topped_out


def test_pop_queue_shifts_and_appends() -> None:
    state = _state(3)
    before = list(state.queue)
    popped = state.pop_queue()
    assert popped == before[0]
    assert state.queue[:4] == before[1:]
    assert len(state.queue) == QUEUE_SIZE


def test_queue_length_is_constant() -> None:
    state = _state(5)
    for _ in range(50):
        state.pop_queue()
        assert len(state.queue) == QUEUE_SIZE


def test_spawn_o_on_empty_board() -> None:
    piece = find_spawn(Board(), TetrominoType.O)
    assert piece == Tetromino(TetrominoType.O, 0, (4, 0))
    assert set(piece.blocks()) == {(4, 0), (5, 0), (4, 1), (5, 1)}


def test_spawn_tries_other_rotations() -> None:
    # Every T pointing up or sideways needs (4, 0).
    board = Board.from_cells([(4, 0, TetrominoType.Z)])
    piece = find_spawn(board, TetrominoType.T)
    assert piece == Tetromino(TetrominoType.T, 2, (4, 1))


def test_spawn_falls_back_one_row_up() -> None:
    board = Board.from_cells([(4, 1, TetrominoType.Z)])
    piece = find_spawn(board, TetrominoType.T)
    assert piece == Tetromino(TetrominoType.T, 0, (4, 0))


def test_spawn_failure_tops_out() -> None:
    state = _state()
    state.board = Board.from_cells([(4, 0, TetrominoType.Z), (4, 1, TetrominoType.Z)])
    assert find_spawn(state.board, TetrominoType.L) is None
    assert not state.spawn_tetromino(TetrominoType.L)
    assert state.topped_out
    assert state.active is None


def test_o_falls_eighteen_rows_then_locks_without_clearing() -> None:
    state = _state()
    state.active = Tetromino(TetrominoType.O, 0, (4, 0))
    for _ in range(18):
        assert state.try_move(0, 1)
    assert not state.try_move(0, 1)
    assert state.active.origin == (4, 18)
    cleared = state.lock_active()
    assert cleared == 0
    assert state.score == 0
    assert state.pieces == 1
    assert {(c.x, c.y) for c in state.board.cells()} == {(4, 18), (5, 18), (4, 19), (5, 19)}


def test_single_line_clear_scores_100() -> None:
    state = _state()
    state.board = Board.from_rows(["S.........", "JJJJJJJJJ."])
    state.active = Tetromino(TetrominoType.I, 1, (9, 17))
    assert state.lock_active() == 1
    assert state.score == 100
    assert (0, 19) in {(c.x, c.y) for c in state.board.cells()}


def test_score_for_one_to_four_lines() -> None:
    state = _state()
    for lines in (1, 2, 3, 4):
        state.board = Board.from_rows(["LLLLLLLLL."] * lines)
        state.active = Tetromino(TetrominoType.I, 1, (9, 17))
        assert state.lock_active() == lines
    assert state.score == 100 + 300 + 500 + 800 == 1700
    assert state.lines == 10
    assert SCORE_TABLE.get(0, 0) == 0


def test_hold_with_empty_slot_pulls_from_queue() -> None:
    state = _state(1)
    first = state.active.shape
    upcoming = state.queue[0]
    state.swap_hold()
    assert state.held is first
    assert state.active.shape is upcoming
    assert not state.can_hold
    assert len(state.queue) == QUEUE_SIZE

    active_before = state.active
    state.swap_hold()
    assert state.active is active_before
    assert state.held is first


def test_hold_swaps_after_lock() -> None:
    state = _state(2)
    first = state.active.shape
    state.swap_hold()
    second = state.active.shape
    state.hard_drop()
    state.lock_active()
    assert state.can_hold
    third = state.active.shape
    state.swap_hold()
    assert state.held is third
    assert state.active.shape is first
    assert state.active.origin == find_spawn(state.board, first).origin
    assert second != TetrominoType.NONE


def test_hard_drop_reports_rows() -> None:
    state = _state()
    state.active = Tetromino(TetrominoType.O, 0, (4, 0))
    assert state.hard_drop() == 18
    assert state.active.origin == (4, 18)


def test_try_rotate_reports_change() -> None:
    state = _state()
    state.active = Tetromino(TetrominoType.T, 0, (4, 5))
    assert state.try_rotate()
    assert state.active.rotation == 1
    state.active = Tetromino(TetrominoType.O, 0, (4, 5))
    assert state.try_rotate()
