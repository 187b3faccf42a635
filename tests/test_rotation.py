from __future__ import annotations

import pytest

from tetris_core.board import Board, HEIGHT, WIDTH
from tetris_core.rotation import rotate
from tetris_core.tetromino import PLAYABLE_TYPES, Tetromino, TetrominoType
from tetris_core.utils import is_legal


def test_free_rotation_keeps_origin() -> None:
    piece = Tetromino(TetrominoType.T, 0, (4, 5))
    assert rotate(Board(), piece, clockwise=True) == Tetromino(TetrominoType.T, 1, (4, 5))
    assert rotate(Board(), piece, clockwise=False) == Tetromino(TetrominoType.T, 3, (4, 5))


def test_wall_kick_off_the_left_wall() -> None:
    piece = Tetromino(TetrominoType.T, 1, (0, 5))
    turned = rotate(Board(), piece, clockwise=False)
    assert turned == Tetromino(TetrominoType.T, 0, (1, 5))


def test_i_rotates_in_place_in_open_space() -> None:
    piece = Tetromino(TetrominoType.I, 0, (4, 5))
    once = rotate(Board(), piece, clockwise=True)
    assert {x for x, _ in once.blocks()} == {5}
    assert {y for _, y in once.blocks()} == {4, 5, 6, 7}
    twice = rotate(Board(), once, clockwise=True)
    assert sorted(x for x, _ in twice.blocks()) == [3, 4, 5, 6]
    assert rotate(Board(), once, clockwise=False) == piece


def test_i_piece_kicks_off_the_right_wall() -> None:
    piece = Tetromino(TetrominoType.I, 1, (9, 5))
    turned = rotate(Board(), piece, clockwise=True)
    assert turned.rotation == 2
    assert is_legal(Board(), turned)


def test_blocked_rotation_returns_input_unchanged() -> None:
    piece = Tetromino(TetrominoType.T, 0, (4, 10))
    free = set(piece.blocks())
    board = Board.from_cells(
        (x, y, TetrominoType.Z)
        for y in range(HEIGHT)
        for x in range(WIDTH)
        if (x, y) not in free
    )
    assert rotate(board, piece, clockwise=True) is piece
    assert rotate(board, piece, clockwise=False) is piece


def test_o_rotation_never_moves_cells() -> None:
    piece = Tetromino(TetrominoType.O, 0, (8, 18))
    turned = rotate(Board(), piece)
    assert set(turned.blocks()) == set(piece.blocks())


@pytest.mark.parametrize("shape", PLAYABLE_TYPES)
def test_rotation_result_is_always_legal(shape) -> None:
    board = Board.from_rows(
        [
            "..S...J...",
            "Z.SS..JJ.I",
            "ZZ.S..J..I",
            ".Z...TT..I",
        ]
    )
    for rotation in range(4):
        for x in range(-2, WIDTH + 2):
            for y in range(HEIGHT - 6, HEIGHT + 1):
                piece = Tetromino(shape, rotation, (x, y))
                if not is_legal(board, piece):
                    continue
                for clockwise in (True, False):
                    result = rotate(board, piece, clockwise)
                    assert is_legal(board, result)
