from __future__ import annotations

import pytest

from tetris_core.board import Board, Cell, HEIGHT, WIDTH
from tetris_core.tetromino import Tetromino, TetrominoType


def test_empty_board_has_no_cells() -> None:
    board = Board()
    assert len(board) == 0
    assert list(board.cells()) == []
    assert board.width == WIDTH
    assert board.height == HEIGHT


def test_from_rows_aligns_to_bottom() -> None:
    board = Board.from_rows(["T.........", "IIII......"])
    cells = set(board.cells())
    assert Cell(0, 18, TetrominoType.T) in cells
    assert Cell(3, 19, TetrominoType.I) in cells
    assert len(board) == 5
    assert board.to_rows()[-2:] == ["T.........", "IIII......"]


def test_from_cells_rejects_bad_cells() -> None:
    with pytest.raises(ValueError):
        Board.from_cells([(0, 0, TetrominoType.I), (0, 0, TetrominoType.J)])
    with pytest.raises(ValueError):
        Board.from_cells([(10, 0, TetrominoType.I)])
    with pytest.raises(ValueError):
        Board.from_cells([(0, 0, TetrominoType.NONE)])


def test_grid_is_read_only() -> None:
    board = Board()
    with pytest.raises(ValueError):
        board.grid[0, 0] = 1


def test_get_cell_bounds() -> None:
    board = Board()
    assert board.get_cell(0, 0) == 0
    with pytest.raises(IndexError):
        board.get_cell(20, 0)


def test_is_empty_treats_sides_and_floor_as_occupied() -> None:
    board = Board.from_cells([(2, 5, TetrominoType.S)])
    assert not board.is_empty(5, 2)
    assert board.is_empty(5, 3)
    assert not board.is_empty(0, -1)
    assert not board.is_empty(0, WIDTH)
    assert not board.is_empty(HEIGHT, 0)
    assert board.is_empty(-1, 0)


def test_lock_without_full_rows_keeps_existing_cells() -> None:
    board = Board.from_rows(["J.........", "LL...ZZ..."])
    piece = Tetromino(TetrominoType.O, 0, (8, 18))
    new_board, cleared = board.lock_and_clear(piece)
    assert cleared == 0
    assert set(board.cells()) <= set(new_board.cells())
    assert len(new_board) == len(board) + 4
    # the original board is untouched
    assert len(board) == 5


def test_single_row_clear_shifts_cells_above() -> None:
    board = Board.from_rows(["T.........", "JJJJJJJJJ."])
    piece = Tetromino(TetrominoType.I, 1, (9, 17))  # upright, rows 16..19
    new_board, cleared = board.lock_and_clear(piece)
    assert cleared == 1
    assert set(new_board.cells()) == {
        Cell(0, 19, TetrominoType.T),
        Cell(9, 17, TetrominoType.I),
        Cell(9, 18, TetrominoType.I),
        Cell(9, 19, TetrominoType.I),
    }


def test_split_clear_shifts_by_rows_cleared_below() -> None:
    board = Board.from_rows(
        [
            "...L......",
            "IIIIIIIII.",
            "T.........",
            "IIIIIIIII.",
        ]
    )
    piece = Tetromino(TetrominoType.I, 1, (9, 17))
    new_board, cleared = board.lock_and_clear(piece)
    assert cleared == 2
    assert new_board.to_rows()[-2:] == ["...L.....I", "T........I"]
    assert len(new_board) == 4
    positions = [(c.x, c.y) for c in new_board.cells()]
    assert len(positions) == len(set(positions))
    assert all(0 <= y < HEIGHT for _, y in positions)


def test_tetris_clears_four_rows() -> None:
    board = Board.from_rows(["ZZZZZZZZZ."] * 4)
    new_board, cleared = board.lock_and_clear(Tetromino(TetrominoType.I, 1, (9, 17)))
    assert cleared == 4
    assert len(new_board) == 0
    assert board.full_rows() == []


def test_cells_above_the_top_are_discarded() -> None:
    piece = Tetromino(TetrominoType.I, 1, (0, 0))  # rows -1..2
    new_board, cleared = Board().lock_and_clear(piece)
    assert cleared == 0
    assert {(c.x, c.y) for c in new_board.cells()} == {(0, 0), (0, 1), (0, 2)}


def test_lock_outside_the_board_raises() -> None:
    with pytest.raises(IndexError):
        Board().lock_and_clear(Tetromino(TetrominoType.O, 0, (9, 0)))
