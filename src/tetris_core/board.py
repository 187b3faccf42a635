"""Board representation for the Tetris playfield."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .tetromino import PLAYABLE_TYPES, Tetromino, TetrominoType


LOGGER = logging.getLogger(__name__)

# Dimensions of the standard Tetris board.
WIDTH = 10
HEIGHT = 20

Grid = NDArray[np.uint8]

# Mapping from ``TetrominoType`` to the integer stored in the grid.  The
# specific numeric values are not important as long as ``0`` represents an empty
# cell.
PIECE_VALUES = {t: i + 1 for i, t in enumerate(PLAYABLE_TYPES)}
VALUE_PIECES = {v: t for t, v in PIECE_VALUES.items()}


@dataclass(frozen=True)
class Cell:
    """A permanently placed cell."""

    x: int
    y: int
    shape: TetrominoType


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((HEIGHT, WIDTH), dtype=np.uint8)


def _freeze(grid: Grid) -> Grid:
    grid.flags.writeable = False
    return grid


class Board:
    """Tetris board holding the placed cells.

    A board is an immutable value: its grid is read-only and
    :meth:`lock_and_clear` returns a new board instead of mutating this one.
    Rows are indexed top to bottom, so ``grid[y, x]``.
    """

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self, grid: Grid | None = None) -> None:
        if grid is None:
            grid = create_empty_grid()
        elif grid.shape != (self.height, self.width):
            raise ValueError(f"Grid must have shape {(self.height, self.width)}, got {grid.shape}")
        self.grid: Grid = _freeze(np.array(grid, dtype=np.uint8))

    @classmethod
    def from_cells(cls, cells: Iterable[Cell | Tuple[int, int, TetrominoType]]) -> "Board":
        """Build a board from ``(x, y, shape)`` cells.

        Raises:
            ValueError: If a cell is off the board, repeats a position or uses
                the ``NONE`` sentinel.
        """

        grid = create_empty_grid()
        for cell in cells:
            x, y, shape = (cell.x, cell.y, cell.shape) if isinstance(cell, Cell) else cell
            if not (0 <= x < cls.width and 0 <= y < cls.height):
                raise ValueError(f"Cell ({x}, {y}) is outside the board")
            if shape not in PIECE_VALUES:
                raise ValueError(f"Cannot place a cell of type {shape!r}")
            if grid[y, x]:
                raise ValueError(f"Duplicate cell at ({x}, {y})")
            grid[y, x] = PIECE_VALUES[shape]
        return cls(grid)

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Board":
        """Build a board from text rows aligned to the bottom of the grid.

        Each row holds ``width`` characters: ``.`` for an empty cell or a
        tetromino letter.  Fewer than ``height`` rows fill the bottom of the
        board.
        """

        if len(rows) > cls.height:
            raise ValueError(f"At most {cls.height} rows are allowed")
        cells: List[Tuple[int, int, TetrominoType]] = []
        top = cls.height - len(rows)
        for offset, row in enumerate(rows):
            if len(row) != cls.width:
                raise ValueError(f"Row {offset} must have {cls.width} characters")
            for x, char in enumerate(row):
                if char != ".":
                    cells.append((x, top + offset, TetrominoType(char)))
        return cls.from_cells(cells)

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def is_empty(self, row: int, col: int) -> bool:
        """Return ``True`` if the cell at ``(row, col)`` is free for a piece.

        Positions beside or below the board are treated as occupied so that
        collision checks reject them.  Rows above the top edge are open: no
        placed cell can live there.
        """

        if not 0 <= col < self.width or row >= self.height:
            return False
        if row < 0:
            return True
        return bool(self.grid[row, col] == 0)

    def cells(self) -> Iterator[Cell]:
        """Yield every placed cell, top row first."""

        rows, cols = np.nonzero(self.grid)
        for y, x in zip(rows.tolist(), cols.tolist()):
            yield Cell(x, y, VALUE_PIECES[int(self.grid[y, x])])

    def __len__(self) -> int:
        return int(np.count_nonzero(self.grid))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.grid, other.grid))

    def __repr__(self) -> str:
        return f"Board(cells={len(self)})"

    def lock_and_clear(self, tetromino: Tetromino) -> Tuple["Board", int]:
        """Place ``tetromino`` and remove completed rows.

        Returns the new board together with the number of rows cleared.  Each
        surviving cell moves down by the number of cleared rows below it.
        Cells of the piece above the top edge are dropped.

        Raises:
            IndexError: If a cell lies beside or below the board.
        """

        grid = np.array(self.grid, dtype=np.uint8)
        value = np.uint8(PIECE_VALUES[tetromino.shape])
        for x, y in tetromino.blocks():
            if not 0 <= x < self.width or y >= self.height:
                raise IndexError("Block out of bounds")
            if y < 0:
                LOGGER.warning("Discarding cell (%d, %d) of %s locked above the board", x, y, tetromino.shape.value)
                continue
            grid[y, x] = value

        full_rows = np.all(grid != 0, axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if not cleared:
            return Board(grid), 0

        # For every row, count the cleared rows strictly below it.
        below = np.cumsum(full_rows[::-1])[::-1] - full_rows
        compacted = create_empty_grid()
        for y in np.flatnonzero(~full_rows):
            compacted[y + below[y]] = grid[y]
        return Board(compacted), cleared

    def full_rows(self) -> List[int]:
        """Return the indices of rows with every cell occupied."""

        return np.flatnonzero(np.all(self.grid != 0, axis=1)).tolist()

    def to_rows(self) -> List[str]:
        """Return the grid as text rows, the inverse of :meth:`from_rows`."""

        return [
            "".join(VALUE_PIECES[int(v)].value if v else "." for v in row)
            for row in self.grid
        ]
