"""Tetromino definitions: geometry, spawn anchors and wall-kick offsets.

Coordinates throughout this module are ``(x, y)`` pairs with ``x`` growing to
the right and ``y`` growing downwards, matching the board's row order.  A
piece's ``origin`` is an anchor from which its four cell offsets are applied;
it is not necessarily one of the occupied cells.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Tuple

Offset = Tuple[int, int]
RotationState = Tuple[Offset, Offset, Offset, Offset]

ROTATION_STATES = 4


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes.

    ``NONE`` is a sentinel for "no piece", used by the hold slot before the
    first hold.
    """

    I = "I"
    J = "J"
    L = "L"
    O = "O"
    S = "S"
    T = "T"
    Z = "Z"
    NONE = "NONE"


PLAYABLE_TYPES: Tuple[TetrominoType, ...] = tuple(
    t for t in TetrominoType if t is not TetrominoType.NONE
)


# Offsets for rotation states 0..3 of each shape.  State 0 is the spawn
# orientation; each following state is a quarter turn clockwise.  The O piece
# occupies the same 2x2 square in every state.
TETROMINO_SHAPES: Dict[TetrominoType, Tuple[RotationState, ...]] = {
    TetrominoType.I: (
        ((-1, 0), (0, 0), (1, 0), (2, 0)),
        ((0, -1), (0, 0), (0, 1), (0, 2)),
        ((-2, 0), (-1, 0), (0, 0), (1, 0)),
        ((0, -2), (0, -1), (0, 0), (0, 1)),
    ),
    TetrominoType.J: (
        ((-1, -1), (-1, 0), (0, 0), (1, 0)),
        ((0, -1), (1, -1), (0, 0), (0, 1)),
        ((-1, 0), (0, 0), (1, 0), (1, 1)),
        ((0, -1), (0, 0), (0, 1), (-1, 1)),
    ),
    TetrominoType.L: (
        ((1, -1), (-1, 0), (0, 0), (1, 0)),
        ((0, -1), (0, 0), (0, 1), (1, 1)),
        ((-1, 0), (0, 0), (1, 0), (-1, 1)),
        ((-1, -1), (0, -1), (0, 0), (0, 1)),
    ),
    TetrominoType.O: (
        ((0, 0), (1, 0), (0, 1), (1, 1)),
        ((0, 0), (1, 0), (0, 1), (1, 1)),
        ((0, 0), (1, 0), (0, 1), (1, 1)),
        ((0, 0), (1, 0), (0, 1), (1, 1)),
    ),
    TetrominoType.S: (
        ((0, -1), (1, -1), (-1, 0), (0, 0)),
        ((0, -1), (0, 0), (1, 0), (1, 1)),
        ((0, 0), (1, 0), (-1, 1), (0, 1)),
        ((-1, -1), (-1, 0), (0, 0), (0, 1)),
    ),
    TetrominoType.T: (
        ((0, -1), (-1, 0), (0, 0), (1, 0)),
        ((0, -1), (0, 0), (1, 0), (0, 1)),
        ((-1, 0), (0, 0), (1, 0), (0, 1)),
        ((0, -1), (-1, 0), (0, 0), (0, 1)),
    ),
    TetrominoType.Z: (
        ((-1, -1), (0, -1), (0, 0), (1, 0)),
        ((1, -1), (0, 0), (1, 0), (0, 1)),
        ((-1, 0), (0, 0), (0, 1), (1, 1)),
        ((0, -1), (-1, 0), (0, 0), (-1, 1)),
    ),
}


def cell_offsets(shape: TetrominoType, rotation: int) -> RotationState:
    """Return the four ``(dx, dy)`` offsets for ``shape`` at ``rotation``.

    Parameters
    ----------
    shape:
        The :class:`TetrominoType` to query.  ``NONE`` has no geometry.
    rotation:
        Index of the desired rotation state.  Values are wrapped so any integer
        is accepted.

    Raises:
        ValueError: If ``shape`` is the ``NONE`` sentinel.
    """

    if shape is TetrominoType.NONE:
        raise ValueError("The NONE sentinel has no cells")
    return TETROMINO_SHAPES[shape][rotation % ROTATION_STATES]


def spawn_origin(shape: TetrominoType) -> Offset:
    """Return the anchor a freshly spawned ``shape`` is placed at.

    I and O keep all their cells at or below their origin row in the spawn
    orientation, the other shapes reach one row above it.
    """

    if shape in (TetrominoType.I, TetrominoType.O):
        return (4, 0)
    return (4, 1)


# Wall kicks for quarter turns, keyed by ``(from_state, to_state)``.  These are
# the usual SRS test lists with the y axis flipped to point down and the
# leading ``(0, 0)`` test dropped (the resolver always tries that first).
_JLSTZ_QUARTER_KICKS: Dict[Tuple[int, int], Tuple[Offset, ...]] = {
    (0, 1): ((-1, 0), (-1, -1), (0, 2), (-1, 2)),
    (1, 0): ((1, 0), (1, 1), (0, -2), (1, -2)),
    (1, 2): ((1, 0), (1, 1), (0, -2), (1, -2)),
    (2, 1): ((-1, 0), (-1, -1), (0, 2), (-1, 2)),
    (2, 3): ((1, 0), (1, -1), (0, 2), (1, 2)),
    (3, 2): ((-1, 0), (-1, 1), (0, -2), (-1, -2)),
    (3, 0): ((-1, 0), (-1, 1), (0, -2), (-1, -2)),
    (0, 3): ((1, 0), (1, -1), (0, 2), (1, 2)),
}

_I_QUARTER_KICKS: Dict[Tuple[int, int], Tuple[Offset, ...]] = {
    (0, 1): ((-2, 0), (1, 0), (-2, 1), (1, -2)),
    (1, 0): ((2, 0), (-1, 0), (2, -1), (-1, 2)),
    (1, 2): ((-1, 0), (2, 0), (-1, -2), (2, 1)),
    (2, 1): ((1, 0), (-2, 0), (1, 2), (-2, -1)),
    (2, 3): ((2, 0), (-1, 0), (2, -1), (-1, 2)),
    (3, 2): ((-2, 0), (1, 0), (-2, 1), (1, -2)),
    (3, 0): ((1, 0), (-2, 0), (1, 2), (-2, -1)),
    (0, 3): ((-1, 0), (2, 0), (-1, -2), (2, 1)),
}

_HALF_TURN_KICKS: Tuple[Offset, ...] = ((0, -1), (1, 0), (-1, 0), (0, 1))

# The I piece's cell table pivots around a cell rather than around the centre
# of its 4x4 box.  Turning clockwise *into* each state moves the origin by the
# amount below so the piece keeps turning about that centre.
_I_CENTRE_SHIFT: Dict[int, Offset] = {1: (1, 0), 2: (0, 1), 3: (-1, 0), 0: (0, -1)}


def _i_centre_shift(from_state: int, to_state: int) -> Offset:
    dx = dy = 0
    state = from_state
    while state != to_state:
        state = (state + 1) % ROTATION_STATES
        sx, sy = _I_CENTRE_SHIFT[state]
        dx += sx
        dy += sy
    return (dx, dy)


def _kicks_for(shape: TetrominoType, from_state: int, to_state: int) -> Tuple[Offset, ...]:
    if shape is TetrominoType.O or from_state == to_state:
        return ()

    if (from_state, to_state) not in _JLSTZ_QUARTER_KICKS:
        return _HALF_TURN_KICKS
    table = _I_QUARTER_KICKS if shape is TetrominoType.I else _JLSTZ_QUARTER_KICKS
    return table[(from_state, to_state)]


def _build_kick_table() -> Dict[Tuple[TetrominoType, int, int], Tuple[Offset, ...]]:
    """Pre-compute kick lists for every directed transition of every shape."""

    return {
        (shape, a, b): _kicks_for(shape, a, b)
        for shape in PLAYABLE_TYPES
        for a in range(ROTATION_STATES)
        for b in range(ROTATION_STATES)
    }


KICK_TABLE = _build_kick_table()


def kick_offsets(shape: TetrominoType, from_state: int, to_state: int) -> Tuple[Offset, ...]:
    """Return the ordered origin displacements to try for a rotation."""

    return KICK_TABLE[(shape, from_state % ROTATION_STATES, to_state % ROTATION_STATES)]


@dataclass(frozen=True)
class Tetromino:
    """Active falling piece in the game.

    Instances are immutable; :meth:`moved` and :meth:`rotated` return new
    pieces.
    """

    shape: TetrominoType
    rotation: int = 0
    origin: Offset = (0, 0)  # (x, y)

    @classmethod
    def spawn(cls, shape: TetrominoType, rotation: int = 0) -> "Tetromino":
        """Return ``shape`` placed at its spawn anchor."""

        return cls(shape, rotation % ROTATION_STATES, spawn_origin(shape))

    def moved(self, dx: int, dy: int) -> "Tetromino":
        """Return a copy translated by ``dx`` columns and ``dy`` rows."""

        x, y = self.origin
        return replace(self, origin=(x + dx, y + dy))

    def rotated(self, direction: int = 1) -> "Tetromino":
        """Return a copy turned a quarter clockwise (``direction > 0``) or
        counter-clockwise.

        The origin stays put except for the I piece, which shifts so that it
        turns about the centre of its 4x4 box.
        """

        step = 1 if direction > 0 else -1
        rotation = (self.rotation + step) % ROTATION_STATES
        if self.shape is not TetrominoType.I:
            return replace(self, rotation=rotation)
        dx, dy = _i_centre_shift(self.rotation, rotation)
        x, y = self.origin
        return replace(self, rotation=rotation, origin=(x + dx, y + dy))

    def blocks(self) -> List[Offset]:
        """Return the absolute ``(x, y)`` coordinates of the four cells."""

        x, y = self.origin
        return [(x + dx, y + dy) for dx, dy in cell_offsets(self.shape, self.rotation)]
