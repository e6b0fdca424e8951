"""Tetromino catalogue and the active falling piece.

Every shape is stored in a compact base-10 encoding.  Each rotation state is a
number of up to four decimal digits, one per row of a 4x4 bounding box with the
thousands digit as the top row.  A digit read as a 4-bit binary number flags
the occupied columns of its row, high bit first::

    Square   'T'     'S'     'Z'    'L'L     'L'R
    0000 0  0000 0  0000 0  0000 0  0000 0  0000 0
    0000 0  0000 0  0000 0  0000 0  0011 3  0011 3
    0110 6  0010 2  0011 3  0110 6  0001 1  0010 2
    0110 6  0111 7  0110 6  0011 3  0001 1  0010 2

A full row would need the digit ``15``, which does not fit.  The horizontal
long piece therefore uses the sentinel value ``9``: its bottom row is fully
occupied whatever the digit says.

The table is decoded once at import into a flat cache of offsets so a rotation
state can be looked up as ``variant * 16 + rotation * 4``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Sequence, Tuple

from .errors import ConfigurationError

# Relative ``(x, y)`` offset of a block inside the 4x4 bounding box.
Offset = Tuple[int, int]

# Number of blocks in a piece, which is also the side of its bounding box and
# the number of rotation states.
TETRO_SIZE = 4

# Encoded value whose bottom row is a full line.
HORIZONTAL_LINE = 9


class TetrominoType(IntEnum):
    """The seven shapes, in catalogue order."""

    SQUARE = 0
    T = 1
    S = 2
    Z = 3
    L_LEFT = 4
    L_RIGHT = 5
    LONG = 6


ENCODED_SHAPES: Tuple[Tuple[int, int, int, int], ...] = (
    (66, 66, 66, 66),
    (27, 131, 72, 232),
    (36, 231, 36, 231),
    (63, 132, 63, 132),
    (311, 17, 223, 74),
    (322, 71, 113, 47),
    (1111, HORIZONTAL_LINE, 1111, HORIZONTAL_LINE),
)


def parse_encoded_shape(value: int) -> Tuple[Offset, ...]:
    """Decode one rotation state into four ``(x, y)`` offsets.

    Offsets are returned row by row, left to right.

    Raises:
        ConfigurationError: If ``value`` is not a four digit encoding of
            exactly four distinct blocks.
    """

    if not 0 <= value < 10 ** TETRO_SIZE:
        raise ConfigurationError(f"Encoded shape {value!r} is out of range")

    full_bottom = value == HORIZONTAL_LINE
    digits = f"{value:0{TETRO_SIZE}d}"
    blocks: List[Offset] = []
    for y, digit in enumerate(digits):
        mask = int(digit)
        if full_bottom and y == TETRO_SIZE - 1:
            mask = (1 << TETRO_SIZE) - 1
        for x in range(TETRO_SIZE):
            if mask & (1 << (TETRO_SIZE - 1 - x)):
                blocks.append((x, y))

    if len(blocks) != TETRO_SIZE:
        raise ConfigurationError(
            f"Encoded shape {value} has {len(blocks)} blocks, expected {TETRO_SIZE}"
        )
    return tuple(blocks)


def build_catalogue(table: Sequence[Sequence[int]]) -> Tuple[Offset, ...]:
    """Decode ``table`` into one contiguous tuple of offsets.

    Each row of ``table`` must hold exactly four rotation states.
    """

    cache: List[Offset] = []
    for index, rotations in enumerate(table):
        if len(rotations) != TETRO_SIZE:
            raise ConfigurationError(
                f"Shape {index} has {len(rotations)} rotation states, expected {TETRO_SIZE}"
            )
        for encoded in rotations:
            cache.extend(parse_encoded_shape(encoded))
    return tuple(cache)


TETROMINO_CACHE: Tuple[Offset, ...] = build_catalogue(ENCODED_SHAPES)

if len(TETROMINO_CACHE) != len(TetrominoType) * TETRO_SIZE * TETRO_SIZE:
    raise ConfigurationError("Shape table does not match the tetromino types")


def shape_blocks(shape: int, rotation: int) -> Tuple[Offset, ...]:
    """Return the block offsets for ``shape`` at ``rotation``.

    Parameters
    ----------
    shape:
        A :class:`TetrominoType` or its integer index.
    rotation:
        Index of the desired rotation state.  Values are wrapped so any integer
        is accepted.
    """

    base = TetrominoType(shape) * TETRO_SIZE * TETRO_SIZE + (rotation % TETRO_SIZE) * TETRO_SIZE
    return TETROMINO_CACHE[base:base + TETRO_SIZE]


@dataclass
class Tetromino:
    """Active falling piece: its shape, rotation and field anchor."""

    shape: TetrominoType
    rotation: int = 0
    x: int = 0
    y: int = 0

    @property
    def color(self) -> int:
        """Cell value written into the field when this piece settles."""

        return int(self.shape) + 1

    def rotate(self, direction: int = 1) -> None:
        """Rotate the piece.

        Positive values rotate clockwise whilst negative values rotate
        counter-clockwise.  The rotation wraps around the four states.
        """

        self.rotation = (self.rotation + direction) % TETRO_SIZE

    def move(self, dx: int, dy: int) -> None:
        """Move the anchor by ``dx`` columns and ``dy`` rows."""

        self.x += dx
        self.y += dy

    def cells(self) -> List[Tuple[int, int]]:
        """Return the field ``(x, y)`` coordinates of the four blocks."""

        return [(self.x + dx, self.y + dy) for dx, dy in shape_blocks(self.shape, self.rotation)]
