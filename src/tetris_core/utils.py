"""Utility helpers for the engine."""

from __future__ import annotations

from typing import Optional

from .field import Cell, Field, Grid
from .tetromino import Tetromino


def can_move(field: Field, tetromino: Tetromino, dx: int, dy: int) -> bool:
    """Return ``True`` if ``tetromino`` can move by ``dx`` and ``dy`` on ``field``.

    Every destination cell must be empty.  Border cells and positions outside
    the grid count as occupied, so no separate bounds check is needed.
    """

    for x, y in tetromino.cells():
        if not field.is_empty(y + dy, x + dx):
            return False
    return True


def placement_is_valid(field: Field, tetromino: Tetromino) -> bool:
    """Return ``True`` if ``tetromino`` fits where it currently stands."""

    return can_move(field, tetromino, 0, 0)


def render_grid(field: Field, active: Optional[Tetromino] = None) -> Grid:
    """Return a copy of the field grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without settling the piece.  Blocks of the active piece that sit on the
    border or outside the grid are hidden, as they are while a piece spawns.
    """

    grid = field.snapshot()
    if active is not None:
        height, width = grid.shape
        for x, y in active.cells():
            if 0 <= y < height and 0 <= x < width and grid[y, x] != Cell.BORDER:
                grid[y, x] = active.color
    return grid
