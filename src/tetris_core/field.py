"""Field representation: the bordered grid of settled blocks."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .errors import ConfigurationError, InvariantError


Grid = NDArray[np.int8]


class Cell(IntEnum):
    """Values stored in the field grid.

    ``BORDER`` frames the playable area so neighbour lookups never leave the
    grid.  ``COLOR_k`` records the shape a settled block came from.
    """

    BORDER = -1
    EMPTY = 0
    COLOR_1 = 1
    COLOR_2 = 2
    COLOR_3 = 3
    COLOR_4 = 4
    COLOR_5 = 5
    COLOR_6 = 6
    COLOR_7 = 7


MAX_COLOR = int(Cell.COLOR_7)

# Glyphs used by :meth:`Field.format`.
BORDER_GLYPH = "#"
EMPTY_GLYPH = "."
BLOCK_GLYPH = "O"


def create_field_grid(columns: int, rows: int) -> Grid:
    """Return a new ``(rows + 2, columns + 2)`` grid with an empty interior.

    ::

        -1 -1 -1 -1
        -1  0  0 -1
        -1  0  0 -1
        -1 -1 -1 -1
    """

    if columns <= 0 or rows <= 0:
        raise ConfigurationError(f"Field must be at least 1x1, got {columns}x{rows}")
    grid = np.full((rows + 2, columns + 2), Cell.EMPTY, dtype=np.int8)
    grid[0, :] = Cell.BORDER
    grid[-1, :] = Cell.BORDER
    grid[:, 0] = Cell.BORDER
    grid[:, -1] = Cell.BORDER
    return grid


class Field:
    """Playing field holding the border frame and settled blocks.

    Interior cells are addressed with ``row`` in ``1..rows`` and ``col`` in
    ``1..columns``; row ``0``, row ``rows + 1``, column ``0`` and column
    ``columns + 1`` always hold :attr:`Cell.BORDER`.
    """

    def __init__(self, columns: int, rows: int) -> None:
        self.grid: Grid = create_field_grid(columns, rows)
        self.columns = columns
        self.rows = rows

    def cell_at(self, row: int, col: int) -> int:
        """Return the value at ``(row, col)``, border cells included.

        Raises:
            IndexError: If the coordinates are outside the grid.
        """

        if 0 <= row < self.rows + 2 and 0 <= col < self.columns + 2:
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def is_empty(self, row: int, col: int) -> bool:
        """Return ``True`` if the cell at ``(row, col)`` is empty.

        Any coordinates outside the grid are treated as occupied, just like
        the border.
        """

        if 0 <= row < self.rows + 2 and 0 <= col < self.columns + 2:
            return bool(self.grid[row, col] == Cell.EMPTY)
        return False

    def settle(self, cells: Iterable[Tuple[int, int]], color: int) -> None:
        """Write ``color`` into each ``(x, y)`` cell of a landed piece.

        Every cell is checked before anything is written.

        Raises:
            InvariantError: If ``color`` is not a block colour or a cell is
                not an empty interior cell.
        """

        if not 1 <= color <= MAX_COLOR:
            raise InvariantError(f"Cannot settle with colour {color}")
        targets = list(cells)
        for x, y in targets:
            if not (1 <= y <= self.rows and 1 <= x <= self.columns):
                raise InvariantError(f"Cannot settle outside the interior at ({x}, {y})")
            if self.grid[y, x] != Cell.EMPTY:
                raise InvariantError(f"Cannot settle onto occupied cell ({x}, {y})")
        for x, y in targets:
            self.grid[y, x] = color

    def is_line_complete(self, row: int) -> bool:
        """Return ``True`` if every interior cell of ``row`` is occupied."""

        return bool(np.all(self.grid[row, 1:-1] != Cell.EMPTY))

    def delete_line(self, row: int) -> None:
        """Remove interior ``row`` and drop everything above it by one row.

        A fresh empty row is inserted at the top of the interior.
        """

        if not 1 <= row <= self.rows:
            raise IndexError("Row out of bounds")
        self.grid[2:row + 1] = self.grid[1:row].copy()
        self.grid[1, 1:-1] = Cell.EMPTY

    def clear_completed_lines(self) -> int:
        """Clear completed rows and return how many were removed.

        Rows are scanned from the bottom up.  After a deletion the same row is
        tested again because the row above has just moved into it.
        """

        cleared = 0
        row = self.rows
        while row >= 1:
            if self.is_line_complete(row):
                self.delete_line(row)
                cleared += 1
            else:
                row -= 1
        return cleared

    def snapshot(self) -> Grid:
        """Return an independent copy of the grid."""

        return self.grid.copy()

    def format(self, *, numbered: bool = False, grid: Optional[Grid] = None) -> str:
        """Return a text picture of the field, one line per grid row.

        ``grid`` may be supplied to draw an overlay such as the one produced
        by :func:`tetris_core.utils.render_grid`.
        """

        source = self.grid if grid is None else grid
        lines: List[str] = []
        for index, row in enumerate(source):
            text = "".join(
                BORDER_GLYPH if value == Cell.BORDER else EMPTY_GLYPH if value == Cell.EMPTY else BLOCK_GLYPH
                for value in row
            )
            lines.append(f"{index:>2} {text}" if numbered else text)
        return "\n".join(lines)
