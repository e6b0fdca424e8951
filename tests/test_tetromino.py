from __future__ import annotations

import pytest

from tetris_core.errors import ConfigurationError
from tetris_core.tetromino import (
    ENCODED_SHAPES,
    TETROMINO_CACHE,
    Tetromino,
    TetrominoType,
    build_catalogue,
    parse_encoded_shape,
    shape_blocks,
)


def test_catalogue_holds_every_rotation_of_every_shape() -> None:
    assert len(TETROMINO_CACHE) == 7 * 4 * 4
    for shape in TetrominoType:
        for rotation in range(4):
            blocks = shape_blocks(shape, rotation)
            assert len(blocks) == 4
            assert len(set(blocks)) == 4
            assert all(0 <= x <= 3 and 0 <= y <= 3 for x, y in blocks)


def test_catalogue_is_addressed_by_flat_index() -> None:
    base = TetrominoType.Z * 16 + 2 * 4
    assert shape_blocks(TetrominoType.Z, 2) == TETROMINO_CACHE[base:base + 4]


def test_square_and_t_decode_to_expected_offsets() -> None:
    assert shape_blocks(TetrominoType.SQUARE, 0) == ((1, 2), (2, 2), (1, 3), (2, 3))
    assert shape_blocks(TetrominoType.T, 0) == ((2, 2), (1, 3), (2, 3), (3, 3))


def test_long_piece_uses_horizontal_sentinel() -> None:
    assert shape_blocks(TetrominoType.LONG, 0) == ((3, 0), (3, 1), (3, 2), (3, 3))
    assert shape_blocks(TetrominoType.LONG, 1) == ((0, 3), (1, 3), (2, 3), (3, 3))
    assert parse_encoded_shape(9) == ((0, 3), (1, 3), (2, 3), (3, 3))


def test_rotation_index_wraps() -> None:
    assert shape_blocks(TetrominoType.L_LEFT, 5) == shape_blocks(TetrominoType.L_LEFT, 1)
    assert shape_blocks(TetrominoType.L_LEFT, -1) == shape_blocks(TetrominoType.L_LEFT, 3)


@pytest.mark.parametrize("value", [12, 0, 7777, 10000, -1])
def test_malformed_encoding_is_rejected(value: int) -> None:
    with pytest.raises(ConfigurationError):
        parse_encoded_shape(value)


def test_table_rows_need_four_rotations() -> None:
    with pytest.raises(ConfigurationError):
        build_catalogue([(66, 66, 66)])
    assert build_catalogue(ENCODED_SHAPES) == TETROMINO_CACHE


def test_tetromino_cells_follow_anchor_and_rotation() -> None:
    piece = Tetromino(TetrominoType.LONG, x=2, y=5)
    assert piece.color == 7
    assert piece.cells() == [(5, 5), (5, 6), (5, 7), (5, 8)]

    piece.rotate()
    assert piece.rotation == 1
    assert piece.cells() == [(2, 8), (3, 8), (4, 8), (5, 8)]

    piece.move(-1, 1)
    assert (piece.x, piece.y) == (1, 6)

    piece.rotate(-1)
    piece.rotate(-1)
    assert piece.rotation == 3
