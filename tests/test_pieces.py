"""
Tests for the shape table and the piece model.
"""

import pytest

from blockfall.game.pieces import (
    DEFAULT_SHAPES,
    TETROMINOES,
    Piece,
    ShapeTable,
    TetrominoType,
)


class TestShapeTable:
    """Tests for the static tetromino catalog."""

    def test_seven_kinds(self):
        """The default table holds one entry per tetromino kind."""
        assert len(DEFAULT_SHAPES) == 7
        assert len(TETROMINOES) == len(TetrominoType)

    def test_every_state_has_four_cells(self):
        """Every rotation state of every kind has exactly four offsets."""
        for kind in TetrominoType:
            for rotation in range(4):
                assert len(DEFAULT_SHAPES.offsets(kind, rotation)) == 4

    @pytest.mark.parametrize(
        "kind,width",
        [
            (TetrominoType.I, 4),
            (TetrominoType.O, 2),
            (TetrominoType.T, 3),
            (TetrominoType.S, 3),
            (TetrominoType.Z, 3),
            (TetrominoType.J, 3),
            (TetrominoType.L, 3),
        ],
    )
    def test_spawn_bounding_width(self, kind, width):
        """Spawn-state widths match the piece geometry."""
        assert DEFAULT_SHAPES.bounding_width(kind, 0) == width

    def test_rotation_wraps(self):
        """Rotation indices are taken modulo four."""
        assert DEFAULT_SHAPES.offsets(TetrominoType.T, 5) == DEFAULT_SHAPES.offsets(TetrominoType.T, 1)

    def test_rejects_empty_table(self):
        """An empty catalog cannot be built."""
        with pytest.raises(ValueError):
            ShapeTable([])

    def test_rejects_missing_rotation(self):
        """Each kind needs four rotation states."""
        square = ((0, 0), (1, 0), (0, 1), (1, 1))
        with pytest.raises(ValueError, match="rotation states"):
            ShapeTable([[square, square, square]])

    def test_rejects_wrong_cell_count(self):
        """Each state needs four cells."""
        square = ((0, 0), (1, 0), (0, 1), (1, 1))
        tromino = ((0, 0), (1, 0), (2, 0))
        with pytest.raises(ValueError, match="cells"):
            ShapeTable([[square, square, tromino, square]])


class TestPiece:
    """Tests for the immutable active-piece record."""

    def test_cells_are_absolute(self):
        """Cells add the origin to the offsets."""
        piece = Piece(kind=TetrominoType.O, rotation=0, x=4, y=2)
        assert piece.cells() == [(4, 2), (5, 2), (4, 3), (5, 3)]

    def test_cells_with_displacement_and_rotation(self):
        """Displacement and rotation override do not touch the piece."""
        piece = Piece(kind=TetrominoType.I, rotation=0, x=3, y=0)
        assert piece.cells(dx=1, dy=2, rotation=1) == [(4, 2), (4, 3), (4, 4), (4, 5)]
        assert piece.rotation == 0
        assert (piece.x, piece.y) == (3, 0)

    def test_moved_returns_new_piece(self):
        """moved() leaves the original untouched."""
        piece = Piece(kind=TetrominoType.T, x=3, y=0)
        moved = piece.moved(-1, 1)
        assert (moved.x, moved.y) == (2, 1)
        assert (piece.x, piece.y) == (3, 0)

    def test_with_rotation_wraps(self):
        """with_rotation() normalizes to 0..3."""
        assert Piece(kind=TetrominoType.L).with_rotation(5).rotation == 1
