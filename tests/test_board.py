from __future__ import annotations

import numpy as np
import pytest

from tetris_core.board import HEIGHT, MARGIN, WIDTH, Board, Cell
from tetris_core.tetromino import Piece, PieceKind
from tetris_core.utils import is_legal


def _fill_row(board: Board, y: int, skip: tuple[int, ...] = ()) -> None:
    for x in range(board.left, board.left + board.width):
        if x not in skip:
            board.set_cell(x, y, Cell.LOCKED)


def test_new_board_has_border_margin_and_empty_playfield() -> None:
    board = Board()
    assert board.grid.shape == (HEIGHT + 2 * MARGIN, WIDTH + 2 * MARGIN)
    rows, cols = board.grid.shape
    for y in range(rows):
        for x in range(cols):
            expected = Cell.EMPTY if board.is_visible(x, y) else Cell.BORDER
            assert board.get_cell(x, y) == expected


def test_get_and_set_cell_reject_out_of_bounds() -> None:
    board = Board()
    with pytest.raises(IndexError):
        board.get_cell(-1, 0)
    with pytest.raises(IndexError):
        board.set_cell(0, board.grid.shape[0], Cell.LOCKED)


def test_is_legal_on_empty_cells() -> None:
    board = Board()
    piece = Piece(PieceKind.T, 0, (MARGIN, MARGIN))
    assert is_legal(board, piece)


@pytest.mark.parametrize("blocker", [Cell.LOCKED, Cell.BORDER])
def test_is_legal_rejects_occupied_cells(blocker) -> None:
    board = Board()
    piece = Piece(PieceKind.O, 0, (5, 10))
    board.set_cell(6, 11, blocker)
    assert not is_legal(board, piece)


def test_is_legal_rejects_border_and_out_of_bounds() -> None:
    board = Board()
    # Touches the left border column.
    assert not is_legal(board, Piece(PieceKind.O, 0, (MARGIN - 1, 10)))
    # Negative coordinates must not wrap around to the far side of the grid.
    assert not is_legal(board, Piece(PieceKind.O, 0, (-1, 10)))
    rows, cols = board.grid.shape
    assert not is_legal(board, Piece(PieceKind.I, 0, (cols - 2, 5)))
    assert not is_legal(board, Piece(PieceKind.I, 1, (5, rows - 2)))


def test_falling_cells_do_not_block() -> None:
    board = Board()
    piece = Piece(PieceKind.T, 0, (5, 5))
    board.draw(piece, Cell.FALLING)
    assert is_legal(board, piece.moved(0, 1))
    assert is_legal(board, piece.rotated())


def test_is_legal_does_not_mutate() -> None:
    board = Board()
    board.set_cell(6, 11, Cell.LOCKED)
    before = board.grid.copy()
    is_legal(board, Piece(PieceKind.O, 0, (5, 10)))
    is_legal(board, Piece(PieceKind.O, 0, (5, 2)))
    assert np.array_equal(board.grid, before)


def test_draw_and_erase_footprint() -> None:
    board = Board()
    piece = Piece(PieceKind.L, 2, (4, 4))
    board.draw(piece)
    assert board.count(Cell.FALLING) == 4
    board.erase(piece)
    assert board.count(Cell.FALLING) == 0
    assert board.count(Cell.EMPTY) == WIDTH * HEIGHT


def test_full_rows_only_counts_visible_locked_rows() -> None:
    board = Board()
    _fill_row(board, board.bottom)
    _fill_row(board, board.bottom - 1, skip=(board.left,))
    assert board.full_rows([board.bottom - 1, board.bottom, board.bottom + 1]) == [
        board.bottom
    ]


def test_falling_cells_do_not_complete_a_row() -> None:
    board = Board()
    _fill_row(board, board.bottom, skip=(board.left,))
    board.set_cell(board.left, board.bottom, Cell.FALLING)
    assert not board.is_row_full(board.bottom)


def test_collapse_without_full_rows_changes_nothing() -> None:
    board = Board()
    _fill_row(board, board.bottom, skip=(board.left + 3,))
    board.set_cell(board.left + 1, board.bottom - 4, Cell.LOCKED)
    before = board.grid.copy()
    assert board.collapse_full_rows() == 0
    assert np.array_equal(board.grid, before)


def test_collapse_single_row_shifts_rows_above_by_one() -> None:
    board = Board()
    _fill_row(board, board.bottom)
    _fill_row(board, board.bottom - 1, skip=(board.left, board.left + 1))
    board.set_cell(board.left + 4, board.bottom - 5, Cell.LOCKED)
    above = board.grid[board.top:board.bottom, :].copy()
    locked_before = board.count(Cell.LOCKED)

    assert board.collapse_full_rows() == 1

    assert board.count(Cell.LOCKED) == locked_before - WIDTH
    assert np.array_equal(board.grid[board.top + 1:board.bottom + 1, :], above)
    assert np.all(board.grid[board.top, board.left:board.left + WIDTH] == Cell.EMPTY)


def test_collapse_non_adjacent_rows_keeps_order() -> None:
    board = Board()
    _fill_row(board, board.bottom)
    board.set_cell(board.left, board.bottom - 1, Cell.LOCKED)
    _fill_row(board, board.bottom - 2)
    board.set_cell(board.left + 9, board.bottom - 3, Cell.LOCKED)

    assert board.collapse_full_rows() == 2

    visible = board.visible()
    assert visible[-1, 0] == Cell.LOCKED
    assert visible[-2, 9] == Cell.LOCKED
    assert board.count(Cell.LOCKED) == 2


def test_collapse_leaves_border_intact() -> None:
    board = Board()
    for y in range(board.bottom - 3, board.bottom + 1):
        _fill_row(board, y)
    assert board.collapse_full_rows() == 4
    assert board.count(Cell.LOCKED) == 0
    assert np.all(board.grid[:, :MARGIN] == Cell.BORDER)
    assert np.all(board.grid[-MARGIN:, :] == Cell.BORDER)
