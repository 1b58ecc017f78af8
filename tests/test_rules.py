import numpy as np
import pytest

from tiling_puzzles.game import (
    Board,
    PieceType,
    PlacedPiece,
    PuzzleConfig,
    RejectReason,
    is_solved,
    validate_placement,
)


def _board(*specs):
    return Board(PlacedPiece(i, kind, anchor, rot) for i, (kind, anchor, rot) in enumerate(specs))


DOMINO_6 = PuzzleConfig(rows=6, cols=6, allowed_types=(PieceType.DOMINO,))


def test_config_defaults_target_to_free_cells():
    assert DOMINO_6.target_covered_count == 36
    mutilated = PuzzleConfig(rows=6, cols=6, allowed_types=(PieceType.DOMINO,), excluded_cells={(0, 0), (5, 5)})
    assert mutilated.target_covered_count == 34
    assert isinstance(mutilated.excluded_cells, frozenset)


def test_config_rejects_inconsistent_constraints():
    with pytest.raises(ValueError):
        PuzzleConfig(rows=0, cols=3, allowed_types=(PieceType.DOMINO,))
    with pytest.raises(ValueError):
        PuzzleConfig(rows=3, cols=3, allowed_types=())
    with pytest.raises(ValueError):
        PuzzleConfig(rows=3, cols=3, allowed_types=(PieceType.DOMINO,), singleton_types={PieceType.UNIT_SQUARE})
    with pytest.raises(ValueError):
        PuzzleConfig(
            rows=3, cols=3, allowed_types=(PieceType.DOMINO,),
            restricted_cells={(PieceType.UNIT_SQUARE, (1, 1))},
        )


def test_config_rejects_cells_outside_grid():
    with pytest.raises(ValueError):
        PuzzleConfig(rows=1, cols=2, allowed_types=(PieceType.DOMINO,), excluded_cells={(9, 9)})
    with pytest.raises(ValueError):
        PuzzleConfig(rows=6, cols=6, allowed_types=(PieceType.DOMINO,), excluded_cells={(0, -1)})
    with pytest.raises(ValueError):
        PuzzleConfig(
            rows=5, cols=5, allowed_types=(PieceType.UNIT_SQUARE,),
            restricted_cells={(PieceType.UNIT_SQUARE, (5, 2))},
        )


def test_config_rejects_unreachable_target():
    with pytest.raises(ValueError):
        PuzzleConfig(rows=2, cols=2, allowed_types=(PieceType.DOMINO,), target_covered_count=5)
    with pytest.raises(ValueError):
        PuzzleConfig(
            rows=2, cols=2, allowed_types=(PieceType.DOMINO,),
            excluded_cells={(0, 0)}, target_covered_count=4,
        )
    assert PuzzleConfig(rows=2, cols=2, allowed_types=(PieceType.DOMINO,), target_covered_count=2).target_covered_count == 2


def test_full_cover_of_edge_config_is_solved():
    config = PuzzleConfig(rows=1, cols=2, allowed_types=(PieceType.DOMINO,))
    assert is_solved(config, _board((PieceType.DOMINO, (0, 0), 0)))


def test_board_derives_covered_cells_and_counts():
    board = _board((PieceType.DOMINO, (0, 0), 0), (PieceType.DOMINO, (1, 0), 90))
    assert board.covered_cells == {(0, 0), (0, 1), (1, 0), (2, 0)}
    assert board.count(PieceType.DOMINO) == 2
    assert board.count(PieceType.UNIT_SQUARE) == 0
    assert board.piece_at((2, 0)).id == 1
    assert board.piece_at((5, 5)) is None


def test_board_with_piece_returns_new_board():
    empty = Board()
    board = empty.with_piece(PlacedPiece(0, PieceType.UNIT_SQUARE, (0, 0)))
    assert len(empty) == 0 and empty.covered_cells == frozenset()
    assert len(board) == 1 and board.is_covered((0, 0))


def test_board_occupancy_array():
    board = _board((PieceType.DOMINO, (0, 1), 0))
    grid = board.occupancy(2, 3, excluded={(1, 2)})
    expected = np.array([[0, 1, 1], [0, 0, -1]], dtype=np.int8)
    assert np.array_equal(grid, expected)


def test_validate_accepts_legal_placement():
    result = validate_placement(DOMINO_6, Board(), PieceType.DOMINO, 0, (0, 0))
    assert result.accepted
    assert result.reason is None
    assert set(result.cells) == {(0, 0), (0, 1)}


@pytest.mark.parametrize("anchor, rotation", [((0, 5), 0), ((5, 0), 90), ((-1, 0), 0), ((6, 6), 0)])
def test_validate_rejects_out_of_bounds(anchor, rotation):
    result = validate_placement(DOMINO_6, Board(), PieceType.DOMINO, rotation, anchor)
    assert not result.accepted
    assert result.reason is RejectReason.OUT_OF_BOUNDS


def test_validate_rejects_overlap():
    board = _board((PieceType.DOMINO, (2, 2), 0))
    result = validate_placement(DOMINO_6, board, PieceType.DOMINO, 90, (1, 3))
    assert result.reason is RejectReason.OVERLAP


def test_validate_rejects_excluded_cell():
    config = PuzzleConfig(rows=6, cols=6, allowed_types=(PieceType.DOMINO,), excluded_cells={(0, 0), (5, 5)})
    assert validate_placement(config, Board(), PieceType.DOMINO, 0, (0, 0)).reason is RejectReason.EXCLUDED_CELL
    assert validate_placement(config, Board(), PieceType.DOMINO, 90, (4, 5)).reason is RejectReason.EXCLUDED_CELL


def test_validate_restricted_cell_only_for_its_type():
    config = PuzzleConfig(
        rows=5, cols=5,
        allowed_types=(PieceType.STRAIGHT_TRIOMINO, PieceType.UNIT_SQUARE),
        restricted_cells={(PieceType.UNIT_SQUARE, (2, 2))},
    )
    assert validate_placement(config, Board(), PieceType.UNIT_SQUARE, 0, (2, 2)).reason is RejectReason.RESTRICTED_CELL
    assert validate_placement(config, Board(), PieceType.STRAIGHT_TRIOMINO, 0, (2, 2)).accepted


def test_validate_singleton():
    config = PuzzleConfig(
        rows=8, cols=8,
        allowed_types=(PieceType.T_TETROMINO, PieceType.SQUARE_TETROMINO),
        singleton_types={PieceType.SQUARE_TETROMINO},
    )
    board = _board((PieceType.SQUARE_TETROMINO, (0, 0), 0))
    result = validate_placement(config, board, PieceType.SQUARE_TETROMINO, 0, (5, 5))
    assert result.reason is RejectReason.SINGLETON_VIOLATION
    assert validate_placement(config, board, PieceType.T_TETROMINO, 0, (5, 5)).accepted


def test_validate_reports_first_failing_check():
    config = PuzzleConfig(rows=3, cols=3, allowed_types=(PieceType.DOMINO,), excluded_cells={(0, 2)})
    # Both out of bounds and on an excluded cell
    assert validate_placement(config, Board(), PieceType.DOMINO, 0, (0, 2)).reason is RejectReason.OUT_OF_BOUNDS


def test_validate_does_not_mutate_board():
    board = _board((PieceType.DOMINO, (0, 0), 0))
    before = board.pieces
    validate_placement(DOMINO_6, board, PieceType.DOMINO, 0, (1, 0))
    validate_placement(DOMINO_6, board, PieceType.DOMINO, 0, (0, 0))
    assert board.pieces == before


def test_is_solved_counts_coverage():
    config = PuzzleConfig(rows=2, cols=2, allowed_types=(PieceType.DOMINO,))
    half = _board((PieceType.DOMINO, (0, 0), 0))
    full = _board((PieceType.DOMINO, (0, 0), 0), (PieceType.DOMINO, (1, 0), 0))
    assert not is_solved(config, Board())
    assert not is_solved(config, half)
    assert is_solved(config, full)


def test_is_solved_can_require_singletons():
    config = PuzzleConfig(
        rows=1, cols=3,
        allowed_types=(PieceType.DOMINO, PieceType.UNIT_SQUARE),
        singleton_types={PieceType.UNIT_SQUARE},
        target_covered_count=2,
        require_singletons=True,
    )
    without_unit = _board((PieceType.DOMINO, (0, 0), 0))
    with_unit = _board((PieceType.DOMINO, (0, 0), 0), (PieceType.UNIT_SQUARE, (0, 2), 0))
    assert not is_solved(config, without_unit)
    assert not is_solved(config, with_unit)  # 3 cells covered, target is 2

    relaxed = PuzzleConfig(
        rows=1, cols=3,
        allowed_types=(PieceType.DOMINO, PieceType.UNIT_SQUARE),
        singleton_types={PieceType.UNIT_SQUARE},
        require_singletons=True,
    )
    assert is_solved(relaxed, with_unit)
    assert not is_solved(relaxed, _board((PieceType.UNIT_SQUARE, (0, 0), 0), (PieceType.DOMINO, (0, 1), 0),
                                          (PieceType.UNIT_SQUARE, (0, 0), 0)))
