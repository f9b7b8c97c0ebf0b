"""Tests for move validation."""

from knighttrails.game.board import Position, compute_board_state, knight_targets
from knighttrails.game.moves import (
    closes_loop,
    is_closed_loop,
    onward_degree,
    ownership_allows,
    possible_moves,
    validate_move,
)

P = Position

# A four-square knight cycle starting and ending at A8
SQUARE_LOOP = [P(0, 0), P(1, 2), P(3, 3), P(2, 1)]


class TestClosedLoop:
    """Tests for loop detection."""

    def test_open_path(self):
        assert is_closed_loop([]) is False
        assert is_closed_loop([P(0, 0)]) is False
        assert is_closed_loop(SQUARE_LOOP) is False

    def test_closed_path(self):
        assert is_closed_loop(SQUARE_LOOP + [P(0, 0)]) is True

    def test_closes_loop_needs_length_over_two(self):
        assert closes_loop([P(0, 0)], P(0, 0)) is False
        assert closes_loop([P(0, 0), P(2, 1)], P(0, 0)) is False
        assert closes_loop([P(0, 0), P(1, 2), P(3, 3)], P(0, 0)) is True

    def test_closes_loop_only_onto_start(self):
        assert closes_loop(SQUARE_LOOP, P(1, 2)) is False

    def test_closed_path_cannot_close_again(self):
        assert closes_loop(SQUARE_LOOP + [P(0, 0)], P(0, 0)) is False


class TestOwnershipAllows:
    """Tests for the ownership rule."""

    def test_unowned(self):
        paths = [[P(0, 0)]]
        board = compute_board_state(paths)
        assert ownership_allows(board, paths[0], 0, P(5, 5)) is True

    def test_other_knight(self):
        paths = [[P(0, 0)], [P(5, 5)]]
        board = compute_board_state(paths)
        assert ownership_allows(board, paths[0], 0, P(5, 5)) is False

    def test_own_non_start(self):
        path = [P(0, 0), P(1, 2), P(2, 4)]
        board = compute_board_state([path])
        assert ownership_allows(board, path, 0, P(1, 2)) is False

    def test_own_start(self):
        board = compute_board_state([SQUARE_LOOP])
        assert ownership_allows(board, SQUARE_LOOP, 0, P(0, 0)) is True


class TestValidateMove:
    """Tests for validate_move."""

    def test_first_move_any_unowned_square(self):
        assert validate_move([[]], 0, P(0, 0)) is True
        assert validate_move([[]], 0, P(4, 7)) is True

    def test_first_move_out_of_bounds(self):
        assert validate_move([[]], 0, P(-1, 3)) is False
        assert validate_move([[]], 0, P(8, 0)) is False

    def test_first_move_onto_other_knight(self):
        paths = [[P(3, 3)], []]
        assert validate_move(paths, 1, P(3, 3)) is False

    def test_knight_jump(self):
        paths = [[P(0, 0)]]
        assert validate_move(paths, 0, P(2, 1)) is True
        assert validate_move(paths, 0, P(1, 2)) is True

    def test_non_knight_jump(self):
        paths = [[P(0, 0)]]
        assert validate_move(paths, 0, P(1, 1)) is False
        assert validate_move(paths, 0, P(0, 2)) is False

    def test_same_square(self):
        assert validate_move([[P(4, 4)]], 0, P(4, 4)) is False

    def test_out_of_bounds_jump(self):
        assert validate_move([[P(0, 0)]], 0, P(-2, -1)) is False

    def test_onto_other_knight(self):
        paths = [[P(4, 4)], [P(2, 3)]]
        assert validate_move(paths, 0, P(2, 3)) is False

    def test_self_crossing(self):
        paths = [[P(0, 0), P(1, 2), P(2, 4)]]
        assert validate_move(paths, 0, P(1, 2)) is False

    def test_back_to_start_from_length_two(self):
        paths = [[P(0, 0), P(2, 1)]]
        assert validate_move(paths, 0, P(0, 0)) is False

    def test_loop_closure(self):
        assert validate_move([list(SQUARE_LOOP)], 0, P(0, 0)) is True

    def test_loop_closure_needs_knight_jump(self):
        paths = [[P(0, 0), P(1, 2), P(3, 3)]]
        assert validate_move(paths, 0, P(0, 0)) is False

    def test_closed_loop_is_finished(self):
        loop = [P(2, 2), P(3, 4), P(4, 2), P(3, 0), P(2, 2)]
        assert validate_move([loop], 0, P(4, 1)) is False


class TestPossibleMoves:
    """Tests for possible_moves."""

    def test_unstarted_knight_gets_every_unowned_square(self):
        paths = [[P(0, 0), P(2, 1)], []]
        moves = possible_moves(paths, 1)
        assert len(moves) == 62
        assert P(0, 0) not in moves
        assert P(2, 1) not in moves
        # Row-major order
        assert moves[0] == P(0, 1)

    def test_excludes_other_knight(self):
        paths = [[P(4, 4)], [P(2, 3)]]
        moves = possible_moves(paths, 0, P(4, 4))

        assert P(2, 3) not in moves
        assert len(moves) == 7
        assert set(moves) == set(knight_targets(P(4, 4))) - {P(2, 3)}

    def test_subset_of_knight_targets(self):
        paths = [[P(0, 0), P(1, 2)]]
        moves = possible_moves(paths, 0, P(1, 2))
        assert set(moves) <= set(knight_targets(P(1, 2)))
        assert 0 <= len(moves) <= 8
        assert P(0, 0) not in moves

    def test_includes_loop_closure(self):
        moves = possible_moves([list(SQUARE_LOOP)], 0, P(2, 1))
        assert P(0, 0) in moves

    def test_closed_loop_has_no_moves(self):
        loop = [P(2, 2), P(3, 4), P(4, 2), P(3, 0), P(2, 2)]
        assert possible_moves([loop], 0, P(2, 2)) == []

    def test_agrees_with_validate_move(self):
        paths = [[P(0, 0), P(1, 2), P(3, 3)], [P(5, 4)]]
        moves = possible_moves(paths, 0, P(3, 3))
        for target in knight_targets(P(3, 3)):
            assert (target in moves) == validate_move(paths, 0, target)


class TestOnwardDegree:
    """Tests for onward_degree."""

    def test_empty_board(self):
        board = compute_board_state([[]])
        assert onward_degree(board, P(0, 0)) == 2
        assert onward_degree(board, P(4, 4)) == 8

    def test_ignores_owned_squares(self):
        board = compute_board_state([[P(0, 0)], [P(4, 0)]])
        assert onward_degree(board, P(2, 1)) == 4
