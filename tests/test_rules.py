"""Tests for move generation, move application and game-end detection."""

from checkers.board import Board, Move, Piece, Player
from checkers.rules import (
    apply_move,
    check_terminal,
    compute_legal_moves,
    find_all_captures,
    get_further_captures,
    get_non_capture_moves,
    initial_board,
)

BLACK = Piece(Player.BLACK)
WHITE = Piece(Player.WHITE)
BLACK_KING = Piece(Player.BLACK, promoted=True)
WHITE_KING = Piece(Player.WHITE, promoted=True)


def _targets(moves):
    return {m.to_square for m in moves}


class TestInitialBoard:
    def setup_method(self):
        self.board = initial_board()

    def test_black_fills_top_three_rows(self):
        squares = {sq for sq, _ in self.board.pieces(Player.BLACK)}
        expected = {(r, c) for r in range(3) for c in range(8) if (r + c) % 2 == 1}
        assert squares == expected
        assert len(squares) == 12

    def test_white_fills_bottom_three_rows(self):
        squares = {sq for sq, _ in self.board.pieces(Player.WHITE)}
        expected = {(r, c) for r in range(5, 8) for c in range(8) if (r + c) % 2 == 1}
        assert squares == expected
        assert len(squares) == 12

    def test_no_kings_and_middle_empty(self):
        assert not any(p.promoted for _, p in self.board.pieces())
        for r in (3, 4):
            for c in range(8):
                assert self.board.piece_at((r, c)) is None

    def test_deterministic(self):
        assert initial_board() == self.board

    def test_no_captures_at_start(self):
        assert find_all_captures(self.board, Player.BLACK) == []
        assert find_all_captures(self.board, Player.WHITE) == []


class TestCaptureGeneration:
    def test_forward_capture(self):
        board = Board.from_pieces({(2, 1): BLACK, (3, 2): WHITE})
        found = find_all_captures(board, Player.BLACK)
        assert len(found) == 1
        assert found[0].square == (2, 1)
        assert found[0].options == [Move((2, 1), (4, 3), ((3, 2),), must_continue=True)]

    def test_men_capture_backwards(self):
        board = Board.from_pieces({(4, 3): BLACK, (3, 2): WHITE})
        found = find_all_captures(board, Player.BLACK)
        assert _targets(found[0].options) == {(2, 1)}

    def test_blocked_landing_square(self):
        board = Board.from_pieces({(2, 1): BLACK, (3, 2): WHITE, (4, 3): WHITE})
        assert find_all_captures(board, Player.BLACK) == []

    def test_landing_off_board(self):
        board = Board.from_pieces({(1, 2): BLACK, (0, 1): WHITE})
        assert find_all_captures(board, Player.BLACK) == []

    def test_cannot_jump_own_piece(self):
        board = Board.from_pieces({(2, 1): BLACK, (3, 2): BLACK})
        assert find_all_captures(board, Player.BLACK) == []

    def test_pieces_reported_in_row_major_order(self):
        board = Board.from_pieces({
            (5, 2): BLACK, (6, 3): WHITE,
            (2, 1): BLACK, (3, 2): WHITE,
        })
        squares = [pc.square for pc in find_all_captures(board, Player.BLACK)]
        assert squares == [(2, 1), (5, 2)]

    def test_king_captures_in_all_directions(self):
        board = Board.from_pieces({
            (4, 3): WHITE_KING,
            (3, 2): BLACK, (3, 4): BLACK, (5, 2): BLACK, (5, 4): BLACK,
        })
        found = find_all_captures(board, Player.WHITE)
        assert _targets(found[0].options) == {(2, 1), (2, 5), (6, 1), (6, 5)}


class TestNonCaptureMoves:
    def test_black_man_moves_down(self):
        board = Board.from_pieces({(2, 3): BLACK})
        assert _targets(get_non_capture_moves(board, (2, 3), False)) == {(3, 2), (3, 4)}

    def test_white_man_moves_up(self):
        board = Board.from_pieces({(5, 2): WHITE})
        assert _targets(get_non_capture_moves(board, (5, 2), False)) == {(4, 1), (4, 3)}

    def test_king_moves_all_diagonals(self):
        board = Board.from_pieces({(3, 4): BLACK_KING})
        moves = get_non_capture_moves(board, (3, 4), True)
        assert _targets(moves) == {(2, 3), (2, 5), (4, 3), (4, 5)}
        assert not any(m.is_capture for m in moves)

    def test_edge_and_blocked(self):
        board = Board.from_pieces({(2, 7): BLACK, (3, 6): WHITE})
        assert get_non_capture_moves(board, (2, 7), False) == []

    def test_empty_square(self):
        assert get_non_capture_moves(Board.empty(), (3, 4), False) == []

    def test_initial_position(self):
        board = initial_board()
        assert _targets(get_non_capture_moves(board, (2, 1), False)) == {(3, 0), (3, 2)}
        assert get_non_capture_moves(board, (1, 0), False) == []


class TestComputeLegalMoves:
    def test_simple_moves_when_no_capture(self):
        board = initial_board()
        moves = compute_legal_moves(board, Player.BLACK, (2, 1))
        assert moves == [Move((2, 1), (3, 0)), Move((2, 1), (3, 2))]

    def test_mandatory_capture_restricts_other_pieces(self):
        board = Board.from_pieces({(2, 1): BLACK, (3, 2): WHITE, (2, 5): BLACK})
        assert compute_legal_moves(board, Player.BLACK, (2, 5)) == []

    def test_mandatory_capture_returns_only_captures(self):
        board = Board.from_pieces({(2, 1): BLACK, (3, 2): WHITE, (2, 5): BLACK})
        moves = compute_legal_moves(board, Player.BLACK, (2, 1))
        assert moves == [Move((2, 1), (4, 3), ((3, 2),), must_continue=True)]

    def test_capturing_piece_loses_simple_moves(self):
        # (2,1) could also step to (3,0); with a capture pending it may not.
        board = Board.from_pieces({(2, 1): BLACK, (3, 2): WHITE})
        assert _targets(compute_legal_moves(board, Player.BLACK, (2, 1))) == {(4, 3)}

    def test_wrong_owner_or_empty(self):
        board = initial_board()
        assert compute_legal_moves(board, Player.BLACK, (5, 0)) == []
        assert compute_legal_moves(board, Player.BLACK, (3, 2)) == []
        assert compute_legal_moves(board, Player.BLACK, (9, 9)) == []

    def test_opening_capture_scenario(self):
        board = initial_board().replace({(3, 2): WHITE})

        found = find_all_captures(board, Player.BLACK)
        by_square = {pc.square: pc.options for pc in found}
        assert Move((2, 1), (4, 3), ((3, 2),), must_continue=True) in by_square[(2, 1)]

        for square, _ in board.pieces(Player.BLACK):
            moves = compute_legal_moves(board, Player.BLACK, square)
            assert all(m.is_capture for m in moves)
            if square not in by_square:
                assert moves == []


class TestApplyMove:
    def test_simple_move(self):
        board = initial_board()
        after = apply_move(board, Move((2, 1), (3, 2)))
        assert after.piece_at((2, 1)) is None
        assert after.piece_at((3, 2)) == BLACK
        assert board.piece_at((2, 1)) == BLACK
        assert board.piece_at((3, 2)) is None

    def test_capture_removes_piece(self):
        board = Board.from_pieces({(2, 1): BLACK, (3, 2): WHITE, (6, 5): WHITE})
        total = len(list(board.pieces()))
        after = apply_move(board, Move((2, 1), (4, 3), ((3, 2),)))
        assert after.piece_at((3, 2)) is None
        assert after.piece_at((2, 1)) is None
        assert after.piece_at((4, 3)) == BLACK
        assert len(list(after.pieces())) == total - 1

    def test_black_promotes_on_last_row(self):
        board = Board.from_pieces({(6, 1): BLACK})
        after = apply_move(board, Move((6, 1), (7, 0)))
        assert after.piece_at((7, 0)) == BLACK_KING

    def test_white_promotes_on_first_row(self):
        board = Board.from_pieces({(1, 2): WHITE})
        after = apply_move(board, Move((1, 2), (0, 1)))
        assert after.piece_at((0, 1)) == WHITE_KING

    def test_promotion_by_capture(self):
        board = Board.from_pieces({(5, 2): BLACK, (6, 3): WHITE})
        after = apply_move(board, Move((5, 2), (7, 4), ((6, 3),)))
        assert after.piece_at((7, 4)) == BLACK_KING

    def test_king_stays_king(self):
        board = Board.from_pieces({(7, 0): BLACK_KING})
        after = apply_move(board, Move((7, 0), (6, 1)))
        assert after.piece_at((6, 1)) == BLACK_KING

    def test_no_promotion_short_of_far_rank(self):
        board = Board.from_pieces({(2, 1): WHITE})
        after = apply_move(board, Move((2, 1), (1, 0)))
        assert after.piece_at((1, 0)) == WHITE


class TestFurtherCaptures:
    def test_chain_available(self):
        board = Board.from_pieces({(2, 1): BLACK, (3, 2): WHITE, (5, 4): WHITE})
        after = apply_move(board, Move((2, 1), (4, 3), ((3, 2),)))
        further = get_further_captures(after, (4, 3))
        assert further == [Move((4, 3), (6, 5), ((5, 4),), must_continue=True)]

    def test_chain_ends(self):
        board = Board.from_pieces({(2, 1): BLACK, (3, 2): WHITE})
        after = apply_move(board, Move((2, 1), (4, 3), ((3, 2),)))
        assert get_further_captures(after, (4, 3)) == []

    def test_empty_square(self):
        assert get_further_captures(Board.empty(), (4, 3)) == []


class TestCheckTerminal:
    def test_running_game(self):
        result = check_terminal(initial_board())
        assert not result.over
        assert result.winner is None

    def test_no_white_pieces(self):
        board = Board.from_pieces({(4, 3): BLACK})
        assert check_terminal(board) == (True, Player.BLACK)

    def test_no_black_pieces(self):
        board = Board.from_pieces({(4, 3): WHITE})
        assert check_terminal(board) == (True, Player.WHITE)

    def test_white_blocked(self):
        board = Board.from_pieces({(7, 0): WHITE, (6, 1): BLACK, (5, 2): BLACK})
        result = check_terminal(board)
        assert result.over
        assert result.winner is Player.BLACK

    def test_black_blocked(self):
        board = Board.from_pieces({
            (0, 1): BLACK,
            (1, 0): WHITE, (1, 2): WHITE, (2, 3): WHITE,
        })
        result = check_terminal(board)
        assert result.over
        assert result.winner is Player.WHITE

    def test_capture_counts_as_action(self):
        # Black's man cannot step forward but can jump backwards.
        board = Board.from_pieces({
            (6, 1): BLACK, (7, 0): WHITE, (7, 2): WHITE, (5, 2): WHITE,
            (3, 4): WHITE,
        })
        assert not check_terminal(board).over

