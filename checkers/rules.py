"""
Rules engine: move generation, capture chains, promotion, and game end.

Every function here is pure: it reads a Board and returns new values without
touching its inputs. The session controller in checkers.game strings these
calls together into turns.

Rule summary (standard 8x8 checkers, as played by this game):

1. Men step one square diagonally forward; kings step in all four diagonals.
2. Captures jump an adjacent enemy piece onto the empty square beyond it.
   Capture generation looks in all four diagonals for every piece, men
   included. Simple moves keep the forward-only restriction for men.
3. Capturing is mandatory: if any piece of the side to move can capture,
   only capturing pieces may be moved and only by capturing.
4. After a capture, if the same piece can capture again from its landing
   square, the turn continues with that piece.
5. A man reaching the far back rank becomes a king immediately.
6. A side with no pieces, or with no piece able to move or capture, loses.
"""

from __future__ import annotations

from typing import NamedTuple

from checkers.board import Board, Move, Piece, Player, Square
from checkers.constants import ALL_DIAGONALS, BOARD_SIZE, SETUP_ROWS


class PieceCaptures(NamedTuple):
    """A piece that can capture, with every jump it can make."""

    square: Square
    options: list[Move]


class TerminalResult(NamedTuple):
    """Outcome of check_terminal(). winner is None while the game is running."""

    over: bool
    winner: Player | None = None


def initial_board() -> Board:
    """
    Return the standard starting position.

    Black men fill the dark squares of rows 0-2, White men the dark squares
    of rows 5-7. The layout does not depend on which side moves first.
    """
    pieces: dict[Square, Piece] = {}
    for r in range(BOARD_SIZE):
        if r < SETUP_ROWS:
            owner = Player.BLACK
        elif r >= BOARD_SIZE - SETUP_ROWS:
            owner = Player.WHITE
        else:
            continue
        for c in range(BOARD_SIZE):
            if (r + c) % 2 == 1:
                pieces[(r, c)] = Piece(owner)
    return Board.from_pieces(pieces)


def _captures_for_piece(board: Board, square: Square) -> list[Move]:
    piece = board.piece_at(square)
    if piece is None:
        return []

    r, c = square
    captures = []
    for dr, dc in ALL_DIAGONALS:
        over = (r + dr, c + dc)
        landing = (r + 2 * dr, c + 2 * dc)
        if not board.is_empty(landing):
            continue
        victim = board.piece_at(over)
        if victim is not None and victim.owner is not piece.owner:
            captures.append(Move(square, landing, (over,), must_continue=True))
    return captures


def find_all_captures(board: Board, player: Player) -> list[PieceCaptures]:
    """
    List every piece of player that has at least one capture available.

    Pieces are reported in row-major order. An empty list means the mandatory
    capture rule is not in force for player this turn.
    """
    result = []
    for square, _piece in board.pieces(player):
        options = _captures_for_piece(board, square)
        if options:
            result.append(PieceCaptures(square, options))
    return result


def get_non_capture_moves(board: Board, square: Square, promoted: bool) -> list[Move]:
    """
    Return the simple (non-jumping) moves for the piece on square.

    Kings use all four diagonals; men use only their two forward diagonals.
    An empty square yields no moves.
    """
    piece = board.piece_at(square)
    if piece is None:
        return []

    r, c = square
    directions = ALL_DIAGONALS if promoted else piece.owner.forward
    moves = []
    for dr, dc in directions:
        target = (r + dr, c + dc)
        if board.is_empty(target):
            moves.append(Move(square, target))
    return moves


def get_further_captures(board: Board, square: Square) -> list[Move]:
    """Captures available to the piece now standing on square (chain test)."""
    return _captures_for_piece(board, square)


def compute_legal_moves(board: Board, player: Player, square: Square) -> list[Move]:
    """
    Return the legal moves for the piece player selected on square.

    If any of player's pieces can capture, only the selected piece's captures
    are returned (possibly none). Otherwise its simple moves are returned.
    Squares that are empty, off the board, or hold an enemy piece yield [].
    """
    piece = board.piece_at(square)
    if piece is None or piece.owner is not player:
        return []

    if find_all_captures(board, player):
        return _captures_for_piece(board, square)
    return get_non_capture_moves(board, square, piece.promoted)


def apply_move(board: Board, move: Move) -> Board:
    """
    Play move on board and return the resulting board.

    The origin is cleared, the piece lands on the destination (promoted if it
    reached its far rank) and every captured square is emptied. The input
    board is not modified.
    """
    piece = board.piece_at(move.from_square)
    if piece is None:
        raise ValueError(f"no piece on {move.from_square}")

    if not piece.promoted and move.to_square[0] == piece.owner.promotion_row:
        piece = Piece(piece.owner, promoted=True)

    changes: dict[Square, Piece | None] = {move.from_square: None}
    for captured in move.captured:
        changes[captured] = None
    changes[move.to_square] = piece
    return board.replace(changes)


def has_any_action(board: Board, player: Player) -> bool:
    """True if some piece of player can capture or make a simple move."""
    for square, piece in board.pieces(player):
        if _captures_for_piece(board, square):
            return True
        if get_non_capture_moves(board, square, piece.promoted):
            return True
    return False


def check_terminal(board: Board) -> TerminalResult:
    """
    Decide whether the game is over.

    A side with zero pieces, or with pieces none of which can move or
    capture, loses. Black is examined first, so if both sides are stuck
    White is declared the winner.
    """
    for player in (Player.BLACK, Player.WHITE):
        if board.count(player) == 0 or not has_any_action(board, player):
            return TerminalResult(over=True, winner=player.opponent)
    return TerminalResult(over=False)