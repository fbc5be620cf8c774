"""
Session controller: the selection/turn state machine around the rules engine.

GameState is an immutable value. Each user action (a click on a square, a
reset, the delayed winner reveal) is a function from the old state to a new
one; the caller owns the current state and swaps it wholesale.

Phases:
    NO_SELECTION      nothing selected, waiting for the side to move
    PIECE_SELECTED    one piece selected, its legal moves highlighted
    CHAIN_CAPTURING   a capture landed and the same piece must jump again
    GAME_OVER         terminal; winner fixed, clicks ignored
    WINNER_ANNOUNCED  GAME_OVER after the presentation layer's reveal delay

The last phase is purely cosmetic: handle_click treats it exactly like
GAME_OVER, and only announce_winner() can enter it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from checkers.board import Board, Move, Player, Square, inside
from checkers.rules import (
    apply_move,
    check_terminal,
    compute_legal_moves,
    find_all_captures,
    get_further_captures,
    initial_board,
)


class Phase(str, Enum):
    NO_SELECTION = "no_selection"
    PIECE_SELECTED = "piece_selected"
    CHAIN_CAPTURING = "chain_capturing"
    GAME_OVER = "game_over"
    WINNER_ANNOUNCED = "winner_announced"


@dataclass(frozen=True)
class GameState:
    """
    Everything the view needs to render one moment of a game.

    Attributes:
        board:            Current board snapshot.
        turn:             Side to move. Does not flip mid-chain, nor on the
                          move that ends the game.
        selected:         Selected square, or None.
        legal_moves:      Candidate moves for the selected piece.
        chaining:         True while a multi-jump is in progress.
        game_over:        True once check_terminal() has fired.
        winner:           Winning side once the game is over.
        winner_announced: True once the reveal delay has elapsed.
    """

    board: Board = field(default_factory=initial_board)
    turn: Player = Player.BLACK
    selected: Square | None = None
    legal_moves: tuple[Move, ...] = ()
    chaining: bool = False
    game_over: bool = False
    winner: Player | None = None
    winner_announced: bool = False

    @property
    def phase(self) -> Phase:
        if self.game_over:
            return Phase.WINNER_ANNOUNCED if self.winner_announced else Phase.GAME_OVER
        if self.chaining:
            return Phase.CHAIN_CAPTURING
        if self.selected is not None:
            return Phase.PIECE_SELECTED
        return Phase.NO_SELECTION

    @property
    def targets(self) -> list[Square]:
        """Destination squares to highlight."""
        return [m.to_square for m in self.legal_moves]

    def move_to(self, square: Square) -> Move | None:
        """The candidate move landing on square, if any."""
        for move in self.legal_moves:
            if move.to_square == square:
                return move
        return None


def new_game(starting_player: Player = Player.BLACK) -> GameState:
    """Fresh board, no selection, starting_player to move."""
    return GameState(board=initial_board(), turn=starting_player)


def reset(state: GameState, starting_player: Player | None = None) -> GameState:
    """
    Start over from the initial position.

    With starting_player=None the side currently to move keeps the turn
    (the "reset" control); otherwise starting_player moves first.
    """
    return new_game(state.turn if starting_player is None else starting_player)


def _deselect(state: GameState) -> GameState:
    return replace(state, selected=None, legal_moves=())


def _play(state: GameState, move: Move) -> GameState:
    board = apply_move(state.board, move)

    if move.is_capture:
        further = get_further_captures(board, move.to_square)
        if further:
            return replace(
                state,
                board=board,
                selected=move.to_square,
                legal_moves=tuple(further),
                chaining=True,
            )

    result = check_terminal(board)
    if result.over:
        return replace(
            state,
            board=board,
            selected=None,
            legal_moves=(),
            chaining=False,
            game_over=True,
            winner=result.winner,
        )

    return replace(
        state,
        board=board,
        turn=state.turn.opponent,
        selected=None,
        legal_moves=(),
        chaining=False,
    )


def handle_click(state: GameState, square: Square) -> GameState:
    """
    Apply one click on square and return the next state.

    - After game over every click is ignored.
    - Clicking a highlighted destination plays that move.
    - During a chain capture anything else is ignored; the jumping piece
      stays selected.
    - Clicking one of your own pieces selects it if it has a legal move.
      While another of your pieces holds a mandatory capture, clicking a
      piece that cannot capture clears the selection instead.
    - Any other click clears the selection.
    """
    if state.game_over:
        return state

    move = state.move_to(square)
    if move is not None:
        return _play(state, move)

    if state.chaining:
        return state

    if not inside(*square):
        return _deselect(state)

    piece = state.board.piece_at(square)
    if piece is None or piece.owner is not state.turn:
        return _deselect(state)

    must_capture = {pc.square for pc in find_all_captures(state.board, state.turn)}
    if must_capture and square not in must_capture:
        return _deselect(state)

    moves = compute_legal_moves(state.board, state.turn, square)
    if not moves:
        return _deselect(state)
    return replace(state, selected=square, legal_moves=tuple(moves))


def announce_winner(state: GameState) -> GameState:
    """Move GAME_OVER to WINNER_ANNOUNCED; any other state is returned unchanged."""
    if not state.game_over or state.winner_announced:
        return state
    return replace(state, winner_announced=True)
