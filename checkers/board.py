"""
Board representation: players, pieces, moves, and the immutable 8x8 grid.

A Board is a snapshot. Every mutation (applying a move, building a test
position) produces a new Board; nothing ever writes into an existing one, so
a board captured at the start of a turn can be compared or logged safely
after the turn resolves.

Squares are (row, col) tuples with both coordinates in [0, 8). A square is
playable ("dark") iff row + col is odd. Light squares are always empty; the
movement code never produces them because every step is diagonal.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Mapping

from checkers.constants import (
    BLACK_FORWARD,
    BLACK_PROMOTION_ROW,
    BOARD_SIZE,
    WHITE_FORWARD,
    WHITE_PROMOTION_ROW,
)

Square = tuple[int, int]


class Player(str, Enum):
    """The two sides. Values are the single-letter codes used on the wire."""

    BLACK = "B"
    WHITE = "W"

    @property
    def opponent(self) -> Player:
        return Player.WHITE if self is Player.BLACK else Player.BLACK

    @property
    def forward(self) -> tuple[tuple[int, int], ...]:
        """Diagonal directions available to this side's un-promoted men."""
        return BLACK_FORWARD if self is Player.BLACK else WHITE_FORWARD

    @property
    def promotion_row(self) -> int:
        """The far back rank where this side's men become kings."""
        return BLACK_PROMOTION_ROW if self is Player.BLACK else WHITE_PROMOTION_ROW


@dataclass(frozen=True)
class Piece:
    """
    A single checker.

    Attributes:
        owner:    The side the piece belongs to.
        promoted: True once the piece has reached the far rank (a king).
                  Never reverts to False.
    """

    owner: Player
    promoted: bool = False

    def symbol(self) -> str:
        """One-character glyph: b/w for men, B/W for kings."""
        letter = self.owner.value
        return letter if self.promoted else letter.lower()


@dataclass(frozen=True)
class Move:
    """
    One discrete step of a turn.

    A simple move has no captured squares. A jump captures exactly one
    square; a multi-jump is played as a sequence of single-jump Moves, one
    click each.

    Attributes:
        from_square:   Origin of the moving piece.
        to_square:     Destination square (always empty before the move).
        captured:      Squares whose pieces are removed by this move.
        must_continue: Set on capture candidates; the controller re-checks the
                       landing square for a follow-up jump after applying it.
    """

    from_square: Square
    to_square: Square
    captured: tuple[Square, ...] = ()
    must_continue: bool = False

    @property
    def is_capture(self) -> bool:
        return bool(self.captured)


def inside(row: int, col: int) -> bool:
    """Return True if (row, col) lies on the 8x8 board."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def is_dark(square: Square) -> bool:
    """Return True for playable squares (row + col odd)."""
    return (square[0] + square[1]) % 2 == 1


class Board:
    """
    Immutable 8x8 grid of optional Pieces.

    Build a board with Board.empty(), Board.from_pieces(), or
    rules.initial_board(); derive new boards with replace().
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: tuple[tuple[Piece | None, ...], ...]) -> None:
        if len(cells) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in cells):
            raise ValueError(f"board must be {BOARD_SIZE}x{BOARD_SIZE}")
        self._cells = cells

    @classmethod
    def empty(cls) -> Board:
        return cls(tuple((None,) * BOARD_SIZE for _ in range(BOARD_SIZE)))

    @classmethod
    def from_pieces(cls, pieces: Mapping[Square, Piece]) -> Board:
        """Build a board holding exactly the given pieces."""
        return cls.empty().replace(pieces)

    def piece_at(self, square: Square) -> Piece | None:
        """Return the piece on square, or None if empty or off the board."""
        row, col = square
        if not inside(row, col):
            return None
        return self._cells[row][col]

    def is_empty(self, square: Square) -> bool:
        """True for on-board squares holding no piece."""
        return inside(*square) and self._cells[square[0]][square[1]] is None

    def pieces(self, player: Player | None = None) -> Iterator[tuple[Square, Piece]]:
        """Yield (square, piece) in row-major order, optionally for one side."""
        for r, row in enumerate(self._cells):
            for c, piece in enumerate(row):
                if piece is not None and (player is None or piece.owner is player):
                    yield (r, c), piece

    def count(self, player: Player) -> int:
        return sum(1 for _ in self.pieces(player))

    def replace(self, changes: Mapping[Square, Piece | None]) -> Board:
        """Return a new board with the given squares overwritten."""
        rows = [list(row) for row in self._cells]
        for (r, c), piece in changes.items():
            rows[r][c] = piece
        return Board(tuple(tuple(row) for row in rows))

    def rows(self) -> tuple[tuple[Piece | None, ...], ...]:
        return self._cells

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __hash__(self) -> int:
        return hash(self._cells)

    def __str__(self) -> str:
        lines = []
        for r, row in enumerate(self._cells):
            glyphs = [p.symbol() if p else ("." if is_dark((r, c)) else " ") for c, p in enumerate(row)]
            lines.append(f"{r} " + " ".join(glyphs))
        lines.append("  " + " ".join(str(c) for c in range(BOARD_SIZE)))
        return "\n".join(lines)

    def __repr__(self) -> str:
        black = self.count(Player.BLACK)
        white = self.count(Player.WHITE)
        return f"<Board black={black} white={white}>"
