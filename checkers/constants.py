"""
Rules constants: board geometry, movement directions, and UI timing.

All numeric constants used by the rules engine and the web layer are defined
here so that no other module needs to introduce magic numbers. Directions are
(row delta, column delta) pairs on the 8x8 grid, with row 0 at the top of the
rendered board.
"""

# ---------------------------------------------------------------------------
# Board geometry
# ---------------------------------------------------------------------------

BOARD_SIZE: int = 8

# Number of rows each side fills at the start of a game.
SETUP_ROWS: int = 3

# ---------------------------------------------------------------------------
# Movement directions
# ---------------------------------------------------------------------------
# Black starts on rows 0-2 and advances toward increasing row numbers;
# White starts on rows 5-7 and advances toward decreasing row numbers.

BLACK_FORWARD: tuple[tuple[int, int], ...] = ((1, -1), (1, 1))
WHITE_FORWARD: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1))

# Kings move in all four diagonals. Captures always use all four, for men too.
ALL_DIAGONALS: tuple[tuple[int, int], ...] = ((1, -1), (1, 1), (-1, -1), (-1, 1))

# ---------------------------------------------------------------------------
# Promotion
# ---------------------------------------------------------------------------

BLACK_PROMOTION_ROW: int = BOARD_SIZE - 1
WHITE_PROMOTION_ROW: int = 0

# ---------------------------------------------------------------------------
# Presentation timing
# ---------------------------------------------------------------------------
# Delay between the game ending and the winner banner becoming visible.
# The browser schedules the reveal; the server only reports the value.
WIN_ANNOUNCE_DELAY_MS: int = 500
