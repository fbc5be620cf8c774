"""
FastAPI web application for the checkers game.

Exposes a small JSON API that the browser frontend drives one click at a
time, and serves the frontend itself via static files.

Architecture notes:
- One game per process: the current GameState lives on app.state.game and
  every endpoint replaces it wholesale with the value returned by the
  engine. Handlers are async so they run on the event loop one at a time.
- Every endpoint returns the full state; the frontend never derives rules
  information on its own.
- The winner banner is revealed in two steps: the engine marks the game
  over, the browser waits announce_delay_ms and then calls /api/announce.
- Static files mounted LAST: route registration is first-match, so API routes
  must be registered before the StaticFiles catch-all.
"""

import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, field_validator

from checkers.board import Move, Piece, Player
from checkers.constants import BOARD_SIZE, WIN_ANNOUNCE_DELAY_MS
from checkers.game import GameState, announce_winner, handle_click, new_game, reset

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

# Absolute path resolved at import time, independent of the working directory.
_STATIC_DIR = Path(__file__).parent / "static"

app = FastAPI(title="Checkers", version="1.0.0")
app.state.game = new_game()


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


def _check_coordinate(v: int) -> int:
    if not 0 <= v < BOARD_SIZE:
        raise ValueError(f"must be in [0, {BOARD_SIZE})")
    return v


class ClickRequest(BaseModel):
    """
    A click on one board square.

    Fields:
        row: Board row, 0 at the top (Black's back rank).
        col: Board column, 0 at the left.
    """

    row: int
    col: int

    @field_validator("row", "col")
    @classmethod
    def on_board(cls, v: int) -> int:
        """Reject coordinates outside the 8x8 grid."""
        return _check_coordinate(v)


class ResetRequest(BaseModel):
    """
    Restart the game.

    Fields:
        starting_player: "B" or "W" to choose who moves first; omitted or
                         null keeps the side currently to move.
    """

    starting_player: Player | None = None


class SquareModel(BaseModel):
    row: int
    col: int


class PieceModel(BaseModel):
    player: Player
    king: bool


class MoveModel(BaseModel):
    from_square: SquareModel
    to_square: SquareModel
    captured: list[SquareModel]


class GameStateResponse(BaseModel):
    """
    Full render state of the current game.

    Fields:
        board: 8x8 grid, row-major; null for empty squares.
        turn: Side to move ("B" or "W").
        phase: One of the checkers.game.Phase values.
        selected: Selected square, or null.
        moves: Legal moves of the selected piece.
        game_over: True once the game has ended.
        winner: Winning side, or null while the game is running.
        winner_announced: True once the winner banner should be visible.
        announce_delay_ms: How long the frontend waits before calling
                           /api/announce after the game ends.
    """

    board: list[list[PieceModel | None]]
    turn: Player
    phase: str
    selected: SquareModel | None
    moves: list[MoveModel]
    game_over: bool
    winner: Player | None
    winner_announced: bool
    announce_delay_ms: int


def _square(sq: tuple[int, int]) -> SquareModel:
    return SquareModel(row=sq[0], col=sq[1])


def _piece(piece: Piece | None) -> PieceModel | None:
    if piece is None:
        return None
    return PieceModel(player=piece.owner, king=piece.promoted)


def _move(move: Move) -> MoveModel:
    return MoveModel(
        from_square=_square(move.from_square),
        to_square=_square(move.to_square),
        captured=[_square(sq) for sq in move.captured],
    )


def _to_response(state: GameState) -> GameStateResponse:
    return GameStateResponse(
        board=[[_piece(p) for p in row] for row in state.board.rows()],
        turn=state.turn,
        phase=state.phase.value,
        selected=_square(state.selected) if state.selected is not None else None,
        moves=[_move(m) for m in state.legal_moves],
        game_over=state.game_over,
        winner=state.winner,
        winner_announced=state.winner_announced,
        announce_delay_ms=WIN_ANNOUNCE_DELAY_MS,
    )


# ---------------------------------------------------------------------------
# API routes (registered BEFORE StaticFiles mount)
# ---------------------------------------------------------------------------


@app.get("/api/state", response_model=GameStateResponse)
async def api_state() -> GameStateResponse:
    """Return the current game state."""
    return _to_response(app.state.game)


@app.post("/api/click", response_model=GameStateResponse)
async def api_click(request: ClickRequest) -> GameStateResponse:
    """
    Feed one square click into the session state machine.

    Illegal clicks are not errors: they leave the game unchanged or clear
    the selection, and the resulting state is returned as usual.

    Raises:
        HTTPException 422: row or col outside the board (pydantic validation).
        HTTPException 500: the engine failed on a well-formed request.
    """
    before: GameState = app.state.game
    square = (request.row, request.col)

    try:
        after = handle_click(before, square)
    except Exception as exc:
        _log.exception("Click failed at %s turn=%s\n%s", square, before.turn.value, before.board)
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    if after.board != before.board:
        _log.info(
            "Move %s -> %s by %s (black=%d white=%d)",
            before.selected,
            square,
            before.turn.value,
            after.board.count(Player.BLACK),
            after.board.count(Player.WHITE),
        )
        if after.chaining:
            _log.info("Chain capture continues from %s", after.selected)
        if after.game_over:
            _log.info("Game over: %s wins\n%s", after.winner.value, after.board)

    app.state.game = after
    return _to_response(after)


@app.post("/api/reset", response_model=GameStateResponse)
async def api_reset(request: ResetRequest) -> GameStateResponse:
    """Reset the board; see ResetRequest for the choice of first player."""
    app.state.game = reset(app.state.game, request.starting_player)
    _log.info("New game, %s to move", app.state.game.turn.value)
    return _to_response(app.state.game)


@app.post("/api/announce", response_model=GameStateResponse)
async def api_announce() -> GameStateResponse:
    """Reveal the winner banner. A no-op unless the game is over."""
    app.state.game = announce_winner(app.state.game)
    return _to_response(app.state.game)


@app.get("/", include_in_schema=False)
def serve_root() -> FileResponse:
    """Serve the board UI."""
    return FileResponse(_STATIC_DIR / "index.html")


# ---------------------------------------------------------------------------
# Static file mount: MUST be last (catch-all for /static/* assets)
# ---------------------------------------------------------------------------

app.mount("/static", StaticFiles(directory=_STATIC_DIR), name="static")
