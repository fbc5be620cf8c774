"""
Checkers rules engine package.

This package implements standard 8x8 two-player checkers as pure functions
over immutable board snapshots, plus the click-driven session controller
that turns those functions into a playable game.

Modules:
    constants  Board geometry, direction tables, promotion rows, UI timing
    board      Player, Piece, Move, and the immutable Board
    rules      Move/capture generation, move application, game-end detection
    game       GameState and the selection/turn state machine
"""
