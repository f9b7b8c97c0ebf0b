"""Board, path and move logic for knight trails."""

from knighttrails.game.board import (
    BOARD_SIZE,
    KNIGHT_OFFSETS,
    BoardState,
    Position,
    compute_board_state,
    from_algebraic,
    in_bounds,
    is_knight_move,
    knight_targets,
    to_algebraic,
)
from knighttrails.game.moves import (
    closes_loop,
    is_closed_loop,
    onward_degree,
    possible_moves,
    validate_move,
)
from knighttrails.game.paths import MAX_KNIGHTS, PathSession
from knighttrails.game.warnsdorff import choose_next_move

__all__ = [
    # Board
    "BOARD_SIZE",
    "KNIGHT_OFFSETS",
    "BoardState",
    "Position",
    "compute_board_state",
    "from_algebraic",
    "in_bounds",
    "is_knight_move",
    "knight_targets",
    "to_algebraic",
    # Moves
    "closes_loop",
    "is_closed_loop",
    "onward_degree",
    "possible_moves",
    "validate_move",
    # Paths
    "MAX_KNIGHTS",
    "PathSession",
    # Heuristic
    "choose_next_move",
]
