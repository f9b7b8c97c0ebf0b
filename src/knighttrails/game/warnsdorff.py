"""Warnsdorff's rule for single-step auto-completion.

From the candidate moves, pick the one whose landing square has the fewest
onward moves. This greedy choice tends to leave the well-connected middle
of the board for later and so avoids many dead ends, but it is not a solver
and can still strand a knight.
"""

import logging

from knighttrails.game.board import Position, compute_board_state
from knighttrails.game.moves import onward_degree, possible_moves

logger = logging.getLogger(__name__)


def choose_next_move(paths: list[list[Position]], knight: int) -> Position | None:
    """Pick the Warnsdorff move for a knight, or None if it cannot move.

    Moves onto unowned squares are preferred; the loop-closing move is only
    chosen when nothing else is available. Ties keep the first candidate in
    knight offset order.

    Args:
        paths: Every knight's path
        knight: Index of the knight to extend

    Returns:
        The chosen destination, or None when the knight has not started or
        has no legal move
    """
    path = paths[knight]
    if not path:
        return None

    moves = possible_moves(paths, knight, path[-1])
    if not moves:
        logger.debug(f"Knight {knight} has no legal moves from {path[-1].algebraic}")
        return None

    board = compute_board_state(paths)
    unowned = [m for m in moves if board[m.row][m.col] is None]
    candidates = unowned or moves

    best_move = candidates[0]
    min_onward = onward_degree(board, best_move)
    for move in candidates[1:]:
        degree = onward_degree(board, move)
        if degree < min_onward:
            min_onward = degree
            best_move = move

    logger.debug(
        f"Warnsdorff pick for knight {knight}: {best_move.algebraic} (onward={min_onward})"
    )
    return best_move
