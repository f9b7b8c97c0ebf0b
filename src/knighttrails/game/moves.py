"""Move validation for knight trails.

A knight with no moves may start on any unowned square. After that every
move must be a knight's jump onto an unowned square, or onto the knight's
own start square to close a loop once its path is longer than two squares.
A closed loop is finished: it takes no further forward moves.
"""

from knighttrails.game.board import (
    BOARD_SIZE,
    BoardState,
    Position,
    compute_board_state,
    in_bounds,
    is_knight_move,
    knight_targets,
)

# Minimum path length before a knight may jump back onto its start square
MIN_LOOP_CLOSE_LENGTH = 3


def is_closed_loop(path: list[Position]) -> bool:
    """Check if a path ends on its own start square."""
    return len(path) >= MIN_LOOP_CLOSE_LENGTH and path[0] == path[-1]


def closes_loop(path: list[Position], target: Position) -> bool:
    """Check if moving to target would close the path into a loop."""
    return (
        len(path) >= MIN_LOOP_CLOSE_LENGTH
        and not is_closed_loop(path)
        and path[0] == target
    )


def ownership_allows(
    board: BoardState, path: list[Position], knight: int, target: Position
) -> bool:
    """Apply the ownership rule for a knight entering target.

    Unowned squares are always allowed. A square owned by the other knight
    never is. A square owned by this knight is allowed only as a loop closure.
    """
    owner = board[target.row][target.col]
    if owner is None:
        return True
    if owner != knight:
        return False
    return closes_loop(path, target)


def validate_move(paths: list[list[Position]], knight: int, target: Position) -> bool:
    """Decide whether knight may commit a move to target."""
    if not in_bounds(target.row, target.col):
        return False

    path = paths[knight]
    if is_closed_loop(path):
        return False

    board = compute_board_state(paths)

    if not path:
        # First move: any unowned square
        return board[target.row][target.col] is None

    current = path[-1]
    if target == current:
        return False
    if not is_knight_move(current, target):
        return False

    return ownership_allows(board, path, knight, target)


def possible_moves(
    paths: list[list[Position]], knight: int, from_pos: Position | None = None
) -> list[Position]:
    """List the squares knight may move to.

    With a from_pos, this is the in-bounds knight jumps from it that pass the
    ownership rule, in offset order. Without one (the knight has not started),
    it is every unowned square in row-major order.
    """
    path = paths[knight]
    if is_closed_loop(path):
        return []

    board = compute_board_state(paths)

    if from_pos is None:
        return [
            Position(row, col)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
            if board[row][col] is None
        ]

    return [
        target
        for target in knight_targets(from_pos)
        if ownership_allows(board, path, knight, target)
    ]


def onward_degree(board: BoardState, pos: Position) -> int:
    """Count unowned squares a knight could reach from pos.

    Loop closures are not counted.
    """
    return sum(1 for target in knight_targets(pos) if board[target.row][target.col] is None)
