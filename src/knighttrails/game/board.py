"""Board geometry and derived ownership grid for knight trails."""

from dataclasses import dataclass

BOARD_SIZE = 8

# Fixed enumeration order; the planner breaks ties by this order
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

# Cell value: None when unowned, otherwise the owning knight index
BoardState = list[list[int | None]]


@dataclass(frozen=True)
class Position:
    """A square on the board.

    Attributes:
        row: Row index, 0 is the top rank (rank 8)
        col: Column index, 0 is file A
    """

    row: int
    col: int

    @property
    def algebraic(self) -> str:
        """Algebraic name of the square, e.g. (0, 0) -> "A8"."""
        return to_algebraic(self)

    def as_list(self) -> list[int]:
        return [self.row, self.col]


def in_bounds(row: int, col: int) -> bool:
    """Check if a square is on the board."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def is_knight_move(from_pos: Position, to_pos: Position) -> bool:
    """Check if two squares are a knight's move apart."""
    dr = abs(from_pos.row - to_pos.row)
    dc = abs(from_pos.col - to_pos.col)
    return (dr == 2 and dc == 1) or (dr == 1 and dc == 2)


def knight_targets(pos: Position) -> list[Position]:
    """All on-board squares a knight could jump to from pos, in offset order."""
    targets = []
    for dr, dc in KNIGHT_OFFSETS:
        row, col = pos.row + dr, pos.col + dc
        if in_bounds(row, col):
            targets.append(Position(row, col))
    return targets


def to_algebraic(pos: Position) -> str:
    """Convert a position to algebraic notation (column letter, rank number)."""
    return f"{chr(ord('A') + pos.col)}{BOARD_SIZE - pos.row}"


def from_algebraic(square: str) -> Position:
    """Parse algebraic notation such as "c7" or "C7".

    Raises:
        ValueError: If the square is not on the board
    """
    text = square.strip().upper()
    if len(text) != 2 or not text[1].isdigit():
        raise ValueError(f"Invalid square: {square!r}")

    col = ord(text[0]) - ord("A")
    row = BOARD_SIZE - int(text[1])
    if not in_bounds(row, col):
        raise ValueError(f"Square off the board: {square!r}")
    return Position(row, col)


def compute_board_state(paths: list[list[Position]]) -> BoardState:
    """Derive cell ownership by replaying every knight's path.

    Later writes win, so a cell always reports its most recently
    committed owner.
    """
    grid: BoardState = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
    for knight_index, path in enumerate(paths):
        for pos in path:
            grid[pos.row][pos.col] = knight_index
    return grid
