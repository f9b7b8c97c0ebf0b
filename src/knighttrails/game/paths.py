"""Per-session knight paths and the commands that change them."""

import copy
import logging
from dataclasses import dataclass, field

from knighttrails.game.board import BoardState, Position, compute_board_state
from knighttrails.game.moves import is_closed_loop, possible_moves, validate_move
from knighttrails.game.warnsdorff import choose_next_move

logger = logging.getLogger(__name__)

MAX_KNIGHTS = 2


def _initial_paths() -> list[list[Position]]:
    return [[]]


@dataclass
class PathSession:
    """Move history for up to two knights plus the active knight.

    Paths are the only stored state. The board is derived from them on
    every read. Commands never raise for bad input; they return False and
    leave the session unchanged.

    Attributes:
        paths: One ordered list of visited squares per knight
        active_knight: Index of the knight receiving commands
    """

    paths: list[list[Position]] = field(default_factory=_initial_paths)
    active_knight: int = 0

    # Queries

    def board_state(self) -> BoardState:
        """Get the ownership grid derived from all paths."""
        return compute_board_state(self.paths)

    @property
    def active_path(self) -> list[Position]:
        return self.paths[self.active_knight]

    @property
    def knight_count(self) -> int:
        return len(self.paths)

    def current_position(self) -> Position | None:
        """Get the active knight's square, or None if it has not started."""
        path = self.active_path
        return path[-1] if path else None

    def total_moves(self) -> int:
        """Get the number of squares visited across all knights."""
        return sum(len(path) for path in self.paths)

    def is_closed(self, knight: int) -> bool:
        """Check if a knight's path has closed into a loop."""
        return is_closed_loop(self.paths[knight])

    def possible_moves(self, from_pos: Position | None = None) -> list[Position]:
        """Get legal destinations for the active knight.

        Defaults to moves from the active knight's current square.
        """
        if from_pos is None:
            from_pos = self.current_position()
        return possible_moves(self.paths, self.active_knight, from_pos)

    def snapshot(self) -> list[list[Position]]:
        """Get a copy of all paths that later commands cannot change."""
        return copy.deepcopy(self.paths)

    # Commands

    def reset(self) -> None:
        """Return to a single knight with no moves."""
        self.paths = _initial_paths()
        self.active_knight = 0
        logger.debug("Session reset")

    def add_knight(self) -> bool:
        """Add the second knight and make it active."""
        if len(self.paths) >= MAX_KNIGHTS:
            logger.debug("add_knight ignored: already at capacity")
            return False

        self.paths.append([])
        self.active_knight = len(self.paths) - 1
        return True

    def set_active_knight(self, index: int) -> bool:
        """Switch which knight receives commands."""
        if not 0 <= index < len(self.paths):
            logger.debug(f"set_active_knight ignored: no knight {index}")
            return False

        self.active_knight = index
        return True

    def undo(self) -> bool:
        """Remove the active knight's last move."""
        path = self.active_path
        if not path:
            return False

        removed = path.pop()
        logger.debug(f"Knight {self.active_knight} undid {removed.algebraic}")
        return True

    def move_to(self, row: int, col: int) -> bool:
        """Move the active knight to a square if the move is legal."""
        target = Position(row, col)
        if not validate_move(self.paths, self.active_knight, target):
            logger.debug(f"Rejected move for knight {self.active_knight} to ({row}, {col})")
            return False

        self.active_path.append(target)
        logger.debug(f"Knight {self.active_knight} moved to {target.algebraic}")
        return True

    def auto_step(self) -> bool:
        """Extend the active knight by one Warnsdorff move."""
        move = choose_next_move(self.paths, self.active_knight)
        if move is None:
            return False
        return self.move_to(move.row, move.col)
