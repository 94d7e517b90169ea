import logging
from typing import List, Optional, Dict, Any, Sequence

from training.core.bitboard import BitBoard, Side
from training.core.constants import ROWS, COLS
from backend.app.models.enums import GameResult

# Logger setup
logger = logging.getLogger(__name__)


def calculate_winner(board: BitBoard) -> GameResult:
    """A line wins; otherwise a full board is a draw."""
    winner = board.calc_winner()
    if winner is not None:
        return GameResult(winner.value)
    if board.is_full():
        return GameResult.DRAW
    return GameResult.IN_PROGRESS


class ConnectFour:
    def __init__(self, board: Optional[BitBoard] = None):
        """
        Wraps a BitBoard with turn order and history.
        Side A always moves first; whose turn it is follows from the disc count.
        """
        self.board = board.copy() if board is not None else BitBoard()
        self.winner: Optional[Side] = self.board.calc_winner()
        self.history: List[Dict[str, Any]] = []

    @classmethod
    def from_cols(cls, cols: Sequence[Sequence[str]]) -> "ConnectFour":
        return cls(BitBoard.from_cols(cols))

    def to_cols(self) -> List[List[Side]]:
        return self.board.to_cols()

    @property
    def current_turn(self) -> Side:
        return self.board.calc_next()

    def get_valid_moves(self) -> List[int]:
        """Returns a list of column indices (0-6) that are not full."""
        return self.board.list_can_put()

    def is_valid_move(self, col: int) -> bool:
        if col < 0 or col >= COLS:
            return False
        return self.board.can_put(col)

    def drop_piece(self, col: int, score: Optional[str] = None) -> bool:
        """
        Drops a piece into the specified column.
        Returns True if successful, False if invalid or game over.
        """
        if self.winner is not None or not self.is_valid_move(col):
            logger.debug("Rejected move: column %s (winner=%s)", col, self.winner)
            return False

        side = self.current_turn
        if self.board.put(col, side):
            self.winner = side
        self.history.append({
            "player": side,
            "column": col,
            "score": score
        })
        return True

    def is_draw(self) -> bool:
        """Returns True if board is full and no winner."""
        return self.winner is None and self.board.is_full()

    def result(self) -> GameResult:
        return calculate_winner(self.board)

    # --- Formatting ---

    def get_visual_board(self) -> str:
        """Generates an ASCII grid representation."""
        symbols = {0: ".", 1: "X", 2: "O"}
        matrix = self.board.to_matrix()
        header = " " + " ".join([str(i) for i in range(COLS)])
        rows_str = []
        for r in range(ROWS):
            row_cells = [symbols[matrix[r][c]] for c in range(COLS)]
            rows_str.append("|" + "|".join(row_cells) + "|")
        return header + "\n" + "\n".join(rows_str)
