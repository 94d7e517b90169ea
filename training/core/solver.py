# training/core/solver.py
import logging
from typing import Any, Optional, Tuple

from .bitboard import BitBoard, Side
from .constants import MEMO_DEPTH
from .evaluator import Evaluator
from .transposition import DepthMemo

logger = logging.getLogger(__name__)


class Solver:
    """
    Negamax with alpha-beta pruning.
    Positions below 'depth' plies are scored by the leaf evaluator.
    """

    def __init__(self, evaluator: Evaluator, depth: int = MEMO_DEPTH):
        if depth < 0:
            raise ValueError(f"Depth must not be negative, got {depth}")
        self.evaluator = evaluator
        self.depth = depth
        self.memo = DepthMemo(depth)
        self.nodes = 0

    def search(self, board: BitBoard) -> Tuple[Optional[int], str]:
        """
        Root Entry Point.
        Returns (best column, description of its score); column is None
        only if no column is playable.
        """
        ev = self.evaluator
        self.nodes = 0
        self.memo.reset()

        side = board.calc_next()
        best_score = ev.MIN
        best_col = None

        # Low to high, so ties keep the lowest column
        for col in board.list_can_put():
            next_board = board.copy()
            if next_board.put(col, side):
                # Winning move: nothing can beat it
                score = ev.MAX
            else:
                score = ev.flip(self.negamax(
                    next_board, side.flip(), 0, ev.flip(ev.MAX), ev.flip(best_score)
                ))

            if best_col is None or score > best_score:
                best_score = score
                best_col = col
            if best_score >= ev.MAX:
                break

        logger.debug(
            "alpha-beta: col=%s score=%s nodes=%d memo_hits=%d",
            best_col, best_score, self.nodes, self.memo.hits
        )
        return best_col, ev.describe(best_score)

    def negamax(self, board: BitBoard, side: Side, depth: int, alpha: Any, beta: Any) -> Any:
        """Score of 'board' for 'side', who is to move."""
        ev = self.evaluator
        self.nodes += 1

        # 1. Beyond the exact horizon: estimate
        if depth >= self.depth:
            return ev.evaluate(board, side)

        # 2. Same position already scored at this depth
        key = board.key()
        if (cached := self.memo.get(depth, key)) is not None:
            return cached

        # 3. Draw
        if board.is_full():
            return ev.DRAW

        # 4. Recursive Search
        for col in board.list_can_put():
            next_board = board.copy()
            if next_board.put(col, side):
                return ev.MAX

            score = ev.flip(self.negamax(
                next_board, side.flip(), depth + 1, ev.flip(beta), ev.flip(alpha)
            ))
            if score > alpha:
                alpha = score
            if alpha >= beta:
                break  # Beta Cutoff

        self.memo.put(depth, key, alpha)
        return alpha
