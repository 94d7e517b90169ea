# training/core/playout.py
import random

from .bitboard import BitBoard, Side
from .constants import WIN_POINT, LOSE_POINT, DRAW_POINT
from .evaluator import Evaluator, WinDraw


def random_playout(rng: random.Random, board: BitBoard, side: Side) -> float:
    """
    Plays uniformly random moves on a copy of 'board', 'side' first,
    until a line is completed or the board fills.
    Returns WIN_POINT / LOSE_POINT / DRAW_POINT relative to 'side'.
    """
    board = board.copy()
    s = side
    while True:
        can = board.list_can_put()
        if not can:
            return DRAW_POINT
        if board.put(rng.choice(can), s):
            return WIN_POINT if s == side else LOSE_POINT
        s = s.flip()


class PlayoutEvaluator(Evaluator):
    """
    Estimates a position by 'n' independent random playouts.
    The only state shared between calls is the random source.
    """

    MAX = WinDraw(1.0, 0.0)
    MIN = WinDraw(0.0, 0.0)
    DRAW = WinDraw(0.0, 1.0)

    def __init__(self, rng: random.Random, n: int):
        if n <= 0:
            raise ValueError(f"Playout count must be positive, got {n}")
        self.rng = rng
        self.n = n

    def evaluate(self, board: BitBoard, side: Side) -> WinDraw:
        win = 0
        draw = 0
        for _ in range(self.n):
            point = random_playout(self.rng, board, side)
            if point == WIN_POINT:
                win += 1
            elif point == DRAW_POINT:
                draw += 1
        return WinDraw(win / self.n, draw / self.n)

    def flip(self, score: WinDraw) -> WinDraw:
        return score.flip()

    def describe(self, score: WinDraw) -> str:
        return f"({score.win:.3f}, {score.draw:.3f})"
