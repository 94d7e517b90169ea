# training/core/evaluator.py
"""
Leaf evaluator contract used by the alpha-beta Solver.

A score only has to be ordered and flip-able to the opponent's perspective;
the Solver never looks inside it.
"""

from abc import ABC, abstractmethod
from typing import Any, NamedTuple

from .bitboard import BitBoard, Side


class WinDraw(NamedTuple):
    """(win rate, draw rate). Ordered on win rate first, then draw rate."""
    win: float
    draw: float

    def flip(self) -> "WinDraw":
        # Zero-sum with draws: the opponent wins whatever we neither win nor draw
        return WinDraw(1.0 - self.win - self.draw, self.draw)


class Evaluator(ABC):
    """Abstract base class for leaf evaluators"""

    MAX: Any
    MIN: Any
    DRAW: Any

    @abstractmethod
    def evaluate(self, board: BitBoard, side: Side) -> Any:
        """Score of 'board' from the perspective of 'side' (the player to move)"""
        pass

    @abstractmethod
    def flip(self, score: Any) -> Any:
        """Same score seen by the opponent"""
        pass

    def describe(self, score: Any) -> str:
        return str(score)
