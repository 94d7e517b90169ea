"""
Search Strategy Pattern

Each strategy turns validated parameters and a random source into a searcher
answering (column or None, score string) for a board.
"""

import random
from abc import ABC, abstractmethod
from typing import Optional, Tuple

from training.core.bitboard import BitBoard
from training.core.mctree import MCTree
from training.core.playout import PlayoutEvaluator
from training.core.solver import Solver
from backend.app.models.enums import StrategyType
from backend.app.schemas.game_schema import AlphaBetaParams, MCTreeParams, StrategyParams


class SearchStrategy(ABC):
    """Abstract base class for search strategies"""

    @abstractmethod
    def search(self, board: BitBoard, params: StrategyParams, rng: random.Random) -> Tuple[Optional[int], str]:
        """Run one search and return (column, score description)"""
        pass


class AlphaBetaStrategy(SearchStrategy):
    def search(self, board: BitBoard, params: AlphaBetaParams, rng: random.Random):
        solver = Solver(PlayoutEvaluator(rng, params.playouts), depth=params.depth)
        return solver.search(board)


class MCTreeStrategy(SearchStrategy):
    """
    Score is the estimated probability that the player to move wins
    after the returned column.
    """
    def search(self, board: BitBoard, params: MCTreeParams, rng: random.Random):
        ai = MCTree(rng, params.limit, params.expansion_threshold, params.c)
        col, win_rate = ai.search(board)
        return col, f"{win_rate:.4f}"


# Strategy Registry
STRATEGIES = {
    StrategyType.ALPHA_BETA: AlphaBetaStrategy(),
    StrategyType.MCTREE: MCTreeStrategy(),
}


def get_strategy(params: StrategyParams) -> SearchStrategy:
    strategy = STRATEGIES.get(params.type)
    if not strategy:
        raise ValueError(f"Unsupported strategy: {params.type}")
    return strategy
