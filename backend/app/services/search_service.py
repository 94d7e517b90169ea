"""
Search Service - Single entry point for engine calls

Used by the HTTP API and the console game. It handles:
- Winner / draw detection
- Building a searcher from strategy parameters
- The final legality re-check of the returned column
"""

import logging
import random
import time
from typing import Optional

from training.core.bitboard import BitBoard
from backend.app.engine.ai_factory import get_strategy
from backend.app.engine.game import calculate_winner
from backend.app.models.enums import GameResult
from backend.app.schemas.game_schema import SearchResponse, StrategyParams

logger = logging.getLogger(__name__)


class SearchService:
    """Stateless: every call depends only on its inputs (and the seed)"""

    def calculate_winner(self, board: BitBoard) -> GameResult:
        return calculate_winner(board)

    def search(self, board: BitBoard, params: StrategyParams, rng: Optional[random.Random] = None) -> SearchResponse:
        """
        A full board, or a computed column the board can no longer accept,
        both come back as position=None.
        """
        if board.is_full():
            return SearchResponse(position=None, score="")

        if rng is None:
            rng = random.Random(params.seed)

        start_time = time.time()
        col, score = get_strategy(params).search(board, params, rng)
        duration = time.time() - start_time

        if col is None or not board.can_put(col):
            logger.warning("%s returned unplayable column %s; reporting no move", params.type, col)
            return SearchResponse(position=None, score=score, duration=duration)

        logger.info("%s chose column %d (score=%s) in %.3fs", params.type, col, score, duration)
        return SearchResponse(position=col, score=score, duration=duration)


# Singleton
search_service = SearchService()
