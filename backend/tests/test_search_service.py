import random
import typing
import unittest
from unittest import mock

from pydantic import ValidationError

from training.core.bitboard import BitBoard
from backend.app.core.engine_registry import EngineRegistry, registry
from backend.app.core.settings import DEFAULT_ENGINE_CONFIG
from backend.app.engine import ai_factory
from backend.app.models.enums import GameResult
from backend.app.schemas.game_schema import AlphaBetaParams, MCTreeParams
from backend.app.services.search_service import search_service


def play(moves) -> BitBoard:
    board = BitBoard()
    for col in moves:
        board.put(col, board.calc_next())
    return board


class TestSearchService(unittest.TestCase):
    def test_calculate_winner(self):
        self.assertEqual(search_service.calculate_winner(BitBoard()), GameResult.IN_PROGRESS)
        self.assertEqual(search_service.calculate_winner(play([3, 2, 3, 2, 4, 2, 5, 2])), GameResult.B)

    def test_unplayable_column_is_downgraded(self):
        """A column the board cannot accept is reported as no move, not raised."""
        board = play([0, 0, 0, 0, 0, 0])
        with mock.patch.object(ai_factory.MCTreeStrategy, "search", return_value=(0, "0.5")):
            result = search_service.search(board, MCTreeParams(limit=10))
        self.assertIsNone(result.position)
        self.assertEqual(result.score, "0.5")

    def test_out_of_range_column_is_downgraded(self):
        with mock.patch.object(ai_factory.MCTreeStrategy, "search", return_value=(7, "0.5")):
            result = search_service.search(BitBoard(), MCTreeParams(limit=10))
        self.assertIsNone(result.position)

    def test_none_column_is_no_move(self):
        with mock.patch.object(ai_factory.AlphaBetaStrategy, "search", return_value=(None, "(0.000, 0.000)")):
            result = search_service.search(BitBoard(), AlphaBetaParams(depth=1, playouts=1))
        self.assertIsNone(result.position)

    def test_seeded_alphabeta_is_reproducible(self):
        board = play([3, 3, 4])
        params = AlphaBetaParams(depth=2, playouts=3, seed=12)
        first = search_service.search(board, params)
        second = search_service.search(board, params)
        self.assertEqual((first.position, first.score), (second.position, second.score))
        self.assertTrue(board.can_put(first.position))

    def test_explicit_rng_is_used(self):
        board = play([3])
        first = search_service.search(board, AlphaBetaParams(depth=1, playouts=2), random.Random(8))
        second = search_service.search(board, AlphaBetaParams(depth=1, playouts=2), random.Random(8))
        self.assertEqual(first.score, second.score)


class TestStrategyParams(unittest.TestCase):
    def test_alphabeta_cost_is_bounded(self):
        AlphaBetaParams(depth=4, playouts=50)
        for bad in ({"depth": 5}, {"playouts": 51}):
            with self.assertRaises(ValidationError):
                AlphaBetaParams(**bad)

    def test_base_strategy_accepts_either_params(self):
        hints = typing.get_type_hints(ai_factory.SearchStrategy.search)
        self.assertEqual(hints["params"], typing.Union[AlphaBetaParams, MCTreeParams])
        self.assertIsInstance(ai_factory.get_strategy(MCTreeParams()), ai_factory.MCTreeStrategy)


class TestEngineRegistry(unittest.TestCase):
    def test_shipped_presets(self):
        loaded = EngineRegistry(str(DEFAULT_ENGINE_CONFIG))
        self.assertEqual(set(loaded.list_all()), {"alphabeta", "mctree-200ms", "mctree-10s"})
        self.assertIsInstance(loaded.get("alphabeta").params, AlphaBetaParams)
        self.assertEqual(loaded.get("mctree-10s").params.limit, 10000)
        self.assertIsNone(registry.get("missing"))


if __name__ == '__main__':
    unittest.main()
