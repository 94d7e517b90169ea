# training/core/transposition.py
from typing import Any, Tuple

from .constants import MEMO_DEPTH


class DepthMemo:
    """
    One map per search depth: exact board key -> score at that depth.
    Only collapses transpositions met again at the SAME depth.
    Lives for a single top-level search.
    """

    def __init__(self, depth: int = MEMO_DEPTH):
        self.tables = [{} for _ in range(depth)]
        self.hits = 0

    def get(self, depth: int, key: Tuple[int, int]):
        table = self.tables[depth]
        if key in table:
            self.hits += 1
            return table[key]
        return None

    def put(self, depth: int, key: Tuple[int, int], score: Any):
        self.tables[depth][key] = score

    def reset(self):
        for table in self.tables:
            table.clear()
        self.hits = 0
