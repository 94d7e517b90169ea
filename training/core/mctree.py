# training/core/mctree.py
import logging
import math
import random
import time
from typing import Callable, List, Optional, Sequence, Tuple

from .bitboard import BitBoard, Side
from .constants import (
    WIN_POINT, LOSE_POINT, DRAW_POINT, BATCH_SIZE,
    DEFAULT_LIMIT_MS, DEFAULT_EXPANSION_THRESHOLD, DEFAULT_C
)
from .playout import random_playout

logger = logging.getLogger(__name__)


def choice_with_weight(rng: random.Random, weights: Sequence[float]) -> int:
    """Index drawn proportionally to 'weights'."""
    r = rng.uniform(0.0, sum(weights))
    p = 0.0
    for i, w in enumerate(weights):
        p += w
        if r <= p:
            return i
    return len(weights) - 1


class Node:
    """
    'board' is the position reached by 'col'; the side to move there is
    the one whose win_point this node accumulates.
    'result', once set, is the proven value of this node and never changes.
    """
    __slots__ = ("board", "col", "visited_count", "win_point", "result", "children")

    def __init__(self, board: BitBoard, col: Optional[int] = None, is_lose: bool = False):
        self.board = board
        self.col = col
        self.visited_count = 0
        self.win_point = 0.0
        self.result: Optional[float] = LOSE_POINT if is_lose else None
        self.children: List["Node"] = []

    def win_rate(self) -> float:
        return self.win_point / self.visited_count if self.visited_count else 0.0


class MCTree:
    """
    Time-bounded Monte Carlo Tree Search.

    Args:
        rng: random source (seed it for reproducible searches)
        limit: time budget in milliseconds
        expansion_threshold: simulations a leaf gets before its children are created
        c: exploration constant of the UCB weight
        clock: wall clock in seconds
        batch_size: simulations between two clock checks
    """

    def __init__(
        self,
        rng: random.Random,
        limit: int = DEFAULT_LIMIT_MS,
        expansion_threshold: int = DEFAULT_EXPANSION_THRESHOLD,
        c: float = DEFAULT_C,
        clock: Callable[[], float] = time.monotonic,
        batch_size: int = BATCH_SIZE,
    ):
        if batch_size <= 0:
            raise ValueError(f"Batch size must be positive, got {batch_size}")
        self.rng = rng
        self.limit = limit / 1000.0
        self.expansion_threshold = expansion_threshold
        self.c = c
        self.clock = clock
        self.batch_size = batch_size
        self.root: Optional[Node] = None
        self.simulations = 0

    def choice_child(self, log_total_count: float, node: Node) -> int:
        weights = []
        for i, child in enumerate(node.children):
            # Every child gets one simulation before weighting applies
            if child.visited_count == 0:
                return i
            a = 1.0 - child.win_point / child.visited_count
            b = self.c * math.sqrt(log_total_count / child.visited_count)
            weights.append(a + b)
        return choice_with_weight(self.rng, weights)

    def selection(self, log_total_count: float, node: Node, side: Side) -> float:
        """
        One simulation through 'node' ('side' to move there).
        Returns the value for 'side'.
        """
        node.visited_count += 1
        if node.result is not None:
            node.win_point += node.result
            return node.result

        if not node.children:
            if node.visited_count <= self.expansion_threshold:
                r = random_playout(self.rng, node.board, side)
                node.win_point += r
                return r

            can = node.board.list_can_put()
            if not can:
                node.result = DRAW_POINT
                node.win_point += DRAW_POINT
                return DRAW_POINT

            for col in can:
                board = node.board.copy()
                if board.put(col, side):
                    # Proven win: only the winning move is kept
                    node.result = WIN_POINT
                    node.children = [Node(board, col, is_lose=True)]
                    node.children[0].visited_count += 1
                    node.win_point += WIN_POINT
                    return WIN_POINT
                node.children.append(Node(board, col))

        i = self.choice_child(log_total_count, node)
        p = 1.0 - self.selection(log_total_count, node.children[i], side.flip())

        if any(c.result == LOSE_POINT for c in node.children):
            node.result = WIN_POINT
            node.win_point = float(node.visited_count)
        elif all(c.result == WIN_POINT for c in node.children):
            node.result = LOSE_POINT
            node.win_point = 0.0
        else:
            node.win_point += p
        return p

    @staticmethod
    def best_child(node: Node) -> Node:
        # A child lost for the opponent beats any visit count
        return max(
            node.children,
            key=lambda child: (child.result == LOSE_POINT, child.visited_count)
        )

    def search(self, board: BitBoard) -> Tuple[Optional[int], float]:
        """
        Returns (column, estimated probability that the player to move wins
        after playing it). Column is None only if no column is playable.
        """
        if not board.list_can_put():
            return None, 0.0

        start = self.clock()
        side = board.calc_next()
        root = Node(board.copy())
        self.root = root
        total_count = 0

        while True:
            for _ in range(self.batch_size):
                total_count += 1
                self.selection(math.log(total_count), root, side)
                if root.result is not None:
                    break
            if root.result is not None or self.clock() - start >= self.limit:
                break
        self.simulations = total_count

        if not root.children:
            # Budget ran out before the root reached its expansion threshold
            return board.list_can_put()[0], root.win_rate()

        best = self.best_child(root)

        logger.debug("mctree: simulations=%d children=%d", total_count, len(root.children))
        for child in root.children:
            logger.debug(
                "col=%d visited_count=%d win_rate=%.3f result=%s",
                child.col, child.visited_count, 1.0 - child.win_rate(), child.result
            )

        if best.visited_count == 0:
            return best.col, 0.5
        return best.col, 1.0 - best.win_rate()
