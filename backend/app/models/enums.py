from enum import StrEnum

class GameResult(StrEnum):
    A = "A"
    B = "B"
    DRAW = "F"  # Board full, no line
    IN_PROGRESS = "IN_PROGRESS"

class StrategyType(StrEnum):
    ALPHA_BETA = "AlphaBeta"
    MCTREE = "MCTree"
