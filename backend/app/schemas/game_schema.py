from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Annotated, List, Literal, Optional, Union

from training.core.bitboard import BitBoard, Side
from training.core.constants import (
    ROWS, COLS, MEMO_DEPTH, PLAYOUTS_PER_LEAF,
    DEFAULT_LIMIT_MS, DEFAULT_EXPANSION_THRESHOLD, DEFAULT_C
)
from backend.app.core.settings import MAX_SEARCH_LIMIT_MS
from backend.app.models.enums import GameResult

class BoardPayload(BaseModel):
    """7 columns, each listing its discs bottom-up."""
    # Reject unknown fields: a malformed board is never coerced
    model_config = ConfigDict(extra='forbid')

    cols: List[List[Side]]

    @field_validator("cols")
    @classmethod
    def check_shape(cls, cols: List[List[Side]]) -> List[List[Side]]:
        if len(cols) != COLS:
            raise ValueError(f"expected {COLS} columns, got {len(cols)}")
        for i, col in enumerate(cols):
            if len(col) > ROWS:
                raise ValueError(f"column {i} holds {len(col)} discs (max {ROWS})")
        return cols

    def to_bitboard(self) -> BitBoard:
        return BitBoard.from_cols(self.cols)

# --- Strategy Parameters ---
class AlphaBetaParams(BaseModel):
    model_config = ConfigDict(extra='forbid')

    type: Literal["AlphaBeta"] = "AlphaBeta"
    depth: int = Field(MEMO_DEPTH, ge=1, le=4, description="Plies searched exactly")
    playouts: int = Field(PLAYOUTS_PER_LEAF, ge=1, le=50, description="Rollouts per leaf")
    seed: Optional[int] = None

class MCTreeParams(BaseModel):
    model_config = ConfigDict(extra='forbid')

    type: Literal["MCTree"] = "MCTree"
    limit: int = Field(DEFAULT_LIMIT_MS, gt=0, le=MAX_SEARCH_LIMIT_MS, description="Time budget in ms")
    expansion_threshold: int = Field(DEFAULT_EXPANSION_THRESHOLD, ge=0)
    c: float = Field(DEFAULT_C, ge=0.0, description="UCB exploration constant")
    seed: Optional[int] = None

StrategyParams = Annotated[Union[AlphaBetaParams, MCTreeParams], Field(discriminator="type")]

# --- Requests / Responses ---
class SearchRequest(BaseModel):
    board: BoardPayload
    strategy: StrategyParams

class SearchResponse(BaseModel):
    position: Optional[int] = None  # None: no move available
    score: str
    duration: Optional[float] = 0.0

class WinnerResponse(BaseModel):
    winner: GameResult

class EngineSummary(BaseModel):
    id: str
    label: str
    strategy: str
