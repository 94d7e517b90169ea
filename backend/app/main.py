import asyncio
import logging
from typing import List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from backend.app.core.engine_registry import registry
from backend.app.core.settings import CORS_ORIGINS, LOG_LEVEL
from backend.app.schemas.game_schema import (
    BoardPayload, EngineSummary, SearchRequest, SearchResponse, StrategyParams, WinnerResponse
)
from backend.app.services.search_service import search_service

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = FastAPI(title="Connect Four Search Engine")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _to_bitboard(payload: BoardPayload):
    try:
        return payload.to_bitboard()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


async def _run_search(payload: BoardPayload, params: StrategyParams) -> SearchResponse:
    board = _to_bitboard(payload)
    # Searches block for up to their time budget: keep them off the event loop
    return await asyncio.to_thread(search_service.search, board, params)


@app.post("/winner", response_model=WinnerResponse)
async def calculate_winner(payload: BoardPayload):
    """A, B, F (full board, no line) or IN_PROGRESS."""
    board = _to_bitboard(payload)
    return WinnerResponse(winner=search_service.calculate_winner(board))


@app.post("/search", response_model=SearchResponse)
async def search(request: SearchRequest):
    return await _run_search(request.board, request.strategy)


@app.get("/engines", response_model=List[EngineSummary])
async def get_available_engines():
    """Returns the configured engine presets and their display labels."""
    return [
        EngineSummary(id=key, label=val.label, strategy=val.params.type)
        for key, val in registry.list_all().items()
    ]


@app.post("/engines/{engine_id}/search", response_model=SearchResponse)
async def search_with_engine(engine_id: str, payload: BoardPayload):
    config = registry.get(engine_id)
    if not config:
        raise HTTPException(status_code=404, detail="Engine not found")
    return await _run_search(payload, config.params)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
