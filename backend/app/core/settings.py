import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

DEFAULT_ENGINE_CONFIG = Path(__file__).resolve().parents[2] / "config" / "engines.yaml"

ENGINE_CONFIG_PATH = os.getenv("ENGINE_CONFIG_PATH", str(DEFAULT_ENGINE_CONFIG))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Allow Vite (5173) and React default (3000)
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
    if origin.strip()
]

# Upper bound for caller-supplied MCTS budgets
MAX_SEARCH_LIMIT_MS = int(os.getenv("MAX_SEARCH_LIMIT_MS", "10000"))
