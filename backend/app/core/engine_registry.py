import yaml
from pydantic import BaseModel
from typing import Dict, Optional

from backend.app.core.settings import ENGINE_CONFIG_PATH
from backend.app.schemas.game_schema import StrategyParams

class EngineConfig(BaseModel):
    label: str
    params: StrategyParams

class EngineRegistry:
    def __init__(self, config_path: str = ENGINE_CONFIG_PATH):
        self.engines: Dict[str, EngineConfig] = {}
        self._load(config_path)

    def _load(self, path: str):
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
            for key, val in data.get("engines", {}).items():
                self.engines[key] = EngineConfig(**val)

    def get(self, engine_id: str) -> Optional[EngineConfig]:
        return self.engines.get(engine_id)

    def list_all(self) -> Dict[str, EngineConfig]:
        return self.engines

# Singleton instance
registry = EngineRegistry()
