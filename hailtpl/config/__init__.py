from .load import load_engine_config
from .model import EngineConfig

__all__ = ["EngineConfig", "load_engine_config"]
