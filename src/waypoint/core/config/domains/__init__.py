from .engine import EngineConfig, ScaffoldConfig
from .logging import LoggingConfig

__all__ = ["EngineConfig", "LoggingConfig", "ScaffoldConfig"]
