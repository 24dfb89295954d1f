from .manager import ConfigManager
from .cache import clear_all_caches, get_cached_config
from .base import BaseDomainConfig
from .domains import EngineConfig, LoggingConfig, ScaffoldConfig

__all__ = [
    "ConfigManager",
    "BaseDomainConfig",
    "EngineConfig",
    "LoggingConfig",
    "ScaffoldConfig",
    "clear_all_caches",
    "get_cached_config",
]
