# flakeproof/config/__init__.py
from .loader import ENV_PREFIX, EngineConfig, load_config

__all__ = [
    "EngineConfig",
    "load_config",
    "ENV_PREFIX",
]
