# flakeproof/config/loader.py
"""
Configuration Loader

Loads configuration from YAML files with code defaults as fallback, then
applies FLAKEPROOF_* environment overrides.

Design principle:
- Code = truth (has all defaults)
- YAML = input parameters (optional)
- Environment = deployment overrides (optional)
- System works without YAML or environment
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 45_000
DEFAULT_RETRY_COUNT = 2
DEFAULT_TRACE_CAPACITY = 50
DEFAULT_HTML_DUMP_MAX_LENGTH = 200_000
DEFAULT_LOCALE = "zh-CN"
DEFAULT_LOG_LEVEL = "INFO"

ENV_PREFIX = "FLAKEPROOF_"


def _default_user_data_dir() -> str:
    return str(Path.home() / ".flakeproof" / "profile")


@dataclass(frozen=True)
class EngineConfig:
    """
    Engine configuration. All fields have code defaults.
    """

    timeout_ms: int = DEFAULT_TIMEOUT_MS
    retry_count: int = DEFAULT_RETRY_COUNT
    trace_capacity: int = DEFAULT_TRACE_CAPACITY
    html_dump_max_length: int = DEFAULT_HTML_DUMP_MAX_LENGTH
    user_data_dir: str = ""
    headless: bool = False
    locale: str = DEFAULT_LOCALE
    proxy: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        if not self.user_data_dir:
            object.__setattr__(self, "user_data_dir", _default_user_data_dir())

    @classmethod
    def default(cls) -> "EngineConfig":
        """Create default configuration (no YAML needed)"""
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


# ---- parsing helpers ----

def _positive_int(value: Any, fallback: int) -> int:
    """Parse a positive int; anything else falls back."""
    if value is None or isinstance(value, bool):
        return fallback
    try:
        parsed = int(str(value).strip(), 10)
    except ValueError:
        return fallback
    return parsed if parsed > 0 else fallback


def _bool(value: Any, fallback: bool) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback
    s = str(value).strip().lower()
    if s in {"1", "true", "yes", "on"}:
        return True
    if s in {"0", "false", "no", "off"}:
        return False
    return fallback


def _text(value: Any, fallback: Optional[str]) -> Optional[str]:
    if value is None:
        return fallback
    s = str(value).strip()
    return s or fallback


_INT_FIELDS = {"timeout_ms", "retry_count", "trace_capacity", "html_dump_max_length"}
_BOOL_FIELDS = {"headless"}


def _coerce(base: EngineConfig, raw: Mapping[str, Any]) -> EngineConfig:
    """Merge raw (YAML or env) values into `base`, ignoring unknown keys."""
    known = {f.name for f in fields(EngineConfig)}
    updates: Dict[str, Any] = {}
    for key, value in raw.items():
        if key not in known:
            logger.debug(f"ignoring unknown config key: {key}")
            continue
        current = getattr(base, key)
        if key in _INT_FIELDS:
            updates[key] = _positive_int(value, current)
        elif key in _BOOL_FIELDS:
            updates[key] = _bool(value, current)
        else:
            updates[key] = _text(value, current)
    return replace(base, **updates)


def _load_yaml(config_path: Optional[Path] = None) -> Optional[Dict[str, Any]]:
    """Load YAML file, return None if not found or invalid (not an error)"""
    if config_path:
        paths = [Path(config_path)]
    else:
        paths = [Path.home() / ".flakeproof" / "config.yml"]

    for path in paths:
        if path.exists():
            try:
                with open(path, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"config file ignored, using defaults: {path}: {e}")
                return None
            return data if isinstance(data, dict) else None

    return None


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for f in fields(EngineConfig):
        env_key = ENV_PREFIX + f.name.upper()
        if env_key in environ:
            out[f.name] = environ[env_key]
    return out


def load_config(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> EngineConfig:
    """
    Load engine configuration.

    Args:
        config_path: Optional path to YAML file (default ~/.flakeproof/config.yml)
        environ: Environment mapping (default os.environ)

    Returns:
        EngineConfig (always has code defaults)
    """
    config = EngineConfig.default()

    yaml_data = _load_yaml(config_path)
    if yaml_data:
        # accept either a flat mapping or one nested under "engine"
        section = yaml_data.get("engine", yaml_data)
        if isinstance(section, dict):
            config = _coerce(config, section)

    env = os.environ if environ is None else environ
    overrides = _env_overrides(env)
    if overrides:
        config = _coerce(config, overrides)

    return config


__all__ = [
    "EngineConfig",
    "load_config",
    "ENV_PREFIX",
]
