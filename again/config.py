import logging
import os
from functools import lru_cache

import yaml

from .errors import ConfigError
from .lib import paths

DEFAULT_SHELL = "/bin/sh"
DEFAULT_LOG_LEVEL = "WARNING"

_STRING_KEYS = ("shell", "log_level")


def _validate_config(cfg: dict) -> None:
    """Validate config structure. Fail fast on invalid types."""
    if not isinstance(cfg, dict):
        raise ConfigError(f"Config must be a mapping, got {type(cfg).__name__}")

    for key in _STRING_KEYS:
        if key in cfg and not isinstance(cfg[key], str):
            raise ConfigError(f"Config '{key}' must be a string")

    level = cfg.get("log_level")
    if level is not None and not isinstance(logging.getLevelName(level.upper()), int):
        raise ConfigError(f"Config 'log_level' must be a logging level name, got {level!r}")


def _clear_cache():
    load_config.cache_clear()


@lru_cache(maxsize=1)
def load_config() -> dict:
    """Load config.yaml, returning its content or an empty dict if not found."""
    path = paths.config_file()
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid config at {path}: {e}") from e
    _validate_config(cfg)
    return cfg


def shell() -> str:
    """Shell used to run aliases: config, then $SHELL, then /bin/sh."""
    return load_config().get("shell") or os.environ.get("SHELL") or DEFAULT_SHELL


def log_level() -> str:
    return load_config().get("log_level", DEFAULT_LOG_LEVEL).upper()
