"""Configuration tooling for the ethical news crawler."""
from __future__ import annotations

from .config_manager import Config, ConfigError, load_config
from .config_schema import DEFAULT_CONFIG, iter_field_docs

__all__ = [
    "load_config",
    "Config",
    "ConfigError",
    "DEFAULT_CONFIG",
    "iter_field_docs",
]
