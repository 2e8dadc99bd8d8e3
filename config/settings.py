"""Project configuration facade backed by ethicalcrawler.config_manager."""
from __future__ import annotations

from typing import Any, Dict, Optional

from ethicalcrawler.config_manager import Config, ConfigError, load_config

_CONFIG: Optional[Config] = None


def get_config() -> Config:
    """Return the process-wide configuration, loading it on first use."""

    global _CONFIG
    if _CONFIG is None:
        _CONFIG = load_config()
    return _CONFIG


def build_logging_config(config: Config) -> Dict[str, Any]:
    """Translate the logging section into the dict consumed by the logger."""

    section = config.logging
    return {
        "level": section.level,
        "debug": config.app.debug,
        "file_path": str(section.file_path) if section.file_path else None,
        "max_file_size": f"{section.max_file_size_mb} MB",
        "retention": f"{section.retention_days} days",
    }


def validate_config(config: Config | None = None) -> None:
    """Execute domain specific consistency checks."""

    cfg = config or get_config()
    if cfg.guardian.from_date > cfg.guardian.to_date:
        raise ConfigError("guardian.from_date must not be later than guardian.to_date")
    if cfg.gdelt.start > cfg.gdelt.end:
        raise ConfigError("gdelt.start must not be later than gdelt.end")
    if not cfg.gdelt.languages:
        raise ConfigError("gdelt.languages must list at least one language")
    if not cfg.newsapi.languages:
        raise ConfigError("newsapi.languages must list at least one language")
    if not cfg.rss.feeds:
        raise ConfigError("rss.feeds must list at least one feed")


__all__ = [
    "build_logging_config",
    "get_config",
    "validate_config",
]
