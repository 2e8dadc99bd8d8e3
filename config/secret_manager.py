"""Utility helpers for retrieving runtime secrets from environment or vault files."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict, Optional


class SecretLoader:
    """Lightweight helper to centralize secret retrieval.

    The loader reads secrets from (in order):
    1. Environment variables.
    2. A JSON file pointed by ``SECRET_MANAGER_FILE`` or ``VAULT_SECRETS_PATH``.

    API keys and bearer tokens never live in the repository; the collectors
    ask this loader when the configuration leaves a credential empty.
    """

    def __init__(self) -> None:
        self._cache: Optional[Dict[str, str]] = None

    def _load_secret_file(self) -> Dict[str, str]:
        if self._cache is not None:
            return self._cache

        path_value = os.getenv("SECRET_MANAGER_FILE") or os.getenv("VAULT_SECRETS_PATH")
        if not path_value:
            self._cache = {}
            return self._cache

        candidate = Path(path_value).expanduser()
        if not candidate.exists():
            self._cache = {}
            return self._cache

        try:
            data = json.loads(candidate.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            data = {}
        if isinstance(data, dict):
            normalized = {str(k).upper(): str(v) for k, v in data.items()}
        else:
            normalized = {}

        self._cache = normalized
        return self._cache

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        env_key = key.upper()
        if os.environ.get(env_key):
            return os.environ[env_key]

        store = self._load_secret_file()
        return store.get(env_key, default)

    def resolve(self, configured: Optional[str], key: str) -> Optional[str]:
        """Return the configured credential, falling back to the secret store."""

        if configured:
            return configured
        return self.get(key)


secret_loader = SecretLoader()

__all__ = ["SecretLoader", "secret_loader"]
