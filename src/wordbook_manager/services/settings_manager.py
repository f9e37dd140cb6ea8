"""Settings Manager - Handles store backend, cache and logging configuration."""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

STORE_BACKENDS = ("firestore", "memory")


class SettingsManager:
    """
    Manages settings read from the environment.

    Reads a .env file in the project root first; real environment
    variables win over values in the file.
    """

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize settings manager.

        Args:
            project_root: Path to project root where .env is located.
                         If None, searches upward from current file.
        """
        if project_root is None:
            current = Path(__file__).resolve()
            project_root = current.parent.parent.parent.parent

        env_path = project_root / ".env"
        load_dotenv(dotenv_path=env_path)

        self._project_root = project_root

    @staticmethod
    def _get(name: str) -> Optional[str]:
        value = os.getenv(name)
        return value.strip() if value and value.strip() else None

    def get_store_backend(self) -> str:
        """Which document store to use: ``firestore`` (default) or ``memory``.

        Raises:
            ValueError: If WORDBOOK_STORE_BACKEND names an unknown backend.
        """
        backend = (self._get("WORDBOOK_STORE_BACKEND") or "firestore").lower()
        if backend not in STORE_BACKENDS:
            raise ValueError(f"Unknown store backend: {backend}")
        return backend

    def get_project_id(self) -> Optional[str]:
        """Google Cloud project for Firestore; None lets the client infer it."""
        return self._get("GOOGLE_CLOUD_PROJECT")

    def get_database(self) -> Optional[str]:
        """Firestore database id; None means the default database."""
        return self._get("FIRESTORE_DATABASE")

    def get_user_id(self) -> str:
        """User whose wordbooks the desktop client works on."""
        return self._get("WORDBOOK_USER_ID") or "local-user"

    def get_cache_ttl_seconds(self) -> Optional[float]:
        """Cache lifetime in seconds; None keeps entries until invalidated.

        Raises:
            ValueError: If the value is not a positive number.
        """
        raw = self._get("WORDBOOK_CACHE_TTL_SECONDS")
        if raw is None:
            return None
        try:
            ttl = float(raw)
        except ValueError as e:
            raise ValueError(f"Invalid WORDBOOK_CACHE_TTL_SECONDS: {raw}") from e
        if ttl <= 0:
            raise ValueError(f"Invalid WORDBOOK_CACHE_TTL_SECONDS: {raw}")
        return ttl

    def get_log_level(self) -> int:
        name = (self._get("WORDBOOK_LOG_LEVEL") or "INFO").upper()
        level = logging.getLevelName(name)
        return level if isinstance(level, int) else logging.INFO

    def reload_env(self) -> None:
        """Reload environment variables from .env file."""
        env_path = self._project_root / ".env"
        load_dotenv(dotenv_path=env_path, override=True)
