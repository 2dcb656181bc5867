# ========================================================================
# File:       dbtoolkit/config/env.py
# Purpose:    .env discovery for the DB toolkit + typed getters used by
#             the drivers, the managers and DBManager.from_env()
# ========================================================================
from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from dotenv import load_dotenv

# points at a specific .env file, skipping discovery
ENV_FILE_VAR = "DBTOOLKIT_ENV_FILE"

_TRUE = ("1", "true", "yes", "y", "on")
_FALSE = ("0", "false", "no", "n", "off")


class EnvLoader:
    """
    Loads .env once and reads DB settings from os.environ.
    Values already present in os.environ always win over the file,
    which is how tests and deployments override a checked-in .env.
    """
    _loaded = False
    _loaded_path: Path | None = None

    @staticmethod
    def _find_env_path() -> Path | None:
        explicit = os.environ.get(ENV_FILE_VAR)
        if explicit:
            path = Path(explicit).expanduser()
            return path if path.is_file() else None

        project_root = Path(__file__).resolve().parents[2]
        for candidate in (Path.cwd() / ".env", project_root / ".env"):
            if candidate.is_file():
                return candidate
        return None

    @classmethod
    def load(cls, force: bool = False) -> None:
        if cls._loaded and not force:
            return
        cls._loaded_path = cls._find_env_path()
        if cls._loaded_path:
            load_dotenv(dotenv_path=cls._loaded_path, override=False)
        cls._loaded = True

    @classmethod
    def get(cls, key: str, default: str | None = None) -> str | None:
        if not cls._loaded:
            cls.load()
        return os.getenv(key, default)

    @classmethod
    def get_bool(cls, key: str, default: bool = False) -> bool:
        val = (cls.get(key) or "").strip().lower()
        if val in _TRUE:
            return True
        if val in _FALSE:
            return False
        return default

    @classmethod
    def get_int(cls, key: str, default: int = 0, minimum: int | None = None) -> int:
        """Integer setting; unparsable values fall back to default, minimum clamps."""
        raw = (cls.get(key) or "").strip()
        try:
            value = int(raw) if raw else default
        except ValueError:
            value = default
        if minimum is not None and value < minimum:
            return minimum
        return value

    @classmethod
    def get_choice(cls, key: str, choices: Iterable[str], default: str) -> str:
        """Case-insensitive pick from a fixed set (PRAGMA values, driver keys)."""
        val = (cls.get(key) or "").strip().lower()
        allowed = {c.lower() for c in choices}
        return val if val in allowed else default.lower()

    @classmethod
    def debug_info(cls) -> dict:
        return {
            "loaded": cls._loaded,
            "env_path": str(cls._loaded_path) if cls._loaded_path else None,
        }
