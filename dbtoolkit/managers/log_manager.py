# ============================================================================
# File:       dbtoolkit/managers/log_manager.py
# Purpose:    LogManager, the class-level API over LogHandler
#             - LOG_LEVEL threshold (entries below it are dropped)
#             - bounded in-memory history (LOG_HISTORY_SIZE, newest kept)
# ============================================================================

from collections import deque

from dbtoolkit.config.env import EnvLoader
from dbtoolkit.handlers.log_handler import LogHandler
from dbtoolkit.helpers.core_helper import safe_call

LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40, "CRITICAL": 50}
DEFAULT_LOG_HISTORY = 500


class LogManager:
    _log_entries = deque(maxlen=DEFAULT_LOG_HISTORY)
    _threshold = LEVELS["DEBUG"]

    @classmethod
    def initialize(cls, history_size: int = None, level: str = None):
        """Reset the history and re-read LOG_HISTORY_SIZE / LOG_LEVEL."""
        if history_size is None:
            history_size = EnvLoader.get_int("LOG_HISTORY_SIZE", DEFAULT_LOG_HISTORY, minimum=1)
        if level is None:
            level = EnvLoader.get_choice("LOG_LEVEL", LEVELS, "DEBUG")
        cls._log_entries = deque(maxlen=max(1, int(history_size)))
        cls._threshold = LEVELS.get(level.upper(), LEVELS["DEBUG"])

    @classmethod
    def create(cls, level: str, message: str):
        """
        Central log entry point. Keeps (LEVEL, message) in memory and hands
        it to LogHandler; unknown levels go straight to LogHandler._write.
        """
        level_upper = (level or "").upper()
        if LEVELS.get(level_upper, LEVELS["INFO"]) < cls._threshold:
            return

        cls._log_entries.append((level_upper, message))

        method = getattr(LogHandler, level_upper.lower(), None)
        if callable(method):
            safe_call(method, message)
            return

        safe_call(LogHandler._write, level_upper, message)

    @classmethod
    def read(cls, last_only: bool = False):
        if last_only:
            return cls._log_entries[-1] if cls._log_entries else None
        return list(cls._log_entries)

    @classmethod
    def delete(cls, index: int = None):
        if index is None:
            cls._log_entries.clear()
        elif 0 <= index < len(cls._log_entries):
            del cls._log_entries[index]

    @classmethod
    def debug(cls, message: str):
        cls.create("DEBUG", message)

    @classmethod
    def info(cls, message: str):
        cls.create("INFO", message)

    @classmethod
    def warning(cls, message: str):
        cls.create("WARNING", message)

    @classmethod
    def error(cls, message: str):
        cls.create("ERROR", message)

    @classmethod
    def critical(cls, message: str):
        cls.create("CRITICAL", message)
