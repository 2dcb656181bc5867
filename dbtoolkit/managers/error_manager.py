# ========================================================================
# File:       dbtoolkit/managers/error_manager.py
# Purpose:    Records DB layer errors without swallowing them:
#             bounded history (ERROR_HISTORY_SIZE) + ERROR log line,
#             console output only in dev mode (DB_DEV_MODE)
# ========================================================================

from collections import deque

from dbtoolkit.config.env import EnvLoader
from dbtoolkit.handlers.error_handler import ErrorHandler
from dbtoolkit.managers.log_manager import LogManager
from dbtoolkit.helpers.core_helper import safe_call

DEFAULT_ERROR_HISTORY = 100


class ErrorManager:
    _errors = deque(maxlen=DEFAULT_ERROR_HISTORY)
    _dev_mode = False

    @classmethod
    def initialize(cls, dev_mode: bool = None, history_size: int = None):
        """
        Re-read DB_DEV_MODE / ERROR_HISTORY_SIZE unless given explicitly.
        Recorded errors survive; only the newest history_size are kept.
        """
        if dev_mode is None:
            dev_mode = EnvLoader.get_bool("DB_DEV_MODE", False)
        if history_size is None:
            history_size = EnvLoader.get_int("ERROR_HISTORY_SIZE", DEFAULT_ERROR_HISTORY, minimum=1)
        cls._dev_mode = bool(dev_mode)
        cls._errors = deque(cls._errors, maxlen=max(1, int(history_size)))

    @classmethod
    def create(cls, error: BaseException):
        """Remember and log the error. Callers re-raise it themselves."""
        cls._errors.append(error)
        ErrorHandler.display(error, cls._dev_mode)
        safe_call(LogManager.error, ErrorHandler.render(error))

    @classmethod
    def read(cls, last_only: bool = True):
        if last_only:
            return cls._errors[-1] if cls._errors else None
        return list(cls._errors)

    @classmethod
    def delete(cls, index: int = None):
        if index is None:
            cls._errors.clear()
        elif 0 <= index < len(cls._errors):
            del cls._errors[index]
