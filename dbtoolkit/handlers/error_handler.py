# ========================================================================
# File:       dbtoolkit/handlers/error_handler.py
# Purpose:    Turns DB layer errors into text for ErrorManager:
#             one summary line (+ sql/params or transaction stage)
#             followed by the traceback
# ========================================================================

import traceback

from dbtoolkit.db.query import ExecutionFailure, TransactionFailure


class ErrorHandler:
    @staticmethod
    def format_error(error: BaseException) -> str:
        text = f"{type(error).__name__}: {str(error)}"
        if isinstance(error, ExecutionFailure) and error.sql:
            text += f" | sql={error.sql} params={error.params!r}"
        elif isinstance(error, TransactionFailure):
            text += f" | stage={error.stage}"
        original = getattr(error, "original", None)
        if original is not None:
            text += f" | cause={type(original).__name__}"
        return text

    @staticmethod
    def get_traceback(error: BaseException) -> str:
        return "".join(traceback.format_exception(type(error), error, error.__traceback__))

    @staticmethod
    def render(error: BaseException) -> str:
        return f"{ErrorHandler.format_error(error)}\n{ErrorHandler.get_traceback(error)}"

    @staticmethod
    def display(error: BaseException, dev_mode: bool = True):
        """Print the error to the console; a no-op outside dev mode."""
        if dev_mode:
            print(f"[ERROR]: {ErrorHandler.render(error)}")
