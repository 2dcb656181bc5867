# ============================================================================
# File:       dbtoolkit/handlers/log_handler.py
# Purpose:    Writing log lines per level (DEBUG, INFO, ERROR, ...)
# ============================================================================

import os
from datetime import datetime
from dbtoolkit.config.env import EnvLoader

DEFAULT_LOG_FILE = "data/logs/db.log"


class LogHandler:
    @staticmethod
    def log_file_path() -> str:
        return EnvLoader.get("LOG_FILE_PATH", DEFAULT_LOG_FILE) or DEFAULT_LOG_FILE

    @staticmethod
    def _ensure_log_dir(path: str):
        folder = os.path.dirname(path)
        if folder:
            os.makedirs(folder, exist_ok=True)

    @staticmethod
    def _write(level, message):
        try:
            path = LogHandler.log_file_path()
            LogHandler._ensure_log_dir(path)
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            log_entry = f"[{level.upper()}] {timestamp} - {message}\n"
            with open(path, "a", encoding="utf-8") as f:
                f.write(log_entry)
        except OSError as e:
            print(f"Logging failed: {e}")

    @staticmethod
    def debug(message):
        LogHandler._write("DEBUG", message)

    @staticmethod
    def info(message):
        LogHandler._write("INFO", message)

    @staticmethod
    def warning(message):
        LogHandler._write("WARNING", message)

    @staticmethod
    def error(message):
        LogHandler._write("ERROR", message)

    @staticmethod
    def critical(message):
        LogHandler._write("CRITICAL", message)
