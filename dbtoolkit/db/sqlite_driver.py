# =============================================================================
# File:        dbtoolkit/db/sqlite_driver.py
# Purpose:     SQLite driver:
#              - PRAGMA tuning from .env (WAL, synchronous, busy_timeout, FK)
#              - manual BEGIN/COMMIT/ROLLBACK (isolation_level=None)
#              - :name and ? placeholders are native, no translation
# =============================================================================
from __future__ import annotations

import os
import sqlite3

from dbtoolkit.config.env import EnvLoader
from dbtoolkit.db.base_driver import BaseDBDriver
from dbtoolkit.db.query import ExecutionFailure

MEMORY = ":memory:"
DEFAULT_PATH = os.path.join("data", "db", "app.db")
JOURNAL_MODES = ("wal", "delete", "truncate", "persist", "off", "memory")
SYNCHRONOUS_MODES = ("off", "normal", "full", "extra")


class SQLiteDriver(BaseDBDriver):
    """
    __init__(**params) expects 'path' (file path or ':memory:');
    unknown keys are ignored so a shared config dict can be passed as is.
    """
    name = "sqlite"
    quote_char = '"'
    error_types = (sqlite3.Error,)

    def __init__(self, **params):
        db_path = params.get("path") or params.get("dsn") or DEFAULT_PATH
        if isinstance(db_path, str) and db_path.startswith("sqlite:///"):
            db_path = db_path[len("sqlite:///"):]

        if db_path == MEMORY:
            self.db_file = MEMORY
        else:
            self.db_file = os.path.abspath(db_path)
            if os.path.isdir(self.db_file):
                raise ExecutionFailure(
                    f"SQLite path '{self.db_file}' is a directory, expected a .db file path."
                )
            dirpath = os.path.dirname(self.db_file) or "."
            os.makedirs(dirpath, exist_ok=True)

        options = dict(params.get("options") or {})
        options.setdefault("timeout", 5.0)
        options.setdefault("check_same_thread", False)

        try:
            # isolation_level=None -> BEGIN/COMMIT are issued by hand
            self.conn = sqlite3.connect(self.db_file, isolation_level=None, **options)
            self.conn.row_factory = sqlite3.Row
            self._apply_pragmas()
        except sqlite3.Error as e:
            raise ExecutionFailure(f"Could not open SQLite database '{self.db_file}': {e}", original=e) from e

    # --- PRAGMA settings (tunable through .env) ---
    def _apply_pragmas(self) -> None:
        """
        Optional .env variables:
          - SQLITE_FOREIGN_KEYS=true|false (default true)
          - SQLITE_JOURNAL_MODE=wal|delete|truncate|persist|off|memory
          - SQLITE_WAL=true|false  (used when JOURNAL_MODE is not set)
          - SQLITE_SYNCHRONOUS=OFF|NORMAL|FULL|EXTRA
          - SQLITE_BUSY_TIMEOUT_MS=4000
        """
        cur = self.conn.cursor()
        try:
            if EnvLoader.get_bool("SQLITE_FOREIGN_KEYS", True):
                cur.execute("PRAGMA foreign_keys = ON;")

            if self.db_file != MEMORY:
                jm = EnvLoader.get_choice("SQLITE_JOURNAL_MODE", JOURNAL_MODES, "")
                if jm:
                    cur.execute(f"PRAGMA journal_mode = {jm};")
                elif EnvLoader.get_bool("SQLITE_WAL", True):
                    cur.execute("PRAGMA journal_mode = wal;")

            sync = EnvLoader.get_choice("SQLITE_SYNCHRONOUS", SYNCHRONOUS_MODES, "NORMAL")
            cur.execute(f"PRAGMA synchronous = {sync.upper()};")

            bt = EnvLoader.get_int("SQLITE_BUSY_TIMEOUT_MS", 4000, minimum=0)
            cur.execute(f"PRAGMA busy_timeout = {bt};")
        finally:
            cur.close()

    # --- transactions ---
    def begin(self) -> None:
        self.conn.execute("BEGIN;")

    def commit(self) -> None:
        self.conn.execute("COMMIT;")

    def rollback(self) -> None:
        self.conn.execute("ROLLBACK;")

    def in_transaction(self) -> bool:
        return bool(self.conn is not None and self.conn.in_transaction)
