# =============================================================================
# File:        dbtoolkit/db/manager/helpers.py
# Purpose:     Shared helpers for the DBManager mixins
# =============================================================================
from __future__ import annotations

from functools import wraps

from dbtoolkit.db.query import DBError
from dbtoolkit.managers.log_manager import LogManager


def _log(level: str, msg: str):
    getattr(LogManager, level, LogManager.info)(f"[DBManager] {msg}")


def _requires_open(fn):
    """Decorator: the DBManager must still own an open connection."""
    @wraps(fn)
    def wrapper(self, *a, **kw):
        if getattr(self, "_driver", None) is None:
            raise DBError("connection is closed")
        return fn(self, *a, **kw)
    return wrapper
