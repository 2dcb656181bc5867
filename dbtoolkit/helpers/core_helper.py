# ========================================================================
# File:       dbtoolkit/helpers/core_helper.py
# Purpose:    Safe calls and small shared helpers
# ========================================================================

from __future__ import annotations
from typing import Any, Callable, Dict, Mapping

_SECRET_KEYS = ("password", "pass", "passwd")


def safe_call(func: Callable, *args, **kwargs):
    """Call the function and let exceptions reach the caller."""
    return func(*args, **kwargs)


def mask_secrets(params: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy of a config dict with credentials replaced, safe for logs."""
    masked = dict(params or {})
    for key in _SECRET_KEYS:
        if masked.get(key):
            masked[key] = "***"
    dsn = masked.get("dsn")
    if isinstance(dsn, str) and "@" in dsn and "://" in dsn:
        scheme, rest = dsn.split("://", 1)
        creds, host = rest.rsplit("@", 1)
        if ":" in creds:
            creds = creds.split(":", 1)[0] + ":***"
        masked["dsn"] = f"{scheme}://{creds}@{host}"
    return masked
