# =============================================================================
# File:        dbtoolkit/db/identifiers.py
# Purpose:     Safe SQL identifiers (table and column names only, never values)
# =============================================================================
from __future__ import annotations

import re
from typing import Any

from dbtoolkit.db.query import InvalidIdentifier

_SAFE_IDENT = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def is_valid_identifier(name: Any) -> bool:
    return isinstance(name, str) and _SAFE_IDENT.fullmatch(name) is not None


def assert_identifier(name: Any) -> str:
    if not is_valid_identifier(name):
        raise InvalidIdentifier(name)
    return name


def quote_identifier(name: Any, quote_char: str = '"') -> str:
    return f"{quote_char}{assert_identifier(name)}{quote_char}"
