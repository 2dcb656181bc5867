# =============================================================================
# File:        dbtoolkit/db/base_driver.py
# Purpose:     Common interface for all DB drivers (SQLite, MySQL...)
#              + placeholder scanning shared by the executor and the drivers
# =============================================================================
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from dbtoolkit.db.identifiers import quote_identifier
from dbtoolkit.db.query import ExecutionResult, Row

BoundParams = Union[Dict[str, Any], List[Any]]

# Quoted literals and comments are copied as they are; only bare
# :name / ? / % outside of them are placeholders. Backslash escapes
# inside literals exist in MySQL only; SQLite treats '\' as a plain char.
_TOKEN_TEMPLATE = r"""
    (?P<skip>
        '(?:{single})*'
      | "(?:{double})*"
      | `[^`]*`
      | --[^\n]*
      | /\*.*?\*/
    )
    | (?P<cast>::)
    | :(?P<named>[A-Za-z_][A-Za-z0-9_]*)
    | (?P<qmark>\?)
    | (?P<percent>%)
"""

_SQL_TOKEN = re.compile(
    _TOKEN_TEMPLATE.format(single=r"[^']|''", double=r'[^"]|""'),
    re.VERBOSE | re.DOTALL,
)
_SQL_TOKEN_BACKSLASH = re.compile(
    _TOKEN_TEMPLATE.format(single=r"[^'\\]|\\.|''", double=r'[^"\\]|\\.|""'),
    re.VERBOSE | re.DOTALL,
)


def _token_pattern(backslash_escapes: bool) -> re.Pattern:
    return _SQL_TOKEN_BACKSLASH if backslash_escapes else _SQL_TOKEN


def scan_placeholders(sql: str, backslash_escapes: bool = False) -> Tuple[List[str], int]:
    """Return (named placeholder names in order, number of ? placeholders)."""
    named: List[str] = []
    qmarks = 0
    for m in _token_pattern(backslash_escapes).finditer(sql):
        if m.group("named"):
            named.append(m.group("named"))
        elif m.group("qmark"):
            qmarks += 1
    return named, qmarks


def translate_placeholders(
    sql: str,
    named_fmt: str,
    qmark_fmt: str,
    escape_percent: bool = False,
    backslash_escapes: bool = False,
) -> str:
    """
    Rewrite :name and ? into the driver paramstyle.
    named_fmt gets the name through str.format (e.g. "%({})s").
    """
    def _sub(m: re.Match) -> str:
        if m.group("skip") is not None:
            text = m.group("skip")
            return text.replace("%", "%%") if escape_percent else text
        if m.group("cast"):
            return "::"
        if m.group("named"):
            return named_fmt.format(m.group("named"))
        if m.group("qmark"):
            return qmark_fmt
        return "%%" if escape_percent else "%"

    return _token_pattern(backslash_escapes).sub(_sub, sql)


def normalize_identity(value: Any) -> Optional[int]:
    """Generated identity as a non-negative int, None when not representable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


class BaseDBDriver(ABC):
    """All drivers expose the same capability contract over a DB-API connection."""

    name: str = "generic"
    quote_char: str = '"'
    error_types: Tuple[type, ...] = ()
    # raised by DB-API modules while adapting a value (e.g. int out of range)
    bind_error_types: Tuple[type, ...] = (OverflowError, TypeError, ValueError)
    # MySQL reads a backslash in a string literal as an escape, SQLite does not
    backslash_escapes: bool = False

    conn: Any = None

    # --- Identifiers ---
    def quote_ident(self, ident: str) -> str:
        return quote_identifier(ident, self.quote_char)

    # --- Statements ---
    def prepare(self, sql: str, params: BoundParams) -> Tuple[str, BoundParams]:
        """Translate :name / ? placeholders when the driver needs another style."""
        return sql, params

    def run(self, sql: str, params: BoundParams) -> ExecutionResult:
        """Execute one statement and fetch everything; the cursor never escapes."""
        sql, params = self.prepare(sql, params)
        cur = self.conn.cursor()
        try:
            cur.execute(sql, params)
            columns = [d[0] for d in cur.description] if cur.description else []
            rows = self.fetch_rows(cur, columns) if cur.description else None
            if rows is not None:
                row_count = len(rows)
            else:
                row_count = max(cur.rowcount or 0, 0)
            return ExecutionResult(
                rows=rows,
                columns=columns,
                row_count=row_count,
                last_insert_id=self.last_insert_id(cur),
            )
        finally:
            cur.close()

    def fetch_rows(self, cursor: Any, columns: List[str]) -> List[Row]:
        return [self._row_to_dict(row, columns) for row in cursor.fetchall()]

    @staticmethod
    def _row_to_dict(row: Any, columns: List[str]) -> Row:
        if isinstance(row, Mapping):
            return dict(row)
        if hasattr(row, "keys"):
            return {k: row[k] for k in row.keys()}
        return dict(zip(columns, row))

    def last_insert_id(self, cursor: Any) -> Optional[int]:
        return normalize_identity(getattr(cursor, "lastrowid", None))

    # --- Transactions ---
    @abstractmethod
    def begin(self) -> None:
        """Open a transaction on the connection."""

    @abstractmethod
    def commit(self) -> None:
        """Commit the open transaction."""

    @abstractmethod
    def rollback(self) -> None:
        """Roll back the open transaction."""

    @abstractmethod
    def in_transaction(self) -> bool:
        """True while the connection is inside a transaction."""

    # --- Lifecycle ---
    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()
            self.conn = None
