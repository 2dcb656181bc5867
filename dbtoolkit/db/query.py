# =============================================================================
# File:        dbtoolkit/db/query.py
# Purpose:     Exceptions of the DB layer + result and record dataclasses
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

Scalar = Union[str, int, float, bool, None]
SCALAR_TYPES = (str, int, float, bool, type(None))

Row = Dict[str, Any]
Params = Union[None, Dict[Union[str, int], Scalar], Sequence[Scalar]]


# ---------- Exceptions ----------
class DBError(Exception):
    """Base error of the DB layer."""
    pass


class InvalidIdentifier(DBError, ValueError):
    """A table or column name is not a safe SQL identifier."""

    def __init__(self, identifier: Any):
        self.identifier = identifier
        super().__init__(f"Invalid identifier: {identifier!r}")


class EmptyInput(DBError, ValueError):
    """Required data or where mapping is empty."""
    pass


class ExecutionFailure(DBError):
    """Prepare, bind, execute or fetch failed at the driver boundary."""

    def __init__(self, message: str, sql: Optional[str] = None, params: Any = None,
                 original: Optional[BaseException] = None):
        super().__init__(message)
        self.sql = sql
        self.params = params
        self.original = original


class TransactionFailure(DBError):
    """Begin, commit or rollback itself failed."""

    def __init__(self, message: str, stage: str, original: Optional[BaseException] = None):
        super().__init__(message)
        self.stage = stage
        self.original = original


# ---------- Records ----------
@dataclass
class LastQuery:
    sql: Optional[str] = None
    params: Any = field(default_factory=dict)
    ms: float = 0.0
    row_count: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return {"sql": self.sql, "params": self.params, "ms": self.ms, "rowCount": self.row_count}


@dataclass
class ExecutionResult:
    """Fully fetched outcome of one statement; the cursor is already closed."""
    rows: Optional[List[Row]] = None
    columns: List[str] = field(default_factory=list)
    row_count: int = 0
    last_insert_id: Optional[int] = None

    @property
    def returns_rows(self) -> bool:
        return self.rows is not None

    def all(self) -> List[Row]:
        return list(self.rows or [])

    def one(self) -> Optional[Row]:
        if not self.rows:
            return None
        return self.rows[0]

    def scalar(self) -> Any:
        """First column of the first row, None when there is no row."""
        row = self.one()
        if row is None:
            return None
        if self.columns and self.columns[0] in row:
            return row[self.columns[0]]
        return next(iter(row.values()), None)


# ---------- Pagination ----------
@dataclass(frozen=True)
class PageMeta:
    page: int
    per_page: int
    total: int
    total_pages: int
    offset: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    def as_dict(self) -> Dict[str, int]:
        return {
            "page": self.page,
            "perPage": self.per_page,
            "total": self.total,
            "totalPages": self.total_pages,
            "offset": self.offset,
        }


@dataclass
class PaginatedResult:
    rows: List[Row]
    meta: PageMeta

    def as_dict(self) -> Dict[str, Any]:
        return {"data": self.rows, "meta": self.meta.as_dict()}
