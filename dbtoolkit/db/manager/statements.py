# =============================================================================
# File:        dbtoolkit/db/manager/statements.py
# Purpose:     Statement executor: binding checks, timing, last-query record
# =============================================================================
from __future__ import annotations

import time
from typing import Any, Dict, List, Mapping, Optional

from dbtoolkit.db.base_driver import BoundParams, scan_placeholders
from dbtoolkit.db.query import (
    SCALAR_TYPES,
    ExecutionFailure,
    ExecutionResult,
    LastQuery,
    Params,
    Row,
)
from dbtoolkit.managers.error_manager import ErrorManager

from .helpers import _log, _requires_open


class DBStatementMixin:
    _last: LastQuery
    _debug: bool

    # ---------- Debug / bookkeeping ----------
    def set_debug(self, debug: bool) -> None:
        self._debug = bool(debug)

    def is_debug(self) -> bool:
        return self._debug

    def last_query(self) -> Dict[str, Any]:
        return self._last.as_dict()

    # ---------- Binding ----------
    @staticmethod
    def _bind(sql: str, params: Params, backslash_escapes: bool = False) -> BoundParams:
        """
        Normalize params to a dict (named) or a list (positional) and check
        them against the placeholders in the SQL text.
        backslash_escapes follows the driver dialect when scanning literals.
        """
        if params is None:
            bound: BoundParams = {}
        elif isinstance(params, Mapping):
            keys = list(params.keys())
            if all(isinstance(k, str) for k in keys):
                bound = {k.lstrip(":"): params[k] for k in keys}
            elif all(isinstance(k, int) and not isinstance(k, bool) for k in keys):
                bound = [params[k] for k in sorted(keys)]
            else:
                raise ExecutionFailure("Mixed named and positional parameter keys.", sql, params)
        elif isinstance(params, (list, tuple)):
            bound = list(params)
        else:
            raise ExecutionFailure(f"Unsupported parameter container: {type(params).__name__}", sql, params)

        values = bound.values() if isinstance(bound, dict) else bound
        for v in values:
            if not isinstance(v, SCALAR_TYPES):
                raise ExecutionFailure(f"Unsupported parameter type: {type(v).__name__}", sql, params)

        named, qmarks = scan_placeholders(sql, backslash_escapes)
        if named and qmarks:
            raise ExecutionFailure("SQL mixes named and positional placeholders.", sql, params)

        if isinstance(bound, dict):
            if qmarks:
                raise ExecutionFailure(
                    f"SQL expects {qmarks} positional parameter(s), got named parameters.", sql, params
                )
            missing = set(named) - set(bound)
            extra = set(bound) - set(named)
            if missing or extra:
                raise ExecutionFailure(
                    f"Parameter mismatch: missing={sorted(missing)} extra={sorted(extra)}", sql, params
                )
        else:
            if named:
                raise ExecutionFailure("SQL uses named placeholders, got positional parameters.", sql, params)
            if len(bound) != qmarks:
                raise ExecutionFailure(
                    f"SQL expects {qmarks} positional parameter(s), got {len(bound)}.", sql, params
                )
        return bound

    # ---------- Execution ----------
    @_requires_open
    def execute(self, sql: str, params: Params = None) -> ExecutionResult:
        try:
            driver = self._driver
            bound = self._bind(sql, params, driver.backslash_escapes)
            t0 = time.perf_counter()
            try:
                result = driver.run(sql, bound)
            except driver.error_types + driver.bind_error_types as e:
                raise ExecutionFailure(f"Statement failed: {e}", sql, bound, e) from e
            ms = (time.perf_counter() - t0) * 1000.0
        except ExecutionFailure as failure:
            ErrorManager.create(failure)
            raise

        self._last = LastQuery(sql=sql, params=bound, ms=ms, row_count=result.row_count)
        if self._debug:
            _log("debug", f"{ms:.3f} ms | rows={result.row_count} | {sql} | params={bound!r}")
        return result

    def statement_ok(self, sql: str, params: Params = None) -> bool:
        return self.execute(sql, params).row_count >= 0

    def select_all(self, sql: str, params: Params = None) -> List[Row]:
        return self.execute(sql, params).all()

    def select_one(self, sql: str, params: Params = None) -> Optional[Row]:
        return self.execute(sql, params).one()

    def scalar_value(self, sql: str, params: Params = None) -> Any:
        return self.execute(sql, params).scalar()
