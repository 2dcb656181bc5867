# =============================================================================
# File:        dbtoolkit/db/paginator.py
# Purpose:     Offset pagination over any SELECT (COUNT wrapper + LIMIT/OFFSET)
# =============================================================================
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Tuple, Union

from dbtoolkit.db.query import PageMeta, PaginatedResult, Params

if TYPE_CHECKING:
    from dbtoolkit.db.manager.db_manager import DBManager

DEFAULT_PER_PAGE = 20
MAX_PER_PAGE = 200


def _is_positional(params: Params) -> bool:
    if isinstance(params, (list, tuple)):
        return True
    if isinstance(params, Mapping) and params:
        return all(isinstance(k, int) and not isinstance(k, bool) for k in params)
    return False


class Paginator:
    """
    Wraps the base query twice: once as a COUNT(*) subquery, once with
    LIMIT/OFFSET appended. The base query must not carry its own LIMIT.
    Both queries run through the DBManager, so last_query() afterwards
    describes the data query.
    """

    def __init__(self, db: "DBManager", max_per_page: int = MAX_PER_PAGE):
        self.db = db
        self.max_per_page = max_per_page

    def paginate(self, base_sql: str, params: Params = None, page: int = 1,
                 per_page: int = DEFAULT_PER_PAGE) -> PaginatedResult:
        page = max(1, int(page))
        per_page = max(1, min(self.max_per_page, int(per_page)))
        offset = (page - 1) * per_page

        # appended clauses start on a new line so a trailing -- comment cannot swallow them
        base = base_sql.strip().rstrip(";").rstrip()

        total = int(self.db.scalar_value(f"SELECT COUNT(*) AS cnt FROM ({base}\n) AS _t", params) or 0)
        total_pages = max(1, -(-total // per_page))

        data_sql, data_params = self._bounded(base, params, per_page, offset)
        rows = self.db.select_all(data_sql, data_params)

        meta = PageMeta(page=page, per_page=per_page, total=total, total_pages=total_pages, offset=offset)
        return PaginatedResult(rows=rows, meta=meta)

    @staticmethod
    def _bounded(base: str, params: Params, limit: int, offset: int) -> Tuple[str, Union[Dict[str, Any], List[Any]]]:
        # LIMIT/OFFSET always travel as ints; some drivers reject string-typed values there
        if _is_positional(params):
            if isinstance(params, Mapping):
                values = [params[k] for k in sorted(params)]
            else:
                values = list(params)
            return f"{base}\nLIMIT ? OFFSET ?", values + [int(limit), int(offset)]

        named = dict(params or {})
        named["__limit"] = int(limit)
        named["__offset"] = int(offset)
        return f"{base}\nLIMIT :__limit OFFSET :__offset", named
