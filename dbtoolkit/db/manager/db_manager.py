# =============================================================================
# File:        dbtoolkit/db/manager/db_manager.py
# Purpose:     Thin facade class that joins all mixins into DBManager
# =============================================================================
from __future__ import annotations

from typing import Optional

from dbtoolkit.db.paginator import DEFAULT_PER_PAGE, Paginator
from dbtoolkit.db.query import PaginatedResult, Params

from .config import DBConfigMixin
from .crud import DBCrudMixin
from .statements import DBStatementMixin
from .transactions import DBTransactionsMixin


class DBManager(DBConfigMixin, DBStatementMixin, DBCrudMixin, DBTransactionsMixin):
    """
    One DBManager owns one connection (one logical session, no locking).
    - DBManager(config) / DBManager.from_env(), shutdown(), active_config()
    - execute(), select_all(), select_one(), scalar_value(), last_query()
    - insert(), update(), delete()
    - transaction(), run_in_transaction()
    - paginate()
    """

    def paginate(self, base_sql: str, params: Params = None, page: int = 1,
                 per_page: int = DEFAULT_PER_PAGE, paginator: Optional[Paginator] = None) -> PaginatedResult:
        return (paginator or Paginator(self)).paginate(base_sql, params, page, per_page)
