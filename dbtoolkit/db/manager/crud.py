# =============================================================================
# File:        dbtoolkit/db/manager/crud.py
# Purpose:     INSERT / UPDATE / DELETE builders over the statement executor
# =============================================================================
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

from dbtoolkit.db.query import EmptyInput

from .helpers import _requires_open


class DBCrudMixin:
    def _where_clause(self, where: Mapping[str, Any]) -> Tuple[str, Dict[str, Any]]:
        parts = []
        params: Dict[str, Any] = {}
        for col, val in where.items():
            parts.append(f"{self._driver.quote_ident(col)} = :w_{col}")
            params[f"w_{col}"] = val
        return " AND ".join(parts), params

    @_requires_open
    def insert(self, table: str, data: Mapping[str, Any]) -> Optional[int]:
        """
        INSERT one row. Returns the generated identity, or None when the
        driver does not expose one for this table.
        """
        q_table = self._driver.quote_ident(table)
        if not data:
            raise EmptyInput("Insert data cannot be empty.")

        cols = list(data.keys())
        col_sql = ", ".join(self._driver.quote_ident(c) for c in cols)
        ph_sql = ", ".join(f":{c}" for c in cols)

        sql = f"INSERT INTO {q_table} ({col_sql}) VALUES ({ph_sql})"
        result = self.execute(sql, {c: data[c] for c in cols})
        return result.last_insert_id

    @_requires_open
    def update(self, table: str, data: Mapping[str, Any], where: Mapping[str, Any]) -> int:
        """UPDATE rows matching every where pair. An empty where is refused."""
        q_table = self._driver.quote_ident(table)
        if not data:
            raise EmptyInput("Update data cannot be empty.")
        if not where:
            raise EmptyInput("Update where cannot be empty (safety).")

        set_parts = []
        params: Dict[str, Any] = {}
        for col, val in data.items():
            set_parts.append(f"{self._driver.quote_ident(col)} = :set_{col}")
            params[f"set_{col}"] = val

        where_sql, where_params = self._where_clause(where)
        params.update(where_params)

        sql = f"UPDATE {q_table} SET {', '.join(set_parts)} WHERE {where_sql}"
        return self.execute(sql, params).row_count

    @_requires_open
    def delete(self, table: str, where: Mapping[str, Any]) -> int:
        """DELETE rows matching every where pair. An empty where is refused."""
        q_table = self._driver.quote_ident(table)
        if not where:
            raise EmptyInput("Delete where cannot be empty (safety).")

        where_sql, params = self._where_clause(where)
        sql = f"DELETE FROM {q_table} WHERE {where_sql}"
        return self.execute(sql, params).row_count
