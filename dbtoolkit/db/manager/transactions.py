# =============================================================================
# File:        dbtoolkit/db/manager/transactions.py
# Purpose:     Transactions: context manager + unit-of-work runner
# =============================================================================
from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, TypeVar

from dbtoolkit.db.query import TransactionFailure
from dbtoolkit.managers.error_manager import ErrorManager

from .helpers import _log, _requires_open

T = TypeVar("T")


class DBTransactionsMixin:
    @contextmanager
    @_requires_open
    def transaction(self):
        """
        BEGIN on enter, COMMIT on normal exit, ROLLBACK on any exception.
        Only one transaction per connection; nesting raises TransactionFailure.
        """
        driver = self._driver
        if driver.in_transaction():
            raise TransactionFailure("A transaction is already open on this connection.", stage="begin")
        try:
            driver.begin()
        except driver.error_types as e:
            failure = TransactionFailure(f"Could not begin transaction: {e}", "begin", e)
            ErrorManager.create(failure)
            raise failure from e

        try:
            yield self
        except BaseException:
            self._rollback_if_open(driver)
            raise

        try:
            driver.commit()
        except driver.error_types as e:
            failure = TransactionFailure(f"Commit failed: {e}", "commit", e)
            ErrorManager.create(failure)
            self._rollback_if_open(driver)
            raise failure from e

    def run_in_transaction(self, work: Callable[..., T]) -> T:
        """Run work(db) in one transaction and return its result."""
        with self.transaction():
            return work(self)

    @staticmethod
    def _rollback_if_open(driver) -> None:
        # the connection may already have rolled back on its own
        if not driver.in_transaction():
            return
        try:
            driver.rollback()
            _log("warning", "transaction rolled back")
        except driver.error_types as e:
            # the failure that caused the rollback keeps priority
            ErrorManager.create(TransactionFailure(f"Rollback failed: {e}", "rollback", e))
