# =============================================================================
# File:        dbtoolkit/db/manager/config.py
# Purpose:     Construction from a config dict or .env, activation, shutdown
# =============================================================================
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from dbtoolkit.config.env import EnvLoader
from dbtoolkit.db.base_driver import BaseDBDriver
from dbtoolkit.db.mysql_driver import MySQLDriver
from dbtoolkit.db.query import LastQuery
from dbtoolkit.db.sqlite_driver import DEFAULT_PATH, SQLiteDriver
from dbtoolkit.helpers.core_helper import mask_secrets

from .helpers import _log, _requires_open

DRIVERS = {
    "sqlite": SQLiteDriver,
    "mysql": MySQLDriver,
}


class DBConfigMixin:
    _driver: Optional[BaseDBDriver] = None

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self._driver = None
        self._config: Dict[str, Any] = {"driver": None, "params": {}, "source": None}
        self._last = LastQuery()

        if config is None:
            driver_key, params = self._config_from_env()
            source = "env"
        else:
            params = dict(config)
            driver_key = params.pop("driver", None) or "sqlite"
            source = "config"

        self._debug = bool(params.pop("debug", False))
        self._activate(driver_key, params, source=source)

    @classmethod
    def from_env(cls, reload_env: bool = False):
        if reload_env:
            EnvLoader.load(force=True)
        return cls()

    @staticmethod
    def _config_from_env() -> Tuple[str, Dict[str, Any]]:
        EnvLoader.load()
        driver_key = (EnvLoader.get("DB_DRIVER", "sqlite") or "sqlite").strip().lower()
        params: Dict[str, Any] = {"debug": EnvLoader.get_bool("DB_DEBUG", False)}

        if driver_key == "sqlite":
            params["path"] = EnvLoader.get("SQLITE_PATH", DEFAULT_PATH) or DEFAULT_PATH
        elif driver_key == "mysql":
            dsn = EnvLoader.get("DB_DSN", None)
            if dsn:
                params["dsn"] = dsn
            else:
                params["host"] = EnvLoader.get("DB_HOST", "127.0.0.1")
                params["port"] = EnvLoader.get_int("DB_PORT", 3306)
                params["dbname"] = EnvLoader.get("DB_NAME", "")
                params["charset"] = EnvLoader.get("DB_CHARSET", "utf8mb4")
            params["user"] = EnvLoader.get("DB_USER", "")
            params["password"] = EnvLoader.get("DB_PASS", "")
        else:
            raise ValueError(f"Unknown DB_DRIVER in .env: {driver_key}")
        return driver_key, params

    def _activate(self, driver_key: str, params: Dict[str, Any], *, source: str) -> None:
        driver_key = (driver_key or "sqlite").strip().lower()
        driver_cls = DRIVERS.get(driver_key)
        if driver_cls is None:
            raise ValueError(f"Unknown driver: {driver_key}")

        self._driver = driver_cls(**params)
        self._config = {"driver": driver_key, "params": dict(params), "source": source}
        _log("info", f"activate -> driver={driver_key} source={source} params={mask_secrets(params)}")

    def shutdown(self) -> None:
        driver = self._driver
        self._driver = None
        if driver is None:
            return
        try:
            driver.close()
        finally:
            _log("info", f"shutdown -> driver={self._config.get('driver')}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    # ---------- State ----------
    @property
    def is_open(self) -> bool:
        return self._driver is not None

    @property
    @_requires_open
    def connection(self) -> Any:
        """Raw DB-API connection of the active driver."""
        return self._driver.conn

    @property
    @_requires_open
    def driver(self) -> BaseDBDriver:
        return self._driver

    def active_config(self) -> Dict[str, Any]:
        return {
            "driver": self._config.get("driver"),
            "params": mask_secrets(self._config.get("params") or {}),
            "source": self._config.get("source"),
        }

    def get_driver_key(self) -> Optional[str]:
        return self._config.get("driver")

    def get_driver_name(self) -> Optional[str]:
        return self._driver.__class__.__name__ if self._driver else None
