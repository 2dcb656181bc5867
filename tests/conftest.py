import os
import sys
from pathlib import Path
import pytest

# Make the project importable when tests run from any working dir
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dbtoolkit.db.manager.db_manager import DBManager
from dbtoolkit.managers.error_manager import ErrorManager
from dbtoolkit.managers.log_manager import LogManager


@pytest.fixture(scope="session", autouse=True)
def isolated_log_file(tmp_path_factory):
    """Send log lines to a temp file instead of data/logs/db.log."""
    log_path = tmp_path_factory.mktemp("logs") / "db_test.log"
    previous = os.environ.get("LOG_FILE_PATH")
    os.environ["LOG_FILE_PATH"] = str(log_path)
    yield log_path
    if previous is None:
        os.environ.pop("LOG_FILE_PATH", None)
    else:
        os.environ["LOG_FILE_PATH"] = previous


@pytest.fixture(autouse=True)
def clean_managers():
    LogManager.initialize()
    ErrorManager.initialize(dev_mode=False)
    ErrorManager.delete()
    yield
    ErrorManager.delete()


@pytest.fixture
def db():
    """In-memory SQLite DBManager with an empty users table."""
    manager = DBManager({"driver": "sqlite", "path": ":memory:"})
    manager.execute(
        "CREATE TABLE users ("
        " id INTEGER PRIMARY KEY AUTOINCREMENT,"
        " name TEXT NOT NULL,"
        " status TEXT,"
        " age INTEGER)"
    )
    yield manager
    manager.shutdown()


@pytest.fixture
def make_users():
    """Helper: insert n users named user01..userNN, every third one inactive."""
    def _maker(api, n: int):
        ids = []
        for i in range(1, n + 1):
            status = "inactive" if i % 3 == 0 else "active"
            ids.append(api.insert("users", {"name": f"user{i:02d}", "status": status, "age": 20 + i}))
        return ids
    return _maker
