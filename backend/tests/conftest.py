import os
import sys

# Add the parent directory (backend) to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from contextlib import contextmanager

import pytest
from fastapi.testclient import TestClient

from config import settings
from main import app


class FakeResult:
    def __init__(self, rows):
        self._rows = rows

    def mappings(self):
        return self

    def all(self):
        return list(self._rows)


class FakeConnection:
    """
    Stands in for a SQLAlchemy Connection: answers information-schema queries
    from canned rows and records every statement it was asked to run.
    """

    def __init__(self, columns=None, checks=None, tables=None, error=None):
        self.columns = columns or []
        self.checks = checks or []
        self.tables = tables or []
        self.error = error
        self.executed: list[tuple[str, dict]] = []
        self.closed = False

    def execute(self, statement, params=None):
        sql = str(statement)
        self.executed.append((sql, params or {}))
        if self.error is not None:
            raise self.error
        if "CHECK_CONSTRAINTS" in sql:
            return FakeResult(self.checks)
        if "INFORMATION_SCHEMA.TABLES" in sql:
            return FakeResult([{"name": t} for t in self.tables])
        return FakeResult(self.columns)

    def close(self):
        self.closed = True


class FakeEngine:
    def __init__(self, connection: FakeConnection):
        self.connection = connection
        self.disposed = False

    @contextmanager
    def connect(self):
        yield self.connection

    def dispose(self):
        self.disposed = True


def mysql_column(name, data_type, full_type=None, nullable="YES", default=None, key="", extra="",
                 max_length=None, precision=None, scale=None):
    return {
        "name": name,
        "data_type": data_type,
        "is_nullable": nullable,
        "default_value": default,
        "column_key": key,
        "full_type": full_type or data_type,
        "extra": extra,
        "max_length": max_length,
        "numeric_precision": precision,
        "numeric_scale": scale,
    }


def mssql_column(name, data_type, nullable="YES", default=None, key_type="", extra="",
                 unique_constrained=0, max_length=None, precision=None, scale=None):
    return {
        "name": name,
        "data_type": data_type,
        "is_nullable": nullable,
        "default_value": default,
        "key_type": key_type,
        "unique_constrained": unique_constrained,
        "extra": extra,
        "max_length": max_length,
        "numeric_precision": precision,
        "numeric_scale": scale,
    }


@pytest.fixture
def make_connection():
    return FakeConnection


@pytest.fixture
def make_engine():
    return FakeEngine


@pytest.fixture
def mysql_users_conn():
    return FakeConnection(
        columns=[
            mysql_column("id", "int", "int(11)", nullable="NO", key="PRI", extra="auto_increment", precision=10, scale=0),
            mysql_column("email", "varchar", "varchar(255)", nullable="NO", key="UNI", max_length=255),
            mysql_column("status", "enum", "enum('active','inactive','pending')", default="active"),
            mysql_column("created_at", "timestamp", nullable="NO", default="CURRENT_TIMESTAMP",
                         extra="DEFAULT_GENERATED"),
        ],
        tables=["orders", "users"],
    )


@pytest.fixture
def mssql_orders_conn():
    return FakeConnection(
        columns=[
            mssql_column("order_id", "int", nullable="NO", key_type="PRI", extra="auto_increment",
                         precision=10, scale=0),
            mssql_column("reference", "nvarchar", nullable="NO", key_type="UNI", unique_constrained=1,
                         max_length=50),
            mssql_column("status", "varchar", default="('pending')", max_length=20),
            mssql_column("total", "decimal", precision=10, scale=2),
        ],
        checks=[
            {"column_name": "status", "check_clause": "([status]='active' OR [status]='pending')"},
            {"column_name": "total", "check_clause": "([total]>=(0))"},
        ],
        tables=["orders"],
    )


@pytest.fixture
def storage_dirs(tmp_path, monkeypatch):
    config_dir = tmp_path / "configs"
    generated_dir = tmp_path / "generated"
    monkeypatch.setattr(settings, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(settings, "GENERATED_DIR", generated_dir)
    return config_dir, generated_dir


@pytest.fixture
def users_config_payload():
    return {
        "table": "users",
        "auth": {"type": "apikey", "apiKey": "XYZ-SECURE-KEY"},
        "fields": {
            "id": {"type": "int", "primary": True, "autoIncrement": True, "nullable": False,
                   "filterable": False, "editable": False, "creatable": False},
            "email": {"type": "varchar", "nullable": False},
            "status": {"type": "enum", "enumValues": ["active", "inactive"], "default": "active"},
            "created_at": {"type": "timestamp", "showInTable": False, "editable": False, "creatable": False},
        },
        "dbConfig": {"type": "mysql", "host": "localhost", "user": "root", "password": "secret",
                     "database": "shop"},
    }


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as test_client:
        yield test_client
