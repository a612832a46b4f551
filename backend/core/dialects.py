"""
Dialect column readers — information-schema queries for MySQL and MSSQL.

Each reader borrows a live SQLAlchemy connection from the caller, issues
read-only metadata queries and returns raw ColumnMetadata rows in ordinal
order. Readers never open, commit or close connections.
"""
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

from sqlalchemy import text

from core.errors import ConnectionUnavailable, UnsupportedDialect
from models.table import ColumnMetadata

logger = logging.getLogger(__name__)


class Dialect(str, Enum):
    MYSQL = "mysql"
    MSSQL = "mssql"

    @classmethod
    def parse(cls, value: Any) -> "Dialect":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise UnsupportedDialect(value) from None


def ensure_connection(conn) -> None:
    if conn is None or getattr(conn, "closed", False):
        raise ConnectionUnavailable()


def _int_or_none(value) -> Optional[int]:
    return int(value) if value is not None else None


def _str_or_none(value) -> Optional[str]:
    return str(value) if value is not None else None


class ColumnReader(ABC):
    """Reads raw column rows for one dialect."""

    dialect: Dialect

    @abstractmethod
    def read_columns(self, conn, database: Optional[str], table_name: str,
                     schema: Optional[str] = None) -> list[ColumnMetadata]:
        """
        Columns of one table ordered by ordinal position.

        ``schema`` selects between same-named tables in different schemas;
        None means the connection's default schema.
        """

    @abstractmethod
    def list_tables(self, conn, database: Optional[str]) -> list[str]:
        """Base tables of the database, sorted by name."""


# ── MySQL ─────────────────────────────────────────────────────────────────────

MYSQL_COLUMNS_SQL = """
SELECT
    COLUMN_NAME              AS name,
    DATA_TYPE                AS data_type,
    IS_NULLABLE              AS is_nullable,
    COLUMN_DEFAULT           AS default_value,
    COLUMN_KEY               AS column_key,
    COLUMN_TYPE              AS full_type,
    EXTRA                    AS extra,
    CHARACTER_MAXIMUM_LENGTH AS max_length,
    NUMERIC_PRECISION        AS numeric_precision,
    NUMERIC_SCALE            AS numeric_scale
FROM INFORMATION_SCHEMA.COLUMNS
WHERE TABLE_SCHEMA = COALESCE(:database, DATABASE()) AND TABLE_NAME = :table
ORDER BY ORDINAL_POSITION
"""

MYSQL_TABLES_SQL = """
SELECT TABLE_NAME AS name
FROM INFORMATION_SCHEMA.TABLES
WHERE TABLE_SCHEMA = COALESCE(:database, DATABASE()) AND TABLE_TYPE = 'BASE TABLE'
ORDER BY TABLE_NAME
"""


class MysqlColumnReader(ColumnReader):
    """Key, extra and enum metadata all live in INFORMATION_SCHEMA.COLUMNS."""

    dialect = Dialect.MYSQL

    def read_columns(self, conn, database: Optional[str], table_name: str,
                     schema: Optional[str] = None) -> list[ColumnMetadata]:
        # a MySQL schema is the database itself
        ensure_connection(conn)
        rows = conn.execute(
            text(MYSQL_COLUMNS_SQL), {"database": database, "table": table_name}
        ).mappings().all()
        return [
            ColumnMetadata(
                name=row["name"],
                data_type=row["data_type"],
                is_nullable=row["is_nullable"],
                default=_str_or_none(row["default_value"]),
                key_type=row["column_key"] or "",
                extra=row["extra"] or "",
                full_type=row["full_type"],
                max_length=_int_or_none(row["max_length"]),
                precision=_int_or_none(row["numeric_precision"]),
                scale=_int_or_none(row["numeric_scale"]),
            )
            for row in rows
        ]

    def list_tables(self, conn, database: Optional[str]) -> list[str]:
        ensure_connection(conn)
        rows = conn.execute(text(MYSQL_TABLES_SQL), {"database": database}).mappings().all()
        return [row["name"] for row in rows]


# ── MSSQL ─────────────────────────────────────────────────────────────────────

MSSQL_COLUMNS_SQL = """
SELECT
    c.COLUMN_NAME              AS name,
    c.DATA_TYPE                AS data_type,
    c.IS_NULLABLE              AS is_nullable,
    c.COLUMN_DEFAULT           AS default_value,
    c.CHARACTER_MAXIMUM_LENGTH AS max_length,
    c.NUMERIC_PRECISION        AS numeric_precision,
    c.NUMERIC_SCALE            AS numeric_scale,
    CASE
        WHEN pk.COLUMN_NAME IS NOT NULL THEN 'PRI'
        WHEN uq.COLUMN_NAME IS NOT NULL THEN 'UNI'
        ELSE ''
    END AS key_type,
    CASE WHEN uq.COLUMN_NAME IS NOT NULL THEN 1 ELSE 0 END AS unique_constrained,
    CASE WHEN ic.is_identity = 1 THEN 'auto_increment' ELSE '' END AS extra
FROM INFORMATION_SCHEMA.COLUMNS c
LEFT JOIN (
    SELECT ku.TABLE_CATALOG, ku.TABLE_SCHEMA, ku.TABLE_NAME, ku.COLUMN_NAME
    FROM INFORMATION_SCHEMA.TABLE_CONSTRAINTS AS tc
    INNER JOIN INFORMATION_SCHEMA.KEY_COLUMN_USAGE AS ku
        ON tc.CONSTRAINT_TYPE = 'PRIMARY KEY'
        AND tc.CONSTRAINT_NAME = ku.CONSTRAINT_NAME
        AND tc.TABLE_SCHEMA = ku.TABLE_SCHEMA
) pk
    ON c.TABLE_CATALOG = pk.TABLE_CATALOG
    AND c.TABLE_SCHEMA = pk.TABLE_SCHEMA
    AND c.TABLE_NAME = pk.TABLE_NAME
    AND c.COLUMN_NAME = pk.COLUMN_NAME
LEFT JOIN (
    SELECT DISTINCT ku.TABLE_CATALOG, ku.TABLE_SCHEMA, ku.TABLE_NAME, ku.COLUMN_NAME
    FROM INFORMATION_SCHEMA.TABLE_CONSTRAINTS AS tc
    INNER JOIN INFORMATION_SCHEMA.KEY_COLUMN_USAGE AS ku
        ON tc.CONSTRAINT_TYPE = 'UNIQUE'
        AND tc.CONSTRAINT_NAME = ku.CONSTRAINT_NAME
        AND tc.TABLE_SCHEMA = ku.TABLE_SCHEMA
) uq
    ON c.TABLE_CATALOG = uq.TABLE_CATALOG
    AND c.TABLE_SCHEMA = uq.TABLE_SCHEMA
    AND c.TABLE_NAME = uq.TABLE_NAME
    AND c.COLUMN_NAME = uq.COLUMN_NAME
LEFT JOIN sys.columns ic
    ON ic.object_id = OBJECT_ID(QUOTENAME(c.TABLE_SCHEMA) + '.' + QUOTENAME(c.TABLE_NAME))
    AND ic.name = c.COLUMN_NAME
WHERE c.TABLE_CATALOG = COALESCE(:database, DB_NAME())
    AND c.TABLE_SCHEMA = COALESCE(:schema, SCHEMA_NAME())
    AND c.TABLE_NAME = :table
ORDER BY c.ORDINAL_POSITION
"""

MSSQL_CHECKS_SQL = """
SELECT ccu.COLUMN_NAME AS column_name, cc.CHECK_CLAUSE AS check_clause
FROM INFORMATION_SCHEMA.CHECK_CONSTRAINTS cc
INNER JOIN INFORMATION_SCHEMA.CONSTRAINT_COLUMN_USAGE ccu
    ON cc.CONSTRAINT_NAME = ccu.CONSTRAINT_NAME
    AND cc.CONSTRAINT_SCHEMA = ccu.CONSTRAINT_SCHEMA
WHERE ccu.TABLE_CATALOG = COALESCE(:database, DB_NAME())
    AND ccu.TABLE_SCHEMA = COALESCE(:schema, SCHEMA_NAME())
    AND ccu.TABLE_NAME = :table
ORDER BY cc.CONSTRAINT_NAME
"""

MSSQL_TABLES_SQL = """
SELECT TABLE_NAME AS name
FROM INFORMATION_SCHEMA.TABLES
WHERE TABLE_TYPE = 'BASE TABLE' AND TABLE_CATALOG = COALESCE(:database, DB_NAME())
ORDER BY TABLE_NAME
"""


class MssqlColumnReader(ColumnReader):
    """
    Keys come from separate constraint views and identity from sys.columns,
    so the column query joins both; CHECK clauses are read in a second pass.
    """

    dialect = Dialect.MSSQL

    def read_columns(self, conn, database: Optional[str], table_name: str,
                     schema: Optional[str] = None) -> list[ColumnMetadata]:
        ensure_connection(conn)
        params = {"database": database, "schema": schema, "table": table_name}
        rows = conn.execute(text(MSSQL_COLUMNS_SQL), params).mappings().all()
        checks = self.read_check_constraints(conn, database, table_name, schema)
        return [
            ColumnMetadata(
                name=row["name"],
                data_type=row["data_type"],
                is_nullable=row["is_nullable"],
                default=_str_or_none(row["default_value"]),
                key_type=row["key_type"] or "",
                extra=row["extra"] or "",
                unique_constrained=bool(row["unique_constrained"]),
                check_clause=checks.get(row["name"]),
                max_length=_int_or_none(row["max_length"]),
                precision=_int_or_none(row["numeric_precision"]),
                scale=_int_or_none(row["numeric_scale"]),
            )
            for row in rows
        ]

    def read_check_constraints(self, conn, database: Optional[str], table_name: str,
                               schema: Optional[str] = None) -> dict[str, str]:
        """Map column name → CHECK clause; several constraints on one column are ANDed."""
        ensure_connection(conn)
        rows = conn.execute(
            text(MSSQL_CHECKS_SQL), {"database": database, "schema": schema, "table": table_name}
        ).mappings().all()
        clauses: dict[str, list[str]] = {}
        for row in rows:
            clauses.setdefault(row["column_name"], []).append(row["check_clause"] or "")
        return {col: " AND ".join(parts) for col, parts in clauses.items()}

    def list_tables(self, conn, database: Optional[str]) -> list[str]:
        ensure_connection(conn)
        rows = conn.execute(text(MSSQL_TABLES_SQL), {"database": database}).mappings().all()
        return [row["name"] for row in rows]


_READERS: dict[Dialect, ColumnReader] = {
    Dialect.MYSQL: MysqlColumnReader(),
    Dialect.MSSQL: MssqlColumnReader(),
}


def get_reader(dialect: Any) -> ColumnReader:
    return _READERS[Dialect.parse(dialect)]
