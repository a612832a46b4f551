"""Exceptions raised by the introspection layer and the configuration store."""
from typing import Optional


class IntrospectionError(Exception):
    """Base class for schema introspection failures."""


class ConnectionUnavailable(IntrospectionError):
    def __init__(self, message: str = "No active database connection. Please connect first."):
        super().__init__(message)


class UnsupportedDialect(IntrospectionError):
    """Raised before any query runs when the dialect tag is not mysql or mssql."""

    def __init__(self, dialect: object):
        self.dialect = dialect
        super().__init__(f"Invalid database type '{dialect}'. Supported: mysql, mssql")


class SchemaFetchFailed(IntrospectionError):
    def __init__(self, table_name: str, cause: Optional[BaseException] = None):
        self.table_name = table_name
        self.cause = cause
        super().__init__(f"Failed to fetch schema for table {table_name}: {cause}")


class InvalidTableName(ValueError):
    def __init__(self, table_name: object):
        self.table_name = table_name
        super().__init__("Table name must not contain path separators or relative paths")


class ConfigNotFound(LookupError):
    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(f'No configuration file exists for table "{table_name}"')


class InvalidConfig(ValueError):
    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))
