"""
Schema assembler — turns a live table into the dialect-neutral field configuration.

    reader rows → enum extraction → classification → capability defaults → TableSchema

The caller owns the connection: it is borrowed for the duration of the call
and never closed here. A schema is either fully classified or the call fails;
no partially populated TableSchema is ever returned.
"""
import logging
from typing import Any, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError

from core.dialects import Dialect, ensure_connection, get_reader
from core.enum_extractor import extract_enum_values
from core.errors import SchemaFetchFailed
from core.field_classifier import classify, infer_capabilities
from models.table import ColumnMetadata, FieldConfig, TableSchema

logger = logging.getLogger(__name__)


def build_field_config(dialect: Dialect, column: ColumnMetadata) -> FieldConfig:
    c = classify(dialect, column)
    return FieldConfig(
        type=column.data_type,
        primary=c.primary,
        nullable=c.nullable,
        auto_increment=c.auto_increment,
        default=column.default,
        enum_values=extract_enum_values(dialect, column),
        unique=c.unique,
        max_length=column.max_length,
        precision=column.precision,
        scale=column.scale,
        **infer_capabilities(c),
    )


def introspect(conn, dialect: Any, database: Optional[str], table_name: str,
               schema: Optional[str] = None) -> TableSchema:
    """
    Introspect one table.

    An unknown dialect fails before any query is issued. An empty ``fields``
    mapping means the catalog returned no columns; deciding whether that is
    "no such table" is left to the caller.
    """
    dialect = Dialect.parse(dialect)
    ensure_connection(conn)
    reader = get_reader(dialect)

    try:
        columns = reader.read_columns(conn, database, table_name, schema)
    except SQLAlchemyError as e:
        raise SchemaFetchFailed(table_name, e) from e

    fields = {col.name: build_field_config(dialect, col) for col in columns}
    logger.info("Introspected %s.%s (%s): %d columns", database or "<default>", table_name, dialect.value, len(fields))
    return TableSchema(table_name=table_name, fields=fields)


def list_tables(conn, dialect: Any, database: Optional[str]) -> list[str]:
    dialect = Dialect.parse(dialect)
    ensure_connection(conn)
    try:
        return get_reader(dialect).list_tables(conn, database)
    except SQLAlchemyError as e:
        raise SchemaFetchFailed("<tables>", e) from e


def apply_overrides(schema: TableSchema, overrides: Mapping[str, Mapping[str, Any]]) -> TableSchema:
    """
    Return a copy of ``schema`` with caller-supplied flags layered over the defaults.

    ``overrides`` maps column name → partial FieldConfig (camelCase or snake_case keys).
    Columns that are not in the schema are skipped.
    """
    fields = {}
    for name, field in schema.fields.items():
        patch = overrides.get(name)
        if patch:
            changes = FieldConfig.model_validate({"type": field.type, **patch}).model_dump(exclude_unset=True)
            field = FieldConfig.model_validate({**field.model_dump(), **changes})
        fields[name] = field
    for name in sorted(overrides.keys() - schema.fields.keys()):
        logger.warning("Ignoring override for unknown column %s.%s", schema.table_name, name)
    return TableSchema(table_name=schema.table_name, fields=fields)
