"""
Field classification and default UI capability policy.

Both dialect readers normalize keys into a PRI/UNI/'' tag and identity into
an 'auto_increment' extra flag, so classification is dialect-neutral once
the reader has run. Primary is checked before unique: a column that is both
the primary key and separately unique-constrained is classified as primary.
"""
import logging
from dataclasses import dataclass

from core.dialects import Dialect
from models.table import ColumnMetadata

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldClassification:
    primary: bool
    unique: bool
    auto_increment: bool
    nullable: bool


def classify(dialect: Dialect, column: ColumnMetadata) -> FieldClassification:
    dialect = Dialect.parse(dialect)
    key = (column.key_type or "").upper()
    primary = key == "PRI"
    if primary and column.unique_constrained:
        logger.warning("Column %s is both primary and unique-constrained; classified as primary", column.name)
    if dialect == Dialect.MYSQL:
        auto_increment = "auto_increment" in (column.extra or "").lower()
    else:
        auto_increment = (column.extra or "").lower() == "auto_increment"
    return FieldClassification(
        primary=primary,
        unique=not primary and key == "UNI",
        auto_increment=auto_increment,
        nullable=(column.is_nullable or "").upper() == "YES",
    )


def infer_capabilities(c: FieldClassification) -> dict[str, bool]:
    """Identity columns stay visible for reference but are never user-editable or user-creatable."""
    locked = c.primary or c.auto_increment
    return {
        "show_in_table": True,
        "visible": True,
        "filterable": not c.primary,
        "editable": not locked,
        "creatable": not locked,
    }
