"""
Enum value extraction from dialect-specific column encodings.

MySQL declares allowed values in the column type (``enum('a','b')``);
MSSQL has no enum type, so values are recovered from CHECK constraint text.
The MSSQL path is a heuristic: it collects every quoted literal in the
clause, so it over-matches when the clause compares against unrelated
strings and finds nothing for numeric, range or unquoted IN checks.
Unparseable input always degrades to "no enum values", never an error.
"""
import re
from typing import Optional

from core.dialects import Dialect
from models.table import ColumnMetadata

_ENUM_TYPE_RE = re.compile(r"^\s*(enum|set)\s*\((.*)\)\s*$", re.IGNORECASE | re.DOTALL)
# Both dialects escape a quote inside a literal by doubling it
_LITERAL_RE = re.compile(r"'((?:[^']|'')*)'")


def _dedupe(values: list[str]) -> list[str]:
    seen: set[str] = set()
    result = []
    for v in values:
        if v not in seen:
            seen.add(v)
            result.append(v)
    return result


def _literals(text: str) -> Optional[list[str]]:
    values = [v.replace("''", "'") for v in _LITERAL_RE.findall(text)]
    return _dedupe(values) or None


def parse_enum_type(full_type: Optional[str]) -> Optional[list[str]]:
    """Values of a MySQL ``enum(...)``/``set(...)`` column type, in declared order."""
    if not full_type:
        return None
    match = _ENUM_TYPE_RE.match(full_type)
    if not match:
        return None
    return _literals(match.group(2))


def parse_check_clause(clause: Optional[str]) -> Optional[list[str]]:
    """Quoted literals of an MSSQL CHECK clause such as ``([status]='a' OR [status]='b')``."""
    if not clause:
        return None
    return _literals(clause)


def extract_enum_values(dialect: Dialect, column: ColumnMetadata) -> Optional[list[str]]:
    if dialect == Dialect.MYSQL:
        return parse_enum_type(column.full_type)
    return parse_check_clause(column.check_clause)
