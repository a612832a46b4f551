from core.db_connector import create_engine_from_request  # noqa: F401
from core.dialects import Dialect, ColumnReader, MysqlColumnReader, MssqlColumnReader, get_reader  # noqa: F401
from core.enum_extractor import extract_enum_values, parse_check_clause, parse_enum_type  # noqa: F401
from core.field_classifier import FieldClassification, classify, infer_capabilities  # noqa: F401
from core.introspector import apply_overrides, introspect, list_tables  # noqa: F401
from core.config_store import ConfigStore, validate_table_name  # noqa: F401
from core.code_writer import CodeWriter  # noqa: F401
