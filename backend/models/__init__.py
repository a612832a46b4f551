from models.connection import ConnectionRequest, ConnectionResponse  # noqa: F401
from models.table import ColumnMetadata, FieldConfig, TableSchema  # noqa: F401
from models.table_config import AuthConfig, DbConfig, TableConfig  # noqa: F401
