"""Pydantic schemas for raw column metadata and the normalized field configuration."""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ColumnMetadata(BaseModel):
    """One information-schema row, as read by a dialect column reader."""
    name: str
    data_type: str
    is_nullable: str = "YES"                # textual YES/NO, as the catalog reports it
    default: Optional[str] = None
    key_type: str = ""                      # "PRI" | "UNI" | ""
    extra: str = ""                         # "auto_increment" when the column is identity
    unique_constrained: bool = False        # MSSQL: column also sits in a UNIQUE constraint
    full_type: Optional[str] = None         # MySQL COLUMN_TYPE, e.g. enum('a','b')
    check_clause: Optional[str] = None      # MSSQL CHECK constraint text
    max_length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None


class FieldConfig(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    type: str
    primary: bool = False
    nullable: bool = True
    auto_increment: bool = False
    default: Optional[str] = None
    enum_values: Optional[list[str]] = None
    show_in_table: bool = True
    filterable: bool = True
    editable: bool = True
    creatable: bool = True
    visible: bool = True

    # Extra catalog detail, emitted only when known
    unique: Optional[bool] = None
    max_length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None

    def to_json(self) -> dict[str, Any]:
        data = self.model_dump(by_alias=True)
        for key in ("enumValues", "unique", "maxLength", "precision", "scale"):
            if data[key] is None:
                del data[key]
        return data


class TableSchema(BaseModel):
    table_name: str
    fields: dict[str, FieldConfig] = Field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.fields

    @property
    def column_names(self) -> list[str]:
        return list(self.fields.keys())

    def to_json(self) -> dict[str, Any]:
        return {
            "tableName": self.table_name,
            "fields": {name: f.to_json() for name, f in self.fields.items()},
        }
