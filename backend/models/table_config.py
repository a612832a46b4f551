"""Pydantic schemas for the per-table generator configuration."""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.table import FieldConfig

AUTH_TYPES = ("none", "apikey", "basic")


class AuthConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str = "none"
    api_key: Optional[str] = Field(None, alias="apiKey")
    username: Optional[str] = None
    password: Optional[str] = None


class DbConfig(BaseModel):
    type: str = "mysql"
    host: str = "localhost"
    port: Optional[int] = None
    user: str = ""
    password: str = ""
    database: str = ""


class TableConfig(BaseModel):
    """What the developer panel saves for a table and the code writer consumes."""
    model_config = ConfigDict(populate_by_name=True)

    table: str
    auth: AuthConfig = Field(default_factory=AuthConfig)
    fields: dict[str, FieldConfig]
    db_config: DbConfig = Field(default_factory=DbConfig, alias="dbConfig")

    def validate_config(self) -> list[str]:
        """Return every problem with this configuration; an empty list means valid."""
        errors = []
        if not self.table:
            errors.append("Table name is required")
        if not self.fields:
            errors.append("At least one field is required")

        if self.auth.type not in AUTH_TYPES:
            errors.append("Invalid auth type. Must be: none, apikey, or basic")
        elif self.auth.type == "apikey" and not self.auth.api_key:
            errors.append("API key is required when auth type is apikey")
        elif self.auth.type == "basic" and not (self.auth.username and self.auth.password):
            errors.append("Username and password are required when auth type is basic")

        if self.db_config.type not in ("mysql", "mssql"):
            errors.append("Invalid database type. Supported: mysql, mssql")
        return errors

    @property
    def primary_key(self) -> str:
        for name, field in self.fields.items():
            if field.primary:
                return name
        return "id"

    def field_names(self, flag: str) -> list[str]:
        """Names of the fields whose capability flag (e.g. ``editable``) is set."""
        return [name for name, field in self.fields.items() if getattr(field, flag)]

    def to_json(self) -> dict[str, Any]:
        return {
            "table": self.table,
            "auth": self.auth.model_dump(by_alias=True, exclude_none=True),
            "fields": {name: f.to_json() for name, f in self.fields.items()},
            "dbConfig": self.db_config.model_dump(),
        }
