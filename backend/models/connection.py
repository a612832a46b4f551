"""Pydantic schemas for database connection requests and responses."""
from typing import Optional, Literal
from urllib.parse import quote_plus

from pydantic import BaseModel, Field

from config import settings

DEFAULT_PORTS = {"mysql": 3306, "mssql": 1433}


class ConnectionRequest(BaseModel):
    type: Literal["mysql", "mssql"] = Field(..., description="Database engine type")
    host: str = Field("localhost", description="Database host")
    port: Optional[int] = Field(None, description="Database port (3306 for MySQL, 1433 for MSSQL)")
    user: str = Field(..., description="Username")
    password: str = Field("", description="Password")
    database: str = Field(..., description="Database name")

    @property
    def effective_port(self) -> int:
        return self.port or DEFAULT_PORTS[self.type]

    def get_sqlalchemy_url(self) -> str:
        credentials = f"{quote_plus(self.user)}:{quote_plus(self.password)}"
        if self.type == "mysql":
            return (
                f"mysql+pymysql://{credentials}"
                f"@{self.host}:{self.effective_port}/{self.database}"
            )
        driver = quote_plus(settings.MSSQL_ODBC_DRIVER)
        return (
            f"mssql+pyodbc://{credentials}"
            f"@{self.host}:{self.effective_port}/{self.database}"
            f"?driver={driver}&Encrypt=yes&TrustServerCertificate=yes"
        )


class ConnectionResponse(BaseModel):
    success: bool = True
    connectionId: str
    message: str
