"""Application settings loaded from .env file."""
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 3000
    CORS_ORIGINS: str = "http://localhost:5173"

    # Storage
    CONFIG_DIR: Path = BASE_DIR / "configs"
    GENERATED_DIR: Path = BASE_DIR.parent / "generated"

    # Generated application
    GENERATED_API_URL: str = "http://localhost:4000/api"

    # Database drivers
    MSSQL_ODBC_DRIVER: str = "ODBC Driver 18 for SQL Server"
    DB_CONNECT_TIMEOUT_SECONDS: int = 10

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
