"""JSON persistence of table configurations — one ``{table}.json`` file per table."""
import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from config import settings
from core.errors import ConfigNotFound, InvalidConfig, InvalidTableName
from models.table_config import TableConfig

logger = logging.getLogger(__name__)


def validate_table_name(table_name: Optional[str]) -> str:
    """Reject names that could escape the config directory when used as a filename."""
    if not table_name or ".." in table_name or "/" in table_name or "\\" in table_name:
        raise InvalidTableName(table_name)
    return table_name


def _format_error(err: dict) -> str:
    location = ".".join(str(part) for part in err["loc"])
    return f"{location}: {err['msg']}" if location else err["msg"]


class ConfigStore:
    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir or settings.CONFIG_DIR)

    def _path(self, table_name: str) -> Path:
        return self.config_dir / f"{validate_table_name(table_name)}.json"

    def save(self, config: TableConfig) -> Path:
        errors = config.validate_config()
        if errors:
            raise InvalidConfig(errors)
        path = self._path(config.table)
        self.config_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(config.to_json(), indent=2), encoding="utf-8")
        logger.info("Saved configuration for %s → %s", config.table, path)
        return path

    def load(self, table_name: str) -> TableConfig:
        path = self._path(table_name)
        if not path.exists():
            raise ConfigNotFound(table_name)
        try:
            return TableConfig.model_validate(json.loads(path.read_text(encoding="utf-8")))
        except json.JSONDecodeError as e:
            raise InvalidConfig([f"{path.name} is not valid JSON: {e}"]) from e
        except ValidationError as e:
            raise InvalidConfig([_format_error(err) for err in e.errors()]) from e

    def list_tables(self) -> list[str]:
        if not self.config_dir.exists():
            return []
        return sorted(p.stem for p in self.config_dir.glob("*.json"))

    def load_all(self) -> list[TableConfig]:
        return [self.load(t) for t in self.list_tables()]

    def delete(self, table_name: str) -> None:
        path = self._path(table_name)
        if not path.exists():
            raise ConfigNotFound(table_name)
        path.unlink()
        logger.info("Deleted configuration for %s", table_name)
