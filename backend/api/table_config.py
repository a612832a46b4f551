"""/api/generator/config — save, load, list and delete per-table configurations."""
import logging
from fastapi import APIRouter, HTTPException

from core.config_store import ConfigStore
from core.errors import ConfigNotFound, InvalidConfig, InvalidTableName
from models.table_config import TableConfig

router = APIRouter(prefix="/generator")
logger = logging.getLogger(__name__)


def get_store() -> ConfigStore:
    return ConfigStore()


@router.post("/config")
def save_config(config: TableConfig):
    try:
        path = get_store().save(config)
    except InvalidTableName as e:
        raise HTTPException(400, detail=str(e))
    except InvalidConfig as e:
        raise HTTPException(400, detail={"error": "Invalid configuration", "errors": e.errors})
    return {
        "success": True,
        "message": f"Configuration saved for table: {config.table}",
        "configPath": str(path),
    }


@router.get("/config/{table_name}")
def load_config(table_name: str):
    try:
        config = get_store().load(table_name)
    except InvalidTableName as e:
        raise HTTPException(400, detail=str(e))
    except ConfigNotFound as e:
        raise HTTPException(404, detail=str(e))
    except InvalidConfig as e:
        raise HTTPException(500, detail={"error": "Stored configuration is invalid", "errors": e.errors})
    return {"success": True, "table": table_name, "config": config.to_json()}


@router.get("/configs")
def list_configs():
    tables = get_store().list_tables()
    return {"success": True, "count": len(tables), "configs": tables}


@router.delete("/config/{table_name}")
def delete_config(table_name: str):
    try:
        get_store().delete(table_name)
    except InvalidTableName as e:
        raise HTTPException(400, detail=str(e))
    except ConfigNotFound as e:
        raise HTTPException(404, detail=str(e))
    return {"success": True, "message": f"Configuration deleted for table: {table_name}"}
