"""POST /api/generator/generate — render CRUD backend routes and frontend views."""
import logging
from fastapi import APIRouter, HTTPException

from api.table_config import get_store
from core.code_writer import CodeWriter
from core.errors import ConfigNotFound, InvalidConfig, InvalidTableName

router = APIRouter(prefix="/generator")
logger = logging.getLogger(__name__)


@router.post("/generate/{table_name}")
def generate(table_name: str):
    try:
        config = get_store().load(table_name)
    except InvalidTableName as e:
        raise HTTPException(400, detail=str(e))
    except ConfigNotFound as e:
        raise HTTPException(404, detail=str(e))
    except InvalidConfig as e:
        raise HTTPException(500, detail={"error": "Stored configuration is invalid", "errors": e.errors})

    try:
        result = CodeWriter(config).generate_all()
    except OSError as e:
        logger.exception("Code generation failed for %s", table_name)
        raise HTTPException(500, detail=f"Failed to generate code: {e}")

    return {"success": True, "message": f"Code generated for table: {table_name}", "files": result.paths}


@router.post("/generate-all")
def generate_all():
    store = get_store()
    results = []
    for table_name in store.list_tables():
        try:
            config = store.load(table_name)
        except InvalidConfig as e:
            raise HTTPException(500, detail={"error": f"Stored configuration for {table_name} is invalid",
                                             "errors": e.errors})
        try:
            result = CodeWriter(config).generate_all()
        except OSError as e:
            logger.exception("Code generation failed for %s", config.table)
            raise HTTPException(500, detail=f"Failed to generate code for {config.table}: {e}")
        results.append({"table": config.table, "files": result.paths})

    return {"success": True, "message": f"Code generated for {len(results)} tables", "results": results}
